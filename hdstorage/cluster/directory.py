"""
Cluster storage directory lookup.
"""

from hdstorage.cluster.metadata import ClusterMetadataService
from hdstorage.models import ClusterStorageDirectory


def lookup_cluster_storage(
    cluster_id: str, metadata_service: ClusterMetadataService
) -> ClusterStorageDirectory:
    """
    Build the storage directory of a cluster from live metadata.

    The default account is inserted first; repeated accounts keep their
    first key.

    Raises:
        ClusterNotFound: if the control plane has no such cluster
    """
    metadata = metadata_service.get_cluster(cluster_id)
    return ClusterStorageDirectory.from_metadata(metadata)
