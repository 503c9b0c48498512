"""
HDInsight cluster storage metadata.
"""

from hdstorage.cluster.directory import lookup_cluster_storage
from hdstorage.cluster.metadata import (
    ClusterMetadataService,
    HDInsightClusterMetadata,
    parse_core_site,
)

__all__ = [
    "ClusterMetadataService",
    "HDInsightClusterMetadata",
    "lookup_cluster_storage",
    "parse_core_site",
]
