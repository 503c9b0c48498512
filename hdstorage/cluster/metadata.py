"""
HDInsight control-plane access for cluster storage metadata.
"""

from typing import Protocol

import structlog
from azure.core.exceptions import ResourceNotFoundError
from azure.mgmt.hdinsight import HDInsightManagementClient

from hdstorage.errors import ClusterNotFound, EnvironmentUnavailable, InvalidAddress, InvalidCredentials
from hdstorage.models import ClusterMetadata, StorageAccountInfo
from hdstorage.session import AzureSession
from hdstorage.storage.paths import WasbPath

logger = structlog.get_logger(__name__)

CORE_SITE = "core-site"
DEFAULT_FS_KEYS = ("fs.defaultFS", "fs.default.name")
ACCOUNT_KEY_PREFIX = "fs.azure.account.key."


class ClusterMetadataService(Protocol):
    """Source of cluster storage metadata."""

    def get_cluster(self, cluster_id: str) -> ClusterMetadata:
        """
        Fetch storage metadata for a cluster.

        Raises:
            ClusterNotFound: if the cluster does not exist
        """
        ...


def split_cluster_id(cluster_id: str) -> tuple[str | None, str]:
    """
    Split 'resource-group/cluster' into its parts.

    A bare cluster name yields (None, name).
    """
    resource_group, sep, name = cluster_id.rpartition("/")
    if not sep:
        return None, cluster_id
    return resource_group or None, name


def resource_group_from_id(resource_id: str) -> str:
    """Extract the resource group from an ARM resource id."""
    parts = resource_id.strip("/").split("/")
    lowered = [part.lower() for part in parts]
    index = lowered.index("resourcegroups")
    return parts[index + 1]


def parse_core_site(cluster_name: str, core_site: dict[str, str]) -> ClusterMetadata:
    """
    Build cluster metadata from a core-site configuration.

    The default account and container come from fs.defaultFS
    (wasb[s]://container@account.blob.<suffix>); every
    fs.azure.account.key.<account host> entry is a bound account.
    """
    default_fs = next((core_site[k] for k in DEFAULT_FS_KEYS if core_site.get(k)), None)
    if default_fs is None:
        raise InvalidAddress(f"Cluster '{cluster_name}' reports no default filesystem")

    scheme, remainder = WasbPath.strip_scheme(default_fs)
    if scheme is None or not remainder.startswith("//"):
        raise InvalidAddress(
            f"Default filesystem of cluster '{cluster_name}' is not Azure Blob Storage",
            default_fs,
        )
    authority = remainder[2:].partition("/")[0]
    container, default_host = WasbPath.parse_authority(authority, default_fs)

    keys = {
        name[len(ACCOUNT_KEY_PREFIX) :]: value
        for name, value in core_site.items()
        if name.startswith(ACCOUNT_KEY_PREFIX)
    }
    default_key = keys.get(default_host)
    if not default_key:
        raise InvalidCredentials(
            f"Cluster '{cluster_name}' has no key for default storage account '{default_host}'"
        )

    return ClusterMetadata(
        cluster_name=cluster_name,
        default_account=StorageAccountInfo(name=default_host, key=default_key, container=container),
        accounts=[StorageAccountInfo(name=host, key=key) for host, key in keys.items()],
    )


class HDInsightClusterMetadata:
    """
    Cluster metadata read through the HDInsight management API.
    """

    def __init__(self, session: AzureSession, client: HDInsightManagementClient | None = None):
        self.session = session
        if client is None:
            if not session.has_active_session():
                raise EnvironmentUnavailable("An active Azure session is required")
            cloud = session.cloud
            client = HDInsightManagementClient(
                session.credential,
                session.subscription_id,
                base_url=cloud.resource_manager,
                credential_scopes=[cloud.credential_scope],
            )
        self.client = client

    def find_resource_group(self, cluster_name: str) -> str:
        """
        Find the resource group that holds a cluster.

        Raises:
            ClusterNotFound: if no cluster with that name is in the subscription
        """
        lowered = cluster_name.lower()
        for cluster in self.client.clusters.list():
            if cluster.name.lower() == lowered:
                return resource_group_from_id(cluster.id)
        raise ClusterNotFound(cluster_name)

    def get_cluster(self, cluster_id: str) -> ClusterMetadata:
        """Fetch storage metadata for 'cluster' or 'resource-group/cluster'."""
        resource_group, cluster_name = split_cluster_id(cluster_id)
        resource_group = resource_group or self.session.resource_group
        if resource_group is None:
            resource_group = self.find_resource_group(cluster_name)

        logger.debug("Reading cluster configuration", cluster=cluster_name, resource_group=resource_group)
        try:
            core_site = self.client.configurations.get(resource_group, cluster_name, CORE_SITE)
        except ResourceNotFoundError as exc:
            raise ClusterNotFound(cluster_id) from exc

        return parse_core_site(cluster_name, dict(core_site))
