"""
Blob operations against a cluster's storage.

Every call rebuilds the storage directory and the storage context; there
is no caching between invocations.
"""

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import structlog

from hdstorage.cluster import ClusterMetadataService, lookup_cluster_storage
from hdstorage.errors import InvalidAddress, SourceNotFound
from hdstorage.models import BlobDescriptor, ClusterStorageDirectory, ResolvedAddress, StorageContext
from hdstorage.session import AzureSession, ensure_environment
from hdstorage.storage import BlobStorageClient, WasbPath, context_for, resolve_address

logger = structlog.get_logger(__name__)

ClientFactory = Callable[[StorageContext, str], Any]


class BlobListing:
    """
    Restartable listing of blobs under a key prefix.

    Each iteration issues a fresh listing call.
    """

    def __init__(self, client: Any, prefix: str):
        self.client = client
        self.prefix = prefix

    def __iter__(self) -> Iterator[BlobDescriptor]:
        return iter(self.client.list_blobs(self.prefix))


class StorageOperations:
    """
    Upload, download, delete and list blobs in HDInsight cluster storage.
    """

    def __init__(
        self,
        session: AzureSession,
        metadata_service: ClusterMetadataService | None,
        client_factory: ClientFactory = BlobStorageClient.from_context,
    ):
        self.session = session
        self.metadata_service = metadata_service
        self.client_factory = client_factory

    def describe_cluster_storage(self, cluster_id: str) -> ClusterStorageDirectory:
        """Read the storage accounts and keys bound to a cluster."""
        ensure_environment(self.session, self.metadata_service)
        return lookup_cluster_storage(cluster_id, self.metadata_service)

    def resolve(
        self,
        expression: str,
        cluster_id: str,
        storage_account: str | None = None,
        container: str | None = None,
    ) -> ResolvedAddress:
        """
        Resolve a path expression against the cluster's storage.

        Raises:
            EnvironmentUnavailable, ClusterNotFound, UnknownAccount, InvalidAddress
        """
        directory = self.describe_cluster_storage(cluster_id)
        address = resolve_address(
            expression,
            directory,
            cloud_environment=self.session.current_environment_name(),
            storage_account=storage_account,
            container=container,
        )
        logger.debug(
            "Resolved address",
            path=expression,
            account=address.account_name,
            container=address.container,
            key=address.blob_key,
        )
        return address

    def client_for(self, address: ResolvedAddress) -> Any:
        """Create a blob client for the address's container."""
        return self.client_factory(context_for(address), address.container)

    def put(self, local_file: Path, address: ResolvedAddress, overwrite: bool = False) -> BlobDescriptor:
        """
        Upload a local file.

        A key that is empty or ends with '/' gets the local file name appended.

        Raises:
            SourceNotFound: if the local file does not exist
            DestinationExists: if the blob exists and overwrite is False
        """
        local_file = Path(local_file)
        if not local_file.is_file():
            raise SourceNotFound(str(local_file))

        if WasbPath.is_folder(address.blob_key):
            address = address.with_blob_key(address.blob_key + local_file.name)

        client = self.client_for(address)
        blob = client.upload_file(address.blob_key, local_file, overwrite=overwrite)
        logger.info(
            "Uploaded file",
            source=str(local_file),
            container=address.container,
            key=blob.key,
            size=blob.size,
        )
        return blob

    def upload(
        self,
        local_file: Path,
        expression: str,
        cluster_id: str,
        overwrite: bool = False,
        storage_account: str | None = None,
        container: str | None = None,
    ) -> BlobDescriptor:
        """Check the session and the local source, then resolve and upload."""
        ensure_environment(self.session, self.metadata_service)
        if not Path(local_file).is_file():
            raise SourceNotFound(str(local_file))
        address = self.resolve(expression, cluster_id, storage_account, container)
        return self.put(local_file, address, overwrite=overwrite)

    def get(self, address: ResolvedAddress, local_file: Path) -> Path:
        """
        Download a blob to a local file.

        A directory target receives the blob's base name.

        Returns:
            Path of the written file

        Raises:
            BlobNotFound: if no blob exists at the key
        """
        if WasbPath.is_folder(address.blob_key):
            raise InvalidAddress("Download requires a blob key, not a folder", address.blob_key)

        local_file = Path(local_file)
        if local_file.is_dir():
            local_file = local_file / WasbPath.get_name(address.blob_key)

        client = self.client_for(address)
        size = client.download_to_file(address.blob_key, local_file)
        logger.info(
            "Downloaded blob",
            container=address.container,
            key=address.blob_key,
            destination=str(local_file),
            size=size,
        )
        return local_file

    def delete(self, address: ResolvedAddress) -> None:
        """
        Delete the blob at an exact key.

        Raises:
            BlobNotFound: if no blob exists at the key
        """
        if address.is_container_root:
            raise InvalidAddress("Refusing to delete the container root")

        client = self.client_for(address)
        client.delete_blob(address.blob_key)
        logger.info("Deleted blob", container=address.container, key=address.blob_key)

    def list(self, address: ResolvedAddress) -> BlobListing:
        """List blobs whose key starts with the address's key."""
        return BlobListing(self.client_for(address), address.blob_key)
