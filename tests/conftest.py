"""
Shared fixtures: in-memory cluster metadata and blob storage.
"""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from hdstorage.errors import BlobNotFound, ClusterNotFound, DestinationExists
from hdstorage.models import BlobDescriptor, ClusterMetadata, StorageAccountInfo, StorageContext
from hdstorage.operations import StorageOperations
from hdstorage.session import AzureSession


class FakeClusterMetadata:
    """Cluster metadata service backed by a dict."""

    def __init__(self, clusters: dict[str, ClusterMetadata]):
        self.clusters = clusters
        self.calls: list[str] = []

    def get_cluster(self, cluster_id: str) -> ClusterMetadata:
        self.calls.append(cluster_id)
        if cluster_id not in self.clusters:
            raise ClusterNotFound(cluster_id)
        return self.clusters[cluster_id]


class InMemoryBlobClient:
    """Blob client over a dict of key -> bytes."""

    def __init__(self, blobs: dict[str, bytes], context: StorageContext, container: str):
        self.blobs = blobs
        self.context = context
        self.container_name = container

    def upload_file(self, path: str, local_path: Path, overwrite: bool = False) -> BlobDescriptor:
        if path in self.blobs and not overwrite:
            raise DestinationExists(self.container_name, path)
        self.blobs[path] = Path(local_path).read_bytes()
        return BlobDescriptor(key=path, size=len(self.blobs[path]), last_modified=datetime.now(timezone.utc))

    def download_to_file(self, path: str, local_path: Path) -> int:
        if path not in self.blobs:
            raise BlobNotFound(self.container_name, path)
        Path(local_path).write_bytes(self.blobs[path])
        return len(self.blobs[path])

    def delete_blob(self, path: str) -> None:
        if path not in self.blobs:
            raise BlobNotFound(self.container_name, path)
        del self.blobs[path]

    def list_blobs(self, prefix: str | None = None):
        for key in sorted(self.blobs):
            if not prefix or key.startswith(prefix):
                yield BlobDescriptor(key=key, size=len(self.blobs[key]))


class InMemoryBlobStore:
    """Containers keyed by (account, container); doubles as a client factory."""

    def __init__(self):
        self.containers: dict[tuple[str, str], dict[str, bytes]] = {}
        self.contexts: list[StorageContext] = []

    def container(self, account: str, container: str) -> dict[str, bytes]:
        return self.containers.setdefault((account, container), {})

    def __call__(self, context: StorageContext, container: str) -> InMemoryBlobClient:
        self.contexts.append(context)
        return InMemoryBlobClient(self.container(context.account_name, container), context, container)


@pytest.fixture
def my_cluster() -> ClusterMetadata:
    """Cluster with a default account that reappears in the account list."""
    return ClusterMetadata(
        cluster_name="MyCluster",
        default_account=StorageAccountInfo(
            name="acct1.blob.core.windows.net", key="key1", container="data"
        ),
        accounts=[
            StorageAccountInfo(name="acct1.blob.core.windows.net", key="duplicate-key"),
            StorageAccountInfo(name="acct2.blob.core.windows.net", key="key2"),
        ],
    )


@pytest.fixture
def metadata_service(my_cluster) -> FakeClusterMetadata:
    return FakeClusterMetadata({"MyCluster": my_cluster})


@pytest.fixture
def session() -> AzureSession:
    return AzureSession(subscription_id="sub-123", cloud_environment="AzureCloud", credential=object())


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def operations(session, metadata_service, blob_store) -> StorageOperations:
    return StorageOperations(session, metadata_service, client_factory=blob_store)
