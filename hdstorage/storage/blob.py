"""
Azure Blob Storage client wrapper.
"""

from collections.abc import Iterator
from pathlib import Path

from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient

from hdstorage.errors import BlobNotFound, DestinationExists
from hdstorage.models import BlobDescriptor, StorageContext


class BlobStorageClient:
    """
    Client for blob operations in one container of one storage account.

    Authenticates with the account's shared key from the storage context.
    """

    def __init__(self, context: StorageContext, container_name: str):
        self.container_name = container_name
        self.account_name = context.account_name
        self.service_client = BlobServiceClient(
            account_url=context.blob_endpoint,
            credential=context.account_key,
        )
        self.container_client = self.service_client.get_container_client(container_name)

    @classmethod
    def from_context(cls, context: StorageContext, container_name: str) -> "BlobStorageClient":
        return cls(context, container_name)

    def upload_file(self, path: str, local_path: Path, overwrite: bool = False) -> BlobDescriptor:
        """
        Upload a local file to a blob.

        Args:
            path: Blob key within the container
            local_path: File to upload
            overwrite: Replace an existing blob

        Returns:
            Descriptor of the uploaded blob

        Raises:
            DestinationExists: if the blob exists and overwrite is False
        """
        blob_client = self.container_client.get_blob_client(path)
        try:
            with open(local_path, "rb") as handle:
                result = blob_client.upload_blob(handle, overwrite=overwrite)
        except ResourceExistsError as exc:
            raise DestinationExists(self.container_name, path) from exc

        return BlobDescriptor(
            key=path,
            size=local_path.stat().st_size,
            last_modified=result.get("last_modified"),
        )

    def download_to_file(self, path: str, local_path: Path) -> int:
        """
        Download blob content into a local file.

        The local file is only created once the blob is known to exist.

        Returns:
            Number of bytes written

        Raises:
            BlobNotFound: if no blob exists at the key
        """
        blob_client = self.container_client.get_blob_client(path)
        try:
            download_stream = blob_client.download_blob()
        except ResourceNotFoundError as exc:
            raise BlobNotFound(self.container_name, path) from exc

        with open(local_path, "wb") as handle:
            return download_stream.readinto(handle)

    def delete_blob(self, path: str) -> None:
        """
        Delete a blob.

        Raises:
            BlobNotFound: if no blob exists at the key
        """
        try:
            self.container_client.delete_blob(path)
        except ResourceNotFoundError as exc:
            raise BlobNotFound(self.container_name, path) from exc

    def list_blobs(self, prefix: str | None = None) -> Iterator[BlobDescriptor]:
        """
        Lazily list blobs whose key starts with prefix.

        Args:
            prefix: Key prefix; None or "" lists the whole container
        """
        for blob in self.container_client.list_blobs(name_starts_with=prefix or None):
            yield BlobDescriptor(key=blob.name, size=blob.size, last_modified=blob.last_modified)

