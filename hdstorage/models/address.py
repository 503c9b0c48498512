"""
Resolved storage addresses, storage contexts and blob descriptors.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from hdstorage.cloud import get_cloud


class ResolvedAddress(BaseModel):
    """A concrete (account, container, key) triple with its credentials."""

    model_config = ConfigDict(frozen=True)

    account_name: str
    account_key: str = Field(..., repr=False)
    container: str
    blob_key: str = Field("", description="Empty key denotes the container root")
    cloud_environment: str = "AzureCloud"

    @property
    def is_container_root(self) -> bool:
        """Check if the address points at the container itself."""
        return self.blob_key == ""

    def with_blob_key(self, blob_key: str) -> "ResolvedAddress":
        """Copy of this address pointing at another key in the same container."""
        return self.model_copy(update={"blob_key": blob_key})


class StorageContext(BaseModel):
    """Endpoint environment plus credentials for one storage account."""

    model_config = ConfigDict(frozen=True)

    endpoint_environment: str
    account_name: str
    account_key: str = Field(..., repr=False)

    @property
    def blob_endpoint(self) -> str:
        """Blob service URL for the account in its cloud."""
        cloud = get_cloud(self.endpoint_environment)
        return f"https://{self.account_name}.blob.{cloud.storage_endpoint_suffix}"


class BlobDescriptor(BaseModel):
    """A blob as reported by listing or after an upload."""

    model_config = ConfigDict(frozen=True)

    key: str
    size: int | None = None
    last_modified: datetime | None = None
