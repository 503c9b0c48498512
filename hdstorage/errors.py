"""
Exception hierarchy for storage resolution and blob operations.
"""

from typing import Any


class HDStorageError(Exception):
    """Base exception for all hdstorage errors."""

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = {k: v for k, v in details.items() if v is not None}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({detail_str})"


class EnvironmentUnavailable(HDStorageError):
    """No active Azure session, or no usable cluster/storage management client."""


class ClusterNotFound(HDStorageError):
    """The HDInsight control plane has no cluster with the requested name."""

    def __init__(self, cluster_id: str):
        super().__init__(f"Cluster '{cluster_id}' not found", cluster=cluster_id)
        self.cluster_id = cluster_id


class UnknownAccount(HDStorageError):
    """An address names a storage account that is not bound to the cluster."""

    def __init__(self, account_name: str, cluster_id: str | None = None):
        super().__init__(
            f"Storage account '{account_name}' is not associated with the cluster",
            cluster=cluster_id,
        )
        self.account_name = account_name


class InvalidAddress(HDStorageError):
    """Malformed scheme or authority segment in a storage path."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message, path=path)
        self.path = path


class SourceNotFound(HDStorageError):
    """Local upload source does not exist."""

    def __init__(self, local_path: str):
        super().__init__(f"Local file '{local_path}' does not exist")
        self.local_path = local_path


class BlobNotFound(HDStorageError):
    """No blob at the requested key."""

    def __init__(self, container: str, blob_key: str):
        super().__init__(f"Blob '{blob_key}' not found", container=container)
        self.container = container
        self.blob_key = blob_key


class DestinationExists(HDStorageError):
    """Upload target exists and overwrite was not requested."""

    def __init__(self, container: str, blob_key: str):
        super().__init__(
            f"Blob '{blob_key}' already exists; use overwrite to replace it",
            container=container,
        )
        self.container = container
        self.blob_key = blob_key


class InvalidCredentials(HDStorageError):
    """Storage account name or key missing."""
