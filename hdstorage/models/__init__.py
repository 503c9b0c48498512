"""
Pydantic models for cluster storage metadata and resolved addresses.
"""

from hdstorage.models.address import BlobDescriptor, ResolvedAddress, StorageContext
from hdstorage.models.cluster import ClusterMetadata, ClusterStorageDirectory, StorageAccountInfo

__all__ = [
    # Cluster
    "ClusterMetadata",
    "ClusterStorageDirectory",
    "StorageAccountInfo",
    # Address
    "ResolvedAddress",
    "StorageContext",
    "BlobDescriptor",
]
