"""
Azure Blob Storage addressing and access.
"""

from hdstorage.storage.blob import BlobStorageClient
from hdstorage.storage.context import build_context, context_for
from hdstorage.storage.paths import ParsedPath, WasbPath
from hdstorage.storage.resolver import resolve_address

__all__ = [
    "BlobStorageClient",
    "ParsedPath",
    "WasbPath",
    "build_context",
    "context_for",
    "resolve_address",
]
