"""
Storage context construction.
"""

from hdstorage.errors import InvalidCredentials
from hdstorage.models import ResolvedAddress, StorageContext


def build_context(account_name: str, account_key: str, cloud_environment: str) -> StorageContext:
    """
    Assemble endpoint environment and credentials for a storage account.

    Raises:
        InvalidCredentials: if the account name or key is empty
    """
    if not account_name:
        raise InvalidCredentials("Storage account name is empty")
    if not account_key:
        raise InvalidCredentials(f"No key available for storage account '{account_name}'")
    return StorageContext(
        endpoint_environment=cloud_environment,
        account_name=account_name,
        account_key=account_key,
    )


def context_for(address: ResolvedAddress) -> StorageContext:
    """Build the storage context for a resolved address."""
    return build_context(address.account_name, address.account_key, address.cloud_environment)
