"""
Address resolution against a cluster's storage directory.
"""

from hdstorage.errors import InvalidAddress, UnknownAccount
from hdstorage.models import ClusterStorageDirectory, ResolvedAddress
from hdstorage.storage.paths import WasbPath


def resolve_address(
    expression: str,
    directory: ClusterStorageDirectory,
    cloud_environment: str = "AzureCloud",
    storage_account: str | None = None,
    container: str | None = None,
) -> ResolvedAddress:
    """
    Resolve a path expression to account, container, key and credentials.

    An authority inside the path (wasb://container@account.domain/...) takes
    precedence. Otherwise an explicitly supplied storage account and/or
    container is used, falling back to the cluster's default storage.

    Args:
        expression: Path in any form accepted by WasbPath.parse
        directory: Storage directory of the target cluster
        cloud_environment: Cloud the cluster lives in
        storage_account: Optional account bound to the cluster
        container: Optional container; required for a non-default account

    Raises:
        InvalidAddress: malformed authority, or non-default account without container
        UnknownAccount: account is not bound to the cluster
    """
    parsed = WasbPath.parse(expression)

    if parsed.has_authority:
        account_name = parsed.account_name
        target_container = parsed.container
    elif storage_account:
        if directory.find_account(storage_account) is None:
            raise UnknownAccount(storage_account, directory.cluster_name)
        account_name = storage_account
        if container:
            target_container = container
        elif directory.is_default(storage_account):
            target_container = directory.default_container
        else:
            raise InvalidAddress(
                f"A container is required for non-default storage account '{storage_account}'",
                expression,
            )
    else:
        account_name = directory.default_account_name
        target_container = container or directory.default_container

    known = directory.find_account(account_name)
    if known is None:
        raise UnknownAccount(account_name, directory.cluster_name)

    return ResolvedAddress(
        account_name=known,
        account_key=directory.get_key(known),
        container=target_container,
        blob_key=parsed.blob_key,
        cloud_environment=cloud_environment,
    )
