"""
Cluster storage metadata and the per-call storage directory.
"""

from pydantic import BaseModel, ConfigDict, Field


def short_account_name(name: str) -> str:
    """Strip any domain suffix: 'acct.blob.core.windows.net' -> 'acct'."""
    return name.split(".", 1)[0]


class StorageAccountInfo(BaseModel):
    """A storage account bound to a cluster, as reported by the control plane."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Full account host or short account name")
    key: str = Field(..., repr=False)
    container: str | None = Field(None, description="Only set for the default account")


class ClusterMetadata(BaseModel):
    """Storage-related metadata of one HDInsight cluster."""

    model_config = ConfigDict(frozen=True)

    cluster_name: str
    default_account: StorageAccountInfo
    accounts: list[StorageAccountInfo] = Field(default_factory=list)


class ClusterStorageDirectory(BaseModel):
    """
    Storage accounts reachable from a cluster, keyed by short account name.

    Built fresh for every resolution; the default account is always present
    and is inserted before any additional account.
    """

    cluster_name: str
    default_account_name: str
    default_account_key: str = Field(..., repr=False)
    default_container: str
    accounts: dict[str, str] = Field(default_factory=dict, repr=False)

    @classmethod
    def from_metadata(cls, metadata: ClusterMetadata) -> "ClusterStorageDirectory":
        """Assemble a directory from control-plane metadata."""
        default = metadata.default_account
        directory = cls(
            cluster_name=metadata.cluster_name,
            default_account_name=short_account_name(default.name),
            default_account_key=default.key,
            default_container=default.container or "",
        )
        directory.add_account(default.name, default.key)
        for account in metadata.accounts:
            directory.add_account(account.name, account.key)
        return directory

    def add_account(self, name: str, key: str) -> bool:
        """
        Register an account key. First write wins.

        Returns:
            True if the account was added, False if it was already present
        """
        short_name = short_account_name(name)
        if self.find_account(short_name) is not None:
            return False
        self.accounts[short_name] = key
        return True

    def find_account(self, name: str) -> str | None:
        """Return the canonical short name of a bound account, if any."""
        short_name = short_account_name(name)
        if short_name in self.accounts:
            return short_name
        lowered = short_name.lower()
        for known in self.accounts:
            if known.lower() == lowered:
                return known
        return None

    def get_key(self, name: str) -> str | None:
        """Get the key for a bound account."""
        known = self.find_account(name)
        return self.accounts[known] if known is not None else None

    def is_default(self, name: str) -> bool:
        """Check if the name refers to the cluster's default account."""
        return self.find_account(name) == self.find_account(self.default_account_name)
