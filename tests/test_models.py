"""
Tests for cluster storage and address models.
"""

import pytest
from pydantic import ValidationError

from hdstorage.errors import EnvironmentUnavailable
from hdstorage.models import (
    ClusterMetadata,
    ClusterStorageDirectory,
    ResolvedAddress,
    StorageAccountInfo,
    StorageContext,
)


class TestClusterStorageDirectory:
    """Tests for ClusterStorageDirectory assembly."""

    def test_from_metadata(self, my_cluster):
        """Test default account fields are taken from the default account."""
        directory = ClusterStorageDirectory.from_metadata(my_cluster)

        assert directory.cluster_name == "MyCluster"
        assert directory.default_account_name == "acct1"
        assert directory.default_account_key == "key1"
        assert directory.default_container == "data"

    def test_first_write_wins(self, my_cluster):
        """Test the default account's key survives its duplicate in the list."""
        directory = ClusterStorageDirectory.from_metadata(my_cluster)

        assert directory.accounts == {"acct1": "key1", "acct2": "key2"}

    def test_single_account(self):
        """Test a cluster without extra accounts has exactly the default."""
        metadata = ClusterMetadata(
            cluster_name="Solo",
            default_account=StorageAccountInfo(name="solo.blob.core.windows.net", key="k", container="c"),
        )
        directory = ClusterStorageDirectory.from_metadata(metadata)

        assert directory.accounts == {"solo": "k"}

    def test_add_account_duplicate(self, my_cluster):
        """Test adding an existing account is ignored."""
        directory = ClusterStorageDirectory.from_metadata(my_cluster)

        assert directory.add_account("ACCT2.blob.core.windows.net", "other") is False
        assert directory.add_account("acct3", "key3") is True
        assert directory.get_key("acct2") == "key2"
        assert directory.get_key("acct3") == "key3"
        assert directory.get_key("missing") is None

    def test_is_default(self, my_cluster):
        """Test default account detection."""
        directory = ClusterStorageDirectory.from_metadata(my_cluster)

        assert directory.is_default("acct1")
        assert directory.is_default("acct1.blob.core.windows.net")
        assert not directory.is_default("acct2")

    def test_keys_hidden_from_repr(self, my_cluster):
        """Test account keys never appear in repr."""
        directory = ClusterStorageDirectory.from_metadata(my_cluster)

        assert "key1" not in repr(directory)
        assert "key2" not in repr(directory)


class TestResolvedAddress:
    """Tests for ResolvedAddress."""

    def test_frozen(self):
        """Test addresses are immutable."""
        address = ResolvedAddress(account_name="a", account_key="k", container="c", blob_key="x")

        with pytest.raises(ValidationError):
            address.blob_key = "y"

    def test_with_blob_key(self):
        """Test copying with a different key."""
        address = ResolvedAddress(account_name="a", account_key="k", container="c", blob_key="x/")
        other = address.with_blob_key("x/file.txt")

        assert other.blob_key == "x/file.txt"
        assert other.container == "c"
        assert address.blob_key == "x/"

    def test_container_root(self):
        """Test container root detection."""
        address = ResolvedAddress(account_name="a", account_key="k", container="c")

        assert address.is_container_root


class TestStorageContext:
    """Tests for StorageContext endpoints."""

    def test_public_cloud_endpoint(self):
        """Test endpoint in the public cloud."""
        context = StorageContext(endpoint_environment="AzureCloud", account_name="acct1", account_key="k")

        assert context.blob_endpoint == "https://acct1.blob.core.windows.net"

    def test_china_cloud_endpoint(self):
        """Test endpoint in a regional cloud."""
        context = StorageContext(
            endpoint_environment="AzureChinaCloud", account_name="acct1", account_key="k"
        )

        assert context.blob_endpoint == "https://acct1.blob.core.chinacloudapi.cn"

    def test_unknown_cloud(self):
        """Test an unknown environment cannot produce an endpoint."""
        context = StorageContext(endpoint_environment="Mars", account_name="acct1", account_key="k")

        with pytest.raises(EnvironmentUnavailable):
            _ = context.blob_endpoint
