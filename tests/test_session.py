"""
Tests for session construction and the environment probe.
"""

from unittest.mock import patch

import pytest

from hdstorage.cloud import get_cloud
from hdstorage.config import Settings
from hdstorage.errors import EnvironmentUnavailable
from hdstorage.session import AzureSession, ensure_environment, get_session


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestAzureSession:
    """Tests for AzureSession."""

    def test_active(self):
        session = AzureSession(subscription_id="sub", credential=object())

        assert session.has_active_session()
        assert session.current_environment_name() == "AzureCloud"

    def test_inactive_without_subscription(self):
        assert not AzureSession(subscription_id=None, credential=object()).has_active_session()

    def test_inactive_without_credential(self):
        assert not AzureSession(subscription_id="sub").has_active_session()


class TestGetSession:
    """Tests for building sessions from settings."""

    @patch("hdstorage.session.DefaultAzureCredential")
    def test_with_subscription(self, mock_credential):
        """Test a credential is created for the configured cloud."""
        settings = make_settings(
            azure_subscription_id="sub-123",
            azure_cloud_environment="AzureChinaCloud",
            azure_resource_group="rg",
        )
        session = get_session(settings)

        mock_credential.assert_called_once_with(authority=get_cloud("AzureChinaCloud").authority_host)
        assert session.subscription_id == "sub-123"
        assert session.cloud_environment == "AzureChinaCloud"
        assert session.resource_group == "rg"
        assert session.has_active_session()

    @patch("hdstorage.session.DefaultAzureCredential")
    def test_without_subscription(self, mock_credential, monkeypatch):
        """Test no credential is created without a subscription."""
        monkeypatch.delenv("AZURE_SUBSCRIPTION_ID", raising=False)
        session = get_session(make_settings())

        mock_credential.assert_not_called()
        assert not session.has_active_session()


class TestEnsureEnvironment:
    """Tests for the environment probe."""

    def test_ok(self, session, metadata_service):
        ensure_environment(session, metadata_service)

    def test_no_session(self, metadata_service):
        with pytest.raises(EnvironmentUnavailable):
            ensure_environment(AzureSession(subscription_id=None), metadata_service)

    def test_no_metadata_service(self, session):
        with pytest.raises(EnvironmentUnavailable):
            ensure_environment(session, None)

    def test_unknown_cloud(self, metadata_service):
        session = AzureSession(subscription_id="sub", cloud_environment="Mars", credential=object())

        with pytest.raises(EnvironmentUnavailable):
            ensure_environment(session, metadata_service)
