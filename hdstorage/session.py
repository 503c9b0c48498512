"""
Azure session context and environment probe.

The session is an explicit object handed to every call that needs the
subscription or the cloud environment; nothing reads ambient state
after it has been built.
"""

from dataclasses import dataclass
from typing import Any

import structlog
from azure.identity import DefaultAzureCredential

from hdstorage.cloud import CloudEnvironment, get_cloud
from hdstorage.config import Settings, get_settings
from hdstorage.errors import EnvironmentUnavailable

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AzureSession:
    """Subscription, cloud environment and credential for one invocation."""

    subscription_id: str | None
    cloud_environment: str = "AzureCloud"
    credential: Any | None = None
    resource_group: str | None = None

    def current_environment_name(self) -> str:
        """Name of the cloud the session is signed into."""
        return self.cloud_environment

    def has_active_session(self) -> bool:
        """Check if a subscription and a credential are both available."""
        return bool(self.subscription_id) and self.credential is not None

    @property
    def cloud(self) -> CloudEnvironment:
        return get_cloud(self.cloud_environment)


def get_session(settings: Settings | None = None) -> AzureSession:
    """
    Build a session from settings.

    Uses DefaultAzureCredential against the configured cloud's authority
    host; no token is requested until a management call is made.
    """
    settings = settings or get_settings()
    cloud = get_cloud(settings.azure_cloud_environment)

    credential = None
    if settings.has_subscription:
        credential = DefaultAzureCredential(authority=cloud.authority_host)

    return AzureSession(
        subscription_id=settings.azure_subscription_id,
        cloud_environment=cloud.name,
        credential=credential,
        resource_group=settings.azure_resource_group,
    )


def ensure_environment(session: AzureSession, metadata_service: Any | None = None) -> None:
    """
    Fail fast unless an active session and a cluster management client exist.

    Raises:
        EnvironmentUnavailable: if either is missing
    """
    if not session.has_active_session():
        raise EnvironmentUnavailable(
            "No active Azure session; set AZURE_SUBSCRIPTION_ID and sign in "
            "(az login, managed identity or service principal environment variables)"
        )
    if metadata_service is None:
        raise EnvironmentUnavailable("No HDInsight management client available")
    cloud = get_cloud(session.cloud_environment)
    logger.debug(
        "Azure environment available",
        subscription=session.subscription_id,
        cloud=cloud.name,
    )
