"""
Application settings using Pydantic Settings.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CloudEnvironmentName = Literal["AzureCloud", "AzureChinaCloud", "AzureUSGovernment"]


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        # Prefer local overrides while keeping .env as the default source
        env_file=(".env.local", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Azure subscription / session
    azure_subscription_id: str | None = Field(
        None, description="Subscription that owns the HDInsight clusters"
    )
    azure_resource_group: str | None = Field(
        None, description="Restrict cluster lookups to this resource group"
    )
    azure_cloud_environment: CloudEnvironmentName = "AzureCloud"

    # Logging
    log_level: str = "WARNING"
    log_format: Literal["json", "text"] = "text"

    @property
    def has_subscription(self) -> bool:
        """Check if a subscription has been configured."""
        return bool(self.azure_subscription_id)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
