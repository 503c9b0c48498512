"""
Endpoints of the regionally distinct Azure cloud deployments.
"""

from dataclasses import dataclass

from azure.identity import AzureAuthorityHosts

from hdstorage.errors import EnvironmentUnavailable


@dataclass(frozen=True)
class CloudEnvironment:
    """Endpoints for one Azure cloud."""

    name: str
    storage_endpoint_suffix: str
    resource_manager: str
    authority_host: str

    @property
    def credential_scope(self) -> str:
        return f"{self.resource_manager}/.default"


CLOUD_ENVIRONMENTS: dict[str, CloudEnvironment] = {
    "AzureCloud": CloudEnvironment(
        name="AzureCloud",
        storage_endpoint_suffix="core.windows.net",
        resource_manager="https://management.azure.com",
        authority_host=AzureAuthorityHosts.AZURE_PUBLIC_CLOUD,
    ),
    "AzureChinaCloud": CloudEnvironment(
        name="AzureChinaCloud",
        storage_endpoint_suffix="core.chinacloudapi.cn",
        resource_manager="https://management.chinacloudapi.cn",
        authority_host=AzureAuthorityHosts.AZURE_CHINA,
    ),
    "AzureUSGovernment": CloudEnvironment(
        name="AzureUSGovernment",
        storage_endpoint_suffix="core.usgovcloudapi.net",
        resource_manager="https://management.usgovcloudapi.net",
        authority_host=AzureAuthorityHosts.AZURE_GOVERNMENT,
    ),
}


def get_cloud(name: str) -> CloudEnvironment:
    """Look up a cloud by its environment name (case-insensitive)."""
    for known_name, cloud in CLOUD_ENVIRONMENTS.items():
        if known_name.lower() == name.lower():
            return cloud
    raise EnvironmentUnavailable(f"Unknown Azure cloud environment '{name}'")
