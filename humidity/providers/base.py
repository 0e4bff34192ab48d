"""
Shared base classes for provider implementations.

Contents:
    - BaseProvider: client storage and initialization guard
    - BaseProvisioner: per-resource helper with consistent lifecycle logging
"""

from humidity.logger import logger


class BaseProvider:
    """
    Base class for cloud provider implementations.

    Holds the initialized SDK clients. Providers are instantiated once per
    orchestrator, so any state they cache (e.g. the execution role ARN) lives
    exactly as long as that orchestrator.
    """

    name: str = "base"

    def __init__(self):
        self._clients: dict = {}
        self._initialized: bool = False

    @property
    def clients(self) -> dict:
        """Return initialized SDK clients."""
        if not self._initialized:
            raise RuntimeError(
                "Provider not initialized. Call initialize_clients() first."
            )
        return self._clients


class BaseProvisioner:
    """
    Base class for the per-resource provisioners of a provider.

    Provisioners hold a reference to their provider instead of their own
    clients, so a test can swap a client on the provider and every
    provisioner sees it.
    """

    resource_type: str = "resource"

    def __init__(self, provider: BaseProvider):
        self._provider = provider

    @property
    def clients(self) -> dict:
        return self._provider.clients

    def _log_resource_creation(self, resource_name: str) -> None:
        logger.info(f"Creating {self.resource_type}: {resource_name}")

    def _log_resource_deletion(self, resource_name: str) -> None:
        logger.info(f"Deleting {self.resource_type}: {resource_name}")

    def _log_resource_exists(self, resource_name: str) -> None:
        logger.info(f"{self.resource_type} already exists: {resource_name}")

    def _log_resource_not_found(self, resource_name: str) -> None:
        logger.info(f"{self.resource_type} not found (already deleted?): {resource_name}")
