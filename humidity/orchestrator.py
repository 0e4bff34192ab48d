"""
Lifecycle orchestrator: brings services up and tears them down.

Collaborators are injected so one orchestrator owns exactly one provider
(and so one cached execution role ARN):

    orchestrator = LifecycleOrchestrator(settings, store, templates)
    record = orchestrator.up("aws_upload", "my-upload")
    orchestrator.down(record.id)

There is no rollback: a failed ``up`` leaves whatever was created in place,
and ``down`` (which is idempotent) is the way to clean it up.
"""

from typing import Any, List, Optional, Union

from botocore.exceptions import BotoCoreError, ClientError

import humidity.services  # noqa: F401  registers built-in service kinds
from humidity.config_store import ConfigStore
from humidity.core.exceptions import (
    ConfigurationError,
    FunctionInvocationError,
    MissingEnvironmentKeysError,
)
from humidity.core.registry import ServiceKindRegistry
from humidity.logger import logger
from humidity.models import ServiceRecord
from humidity.providers.aws.provider import AWSProvider
from humidity.settings import Settings, load_settings
from humidity.templates import TemplateRegistry


class LifecycleOrchestrator:
    """
    Drives ``up`` and ``down`` for every registered service kind.

    Attributes:
        settings: Environment and credential settings
        config_store: Persisted service records
        templates: Template lookup and payload reading
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        config_store: Optional[ConfigStore] = None,
        templates: Optional[TemplateRegistry] = None,
        provider: Optional[AWSProvider] = None
    ):
        self.settings = settings or load_settings()
        self.config_store = config_store or ConfigStore(self.settings)
        self.templates = templates or TemplateRegistry()
        self._provider = provider

    @property
    def provider(self) -> AWSProvider:
        """The AWS provider, initialized from settings on first use."""
        if self._provider is None:
            provider = AWSProvider()
            provider.initialize_clients(self.settings.aws_credentials())
            self._provider = provider
        return self._provider

    def _resolve_record(self, record_or_id: Union[ServiceRecord, str]) -> ServiceRecord:
        if isinstance(record_or_id, ServiceRecord):
            return record_or_id
        record = self.config_store.view_service(record_or_id)
        if record is None:
            raise ConfigurationError(
                f"Service not found: {record_or_id}",
                config_file=str(self.config_store.config_path)
            )
        return record

    # ==========================================
    # Lifecycle
    # ==========================================

    def up(self, service_kind: str, display_name: str) -> ServiceRecord:
        """
        Deploy a new service of the given kind and persist its record.

        Raises:
            ServiceKindNotFoundError: Unknown kind
            ConfigurationError: No template for the kind, or unreadable payload
            MissingEnvironmentKeysError: Required keys unset; no cloud call was made
        """
        strategy_class = ServiceKindRegistry.get_class(service_kind)

        template = self.templates.find_template_by_internal_name(service_kind)
        if template is None:
            raise ConfigurationError(f"No template registered for service kind '{service_kind}'")

        check = self.config_store.check_env_vars(template.required_keys)
        if check is not True:
            raise MissingEnvironmentKeysError(check, service_kind=service_kind)

        payload = self.templates.read_payload(template)

        strategy = strategy_class(self.provider)
        record = strategy.up(display_name, payload, self.settings)

        self.config_store.add_service(record)
        return record

    def down(self, record_or_id: Union[ServiceRecord, str]) -> None:
        """
        Tear down a service and remove its record.

        Raises:
            ConfigurationError: No record with that id
            ServiceKindNotFoundError: The record's kind is not registered
            TeardownError: A step failed; the record is kept for a retry
        """
        record = self._resolve_record(record_or_id)
        logger.info(f"Tearing down '{record.name}' ({record.serviceType}, {record.id})")

        strategy = ServiceKindRegistry.get(record.serviceType, self.provider)
        strategy.down(record)

        self.config_store.delete_service(record.id)

    # ==========================================
    # Queries
    # ==========================================

    def list_services(self) -> List[ServiceRecord]:
        return self.config_store.list_services()

    def list_kinds(self) -> List[str]:
        return ServiceKindRegistry.list_kinds()

    def invoke(self, record_or_id: Union[ServiceRecord, str], payload: Optional[dict] = None) -> Any:
        """Invoke a deployed service's function directly, bypassing the gateway."""
        record = self._resolve_record(record_or_id)
        try:
            return self.provider.functions.invoke(record.internal_name, payload)
        except (ClientError, BotoCoreError) as e:
            raise FunctionInvocationError(record.internal_name, e) from e
