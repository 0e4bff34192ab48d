"""
Base strategy for a deployable service kind.

A strategy turns a template payload into running resources and back:

    up:   [kind resources] -> function -> gateway -> ServiceRecord
    down: gateway -> function -> execution role -> [kind resources]

Subclasses set ``kind`` and override the hooks they need; the function and
gateway wiring is shared.
"""

from typing import Callable, Dict, List, Tuple, TYPE_CHECKING

from botocore.exceptions import BotoCoreError, ClientError

import humidity.constants as CONSTANTS
from humidity.core.exceptions import (
    DeploymentError,
    ResourceCreationError,
    ResourceDeletionError,
    TeardownError,
)
from humidity.logger import logger
from humidity.models import ServiceRecord
from humidity.providers.aws.functions import FunctionSpec

if TYPE_CHECKING:
    from humidity.providers.aws.provider import AWSProvider
    from humidity.settings import Settings

TeardownStep = Tuple[str, Callable[[], None]]


class ServiceStrategy:
    """Brings one kind of service up and tears it down."""

    kind: str = ""

    def __init__(self, provider: 'AWSProvider'):
        self.provider = provider

    # ==========================================
    # Hooks
    # ==========================================

    def provision_resources(self, service_id: str) -> Dict[str, str]:
        """Create kind-specific resources before the function.

        Returns:
            Entries merged into the record's ``config``
        """
        return {}

    def environment(self, settings: 'Settings', resources: Dict[str, str]) -> Dict[str, str]:
        """Environment variables passed to the function."""
        return {key: settings.get(key) for key in CONSTANTS.AWS_REQUIRED_KEYS}

    def extra_teardown_steps(self, record: ServiceRecord) -> List[TeardownStep]:
        """Teardown run after the shared steps. Removes any recorded bucket."""
        bucket_name = record.bucket_name
        if not bucket_name:
            return []
        return [("bucket", lambda: self.provider.buckets.delete(bucket_name))]

    # ==========================================
    # Lifecycle
    # ==========================================

    def _create(self, resource_type: str, resource_name: str, action: Callable):
        try:
            return action()
        except (ClientError, BotoCoreError) as e:
            raise ResourceCreationError(resource_type, resource_name, e) from e

    def up(self, display_name: str, payload: str, settings: 'Settings') -> ServiceRecord:
        naming = self.provider.naming
        service_id = naming.new_service_id()
        internal_name = naming.internal_name(display_name, service_id)
        logger.info(f"Deploying {self.kind} service '{display_name}' as {internal_name}")

        resources = self._create(
            "companion resources", internal_name,
            lambda: self.provision_resources(service_id)
        )

        spec = FunctionSpec(
            name=internal_name,
            code=payload,
            environment=self.environment(settings, resources),
        )
        function_config = self._create(
            "lambda_function", internal_name,
            lambda: self.provider.functions.create_or_update(spec)
        )

        url, api_id = self._create(
            "rest_api", naming.rest_api(internal_name),
            lambda: self.provider.gateway.ensure(internal_name, function_config["FunctionArn"])
        )

        config = {
            **function_config,
            "url": url,
            "internal_name": internal_name,
            "api_id": api_id,
            **resources,
        }

        logger.info(f"Service '{display_name}' available at {url}")
        return ServiceRecord(
            name=display_name,
            internal_name=internal_name,
            config=config,
            url=url,
            id=service_id,
            apiId=api_id,
            serviceType=self.kind,
        )

    def teardown_steps(self, record: ServiceRecord) -> List[TeardownStep]:
        provider = self.provider
        steps = [
            ("gateway", lambda: provider.gateway.delete(record)),
            ("function", lambda: provider.functions.delete(record.internal_name)),
            ("role", provider.roles.delete),
        ]
        return steps + self.extra_teardown_steps(record)

    def down(self, record: ServiceRecord) -> None:
        """Run every teardown step, even after a failure.

        Raises:
            TeardownError: If any step failed, after all steps have run
        """
        failures = {}
        for step, action in self.teardown_steps(record):
            try:
                action()
            except DeploymentError as e:
                logger.error(f"Teardown step '{step}' failed for {record.internal_name}: {e}")
                failures[step] = e
            except (ClientError, BotoCoreError) as e:
                logger.error(f"Teardown step '{step}' failed for {record.internal_name}: {e}")
                failures[step] = ResourceDeletionError(step, record.internal_name, e)

        if failures:
            raise TeardownError(record.id, failures)
        logger.info(f"Service '{record.name}' ({record.id}) torn down")
