"""
Lambda function provisioning.

State machine for one function:
    Absent -> Creating -> (poll) -> Active
    Absent -> (exists) -> Updating -> (poll) -> Active
    Active -> Deleting -> Absent

There is no explicit failed state: a poll timeout surfaces as
FunctionActivationTimeoutError and leaves the function in whatever state
Lambda reports.
"""

import json
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, TYPE_CHECKING

from botocore.exceptions import BotoCoreError, ClientError

import humidity.constants as CONSTANTS
from humidity.core.exceptions import FunctionActivationTimeoutError
from humidity.logger import logger
from humidity.providers.aws import archiver
from humidity.providers.base import BaseProvisioner

if TYPE_CHECKING:
    from humidity.providers.aws.provider import AWSProvider


@dataclass(frozen=True)
class FunctionSpec:
    """Inputs to one provisioning call."""
    name: str
    code: str
    handler: str = CONSTANTS.LAMBDA_DEFAULT_HANDLER
    runtime: str = CONSTANTS.LAMBDA_DEFAULT_RUNTIME
    environment: Dict[str, str] = field(default_factory=dict)


class FunctionProvisioner(BaseProvisioner):
    """Creates, updates, polls, invokes and deletes Lambda functions."""

    resource_type = "Lambda function"

    def __init__(
        self,
        provider: 'AWSProvider',
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None
    ):
        super().__init__(provider)
        self._clock = clock or time.monotonic
        self._sleep = sleep

    def _pause(self, seconds: float) -> None:
        # time.sleep is looked up per call so it can be patched in tests
        (self._sleep or time.sleep)(seconds)

    def exists(self, name: str) -> bool:
        try:
            self.clients["lambda"].get_function(FunctionName=name)
            return True
        except ClientError as e:
            if e.response["Error"]["Code"] == "ResourceNotFoundException":
                return False
            raise

    def create_or_update(self, spec: FunctionSpec) -> dict:
        """Create the function, or update its code if it already exists.

        Returns:
            The function's Configuration descriptor once it is Active.
        """
        roles = self._provider.roles
        role_arn = roles.ensure()
        roles.wait_for_propagation()

        lambda_client = self.clients["lambda"]
        zipped_code = archiver.pack(spec.code)

        if self.exists(spec.name):
            logger.info(f"Function already exists. Updating: {spec.name}")
            lambda_client.update_function_code(
                FunctionName=spec.name,
                ZipFile=zipped_code
            )

            if spec.environment:
                # Lambda rejects configuration changes while a code update is running
                waiter = lambda_client.get_waiter("function_updated")
                waiter.wait(FunctionName=spec.name)

                logger.info("Updating environment variables...")
                lambda_client.update_function_configuration(
                    FunctionName=spec.name,
                    Timeout=CONSTANTS.LAMBDA_UPDATE_TIMEOUT_SECONDS,
                    Environment={"Variables": dict(spec.environment)}
                )
            logger.info(f"Updated Lambda function: {spec.name}")
        else:
            self._log_resource_creation(spec.name)
            lambda_client.create_function(
                FunctionName=spec.name,
                Runtime=spec.runtime,
                Role=role_arn,
                Handler=spec.handler,
                Code={"ZipFile": zipped_code},
                Environment={"Variables": dict(spec.environment)}
            )
            logger.info(f"Created Lambda function: {spec.name}")

        self.wait_active(spec.name)

        response = lambda_client.get_function(FunctionName=spec.name)
        return response["Configuration"]

    def wait_active(
        self,
        name: str,
        max_wait: float = CONSTANTS.LAMBDA_ACTIVE_MAX_WAIT_SECONDS,
        poll_interval: float = CONSTANTS.LAMBDA_ACTIVE_POLL_INTERVAL_SECONDS
    ) -> None:
        """Poll until the function reports Active or the deadline passes.

        Fetch errors while polling are logged and retried; the function may
        be mid-transition.

        Raises:
            FunctionActivationTimeoutError: If max_wait elapses first
        """
        lambda_client = self.clients["lambda"]
        deadline = self._clock() + max_wait
        last_state = None

        while self._clock() < deadline:
            try:
                response = lambda_client.get_function(FunctionName=name)
                last_state = response["Configuration"].get("State")
                if last_state == CONSTANTS.LAMBDA_STATE_ACTIVE:
                    logger.info(f"Lambda function is now active: {name}")
                    return
                logger.debug(f"Function {name} is {last_state}, waiting {poll_interval}s")
            except (ClientError, BotoCoreError) as e:
                logger.warning(f"Error checking function state for {name}: {e}")
            self._pause(poll_interval)

        raise FunctionActivationTimeoutError(name, max_wait, last_state)

    def delete(self, name: str) -> None:
        if not self.exists(name):
            logger.info(f"Function {name} does not exist. Skipping deletion.")
            return
        self._log_resource_deletion(name)
        try:
            self.clients["lambda"].delete_function(FunctionName=name)
        except ClientError as e:
            if e.response["Error"]["Code"] != "ResourceNotFoundException":
                raise

    def invoke(self, name: str, payload: Optional[dict] = None) -> Any:
        """Invoke synchronously and return the decoded JSON response."""
        response = self.clients["lambda"].invoke(
            FunctionName=name,
            InvocationType="RequestResponse",
            Payload=json.dumps(payload or {}),
        )
        raw = response["Payload"].read()
        result = json.loads(raw) if raw else None
        logger.info(f"Lambda response: {result}")
        return result
