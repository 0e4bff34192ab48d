"""
Custom exceptions for the serverless deployer.

This module defines a hierarchy of exceptions used throughout the deployment
lifecycle to provide clear, actionable error messages.

Exception Hierarchy:
    DeploymentError (base)
    ├── ServiceKindNotFoundError - Unknown service kind requested
    ├── ConfigurationError - Invalid or missing configuration
    │   └── MissingEnvironmentKeysError - Required env keys are absent
    ├── ResourceCreationError - Failed to create cloud resource
    ├── ResourceDeletionError - Failed to delete cloud resource
    ├── FunctionActivationTimeoutError - Lambda never reached Active
    └── TeardownError - One or more teardown steps failed
"""

from typing import Optional


class DeploymentError(Exception):
    """
    Base exception for all deployment-related errors.

    All custom exceptions in the deployer inherit from this class,
    allowing broad exception handling when needed (the CLI does exactly that).

    Attributes:
        message: Human-readable error description
        service_kind: Optional service kind tag where the error occurred
        resource: Optional resource name where the error occurred
    """

    def __init__(
        self,
        message: str,
        service_kind: Optional[str] = None,
        resource: Optional[str] = None
    ):
        self.message = message
        self.service_kind = service_kind
        self.resource = resource

        details = []
        if service_kind:
            details.append(f"kind={service_kind}")
        if resource:
            details.append(f"resource={resource}")

        if details:
            full_message = f"{message} [{', '.join(details)}]"
        else:
            full_message = message

        super().__init__(full_message)


class ServiceKindNotFoundError(DeploymentError):
    """
    Raised when an unknown service kind is requested.

    Example:
        >>> ServiceKindRegistry.get("do_upload")
        ServiceKindNotFoundError: Service kind 'do_upload' not found. Available: ['aws_upload', 'instant_database']
    """

    def __init__(self, kind: str, available_kinds: list[str]):
        self.kind = kind
        self.available_kinds = available_kinds
        message = (
            f"Service kind '{kind}' not found. "
            f"Available: {available_kinds}"
        )
        super().__init__(message, service_kind=kind)


class ConfigurationError(DeploymentError):
    """
    Raised when configuration is invalid or missing required fields.

    This typically occurs when:
    - The config file has invalid JSON or fails validation
    - AWS credentials are missing at provider initialization
    - A template payload file cannot be found
    """

    def __init__(self, message: str, config_file: Optional[str] = None):
        self.config_file = config_file
        if config_file:
            message = f"{message} (file: {config_file})"
        super().__init__(message)


class MissingEnvironmentKeysError(ConfigurationError):
    """
    Raised before any cloud mutation when required environment keys are absent.

    Attributes:
        missing_keys: The environment keys that were not set
    """

    def __init__(self, missing_keys: list[str], service_kind: Optional[str] = None):
        self.missing_keys = list(missing_keys)
        message = f"Missing required environment keys: {', '.join(self.missing_keys)}"
        if service_kind:
            message = f"{message} (needed by '{service_kind}')"
        super().__init__(message)


class ResourceCreationError(DeploymentError):
    """
    Raised when a cloud resource fails to create.

    Attributes:
        resource_type: Type of resource (e.g., "lambda_function", "rest_api")
        resource_name: Name of the resource that failed
        original_error: The underlying SDK exception
    """

    def __init__(
        self,
        resource_type: str,
        resource_name: str,
        original_error: Optional[Exception] = None
    ):
        self.resource_type = resource_type
        self.resource_name = resource_name
        self.original_error = original_error

        message = f"Failed to create {resource_type} '{resource_name}'"
        if original_error:
            message += f": {str(original_error)}"

        super().__init__(message, resource=resource_name)


class ResourceDeletionError(DeploymentError):
    """
    Raised when a cloud resource fails to delete.

    Attributes:
        resource_type: Type of resource (e.g., "lambda_function", "s3_bucket")
        resource_name: Name of the resource that failed
        original_error: The underlying SDK exception
    """

    def __init__(
        self,
        resource_type: str,
        resource_name: str,
        original_error: Optional[Exception] = None
    ):
        self.resource_type = resource_type
        self.resource_name = resource_name
        self.original_error = original_error

        message = f"Failed to delete {resource_type} '{resource_name}'"
        if original_error:
            message += f": {str(original_error)}"

        super().__init__(message, resource=resource_name)


class FunctionActivationTimeoutError(DeploymentError):
    """
    Raised when a Lambda function does not reach the Active state in time.

    Distinct from other provider errors so callers can tell "probably still
    provisioning, retry later" apart from a hard failure.

    Attributes:
        function_name: The function that was being polled
        max_wait: The deadline in seconds
        last_state: The last state reported by the provider, if any
    """

    def __init__(self, function_name: str, max_wait: float, last_state: Optional[str] = None):
        self.function_name = function_name
        self.max_wait = max_wait
        self.last_state = last_state
        message = (
            f"Timeout waiting for function to become active after {max_wait}s "
            f"(last state: {last_state or 'unknown'})"
        )
        super().__init__(message, resource=function_name)


class FunctionInvocationError(DeploymentError):
    """
    Raised when a direct invoke of a deployed function fails.

    Attributes:
        function_name: The function that was invoked
        original_error: The underlying SDK exception
    """

    def __init__(self, function_name: str, original_error: Optional[Exception] = None):
        self.function_name = function_name
        self.original_error = original_error

        message = f"Failed to invoke function '{function_name}'"
        if original_error:
            message += f": {str(original_error)}"

        super().__init__(message, resource=function_name)


class TeardownError(DeploymentError):
    """
    Raised after a best-effort teardown when one or more steps failed.

    Attributes:
        failures: Mapping of step name to the exception it raised
    """

    def __init__(self, service_id: str, failures: dict[str, Exception]):
        self.service_id = service_id
        self.failures = failures
        steps = ", ".join(f"{step}: {err}" for step, err in failures.items())
        super().__init__(f"Teardown of service '{service_id}' incomplete ({steps})")
