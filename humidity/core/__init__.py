"""
Core abstractions for the serverless deployer.

Modules:
    registry: ServiceKindRegistry for service kind strategy lookup
    exceptions: Custom exception types for deployment operations

Usage:
    from humidity.core import ServiceKindRegistry, DeploymentError

    strategy = ServiceKindRegistry.get("aws_upload", provider)
"""

from .registry import ServiceKindRegistry
from .exceptions import (
    DeploymentError,
    ServiceKindNotFoundError,
    ConfigurationError,
    MissingEnvironmentKeysError,
    ResourceCreationError,
    ResourceDeletionError,
    FunctionActivationTimeoutError,
    FunctionInvocationError,
    TeardownError,
)

__all__ = [
    # Registry
    "ServiceKindRegistry",
    # Exceptions
    "DeploymentError",
    "ServiceKindNotFoundError",
    "ConfigurationError",
    "MissingEnvironmentKeysError",
    "ResourceCreationError",
    "ResourceDeletionError",
    "FunctionActivationTimeoutError",
    "FunctionInvocationError",
    "TeardownError",
]
