"""
Service kind strategies.

Importing this package registers every built-in kind with the
ServiceKindRegistry.
"""

import humidity.constants as CONSTANTS
from humidity.core.registry import ServiceKindRegistry
from .base import ServiceStrategy
from .aws_upload import AWSUploadService
from .instant_database import InstantDatabaseService


def register_builtin_kinds() -> None:
    """Register the built-in kinds. Safe to call again, e.g. after a test cleared the registry."""
    ServiceKindRegistry.register(CONSTANTS.SERVICE_KIND_AWS_UPLOAD, AWSUploadService)
    ServiceKindRegistry.register(CONSTANTS.SERVICE_KIND_INSTANT_DATABASE, InstantDatabaseService)


register_builtin_kinds()

__all__ = [
    "ServiceStrategy",
    "AWSUploadService",
    "InstantDatabaseService",
    "register_builtin_kinds",
]
