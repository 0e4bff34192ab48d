"""
AWS Provider package.

Usage:
    from humidity.providers.aws import AWSProvider, FunctionSpec

    provider = AWSProvider()
    provider.initialize_clients(settings.aws_credentials())
    config = provider.functions.create_or_update(FunctionSpec(name="...", code="..."))
"""

from .provider import AWSProvider
from .functions import FunctionSpec

__all__ = ["AWSProvider", "FunctionSpec"]
