"""
AWS provider implementation.

AWSProvider creates and manages a family of related AWS objects:
    - SDK clients (boto3 clients for IAM, Lambda, API Gateway, S3)
    - Resource naming (via AWSNaming)
    - The provisioners that drive one resource type each

Usage:
    provider = AWSProvider()
    provider.initialize_clients({
        "aws_access_key_id": "...",
        "aws_secret_access_key": "...",
        "aws_region": "us-east-1"
    })

    role_arn = provider.roles.ensure()
    provider.functions.create_or_update(FunctionSpec(name="...", code="..."))
"""

from typing import Optional

from humidity.core.exceptions import ConfigurationError
from humidity.providers.base import BaseProvider

REQUIRED_CREDENTIALS = {
    "aws_access_key_id": "AMZ_ID",
    "aws_secret_access_key": "AMZ_SEC",
    "aws_region": "AMZ_REGION",
}


class AWSProvider(BaseProvider):
    """
    AWS implementation of the provider.

    Attributes:
        name: Always "aws" for this provider
        clients: Dictionary of initialized boto3 clients
        naming: AWSNaming instance for resource name generation
        roles / functions / gateway / buckets: lazily built provisioners
    """

    name: str = "aws"

    def __init__(self):
        super().__init__()
        self._region: str = ""
        self._naming = None
        self._roles = None
        self._functions = None
        self._gateway = None
        self._buckets = None

    @property
    def region(self) -> str:
        """Get the AWS region for this provider instance."""
        return self._region

    @property
    def naming(self):
        """
        Get the AWSNaming instance for this provider.

        Raises:
            RuntimeError: If provider not initialized
        """
        if not self._naming:
            raise RuntimeError(
                "Provider not initialized. Call initialize_clients() first."
            )
        return self._naming

    def initialize_clients(self, credentials: dict, clients: Optional[dict] = None) -> None:
        """
        Initialize boto3 clients for AWS services.

        Args:
            credentials: AWS credentials dictionary containing:
                - aws_access_key_id: AWS access key (REQUIRED)
                - aws_secret_access_key: AWS secret key (REQUIRED)
                - aws_region: AWS region (REQUIRED)
            clients: Optional pre-built clients (used by tests)

        Raises:
            ConfigurationError: If required credentials are missing
        """
        from .clients import create_aws_clients
        from .naming import AWSNaming

        missing = [env for key, env in REQUIRED_CREDENTIALS.items() if not credentials.get(key)]
        if missing:
            raise ConfigurationError(f"AWS credentials not found: missing {', '.join(missing)}")

        self._region = credentials["aws_region"]
        self._naming = AWSNaming(self._region)

        self._clients = clients if clients is not None else create_aws_clients(
            access_key_id=credentials["aws_access_key_id"],
            secret_access_key=credentials["aws_secret_access_key"],
            region=self._region
        )

        self._initialized = True

    # ==========================================
    # Provisioners
    # ==========================================

    @property
    def roles(self):
        if self._roles is None:
            from .roles import RoleManager
            self._roles = RoleManager(self)
        return self._roles

    @property
    def functions(self):
        if self._functions is None:
            from .functions import FunctionProvisioner
            self._functions = FunctionProvisioner(self)
        return self._functions

    @property
    def gateway(self):
        if self._gateway is None:
            from .gateway import GatewayProvisioner
            self._gateway = GatewayProvisioner(self)
        return self._gateway

    @property
    def buckets(self):
        if self._buckets is None:
            from .buckets import BucketProvisioner
            self._buckets = BucketProvisioner(self)
        return self._buckets
