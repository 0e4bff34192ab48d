"""
AWS SDK client initialization.

Design Decision:
    We return a dictionary of clients rather than individual module-level
    variables. This allows the provider to manage client lifecycle and
    enables easy testing via mocking.

Usage:
    from humidity.providers.aws.clients import create_aws_clients

    clients = create_aws_clients(
        access_key_id="...",
        secret_access_key="...",
        region="us-east-1"
    )
    # clients["iam"], clients["lambda"], etc.
"""

from typing import Dict, Any
import boto3


def create_aws_clients(
    access_key_id: str,
    secret_access_key: str,
    region: str
) -> Dict[str, Any]:
    """
    Create and return all AWS boto3 clients needed for deployment.

    Args:
        access_key_id: AWS access key ID
        secret_access_key: AWS secret access key
        region: AWS region (e.g., "us-east-1")

    Returns:
        Dictionary mapping service names to boto3 client instances.

    Client Keys:
        - iam: execution role for the functions
        - lambda: Lambda functions and invoke permissions
        - apigateway: API Gateway v1 (REST APIs)
        - s3: companion buckets
    """
    config = {
        "aws_access_key_id": access_key_id,
        "aws_secret_access_key": secret_access_key,
        "region_name": region,
    }

    return {
        "iam": boto3.client("iam", **config),
        "lambda": boto3.client("lambda", **config),
        "apigateway": boto3.client("apigateway", **config),
        "s3": boto3.client("s3", **config),
    }
