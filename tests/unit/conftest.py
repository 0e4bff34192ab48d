from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

TEST_REGION = "us-east-1"
FUNCTION_ARN = "arn:aws:lambda:us-east-1:123456789012:function:my-upload-1234"


def client_error(code: str, operation: str = "Operation") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


@pytest.fixture(scope="function")
def client_error_factory():
    return client_error


@pytest.fixture(scope="function")
def magic_provider():
    """
    AWSProvider whose boto3 clients are MagicMocks.
    """
    from humidity.providers.aws.provider import AWSProvider
    from humidity.providers.aws.naming import AWSNaming

    provider = AWSProvider()
    provider._region = TEST_REGION
    provider._naming = AWSNaming(TEST_REGION)
    provider._initialized = True
    provider._clients = {
        "iam": MagicMock(),
        "lambda": MagicMock(),
        "apigateway": MagicMock(),
        "s3": MagicMock(),
    }
    return provider
