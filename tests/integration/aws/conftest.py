import boto3
import pytest
from moto import mock_aws

TEST_REGION = "us-east-1"


@pytest.fixture(scope="function")
def mock_provider():
    """
    Create an AWSProvider backed by moto clients.
    """
    from humidity.providers.aws.provider import AWSProvider
    from humidity.providers.aws.naming import AWSNaming

    with mock_aws():
        provider = AWSProvider()
        provider._region = TEST_REGION
        provider._naming = AWSNaming(TEST_REGION)
        provider._initialized = True  # Mark as initialized to bypass property check

        iam_client = boto3.client("iam", region_name=TEST_REGION)

        # Wrap attach_role_policy to succeed even with AWS managed policies
        original_attach = iam_client.attach_role_policy

        def mock_attach_role_policy(**kwargs):
            try:
                return original_attach(**kwargs)
            except iam_client.exceptions.NoSuchEntityException:
                # moto may not know every AWS managed policy
                return {}

        iam_client.attach_role_policy = mock_attach_role_policy

        provider._clients = {
            "iam": iam_client,
            "lambda": boto3.client("lambda", region_name=TEST_REGION),
            "apigateway": boto3.client("apigateway", region_name=TEST_REGION),
            "s3": boto3.client("s3", region_name=TEST_REGION),
        }
        yield provider


@pytest.fixture(scope="function")
def orchestrator(settings, config_store, mock_provider):
    from humidity.orchestrator import LifecycleOrchestrator

    return LifecycleOrchestrator(settings, config_store, provider=mock_provider)


@pytest.fixture(scope="function")
def handler_code():
    return "def handler(event, context):\n    return {'statusCode': 200, 'body': 'ok'}\n"
