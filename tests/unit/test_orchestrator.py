"""
Unit tests for LifecycleOrchestrator and the service strategies with mocked
provisioners.
"""

from unittest.mock import MagicMock

import pytest

from humidity.config_store import ConfigStore
from humidity.core.exceptions import (
    ConfigurationError,
    FunctionActivationTimeoutError,
    FunctionInvocationError,
    MissingEnvironmentKeysError,
    ResourceCreationError,
    ResourceDeletionError,
    ServiceKindNotFoundError,
    TeardownError,
)
from humidity.orchestrator import LifecycleOrchestrator
from humidity.providers.aws.naming import AWSNaming

FUNCTION_ARN = "arn:aws:lambda:us-east-1:123456789012:function:fn"


@pytest.fixture
def fake_provider():
    """Provider double whose provisioners are MagicMocks."""
    provider = MagicMock()
    provider.naming = AWSNaming("us-east-1")
    provider.functions.create_or_update.return_value = {"FunctionArn": FUNCTION_ARN, "State": "Active"}
    provider.gateway.ensure.return_value = ("https://api1.execute-api.us-east-1.amazonaws.com/prod/fn", "api1")
    return provider


@pytest.fixture
def orchestrator(settings, config_store, fake_provider):
    return LifecycleOrchestrator(settings, config_store, provider=fake_provider)


class TestOrchestratorUp:

    def test_up_persists_record(self, orchestrator, config_store, fake_provider):
        record = orchestrator.up("aws_upload", "my-upload")

        assert record.internal_name == f"my-upload-{record.id}"
        assert record.serviceType == "aws_upload"
        assert record.apiId == "api1"
        assert record.config["FunctionArn"] == FUNCTION_ARN
        assert record.config["internal_name"] == record.internal_name
        assert config_store.view_service(record.id) is not None

        spec = fake_provider.functions.create_or_update.call_args.args[0]
        assert spec.name == record.internal_name
        assert spec.environment == {"AMZ_ID": "testing", "AMZ_SEC": "testing", "AMZ_REGION": "us-east-1"}
        assert "def handler(event, context)" in spec.code
        fake_provider.gateway.ensure.assert_called_once_with(record.internal_name, FUNCTION_ARN)

    def test_missing_keys_fail_before_any_cloud_call(self, empty_settings, fake_provider):
        store = ConfigStore(empty_settings)
        orchestrator = LifecycleOrchestrator(empty_settings, store, provider=fake_provider)

        with pytest.raises(MissingEnvironmentKeysError) as exc_info:
            orchestrator.up("aws_upload", "my-upload")

        assert exc_info.value.missing_keys == ["AMZ_ID", "AMZ_SEC", "AMZ_REGION"]
        fake_provider.functions.create_or_update.assert_not_called()
        fake_provider.gateway.ensure.assert_not_called()
        assert store.list_services() == []

    def test_unknown_kind(self, orchestrator, fake_provider):
        with pytest.raises(ServiceKindNotFoundError):
            orchestrator.up("do_upload", "x")

        fake_provider.functions.create_or_update.assert_not_called()

    def test_kind_without_template(self, settings, config_store, fake_provider):
        templates = MagicMock()
        templates.find_template_by_internal_name.return_value = None
        orchestrator = LifecycleOrchestrator(settings, config_store, templates, provider=fake_provider)

        with pytest.raises(ConfigurationError, match="No template"):
            orchestrator.up("aws_upload", "x")

    def test_failed_up_is_not_rolled_back_or_recorded(self, orchestrator, config_store, fake_provider):
        fake_provider.gateway.ensure.side_effect = RuntimeError("gateway exploded")

        with pytest.raises(RuntimeError):
            orchestrator.up("aws_upload", "x")

        fake_provider.functions.delete.assert_not_called()
        assert config_store.list_services() == []

    def test_sdk_failure_is_reported_as_creation_error(self, orchestrator, fake_provider, client_error_factory):
        fake_provider.gateway.ensure.side_effect = client_error_factory("TooManyRequestsException", "CreateRestApi")

        with pytest.raises(ResourceCreationError) as exc_info:
            orchestrator.up("aws_upload", "x")

        assert exc_info.value.resource_type == "rest_api"
        assert exc_info.value.resource_name.endswith("-api")

    def test_activation_timeout_is_not_wrapped(self, orchestrator, fake_provider):
        fake_provider.functions.create_or_update.side_effect = FunctionActivationTimeoutError("fn", 60, "Pending")

        with pytest.raises(FunctionActivationTimeoutError):
            orchestrator.up("aws_upload", "x")

    def test_instant_database_creates_bucket_first(self, orchestrator, fake_provider):
        order = []
        fake_provider.buckets.create.side_effect = lambda name: order.append("bucket")
        fake_provider.functions.create_or_update.side_effect = lambda spec: (
            order.append("function") or {"FunctionArn": FUNCTION_ARN}
        )

        record = orchestrator.up("instant_database", "db")

        assert order == ["bucket", "function"]
        assert record.bucket_name == f"instant-db-{record.id}"
        spec = fake_provider.functions.create_or_update.call_args.args[0]
        assert spec.environment["BUCKET_NAME"] == record.bucket_name


class TestOrchestratorDown:

    def test_down_runs_steps_in_order_and_forgets_record(self, orchestrator, config_store, fake_provider, make_record):
        record = make_record()
        config_store.add_service(record)
        order = []
        fake_provider.gateway.delete.side_effect = lambda r: order.append("gateway")
        fake_provider.functions.delete.side_effect = lambda n: order.append("function")
        fake_provider.roles.delete.side_effect = lambda: order.append("role")

        orchestrator.down(record.id)

        assert order == ["gateway", "function", "role"]
        fake_provider.functions.delete.assert_called_once_with(record.internal_name)
        assert config_store.view_service(record.id) is None

    def test_failed_step_does_not_stop_the_rest(self, orchestrator, config_store, fake_provider,
                                                make_record, client_error_factory):
        record = make_record()
        config_store.add_service(record)
        fake_provider.gateway.delete.side_effect = client_error_factory("TooManyRequestsException", "DeleteRestApi")

        with pytest.raises(TeardownError) as exc_info:
            orchestrator.down(record.id)

        assert list(exc_info.value.failures) == ["gateway"]
        assert isinstance(exc_info.value.failures["gateway"], ResourceDeletionError)
        fake_provider.functions.delete.assert_called_once()
        fake_provider.roles.delete.assert_called_once()
        assert config_store.view_service(record.id) is not None

    def test_instant_database_down_deletes_bucket(self, orchestrator, config_store, fake_provider, make_record):
        record = make_record(service_type="instant_database", config={"bucketName": "instant-db-abc"})
        config_store.add_service(record)

        orchestrator.down(record)

        fake_provider.buckets.delete.assert_called_once_with("instant-db-abc")

    def test_instant_database_without_recorded_bucket_uses_naming(self, orchestrator, config_store,
                                                                  fake_provider, make_record):
        record = make_record(service_id="abc", service_type="instant_database")

        orchestrator.down(record)

        fake_provider.buckets.delete.assert_called_once_with("instant-db-abc")

    def test_any_recorded_bucket_is_removed(self, orchestrator, fake_provider, make_record):
        record = make_record(config={"bucketName": "legacy-bucket"})

        orchestrator.down(record)

        fake_provider.buckets.delete.assert_called_once_with("legacy-bucket")

    def test_no_bucket_step_for_plain_upload(self, orchestrator, fake_provider, make_record):
        orchestrator.down(make_record())

        fake_provider.buckets.delete.assert_not_called()

    def test_unknown_id(self, orchestrator):
        with pytest.raises(ConfigurationError, match="Service not found"):
            orchestrator.down("nope")

    def test_unknown_service_type(self, orchestrator, config_store, make_record):
        record = make_record(service_type="do_upload")
        config_store.add_service(record)

        with pytest.raises(ServiceKindNotFoundError):
            orchestrator.down(record.id)


class TestOrchestratorQueries:

    def test_invoke_uses_internal_name(self, orchestrator, config_store, fake_provider, make_record):
        record = make_record()
        config_store.add_service(record)
        fake_provider.functions.invoke.return_value = {"statusCode": 200}

        assert orchestrator.invoke(record.id, {"ping": 1}) == {"statusCode": 200}
        fake_provider.functions.invoke.assert_called_once_with(record.internal_name, {"ping": 1})

    def test_invoke_sdk_failure_is_a_deployment_error(self, orchestrator, config_store, fake_provider,
                                                      make_record, client_error_factory):
        record = make_record()
        config_store.add_service(record)
        fake_provider.functions.invoke.side_effect = client_error_factory("ResourceNotFoundException", "Invoke")

        with pytest.raises(FunctionInvocationError) as exc_info:
            orchestrator.invoke(record.id)

        assert exc_info.value.function_name == record.internal_name
        assert exc_info.value.original_error.response["Error"]["Code"] == "ResourceNotFoundException"

    def test_list_kinds(self, orchestrator):
        assert orchestrator.list_kinds() == ["aws_upload", "instant_database"]

    def test_provider_built_from_settings(self, settings, config_store):
        orchestrator = LifecycleOrchestrator(settings, config_store)

        provider = orchestrator.provider

        assert provider.region == "us-east-1"
        assert set(provider.clients) == {"iam", "lambda", "apigateway", "s3"}
        assert orchestrator.provider is provider

    def test_provider_requires_credentials(self, empty_settings):
        orchestrator = LifecycleOrchestrator(empty_settings, ConfigStore(empty_settings))

        with pytest.raises(ConfigurationError, match="AMZ_ID"):
            orchestrator.provider
