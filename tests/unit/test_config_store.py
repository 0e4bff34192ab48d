"""
Unit tests for ConfigStore.
"""

import json

import pytest

from humidity.config_store import ConfigStore
from humidity.core.exceptions import ConfigurationError


class TestConfigStoreFile:

    def test_init_creates_empty_config(self, settings):
        store = ConfigStore(settings)

        assert store.init() is True
        data = json.loads(settings.config_path.read_text())
        assert data == {"useEnvFile": False, "envPath": "", "projects": [], "services": []}

    def test_init_is_noop_when_present(self, config_store):
        assert config_store.init() is False

    def test_load_missing_file_returns_defaults(self, settings):
        store = ConfigStore(settings)

        assert store.load().services == []

    def test_invalid_json_raises_configuration_error(self, config_store):
        config_store.config_path.write_text("{not json")

        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            config_store.load()

    def test_invalid_shape_raises_configuration_error(self, config_store):
        config_store.config_path.write_text(json.dumps({"services": [{"name": "x"}]}))

        with pytest.raises(ConfigurationError, match="Invalid config"):
            config_store.load()


class TestConfigStoreServices:

    def test_add_and_view_service(self, config_store, make_record):
        record = make_record()

        config_store.add_service(record)

        loaded = config_store.view_service(record.id)
        assert loaded.internal_name == record.internal_name
        assert loaded.serviceType == "aws_upload"

    def test_records_use_camel_case_keys_on_disk(self, config_store, make_record):
        config_store.add_service(make_record(apiId="a1b2c3"))

        data = json.loads(config_store.config_path.read_text())
        stored = data["services"][0]
        assert stored["apiId"] == "a1b2c3"
        assert stored["serviceType"] == "aws_upload"

    def test_unknown_record_fields_are_kept(self, config_store, make_record):
        config_store.add_service(make_record(project="legacy"))

        data = json.loads(config_store.config_path.read_text())
        assert data["services"][0]["project"] == "legacy"

    def test_view_missing_service_returns_none(self, config_store):
        assert config_store.view_service("nope") is None

    def test_delete_service(self, config_store, make_record):
        record = make_record()
        config_store.add_service(record)

        assert config_store.delete_service(record.id) is True
        assert config_store.list_services() == []
        assert config_store.delete_service(record.id) is False

    def test_update_service_bumps_updated(self, config_store, make_record):
        record = make_record(updated="2000-01-01T00:00:00+00:00")
        config_store.add_service(record)

        updated = config_store.update_service(record.id, url="https://example.com")

        assert updated.url == "https://example.com"
        assert updated.updated != "2000-01-01T00:00:00+00:00"
        assert config_store.view_service(record.id).url == "https://example.com"

    def test_update_missing_service_raises(self, config_store):
        with pytest.raises(ConfigurationError, match="Service not found"):
            config_store.update_service("nope", url="x")


class TestCheckEnvVars:

    def test_all_present_returns_true(self, config_store):
        assert config_store.check_env_vars(["AMZ_ID", "AMZ_SEC", "AMZ_REGION"]) is True

    def test_missing_keys_returned(self, empty_settings):
        store = ConfigStore(empty_settings)

        assert store.check_env_vars(["AMZ_ID", "AMZ_SEC"]) == ["AMZ_ID", "AMZ_SEC"]

    def test_falls_back_to_process_environment(self, empty_settings, monkeypatch):
        monkeypatch.setenv("CUSTOM_KEY", "value")
        store = ConfigStore(empty_settings)

        assert store.check_env_vars(["CUSTOM_KEY"]) is True
