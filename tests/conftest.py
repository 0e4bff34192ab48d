import os

import pytest

TEST_REGION = "us-east-1"


@pytest.fixture(scope="function", autouse=True)
def mock_env_vars(monkeypatch, tmp_path):
    """Set mock environment variables to prevent accidental cloud calls."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    # Keep the developer's real humidity setup out of the tests
    for key in ("AMZ_ID", "AMZ_SEC", "AMZ_REGION", "HUMIDITY_DEBUG"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HUMIDITY_HOME", str(tmp_path / ".humidity"))


@pytest.fixture(autouse=True)
def mock_sleep(monkeypatch):
    """Skip time.sleep calls to speed up tests."""
    monkeypatch.setattr("time.sleep", lambda x: None)


@pytest.fixture(scope="function")
def humidity_home(tmp_path):
    return tmp_path / ".humidity"


@pytest.fixture(scope="function")
def settings(humidity_home):
    """Settings with fake AWS credentials and a temporary home."""
    from humidity.settings import Settings

    return Settings(
        _env_file=None,
        AMZ_ID="testing",
        AMZ_SEC="testing",
        AMZ_REGION=TEST_REGION,
        HUMIDITY_HOME=str(humidity_home),
    )


@pytest.fixture(scope="function")
def empty_settings(humidity_home):
    """Settings without any AWS credentials."""
    from humidity.settings import Settings

    return Settings(_env_file=None, HUMIDITY_HOME=str(humidity_home))


@pytest.fixture(scope="function")
def config_store(settings):
    from humidity.config_store import ConfigStore

    store = ConfigStore(settings)
    store.init()
    return store


@pytest.fixture(scope="function")
def make_record():
    """Factory for ServiceRecords that were never deployed."""
    from humidity.models import ServiceRecord

    def _make(service_id="11111111-2222-3333-4444-555555555555", name="my-upload",
              service_type="aws_upload", **extra):
        return ServiceRecord(
            name=name,
            internal_name=f"{name}-{service_id}",
            id=service_id,
            serviceType=service_type,
            **extra
        )

    return _make


@pytest.fixture(scope="function")
def templates_dir():
    """Path of the shipped handler templates."""
    import humidity.constants as CONSTANTS

    assert os.path.isdir(CONSTANTS.TEMPLATES_DIR)
    return CONSTANTS.TEMPLATES_DIR
