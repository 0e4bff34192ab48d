"""
Environment and credential settings.

Values are read from the process environment first and then from the
``.env.humidity`` file inside the humidity home directory
(``~/.humidity`` unless ``HUMIDITY_HOME`` says otherwise).
"""

import os
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

import humidity.constants as CONSTANTS

class Settings(BaseSettings):
    # AWS credentials
    AMZ_ID: str = ""
    AMZ_SEC: str = ""
    AMZ_REGION: str = ""

    # Local state
    HUMIDITY_HOME: str = str(Path.home() / CONSTANTS.HUMIDITY_DIR_NAME)
    HUMIDITY_DEBUG: bool = False

    model_config = SettingsConfigDict(extra="ignore")

    @property
    def home_path(self) -> Path:
        return Path(self.HUMIDITY_HOME).expanduser()

    @property
    def config_path(self) -> Path:
        return self.home_path / CONSTANTS.CONFIG_FILE_NAME

    @property
    def env_path(self) -> Path:
        return self.home_path / CONSTANTS.ENV_FILE_NAME

    def aws_credentials(self) -> dict:
        """Credentials in the shape AWSProvider.initialize_clients expects."""
        return {
            "aws_access_key_id": self.AMZ_ID,
            "aws_secret_access_key": self.AMZ_SEC,
            "aws_region": self.AMZ_REGION,
        }

    def get(self, key: str) -> str:
        """Look up a key by name, falling back to the raw process environment."""
        value = getattr(self, key, None)
        if value in (None, ""):
            value = os.environ.get(key, "")
        return str(value) if value is not None else ""

def load_settings(home: Optional[str] = None) -> Settings:
    """
    Build Settings, reading the env file from the humidity home directory.

    Args:
        home: Optional override for the humidity home directory

    Returns:
        Populated Settings instance
    """
    home_dir = Path(home or os.environ.get("HUMIDITY_HOME") or Path.home() / CONSTANTS.HUMIDITY_DIR_NAME)
    env_file = home_dir.expanduser() / CONSTANTS.ENV_FILE_NAME
    overrides = {"HUMIDITY_HOME": str(home)} if home else {}
    return Settings(_env_file=env_file if env_file.exists() else None, **overrides)
