"""
Service registry persisted in ``<HUMIDITY_HOME>/config.json``.

This is the only durable state of the deployer: cloud resources carry no
bookkeeping beyond their names. Writes are read-modify-write without
locking, so one writer at a time is assumed.

Usage:
    store = ConfigStore(settings)
    store.add_service(record)
    record = store.view_service(record.id)
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from humidity.core.exceptions import ConfigurationError
from humidity.logger import logger
from humidity.models import HumidityConfig, ServiceRecord, utc_now_iso
from humidity.settings import Settings


def _load_json_file(file_path: Path) -> Dict[str, Any]:
    """
    Load a JSON file and return its contents as a dictionary.

    Raises:
        ConfigurationError: If the file has invalid JSON
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in configuration file: {e}",
            config_file=str(file_path)
        )


class ConfigStore:
    """Reads and writes the humidity config file."""

    def __init__(self, settings: Settings, config_path: Optional[Path] = None):
        self._settings = settings
        self._config_path = Path(config_path) if config_path else settings.config_path

    @property
    def config_path(self) -> Path:
        return self._config_path

    def init(self) -> bool:
        """Create an empty config file if none exists. Returns True if created."""
        if self._config_path.exists():
            logger.debug(f"Config already exists at {self._config_path}")
            return False
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        self._save(HumidityConfig())
        logger.info(f"Config created at {self._config_path}")
        return True

    def load(self) -> HumidityConfig:
        if not self._config_path.exists():
            return HumidityConfig()
        raw = _load_json_file(self._config_path)
        try:
            return HumidityConfig.model_validate(raw)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid config file: {e}", config_file=str(self._config_path))

    def _save(self, config: HumidityConfig) -> None:
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._config_path, "w", encoding="utf-8") as f:
            json.dump(config.model_dump(mode="json"), f, indent=2)

    # ==========================================
    # Services
    # ==========================================

    def add_service(self, record: ServiceRecord) -> None:
        config = self.load()
        config.services.append(record)
        self._save(config)
        logger.info(f"Saved service '{record.name}' ({record.id})")

    def list_services(self) -> List[ServiceRecord]:
        return self.load().services

    def view_service(self, service_id: str) -> Optional[ServiceRecord]:
        for record in self.load().services:
            if record.id == service_id:
                return record
        return None

    def update_service(self, service_id: str, **updates) -> ServiceRecord:
        config = self.load()
        for index, record in enumerate(config.services):
            if record.id == service_id:
                updated = record.model_copy(update={**updates, "updated": utc_now_iso()})
                config.services[index] = updated
                self._save(config)
                return updated
        raise ConfigurationError(f"Service not found: {service_id}", config_file=str(self._config_path))

    def delete_service(self, service_id: str) -> bool:
        """Remove a record. Returns False if it was not present."""
        config = self.load()
        remaining = [s for s in config.services if s.id != service_id]
        if len(remaining) == len(config.services):
            return False
        config.services = remaining
        self._save(config)
        logger.info(f"Removed service {service_id} from config")
        return True

    # ==========================================
    # Environment
    # ==========================================

    def check_env_vars(self, keys: List[str]) -> Union[bool, List[str]]:
        """Return True if every key has a value, otherwise the missing keys."""
        missing = [key for key in keys if not self._settings.get(key)]
        return True if not missing else missing
