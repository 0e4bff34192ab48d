"""
Template registry.

Templates are the reusable payloads a service is deployed from. Each one
names its handler source (shipped under ``templates/services``) and the
environment keys that must be set before it can be deployed.
"""

from pathlib import Path
from typing import List, Optional

import humidity.constants as CONSTANTS
from humidity.core.exceptions import ConfigurationError
from humidity.models import ServiceTemplate

DEFAULT_TEMPLATES = [
    ServiceTemplate(
        name="AWS S3 File upload service",
        id="981c3345-c5c9-4cbe-ac82-2f38d7d96eb7",
        description="Upload files to S3",
        file_location="file_uploader/index.py",
        required_keys=CONSTANTS.AWS_REQUIRED_KEYS,
        value=CONSTANTS.SERVICE_KIND_AWS_UPLOAD,
    ),
    ServiceTemplate(
        name="Instant Database",
        id="6f0c1f55-3f0e-4f55-9a57-3c2f7f0f9d6e",
        description="JSON document store backed by an S3 bucket",
        file_location="instant_database/index.py",
        required_keys=CONSTANTS.AWS_REQUIRED_KEYS,
        value=CONSTANTS.SERVICE_KIND_INSTANT_DATABASE,
    ),
]


class TemplateRegistry:
    """Looks up templates by service kind and reads their payloads."""

    def __init__(self, templates: Optional[List[ServiceTemplate]] = None, base_path: Optional[Path] = None):
        self._templates = list(templates if templates is not None else DEFAULT_TEMPLATES)
        self._base_path = Path(base_path) if base_path else CONSTANTS.TEMPLATES_DIR

    def list_templates(self) -> List[ServiceTemplate]:
        return list(self._templates)

    def find_template_by_internal_name(self, value: str) -> Optional[ServiceTemplate]:
        for template in self._templates:
            if template.value == value:
                return template
        return None

    def read_payload(self, template: ServiceTemplate) -> str:
        """Read the handler source of a template."""
        path = self._base_path / template.file_location
        if not path.is_file():
            raise ConfigurationError(f"Template payload not found for '{template.value}'", config_file=str(path))
        payload = path.read_text(encoding="utf-8")
        if not payload.strip():
            raise ConfigurationError(f"Template payload is empty for '{template.value}'", config_file=str(path))
        return payload
