from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ServiceTemplate(BaseModel):
    """A reusable deployable payload plus the env keys it needs."""
    name: str
    id: str
    description: str = ""
    file_location: str
    required_keys: list[str] = Field(default_factory=list)
    value: str = Field(..., description="Service kind tag, e.g. 'aws_upload'")


class ServiceRecord(BaseModel):
    """Persisted metadata for one deployed service instance."""
    model_config = ConfigDict(extra="allow")

    name: str
    internal_name: str
    config: dict[str, Any] = Field(default_factory=dict)
    url: Optional[str] = None
    id: str
    apiId: Optional[str] = None
    serviceType: str
    created: str = Field(default_factory=utc_now_iso)
    updated: str = Field(default_factory=utc_now_iso)

    @property
    def bucket_name(self) -> Optional[str]:
        return self.config.get("bucketName")


class Project(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    id: str
    type: Optional[str] = None
    created: str
    updated: str


class HumidityConfig(BaseModel):
    """On-disk shape of ~/.humidity/config.json."""
    useEnvFile: bool = False
    envPath: str = ""
    projects: list[Project] = Field(default_factory=list)
    services: list[ServiceRecord] = Field(default_factory=list)
