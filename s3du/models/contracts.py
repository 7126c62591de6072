from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from s3du.config import Backend, ObjectVersions


class BucketSizeModel(BaseModel):
    name: str
    region: Optional[str] = None
    storage_types: list[str] = Field(default_factory=list)
    size_bytes: int = Field(ge=0)
    error: Optional[str] = None


class SizeReport(BaseModel):
    backend: Backend
    region: str
    object_versions: ObjectVersions
    generated_at: datetime
    buckets: list[BucketSizeModel] = Field(default_factory=list)
    total_bytes: int = Field(ge=0)


class HealthResponse(BaseModel):
    status: str
    app: str
    version: str
    backend: Backend
    region: str
    environment: str
    timestamp: str
