from dataclasses import replace
from functools import lru_cache
from enum import Enum
from typing import Optional, TypeVar
import os

from s3du.config import DEFAULT_REGION, Backend, ClientConfig, ObjectVersions
from s3du.sizer.runner import DEFAULT_MAX_WORKERS

_E = TypeVar("_E", bound=Enum)

_DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


class Settings:
    def __init__(self) -> None:
        self.region = (
            os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or DEFAULT_REGION
        )
        self.backend = self._parse_enum("S3DU_MODE", Backend, Backend.S3)
        self.object_versions = self._parse_enum(
            "S3DU_OBJECT_VERSIONS", ObjectVersions, ObjectVersions.CURRENT
        )
        self.endpoint_url = os.getenv("S3DU_ENDPOINT_URL") or None
        self.max_workers = self._parse_max_workers()
        self.log_level = os.getenv("LOG_LEVEL", "WARNING").upper()

        self.api_prefix = os.getenv("API_PREFIX", "/api/v1")
        self.environment = os.getenv("ENVIRONMENT", "development")
        self.app_name = os.getenv("APP_NAME", "s3du-api")
        self.cors_origins = self._parse_cors_origins()

    @staticmethod
    def _parse_enum(name: str, enum_type: type[_E], default: _E) -> _E:
        raw = os.getenv(name)
        if not raw:
            return default
        try:
            return enum_type(raw.strip().lower())
        except ValueError:
            allowed = ", ".join(member.value for member in enum_type)
            raise ValueError(f"{name}={raw!r} is not one of: {allowed}") from None

    def _parse_max_workers(self) -> int:
        raw = os.getenv("S3DU_MAX_WORKERS")
        if not raw:
            return DEFAULT_MAX_WORKERS
        try:
            return max(1, int(raw))
        except ValueError:
            raise ValueError(f"S3DU_MAX_WORKERS={raw!r} is not an integer") from None

    def _parse_cors_origins(self) -> list[str]:
        raw = os.getenv("CORS_ORIGINS", ",".join(_DEFAULT_CORS_ORIGINS))
        origins = [item.strip() for item in raw.split(",") if item.strip()]
        return origins or list(_DEFAULT_CORS_ORIGINS)

    def client_config(
        self,
        region: Optional[str] = None,
        backend: Optional[Backend] = None,
        object_versions: Optional[ObjectVersions] = None,
        bucket_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
    ) -> ClientConfig:
        """Build a ClientConfig, explicit arguments winning over the environment."""
        config = ClientConfig(
            region=self.region,
            backend=self.backend,
            object_versions=self.object_versions,
            endpoint_url=self.endpoint_url,
        )
        overrides = {
            "region": region,
            "backend": backend,
            "object_versions": object_versions,
            "bucket_name": bucket_name,
            "endpoint_url": endpoint_url,
        }
        return replace(config, **{k: v for k, v in overrides.items() if v is not None})


@lru_cache
def get_settings() -> Settings:
    return Settings()
