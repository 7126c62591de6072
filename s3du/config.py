# config.py
# Configuration settings for bucket sizing clients

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Region S3 reports for buckets with an empty LocationConstraint
DEFAULT_REGION = "us-east-1"


class Backend(str, Enum):
    CLOUDWATCH = "cloudwatch"  # Daily BucketSizeBytes metrics, cheap but lagging
    S3 = "s3"                  # Lists every object, exact but slow on big buckets


class ObjectVersions(str, Enum):
    CURRENT = "current"
    ALL = "all"
    NON_CURRENT = "non-current"
    MULTIPART = "multipart"


@dataclass(frozen=True)
class ClientConfig:
    region: str = DEFAULT_REGION
    backend: Backend = Backend.S3

    # Only used by the S3 backend
    object_versions: ObjectVersions = ObjectVersions.CURRENT

    # Restrict discovery to one bucket (exact, case-sensitive match)
    bucket_name: Optional[str] = None

    # S3-compatible services (MinIO, Ceph, ...)
    endpoint_url: Optional[str] = None

    # MaxKeys / MaxUploads hint per list request (None = provider default)
    page_size: Optional[int] = None
