from typing import Any

from s3du.config import Backend, ClientConfig
from s3du.sizer.base import BucketSizer
from s3du.sizer.cloudwatch import CloudWatchSizer
from s3du.sizer.errors import (
    DiscoveryError,
    PaginationError,
    SizeComputationError,
    SizerError,
)
from s3du.sizer.runner import BucketSize, size_buckets, total_size
from s3du.sizer.s3 import S3Sizer


def create_sizer(config: ClientConfig, client: Any = None) -> BucketSizer:
    """Return the sizer for ``config.backend``, optionally around an existing boto3 client."""
    if config.backend == Backend.CLOUDWATCH:
        return CloudWatchSizer(config, cloudwatch_client=client)
    return S3Sizer(config, s3_client=client)


__all__ = [
    "BucketSize",
    "BucketSizer",
    "CloudWatchSizer",
    "DiscoveryError",
    "PaginationError",
    "S3Sizer",
    "SizeComputationError",
    "SizerError",
    "create_sizer",
    "size_buckets",
    "total_size",
]
