from s3du.models.bucket import Bucket, BucketMetrics, Buckets, bucket_metrics_from
from s3du.models.contracts import BucketSizeModel, HealthResponse, SizeReport
from s3du.models.storage_class import (
    StorageClass,
    StorageClassValue,
    UnknownStorageClass,
    classify,
    to_display_string,
)

__all__ = [
    "Bucket",
    "BucketMetrics",
    "BucketSizeModel",
    "Buckets",
    "HealthResponse",
    "SizeReport",
    "StorageClass",
    "StorageClassValue",
    "UnknownStorageClass",
    "bucket_metrics_from",
    "classify",
    "to_display_string",
]
