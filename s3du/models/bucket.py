# models/bucket.py
from dataclasses import dataclass
from typing import Iterable, Optional

from s3du.models.storage_class import StorageClassValue, to_display_string

# Bucket name -> StorageType labels seen on that bucket's metric series
BucketMetrics = dict[str, list[str]]


@dataclass
class Bucket:
    """A bucket discovered by a sizer, ready to be passed to bucket_size()."""

    name: str
    region: Optional[str] = None

    # Only filled in by the CloudWatch backend
    storage_types: Optional[frozenset[StorageClassValue]] = None

    def storage_type_names(self) -> list[str]:
        if not self.storage_types:
            return []
        return sorted(to_display_string(s) for s in self.storage_types)


# Discovery order, not sorted
Buckets = list[Bucket]


def bucket_metrics_from(metrics: Iterable[dict]) -> BucketMetrics:
    """
    Group CloudWatch metric series by their BucketName dimension.

    A single series resembles::

        {
            "Namespace": "AWS/S3",
            "MetricName": "BucketSizeBytes",
            "Dimensions": [
                {"Name": "StorageType", "Value": "StandardStorage"},
                {"Name": "BucketName", "Value": "some-bucket-name"},
            ],
        }

    StorageType values accumulate per bucket in the order they're seen,
    duplicates included. Series without dimensions, or without a
    BucketName, can't be attributed to a bucket and are skipped.
    """
    bucket_metrics: BucketMetrics = {}

    for metric in metrics:
        dimensions = metric.get("Dimensions")
        if not dimensions:
            continue

        name = None
        storage_types = []
        for dimension in dimensions:
            if dimension["Name"] == "BucketName":
                name = dimension["Value"]
            elif dimension["Name"] == "StorageType":
                storage_types.append(dimension["Value"])

        if name is None:
            continue

        bucket_metrics.setdefault(name, []).extend(storage_types)

    return bucket_metrics
