# sizer/cloudwatch.py
"""
Bucket sizes from the CloudWatch ``AWS/S3`` ``BucketSizeBytes`` metric.

S3 publishes this metric once a day per bucket and storage type, so sizes
lag by up to a day but cost one API call per bucket. Only
``StandardStorage`` is summed by bucket_size(); other tiers need their own
tier_size() query.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from s3du.config import ClientConfig
from s3du.models import Bucket, BucketMetrics, Buckets, bucket_metrics_from, classify
from s3du.sizer.base import BucketSizer
from s3du.sizer.errors import DiscoveryError, PaginationError, SizeComputationError
from s3du.sizer.pagination import iter_items, paginate, token_cursor

logger = logging.getLogger(__name__)

S3_BUCKET_SIZE_BYTES = "BucketSizeBytes"
S3_NAMESPACE = "AWS/S3"
STANDARD_STORAGE = "StandardStorage"

_ONE_DAY = timedelta(days=1)


class CloudWatchSizer(BucketSizer):
    """Sizes buckets from pre-aggregated CloudWatch storage metrics."""

    def __init__(self, config: ClientConfig, cloudwatch_client: Any = None) -> None:
        super().__init__(config)
        self.cloudwatch = cloudwatch_client or boto3.client("cloudwatch", region_name=self.region)

    def buckets(self) -> Buckets:
        """
        Return buckets that have BucketSizeBytes metrics.

        CloudWatch metrics are regional, so every bucket found here already
        lives in the configured region.
        """
        try:
            metrics = self.bucket_metrics()
        except (BotoCoreError, ClientError, PaginationError) as e:
            raise DiscoveryError(f"Failed to list {S3_NAMESPACE} metrics: {e}") from e

        buckets: Buckets = []
        for name in self._filter_names(metrics):
            buckets.append(Bucket(
                name=name,
                region=self.region,
                storage_types=frozenset(classify(s) for s in metrics[name]),
            ))

        logger.debug("buckets: Found %d bucket(s) in '%s'", len(buckets), self.region)
        return buckets

    def bucket_metrics(self) -> BucketMetrics:
        """Sweep the metric catalogue and group storage types by bucket."""

        def fetch(token: Optional[str]) -> dict:
            kwargs = {"Namespace": S3_NAMESPACE, "MetricName": S3_BUCKET_SIZE_BYTES}
            if token:
                kwargs["NextToken"] = token
            return self.cloudwatch.list_metrics(**kwargs)

        pages = paginate(fetch, token_cursor("NextToken"))
        return bucket_metrics_from(iter_items(pages, "Metrics"))

    def bucket_size(self, bucket: Bucket) -> int:
        return self.tier_size(bucket, STANDARD_STORAGE)

    def tier_size(self, bucket: Bucket, storage_type: str) -> int:
        """
        Return the latest daily BucketSizeBytes value for one storage type.

        Buckets with no published datapoint yet (new or empty buckets) are
        reported as 0 bytes.
        """
        name = bucket.name
        logger.debug("tier_size: Calculating '%s' size for '%s'", storage_type, name)

        now = datetime.now(timezone.utc)
        try:
            response = self.cloudwatch.get_metric_statistics(
                Namespace=S3_NAMESPACE,
                MetricName=S3_BUCKET_SIZE_BYTES,
                Dimensions=[
                    {"Name": "BucketName", "Value": name},
                    {"Name": "StorageType", "Value": storage_type},
                ],
                StartTime=now - _ONE_DAY,
                EndTime=now,
                Period=int(_ONE_DAY.total_seconds()),
                Statistics=["Average"],
            )
        except (BotoCoreError, ClientError) as e:
            raise SizeComputationError(name, str(e)) from e

        datapoints = response.get("Datapoints", [])
        if not datapoints:
            logger.debug("tier_size: No datapoints for '%s' yet", name)
            return 0

        latest = max(datapoints, key=lambda d: d["Timestamp"])
        size = int(latest["Average"])

        logger.debug("tier_size: Calculated size for '%s' is '%d'", name, size)
        return size
