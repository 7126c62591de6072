# sizer/runner.py
"""
Sizes many buckets concurrently.

bucket_size() calls don't depend on each other, so they run on a thread
pool sharing one sizer (and its boto3 clients, which are thread-safe).
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Iterable, Optional

from s3du.models import Bucket
from s3du.sizer.base import BucketSizer
from s3du.sizer.errors import SizeComputationError

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


@dataclass
class BucketSize:
    bucket: Bucket
    size: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def size_buckets(
    sizer: BucketSizer,
    buckets: Iterable[Bucket],
    max_workers: int = DEFAULT_MAX_WORKERS,
    timeout: Optional[float] = None,
    skip_errors: bool = False,
) -> list[BucketSize]:
    """
    Size every bucket and return results in the order buckets were given.

    Args:
        sizer: Backend used for every bucket
        buckets: Buckets returned by sizer.buckets()
        max_workers: Thread pool size
        timeout: Seconds allowed for the whole run (None = no limit)
        skip_errors: Record a failed bucket and carry on instead of raising

    Raises:
        SizeComputationError: A bucket failed and skip_errors is False
        TimeoutError: The run took longer than timeout; unfinished work is
            cancelled and nothing is returned
    """
    buckets = list(buckets)
    results: list[Optional[BucketSize]] = [None] * len(buckets)

    executor = ThreadPoolExecutor(max_workers=max(1, max_workers))
    try:
        futures = {
            executor.submit(sizer.bucket_size, bucket): i
            for i, bucket in enumerate(buckets)
        }

        for future in as_completed(futures, timeout=timeout):
            i = futures[future]
            bucket = buckets[i]
            try:
                results[i] = BucketSize(bucket=bucket, size=future.result())
            except SizeComputationError as e:
                if not skip_errors:
                    raise
                logger.warning("%s", e)
                results[i] = BucketSize(bucket=bucket, error=str(e))
    finally:
        # Drop anything still queued when we bail out early
        executor.shutdown(wait=False, cancel_futures=True)

    return [r for r in results if r is not None]


def total_size(results: Iterable[BucketSize]) -> int:
    return sum(r.size for r in results if r.ok)
