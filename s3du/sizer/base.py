# sizer/base.py
from abc import ABC, abstractmethod
from typing import Iterable

from s3du.config import ClientConfig
from s3du.models import Bucket, Buckets


class BucketSizer(ABC):
    """
    Common interface of the CloudWatch and S3 backends.

    Callers discover buckets once with buckets(), then call bucket_size()
    for each of them. bucket_size() only reads its own request/response
    data, so it's safe to call from several threads for distinct buckets.
    """

    def __init__(self, config: ClientConfig) -> None:
        self.config = config

    @property
    def region(self) -> str:
        return self.config.region

    @abstractmethod
    def buckets(self) -> Buckets:
        """Return the buckets this client is able to size."""

    @abstractmethod
    def bucket_size(self, bucket: Bucket) -> int:
        """Return the size of ``bucket`` in bytes."""

    def _filter_names(self, names: Iterable[str]) -> list[str]:
        """Apply the single-bucket filter, keeping discovery order."""
        wanted = self.config.bucket_name
        if wanted is None:
            return list(names)
        return [name for name in names if name == wanted]
