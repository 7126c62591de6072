# sizer/s3.py
"""
Bucket sizes from listing every object in S3.

Exact, but one ListObjects call per 1000 keys, so large buckets take a
while. Sizes are summed page by page; the listing is never held in memory.
"""

import logging
from typing import Any, Iterator, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from s3du.config import DEFAULT_REGION, ClientConfig, ObjectVersions
from s3du.models import Bucket, Buckets
from s3du.sizer.base import BucketSizer
from s3du.sizer.errors import DiscoveryError, PaginationError, SizeComputationError
from s3du.sizer.pagination import iter_items, paginate, token_cursor, truncated_cursor

logger = logging.getLogger(__name__)

# Buckets created before the region-specific names existed report "EU"
_LEGACY_LOCATIONS = {"EU": "eu-west-1"}


def normalise_location(location: Optional[str]) -> str:
    """Turn a GetBucketLocation LocationConstraint into a region name."""
    if not location:
        return DEFAULT_REGION
    return _LEGACY_LOCATIONS.get(location, location)


class S3Sizer(BucketSizer):
    """Sizes buckets by enumerating objects, versions or multipart parts."""

    def __init__(self, config: ClientConfig, s3_client: Any = None) -> None:
        super().__init__(config)
        self.s3 = s3_client or boto3.client(
            "s3",
            region_name=self.region,
            endpoint_url=self.config.endpoint_url,
        )

    @property
    def object_versions(self) -> ObjectVersions:
        return self.config.object_versions

    def buckets(self) -> Buckets:
        """
        Return buckets listed in S3, filtered by:
          - the configured bucket name, if any
          - region, since objects can only be listed through the endpoint
            of the region that hosts the bucket
        """
        try:
            names = self._filter_names(self.list_buckets())
        except (BotoCoreError, ClientError, PaginationError) as e:
            raise DiscoveryError(f"Failed to list buckets: {e}") from e

        buckets: Buckets = []
        for name in names:
            region = self.bucket_region(name)

            if region != self.region:
                logger.debug(
                    "buckets: Skipping '%s' in '%s', client is in '%s'",
                    name,
                    region,
                    self.region,
                )
                continue

            buckets.append(Bucket(name=name, region=region))

        return buckets

    def list_buckets(self) -> list[str]:
        def fetch(token: Optional[str]) -> dict:
            if token:
                return self.s3.list_buckets(ContinuationToken=token)
            return self.s3.list_buckets()

        pages = paginate(fetch, token_cursor("ContinuationToken"))
        return [b["Name"] for b in iter_items(pages, "Buckets") if b.get("Name")]

    def bucket_region(self, name: str) -> str:
        try:
            response = self.s3.get_bucket_location(Bucket=name)
        except (BotoCoreError, ClientError) as e:
            raise DiscoveryError(f"Failed to get location of bucket '{name}': {e}") from e

        return normalise_location(response.get("LocationConstraint"))

    def bucket_size(self, bucket: Bucket) -> int:
        name = bucket.name
        logger.debug("bucket_size: Calculating size for '%s'", name)

        try:
            size = sum(self._sizes(name))
        except (BotoCoreError, ClientError, PaginationError) as e:
            raise SizeComputationError(name, str(e)) from e

        logger.debug("bucket_size: Calculated bucket size for '%s' is '%d'", name, size)
        return size

    def _sizes(self, bucket: str) -> Iterator[int]:
        """Yield the size of every entry selected by the version policy."""
        if self.object_versions == ObjectVersions.CURRENT:
            for obj in self.list_current_objects(bucket):
                yield obj.get("Size", 0)

        elif self.object_versions == ObjectVersions.ALL:
            for version in self.list_object_versions(bucket):
                yield version.get("Size", 0)

        elif self.object_versions == ObjectVersions.NON_CURRENT:
            for version in self.list_object_versions(bucket):
                if not version.get("IsLatest", False):
                    yield version.get("Size", 0)

        elif self.object_versions == ObjectVersions.MULTIPART:
            for upload in self.list_multipart_uploads(bucket):
                for part in self.list_parts(bucket, upload["Key"], upload["UploadId"]):
                    yield part.get("Size", 0)

    def _page_kwargs(self, size_key: str, **kwargs) -> dict:
        if self.config.page_size:
            kwargs[size_key] = self.config.page_size
        return kwargs

    def list_current_objects(self, bucket: str) -> Iterator[dict]:
        def fetch(token: Optional[str]) -> dict:
            kwargs = self._page_kwargs("MaxKeys", Bucket=bucket)
            if token:
                kwargs["ContinuationToken"] = token
            return self.s3.list_objects_v2(**kwargs)

        pages = paginate(fetch, truncated_cursor("NextContinuationToken"))
        return iter_items(pages, "Contents")

    def list_object_versions(self, bucket: str) -> Iterator[dict]:
        """Yield object versions. Delete markers are listed separately by S3 and skipped."""

        def fetch(markers: Optional[tuple]) -> dict:
            kwargs = self._page_kwargs("MaxKeys", Bucket=bucket)
            if markers:
                key_marker, version_id_marker = markers
                if key_marker:
                    kwargs["KeyMarker"] = key_marker
                if version_id_marker:
                    kwargs["VersionIdMarker"] = version_id_marker
            return self.s3.list_object_versions(**kwargs)

        pages = paginate(fetch, truncated_cursor("NextKeyMarker", "NextVersionIdMarker"))
        return iter_items(pages, "Versions")

    def list_multipart_uploads(self, bucket: str) -> Iterator[dict]:
        def fetch(markers: Optional[tuple]) -> dict:
            kwargs = self._page_kwargs("MaxUploads", Bucket=bucket)
            if markers:
                key_marker, upload_id_marker = markers
                if key_marker:
                    kwargs["KeyMarker"] = key_marker
                if upload_id_marker:
                    kwargs["UploadIdMarker"] = upload_id_marker
            return self.s3.list_multipart_uploads(**kwargs)

        pages = paginate(fetch, truncated_cursor("NextKeyMarker", "NextUploadIdMarker"))
        return iter_items(pages, "Uploads")

    def list_parts(self, bucket: str, key: str, upload_id: str) -> Iterator[dict]:
        def fetch(marker: Optional[int]) -> dict:
            kwargs = self._page_kwargs("MaxParts", Bucket=bucket, Key=key, UploadId=upload_id)
            if marker:
                kwargs["PartNumberMarker"] = marker
            return self.s3.list_parts(**kwargs)

        pages = paginate(fetch, truncated_cursor("NextPartNumberMarker"))
        return iter_items(pages, "Parts")
