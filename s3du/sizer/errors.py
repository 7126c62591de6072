"""
Exceptions raised by the bucket sizers.
"""


class SizerError(Exception):
    """Base class for every sizing failure."""


class DiscoveryError(SizerError):
    """Listing buckets, or resolving a bucket's region, failed."""


class SizeComputationError(SizerError):
    """A bucket's size couldn't be computed."""

    def __init__(self, bucket: str, reason: str):
        super().__init__(f"Failed to size bucket '{bucket}': {reason}")
        self.bucket = bucket


class PaginationError(SizerError):
    """A paginated listing can't be followed to the end."""
