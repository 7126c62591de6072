"""s3du: report the space used by S3 buckets, broken down by storage tier."""

__version__ = "1.2.0"
