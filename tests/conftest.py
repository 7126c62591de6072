"""
Shared test fixtures for unit and integration tests.

Every test runs inside moto's mock_aws, so boto3 clients created by
the sizers (or by the CLI and API) talk to an isolated in-memory AWS.
CloudWatch metric catalogues and exact paging sequences are driven with
botocore's Stubber instead, see the unit tests.
"""

import boto3
import pytest
from fastapi.testclient import TestClient
from moto import mock_aws

from s3du.main import create_app


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Set fake AWS credentials so boto3 clients don't fail to initialize."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_REGION", raising=False)
    for name in ("S3DU_MODE", "S3DU_OBJECT_VERSIONS", "S3DU_ENDPOINT_URL", "S3DU_MAX_WORKERS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def s3_mock(aws_credentials):
    """
    Wrap every test in a moto mock with one populated bucket.

    test-bucket (us-east-1) holds file1 (1024 bytes) and file2 (32768 bytes),
    33792 bytes in total.
    """
    with mock_aws():
        s3 = boto3.client("s3", region_name="us-east-1")
        s3.create_bucket(Bucket="test-bucket")
        s3.put_object(Bucket="test-bucket", Key="file1", Body=b"x" * 1024)
        s3.put_object(Bucket="test-bucket", Key="file2", Body=b"x" * 32768)
        yield s3


@pytest.fixture()
def eu_bucket(s3_mock):
    """A bucket hosted in eu-west-1 holding one 2048 byte object."""
    eu = boto3.client("s3", region_name="eu-west-1")
    eu.create_bucket(
        Bucket="eu-bucket",
        CreateBucketConfiguration={"LocationConstraint": "eu-west-1"},
    )
    eu.put_object(Bucket="eu-bucket", Key="data.bin", Body=b"x" * 2048)
    return "eu-bucket"


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Clear the lru_cache on get_settings() so monkeypatched env vars take effect."""
    from s3du.core.settings import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def client():
    with TestClient(create_app(), raise_server_exceptions=True) as tc:
        yield tc


@pytest.fixture()
def cloudwatch_metrics(monkeypatch):
    """
    Fixed CloudWatch answers for CLI and API tests: cw-bucket with
    StandardStorage and GlacierStorage series, 4096 bytes of StandardStorage.
    """
    from s3du.sizer import CloudWatchSizer

    monkeypatch.setattr(
        CloudWatchSizer,
        "bucket_metrics",
        lambda self: {"cw-bucket": ["StandardStorage", "GlacierStorage"]},
    )
    monkeypatch.setattr(CloudWatchSizer, "tier_size", lambda self, bucket, storage_type: 4096)
