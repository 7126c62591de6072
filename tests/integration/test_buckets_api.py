"""Integration tests for GET /api/v1/buckets and /api/v1/health."""

import pytest

from s3du import __version__
from s3du.core.settings import get_settings
from s3du.sizer import DiscoveryError, S3Sizer, SizeComputationError


@pytest.mark.integration
class TestHealthEndpoint:
    def test_health(self, client):
        body = client.get("/api/v1/health").json()
        assert body["status"] == "ok"
        assert body["app"] == "s3du-api"
        assert body["version"] == __version__
        assert body["backend"] == "s3"
        assert body["region"] == "us-east-1"

    def test_health_reports_configured_backend(self, client, monkeypatch):
        monkeypatch.setenv("S3DU_MODE", "cloudwatch")
        monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")
        get_settings.cache_clear()

        body = client.get("/api/v1/health").json()
        assert body["backend"] == "cloudwatch"
        assert body["region"] == "eu-west-1"


@pytest.mark.integration
class TestBucketsEndpoint:
    def test_s3_mode_sizes_test_bucket(self, client):
        resp = client.get("/api/v1/buckets", params={"mode": "s3"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["backend"] == "s3"
        assert body["region"] == "us-east-1"
        assert body["object_versions"] == "current"
        assert [b["name"] for b in body["buckets"]] == ["test-bucket"]
        assert body["buckets"][0]["size_bytes"] == 33792
        assert body["total_bytes"] == 33792

    def test_other_region_buckets_excluded(self, client, eu_bucket):
        body = client.get("/api/v1/buckets").json()
        assert eu_bucket not in [b["name"] for b in body["buckets"]]

    def test_region_parameter(self, client, eu_bucket):
        body = client.get("/api/v1/buckets", params={"region": "eu-west-1"}).json()

        assert [b["name"] for b in body["buckets"]] == [eu_bucket]
        assert body["total_bytes"] == 2048

    def test_bucket_filter(self, client, s3_mock):
        s3_mock.create_bucket(Bucket="other-bucket")

        body = client.get("/api/v1/buckets", params={"bucket": "other-bucket"}).json()

        assert [b["name"] for b in body["buckets"]] == ["other-bucket"]
        assert body["total_bytes"] == 0

    def test_cloudwatch_mode(self, client, cloudwatch_metrics):
        body = client.get("/api/v1/buckets", params={"mode": "cloudwatch"}).json()

        assert body["backend"] == "cloudwatch"
        assert body["buckets"] == [{
            "name": "cw-bucket",
            "region": "us-east-1",
            "storage_types": ["Glacier", "Standard"],
            "size_bytes": 4096,
            "error": None,
        }]
        assert body["total_bytes"] == 4096

    def test_invalid_mode_returns_422(self, client):
        assert client.get("/api/v1/buckets", params={"mode": "ftp"}).status_code == 422

    def test_invalid_object_versions_returns_422(self, client):
        assert client.get("/api/v1/buckets", params={"object_versions": "latest"}).status_code == 422

    def test_discovery_failure_returns_502(self, client, monkeypatch):
        def fail(self):
            raise DiscoveryError("Failed to list buckets: AccessDenied")

        monkeypatch.setattr(S3Sizer, "buckets", fail)

        resp = client.get("/api/v1/buckets")

        assert resp.status_code == 502
        assert "AccessDenied" in resp.json()["detail"]

    def test_bucket_failure_reported_per_bucket(self, client, monkeypatch):
        def fail(self, bucket):
            raise SizeComputationError(bucket.name, "InternalError")

        monkeypatch.setattr(S3Sizer, "bucket_size", fail)

        body = client.get("/api/v1/buckets").json()

        assert body["buckets"][0]["size_bytes"] == 0
        assert "InternalError" in body["buckets"][0]["error"]
        assert body["total_bytes"] == 0

    def test_api_prefix_from_env(self, monkeypatch):
        from fastapi.testclient import TestClient
        from s3du.main import create_app

        monkeypatch.setenv("API_PREFIX", "/api/v2")
        with TestClient(create_app()) as tc:
            assert tc.get("/api/v2/health").status_code == 200
