from datetime import datetime, timezone
from typing import Iterable

from s3du.config import ClientConfig
from s3du.models import BucketSizeModel, SizeReport
from s3du.sizer import BucketSize, total_size


def build_report(config: ClientConfig, results: Iterable[BucketSize]) -> SizeReport:
    results = list(results)
    return SizeReport(
        backend=config.backend,
        region=config.region,
        object_versions=config.object_versions,
        generated_at=datetime.now(timezone.utc),
        buckets=[
            BucketSizeModel(
                name=r.bucket.name,
                region=r.bucket.region,
                storage_types=r.bucket.storage_type_names(),
                size_bytes=r.size,
                error=r.error,
            )
            for r in results
        ],
        total_bytes=total_size(results),
    )
