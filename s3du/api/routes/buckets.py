import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from s3du.config import Backend, ObjectVersions
from s3du.core.settings import get_settings
from s3du.models import SizeReport
from s3du.report import build_report
from s3du.sizer import DiscoveryError, create_sizer, size_buckets

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=SizeReport)
def bucket_sizes(
    mode: Optional[Backend] = None,
    object_versions: Optional[ObjectVersions] = None,
    bucket: Optional[str] = Query(default=None, min_length=1),
    region: Optional[str] = Query(default=None, min_length=1),
) -> SizeReport:
    settings = get_settings()
    config = settings.client_config(
        region=region,
        backend=mode,
        object_versions=object_versions,
        bucket_name=bucket,
    )
    sizer = create_sizer(config)

    try:
        buckets = sizer.buckets()
    except DiscoveryError as e:
        logger.error("%s", e)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e

    results = size_buckets(
        sizer,
        buckets,
        max_workers=settings.max_workers,
        skip_errors=True,
    )
    return build_report(config, results)
