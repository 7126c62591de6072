from fastapi import APIRouter

from s3du.api.routes.buckets import router as buckets_router
from s3du.api.routes.health import router as health_router


api_router = APIRouter()
api_router.include_router(health_router, tags=["health"])
api_router.include_router(buckets_router, prefix="/buckets", tags=["buckets"])
