from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from s3du import __version__
from s3du.api.router import api_router
from s3du.core.settings import get_settings


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="s3du API",
        version=__version__,
        description="Space used by S3 buckets, per bucket and storage tier.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.api_prefix)
    return app
