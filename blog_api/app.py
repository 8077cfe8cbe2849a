"""
FastAPI application entry point for the blog posts API.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from blog_api.config import get_settings
from blog_api.dependencies import close_db_client, get_db_client
from blog_api.errors import setup_error_handling
from blog_api.routes import router


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Opens the configured store unless run_server already connected one.
    get_db_client()
    yield
    close_db_client()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Blog Posts API", version="0.1.0", lifespan=lifespan)
    setup_error_handling(app)
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()
