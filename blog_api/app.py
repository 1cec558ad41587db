"""FastAPI application for the blog content API."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blog_api.core.config import Settings, get_settings
from blog_api.core.errors import BlogError
from blog_api.core.logging import setup_logging
from blog_api.dependencies import Services, build_services
from blog_api.routers import categories as categories_router
from blog_api.routers import comments as comments_router
from blog_api.routers import posts as posts_router

logger = logging.getLogger(__name__)


def _error_response(err: BlogError) -> JSONResponse:
    return JSONResponse({"ok": False, "error": err.code, "message": err.message}, status_code=err.status_code)


def create_app(settings: Optional[Settings] = None, services: Optional[Services] = None) -> FastAPI:
    """Factory compatible with ``uvicorn --factory blog_api.app:create_app``."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="Blog Content API")
    app.state.settings = settings
    app.state.services = services or build_services(settings)
    logger.info("Blog API started with %s storage", settings.storage_backend)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )

    @app.exception_handler(BlogError)
    async def blog_error_handler(request: Request, exc: BlogError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error_response(exc)

    @app.get("/health")
    def health():
        return {"status": "ok", "backend": settings.storage_backend}

    app.include_router(posts_router.router, prefix=settings.api_prefix)
    app.include_router(comments_router.router, prefix=settings.api_prefix)
    app.include_router(categories_router.router, prefix=settings.api_prefix)
    return app
