"""
Job board matching API.

Semantic job search and CV-to-job matching over PostgreSQL with pgvector.
Run locally with ``python -m app.main`` or ``uvicorn app.main:app``.
"""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import create_api_router
from app.core.config import Settings, get_settings
from app.database import (
    get_sqlmodel_db_manager,
    init_sqlmodel_database,
    shutdown_sqlmodel_database,
)
from app.infrastructure.providers import reset_all_providers
from app.infrastructure.providers.ai_provider import get_embedding_service
from app.infrastructure.providers.search_provider import get_native_vector_index


def configure_logging(settings: Settings) -> None:
    """Route structlog output as JSON in deployments and as coloured text on a terminal."""
    log_format = settings.LOG_FORMAT.lower()
    if log_format == "auto":
        log_format = "console" if sys.stdout.isatty() else "json"
    renderer = (
        structlog.dev.ConsoleRenderer()
        if log_format == "console"
        else structlog.processors.JSONRenderer()
    )
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging(get_settings())

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info("Job board matching API starting", version=app.version, environment=settings.ENVIRONMENT)

    try:
        await init_sqlmodel_database(settings)
    except Exception as e:
        logger.error("Database unavailable at startup", error=str(e))
        if settings.is_production():
            sys.exit(1)

    if settings.EMBEDDING_PRELOAD:
        try:
            await (await get_embedding_service()).warm_up()
        except Exception as e:
            # Requests retry the load; keyword search keeps working meanwhile
            logger.error("Embedding model preload failed", error=str(e))

    yield

    logger.info("Job board matching API stopping")
    try:
        await shutdown_sqlmodel_database()
        await reset_all_providers()
    except Exception as e:
        logger.error("Shutdown cleanup failed", error=str(e))


async def _probe(check: Callable[[], Awaitable[Dict[str, Any]]]) -> Dict[str, Any]:
    try:
        return await check()
    except Exception as e:
        return {"status": "unhealthy", "error": str(e)}


async def _embedding_health() -> Dict[str, Any]:
    return await (await get_embedding_service()).check_health()


async def _vector_index_health() -> Dict[str, Any]:
    return await (await get_native_vector_index()).check_health()


def create_app() -> FastAPI:
    settings = get_settings()
    expose_docs = not settings.is_production()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Semantic job search and CV-to-job matching",
        version=settings.APP_VERSION,
        docs_url="/docs" if expose_docs else None,
        redoc_url="/redoc" if expose_docs else None,
        openapi_url="/openapi.json" if expose_docs else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_api_router())

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "version": app.version,
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/health/detailed")
    async def detailed_health_check():
        """Database, embedding model and vector index status."""
        services = {
            "database": await get_sqlmodel_db_manager().health_check(),
            "embedding": await _probe(_embedding_health),
            "vector_index": await _probe(_vector_index_health),
        }

        # Only the database is fatal; the other services degrade to keyword or brute-force retrieval
        if services["database"].get("status") != "healthy":
            status = "unhealthy"
        elif any(service.get("status") == "unhealthy" for service in services.values()):
            status = "degraded"
        else:
            status = "healthy"

        return {
            "status": status,
            "version": app.version,
            "environment": settings.ENVIRONMENT,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "services": services,
        }

    @app.get("/")
    async def root():
        return {
            "message": settings.APP_NAME,
            "version": app.version,
            "docs_url": "/docs" if expose_docs else None,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_config=None,
    )
