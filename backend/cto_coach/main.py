"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cto_coach.api.dependencies import get_cached_config, get_container_dependency
from cto_coach.api.middleware import ExceptionHandlerMiddleware, RequestLoggingMiddleware
from cto_coach.api.routes import health_router
from cto_coach.api.routes import router as api_router
from cto_coach.core.logging import setup_logging

logger = structlog.get_logger()

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Resolved through the dependency so test overrides apply
    container = get_container_dependency()
    config = container.config()

    setup_logging(
        log_level=config.log_level,
        json_format=not config.debug,
        log_to_file=config.log_to_file,
        log_dir=config.log_dir,
    )

    container.wire(modules=["cto_coach.api.routes"])

    logger.info(
        "application_starting",
        app_name=config.app_name,
        llm_provider=config.llm.provider,
        llm_model=config.llm.model,
        store_backend=config.store.backend,
    )

    Path(config.upload.upload_dir).mkdir(parents=True, exist_ok=True)

    store = container.store()
    await store.initialize()

    logger.info(
        "container_initialized",
        store=type(store).__name__,
        upload_dir=config.upload.upload_dir,
    )

    yield

    logger.info("application_shutting_down")
    await store.close()
    container.unwire()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_cached_config()

    app = FastAPI(
        title=config.app_name,
        description="Knowledge-base chat assistant for engineering leadership questions",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(ExceptionHandlerMiddleware)

    app.include_router(api_router, prefix="/api")
    app.include_router(health_router)

    @app.get("/")
    async def root():
        return {
            "name": config.app_name,
            "version": VERSION,
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    config = get_cached_config()
    uvicorn.run(
        "cto_coach.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
    )
