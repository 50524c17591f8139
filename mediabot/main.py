"""
mediabot-core - Main Application Entry Point

- FastAPI app with lifespan handler
- uvicorn mediabot.main:app starts successfully

The lifespan handler is the single initialization point of the bot
configuration: it loads the environment file, builds the BotConfig once and
keeps it on app.state for the lifetime of the process.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from mediabot.api.diagnostics import router as diagnostics_router
from mediabot.api.health import router as health_router
from mediabot.classifiers import ErrorClassifier
from mediabot.config import EnvLoader, bootstrap_config
from mediabot.core.config import get_settings
from mediabot.core.logging import configure_logging, get_logger

# Get settings
settings = get_settings()

# Configure logging ONCE at module load
configure_logging(
    log_level=settings.log_level,
    json_output=settings.log_json,
)

logger = get_logger(__name__)


# =============================================================================
# Lifespan Context Manager
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager for startup/shutdown events."""
    # =========================================================================
    # STARTUP
    # =========================================================================
    logger.info(
        "startup",
        service=settings.service_name,
        version=settings.version,
        environment=settings.environment,
    )

    bot_config = bootstrap_config(
        loader=EnvLoader(document_root=settings.document_root),
    )
    if settings.create_directories:
        bot_config.directories.ensure_exists()

    if settings.error_catalog_path:
        error_classifier = ErrorClassifier.from_yaml(Path(settings.error_catalog_path))
    else:
        error_classifier = ErrorClassifier()

    app.state.bot_config = bot_config
    app.state.error_classifier = error_classifier

    yield

    # =========================================================================
    # SHUTDOWN
    # =========================================================================
    logger.info("shutdown", service=settings.service_name)


# =============================================================================
# FastAPI Application
# =============================================================================


app = FastAPI(
    title="mediabot-core",
    description="Configuration and failure classification for the media download bot",
    version=settings.version,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
    lifespan=lifespan,
)

# Include routers
app.include_router(health_router)
app.include_router(diagnostics_router)


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Root endpoint pointing to the docs."""
    return {
        "service": settings.service_name,
        "version": settings.version,
        "docs": "/docs",
    }
