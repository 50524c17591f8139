"""
mediabot-core - Health API Routes

/health - liveness, always 200 while the process serves requests
/ready  - readiness, 503 until the bot configuration is loaded and usable

Patterns Applied:
- Health Check Pattern with a HealthService class
- Pydantic response models
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from mediabot import __version__
from mediabot.api.dependencies import get_bot_config, get_error_classifier
from mediabot.classifiers import ErrorClassifierProtocol
from mediabot.config import BotConfig, diagnose_config
from mediabot.core.logging import SERVICE_NAME, get_logger

# Initialize router
router = APIRouter(tags=["health"])

# Get logger
logger = get_logger(__name__)


# =============================================================================
# Response Models
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    version: str
    service: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""
    status: str
    checks: dict[str, bool]


# =============================================================================
# Health Service
# =============================================================================


class HealthService:
    """Service class for health check operations."""

    def __init__(self, version: str = __version__):
        """Initialize health service.

        Args:
            version: Service version string
        """
        self._version = version

    def check_health(self) -> dict[str, Any]:
        """Check basic service health.

        Returns:
            Health status dictionary with status, version, service
        """
        return {
            "status": "healthy",
            "version": self._version,
            "service": SERVICE_NAME,
        }

    def check_readiness(
        self,
        config: BotConfig | None,
        classifier: ErrorClassifierProtocol | None,
    ) -> tuple[dict[str, Any], bool]:
        """Check if the bot can handle updates.

        Args:
            config: Bootstrapped configuration, None if not loaded
            classifier: Error classifier, None if not loaded

        Returns:
            Tuple of (readiness dict, is_ready bool)
        """
        checks = {
            "config_loaded": config is not None,
            "config_valid": config is not None and diagnose_config(config).ready,
            "error_classifier_loaded": classifier is not None,
        }

        is_ready = all(checks.values())
        result: dict[str, Any] = {
            "status": "ready" if is_ready else "not_ready",
            "checks": checks,
        }
        return result, is_ready


_health_service = HealthService()


def get_health_service() -> HealthService:
    """Get health service instance."""
    return _health_service


# =============================================================================
# Endpoints
# =============================================================================


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Basic health check endpoint for liveness probe",
)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    data = get_health_service().check_health()
    logger.debug("health_check", status=data["status"])
    return HealthResponse(**data)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={
        200: {"description": "Service is ready"},
        503: {"description": "Service is not ready"},
    },
    summary="Readiness Check",
    description="Readiness check endpoint; 503 while configuration is missing or invalid",
)
async def readiness_check(
    config: Annotated[BotConfig | None, Depends(get_bot_config)],
    classifier: Annotated[ErrorClassifierProtocol | None, Depends(get_error_classifier)],
) -> JSONResponse:
    """Readiness check endpoint.

    Returns:
        200 if ready, 503 if not ready
    """
    data, is_ready = get_health_service().check_readiness(config, classifier)

    status_code = status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE

    logger.debug("readiness_check", status=data["status"], is_ready=is_ready)
    return JSONResponse(content=data, status_code=status_code)
