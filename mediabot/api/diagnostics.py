"""
mediabot-core - Configuration Diagnostics Route

GET /config returns the masked configuration report, so operators can check
which settings were picked up without exposing the secrets themselves.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from mediabot.api.dependencies import get_bot_config
from mediabot.config import BotConfig, diagnose_config
from mediabot.core.logging import get_logger

router = APIRouter(tags=["diagnostics"])

logger = get_logger(__name__)


class ConfigEntryResponse(BaseModel):
    """Masked configuration value."""
    key: str
    masked: str
    is_default: bool


class ConfigReportResponse(BaseModel):
    """Configuration diagnostics report."""
    ready: bool
    entries: list[ConfigEntryResponse]
    admin_ids: list[int]
    api_versions: dict[str, str]
    critical: list[str]
    warnings: list[str]


@router.get(
    "/config",
    response_model=ConfigReportResponse,
    responses={503: {"description": "Configuration not loaded"}},
    summary="Configuration Diagnostics",
    description="Masked view of the resolved bot configuration and its issues",
)
async def config_report(
    config: Annotated[BotConfig | None, Depends(get_bot_config)],
) -> ConfigReportResponse:
    """Return the masked configuration report."""
    if config is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Configuration not loaded",
        )

    report = diagnose_config(config)
    logger.debug(
        "config_report",
        ready=report.ready,
        critical=len(report.critical),
        warnings=len(report.warnings),
    )
    return ConfigReportResponse(
        ready=report.ready,
        entries=[
            ConfigEntryResponse(key=e.key, masked=e.masked, is_default=e.is_default)
            for e in report.entries
        ],
        admin_ids=list(report.admin_ids),
        api_versions={
            "default": config.api_versions.default,
            "youtube": config.api_versions.youtube,
            "aio": config.api_versions.aio,
        },
        critical=list(report.critical),
        warnings=list(report.warnings),
    )
