"""
mediabot-core - Service Settings

Runtime knobs for the service shell (host, port, logging). These are read
from MEDIABOT_-prefixed environment variables only; the bot's own settings
(token, webhook, limits, ...) go through EnvLoader and ConfigResolver.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service shell settings loaded from environment variables.

    All settings can be overridden via environment variables with MEDIABOT_ prefix.
    Example: MEDIABOT_PORT=8090, MEDIABOT_LOG_JSON=false
    """

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8090

    # Application metadata
    service_name: str = "mediabot-core"
    version: str = "0.1.0"
    environment: str = "development"

    # Logging configuration
    log_level: str = "INFO"
    log_json: bool = True

    # Bot configuration discovery
    document_root: str | None = None
    error_catalog_path: str | None = None
    create_directories: bool = True

    model_config = SettingsConfigDict(
        env_prefix="MEDIABOT_",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get service settings instance.

    Returns:
        Settings instance with values from environment
    """
    return Settings()
