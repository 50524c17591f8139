"""
FastAPI dependencies exposing the objects built once in the lifespan handler.

Tests replace these through ``app.dependency_overrides``.
"""

from fastapi import Request

from mediabot.classifiers import ErrorClassifierProtocol
from mediabot.config import BotConfig


def get_bot_config(request: Request) -> BotConfig | None:
    """Return the process-wide BotConfig, None before startup completed."""
    return getattr(request.app.state, "bot_config", None)


def get_error_classifier(request: Request) -> ErrorClassifierProtocol | None:
    """Return the process-wide error classifier, None before startup completed."""
    return getattr(request.app.state, "error_classifier", None)
