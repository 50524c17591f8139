"""
mediabot-core - Custom Exceptions

Namespaced exceptions so nothing shadows builtins like ConnectionError.
"""


class MediaBotError(Exception):
    """Base exception for mediabot-core.

    All custom exceptions inherit from this base class.
    """
    pass


class ConfigurationError(MediaBotError):
    """Raised when configuration is invalid or missing."""
    pass
