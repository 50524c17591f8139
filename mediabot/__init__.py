"""mediabot-core: configuration and failure classification for the media bot.

This package provides the pieces every handler of the download bot leans on:
- Environment file discovery and parsing
- Precedence-ordered configuration resolution into a frozen BotConfig
- Classification of upstream HTTP failures into user-facing messages
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
