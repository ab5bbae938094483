"""Browser configuration module."""

from .browser_config import (
    BrowserConfig,
    configure,
    get_config,
    reset_config,
)

__all__ = [
    "BrowserConfig",
    "configure",
    "get_config",
    "reset_config",
]
