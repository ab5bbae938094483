"""Data models for browser sessions and selector scoping."""

from .browser_models import BrowserType, Viewport
from .scope_models import ScopeContext

__all__ = [
    "BrowserType",
    "Viewport",
    "ScopeContext",
]
