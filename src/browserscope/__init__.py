"""Fluent browser automation for end-to-end tests.

This package provides a chainable Browser session over a synchronous
browser driver, including:
- Scoped selector resolution with named element shortcuts
- Page objects and reusable, selector-scoped components
- Nested scoping (with_/within) and iframe scoping (within_frame)
- Macros and delegation of unknown calls to components and pages
- A Playwright-backed driver
"""

from browserscope.binding import operation
from browserscope.browser import Browser
from browserscope.component import Component
from browserscope.config import BrowserConfig, configure, get_config, reset_config
from browserscope.delegation import MethodDelegator
from browserscope.driver import DriverHandle, ElementHandleLike, PlaywrightDriver
from browserscope.exceptions import (
    BrowserScopeError,
    ConfigurationError,
    ElementNotFoundError,
    NoSuchElementError,
    UnknownOperationError,
    VerificationError,
)
from browserscope.macros import MacroRegistry, macro
from browserscope.models import BrowserType, ScopeContext, Viewport
from browserscope.page import Page
from browserscope.resolver import ElementResolver

__all__ = [
    "Browser",
    "Page",
    "Component",
    "operation",
    "ElementResolver",
    "ScopeContext",
    "MethodDelegator",
    "MacroRegistry",
    "macro",
    "DriverHandle",
    "ElementHandleLike",
    "PlaywrightDriver",
    "BrowserConfig",
    "BrowserType",
    "Viewport",
    "configure",
    "get_config",
    "reset_config",
    "BrowserScopeError",
    "ConfigurationError",
    "ElementNotFoundError",
    "NoSuchElementError",
    "UnknownOperationError",
    "VerificationError",
]
