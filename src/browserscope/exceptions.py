"""Exception taxonomy for browser sessions.

Every failure raised by this package derives from BrowserScopeError. Errors
coming from the underlying driver (navigation failures, stale elements,
script errors) are not wrapped and reach the caller untouched.
"""

from typing import Optional


class BrowserScopeError(Exception):
    """Base class for all browserscope errors."""

    pass


class NoSuchElementError(BrowserScopeError):
    """Raised by a driver when a CSS selector matches no element."""

    def __init__(self, selector: str):
        self.selector = selector
        super().__init__(f"No element matches selector [{selector}].")


class ElementNotFoundError(BrowserScopeError):
    """Raised when a scoped lookup resolves to zero elements.

    Attributes:
        selector: Selector as written by the caller (may be a named element)
        resolved: Concrete CSS selector handed to the driver
    """

    def __init__(self, selector: str, resolved: Optional[str] = None):
        self.selector = selector
        self.resolved = resolved or selector
        if self.resolved != selector:
            message = (
                f"Unable to locate element [{selector}] "
                f"(resolved to [{self.resolved}])."
            )
        else:
            message = f"Unable to locate element [{selector}]."
        super().__init__(message)


class UnknownOperationError(BrowserScopeError, AttributeError):
    """Raised when no macro, component or page provides an operation.

    Subclasses AttributeError so hasattr() and getattr() with a default
    behave normally on Browser instances.
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Call to undefined method [{operation}].")


class VerificationError(BrowserScopeError, AssertionError):
    """Raised when a browser assertion or a page/component check fails."""

    pass


class ConfigurationError(BrowserScopeError):
    """Raised on invalid use of the process-wide configuration."""

    pass
