"""Dispatch of operations a Browser does not define itself.

Resolution order for an operation name:

1. a macro from the global MacroRegistry,
2. an operation of the active component,
3. an operation of the active page.

The component is checked before the page because it is the narrower scope.
"""

import logging
from typing import Any, Callable, Optional

from .exceptions import UnknownOperationError
from .macros import MacroRegistry

logger = logging.getLogger(__name__)


class MethodDelegator:
    """Resolve unknown Browser operations against macros, component and page."""

    def __init__(self, registry: Optional[MacroRegistry] = None):
        self.registry = registry or MacroRegistry()

    def resolve(self, browser: Any, name: str) -> Callable[..., Any]:
        """Return a callable performing operation `name` for `browser`.

        Args:
            browser: Browser the operation is performed on
            name: Operation name

        Returns:
            Callable accepting the operation's arguments

        Raises:
            UnknownOperationError: If no macro, component or page provides it
        """
        if name.startswith("_"):
            raise UnknownOperationError(name)

        fn = self.registry.get(name)
        if fn is not None:
            logger.debug(f"Dispatching [{name}] to macro")

            def call_macro(*args: Any, **kwargs: Any) -> Any:
                return fn(browser, *args, **kwargs)

            return call_macro

        for target in (browser.component, browser.page):
            if target is None:
                continue

            method = target.get_operation(name)
            if method is not None:
                logger.debug(f"Dispatching [{name}] to {type(target).__name__}")
                return self._chain(browser, method)

        raise UnknownOperationError(name)

    @staticmethod
    def _chain(browser: Any, method: Callable[..., Any]) -> Callable[..., Any]:
        def call_operation(*args: Any, **kwargs: Any) -> Any:
            method(browser, *args, **kwargs)
            return browser

        return call_operation
