"""Global registry of browser macros.

Macros are opt-in extensions: named callables that every Browser exposes as
if they were methods. A macro receives the Browser as its first argument and
its return value is handed back to the caller, so macros that want to chain
should return the browser.

    @macro("scroll_to_footer")
    def scroll_to_footer(browser):
        return browser.scroll_to("footer")
"""

import logging
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

MacroFn = Callable[..., Any]


class MacroRegistry:
    """
    Registry of named browser macros.

    PATTERN: Singleton registry pattern
    GOTCHA: Macros must be registered before a browser calls them
    """

    _instance: Optional["MacroRegistry"] = None
    _macros: Dict[str, MacroFn] = {}

    def __new__(cls):
        """Ensure singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._macros = {}
        return cls._instance

    def register(self, name: str, fn: MacroFn) -> None:
        """
        Register a macro.

        Registering a name again replaces the previous macro.

        Args:
            name: Name the macro is called by
            fn: Callable taking the browser followed by call arguments

        Raises:
            ValueError: If the name is private or fn is not callable
        """
        if not name or name.startswith("_"):
            raise ValueError(f"Invalid macro name '{name}'.")
        if not callable(fn):
            raise ValueError(f"Macro '{name}' must be callable.")

        if name in self._macros:
            logger.warning(f"Replacing macro: {name}")

        self._macros[name] = fn
        logger.debug(f"Registered macro: {name}")

    def unregister(self, name: str) -> None:
        """
        Unregister a macro.

        Args:
            name: Name of macro to unregister
        """
        if name in self._macros:
            del self._macros[name]
            logger.debug(f"Unregistered macro: {name}")
        else:
            logger.warning(f"Macro '{name}' not found in registry")

    def get(self, name: str) -> Optional[MacroFn]:
        return self._macros.get(name)

    def has(self, name: str) -> bool:
        return name in self._macros

    def names(self) -> List[str]:
        return sorted(self._macros)

    def clear(self) -> None:
        """Clear all registered macros (for testing)."""
        self._macros.clear()


def macro(name: Optional[str] = None) -> Callable[[MacroFn], MacroFn]:
    """Decorator registering a function as a browser macro.

    Args:
        name: Macro name (defaults to the function name)
    """

    def decorator(fn: MacroFn) -> MacroFn:
        MacroRegistry().register(name or fn.__name__, fn)
        return fn

    return decorator
