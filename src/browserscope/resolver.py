"""Scoped selector resolution.

The ElementResolver turns logical selectors into concrete CSS for one
ScopeContext and performs element lookups through the driver.

PATTERN: The resolver owns its context but never mutates it; every change
(new named elements, new prefix) swaps in a derived ScopeContext.
"""

import logging
from typing import Any, Dict, List, Optional

from .component import Component
from .driver import DriverHandle, ElementHandleLike
from .exceptions import ElementNotFoundError, NoSuchElementError
from .models.scope_models import ScopeContext

logger = logging.getLogger(__name__)


class ElementResolver:
    """Resolve selectors and find elements within a scope."""

    def __init__(
        self,
        driver: DriverHandle,
        prefix: Optional[str] = None,
        context: Optional[ScopeContext] = None,
    ):
        """Initialize the resolver.

        Args:
            driver: Driver used for element lookups
            prefix: Selector every resolved selector is nested under
            context: Full starting context (its prefix wins over `prefix`)
        """
        self.driver = driver
        self.context = context or ScopeContext(prefix=prefix or None)

    @property
    def prefix(self) -> Optional[str]:
        return self.context.prefix

    @prefix.setter
    def prefix(self, prefix: Optional[str]) -> None:
        self.context = self.context.with_prefix(prefix or None)

    @property
    def elements(self) -> Dict[str, str]:
        """Named elements visible in this scope (a copy)."""
        return dict(self.context.named_elements)

    def page_elements(self, elements: Dict[str, str]) -> "ElementResolver":
        """Replace the named elements visible in this scope.

        Args:
            elements: Logical name -> raw CSS selector

        Returns:
            The resolver, for chaining
        """
        self.context = self.context.with_elements(elements)
        return self

    def format(self, selector: Any) -> str:
        """Translate a selector into concrete CSS for this scope.

        Args:
            selector: Raw CSS, a named element, or a component (its root
                selector is used)

        Returns:
            Concrete CSS selector
        """
        if isinstance(selector, Component):
            selector = selector.selector()

        resolved = self.context.resolve(selector)
        logger.debug(f"Resolved selector [{selector}] -> [{resolved}]")
        return resolved

    def find_or_fail(self, selector: str) -> ElementHandleLike:
        """Find the element for a selector.

        Raises:
            ElementNotFoundError: If nothing matches the resolved selector
        """
        resolved = self.format(selector)

        try:
            return self.driver.find_element(resolved)
        except NoSuchElementError as e:
            raise ElementNotFoundError(selector, resolved) from e

    def find(self, selector: str) -> Optional[ElementHandleLike]:
        """Find the element for a selector, or None when nothing matches."""
        try:
            return self.find_or_fail(selector)
        except ElementNotFoundError:
            return None

    def find_all(self, selector: str) -> List[ElementHandleLike]:
        """Find every element matching a selector."""
        return list(self.driver.find_elements(self.format(selector)))
