"""Selector scope snapshot.

A ScopeContext describes *where* a browser session operates: an optional
selector prefix that every resolved selector is nested under, and the named
elements (short logical names mapped to raw CSS) visible in that scope.

Contexts are immutable. Deriving a child scope always produces a new
context, so a child never changes what its parent resolves.
"""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ScopeContext(BaseModel):
    """Immutable {prefix, named elements} snapshot."""

    model_config = ConfigDict(frozen=True)

    prefix: Optional[str] = Field(
        default=None, description="Selector fragment prepended to every selector"
    )
    named_elements: Dict[str, str] = Field(
        default_factory=dict, description="Logical name -> raw CSS selector"
    )

    def with_prefix(self, prefix: Optional[str]) -> "ScopeContext":
        """Return a copy scoped under a different prefix."""
        return ScopeContext(prefix=prefix, named_elements=dict(self.named_elements))

    def with_elements(self, elements: Dict[str, str]) -> "ScopeContext":
        """Return a copy whose named elements are replaced by `elements`."""
        return ScopeContext(prefix=self.prefix, named_elements=dict(elements))

    def resolve(self, selector: str) -> str:
        """Translate a logical selector into concrete CSS.

        Only exact names are substituted; anything else is treated as
        literal CSS. The prefix, when set, is joined with a single space.

        Args:
            selector: Raw CSS or a named element

        Returns:
            Concrete CSS selector
        """
        selector = self.named_elements.get(selector, selector)

        if self.prefix:
            return f"{self.prefix} {selector}".strip()

        return selector
