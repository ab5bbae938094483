"""Reusable UI components scoped under a root selector."""

from abc import ABC, abstractmethod

from .binding import Binding


class Component(Binding, ABC):
    """Base class for components.

    A component is used as a scope: browser.within(DatePicker(), callback)
    runs the callback with every selector nested under the component's root
    selector and with the component's shortcuts layered over the parent's.
    """

    @abstractmethod
    def selector(self) -> str:
        """Root selector of the component (raw CSS or a named element)."""
        pass

    def __str__(self) -> str:
        return self.selector()
