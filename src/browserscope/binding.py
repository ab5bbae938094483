"""Shared behaviour of pages and components.

Pages and components expose named elements, a verification hook, and a table
of operations a Browser may delegate to. Operations are opted in explicitly
with the @operation decorator and collected when the class is created:

    class LoginPage(Page):
        @operation
        def login(self, browser, email, password):
            browser.type("@email", email).type("@password", password)
            browser.click("@submit")

    browser.visit(LoginPage()).login("a@example.com", "secret")

Every operation receives the delegating Browser as its first argument after
self. Its return value is discarded and the Browser is returned instead, so
calls keep chaining.
"""

from typing import Any, Callable, Dict, Optional, TypeVar, Union, overload

F = TypeVar("F", bound=Callable[..., Any])

_OPERATION_ATTR = "__browserscope_operation__"


@overload
def operation(func: F) -> F: ...


@overload
def operation(name: str) -> Callable[[F], F]: ...


def operation(func_or_name: Union[Callable[..., Any], str]) -> Any:
    """Mark a page or component method as delegatable from a Browser.

    Usable bare (`@operation`) or with an explicit name
    (`@operation("sign_in")`).
    """
    if isinstance(func_or_name, str):
        name = func_or_name

        def decorator(func: F) -> F:
            setattr(func, _OPERATION_ATTR, name)
            return func

        return decorator

    setattr(func_or_name, _OPERATION_ATTR, func_or_name.__name__)
    return func_or_name


class Binding:
    """Base class for pages and components."""

    _operations: Dict[str, str] = {}

    def __init_subclass__(cls, **kwargs: Any):
        super().__init_subclass__(**kwargs)

        operations: Dict[str, str] = {}
        for klass in reversed(cls.__mro__):
            for attr, value in vars(klass).items():
                name = getattr(value, _OPERATION_ATTR, None)
                if name is not None:
                    operations[name] = attr

        cls._operations = operations

    def elements(self) -> Dict[str, str]:
        """Named elements (logical name -> raw CSS selector)."""
        return {}

    def verify(self, browser: Any) -> None:
        """Check that the browser is where this binding expects it to be.

        Raise (typically VerificationError or AssertionError) to fail.
        """
        pass

    @classmethod
    def operation_names(cls) -> list:
        return sorted(cls._operations)

    def has_operation(self, name: str) -> bool:
        return name in self._operations

    def get_operation(self, name: str) -> Optional[Callable[..., Any]]:
        """Return the bound method registered under `name`, if any."""
        attr = self._operations.get(name)
        if attr is None:
            return None
        return getattr(self, attr)
