"""Fluent browser session.

A Browser wraps a driver with scoped selector resolution, page objects,
components and macros. Every action returns the browser so calls chain:

    browser.visit(LoginPage()) \\
        .type("@email", "taylor@example.com") \\
        .click("@submit") \\
        .within(".sidebar", lambda sidebar: sidebar.assert_see("Dashboard"))

Scoping is value-based: with_()/within() build a child Browser that shares
the driver but has its own resolver, so nothing done inside the callback
changes what the outer browser resolves.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union
from urllib.parse import urlparse

from .component import Component
from .config.browser_config import BrowserConfig, get_config
from .delegation import MethodDelegator
from .driver import DriverHandle, ElementHandleLike
from .exceptions import ElementNotFoundError, NoSuchElementError, VerificationError
from .macros import MacroRegistry
from .page import Page
from .resolver import ElementResolver

logger = logging.getLogger(__name__)

# Attributes assigned in __init__; never delegated.
_STATE_ATTRIBUTES = frozenset(
    ["driver", "resolver", "page", "component", "config", "delegator"]
)

_JQUERY_MISSING = "() => window.jQuery == null"

_LOAD_SCRIPT = """(url) => new Promise((resolve, reject) => {
    const script = document.createElement('script');
    script.src = url;
    script.onload = () => resolve(true);
    script.onerror = () => reject(new Error('Failed to load ' + url));
    document.head.appendChild(script);
})"""

_SCROLL_INTO_VIEW = "(selector) => document.querySelector(selector).scrollIntoView()"


class Browser:
    """Chainable browser session.

    Attributes:
        driver: Driver shared with every scoped child browser
        resolver: Selector resolver for this browser's scope
        page: Page object currently being viewed
        component: Component this browser is scoped to
        config: Session configuration
    """

    def __init__(
        self,
        driver: DriverHandle,
        resolver: Optional[ElementResolver] = None,
        config: Optional[BrowserConfig] = None,
        delegator: Optional[MethodDelegator] = None,
    ):
        """Create a browser session.

        Args:
            driver: Driver the session operates (borrowed, see quit())
            resolver: Resolver for this scope (unscoped if None)
            config: Configuration (process-wide configuration if None)
            delegator: Dispatcher for unknown operations
        """
        self.driver = driver
        self.resolver = resolver or ElementResolver(driver)
        self.page: Optional[Page] = None
        self.component: Optional[Component] = None
        self.config = config or get_config()
        self.delegator = delegator or MethodDelegator()

    # Macros

    @classmethod
    def macro(cls, name: str, fn: Callable[..., Any]) -> None:
        """Register a macro available on every browser."""
        MacroRegistry().register(name, fn)

    @classmethod
    def has_macro(cls, name: str) -> bool:
        return MacroRegistry().has(name)

    # Navigation

    def visit(self, url: Union[str, Page]) -> "Browser":
        """Browse to a URL or a page object.

        Relative URLs are joined onto the configured base URL. When given a
        page, the browser navigates first and then switches to the page, so
        the page's verify() sees the loaded document.
        """
        page = None
        if not isinstance(url, str):
            page = url
            url = page.url()
            if not url:
                raise ValueError(f"{type(page).__name__} does not define a URL.")

        if not url.startswith(("http://", "https://")):
            url = self.config.base_url.rstrip("/") + "/" + url.lstrip("/")

        logger.info(f"Visiting {url}")
        self.driver.navigate_to(url)

        if page is not None:
            self.on(page)

        return self

    def on(self, page: Page) -> "Browser":
        """Set the current page object and verify the browser is on it.

        The page's site elements and page elements become named elements of
        this browser's resolver (page elements win on collision). If the
        page's verify() raises, the previous page and named elements are
        restored before the error propagates.
        """
        previous_page, previous_context = self.page, self.resolver.context

        self.page = page
        self.resolver.page_elements(page.all_elements())

        try:
            page.verify(self)
        except Exception:
            self.page, self.resolver.context = previous_page, previous_context
            raise

        logger.debug(f"On page {type(page).__name__}")
        return self

    def refresh(self) -> "Browser":
        self.driver.refresh()
        return self

    def back(self) -> "Browser":
        """Navigate to the previous page."""
        self.driver.navigate_back()
        return self

    # Window

    def maximize(self) -> "Browser":
        self.driver.maximize_window()
        return self

    def resize(self, width: int, height: int) -> "Browser":
        self.driver.set_window_size(width, height)
        return self

    def move(self, x: int, y: int) -> "Browser":
        self.driver.set_window_position(x, y)
        return self

    def scroll_to(self, selector: str) -> "Browser":
        """Scroll the element at the given selector into view."""
        self.resolver.find_or_fail(selector)
        self.driver.execute_script(_SCROLL_INTO_VIEW, self.resolver.format(selector))
        return self

    # Scoping

    def with_(
        self, selector: Union[str, Component], callback: Callable[["Browser"], Any]
    ) -> "Browser":
        """Run a callback with a browser scoped to a selector or component.

        Args:
            selector: CSS selector, named element, or component
            callback: Receives the scoped browser

        Returns:
            This (outer) browser

        A component scope starts from this browser's prefix; on_component()
        then nests it under the component root so the root applies once.
        """
        if isinstance(selector, Component):
            prefix = self.resolver.prefix
        else:
            prefix = self.resolver.format(selector)

        browser = type(self)(
            self.driver,
            ElementResolver(self.driver, prefix=prefix),
            config=self.config,
            delegator=self.delegator,
        )

        if self.page is not None:
            browser.on(self.page)

        if isinstance(selector, Component):
            browser.on_component(selector, self.resolver)

        logger.debug(f"Entering scope [{browser.resolver.prefix}]")
        callback(browser)

        return self

    def within(
        self, selector: Union[str, Component], callback: Callable[["Browser"], Any]
    ) -> "Browser":
        """Alias of with_()."""
        return self.with_(selector, callback)

    def on_component(
        self, component: Component, parent_resolver: ElementResolver
    ) -> None:
        """Scope this browser to a component.

        The component's elements are layered over the parent's named
        elements, the component verifies itself, and the component's root
        selector (which may be a named element) becomes the prefix.
        """
        self.component = component

        self.resolver.page_elements(
            {**parent_resolver.elements, **component.elements()}
        )

        component.verify(self)

        self.resolver.prefix = self.resolver.format(component.selector())

    def within_frame(
        self, selector: str, callback: Callable[["Browser"], Any]
    ) -> "Browser":
        """Switch into an iframe, run the callback, then switch back.

        The driver always returns to the top-level document, even when the
        callback fails.
        """
        self.driver.switch_to_frame(self.resolver.find_or_fail(selector))

        try:
            callback(self)
        finally:
            self.driver.switch_to_default_content()

        return self

    # Elements

    def click(self, selector: str) -> "Browser":
        self.resolver.find_or_fail(selector).click()
        return self

    def type(self, selector: str, value: str) -> "Browser":
        """Replace the value of a field."""
        self.resolver.find_or_fail(selector).fill(value)
        return self

    def clear(self, selector: str) -> "Browser":
        self.resolver.find_or_fail(selector).fill("")
        return self

    def value(self, selector: str, value: Optional[str] = None) -> Any:
        """Get the value of a field, or set it and return the browser."""
        element = self.resolver.find_or_fail(selector)

        if value is None:
            return element.input_value()

        element.fill(value)
        return self

    def text(self, selector: str) -> str:
        return self.resolver.find_or_fail(selector).inner_text()

    def attribute(self, selector: str, name: str) -> Optional[str]:
        return self.resolver.find_or_fail(selector).get_attribute(name)

    def elements(self, selector: str) -> List[ElementHandleLike]:
        return self.resolver.find_all(selector)

    def wait_for(self, selector: str, seconds: Optional[float] = None) -> "Browser":
        """Wait until an element matching the selector is present.

        Args:
            selector: Selector to wait for
            seconds: Maximum wait (configured wait_seconds if None)

        Raises:
            ElementNotFoundError: If the element never appears
        """
        seconds = self.config.wait_seconds if seconds is None else seconds
        resolved = self.resolver.format(selector)

        try:
            self.driver.wait_for_selector(resolved, seconds)
        except NoSuchElementError as e:
            raise ElementNotFoundError(selector, resolved) from e

        return self

    # Assertions

    def _scope_selector(self) -> str:
        return self.resolver.format("") or "body"

    def _scope_text(self) -> str:
        selector = self._scope_selector()

        try:
            return self.driver.find_element(selector).inner_text()
        except NoSuchElementError as e:
            raise ElementNotFoundError(selector) from e

    def assert_title(self, title: str) -> "Browser":
        actual = self.driver.title()
        if actual != title:
            raise VerificationError(
                f"Expected title [{title}] does not equal actual title [{actual}]."
            )
        return self

    def assert_path_is(self, path: str) -> "Browser":
        actual = urlparse(self.driver.current_url()).path or "/"
        if actual != path:
            raise VerificationError(
                f"Actual path [{actual}] does not equal expected path [{path}]."
            )
        return self

    def assert_see(self, text: str) -> "Browser":
        """Assert the text is visible within the current scope."""
        if text not in self._scope_text():
            raise VerificationError(
                f"Did not see expected text [{text}] "
                f"within element [{self._scope_selector()}]."
            )
        return self

    def assert_dont_see(self, text: str) -> "Browser":
        if text in self._scope_text():
            raise VerificationError(
                f"Saw unexpected text [{text}] "
                f"within element [{self._scope_selector()}]."
            )
        return self

    def assert_see_in(self, selector: str, text: str) -> "Browser":
        if text not in self.resolver.find_or_fail(selector).inner_text():
            raise VerificationError(
                f"Did not see expected text [{text}] "
                f"within element [{self.resolver.format(selector)}]."
            )
        return self

    def assert_present(self, selector: str) -> "Browser":
        if self.resolver.find(selector) is None:
            raise VerificationError(
                f"Element [{self.resolver.format(selector)}] is not present."
            )
        return self

    def assert_missing(self, selector: str) -> "Browser":
        element = self.resolver.find(selector)
        if element is not None and element.is_visible():
            raise VerificationError(
                f"Saw unexpected element [{self.resolver.format(selector)}]."
            )
        return self

    def assert_visible(self, selector: str) -> "Browser":
        if not self.resolver.find_or_fail(selector).is_visible():
            raise VerificationError(
                f"Element [{self.resolver.format(selector)}] is not visible."
            )
        return self

    # Diagnostics

    def screenshot(self, name: str) -> "Browser":
        """Save a screenshot as <screenshots_dir>/<name>.png."""
        directory = Path(self.config.screenshots_dir)
        directory.mkdir(parents=True, exist_ok=True)

        path = directory / f"{name}.png"
        self.driver.take_screenshot(str(path))
        logger.info(f"Saved screenshot: {path}")

        return self

    def store_console_log(self, name: str) -> "Browser":
        """Save the browser console as <console_log_dir>/<name>.log.

        Only browsers listed in remote_log_browsers expose their console;
        nothing is written for other browsers or an empty console.
        """
        browser_name = self.driver.browser_name()
        if browser_name not in self.config.remote_log_browsers:
            logger.debug(f"Console log not supported for {browser_name}")
            return self

        entries: List[Dict[str, Any]] = self.driver.get_log("browser")
        if entries:
            directory = Path(self.config.console_log_dir)
            directory.mkdir(parents=True, exist_ok=True)

            path = directory / f"{name}.log"
            path.write_text(json.dumps(entries, indent=4), encoding="utf-8")
            logger.info(f"Saved console log: {path}")

        return self

    def ensure_jquery_is_available(self) -> None:
        """Load jQuery into the page when it is not already present."""
        if self.driver.execute_script(_JQUERY_MISSING):
            logger.debug(f"Injecting jQuery from {self.config.jquery_url}")
            self.driver.execute_script(_LOAD_SCRIPT, self.config.jquery_url)

    def dump(self) -> str:
        """Return (and log) the source of the current document."""
        source = self.driver.page_source()
        logger.info(f"Page source:\n{source}")
        return source

    # Flow

    def pause(self, milliseconds: int) -> "Browser":
        self.driver.wait_for_timeout(milliseconds)
        return self

    def tap(self, callback: Callable[["Browser"], Any]) -> "Browser":
        """Pass the browser to a callback and keep chaining."""
        callback(self)
        return self

    def quit(self) -> None:
        """Close the browser.

        Call this on the browser that created the driver only; scoped
        children share it.
        """
        self.driver.quit()

    # Delegation

    def __getattr__(self, name: str) -> Callable[..., Any]:
        """Resolve unknown operations via macros, the component and the page."""
        if name.startswith("_") or name in _STATE_ATTRIBUTES:
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            )

        return self.delegator.resolve(self, name)
