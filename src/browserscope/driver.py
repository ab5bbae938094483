"""Driver collaborator interface and the Playwright adapter.

Browser sessions talk to the browser only through the DriverHandle
protocol. PlaywrightDriver implements it on top of Playwright's synchronous
API; tests can substitute any object with the same methods.

CRITICAL: Every call blocks until the browser responds. A driver is shared by
a session and all of its scoped children, and only the session that created
it should call quit().
"""

import logging
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from playwright.sync_api import (
    Browser as PlaywrightBrowser,
    ElementHandle,
    Frame,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    sync_playwright,
)

from .config.browser_config import BrowserConfig
from .exceptions import NoSuchElementError

logger = logging.getLogger(__name__)


@runtime_checkable
class ElementHandleLike(Protocol):
    """A single DOM element returned by a driver."""

    def click(self) -> None: ...

    def fill(self, value: str) -> None: ...

    def inner_text(self) -> str: ...

    def input_value(self) -> str: ...

    def get_attribute(self, name: str) -> Optional[str]: ...

    def is_visible(self) -> bool: ...


@runtime_checkable
class DriverHandle(Protocol):
    """Operations a browser session needs from the underlying driver."""

    def navigate_to(self, url: str) -> None: ...

    def navigate_back(self) -> None: ...

    def refresh(self) -> None: ...

    def execute_script(self, script: str, arg: Any = None) -> Any: ...

    def find_element(self, selector: str) -> ElementHandleLike: ...

    def find_elements(self, selector: str) -> List[ElementHandleLike]: ...

    def wait_for_selector(self, selector: str, seconds: float) -> ElementHandleLike: ...

    def wait_for_timeout(self, milliseconds: float) -> None: ...

    def switch_to_frame(self, element: ElementHandleLike) -> None: ...

    def switch_to_default_content(self) -> None: ...

    def current_url(self) -> str: ...

    def title(self) -> str: ...

    def page_source(self) -> str: ...

    def take_screenshot(self, path: str) -> None: ...

    def browser_name(self) -> str: ...

    def get_log(self, kind: str) -> List[Dict[str, Any]]: ...

    def maximize_window(self) -> None: ...

    def set_window_size(self, width: int, height: int) -> None: ...

    def set_window_position(self, x: int, y: int) -> None: ...

    def quit(self) -> None: ...


class PlaywrightDriver:
    """DriverHandle implementation backed by a Playwright sync Page.

    Element lookups run against the current frame, which starts as the
    page's main frame and changes with switch_to_frame().

    Example:
        driver = PlaywrightDriver.launch(config)
        try:
            Browser(driver, config=config).visit("/login")
        finally:
            driver.quit()
    """

    def __init__(
        self,
        page: Page,
        browser: Optional[PlaywrightBrowser] = None,
        playwright: Optional[Playwright] = None,
    ):
        """Initialize the driver.

        Args:
            page: Page to drive
            browser: Browser to close on quit() (only when this driver owns it)
            playwright: Playwright instance to stop on quit() (only when owned)
        """
        self.page = page
        self._browser = browser
        self._playwright = playwright
        self._frame: Frame = page.main_frame
        self._console: List[Dict[str, Any]] = []

        page.on("console", self._record_console_message)

    @classmethod
    def launch(cls, config: BrowserConfig) -> "PlaywrightDriver":
        """Start Playwright, launch a browser and open a page.

        Args:
            config: Browser configuration (engine, headless, viewport)

        Returns:
            Driver owning the launched browser

        Raises:
            RuntimeError: If the browser fails to launch
        """
        playwright = sync_playwright().start()

        try:
            launcher = getattr(playwright, config.browser_type.value)
            browser = launcher.launch(headless=config.headless)
            page = browser.new_page(
                viewport={
                    "width": config.viewport.width,
                    "height": config.viewport.height,
                }
            )
        except Exception as e:
            logger.error(f"Failed to launch {config.browser_type.value} browser: {e}")
            playwright.stop()
            raise RuntimeError(f"Browser launch failed: {e}") from e

        logger.info(
            f"Launched {config.browser_type.value} browser (headless={config.headless})"
        )
        return cls(page, browser=browser, playwright=playwright)

    def _record_console_message(self, message: Any) -> None:
        self._console.append(
            {"level": message.type.upper(), "message": message.text}
        )

    # Navigation

    def navigate_to(self, url: str) -> None:
        self.page.goto(url)
        self._frame = self.page.main_frame

    def navigate_back(self) -> None:
        self.page.go_back()
        self._frame = self.page.main_frame

    def refresh(self) -> None:
        self.page.reload()
        self._frame = self.page.main_frame

    def current_url(self) -> str:
        return self.page.url

    def title(self) -> str:
        return self.page.title()

    def page_source(self) -> str:
        return self._frame.content()

    # Scripts and elements

    def execute_script(self, script: str, arg: Any = None) -> Any:
        """Evaluate a JavaScript expression or function in the current frame.

        `arg` is passed as the function's single parameter; use a list or
        dict to hand over several values.
        """
        if arg is None:
            return self._frame.evaluate(script)
        return self._frame.evaluate(script, arg)

    def find_element(self, selector: str) -> ElementHandle:
        element = self._frame.query_selector(selector)

        if element is None:
            raise NoSuchElementError(selector)

        return element

    def find_elements(self, selector: str) -> List[ElementHandle]:
        return self._frame.query_selector_all(selector)

    def wait_for_selector(self, selector: str, seconds: float) -> ElementHandle:
        """Wait until an element matching the selector is attached.

        Raises:
            NoSuchElementError: If nothing matches within `seconds`
        """
        try:
            return self._frame.wait_for_selector(
                selector, state="attached", timeout=seconds * 1000
            )
        except PlaywrightTimeoutError as e:
            raise NoSuchElementError(selector) from e

    def wait_for_timeout(self, milliseconds: float) -> None:
        self.page.wait_for_timeout(milliseconds)

    # Frames

    def switch_to_frame(self, element: ElementHandle) -> None:
        frame = element.content_frame()

        if frame is None:
            raise NoSuchElementError("iframe content")

        self._frame = frame
        logger.debug(f"Switched to frame: {frame.name or frame.url}")

    def switch_to_default_content(self) -> None:
        self._frame = self.page.main_frame

    # Window

    def maximize_window(self) -> None:
        size = self.page.evaluate(
            "() => ({width: window.screen.availWidth, height: window.screen.availHeight})"
        )
        self.page.set_viewport_size(size)

    def set_window_size(self, width: int, height: int) -> None:
        self.page.set_viewport_size({"width": width, "height": height})

    def set_window_position(self, x: int, y: int) -> None:
        self.page.evaluate("([x, y]) => window.moveTo(x, y)", [x, y])

    # Diagnostics

    def take_screenshot(self, path: str) -> None:
        self.page.screenshot(path=path)

    def browser_name(self) -> str:
        return self.page.context.browser.browser_type.name

    def get_log(self, kind: str) -> List[Dict[str, Any]]:
        """Return and clear buffered log entries of the given kind.

        Only the "browser" (console) log is collected.
        """
        if kind != "browser":
            return []

        entries, self._console = self._console, []
        return entries

    def quit(self) -> None:
        """Close the page, plus the browser and Playwright when this driver launched them."""
        self.page.close()

        if self._browser is not None:
            self._browser.close()
            self._browser = None

        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None

        logger.info("Browser driver closed")
