"""Shared fixtures for browserscope tests.

FakeDriver implements the DriverHandle protocol against an in-memory map of
CSS selector -> elements and records every call, so tests can assert exactly
which concrete selectors a browser resolved.
"""

from typing import Any, Dict, List, Optional

import pytest

from browserscope.config import BrowserConfig, reset_config
from browserscope.exceptions import NoSuchElementError
from browserscope.macros import MacroRegistry


class FakeElement:
    """In-memory element."""

    def __init__(self, text: str = "", value: str = "", visible: bool = True, **attributes):
        self.text = text
        self.value = value
        self.visible = visible
        self.attributes: Dict[str, str] = attributes
        self.clicks = 0

    def click(self) -> None:
        self.clicks += 1

    def fill(self, value: str) -> None:
        self.value = value

    def inner_text(self) -> str:
        return self.text

    def input_value(self) -> str:
        return self.value

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def is_visible(self) -> bool:
        return self.visible


class FakeDriver:
    """Recording DriverHandle."""

    def __init__(self, dom: Optional[Dict[str, Any]] = None):
        self.dom: Dict[str, Any] = dom or {}
        self.calls: List[tuple] = []
        self.lookups: List[str] = []
        self.url = "about:blank"
        self.page_title = ""
        self.source = "<html></html>"
        self.name = "chromium"
        self.console: List[Dict[str, Any]] = []
        self.script_results: Dict[str, Any] = {}
        self.frame: Optional[Any] = None

    def add(self, selector: str, element: Optional[FakeElement] = None) -> FakeElement:
        element = element or FakeElement()
        self.dom[selector] = element
        return element

    def navigate_to(self, url: str) -> None:
        self.calls.append(("navigate_to", url))
        self.url = url

    def navigate_back(self) -> None:
        self.calls.append(("navigate_back",))

    def refresh(self) -> None:
        self.calls.append(("refresh",))

    def execute_script(self, script: str, arg: Any = None) -> Any:
        self.calls.append(("execute_script", script) + (() if arg is None else (arg,)))
        return self.script_results.get(script)

    def find_element(self, selector: str) -> FakeElement:
        self.lookups.append(selector)
        found = self.dom.get(selector)
        if isinstance(found, list):
            found = found[0] if found else None
        if found is None:
            raise NoSuchElementError(selector)
        return found

    def find_elements(self, selector: str) -> List[FakeElement]:
        self.lookups.append(selector)
        found = self.dom.get(selector)
        if found is None:
            return []
        return found if isinstance(found, list) else [found]

    def wait_for_selector(self, selector: str, seconds: float) -> FakeElement:
        self.calls.append(("wait_for_selector", selector, seconds))
        return self.find_element(selector)

    def wait_for_timeout(self, milliseconds: float) -> None:
        self.calls.append(("wait_for_timeout", milliseconds))

    def switch_to_frame(self, element: Any) -> None:
        self.calls.append(("switch_to_frame", element))
        self.frame = element

    def switch_to_default_content(self) -> None:
        self.calls.append(("switch_to_default_content",))
        self.frame = None

    def current_url(self) -> str:
        return self.url

    def title(self) -> str:
        return self.page_title

    def page_source(self) -> str:
        return self.source

    def take_screenshot(self, path: str) -> None:
        self.calls.append(("take_screenshot", path))

    def browser_name(self) -> str:
        return self.name

    def get_log(self, kind: str) -> List[Dict[str, Any]]:
        self.calls.append(("get_log", kind))
        return list(self.console)

    def maximize_window(self) -> None:
        self.calls.append(("maximize_window",))

    def set_window_size(self, width: int, height: int) -> None:
        self.calls.append(("set_window_size", width, height))

    def set_window_position(self, x: int, y: int) -> None:
        self.calls.append(("set_window_position", x, y))

    def quit(self) -> None:
        self.calls.append(("quit",))


@pytest.fixture
def driver():
    """Create an empty FakeDriver."""
    return FakeDriver()


@pytest.fixture
def config(tmp_path):
    """Create a configuration writing artifacts under tmp_path."""
    return BrowserConfig(
        base_url="http://x",
        wait_seconds=0.2,
        screenshots_dir=str(tmp_path / "screenshots"),
        console_log_dir=str(tmp_path / "console"),
    )


@pytest.fixture(autouse=True)
def clean_global_state():
    """Reset macros and process-wide configuration around every test."""
    MacroRegistry().clear()
    reset_config()
    yield
    MacroRegistry().clear()
    reset_config()
