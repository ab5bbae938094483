"""Browser session configuration with environment variable loading.

The configuration is process-wide: it is set once while the test suite
bootstraps (explicitly through configure(), or implicitly from the
environment on first read) and is read-only afterwards. Sessions may also be
handed their own BrowserConfig, which bypasses the process-wide value.
"""

import os
import logging
from typing import Any, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import ConfigurationError
from ..models.browser_models import BrowserType, Viewport

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class BrowserConfig(BaseModel):
    """Configuration for browser sessions."""

    model_config = ConfigDict(frozen=True)

    # Navigation
    base_url: str = Field(
        default_factory=lambda: os.getenv("BROWSER_BASE_URL", "http://localhost"),
        description="Base URL prepended to relative URLs passed to visit()",
    )

    # Waiting
    wait_seconds: float = Field(
        default_factory=lambda: float(os.getenv("BROWSER_WAIT_SECONDS", "5")),
        description="Default implicit wait used by element lookups",
    )

    # Artifacts
    screenshots_dir: str = Field(
        default_factory=lambda: os.getenv(
            "BROWSER_SCREENSHOTS_DIR", "tests/browser/screenshots"
        ),
        description="Directory screenshots are written to",
    )
    console_log_dir: str = Field(
        default_factory=lambda: os.getenv(
            "BROWSER_CONSOLE_LOG_DIR", "tests/browser/console"
        ),
        description="Directory browser console logs are written to",
    )
    remote_log_browsers: List[str] = Field(
        default_factory=lambda: ["chrome", "chromium", "phantomjs"],
        description="Browsers whose console log can be retrieved",
    )
    jquery_url: str = Field(
        default_factory=lambda: os.getenv(
            "BROWSER_JQUERY_URL", "https://code.jquery.com/jquery-3.7.1.min.js"
        ),
        description="Script injected by ensure_jquery_is_available()",
    )

    # Launch
    browser_type: BrowserType = Field(
        default_factory=lambda: BrowserType(os.getenv("BROWSER_TYPE", "chromium")),
        description="Browser engine launched by PlaywrightDriver.launch()",
    )
    headless: bool = Field(
        default_factory=lambda: _env_bool("BROWSER_HEADLESS", "true"),
        description="Run the launched browser without a window",
    )
    viewport: Viewport = Field(
        default_factory=Viewport, description="Viewport of launched pages"
    )


_config: Optional[BrowserConfig] = None


def configure(config: Optional[BrowserConfig] = None, **overrides: Any) -> BrowserConfig:
    """Set the process-wide configuration.

    Call once while bootstrapping the test suite.

    Args:
        config: Complete configuration (environment defaults if None)
        **overrides: Field values applied on top of `config`

    Returns:
        The configuration now in effect

    Raises:
        ConfigurationError: If the configuration was already set
    """
    global _config

    if _config is not None:
        raise ConfigurationError(
            "Browser configuration is already set. "
            "Configure once during test suite bootstrap."
        )

    config = config or BrowserConfig()
    if overrides:
        config = config.model_copy(update=overrides)

    _config = config
    logger.info(f"Browser configured (base_url={config.base_url})")
    return _config


def get_config() -> BrowserConfig:
    """Return the process-wide configuration, loading it from the environment on first use."""
    global _config

    if _config is None:
        _config = BrowserConfig()
        logger.debug("Loaded browser configuration from environment")

    return _config


def reset_config() -> None:
    """Forget the process-wide configuration (for testing)."""
    global _config
    _config = None
