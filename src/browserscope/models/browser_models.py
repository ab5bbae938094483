"""Browser configuration data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class BrowserType(str, Enum):
    """Supported browser engines."""

    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"


class Viewport(BaseModel):
    """Browser viewport configuration."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(default=1280, description="Viewport width")
    height: int = Field(default=720, description="Viewport height")
