"""Configuration management using Pydantic and environment variables."""

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Polling faster than this starves the page's own event loop
MIN_POLL_INTERVAL_MS = 50


class HarnessSettings(BaseSettings):
    """Harness configuration loaded from VIZHARNESS_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="VIZHARNESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Browser
    base_url: str = Field(
        default="http://127.0.0.1:5500/",
        description="Base URL that relative fixture paths resolve against",
    )
    browser: Literal["chromium", "firefox", "webkit"] = Field(
        default="chromium", description="Browser engine to launch"
    )
    headless: bool = Field(default=True, description="Run the browser headless")

    # Timeouts (milliseconds)
    action_timeout_ms: int = Field(
        default=5000, gt=0, description="Bound on resolving and acting on a target"
    )
    wait_timeout_ms: int = Field(
        default=5000, gt=0, description="Default timeout for wait_for"
    )
    poll_interval_ms: int = Field(
        default=100,
        ge=MIN_POLL_INTERVAL_MS,
        description="Interval between condition evaluations",
    )
    dialog_timeout_ms: int = Field(
        default=2000, gt=0, description="Default wait for an intercepted dialog"
    )

    # Logging
    log_level: str = Field(default="WARNING", description="Logging level")


def load_settings(env_file: Optional[Path] = None, **overrides: Any) -> HarnessSettings:
    """
    Load harness settings from environment variables and .env file.

    Args:
        env_file: Optional path to .env file. If None, looks for .env in current directory.
        **overrides: Explicit values that win over the environment.

    Returns:
        HarnessSettings instance with loaded settings.
    """
    if env_file is not None:
        return HarnessSettings(_env_file=env_file, **overrides)
    return HarnessSettings(**overrides)
