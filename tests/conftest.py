import inspect

import pytest

from vizharness.harness.harness import Harness
from vizharness.utils.config import HarnessSettings

pytest_plugins = ["vizharness.pytest_plugin"]


class FakePage:
    """Stands in for a Playwright page: records listeners and replays events."""

    def __init__(self):
        self.listeners: dict[str, list] = {}

    def on(self, event, handler):
        self.listeners.setdefault(event, []).append(handler)

    def remove_listener(self, event, handler):
        self.listeners[event].remove(handler)

    async def emit(self, event, payload):
        for handler in list(self.listeners.get(event, [])):
            result = handler(payload)
            if inspect.isawaitable(result):
                await result


class FakeConsoleMessage:
    def __init__(self, type, text, location=None):  # noqa: A002
        self.type = type
        self.text = text
        self.location = location or {}


class FakePageError:
    def __init__(self, message, stack=None):
        self.message = message
        self.stack = stack


class FakeDialog:
    def __init__(self, type, message, default_value=""):  # noqa: A002
        self.type = type
        self.message = message
        self.default_value = default_value
        self.answer = None

    async def accept(self, prompt_text=None):
        self.answer = ("accept", prompt_text)

    async def dismiss(self):
        self.answer = ("dismiss", None)


@pytest.fixture
def settings() -> HarnessSettings:
    return HarnessSettings(
        base_url="http://127.0.0.1:5500/workspace/",
        action_timeout_ms=1000,
        wait_timeout_ms=300,
        poll_interval_ms=50,
        dialog_timeout_ms=100,
    )


@pytest.fixture
def harness_settings() -> HarnessSettings:
    """Shorter timeouts than the defaults so failing browser tests fail fast."""
    return HarnessSettings(
        action_timeout_ms=1000,
        wait_timeout_ms=2000,
        poll_interval_ms=50,
        dialog_timeout_ms=1000,
    )


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def fake_harness(fake_page, settings) -> Harness:
    harness = Harness(fake_page, settings).attach()
    yield harness
    if harness.attached:
        harness.detach()
