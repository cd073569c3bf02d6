"""pytest fixtures for driving visualizer pages through a Harness.

Enable in a conftest.py:

    pytest_plugins = ["vizharness.pytest_plugin"]

Fixtures:
    harness_settings -- HarnessSettings loaded from the environment
    harness_browser  -- launched browser (test skipped if unavailable)
    harness_page     -- fresh context and page per test
    harness          -- attached Harness over harness_page; teardown fails the
                        test on a dialog nobody expected
"""

import pytest
import pytest_asyncio
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from vizharness.harness.harness import Harness
from vizharness.utils.config import HarnessSettings, load_settings
from vizharness.utils.logger import setup_logger

logger = setup_logger(__name__)


def pytest_configure(config):
    config.addinivalue_line("markers", "e2e: test drives a real browser")


@pytest.fixture
def harness_settings() -> HarnessSettings:
    return load_settings()


@pytest_asyncio.fixture
async def harness_browser(harness_settings: HarnessSettings):
    async with async_playwright() as playwright:
        launcher = getattr(playwright, harness_settings.browser)
        try:
            browser = await launcher.launch(headless=harness_settings.headless)
        except PlaywrightError as exc:
            pytest.skip(f"{harness_settings.browser} is not installed: {exc.message}")
        logger.debug(f"Launched {harness_settings.browser} {browser.version}")
        yield browser
        await browser.close()


@pytest_asyncio.fixture
async def harness_page(harness_browser, harness_settings: HarnessSettings):
    # One context per test keeps storage and listeners isolated
    context = await harness_browser.new_context()
    page = await context.new_page()
    page.set_default_timeout(harness_settings.action_timeout_ms)
    yield page
    await context.close()


@pytest_asyncio.fixture
async def harness(harness_page, harness_settings: HarnessSettings):
    harness = Harness(harness_page, harness_settings).attach()
    yield harness
    harness.close()
