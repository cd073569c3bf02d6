"""Interaction/assertion harness over one Playwright page.

The harness owns a DiagnosticsSink and a DialogInterceptor and wires both
to the page in attach(). Everything else is a thin, single-attempt
operation over the page: no retries, every failure raises.

Usage:
    async with Harness(page) as harness:
        await harness.goto("html/set-demo.html")
        await harness.perform(fill("#valueInput", "apple"))
        await harness.perform(click("#addValueBtn"))
        await harness.wait_for(text_equals("#setContents", "apple"))
        harness.assert_no_unexpected_errors()
"""

import asyncio
from typing import Any, Iterable, Optional
from urllib.parse import urljoin, urlparse

from playwright.async_api import Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from vizharness.harness._selectors import resolve_target
from vizharness.harness.actions import EDITABLE_KINDS, Action, apply_action
from vizharness.harness.conditions import Condition, normalize_text
from vizharness.harness.diagnostics import AllowSpec, DiagnosticsSink, DiagnosticsSnapshot
from vizharness.harness.dialogs import ACCEPT, DialogInterceptor, DialogRecord, DialogResponse, DialogWatch
from vizharness.harness.errors import (
    ConditionTimeoutError,
    ElementNotFoundError,
    ElementNotInteractableError,
    HarnessError,
    UnexpectedDiagnosticError,
)
from vizharness.utils.config import MIN_POLL_INTERVAL_MS, HarnessSettings, load_settings
from vizharness.utils.logger import setup_logger

logger = setup_logger(__name__)


class Harness:
    """
    Drives one page and records what it reports.

    Attach before navigating: console messages, page errors and dialogs
    raised before attach() are lost, not buffered.
    """

    def __init__(self, page: Page, settings: Optional[HarnessSettings] = None):
        self.page = page
        self.settings = settings or load_settings()
        self.diagnostics = DiagnosticsSink()
        self.dialog_interceptor = DialogInterceptor()
        self._subscriptions: list[tuple[str, Any]] = []

    # Lifecycle

    @property
    def attached(self) -> bool:
        return bool(self._subscriptions)

    def attach(self) -> "Harness":
        """Subscribe to console, pageerror and dialog events."""
        if self.attached:
            return self

        self._subscriptions = [
            ("console", self.diagnostics.record_console),
            ("pageerror", self.diagnostics.record_page_error),
            ("dialog", self.dialog_interceptor.handle),
        ]
        for event, handler in self._subscriptions:
            self.page.on(event, handler)
        logger.debug("Harness attached")
        return self

    def detach(self) -> None:
        """Remove the subscriptions made by attach()."""
        for event, handler in self._subscriptions:
            self.page.remove_listener(event, handler)
        self._subscriptions = []
        self.dialog_interceptor.disarm()
        logger.debug("Harness detached")

    def close(self) -> None:
        """
        Detach, then raise the UnexpectedDialogError a late dialog left behind.

        Use at teardown: a dialog raised by the last action of a test has
        no later harness operation to surface it.
        """
        self.detach()
        self.dialog_interceptor.raise_pending()

    async def __aenter__(self) -> "Harness":
        return self.attach()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
        else:
            self.detach()

    # Navigation

    def resolve_url(self, url: str) -> str:
        """Resolve a relative fixture path against settings.base_url."""
        if urlparse(url).scheme:
            return url
        return urljoin(self.settings.base_url, url)

    async def goto(self, url: str, wait_until: str = "load") -> Any:
        """
        Navigate the page.

        Args:
            url: Absolute URL or a path relative to settings.base_url
            wait_until: Playwright load state to wait for

        Returns:
            Playwright Response (None for about:blank and same-document navigations)
        """
        self._check_ready()
        target = self.resolve_url(url)
        logger.info(f"Navigating to {target}")
        return await self.page.goto(
            target, wait_until=wait_until, timeout=self.settings.action_timeout_ms
        )

    # Actions

    async def perform(self, action: Action) -> None:
        """
        Execute one user action.

        Raises:
            ElementNotFoundError: Target matched nothing within action_timeout_ms
            ElementNotInteractableError: Target is hidden, disabled, not
                editable, or Playwright timed out acting on it
            UnexpectedDialogError: A dialog nobody expected came up
        """
        self._check_ready()
        timeout_ms = self.settings.action_timeout_ms
        logger.info(f"Perform {action.describe()}")

        locator = None
        destination = None
        if action.target is not None:
            locator = await self._actionable(action.target, action.kind, timeout_ms)
        if action.destination is not None:
            destination = await self._actionable(action.destination, "drop", timeout_ms)

        try:
            await apply_action(action, locator, self.page, timeout_ms, destination)
        except PlaywrightTimeoutError as exc:
            reason = str(exc).splitlines()[0] if str(exc) else "action timed out"
            raise ElementNotInteractableError(action.target or "page", reason) from exc

        self.dialog_interceptor.raise_pending()

    async def _actionable(self, target: str, kind: str, timeout_ms: int) -> Locator:
        locator = resolve_target(target, self.page).first
        try:
            await locator.wait_for(state="attached", timeout=timeout_ms)
        except PlaywrightTimeoutError:
            raise ElementNotFoundError(target, timeout_ms) from None

        if not await locator.is_visible():
            raise ElementNotInteractableError(target, "element is not visible")
        # Hovering and dropping onto an element do not need it enabled
        if kind not in ("hover", "drop") and not await locator.is_enabled():
            raise ElementNotInteractableError(target, "element is disabled")
        if kind in EDITABLE_KINDS and not await locator.is_editable():
            raise ElementNotInteractableError(target, "element is not editable")
        return locator

    # Waiting

    async def wait_for(
        self,
        condition: Condition,
        timeout_ms: Optional[int] = None,
        poll_interval_ms: Optional[int] = None,
    ) -> None:
        """
        Poll a condition until it holds.

        A condition that already holds returns without sleeping. Polling
        never runs faster than MIN_POLL_INTERVAL_MS.

        Args:
            condition: Condition to evaluate against the live page
            timeout_ms: Bound on the wait (default settings.wait_timeout_ms)
            poll_interval_ms: Interval between evaluations (default settings.poll_interval_ms)

        Raises:
            ConditionTimeoutError: The condition was still false at the
                deadline, or one evaluation ran past it
        """
        timeout_ms = self.settings.wait_timeout_ms if timeout_ms is None else timeout_ms
        interval_ms = poll_interval_ms or self.settings.poll_interval_ms
        interval = max(interval_ms, MIN_POLL_INTERVAL_MS) / 1000

        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout_ms / 1000
        polls = 0

        while True:
            self._check_ready()
            polls += 1
            # Each evaluation gets at least one poll interval, even at the deadline
            bound = max(deadline - loop.time(), MIN_POLL_INTERVAL_MS / 1000)
            try:
                met = await asyncio.wait_for(condition.evaluate(self.page), bound)
            except asyncio.TimeoutError:
                logger.info(f"Condition evaluation outlived the wait after {polls} poll(s): {condition}")
                raise ConditionTimeoutError(condition.description, timeout_ms) from None
            if met:
                logger.debug(f"Condition met after {polls} poll(s): {condition}")
                return

            remaining = deadline - loop.time()
            if remaining <= 0:
                logger.info(f"Condition timed out after {polls} poll(s): {condition}")
                raise ConditionTimeoutError(condition.description, timeout_ms)
            await asyncio.sleep(min(interval, remaining))

    # Dialogs

    def intercept_next_dialog(
        self, response: DialogResponse = ACCEPT, timeout_ms: Optional[int] = None
    ) -> DialogWatch:
        """
        Arm a one-shot dialog handler. Arm it before the triggering action.

        Args:
            response: ACCEPT, DISMISS or accept_with_text("...")
            timeout_ms: How long awaiting the watch waits (default settings.dialog_timeout_ms)

        Returns:
            DialogWatch; awaiting it gives a DialogOutcome whose seen flag is
            False when no dialog came before the timeout
        """
        self._check_ready()
        timeout_ms = self.settings.dialog_timeout_ms if timeout_ms is None else timeout_ms
        return self.dialog_interceptor.arm(response, timeout_ms)

    def handle_dialogs(self, response: Optional[DialogResponse]) -> None:
        """Answer every dialog with response for the page's lifetime (None to stop)."""
        self.dialog_interceptor.set_persistent(response)

    @property
    def dialogs(self) -> tuple[DialogRecord, ...]:
        return tuple(self.dialog_interceptor.history)

    def raise_pending(self) -> None:
        """Raise UnexpectedDialogError if an unexpected dialog was dismissed."""
        self.dialog_interceptor.raise_pending()

    # Diagnostics

    def collect_diagnostics(self) -> DiagnosticsSnapshot:
        return self.diagnostics.snapshot()

    def assert_no_unexpected_errors(self, allowlist: Iterable[AllowSpec] = ()) -> None:
        """
        Fail on error-severity diagnostics that the allowlist does not cover.

        Args:
            allowlist: Substrings, compiled patterns or AllowRule objects

        Raises:
            UnexpectedDiagnosticError: Listing every uncovered entry
        """
        self.dialog_interceptor.raise_pending()
        unexpected = self.collect_diagnostics().unexpected_errors(allowlist)
        if unexpected:
            raise UnexpectedDiagnosticError(unexpected)

    # Reads

    def locator(self, target: str) -> Locator:
        return resolve_target(target, self.page)

    async def text(self, target: str) -> str:
        """Whitespace-normalized text of the first match."""
        content = await self._read(target, lambda element: element.text_content(timeout=self.settings.action_timeout_ms))
        return normalize_text(content)

    async def value(self, target: str) -> str:
        return await self._read(target, lambda element: element.input_value(timeout=self.settings.action_timeout_ms))

    async def count(self, target: str) -> int:
        return await self.locator(target).count()

    async def _read(self, target: str, read) -> Any:
        self._check_ready()
        try:
            return await read(self.locator(target).first)
        except PlaywrightTimeoutError:
            raise ElementNotFoundError(target, self.settings.action_timeout_ms) from None

    def _check_ready(self) -> None:
        if not self.attached:
            raise HarnessError("Harness is not attached; call attach() before driving the page")
        self.dialog_interceptor.raise_pending()
