"""Conditions over live page state, polled by Harness.wait_for.

A Condition pairs a description (used in ConditionTimeoutError) with an
async predicate. Predicates only read the page: they never click, type or
mutate the DOM, because wait_for may evaluate them many times.

Element conditions are False while the target matches nothing; they do not
wait for the element to appear, polling does that.
"""

import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Pattern, Union

from playwright.async_api import Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from vizharness.harness._selectors import resolve_target

Predicate = Callable[[Page], Awaitable[bool]]

# Upper bound for a single read, so one evaluation never blocks a poll tick
PROBE_TIMEOUT_MS = 250

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Condition:
    """A named, side-effect-free predicate over the page."""

    description: str
    predicate: Predicate

    async def evaluate(self, page: Page) -> bool:
        return bool(await self.predicate(page))

    def __str__(self) -> str:
        return self.description


def condition(description: str, predicate: Predicate) -> Condition:
    """Wrap a custom async predicate."""
    return Condition(description, predicate)


def normalize_text(text: Optional[str]) -> str:
    """Collapse runs of whitespace the way rendered text reads."""
    return _WHITESPACE.sub(" ", text or "").strip()


async def _first(page: Page, target: str) -> Optional[Locator]:
    locator = resolve_target(target, page)
    if await locator.count() == 0:
        return None
    return locator.first


async def _first_text(page: Page, target: str) -> Optional[str]:
    texts = await resolve_target(target, page).all_text_contents()
    if not texts:
        return None
    return normalize_text(texts[0])


async def _probe(read: Callable[[], Awaitable[Any]], default: Any = None) -> Any:
    # The element can detach between count() and the read
    try:
        return await read()
    except PlaywrightTimeoutError:
        return default


# Text

def text_equals(target: str, expected: str) -> Condition:
    expected_norm = normalize_text(expected)

    async def check(page: Page) -> bool:
        return await _first_text(page, target) == expected_norm

    return Condition(f"text of {target} == {expected_norm!r}", check)


def text_contains(target: str, fragment: str) -> Condition:
    async def check(page: Page) -> bool:
        text = await _first_text(page, target)
        return text is not None and fragment in text

    return Condition(f"text of {target} contains {fragment!r}", check)


def text_matches(target: str, pattern: Union[str, Pattern[str]]) -> Condition:
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern

    async def check(page: Page) -> bool:
        text = await _first_text(page, target)
        return text is not None and compiled.search(text) is not None

    return Condition(f"text of {target} matches /{compiled.pattern}/", check)


# Counts

def count_equals(target: str, expected: int) -> Condition:
    async def check(page: Page) -> bool:
        return await resolve_target(target, page).count() == expected

    return Condition(f"count of {target} == {expected}", check)


def count_at_least(target: str, minimum: int) -> Condition:
    async def check(page: Page) -> bool:
        return await resolve_target(target, page).count() >= minimum

    return Condition(f"count of {target} >= {minimum}", check)


# Attributes and state

def attribute_present(target: str, name: str) -> Condition:
    async def check(page: Page) -> bool:
        element = await _first(page, target)
        if element is None:
            return False
        value = await _probe(lambda: element.get_attribute(name, timeout=PROBE_TIMEOUT_MS))
        return value is not None

    return Condition(f"{target} has attribute {name!r}", check)


def attribute_equals(target: str, name: str, expected: str) -> Condition:
    async def check(page: Page) -> bool:
        element = await _first(page, target)
        if element is None:
            return False
        value = await _probe(lambda: element.get_attribute(name, timeout=PROBE_TIMEOUT_MS))
        return value == expected

    return Condition(f"{target}[{name}] == {expected!r}", check)


def has_class(target: str, class_name: str) -> Condition:
    async def check(page: Page) -> bool:
        element = await _first(page, target)
        if element is None:
            return False
        classes = await _probe(lambda: element.get_attribute("class", timeout=PROBE_TIMEOUT_MS))
        return class_name in (classes or "").split()

    return Condition(f"{target} has class {class_name!r}", check)


def value_equals(target: str, expected: str) -> Condition:
    async def check(page: Page) -> bool:
        element = await _first(page, target)
        if element is None:
            return False
        value = await _probe(lambda: element.input_value(timeout=PROBE_TIMEOUT_MS))
        return value == expected

    return Condition(f"value of {target} == {expected!r}", check)


def is_visible(target: str) -> Condition:
    async def check(page: Page) -> bool:
        element = await _first(page, target)
        return element is not None and await element.is_visible()

    return Condition(f"{target} is visible", check)


def is_hidden(target: str) -> Condition:
    """True when nothing matches or the first match is not rendered."""

    async def check(page: Page) -> bool:
        element = await _first(page, target)
        return element is None or not await element.is_visible()

    return Condition(f"{target} is hidden", check)


def is_enabled(target: str) -> Condition:
    async def check(page: Page) -> bool:
        element = await _first(page, target)
        if element is None:
            return False
        return bool(await _probe(lambda: element.is_enabled(timeout=PROBE_TIMEOUT_MS), False))

    return Condition(f"{target} is enabled", check)


def is_disabled(target: str) -> Condition:
    async def check(page: Page) -> bool:
        element = await _first(page, target)
        if element is None:
            return False
        return bool(await _probe(lambda: element.is_disabled(timeout=PROBE_TIMEOUT_MS), False))

    return Condition(f"{target} is disabled", check)


# Page scripts

def js_truthy(expression: str, arg: Any = None) -> Condition:
    """
    Evaluate a JavaScript expression or function in the page.

    Args:
        expression: e.g. "() => window.sorted === true" or
                    "(n) => document.querySelectorAll('.bar').length === n"
        arg: Optional serializable argument passed to the function
    """

    async def check(page: Page) -> bool:
        return bool(await page.evaluate(expression, arg))

    return Condition(f"js {expression}", check)


# Combinators

def all_of(*conditions: Condition) -> Condition:
    async def check(page: Page) -> bool:
        for item in conditions:
            if not await item.evaluate(page):
                return False
        return True

    return Condition(" and ".join(f"({item})" for item in conditions), check)


def any_of(*conditions: Condition) -> Condition:
    async def check(page: Page) -> bool:
        for item in conditions:
            if await item.evaluate(page):
                return True
        return False

    return Condition(" or ".join(f"({item})" for item in conditions), check)


def negate(inner: Condition) -> Condition:
    async def check(page: Page) -> bool:
        return not await inner.evaluate(page)

    return Condition(f"not ({inner})", check)
