"""User-like actions the harness can perform.

An Action only describes what to do. Resolution of the target, the
actionability checks and error translation all happen in Harness.perform.

Usage:
    await harness.perform(fill("#valueInput", "apple"))
    await harness.perform(click("#addValueBtn"))
    await harness.perform(press("Enter"))
    await harness.perform(click_at("#graphCanvas", 120, 80))
    await harness.perform(drag("#node-A", "#node-B"))
"""

from dataclasses import dataclass
from typing import Literal, Optional

from playwright.async_api import Locator, Page

ActionKind = Literal[
    "fill",
    "type_text",
    "click",
    "click_at",
    "dblclick",
    "press",
    "select",
    "check",
    "uncheck",
    "hover",
    "drag",
]

Point = tuple[float, float]

# Actions that need the element to accept input rather than just be enabled
EDITABLE_KINDS = {"fill", "type_text"}

# Actions whose value is mandatory
VALUE_KINDS = {"fill", "type_text", "press", "select"}


@dataclass(frozen=True)
class Action:
    """A named user operation with its target and optional value.

    position is an offset from the target's top-left corner (click_at, and
    the source point of a drag). destination is the drop target of a drag,
    with destination_position as the offset inside it.
    """

    kind: ActionKind
    target: Optional[str] = None  # None only for page-level key presses
    value: Optional[str] = None
    position: Optional[Point] = None
    destination: Optional[str] = None
    destination_position: Optional[Point] = None

    def __post_init__(self):
        if self.kind in VALUE_KINDS and self.value is None:
            raise ValueError(f"{self.kind} action requires a value")
        if self.target is None and self.kind != "press":
            raise ValueError(f"{self.kind} action requires a target")
        if self.kind == "click_at" and self.position is None:
            raise ValueError("click_at action requires a position")
        if self.kind == "drag" and self.destination is None:
            raise ValueError("drag action requires a destination")

    def describe(self) -> str:
        """Human readable form used in logs and error messages."""
        if self.target is None:
            return f"{self.kind}({self.value!r})"
        if self.kind == "drag":
            return f"drag({_at(self.target, self.position)}, {_at(self.destination, self.destination_position)})"
        if self.kind == "click_at":
            return f"click_at({_at(self.target, self.position)})"
        if self.value is None:
            return f"{self.kind}({self.target})"
        return f"{self.kind}({self.target}, {self.value!r})"


def _at(target: str, position: Optional[Point]) -> str:
    if position is None:
        return target
    return f"{target} @ ({position[0]:g}, {position[1]:g})"


def fill(target: str, value: str) -> Action:
    """Clear an input and type value into it."""
    return Action("fill", target, str(value))


def type_text(target: str, text: str) -> Action:
    """
    Type text key by key into a focused element.

    Unlike fill, every character fires its own keydown/keypress/keyup, which
    visualizers listening for key events need.
    """
    return Action("type_text", target, str(text))


def click(target: str) -> Action:
    return Action("click", target)


def click_at(target: str, x: float, y: float) -> Action:
    """
    Click at an offset inside a target, in CSS pixels from its top-left corner.

    Args:
        target: Element to click, usually a canvas or svg
        x: Horizontal offset
        y: Vertical offset
    """
    return Action("click_at", target, position=(x, y))


def dblclick(target: str) -> Action:
    return Action("dblclick", target)


def press(key: str, target: Optional[str] = None) -> Action:
    """
    Press a keyboard key, on an element or on the page.

    Args:
        key: Key to press. Examples: "Enter", "ArrowRight", "Control+a"
        target: Optional element target. Without it the key goes to
                whatever has focus.
    """
    return Action("press", target, key)


def select(target: str, value: str) -> Action:
    """Pick an <option> by value or label."""
    return Action("select", target, str(value))


def check(target: str) -> Action:
    return Action("check", target)


def uncheck(target: str) -> Action:
    return Action("uncheck", target)


def hover(target: str) -> Action:
    return Action("hover", target)


def drag(
    source: str,
    target: str,
    source_position: Optional[Point] = None,
    target_position: Optional[Point] = None,
) -> Action:
    """
    Press the mouse on source, move it to target and release it there.

    Both ends may be the same canvas with different positions to drag
    between two points of one drawing.

    Args:
        source: Element the drag starts on
        target: Element the drag ends on
        source_position: Offset inside source (default: its center)
        target_position: Offset inside target (default: its center)
    """
    return Action(
        "drag",
        source,
        position=source_position,
        destination=target,
        destination_position=target_position,
    )


def _position(point: Optional[Point]) -> Optional[dict]:
    if point is None:
        return None
    return {"x": point[0], "y": point[1]}


async def apply_action(
    action: Action,
    locator: Optional[Locator],
    page: Page,
    timeout_ms: int,
    destination: Optional[Locator] = None,
) -> None:
    """
    Run the Playwright call behind an action.

    Args:
        action: The action to run
        locator: Resolved element (already checked for actionability), or
                 None for a page-level key press
        page: Page the action runs on
        timeout_ms: Bound passed to Playwright's own actionability wait
        destination: Resolved drop target for drag actions
    """
    if locator is None:
        await page.keyboard.press(action.value)
        return

    if action.kind == "fill":
        await locator.fill(action.value, timeout=timeout_ms)
    elif action.kind == "type_text":
        await locator.press_sequentially(action.value, timeout=timeout_ms)
    elif action.kind == "click":
        await locator.click(timeout=timeout_ms)
    elif action.kind == "click_at":
        await locator.click(position=_position(action.position), timeout=timeout_ms)
    elif action.kind == "dblclick":
        await locator.dblclick(timeout=timeout_ms)
    elif action.kind == "press":
        await locator.press(action.value, timeout=timeout_ms)
    elif action.kind == "select":
        # A plain string matches either the option value or its label
        await locator.select_option(action.value, timeout=timeout_ms)
    elif action.kind == "check":
        await locator.check(timeout=timeout_ms)
    elif action.kind == "uncheck":
        await locator.uncheck(timeout=timeout_ms)
    elif action.kind == "hover":
        await locator.hover(timeout=timeout_ms)
    elif action.kind == "drag":
        if destination is None:
            raise ValueError("drag action needs a resolved destination")
        await locator.drag_to(
            destination,
            source_position=_position(action.position),
            target_position=_position(action.destination_position),
            timeout=timeout_ms,
        )
    else:
        raise ValueError(f"Unknown action kind: {action.kind}")
