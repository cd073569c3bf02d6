"""Target parsing and Playwright locator resolution.

This module provides smart detection of target types and resolves them to
Playwright locators on a page (or on another locator when chaining).

Supported formats:
- CSS selectors: .class, #id, [attribute], tag names, div.bar,
  input[type="text"], "li:nth-child(2)", button:has-text("Insert")
- Role patterns: button:Insert, link:Learn more, button (all buttons)
- Text patterns: text:Add to set
- Placeholder: placeholder:Enter a value
- Label: label:Capacity
- Testid: testid:submit-button
- Chaining: "#queue >> .slot" scopes each part to the previous one
"""

import re
from dataclasses import dataclass
from typing import Literal, Union

from playwright.async_api import Locator, Page

# Common HTML tags that should be treated as CSS tag selectors
# These resolve to page.locator('tag') not page.get_by_text('tag')
HTML_TAGS = {
    # Document structure
    "html",
    "body",
    "main",
    "header",
    "footer",
    "nav",
    "section",
    "article",
    # Content
    "div",
    "span",
    "p",
    "h1",
    "h2",
    "h3",
    "h4",
    "pre",
    "code",
    # Lists
    "ul",
    "ol",
    "li",
    # Tables
    "table",
    "thead",
    "tbody",
    "tr",
    "th",
    "td",
    # Forms
    "form",
    "input",
    "button",
    "select",
    "option",
    "textarea",
    "label",
    # Graphics
    "canvas",
    "svg",
    "circle",
    "line",
    "rect",
    "path",
    "polygon",
    "polyline",
    "ellipse",
    "g",
    # Inline
    "a",
    "img",
    "strong",
    "em",
    "small",
}

# ARIA roles supported by Playwright get_by_role()
SUPPORTED_ROLES = {
    "button",
    "link",
    "textbox",
    "checkbox",
    "radio",
    "combobox",
    "listbox",
    "option",
    "heading",
    "img",
    "list",
    "listitem",
    "table",
    "row",
    "cell",
    "alert",
    "status",
    "log",
    "progressbar",
    "slider",
    "spinbutton",
    "switch",
    "tree",
    "treeitem",
    "grid",
    "gridcell",
}

TAG_RE = re.compile(r"[a-z][a-z0-9-]*", re.IGNORECASE)

# Characters that can follow a tag name inside a CSS selector
TAG_SUFFIX_CHARS = ".#[:> ~+"

# CSS and Playwright pseudo-classes that can follow "role:"
PSEUDO_CLASS_RE = re.compile(
    r"(?:has-text|has|text-is|text|is|not|nth-child|nth-last-child|nth-of-type"
    r"|nth-last-of-type|nth-match|first-child|last-child|first-of-type"
    r"|last-of-type|only-child|first|last|disabled|enabled|checked|focus"
    r"|hover|visible|empty)(?:$|[(.:#\[ >])"
)

Scope = Union[Page, Locator]


@dataclass(frozen=True)
class ParsedTarget:
    """Parsed target information."""

    type: Literal["role", "text", "placeholder", "label", "css", "testid"]
    value: str
    role: str | None = None  # For role type targets
    name: str | None = None  # For role type targets with accessible name


def parse_target(target: str) -> ParsedTarget:
    """
    Parse target string into structured selector information.

    Args:
        target: Target string in one of supported formats

    Returns:
        ParsedTarget with type and value information

    Examples:
        >>> parse_target("button:Insert")
        ParsedTarget(type='role', value='button:Insert', role='button', name='Insert')

        >>> parse_target("#addValueBtn")
        ParsedTarget(type='css', value='#addValueBtn', role=None, name=None)

        >>> parse_target("text:Add to set")
        ParsedTarget(type='text', value='Add to set', role=None, name=None)
    """
    target = target.strip()
    if not target:
        raise ValueError("Empty target")

    # Explicit prefixes
    if target.startswith("text:"):
        return ParsedTarget(type="text", value=target[5:])

    if target.startswith("placeholder:"):
        return ParsedTarget(type="placeholder", value=target[12:])

    if target.startswith("label:"):
        return ParsedTarget(type="label", value=target[6:])

    if target.startswith("testid:"):
        return ParsedTarget(type="testid", value=target[7:])

    # CSS multiple selector (contains comma) - e.g., "span, p, div"
    if "," in target:
        return ParsedTarget(type="css", value=target)

    # CSS selectors (start with . # [ or *)
    if target[0] in ".#[*":
        return ParsedTarget(type="css", value=target)

    # Role patterns (button:Insert), unless the suffix is a pseudo-class
    # (button:has-text("Insert"), option:checked)
    if ":" in target:
        prefix, rest = target.split(":", 1)
        role = prefix.lower()

        if role in SUPPORTED_ROLES and not PSEUDO_CLASS_RE.match(rest):
            return ParsedTarget(type="role", value=target, role=role, name=rest or None)

    # Just a role name
    if target.lower() in SUPPORTED_ROLES:
        return ParsedTarget(type="role", value=target, role=target.lower(), name=None)

    # HTML tag, alone or followed by CSS: div.bar, input[type="text"],
    # li:nth-child(2), ul li, div>span
    match = TAG_RE.match(target)
    if match and match.group(0).lower() in HTML_TAGS:
        end = match.end()
        if end == len(target) or target[end] in TAG_SUFFIX_CHARS:
            return ParsedTarget(type="css", value=target)

    # Default: treat as text
    return ParsedTarget(type="text", value=target)


def build_locator(parsed: ParsedTarget, scope: Scope) -> Locator:
    """
    Build a Playwright locator for a parsed target.

    Args:
        parsed: ParsedTarget from parse_target()
        scope: Page or Locator the lookup is relative to

    Returns:
        Playwright Locator (lazy, nothing is queried yet)
    """
    if parsed.type == "role":
        if parsed.name:
            return scope.get_by_role(parsed.role, name=parsed.name)
        return scope.get_by_role(parsed.role)

    if parsed.type == "placeholder":
        return scope.get_by_placeholder(parsed.value)

    if parsed.type == "label":
        return scope.get_by_label(parsed.value)

    if parsed.type == "testid":
        return scope.get_by_test_id(parsed.value)

    if parsed.type == "css":
        return scope.locator(parsed.value)

    return scope.get_by_text(parsed.value)


def resolve_target(target: str, scope: Scope) -> Locator:
    """
    Convert target string directly to a Playwright locator.

    Supports Playwright chaining syntax with ' >> ': "#queue >> .slot"
    becomes page.locator('#queue').locator('.slot').

    Args:
        target: Target string in any supported format
        scope: Page or Locator the first part is resolved against

    Returns:
        Playwright Locator
    """
    locator: Scope = scope
    for part in target.split(" >> "):
        locator = build_locator(parse_target(part), locator)
    return locator
