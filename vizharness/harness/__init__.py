"""Interaction/assertion harness package.

Usage:
    from vizharness.harness import Harness, click, fill, text_equals

    async with Harness(page) as harness:
        await harness.goto(url)
        await harness.perform(fill("#valueInput", "apple"))
        await harness.perform(click("#addValueBtn"))
        await harness.wait_for(text_equals("#setContents", "apple"))
        harness.assert_no_unexpected_errors()
"""

from vizharness.harness.actions import (
    Action,
    check,
    click,
    click_at,
    dblclick,
    drag,
    fill,
    hover,
    press,
    select,
    type_text,
    uncheck,
)
from vizharness.harness.conditions import (
    Condition,
    all_of,
    any_of,
    attribute_equals,
    attribute_present,
    condition,
    count_at_least,
    count_equals,
    has_class,
    is_disabled,
    is_enabled,
    is_hidden,
    is_visible,
    js_truthy,
    negate,
    text_contains,
    text_equals,
    text_matches,
    value_equals,
)
from vizharness.harness.diagnostics import (
    AllowRule,
    DiagnosticEntry,
    DiagnosticsSink,
    DiagnosticsSnapshot,
)
from vizharness.harness.dialogs import (
    ACCEPT,
    DISMISS,
    NO_DIALOG,
    DialogOutcome,
    DialogRecord,
    DialogResponse,
    DialogWatch,
    accept_with_text,
)
from vizharness.harness.errors import (
    ConditionTimeoutError,
    ElementNotFoundError,
    ElementNotInteractableError,
    HarnessError,
    UnexpectedDiagnosticError,
    UnexpectedDialogError,
)
from vizharness.harness.harness import Harness
from vizharness.harness.page_object import PageObject

__all__ = [
    # Harness
    "Harness",
    "PageObject",
    # Actions
    "Action",
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
    # Conditions
    "Condition",
    "condition",
    "text_equals",
    "text_contains",
    "text_matches",
    "count_equals",
    "count_at_least",
    "attribute_present",
    "attribute_equals",
    "has_class",
    "value_equals",
    "is_visible",
    "is_hidden",
    "is_enabled",
    "is_disabled",
    "js_truthy",
    "all_of",
    "any_of",
    "negate",
    # Dialogs
    "ACCEPT",
    "DISMISS",
    "NO_DIALOG",
    "accept_with_text",
    "DialogResponse",
    "DialogRecord",
    "DialogOutcome",
    "DialogWatch",
    # Diagnostics
    "AllowRule",
    "DiagnosticEntry",
    "DiagnosticsSink",
    "DiagnosticsSnapshot",
    # Errors
    "HarnessError",
    "ElementNotFoundError",
    "ElementNotInteractableError",
    "ConditionTimeoutError",
    "UnexpectedDialogError",
    "UnexpectedDiagnosticError",
]
