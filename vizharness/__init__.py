"""Interaction/assertion harness for browser tests of HTML visualizer demos."""

from vizharness.harness import (
    ACCEPT,
    DISMISS,
    ConditionTimeoutError,
    ElementNotFoundError,
    ElementNotInteractableError,
    Harness,
    HarnessError,
    PageObject,
    UnexpectedDiagnosticError,
    UnexpectedDialogError,
    accept_with_text,
)
from vizharness.utils.config import HarnessSettings, load_settings

__version__ = "0.1.0"

__all__ = [
    "Harness",
    "PageObject",
    "HarnessSettings",
    "load_settings",
    "ACCEPT",
    "DISMISS",
    "accept_with_text",
    "HarnessError",
    "ElementNotFoundError",
    "ElementNotInteractableError",
    "ConditionTimeoutError",
    "UnexpectedDialogError",
    "UnexpectedDiagnosticError",
]
