"""Error taxonomy for the harness.

Every failure reaches the calling test as one of these exceptions. Nothing
here is retried or recovered from inside the harness.
"""

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from vizharness.harness.diagnostics import DiagnosticEntry
    from vizharness.harness.dialogs import DialogRecord


class HarnessError(Exception):
    """Base class for all harness failures."""


class ElementNotFoundError(HarnessError):
    """Target did not resolve to any element within the timeout."""

    def __init__(self, target: str, timeout_ms: int):
        self.target = target
        self.timeout_ms = timeout_ms
        super().__init__(f"No element matched {target!r} within {timeout_ms} ms")


class ElementNotInteractableError(HarnessError):
    """Target resolved but could not be acted on (hidden, disabled, ...)."""

    def __init__(self, target: str, reason: str):
        self.target = target
        self.reason = reason
        super().__init__(f"Element {target!r} is not interactable: {reason}")


class ConditionTimeoutError(HarnessError, TimeoutError):
    """A wait_for condition never became true."""

    def __init__(self, description: str, timeout_ms: int):
        self.description = description
        self.timeout_ms = timeout_ms
        super().__init__(f"Condition not met within {timeout_ms} ms: {description}")


class UnexpectedDialogError(HarnessError):
    """A native dialog appeared while no interceptor was armed."""

    def __init__(self, record: "DialogRecord"):
        self.record = record
        super().__init__(
            f"Unexpected {record.type} dialog with no interceptor armed: {record.message!r}"
        )


class UnexpectedDiagnosticError(HarnessError):
    """Error-severity diagnostics were recorded that no allow rule covers."""

    def __init__(self, entries: Sequence["DiagnosticEntry"]):
        self.entries = tuple(entries)
        lines = "\n".join(f"  - {entry.describe()}" for entry in self.entries)
        super().__init__(f"{len(self.entries)} unexpected error diagnostic(s):\n{lines}")
