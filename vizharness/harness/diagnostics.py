"""Console and page error collection.

DiagnosticsSink is an append-only log owned by one Harness. The harness
subscribes record_console/record_page_error to the page's "console" and
"pageerror" events; nothing else writes to it.

Events the page emits before the harness is attached are never seen, so
attach before the goto() or action that could produce them. Entries are in
browser emission order, but an entry can show up one poll tick after the
page logged it.
"""

import itertools
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Optional, Pattern, Sequence, Union

from vizharness.utils.logger import setup_logger

logger = setup_logger(__name__)

ERROR = "error"
WARNING = "warning"

# Console types that count as errors besides "error" itself
_ERROR_CONSOLE_TYPES = {"error", "assert"}


@dataclass(frozen=True)
class DiagnosticEntry:
    """One console message or uncaught page error."""

    source: str  # "console" or "pageerror"
    severity: str  # "error", "warning", "info", "log", "debug", ...
    text: str
    sequence: int
    stack: Optional[str] = None
    location: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.severity == ERROR

    def describe(self) -> str:
        where = f" ({self.location})" if self.location else ""
        return f"[{self.source}:{self.severity}] {self.text}{where}"


@dataclass(frozen=True)
class AllowRule:
    """Matches a diagnostic by substring or by regular expression."""

    pattern: Union[str, Pattern[str]]

    def matches(self, entry: DiagnosticEntry) -> bool:
        if isinstance(self.pattern, str):
            return self.pattern in entry.text
        return self.pattern.search(entry.text) is not None

    def __str__(self) -> str:
        if isinstance(self.pattern, str):
            return self.pattern
        return f"/{self.pattern.pattern}/"


AllowSpec = Union[str, Pattern[str], AllowRule]


def as_rules(allowlist: Iterable[AllowSpec]) -> list[AllowRule]:
    """Normalize strings and compiled patterns into AllowRule objects."""
    rules = []
    for item in allowlist:
        if isinstance(item, AllowRule):
            rules.append(item)
        elif isinstance(item, (str, re.Pattern)):
            rules.append(AllowRule(item))
        else:
            raise TypeError(f"Unsupported allowlist entry: {item!r}")
    return rules


@dataclass(frozen=True)
class DiagnosticsSnapshot(Sequence[DiagnosticEntry]):
    """Immutable view of the sink at one point in time."""

    entries: tuple[DiagnosticEntry, ...] = field(default_factory=tuple)

    def __getitem__(self, index):
        return self.entries[index]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[DiagnosticEntry]:
        return iter(self.entries)

    @property
    def errors(self) -> list[DiagnosticEntry]:
        return [entry for entry in self.entries if entry.is_error]

    @property
    def warnings(self) -> list[DiagnosticEntry]:
        return [entry for entry in self.entries if entry.severity == WARNING]

    @property
    def console(self) -> list[DiagnosticEntry]:
        return [entry for entry in self.entries if entry.source == "console"]

    @property
    def page_errors(self) -> list[DiagnosticEntry]:
        return [entry for entry in self.entries if entry.source == "pageerror"]

    def texts(self, severity: Optional[str] = None) -> list[str]:
        return [
            entry.text
            for entry in self.entries
            if severity is None or entry.severity == severity
        ]

    def unexpected_errors(self, allowlist: Iterable[AllowSpec] = ()) -> list[DiagnosticEntry]:
        """Error entries that no allow rule matches."""
        rules = as_rules(allowlist)
        return [
            entry
            for entry in self.errors
            if not any(rule.matches(entry) for rule in rules)
        ]


class DiagnosticsSink:
    """Append-only, ordered log of console messages and page errors."""

    def __init__(self):
        self._entries: list[DiagnosticEntry] = []
        self._sequence = itertools.count()

    def __len__(self) -> int:
        return len(self._entries)

    def record_console(self, message: Any) -> DiagnosticEntry:
        """Handler for the page "console" event."""
        console_type = message.type
        severity = ERROR if console_type in _ERROR_CONSOLE_TYPES else console_type
        entry = DiagnosticEntry(
            source="console",
            severity=severity,
            text=message.text,
            sequence=next(self._sequence),
            location=_format_location(getattr(message, "location", None)),
        )
        return self._append(entry)

    def record_page_error(self, error: Any) -> DiagnosticEntry:
        """Handler for the page "pageerror" event (uncaught exceptions)."""
        text = getattr(error, "message", None) or str(error)
        entry = DiagnosticEntry(
            source="pageerror",
            severity=ERROR,
            text=text,
            sequence=next(self._sequence),
            stack=getattr(error, "stack", None),
        )
        return self._append(entry)

    def snapshot(self) -> DiagnosticsSnapshot:
        return DiagnosticsSnapshot(tuple(self._entries))

    def _append(self, entry: DiagnosticEntry) -> DiagnosticEntry:
        self._entries.append(entry)
        logger.debug(f"Diagnostic #{entry.sequence}: {entry.describe()}")
        return entry


def _format_location(location: Optional[dict]) -> Optional[str]:
    if not location or not location.get("url"):
        return None
    return f"{location['url']}:{location.get('lineNumber', 0)}:{location.get('columnNumber', 0)}"
