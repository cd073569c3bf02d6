"""Native dialog (alert/confirm/prompt) interception.

A page with a "dialog" listener never auto-dismisses dialogs, so once the
harness is attached every dialog goes through DialogInterceptor.handle:

1. A one-shot interceptor armed with arm() answers exactly one dialog and
   resolves its DialogWatch with the captured message.
2. Otherwise a persistent responder set with set_persistent() answers it.
3. Otherwise the dialog is unexpected: it is dismissed so the page does
   not block, and UnexpectedDialogError is kept pending until the harness
   surfaces it on its next operation.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Literal, Optional

from vizharness.harness.errors import HarnessError, UnexpectedDialogError
from vizharness.utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class DialogResponse:
    """Fixed answer given to a dialog."""

    action: Literal["accept", "dismiss"]
    prompt_text: Optional[str] = None

    def __str__(self) -> str:
        if self.prompt_text is not None:
            return f"accept({self.prompt_text!r})"
        return self.action


ACCEPT = DialogResponse("accept")
DISMISS = DialogResponse("dismiss")


def accept_with_text(text: str) -> DialogResponse:
    """Accept a prompt() dialog, typing text into it."""
    return DialogResponse("accept", str(text))


@dataclass(frozen=True)
class DialogRecord:
    """A dialog the page raised and how it was answered."""

    type: str  # "alert", "confirm", "prompt" or "beforeunload"
    message: str
    default_value: str
    response: DialogResponse
    expected: bool


@dataclass(frozen=True)
class DialogOutcome:
    """Result of a one-shot interception. seen=False means no dialog came."""

    seen: bool
    record: Optional[DialogRecord] = None

    @property
    def message(self) -> Optional[str]:
        return self.record.message if self.record else None

    @property
    def type(self) -> Optional[str]:
        return self.record.type if self.record else None


NO_DIALOG = DialogOutcome(seen=False)


class DialogWatch:
    """
    Awaitable handle returned by DialogInterceptor.arm.

    Awaiting it yields a DialogOutcome. If no dialog arrives within the
    timeout the interceptor is disarmed and the outcome is NO_DIALOG.
    """

    def __init__(self, interceptor: "DialogInterceptor", future: asyncio.Future, timeout_ms: int):
        self._interceptor = interceptor
        self._future = future
        self._timeout_ms = timeout_ms
        self._outcome: Optional[DialogOutcome] = None

    def done(self) -> bool:
        return self._outcome is not None or self._future.done()

    async def result(self, timeout_ms: Optional[int] = None) -> DialogOutcome:
        if self._outcome is not None:
            return self._outcome

        timeout_ms = self._timeout_ms if timeout_ms is None else timeout_ms
        try:
            self._outcome = await asyncio.wait_for(
                asyncio.shield(self._future), timeout_ms / 1000
            )
        except asyncio.TimeoutError:
            self._interceptor.disarm(self._future)
            logger.info(f"No dialog seen within {timeout_ms} ms")
            self._outcome = NO_DIALOG
        return self._outcome

    def __await__(self):
        return self.result().__await__()


class DialogInterceptor:
    """Routes page dialogs to a one-shot or persistent response."""

    def __init__(self):
        self.history: list[DialogRecord] = []
        self._armed: Optional[tuple[DialogResponse, asyncio.Future]] = None
        self._persistent: Optional[DialogResponse] = None
        self._pending_error: Optional[UnexpectedDialogError] = None

    @property
    def armed(self) -> bool:
        return self._armed is not None

    @property
    def persistent(self) -> Optional[DialogResponse]:
        return self._persistent

    def arm(self, response: DialogResponse, timeout_ms: int) -> DialogWatch:
        """
        Arm a one-shot handler for the next dialog.

        Args:
            response: Answer to give the dialog
            timeout_ms: How long awaiting the returned watch waits

        Returns:
            DialogWatch resolving to the DialogOutcome

        Raises:
            HarnessError: If a previous one-shot is still armed
        """
        if self._armed is not None:
            raise HarnessError("A dialog interceptor is already armed")

        future = asyncio.get_running_loop().create_future()
        self._armed = (response, future)
        logger.debug(f"Dialog interceptor armed with {response}")
        return DialogWatch(self, future, timeout_ms)

    def disarm(self, future: Optional[asyncio.Future] = None) -> None:
        """Drop the armed one-shot (only if it still owns future, when given)."""
        if self._armed is None:
            return
        if future is not None and self._armed[1] is not future:
            return
        self._armed = None

    def set_persistent(self, response: Optional[DialogResponse]) -> None:
        """Answer every dialog with response while no one-shot is armed."""
        self._persistent = response

    def raise_pending(self) -> None:
        """Raise the UnexpectedDialogError left by an unanswered dialog, once."""
        if self._pending_error is not None:
            error, self._pending_error = self._pending_error, None
            raise error

    async def handle(self, dialog: Any) -> None:
        """Handler for the page "dialog" event."""
        if self._armed is not None:
            response, future = self._armed
            self._armed = None
            record = self._record(dialog, response, expected=True)
            try:
                await self._answer(dialog, record)
            except Exception as exc:
                if not future.done():
                    future.set_exception(exc)
                raise
            if not future.done():
                future.set_result(DialogOutcome(seen=True, record=record))
            return

        if self._persistent is not None:
            await self._answer(dialog, self._record(dialog, self._persistent, expected=True))
            return

        # Pending before answering: the action that raised the dialog may
        # return as soon as the dialog is dismissed
        record = self._record(dialog, DISMISS, expected=False)
        logger.warning(f"Unexpected {record.type} dialog dismissed: {record.message!r}")
        if self._pending_error is None:
            self._pending_error = UnexpectedDialogError(record)
        await self._answer(dialog, record)

    def _record(self, dialog: Any, response: DialogResponse, expected: bool) -> DialogRecord:
        record = DialogRecord(
            type=dialog.type,
            message=dialog.message,
            default_value=dialog.default_value,
            response=response,
            expected=expected,
        )
        self.history.append(record)
        return record

    async def _answer(self, dialog: Any, record: DialogRecord) -> None:
        response = record.response
        if response.action == "dismiss":
            await dialog.dismiss()
        elif response.prompt_text is not None:
            await dialog.accept(response.prompt_text)
        else:
            await dialog.accept()

        logger.info(f"{record.type} dialog {record.message!r} answered with {response}")
