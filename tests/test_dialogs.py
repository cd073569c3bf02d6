import pytest

from conftest import FakeDialog
from vizharness.harness.dialogs import (
    ACCEPT,
    DISMISS,
    NO_DIALOG,
    DialogInterceptor,
    accept_with_text,
)
from vizharness.harness.errors import HarnessError, UnexpectedDialogError


async def test_one_shot_captures_message_and_accepts():
    interceptor = DialogInterceptor()
    watch = interceptor.arm(ACCEPT, timeout_ms=1000)
    dialog = FakeDialog("alert", "Please enter a value to add.")

    await interceptor.handle(dialog)
    outcome = await watch

    assert outcome.seen
    assert outcome.message == "Please enter a value to add."
    assert outcome.type == "alert"
    assert dialog.answer == ("accept", None)
    assert not interceptor.armed


async def test_prompt_is_answered_with_text():
    interceptor = DialogInterceptor()
    watch = interceptor.arm(accept_with_text("5"), timeout_ms=1000)
    dialog = FakeDialog("prompt", "Enter capacity:", default_value="10")

    await interceptor.handle(dialog)
    outcome = await watch.result()

    assert dialog.answer == ("accept", "5")
    assert outcome.record.default_value == "10"


async def test_confirm_can_be_dismissed():
    interceptor = DialogInterceptor()
    watch = interceptor.arm(DISMISS, timeout_ms=1000)
    dialog = FakeDialog("confirm", "Clear all nodes?")

    await interceptor.handle(dialog)

    assert (await watch).record.response == DISMISS
    assert dialog.answer == ("dismiss", None)


async def test_second_dialog_without_new_interceptor_is_unexpected():
    interceptor = DialogInterceptor()
    watch = interceptor.arm(ACCEPT, timeout_ms=1000)
    await interceptor.handle(FakeDialog("alert", "first"))
    second = FakeDialog("alert", "second")

    await interceptor.handle(second)

    assert (await watch).message == "first"
    assert second.answer == ("dismiss", None)
    with pytest.raises(UnexpectedDialogError) as excinfo:
        interceptor.raise_pending()
    assert excinfo.value.record.message == "second"
    assert not excinfo.value.record.expected


async def test_pending_error_is_raised_once():
    interceptor = DialogInterceptor()
    await interceptor.handle(FakeDialog("alert", "surprise"))

    with pytest.raises(UnexpectedDialogError):
        interceptor.raise_pending()
    interceptor.raise_pending()


async def test_no_dialog_resolves_to_explicit_outcome():
    interceptor = DialogInterceptor()
    watch = interceptor.arm(ACCEPT, timeout_ms=50)

    outcome = await watch

    assert outcome is NO_DIALOG
    assert not outcome.seen
    assert outcome.message is None
    assert not interceptor.armed
    assert watch.done()


async def test_dialog_after_timeout_is_unexpected():
    interceptor = DialogInterceptor()
    await interceptor.arm(ACCEPT, timeout_ms=50)

    await interceptor.handle(FakeDialog("alert", "late"))

    with pytest.raises(UnexpectedDialogError):
        interceptor.raise_pending()


async def test_cannot_arm_twice():
    interceptor = DialogInterceptor()
    interceptor.arm(ACCEPT, timeout_ms=1000)

    with pytest.raises(HarnessError):
        interceptor.arm(ACCEPT, timeout_ms=1000)


async def test_persistent_responder_handles_every_dialog():
    interceptor = DialogInterceptor()
    interceptor.set_persistent(accept_with_text("3"))
    dialogs = [FakeDialog("prompt", "Vertex?"), FakeDialog("prompt", "Weight?")]

    for dialog in dialogs:
        await interceptor.handle(dialog)

    assert [dialog.answer for dialog in dialogs] == [("accept", "3"), ("accept", "3")]
    assert [record.message for record in interceptor.history] == ["Vertex?", "Weight?"]
    interceptor.raise_pending()


async def test_one_shot_takes_precedence_over_persistent():
    interceptor = DialogInterceptor()
    interceptor.set_persistent(DISMISS)
    watch = interceptor.arm(ACCEPT, timeout_ms=1000)
    dialog = FakeDialog("confirm", "Reset?")

    await interceptor.handle(dialog)

    assert dialog.answer == ("accept", None)
    assert (await watch).seen
