import pytest

from vizharness.harness import actions
from vizharness.harness.actions import Action, apply_action


class RecordingLocator:
    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        async def call(*args, **kwargs):
            self.calls.append((name, args, kwargs))

        return call


class RecordingKeyboard:
    def __init__(self):
        self.pressed = []

    async def press(self, key):
        self.pressed.append(key)


class KeyboardPage:
    def __init__(self):
        self.keyboard = RecordingKeyboard()


def test_fill_requires_value():
    with pytest.raises(ValueError):
        Action("fill", "#valueInput")


def test_click_requires_target():
    with pytest.raises(ValueError):
        Action("click")


def test_press_without_target_is_page_level():
    action = actions.press("Enter")

    assert action.target is None
    assert action.describe() == "press('Enter')"


def test_fill_coerces_value_to_string():
    assert actions.fill("#weight", 7).value == "7"


def test_describe_includes_target_and_value():
    assert actions.click("#addValueBtn").describe() == "click(#addValueBtn)"
    assert actions.fill("#valueInput", "apple").describe() == "fill(#valueInput, 'apple')"


@pytest.mark.parametrize(
    "action, expected",
    [
        (actions.fill("#valueInput", "apple"), ("fill", ("apple",))),
        (actions.click("#addValueBtn"), ("click", ())),
        (actions.dblclick(".node"), ("dblclick", ())),
        (actions.press("ArrowRight", "#canvas"), ("press", ("ArrowRight",))),
        (actions.select("#algorithm", "dijkstra"), ("select_option", ("dijkstra",))),
        (actions.check("#directed"), ("check", ())),
        (actions.uncheck("#directed"), ("uncheck", ())),
        (actions.hover(".bar"), ("hover", ())),
    ],
)
async def test_apply_action_dispatches_to_locator(action, expected):
    locator = RecordingLocator()

    await apply_action(action, locator, KeyboardPage(), timeout_ms=1234)

    name, args, kwargs = locator.calls[0]
    assert (name, args) == expected
    assert kwargs == {"timeout": 1234}


async def test_apply_action_presses_on_page_without_target():
    page = KeyboardPage()

    await apply_action(actions.press("Escape"), None, page, timeout_ms=1000)

    assert page.keyboard.pressed == ["Escape"]


def test_click_at_requires_position():
    with pytest.raises(ValueError):
        Action("click_at", "#graphCanvas")


def test_drag_requires_destination():
    with pytest.raises(ValueError):
        Action("drag", "#node-A")


def test_type_text_requires_value():
    with pytest.raises(ValueError):
        Action("type_text", "#valueInput")


def test_describe_pointer_actions():
    assert actions.click_at("#graphCanvas", 120, 80.5).describe() == "click_at(#graphCanvas @ (120, 80.5))"
    assert actions.drag("#node-A", "#node-B").describe() == "drag(#node-A, #node-B)"
    assert (
        actions.drag("canvas", "canvas", (10, 10), (200, 40)).describe()
        == "drag(canvas @ (10, 10), canvas @ (200, 40))"
    )


async def test_apply_click_at_passes_offset():
    locator = RecordingLocator()

    await apply_action(actions.click_at("#graphCanvas", 120, 80), locator, KeyboardPage(), timeout_ms=500)

    assert locator.calls == [("click", (), {"position": {"x": 120, "y": 80}, "timeout": 500})]


async def test_apply_type_text_types_sequentially():
    locator = RecordingLocator()

    await apply_action(actions.type_text("#valueInput", "42"), locator, KeyboardPage(), timeout_ms=500)

    assert locator.calls == [("press_sequentially", ("42",), {"timeout": 500})]


async def test_apply_drag_moves_to_destination():
    source = RecordingLocator()
    destination = RecordingLocator()

    await apply_action(
        actions.drag("#node-A", "#node-B", target_position=(5, 6)),
        source,
        KeyboardPage(),
        timeout_ms=500,
        destination=destination,
    )

    assert source.calls == [
        (
            "drag_to",
            (destination,),
            {"source_position": None, "target_position": {"x": 5, "y": 6}, "timeout": 500},
        )
    ]


async def test_apply_drag_without_resolved_destination_fails():
    with pytest.raises(ValueError):
        await apply_action(actions.drag("#node-A", "#node-B"), RecordingLocator(), KeyboardPage(), timeout_ms=500)
