import pytest

from vizharness.harness._selectors import ParsedTarget, parse_target, resolve_target


class RecordingScope:
    """Records the locator calls made on it; every call returns a child scope."""

    def __init__(self, path=()):
        self.path = path

    def _child(self, call):
        return RecordingScope(self.path + (call,))

    def locator(self, selector):
        return self._child(("locator", selector))

    def get_by_role(self, role, name=None):
        return self._child(("role", role, name))

    def get_by_text(self, text):
        return self._child(("text", text))

    def get_by_placeholder(self, text):
        return self._child(("placeholder", text))

    def get_by_label(self, text):
        return self._child(("label", text))

    def get_by_test_id(self, test_id):
        return self._child(("testid", test_id))


@pytest.mark.parametrize(
    "target, expected",
    [
        ("#addValueBtn", ParsedTarget(type="css", value="#addValueBtn")),
        (".matrix-cell", ParsedTarget(type="css", value=".matrix-cell")),
        ("[data-index='3']", ParsedTarget(type="css", value="[data-index='3']")),
        ("span, p", ParsedTarget(type="css", value="span, p")),
        ("canvas", ParsedTarget(type="css", value="canvas")),
        ("li:nth-child(2)", ParsedTarget(type="css", value="li:nth-child(2)")),
        ("ul li", ParsedTarget(type="css", value="ul li")),
        ("text:Add to set", ParsedTarget(type="text", value="Add to set")),
        ("placeholder:Enter value", ParsedTarget(type="placeholder", value="Enter value")),
        ("label:Capacity", ParsedTarget(type="label", value="Capacity")),
        ("testid:heap-root", ParsedTarget(type="testid", value="heap-root")),
        ("button:Insert", ParsedTarget(type="role", value="button:Insert", role="button", name="Insert")),
        ("Button", ParsedTarget(type="role", value="Button", role="button")),
        ("Run Kruskal", ParsedTarget(type="text", value="Run Kruskal")),
        ("button:Last", ParsedTarget(type="role", value="button:Last", role="button", name="Last")),
    ],
)
def test_parse_target(target, expected):
    assert parse_target(target) == expected


@pytest.mark.parametrize(
    "target",
    [
        'input[type="text"]',
        "div.bar",
        "circle.node",
        "svg g.edge",
        "td#cell-3",
        "div>span",
        'button:has-text("Insert")',
        "button:disabled",
        "option:checked",
        "li:first-child",
        "button:not(.hidden)",
        "tr:nth-of-type(2) td",
    ],
)
def test_tag_with_css_suffix_is_css(target):
    assert parse_target(target) == ParsedTarget(type="css", value=target)


def test_pseudo_class_suffix_goes_to_locator():
    scope = resolve_target('#controls >> button:has-text("Insert")', RecordingScope())

    assert scope.path == (
        ("locator", "#controls"),
        ("locator", 'button:has-text("Insert")'),
    )


def test_parse_target_rejects_blank():
    with pytest.raises(ValueError):
        parse_target("   ")


def test_resolve_target_builds_locator_from_page():
    scope = resolve_target("button:Dequeue", RecordingScope())

    assert scope.path == (("role", "button", "Dequeue"),)


def test_resolve_target_chains_parts():
    scope = resolve_target("#queue >> .slot >> text:5", RecordingScope())

    assert scope.path == (
        ("locator", "#queue"),
        ("locator", ".slot"),
        ("text", "5"),
    )
