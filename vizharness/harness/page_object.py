"""Base class for per-fixture Page Objects."""

from typing import Optional

from vizharness.harness import actions
from vizharness.harness.conditions import Condition
from vizharness.harness.harness import Harness


class PageObject:
    """
    Wraps a Harness with the selectors of one visualizer page.

    Subclasses set url (relative to settings.base_url or absolute) and,
    optionally, ready: a Condition that holds once the page finished its
    initial render.

    Example:
        class SetPage(PageObject):
            url = "html/set-demo.html"
            ready = is_visible("#addValueBtn")

            async def add(self, value):
                await self.fill("#valueInput", value)
                await self.click("#addValueBtn")
    """

    url: str = ""
    ready: Optional[Condition] = None

    def __init__(self, harness: Harness):
        self.harness = harness

    @property
    def page(self):
        return self.harness.page

    async def open(self) -> "PageObject":
        if not self.url:
            raise ValueError(f"{type(self).__name__} does not define a url")
        await self.harness.goto(self.url)
        if self.ready is not None:
            await self.harness.wait_for(self.ready)
        return self

    async def fill(self, target: str, value) -> None:
        await self.harness.perform(actions.fill(target, value))

    async def click(self, target: str) -> None:
        await self.harness.perform(actions.click(target))

    async def click_at(self, target: str, x: float, y: float) -> None:
        await self.harness.perform(actions.click_at(target, x, y))

    async def press(self, key: str, target: Optional[str] = None) -> None:
        await self.harness.perform(actions.press(key, target))

    async def select(self, target: str, value) -> None:
        await self.harness.perform(actions.select(target, value))

    async def text(self, target: str) -> str:
        return await self.harness.text(target)

    async def count(self, target: str) -> int:
        return await self.harness.count(target)

    async def expect(self, condition: Condition, timeout_ms: Optional[int] = None) -> None:
        await self.harness.wait_for(condition, timeout_ms=timeout_ms)
