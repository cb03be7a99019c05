import asyncio
import time

import pytest

from uiharness.framework.element_locator import ElementLocator, Selector
from uiharness.framework.errors import LocatorTimeoutError
from testsuites.unit.fakes import FakeElement


@pytest.fixture
def locator(session):
    return ElementLocator(session, default_timeout_ms=200, poll_ms=10)


def test_selector_str_and_builders():
    selector = Selector(".nav-button").having("i.fa-cube").containing("Lab").at(2).only_visible()

    assert selector.has == Selector("i.fa-cube")
    assert selector.nth == 2
    assert str(selector) == ".nav-button >> visible [text*='Lab'] [has=i.fa-cube] [nth=2]"
    assert str(Selector(".x", name="Calculate button")) == "Calculate button"
    assert Selector.of(".x") == Selector(".x")
    with pytest.raises(TypeError):
        Selector.of(42)


@pytest.mark.asyncio
async def test_find_returns_none_when_absent(locator):
    assert await locator.find(".missing") is None
    assert await locator.find_all(".missing") == []


@pytest.mark.asyncio
async def test_find_all_in_document_order(page, locator):
    page.add(".nav-button", *[FakeElement(text=f"b{i}") for i in range(6)])

    buttons = await locator.find_all(".nav-button")

    assert len(buttons) == 6
    assert [await b.text_content() for b in buttons] == [f"b{i}" for i in range(6)]
    assert await locator.count(".nav-button") == 6


@pytest.mark.asyncio
async def test_nth_visible_match(page, locator):
    page.add(
        ".option-btn",
        FakeElement(text="hidden", visible=False),
        FakeElement(text="A"),
        FakeElement(text="B"),
    )

    second_visible = await locator.find(Selector(".option-btn", visible=True).at(1))

    assert await second_visible.text_content() == "B"


@pytest.mark.asyncio
async def test_text_filter_is_case_sensitive(page, locator):
    page.add(".mode-btn", FakeElement(text="2D Mode"), FakeElement(text="3D Mode"))

    assert await locator.count(Selector(".mode-btn").containing("3D Mode")) == 1
    assert await locator.count(Selector(".mode-btn").containing("3d mode")) == 0


@pytest.mark.asyncio
async def test_has_descendant_filter(page, locator):
    page.add(
        ".nav-button",
        FakeElement(text="calc", children={"i.fa-calculator": [FakeElement()]}),
        FakeElement(text="cube", children={"i.fa-cube": [FakeElement()]}),
    )

    found = await locator.find(Selector(".nav-button").having("i.fa-cube"))

    assert await found.text_content() == "cube"


@pytest.mark.asyncio
async def test_resolution_is_not_cached(page, locator):
    assert await locator.find(".result-panel") is None

    page.add(".result-panel", FakeElement(text="done"))

    assert await locator.find(".result-panel") is not None


@pytest.mark.asyncio
async def test_wait_for_returns_visible_element(page, locator):
    page.add(".app-title", FakeElement(text="Similar"))

    element = await locator.wait_for(".app-title")

    assert await element.text_content() == "Similar"


@pytest.mark.asyncio
async def test_wait_for_times_out_no_earlier_than_bound(page, locator):
    page.add(".ghost", FakeElement(visible=False))

    start = time.monotonic()
    with pytest.raises(LocatorTimeoutError) as excinfo:
        await locator.wait_for(".ghost", timeout_ms=150)
    elapsed = time.monotonic() - start

    assert elapsed >= 0.15
    assert excinfo.value.timeout_ms == 150
    assert "[1x] .ghost" in locator.get_health_report()


@pytest.mark.asyncio
async def test_wait_for_sees_element_appear(page, locator):
    async def render_later():
        await asyncio.sleep(0.05)
        page.add(".late", FakeElement(text="here"))

    task = asyncio.create_task(render_later())
    element = await locator.wait_for(".late", timeout_ms=1000)
    await task

    assert await element.text_content() == "here"


def test_health_report_without_timeouts(locator):
    assert locator.get_health_report() == "✅ No locator timeouts."
