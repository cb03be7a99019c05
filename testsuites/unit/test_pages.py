import pytest

from uiharness.framework.artifact_store import ArtifactStore
from uiharness.framework.errors import AssertionFailedError
from uiharness.pages import ModernAppPage, SimilarityAppPage
from uiharness.pages.sections import CALCULATOR, EXERCISES, INTRO, REALWORLD, SECTIONS, section_by_id
from uiharness.pages.similarity_app_page import DISSIMILAR_VERDICT, SIMILAR_SIDES, SIMILAR_VERDICT, reports_similar
from testsuites.unit.fakes import FakeElement


def modern_navigation(page):
    """Six modern-UI nav buttons; clicking one makes it the only active one."""
    buttons = []
    for section in SECTIONS:
        icon = {"i." + section.icon: [FakeElement()]} if section.icon else {}
        button = FakeElement(section.label, classes=("nav-button",), children=icon)
        buttons.append(button)

    def activate(index):
        def on_click(fake_page):
            for i, (section, button) in enumerate(zip(SECTIONS, buttons)):
                button.classes = ("nav-button", "active") if i == index else ("nav-button",)
                fake_page.elements[f"{section.nav_css}.active"] = [button] if i == index else []
        return on_click

    for i, (section, button) in enumerate(zip(SECTIONS, buttons)):
        button.on_click = activate(i)
        page.add(section.nav_css, button)
    page.add(".nav-button", *buttons)
    return buttons


def test_sections_follow_navigation_order():
    assert [s.id for s in SECTIONS] == ["intro", "triangles", "visualization", "calculator", "exercises", "realworld"]
    assert [s.ordinal for s in SECTIONS] == list(range(6))
    assert CALCULATOR.nav_css == ".nav-button:nth-child(4)"
    assert CALCULATOR.panel_css == ".calculator-section"
    assert section_by_id("realworld") is REALWORLD
    with pytest.raises(KeyError):
        section_by_id("settings")


@pytest.mark.asyncio
async def test_modern_go_to_marks_section_active(session, page, timeouts):
    modern_navigation(page)
    app = ModernAppPage(session, timeouts=timeouts)

    await app.go_to(EXERCISES)

    assert page.clicks == [EXERCISES.nav_css]
    assert await app.is_section_shown(EXERCISES)
    assert not await app.is_section_shown(INTRO)
    assert await app.nav_button_count() == 6


@pytest.mark.asyncio
async def test_modern_go_to_by_icon(session, page, timeouts):
    buttons = modern_navigation(page)
    app = ModernAppPage(session, timeouts=timeouts)

    await app.go_to_by_icon(CALCULATOR)

    assert page.clicks == [".nav-button"]
    assert "active" in buttons[CALCULATOR.ordinal].classes
    with pytest.raises(ValueError):
        await app.go_to_by_icon(INTRO)


@pytest.mark.asyncio
async def test_classic_calculator_fills_six_inputs(session, page, timeouts):
    inputs = [FakeElement() for _ in range(6)]
    page.add(SimilarityAppPage.CALCULATOR_INPUT, *inputs)

    def show_result(fake_page):
        fake_page.add(SimilarityAppPage.RESULT, FakeElement(f"สามเหลี่ยมทั้งสอง{SIMILAR_VERDICT} อัตราส่วน 1:2"))

    page.add(SimilarityAppPage.CALCULATE_BUTTON, FakeElement("คำนวณ", on_click=show_result))
    app = SimilarityAppPage(session, timeouts=timeouts)

    text = await app.calculate(*SIMILAR_SIDES)

    assert [e.value for e in inputs] == ["5", "6", "7", "10", "12", "14"]
    assert reports_similar(text)


@pytest.mark.asyncio
async def test_calculator_needs_six_inputs(session, page, timeouts):
    page.add(ModernAppPage.CALCULATOR_INPUT, *[FakeElement() for _ in range(3)])
    app = ModernAppPage(session, timeouts=timeouts)

    with pytest.raises(AssertionFailedError, match="at least 6"):
        await app.enter_sides(*SIMILAR_SIDES)


@pytest.mark.asyncio
async def test_dark_mode_and_sound_toggles(session, page, timeouts):
    def dark(fake_page):
        fake_page.elements[ModernAppPage.DARK_MODE_ACTIVE] = (
            [] if fake_page.elements.get(ModernAppPage.DARK_MODE_ACTIVE) else [FakeElement()]
        )

    def mute(fake_page):
        fake_page.elements[ModernAppPage.MUTED_ICON] = (
            [] if fake_page.elements.get(ModernAppPage.MUTED_ICON) else [FakeElement()]
        )

    page.add(ModernAppPage.DARK_MODE_BUTTON, FakeElement(on_click=dark))
    page.add(ModernAppPage.SOUND_BUTTON, FakeElement(on_click=mute))
    app = ModernAppPage(session, timeouts=timeouts)

    await app.toggle_dark_mode()
    assert await app.is_dark_mode()
    await app.toggle_dark_mode()
    assert not await app.is_dark_mode()

    await app.toggle_sound(settle_ms=0)
    assert await app.is_muted()


@pytest.mark.asyncio
async def test_choose_mode_matches_button_text(session, page, timeouts):
    page.add(".mode-btn", FakeElement("2D Mode"), FakeElement("3D Mode"))
    app = ModernAppPage(session, timeouts=timeouts)

    await app.choose_mode("3D Mode", settle_ms=0)

    assert page.clicks == [".mode-btn"]


@pytest.mark.asyncio
async def test_visit_all_sections_captures_each(session, page, timeouts, tmp_path):
    for section in SECTIONS:
        page.add(section.nav_css, FakeElement(section.name))
        page.add(section.panel_css, FakeElement())
    store = ArtifactStore(tmp_path, attach_to_allure=False)
    store.prepare()
    app = SimilarityAppPage(session, artifacts=store, timeouts=timeouts)

    await app.visit_all_sections()

    assert [a.name for a in store.artifacts] == [f"{i}-{s.id}.png" for i, s in enumerate(SECTIONS, start=1)]


def test_dissimilar_verdict_is_not_similar():
    assert reports_similar(f"สามเหลี่ยมทั้งสอง{SIMILAR_VERDICT}")
    assert not reports_similar(f"สามเหลี่ยมทั้งสอง{DISSIMILAR_VERDICT}")
    assert not reports_similar("")
