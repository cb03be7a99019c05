"""
Quick smoke suite for the modern UI.

Element checks use bounded waits (5s) instead of one-shot lookups; no
screenshots except on fatal error.
"""

from uiharness.framework.assertions import ensure
from uiharness.framework.runner import Suite
from uiharness.pages.modern_app_page import ModernAppPage
from uiharness.pages.sections import CALCULATOR, EXERCISES, VISUALIZATION

ELEMENT_TIMEOUT_MS = 5000
RESIZE_SETTLE_MS = 500

# Quick checks of core page elements: case name -> selector attribute.
CORE_ELEMENTS = (
    ("App title", "TITLE"),
    ("Level system", "LEVEL"),
    ("XP bar", "XP_BAR"),
    ("Mascot", "MASCOT"),
    ("Achievements", "ACHIEVEMENTS_BAR"),
)


def _element_check(attribute: str):
    async def check(app: ModernAppPage) -> None:
        await app.wait_for(getattr(app, attribute), timeout_ms=ELEMENT_TIMEOUT_MS)
    return check


def build_suite() -> Suite:
    suite = Suite("quick", context_factory=ModernAppPage)

    for name, attribute in CORE_ELEMENTS:
        suite.add(name, _element_check(attribute))

    @suite.case("Navigation buttons")
    async def navigation_buttons(app: ModernAppPage) -> None:
        await app.verify.expect_count(app.NAV_BUTTON, 6, "nav buttons")

    @suite.case("Dark mode")
    async def dark_mode(app: ModernAppPage) -> None:
        await app.toggle_dark_mode()
        ensure(await app.is_dark_mode(), "Dark mode toggle clicked but mode not applied")
        await app.toggle_dark_mode()

    @suite.case("Sound toggle")
    async def sound_toggle(app: ModernAppPage) -> None:
        await app.verify.expect_present(app.SOUND_BUTTON, "Sound button")

    @suite.case("Calculator")
    async def calculator(app: ModernAppPage) -> None:
        await app.go_to_by_icon(CALCULATOR, settle_ms=1000)
        await app.verify.expect_count(app.CALCULATOR_INPUT, 6, "calculator inputs", at_least=True)
        await app.verify.expect_present(app.CALCULATE_BUTTON, "Calculate button")

    @suite.case("Calculator computation")
    async def calculator_computation(app: ModernAppPage) -> None:
        await app.go_to_by_icon(CALCULATOR, settle_ms=1000)
        await app.calculate((3, 3, 3), (6, 6, 6))
        await app.verify.expect_present(app.RESULT, "Result panel")

    @suite.case("Quiz interface")
    async def quiz_interface(app: ModernAppPage) -> None:
        await app.go_to_by_icon(EXERCISES, settle_ms=1000)
        await app.verify.expect_present(app.QUESTION, "Question text")
        await app.verify.expect_count(app.OPTION, 1, "answer options", at_least=True)

    @suite.case("Quiz interaction")
    async def quiz_interaction(app: ModernAppPage) -> None:
        await app.go_to_by_icon(EXERCISES, settle_ms=1000)
        await app.answer_question(0)
        await app.verify.expect_present(app.EXPLANATION, "Explanation")

    @suite.case("Visualization controls")
    async def visualization_controls(app: ModernAppPage) -> None:
        await app.go_to_by_icon(VISUALIZATION, settle_ms=1000)
        await app.verify.expect_present(app.MODE_BUTTON.containing("3D Mode"), "3D mode button")
        await app.verify.expect_present(app.SCALE_SLIDER, "Scale slider")

    @suite.case("3D mode")
    async def mode_3d(app: ModernAppPage) -> None:
        await app.go_to_by_icon(VISUALIZATION, settle_ms=1000)
        await app.choose_mode("3D Mode", settle_ms=1500)
        await app.verify.expect_present(app.THREE_CONTAINER, "3D container")

    @suite.case("Mobile view")
    async def mobile_view(app: ModernAppPage) -> None:
        await app.set_viewport(375, 812, settle_ms=RESIZE_SETTLE_MS)
        await app.verify.expect_present(app.NAVIGATION, "Navigation")

    @suite.case("Tablet view")
    async def tablet_view(app: ModernAppPage) -> None:
        await app.set_viewport(768, 1024, settle_ms=RESIZE_SETTLE_MS)

    @suite.case("Desktop view")
    async def desktop_view(app: ModernAppPage) -> None:
        await app.set_viewport(1920, 1080, settle_ms=RESIZE_SETTLE_MS)

    return suite
