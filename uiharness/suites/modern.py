"""
Modern UI walkthrough: one screenshot per feature.

Capture order: 1-modern-home, 2-dark-mode, 3-section-0 .. 5-section-2,
6-gamification, 7-3d-visualization, 8-calculator, 9-mobile-view.
"""

from loguru import logger

from uiharness.framework.assertions import ensure
from uiharness.framework.runner import Suite
from uiharness.pages.modern_app_page import ModernAppPage
from uiharness.pages.sections import CALCULATOR, EXERCISES, SECTIONS, VISUALIZATION
from uiharness.pages.similarity_app_page import SIMILAR_SIDES


def build_suite() -> Suite:
    suite = Suite("modern", context_factory=ModernAppPage)

    @suite.case("Enhanced UI elements")
    async def enhanced_elements(app: ModernAppPage) -> None:
        logger.info(f"   Title: {await app.title()}")
        await app.verify.expect_present(app.LEVEL, "Level system")
        await app.verify.expect_present(app.XP_BAR, "XP bar")
        await app.verify.expect_present(app.MASCOT, "Mascot character")
        await app.verify.expect_present(app.ACHIEVEMENTS_BAR, "Achievements system")
        await app.screenshot("modern-home")

    @suite.case("Dark mode")
    async def dark_mode(app: ModernAppPage) -> None:
        await app.toggle_dark_mode()
        await app.screenshot("dark-mode")
        ensure(await app.is_dark_mode(), "Dark mode not activated")

    @suite.case("Section navigation")
    async def section_navigation(app: ModernAppPage) -> None:
        buttons = await app.find_all(app.NAV_BUTTON)
        logger.info(f"   Found {len(buttons)} navigation buttons")
        for section in SECTIONS[:min(len(buttons), 3)]:
            await app.go_to(section, settle_ms=1000)
            await app.screenshot(f"section-{section.ordinal}")

    @suite.case("Gamification")
    async def gamification(app: ModernAppPage) -> None:
        await app.go_to_by_icon(EXERCISES, settle_ms=1000)
        await app.verify.expect_present(app.GAME_STATS, "Game stats")
        await app.answer_question(0)
        await app.screenshot("gamification")

    @suite.case("3D visualization")
    async def visualization_3d(app: ModernAppPage) -> None:
        await app.go_to_by_icon(VISUALIZATION, settle_ms=1000)
        await app.choose_mode("3D Mode")
        await app.screenshot("3d-visualization")
        await app.verify.expect_present(app.THREE_CONTAINER, "3D container")

    @suite.case("Enhanced calculator")
    async def calculator(app: ModernAppPage) -> None:
        await app.go_to_by_icon(CALCULATOR, settle_ms=1000)
        await app.calculate(*SIMILAR_SIDES)
        await app.screenshot("calculator")
        await app.verify.expect_present(app.RESULT, "Calculator result")

    @suite.case("Mobile responsiveness")
    async def mobile_view(app: ModernAppPage) -> None:
        await app.set_viewport(375, 812)
        await app.screenshot("mobile-view")
        await app.verify.expect_visible(app.NAVIGATION, "Navigation in mobile view")

    return suite
