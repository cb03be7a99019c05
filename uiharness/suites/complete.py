"""
Comprehensive function suite for the modern UI (``index-modern.html``).

Every case moves to the section it needs itself, so a failing case never
leaves the next one on the wrong section.
"""

from uiharness.framework.assertions import ensure
from uiharness.framework.runner import Suite
from uiharness.pages.modern_app_page import ModernAppPage
from uiharness.pages.sections import CALCULATOR, EXERCISES, INTRO, REALWORLD, SECTIONS, VISUALIZATION
from uiharness.pages.similarity_app_page import SIMILAR_SIDES

SECTION_SWITCH_MS = 1000
RESIZE_SETTLE_MS = 1000


def build_suite() -> Suite:
    suite = Suite("complete", context_factory=ModernAppPage)

    # 1. Navigation system

    @suite.case("Navigation buttons exist")
    async def navigation_buttons(app: ModernAppPage) -> None:
        await app.verify.expect_count(app.NAV_BUTTON, 6, "nav buttons")

    @suite.case("Navigate to all sections")
    async def navigate_all_sections(app: ModernAppPage) -> None:
        for section in SECTIONS:
            await app.go_to(section)
            ensure(await app.is_section_shown(section), f"Section {section.label} not active")

    # 2. Header toggles

    @suite.case("Dark mode toggle")
    async def dark_mode_toggle(app: ModernAppPage) -> None:
        await app.verify.expect_present(app.DARK_MODE_BUTTON, "Dark mode button")
        await app.toggle_dark_mode()
        ensure(await app.is_dark_mode(), "Dark mode not applied")
        await app.toggle_dark_mode()

    @suite.case("Sound toggle")
    async def sound_toggle(app: ModernAppPage) -> None:
        await app.verify.expect_present(app.SOUND_BUTTON, "Sound button")
        await app.toggle_sound()
        ensure(await app.is_muted(), "Sound not muted")
        await app.toggle_sound()

    # 3. Gamification

    @suite.case("XP and Level display")
    async def xp_and_level(app: ModernAppPage) -> None:
        await app.verify.expect_present(app.LEVEL, "Level display")
        await app.verify.expect_present(app.XP_BAR, "XP bar")
        await app.verify.expect_present(app.XP_TEXT, "XP text")

    @suite.case("Achievements bar")
    async def achievements_bar(app: ModernAppPage) -> None:
        await app.verify.expect_present(app.ACHIEVEMENTS_BAR, "Achievements bar")
        await app.verify.expect_present(app.NO_ACHIEVEMENTS, "No achievements message")

    @suite.case("Daily streak display")
    async def daily_streak(app: ModernAppPage) -> None:
        await app.verify.expect_present(app.STREAK, "Streak display")

    @suite.case("Mascot presence and animation")
    async def mascot(app: ModernAppPage) -> None:
        await app.verify.expect_present(app.MASCOT, "Mascot")
        await app.verify.expect_present(app.MASCOT_SPEECH, "Mascot speech bubble")

    # 4. Calculator

    @suite.case("Calculator inputs")
    async def calculator_inputs(app: ModernAppPage) -> None:
        await app.go_to(CALCULATOR, settle_ms=SECTION_SWITCH_MS)
        await app.verify.expect_count(app.CALCULATOR_INPUT, 6, "inputs", at_least=True)
        await app.enter_sides(*SIMILAR_SIDES)

    @suite.case("Calculate ratio")
    async def calculate_ratio(app: ModernAppPage) -> None:
        await app.go_to(CALCULATOR, settle_ms=SECTION_SWITCH_MS)
        await app.verify.expect_present(app.CALCULATE_BUTTON, "Calculate button")
        await app.run_calculation()
        await app.verify.expect_present(app.RESULT, "Result panel")
        ensure(await app.verify.is_present(app.RESULT_SIMILAR), "Should show similar triangles")

    # 5. Quiz & exercises

    @suite.case("Quiz interface")
    async def quiz_interface(app: ModernAppPage) -> None:
        await app.go_to(EXERCISES, settle_ms=SECTION_SWITCH_MS)
        await app.verify.expect_present(app.QUIZ, "Quiz container")
        await app.verify.expect_present(app.QUESTION, "Question text")
        await app.verify.expect_count(app.OPTION, 4, "options")

    @suite.case("Game stats display")
    async def game_stats(app: ModernAppPage) -> None:
        await app.go_to(EXERCISES, settle_ms=SECTION_SWITCH_MS)
        await app.verify.expect_present(app.GAME_STATS, "Game stats")
        await app.verify.expect_present(app.TIMER, "Timer")

    @suite.case("Answer question")
    async def answer_question(app: ModernAppPage) -> None:
        await app.go_to(EXERCISES, settle_ms=SECTION_SWITCH_MS)
        await app.answer_question(0)
        await app.verify.expect_present(app.EXPLANATION, "Explanation after answer")
        await app.verify.expect_present(app.NEXT_BUTTON, "Next button")

    # 6. 3D visualization

    @suite.case("Mode selector (2D/3D)")
    async def mode_selector(app: ModernAppPage) -> None:
        await app.go_to(VISUALIZATION, settle_ms=SECTION_SWITCH_MS)
        await app.verify.expect_present(app.MODE_SELECTOR, "Mode selector")
        await app.verify.expect_present(app.MODE_BUTTON.containing("2D Mode"), "2D mode button")
        await app.verify.expect_present(app.MODE_BUTTON.containing("3D Mode"), "3D mode button")

    @suite.case("Scale slider")
    async def scale_slider(app: ModernAppPage) -> None:
        await app.go_to(VISUALIZATION, settle_ms=SECTION_SWITCH_MS)
        await app.verify.expect_present(app.SCALE_SLIDER, "Scale slider")
        await app.set_scale(2)
        await app.verify.expect_present(app.STATS_DISPLAY, "Stats display")

    @suite.case("Switch to 3D mode")
    async def switch_to_3d(app: ModernAppPage) -> None:
        await app.go_to(VISUALIZATION, settle_ms=SECTION_SWITCH_MS)
        await app.choose_mode("3D Mode")
        await app.verify.expect_present(app.THREE_CONTAINER, "3D container")

    # 7. Real world

    @suite.case("Example cards")
    async def example_cards(app: ModernAppPage) -> None:
        await app.go_to(REALWORLD, settle_ms=SECTION_SWITCH_MS)
        await app.verify.expect_count(app.EXAMPLE_CARD, 3, "example cards")
        await app.open_example_card(0)
        await app.verify.expect_present(app.CARD_DETAIL, "Card detail")

    @suite.case("Practice problem")
    async def practice_problem(app: ModernAppPage) -> None:
        await app.go_to(REALWORLD, settle_ms=SECTION_SWITCH_MS)
        await app.verify.expect_present(app.PRACTICE_PROBLEM, "Practice problem")
        await app.verify.expect_present(app.SOLUTION, "Solution details")

    # 8. Intro

    @suite.case("Example selector")
    async def example_selector(app: ModernAppPage) -> None:
        await app.go_to(INTRO, settle_ms=SECTION_SWITCH_MS)
        await app.verify.expect_count(app.EXAMPLE_BUTTON, 3, "example buttons")
        for button in await app.find_all(app.EXAMPLE_BUTTON):
            await app.click(button)

    @suite.case("Interactive quiz shapes")
    async def quiz_shapes(app: ModernAppPage) -> None:
        await app.go_to(INTRO, settle_ms=SECTION_SWITCH_MS)
        await app.verify.expect_count(app.SHAPE_BUTTON, 4, "shape buttons")
        await app.click(app.SHAPE_BUTTON)

    # 9. Responsive design

    @suite.case("Mobile view (375px)")
    async def mobile_view(app: ModernAppPage) -> None:
        await app.set_viewport(375, 812, settle_ms=RESIZE_SETTLE_MS)
        await app.verify.expect_visible(app.NAVIGATION, "Navigation in mobile view")
        await app.screenshot("mobile-test", full_page=False)

    @suite.case("Tablet view (768px)")
    async def tablet_view(app: ModernAppPage) -> None:
        await app.set_viewport(768, 1024, settle_ms=RESIZE_SETTLE_MS)
        await app.screenshot("tablet-test", full_page=False)

    @suite.case("Desktop view (1920px)")
    async def desktop_view(app: ModernAppPage) -> None:
        await app.set_viewport(1920, 1080, settle_ms=RESIZE_SETTLE_MS)
        await app.screenshot("desktop-test", full_page=False)

    # 10. Footer

    @suite.case("Footer stats display")
    async def footer_stats(app: ModernAppPage) -> None:
        await app.verify.expect_present(app.FOOTER, "Footer")
        await app.verify.expect_present(app.FOOTER_STATS, "Footer stats")
        await app.verify.expect_count(app.FOOTER_STAT, 3, "stats")

    return suite
