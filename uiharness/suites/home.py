"""
Home-page smoke suite for the classic UI (``index.html``).

Screenshots land in capture order: 1-home, 2-intro ... 7-realworld,
8-calculator-result, 9-exercise, 10-visualization, 11-mobile-view.
"""

from loguru import logger

from uiharness.framework.assertions import ensure
from uiharness.framework.runner import Suite
from uiharness.pages.sections import CALCULATOR, EXERCISES, VISUALIZATION
from uiharness.pages.similarity_app_page import SIMILAR_SIDES, SimilarityAppPage, reports_similar


def build_suite() -> Suite:
    suite = Suite("home", context_factory=SimilarityAppPage)

    @suite.case("Main elements")
    async def main_elements(app: SimilarityAppPage) -> None:
        title = await app.title()
        logger.info(f"   Title: {title}")
        ensure(bool(title), "Page title is empty")
        await app.verify.expect_count(app.NAV_BUTTON, 6, "navigation buttons")
        await app.screenshot("home")

    @suite.case("Navigate all sections")
    async def navigate_all_sections(app: SimilarityAppPage) -> None:
        await app.visit_all_sections(capture=True)

    @suite.case("Calculator result")
    async def calculator_result(app: SimilarityAppPage) -> None:
        await app.go_to(CALCULATOR)
        text = await app.calculate(*SIMILAR_SIDES, settle_ms=500)
        await app.screenshot("calculator-result")
        ensure(reports_similar(text), f"Result does not report similar triangles: {text[:80]!r}")

    @suite.case("Exercise feedback")
    async def exercise_feedback(app: SimilarityAppPage) -> None:
        await app.go_to(EXERCISES)
        question = await app.verify.text_of(app.QUESTION)
        logger.info(f"   First question: {question[:50]}...")
        await app.answer_exercise(1)
        await app.screenshot("exercise")
        await app.verify.expect_visible(app.FEEDBACK, "Answer feedback")

    @suite.case("Visualization controls")
    async def visualization_controls(app: SimilarityAppPage) -> None:
        await app.go_to(VISUALIZATION)
        await app.adjust_visualization(1.5)
        await app.screenshot("visualization")

    @suite.case("Tablet view")
    async def tablet_view(app: SimilarityAppPage) -> None:
        await app.set_viewport(768, 1024)
        await app.screenshot("mobile-view")
        await app.verify.expect_visible(app.NAV_BUTTON, "Navigation")

    return suite
