"""
================================================================================
Similar-Triangles App Page Object (classic UI)
================================================================================

Page object for the classic ``index.html`` build of the learning app.

Highlights:
  - Section navigation through the six ``.nav-button`` controls
  - Similar-triangles calculator workflow (two side triples -> verdict)
  - Exercise answering and visualization controls

================================================================================
"""

from __future__ import annotations

from typing import Optional, Sequence

import allure
from loguru import logger

from uiharness.framework.assertions import ensure
from uiharness.framework.page_base import PageBase
from uiharness.pages.sections import SECTIONS, Section

# Verdicts the calculator prints. The negative one contains the positive one.
SIMILAR_VERDICT = "คล้ายกัน"
DISSIMILAR_VERDICT = "ไม่คล้ายกัน"

# Side triples with a common ratio of 2.
SIMILAR_SIDES = ((5, 6, 7), (10, 12, 14))


def reports_similar(text: str) -> bool:
    """True if a calculator result states the triangles are similar."""
    return SIMILAR_VERDICT in text and DISSIMILAR_VERDICT not in text


class SimilarityAppPage(PageBase):
    """Classic UI page object (async)."""

    PAGE_TITLE = "ความคล้าย"

    TITLE = "h1"
    NAV_BUTTON = ".nav-button"
    CALCULATOR_INPUT = '.triangle-input input[type="number"]'
    CALCULATE_BUTTON = ".calculate-btn"
    RESULT = ".result-box"
    QUESTION = ".question-box h3"
    OPTION = ".option-btn"
    FEEDBACK = ".feedback"
    SCALE_SLIDER = 'input[type="range"]'
    ROTATE_BUTTON = ".rotate-btn"

    async def title(self) -> str:
        return (await self.verify.text_of(self.TITLE)).strip()

    async def nav_button_count(self) -> int:
        return await self.verify.count_of(self.NAV_BUTTON)

    async def go_to(self, section: Section, settle_ms: Optional[int] = None) -> None:
        """Click the section's navigation button and let the panel render."""
        logger.info(f"🧭 Navigating to: {section.name}")
        with allure.step(f"Go to section: {section.id}"):
            await self.click(section.nav_css, settle_ms=settle_ms, settle_until=section.panel_css)

    async def is_section_shown(self, section: Section) -> bool:
        return await self.verify.is_visible(section.panel_css)

    @allure.step("Enter triangle sides {first} and {second}")
    async def enter_sides(self, first: Sequence[float], second: Sequence[float]) -> None:
        """Fill the six side inputs: first triangle, then second."""
        inputs = await self.find_all(self.CALCULATOR_INPUT)
        ensure(len(inputs) >= 6, f"Expected at least 6 calculator inputs, found {len(inputs)}")

        for element, value in zip(inputs, [*first, *second]):
            await self.fill(element, f"{value:g}", settle_ms=0)

    @allure.step("Run calculator")
    async def run_calculation(self, settle_ms: int = 1500) -> str:
        """
        Click calculate and wait (at most settle_ms) for the result panel.

        Returns:
            Text of the result panel
        """
        await self.click(self.CALCULATE_BUTTON, settle_ms=settle_ms, settle_until=self.RESULT)
        return await self.verify.text_of(self.RESULT)

    async def calculate(
        self,
        first: Sequence[float],
        second: Sequence[float],
        settle_ms: int = 1500,
    ) -> str:
        """Enter two side triples and run the calculator."""
        await self.enter_sides(first, second)
        return await self.run_calculation(settle_ms)

    @allure.step("Answer exercise (option {option})")
    async def answer_exercise(self, option: int = 1) -> None:
        """Click the option-th answer button (zero-based)."""
        await self.click(f"{self.OPTION}:nth-child({option + 1})", settle_until=self.FEEDBACK)

    @allure.step("Adjust visualization (scale={scale})")
    async def adjust_visualization(self, scale: float, settle_ms: int = 1000) -> None:
        """Set the scale slider, then toggle rotation."""
        if await self.verify.is_present(self.SCALE_SLIDER):
            await self.fill(self.SCALE_SLIDER, f"{scale:g}", settle_ms=0)
            logger.info(f"   Scale slider adjusted to {scale:g}")
        await self.click(self.ROTATE_BUTTON, settle_ms=settle_ms)

    async def visit_all_sections(self, capture: bool = True) -> None:
        """Navigate to every section in order, one screenshot each."""
        for section in SECTIONS:
            await self.go_to(section)
            ensure(await self.is_section_shown(section), f"Section {section.id} not visible")
            if capture:
                await self.screenshot(section.id)


__all__ = ["SimilarityAppPage", "SIMILAR_SIDES", "SIMILAR_VERDICT", "DISSIMILAR_VERDICT", "reports_similar"]
