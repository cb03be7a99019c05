"""
================================================================================
Similar-Triangles App Page Object (modern UI)
================================================================================

Page object for the ``index-modern.html`` build: same six sections and
calculator as the classic UI, plus dark mode, a sound toggle, gamification
(XP, level, streak, achievements), a mascot, a 2D/3D visualization lab and a
footer with learning statistics.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger

from uiharness.framework.assertions import ensure
from uiharness.framework.element_locator import Selector
from uiharness.pages.sections import Section
from uiharness.pages.similarity_app_page import SimilarityAppPage


class ModernAppPage(SimilarityAppPage):
    """Modern UI page object (async)."""

    TITLE = ".app-title"
    CALCULATOR_INPUT = ".neon-input"
    RESULT = ".result-panel"
    RESULT_SIMILAR = ".result-panel.success"
    QUESTION = ".question-text"
    SCALE_SLIDER = ".neon-slider"

    DARK_MODE_ACTIVE = ".app-container.dark-mode"
    DARK_MODE_BUTTON = "button.icon-btn:has(i.fa-moon), button.icon-btn:has(i.fa-sun)"
    SOUND_BUTTON = "button.icon-btn:has(i.fa-volume-up), button.icon-btn:has(i.fa-volume-mute)"
    MUTED_ICON = "i.fa-volume-mute"

    LEVEL = ".stat-item.level"
    XP_BAR = ".xp-bar"
    XP_TEXT = ".xp-text"
    STREAK = ".stat-item.streak"
    ACHIEVEMENTS_BAR = ".achievements-bar"
    NO_ACHIEVEMENTS = ".no-achievements"
    MASCOT = ".mascot"
    MASCOT_SPEECH = ".mascot-speech"

    QUIZ = ".quiz-container"
    GAME_STATS = ".game-stats"
    TIMER = ".stat-box.timer"
    EXPLANATION = ".explanation-box"
    NEXT_BUTTON = ".next-btn"

    MODE_SELECTOR = ".mode-selector"
    MODE_BUTTON = Selector(".mode-btn")
    STATS_DISPLAY = ".stats-display"
    THREE_CONTAINER = ".three-container"

    EXAMPLE_CARD = ".example-card"
    CARD_DETAIL = ".card-detail"
    PRACTICE_PROBLEM = ".practice-problem"
    SOLUTION = "details.solution"
    EXAMPLE_BUTTON = ".example-btn"
    SHAPE_BUTTON = ".shape-btn"

    NAVIGATION = ".navigation"
    FOOTER = ".app-footer"
    FOOTER_STATS = ".footer-stats"
    FOOTER_STAT = ".footer-stats .stat"

    # =========================================================================
    # Navigation
    # =========================================================================

    async def go_to(self, section: Section, settle_ms: Optional[int] = None) -> None:
        """Click the section's navigation button and wait for it to turn active."""
        logger.info(f"🧭 Navigating to: {section.label}")
        with allure.step(f"Go to section: {section.id}"):
            await self.click(section.nav_css, settle_ms=settle_ms, settle_until=f"{section.nav_css}.active")

    async def go_to_by_icon(self, section: Section, settle_ms: Optional[int] = None) -> None:
        """Locate the navigation button by its icon instead of its position."""
        if section.icon is None:
            raise ValueError(f"Section {section.id} has no navigation icon")
        button = Selector(self.NAV_BUTTON).having(f"i.{section.icon}")
        with allure.step(f"Go to section by icon: {section.id}"):
            await self.click(button, settle_ms=settle_ms, settle_until=f"{section.nav_css}.active")

    async def is_section_shown(self, section: Section) -> bool:
        """The modern UI marks the current section on its navigation button."""
        return await self.verify.has_class(section.nav_css, "active")

    # =========================================================================
    # Header toggles
    # =========================================================================

    @allure.step("Toggle dark mode")
    async def toggle_dark_mode(self, settle_ms: Optional[int] = None) -> None:
        await self.click(self.DARK_MODE_BUTTON, settle_ms=settle_ms)

    async def is_dark_mode(self) -> bool:
        return await self.verify.is_present(self.DARK_MODE_ACTIVE)

    @allure.step("Toggle sound")
    async def toggle_sound(self, settle_ms: int = 300) -> None:
        await self.click(self.SOUND_BUTTON, settle_ms=settle_ms)

    async def is_muted(self) -> bool:
        return await self.verify.is_present(self.MUTED_ICON)

    # =========================================================================
    # Section workflows
    # =========================================================================

    @allure.step("Answer question (option {option})")
    async def answer_question(self, option: int = 0, settle_ms: int = 1000) -> None:
        """Pick an answer and wait for the explanation."""
        options = await self.find_all(self.OPTION)
        ensure(len(options) > option, f"Expected more than {option} answer options, found {len(options)}")
        await self.click(options[option], settle_ms=settle_ms, settle_until=self.EXPLANATION)

    @allure.step("Switch visualization mode: {label}")
    async def choose_mode(self, label: str, settle_ms: int = 2000) -> None:
        """Click the 2D/3D mode button whose text contains ``label``."""
        await self.click(self.MODE_BUTTON.containing(label), settle_ms=settle_ms)

    @allure.step("Set scale: {value}")
    async def set_scale(self, value: float, settle_ms: Optional[int] = None) -> None:
        await self.fill(self.SCALE_SLIDER, f"{value:g}", settle_ms=settle_ms)

    @allure.step("Open example card {index}")
    async def open_example_card(self, index: int = 0) -> None:
        cards = await self.find_all(self.EXAMPLE_CARD)
        ensure(len(cards) > index, f"Example card {index} not found ({len(cards)} cards)")
        await self.click(cards[index], settle_until=self.CARD_DETAIL)


__all__ = ["ModernAppPage"]
