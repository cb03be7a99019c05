"""Page objects for the similar-triangles learning app."""

from uiharness.pages.modern_app_page import ModernAppPage
from uiharness.pages.sections import SECTIONS, Section, section_by_id
from uiharness.pages.similarity_app_page import (
    DISSIMILAR_VERDICT,
    SIMILAR_SIDES,
    SIMILAR_VERDICT,
    SimilarityAppPage,
    reports_similar,
)

__all__ = [
    "ModernAppPage",
    "SimilarityAppPage",
    "SIMILAR_SIDES",
    "SIMILAR_VERDICT",
    "DISSIMILAR_VERDICT",
    "reports_similar",
    "SECTIONS",
    "Section",
    "section_by_id",
]
