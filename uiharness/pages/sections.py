"""
Sections of the similar-triangles learning app.

Both UIs render the same six sections behind six navigation buttons, in this
order. The harness only navigates to a section and checks that it became
active; section content is exercised by the suites.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Section:
    """
    Attributes:
        id: Stable identifier; the classic UI renders the panel as ``.<id>-section``
        name: Display name in the classic UI
        ordinal: Zero-based position in the navigation bar
        label: Navigation label in the modern UI
        icon: Font Awesome class of the modern navigation icon, if any
    """
    id: str
    name: str
    ordinal: int
    label: str
    icon: Optional[str] = None

    @property
    def nav_css(self) -> str:
        return f".nav-button:nth-child({self.ordinal + 1})"

    @property
    def panel_css(self) -> str:
        return f".{self.id}-section"


INTRO = Section("intro", "ความคล้าย", 0, "เริ่มต้น")
TRIANGLES = Section("triangles", "รูปสามเหลี่ยมคล้าย", 1, "สามเหลี่ยม")
VISUALIZATION = Section("visualization", "ภาพเคลื่อนไหว", 2, "3D Lab", icon="fa-cube")
CALCULATOR = Section("calculator", "เครื่องคำนวณ", 3, "คำนวณ", icon="fa-calculator")
EXERCISES = Section("exercises", "แบบฝึกหัด", 4, "ท้าทาย", icon="fa-gamepad")
REALWORLD = Section("realworld", "ตัวอย่างจริง", 5, "โลกจริง")

SECTIONS: Tuple[Section, ...] = (INTRO, TRIANGLES, VISUALIZATION, CALCULATOR, EXERCISES, REALWORLD)


def section_by_id(section_id: str) -> Section:
    for section in SECTIONS:
        if section.id == section_id:
            return section
    raise KeyError(f"Unknown section: {section_id}")
