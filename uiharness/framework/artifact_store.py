"""
================================================================================
Artifact Store
================================================================================

Per-run output directory and screenshot persistence.

Naming:
    <ordinal>-<tag>.png   ordinal counts captures within the run, from 1
    error.png             fatal-error snapshot (name configurable)

Capture is best-effort: a failed write is logged and recorded, never raised
into the calling TestCase.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

import allure
from loguru import logger

from .errors import ArtifactWriteError


DEFAULT_ERROR_NAME = "error.png"


def slugify(tag: str) -> str:
    """Filesystem-safe tag: lowercase, runs of unsafe characters become '-'."""
    slug = re.sub(r"[^\w.-]+", "-", tag.strip().lower(), flags=re.UNICODE).strip("-.")
    return slug or "capture"


@dataclass(frozen=True)
class Artifact:
    """
    A captured visual snapshot.

    Attributes:
        path: File the screenshot was written to
        tag: Logical tag (which section/state it depicts)
        full_page: Whether the full scrollable page was captured
        test_name: Name of the TestCase that produced it (back-reference)
    """
    path: Path
    tag: str
    full_page: bool
    test_name: Optional[str] = None

    @property
    def name(self) -> str:
        return self.path.name


class ArtifactStore:
    """
    Owns the output directory of one run.

    Usage:
        store = ArtifactStore(Path("test-results"))
        store.prepare()
        await store.capture(page, "calculator")   # -> test-results/1-calculator.png
        await store.capture_error(page)            # -> test-results/error.png
    """

    def __init__(
        self,
        output_dir: Path,
        error_name: str = DEFAULT_ERROR_NAME,
        attach_to_allure: bool = True,
    ):
        self.output_dir = Path(output_dir)
        self.error_name = error_name
        self.attach_to_allure = attach_to_allure

        self.artifacts: List[Artifact] = []
        self.errors: List[ArtifactWriteError] = []
        self._names: set[str] = set()
        self._ordinal = 0
        self._owner: Optional[str] = None

    def prepare(self) -> Path:
        """Create the output directory if absent (idempotent)."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Artifact directory: {self.output_dir}")
        return self.output_dir

    def bind(self, test_name: Optional[str]) -> None:
        """Associate subsequent captures with a TestCase."""
        self._owner = test_name

    def _reserve(self, filename: str) -> Path:
        if filename in self._names:
            raise ArtifactWriteError(f"Artifact already written in this run: {filename}")
        self._names.add(filename)
        return self.output_dir / filename

    async def capture(
        self,
        page: Any,
        tag: str,
        full_page: bool = True,
    ) -> Optional[Artifact]:
        """
        Screenshot the page as ``<n>-<tag>.png``.

        Returns:
            The Artifact, or None if the write failed (the failure is logged
            and kept in ``errors``)
        """
        self._ordinal += 1
        filename = f"{self._ordinal}-{slugify(tag)}.png"
        return await self._write(page, filename, tag, full_page)

    async def capture_error(self, page: Any) -> Optional[Artifact]:
        """Fatal-error snapshot under the configured error name."""
        return await self._write(page, self.error_name, "error", True)

    async def _write(
        self,
        page: Any,
        filename: str,
        tag: str,
        full_page: bool,
    ) -> Optional[Artifact]:
        try:
            path = self._reserve(filename)
            await page.screenshot(path=str(path), full_page=full_page)
        except Exception as e:
            error = e if isinstance(e, ArtifactWriteError) else ArtifactWriteError(
                f"Screenshot {filename} failed: {e}"
            )
            self.errors.append(error)
            logger.error(f"📸 {error}")
            return None

        artifact = Artifact(path=path, tag=tag, full_page=full_page, test_name=self._owner)
        self.artifacts.append(artifact)

        if self.attach_to_allure:
            allure.attach.file(
                str(path),
                name=tag,
                attachment_type=allure.attachment_type.PNG,
            )

        logger.info(f"📸 Screenshot saved: {path.name}")
        return artifact


__all__ = [
    "DEFAULT_ERROR_NAME",
    "Artifact",
    "ArtifactStore",
    "slugify",
]
