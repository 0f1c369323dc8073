"""Layout oracles: answer "does this text overflow the slide?".

The pagination engine never measures text itself. It asks an oracle, which
may count characters or typeset the text with real font metrics. Oracles are
queried many times per section, so anything expensive (loading fonts, laying
out the title block) happens once in :meth:`LayoutOracle.measurement` and the
yielded probe only measures the candidate body text.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, ContextManager, Dict, Iterator, Optional

from PIL import ImageFont

from .exceptions import OracleUnavailableError, UnknownViewportError

LOGGER = logging.getLogger(__name__)

Probe = Callable[[str], bool]

# Reserve room for the widest pagination suffix the subtitle can receive.
PAGINATION_SUFFIX_PLACEHOLDER = " (99/99)"


@dataclass(slots=True, frozen=True)
class ViewportClass:
    """Geometry of one responsive slide layout, in CSS pixels."""

    name: str
    width: int
    height: int
    inset_x: int
    inset_y: int
    padding_x: int
    padding_y: int
    title_size: int
    title_gap: int
    subtitle_size: int
    subtitle_gap: int
    body_size: int
    max_text_width: int
    line_height_ratio: float = 1.625
    heading_line_ratio: float = 1.2
    bottom_padding: int = 16
    flowing: bool = False

    @property
    def text_width(self) -> int:
        inner = self.width - 2 * (self.inset_x + self.padding_x)
        return max(1, min(inner, self.max_text_width))

    @property
    def frame_height(self) -> int:
        return self.height - 2 * (self.inset_y + self.padding_y)

    @property
    def body_line_height(self) -> float:
        return self.body_size * self.line_height_ratio


VIEWPORTS: Dict[str, ViewportClass] = {
    "mobile": ViewportClass(
        name="mobile",
        width=390,
        height=844,
        inset_x=24,
        inset_y=40,
        padding_x=16,
        padding_y=24,
        title_size=36,
        title_gap=8,
        subtitle_size=14,
        subtitle_gap=16,
        body_size=16,
        max_text_width=768,
        flowing=True,
    ),
    "tablet": ViewportClass(
        name="tablet",
        width=768,
        height=1024,
        inset_x=32,
        inset_y=48,
        padding_x=24,
        padding_y=32,
        title_size=36,
        title_gap=8,
        subtitle_size=20,
        subtitle_gap=48,
        body_size=20,
        max_text_width=768,
    ),
    "desktop": ViewportClass(
        name="desktop",
        width=1440,
        height=900,
        inset_x=48,
        inset_y=64,
        padding_x=24,
        padding_y=32,
        title_size=60,
        title_gap=8,
        subtitle_size=30,
        subtitle_gap=64,
        body_size=20,
        max_text_width=1024,
    ),
    "wide": ViewportClass(
        name="wide",
        width=1920,
        height=1080,
        inset_x=48,
        inset_y=64,
        padding_x=24,
        padding_y=32,
        title_size=60,
        title_gap=8,
        subtitle_size=30,
        subtitle_gap=64,
        body_size=20,
        max_text_width=1024,
    ),
}


def get_viewport(name: str) -> ViewportClass:
    try:
        return VIEWPORTS[name]
    except KeyError as exc:
        raise UnknownViewportError(name) from exc


class LayoutOracle(ABC):
    """Reports whether text overflows a slide rendered at a viewport."""

    @abstractmethod
    def measurement(
        self, title: str, subtitle: str, viewport: ViewportClass
    ) -> ContextManager[Probe]:
        """Set up a measurement surface and yield ``probe(text) -> overflow``."""

    def is_ready(self, viewport: ViewportClass) -> bool:
        return True

    def probe(
        self,
        candidate_text: str,
        title: str,
        subtitle: str,
        viewport: ViewportClass,
    ) -> bool:
        with self.measurement(title, subtitle, viewport) as probe:
            return probe(candidate_text)


class CharacterBudgetOracle(LayoutOracle):
    """Treats anything longer than ``budget`` characters as overflowing."""

    def __init__(self, budget: int = 1400) -> None:
        if budget <= 0:
            raise ValueError("budget must be greater than 0")
        self.budget = budget

    @contextmanager
    def measurement(
        self, title: str, subtitle: str, viewport: ViewportClass
    ) -> Iterator[Probe]:
        budget = self.budget
        yield lambda text: len(text) > budget


class FontMetricsOracle(LayoutOracle):
    """Typesets text with Pillow font metrics to detect overflow.

    Lines wrap at word boundaries within the viewport's text width and
    explicit newlines are kept (``white-space: pre-wrap``). The oracle is not
    ready until its font file can be loaded, mirroring a web font that has not
    finished loading: measuring with a substitute font would give the wrong
    line breaks.
    """

    FONT_CANDIDATES = (
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
        "/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf",
        "/usr/share/fonts/truetype/open-sans/OpenSans-Regular.ttf",
        "/System/Library/Fonts/Helvetica.ttc",
        "/Library/Fonts/Arial Unicode.ttf",
        "C:/Windows/Fonts/arial.ttf",
    )

    def __init__(self, font_path: Optional[str] = None) -> None:
        self.font_path = font_path or _find_font(self.FONT_CANDIDATES)
        self._fonts: Dict[int, ImageFont.FreeTypeFont] = {}

    def is_ready(self, viewport: ViewportClass) -> bool:
        try:
            self._font(viewport.body_size)
        except OracleUnavailableError as exc:
            LOGGER.info("Font metrics unavailable: %s", exc)
            return False
        return True

    @contextmanager
    def measurement(
        self, title: str, subtitle: str, viewport: ViewportClass
    ) -> Iterator[Probe]:
        width = viewport.text_width
        body_font = self._font(viewport.body_size)
        available = viewport.frame_height - viewport.bottom_padding

        if title:
            title_font = self._font(viewport.title_size)
            lines = _count_wrapped_lines(title, title_font, width)
            available -= lines * viewport.title_size * viewport.heading_line_ratio
            available -= viewport.title_gap
        if subtitle:
            subtitle_font = self._font(viewport.subtitle_size)
            padded = f"{subtitle}{PAGINATION_SUFFIX_PLACEHOLDER}".upper()
            lines = _count_wrapped_lines(padded, subtitle_font, width)
            available -= lines * viewport.subtitle_size * viewport.heading_line_ratio
            available -= viewport.subtitle_gap

        line_height = viewport.body_line_height

        def probe(text: str) -> bool:
            lines = _count_wrapped_lines(text, body_font, width)
            return lines * line_height > available

        yield probe

    def _font(self, size: int) -> ImageFont.FreeTypeFont:
        font = self._fonts.get(size)
        if font is not None:
            return font
        if not self.font_path:
            raise OracleUnavailableError("No TrueType font found for measurement")
        try:
            font = ImageFont.truetype(self.font_path, size)
        except OSError as exc:
            raise OracleUnavailableError(
                f"Could not load font {self.font_path}",
                original_error=exc,
            ) from exc
        self._fonts[size] = font
        return font


# ----------------------------------------------------------------------
# Helper functions
# ----------------------------------------------------------------------

def _find_font(candidates) -> Optional[str]:
    for candidate in candidates:
        if Path(candidate).exists():
            return candidate
    return None


def _count_wrapped_lines(text: str, font, width: int) -> int:
    total = 0
    for hard_line in text.split("\n"):
        words = hard_line.split()
        if not words:
            total += 1
            continue
        lines = 1
        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if font.getlength(candidate) <= width:
                current = candidate
                continue
            word_width = font.getlength(word)
            if current:
                lines += 1
            if word_width > width:
                # an unbreakable word spills over several lines
                lines += math.ceil(word_width / width) - 1
            current = word
        total += lines
    return total
