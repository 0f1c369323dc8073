"""Split narrative report text into (heading, content) sections.

Report text arrives in whatever shape the upstream writer produced:
``SECTION 1: Diet`` markers, ``PARAGRAPH 2 - Title: body`` labels, numbered
``1. Title`` lines, or inline ``Title Case:`` headings. The conventions are
tried in a fixed order and the first one that matches anything wins. Text that
appears before the first marker is kept as a preamble of the first section so
nothing is dropped.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional, Tuple

from .headings import clean_heading_text, is_heading
from .slide_models import Section

LOGGER = logging.getLogger(__name__)

PARAGRAPH_MARKER_RE = re.compile(r"\bPARAGRAPH[^\S\n]*\d+[^\S\n]*[-:.]?[^\S\n]*")
WORD_COUNT_ANNOTATION_RE = re.compile(
    r"[^\S\n]*[(\[][^\S\n]*\d+[^\S\n]*words?[^\S\n]*[)\]]", re.IGNORECASE
)

_SECTION_MARKER_RE = re.compile(
    r"^[^\S\n]*SECTION[^\S\n]*(\d+)[^\S\n]*[-:.]?[^\S\n]*([^\n]*)",
    re.IGNORECASE | re.MULTILINE,
)
_PARAGRAPH_SECTION_RE = re.compile(
    r"PARAGRAPH[^\S\n]*(\d+)[^\S\n]*[-:.][^\S\n]*([^\n]*)"
)
_NUMBERED_MARKER_RE = re.compile(
    r"^[^\S\n]*(\d+)\.[^\S\n]+(\S[^\n]*?)[^\S\n]*(?=\n|\Z)",
    re.MULTILINE,
)
_LINE_RE = re.compile(r"^[^\S\n]*(\S[^\n]*?)[^\S\n]*$", re.MULTILINE)
_INLINE_HEADING_RE = re.compile(
    r"(?:^|(?<=[.!?]\s))[^\S\n]*"
    r"((?:\*\*)?[A-Z][A-Za-z'-]*"
    r"(?:[^\S\n]+(?:&[^\S\n]+)?[A-Z][A-Za-z'-]*){0,7}(?:\*\*)?)"
    r":(?:\*\*)?[^\S\n]*",
    re.MULTILINE,
)

# (start, end, heading, lead content, number)
_Boundary = Tuple[int, int, str, str, Optional[int]]


def strip_paragraph_markers(text: str) -> str:
    """Remove ``PARAGRAPH n:`` / ``PARAGRAPH n -`` labels."""

    if not text:
        return text
    return PARAGRAPH_MARKER_RE.sub("", text).strip()


def strip_word_counts(text: str) -> str:
    """Remove ``(120 words)`` / ``[80 words]`` annotations."""

    if not text:
        return text
    return WORD_COUNT_ANNOTATION_RE.sub("", text)


def split_sections(text: str, *, strip_markers: bool = True) -> List[Section]:
    """Return the ordered sections of ``text``.

    Never raises on marker-free input: it degrades to a single section with an
    empty heading that holds the whole text.
    """

    cleaned = strip_word_counts((text or "").replace("\r\n", "\n").replace("\r", "\n"))
    if strip_markers:
        cleaned = strip_paragraph_markers(cleaned)
    cleaned = cleaned.strip()

    conventions: List[Tuple[str, Callable[[str], List[_Boundary]]]] = [
        ("section", _section_boundaries),
        ("paragraph", _paragraph_boundaries),
        ("numbered", _numbered_boundaries),
        ("inline-heading", _inline_heading_boundaries),
    ]
    for name, finder in conventions:
        boundaries = finder(cleaned)
        if boundaries:
            LOGGER.debug(
                "Split text with the %s convention into %d sections",
                name,
                len(boundaries),
            )
            return _build_sections(cleaned, boundaries)

    return [Section(heading="", content=cleaned)]


# ----------------------------------------------------------------------
# Marker conventions
# ----------------------------------------------------------------------

def _section_boundaries(text: str) -> List[_Boundary]:
    return _marker_boundaries(text, _SECTION_MARKER_RE, _numbered_title)


def _paragraph_boundaries(text: str) -> List[_Boundary]:
    return _marker_boundaries(text, _PARAGRAPH_SECTION_RE, _paragraph_title)


def _numbered_boundaries(text: str) -> List[_Boundary]:
    return _marker_boundaries(text, _NUMBERED_MARKER_RE, _numbered_title)


def _inline_heading_boundaries(text: str) -> List[_Boundary]:
    boundaries: List[_Boundary] = []

    for match in _LINE_RE.finditer(text):
        line = match.group(1)
        if is_heading(line):
            boundaries.append(
                (match.start(), match.end(), clean_heading_text(line), "", None)
            )

    for match in _INLINE_HEADING_RE.finditer(text):
        label = match.group(1)
        if not is_heading(label + ":"):
            continue
        if any(start <= match.start(1) < end for start, end, _, _, _ in boundaries):
            continue
        boundaries.append(
            (match.start(1), match.end(), clean_heading_text(label), "", None)
        )

    boundaries.sort(key=lambda item: item[0])
    return boundaries


def _marker_boundaries(
    text: str,
    pattern: re.Pattern[str],
    title_for: Callable[[re.Match[str]], Tuple[str, str]],
) -> List[_Boundary]:
    boundaries: List[_Boundary] = []
    for match in pattern.finditer(text):
        heading, lead = title_for(match)
        boundaries.append(
            (match.start(), match.end(), heading, lead, int(match.group(1)))
        )
    return boundaries


def _numbered_title(match: re.Match[str]) -> Tuple[str, str]:
    number, raw_title = match.group(1), match.group(2)
    return clean_heading_text(raw_title) or f"Section {number}", ""


def _paragraph_title(match: re.Match[str]) -> Tuple[str, str]:
    number, raw_title = match.group(1), match.group(2).strip()
    colon_idx = raw_title.find(":")
    if colon_idx > 0:
        heading = clean_heading_text(raw_title[:colon_idx])
        lead = raw_title[colon_idx + 1 :].strip()
    else:
        heading = clean_heading_text(raw_title)
        lead = ""
    return heading or f"Section {number}", lead


# ----------------------------------------------------------------------
# Assembly
# ----------------------------------------------------------------------

def _build_sections(text: str, boundaries: List[_Boundary]) -> List[Section]:
    sections: List[Section] = []
    preamble = text[: boundaries[0][0]].strip()

    for idx, (_, end, heading, lead, number) in enumerate(boundaries):
        next_start = boundaries[idx + 1][0] if idx + 1 < len(boundaries) else len(text)
        body = text[end:next_start].strip()
        content = "\n".join(part for part in (lead, body) if part)
        if idx == 0 and preamble:
            content = "\n\n".join(part for part in (preamble, content) if part)
        sections.append(Section(heading=heading, content=content, number=number))
    return sections
