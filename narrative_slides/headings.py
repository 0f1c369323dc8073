"""Heading detection for free-form, AI-generated report text."""

from __future__ import annotations

import re

SHORT_HEADING_MAX_CHARS = 60

_SHORT_LABEL_START_RE = re.compile(r"^(?:[A-Z]|\*\*|\d+[.)])")

# Tried in order: Title Case label, ALL-CAPS label, bold markdown.
_HEADING_RE = re.compile(
    r"^(?:"
    r"(?:\d+[.)]\s*)?[A-Z][A-Za-z0-9'-]*(?:\s+(?:&\s+)?[A-Z][A-Za-z0-9'-]*){0,7}\s*:"
    r"|[A-Z][A-Z\s&\-]{2,}:"
    r"|\*\*[^*]+\*\*\s*:?"
    r")$"
)

WORD_COUNT_RE = re.compile(r"\s*\(?\[?\d+\s*words?\]?\)?\s*", re.IGNORECASE)


def is_heading(line: str) -> bool:
    """Return ``True`` when ``line`` looks like a structural heading.

    Errs towards ``True``: an extra paragraph moved to the next slide is
    cheap, a heading stranded at the bottom of a slide is not.
    """

    text = line.strip()
    if not text or "\n" in text or "\r" in text:
        return False
    if (
        len(text) <= SHORT_HEADING_MAX_CHARS
        and text.endswith(":")
        and _SHORT_LABEL_START_RE.match(text)
    ):
        return True
    return bool(_HEADING_RE.match(text))


def clean_heading_text(text: str) -> str:
    """Strip word counts, bullets, numbering and the trailing colon."""

    if not text:
        return ""
    cleaned = WORD_COUNT_RE.sub(" ", text)
    cleaned = re.sub(r"\*+", "", cleaned)
    cleaned = re.sub(r"^[\s\-#]+", "", cleaned)
    cleaned = re.sub(r":\s*$", "", cleaned)
    cleaned = re.sub(r"^\d+\.\s*", "", cleaned)
    return re.sub(r"\s+", " ", cleaned).strip()
