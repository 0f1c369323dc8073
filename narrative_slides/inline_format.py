"""Turn slide text into typed spans (plain, strong, emphasis, citation)."""

from __future__ import annotations

import re
from typing import List

from .sections import PARAGRAPH_MARKER_RE, WORD_COUNT_ANNOTATION_RE
from .slide_models import Span, SpanKind

QUESTION_WORDS = ("Why", "What", "How", "Where", "When", "Which", "Who", "Whom", "Whose")

# Question-word headings come first so a long "Why ... Case:" heading is not
# reduced to its Title Case tail.
_INLINE_HEADING_RE = re.compile(
    r"((?:\b(?:" + "|".join(QUESTION_WORDS) + r")\b[^:\n]{0,60})"
    r"|(?:\b[A-Z][a-z]+(?:[^\S\n]+[A-Z][a-z]+){0,3})):"
)

_MARKUP_RE = re.compile(
    r"(\([^)]+\))"
    r"|(\d+(?:\.\d+)?\s*%)"
    r"|(\d+(?:\.\d+)?\s+(?:health\s+)?score)"
    r"|([\"“])([^\"“”]*?)([\"”])"
    r"|\b(whose|whom|where|which|when|what|who|why|how)\b",
    re.IGNORECASE,
)
_LINE_START_LOWER_RE = re.compile(r"(^|\n)(\s*)([a-z])")
_SENTENCE_START_RE = re.compile(r"(?:^|[.!?:\n])\s*$")
_NUMBERED_ASIDE_RE = re.compile(r"\s+\((\d+)\)")

CLASSICAL_TEXT_NAMES = (
    "Charaka", "Caraka", "Sushruta", "Susruta", "Ashtanga", "Astanga",
    "Vagbhata", "Bhela", "Kashyapa", "Kasyapa", "Harita", "Madhava",
    "Bhavaprakasha", "Sharangadhara", "Dhanvantari",
)
CLASSICAL_DIVISION_NAMES = (
    "Sutra", "Vimana", "Sthana", "Khanda", "Sangraha", "Hridaya",
    "Samhita", "Nidana", "Chikitsa", "Sharira", "Indriya", "Siddhi",
    "Kalpa", "Uttara", "Purva", "Tantra", "Sutrasthana", "Sharirasthana",
)
_LOCATOR = r"\d+(?:\.\d+(?:[-–]\d+)?)?"
CITATION_RE = re.compile(
    r"\b(?:(?:" + "|".join(CLASSICAL_TEXT_NAMES + CLASSICAL_DIVISION_NAMES) + r")\s+)+"
    + _LOCATOR
    + r"|\b[A-Z][a-z]*(?:\.[A-Z][a-z]*)+\." + _LOCATOR
    + r"|\b(?:[Vv]erse|[Ss]loka)\s+" + _LOCATOR
)


def format_text(text: str) -> List[Span]:
    """Return the formatted spans of ``text``.

    Inline headings become strong spans, markdown emphasis markers are
    dropped, asides, figures and quotes are highlighted and classical-text
    references become citation spans. Only markers and upstream artifacts are
    removed; the words themselves are never altered beyond capitalisation.
    """

    if not text:
        return []
    cleaned = WORD_COUNT_ANNOTATION_RE.sub("", text)
    cleaned = PARAGRAPH_MARKER_RE.sub("", cleaned)
    cleaned = _NUMBERED_ASIDE_RE.sub(lambda m: f"\n({m.group(1)})", cleaned).strip()
    # headings are matched on exactly the text the spans will carry
    cleaned = _capitalize_line_starts(strip_markdown(cleaned))

    spans: List[Span] = []
    last = 0
    for match in _INLINE_HEADING_RE.finditer(cleaned):
        if match.start() > last:
            spans.extend(_format_run(cleaned[last : match.start()], cleaned[:last]))
        spans.append(Span.strong(match.group(0)))
        last = match.end()
    if last < len(cleaned):
        spans.extend(_format_run(cleaned[last:], cleaned[:last]))

    return _merge_plain(highlight_citations(spans))


def highlight_citations(spans: List[Span]) -> List[Span]:
    """Wrap classical-text references found in plain spans as citations.

    A strong span that is nothing but a (parenthesised) reference loses its
    emphasis and becomes a citation; its parentheses stay as plain text.
    """

    result: List[Span] = []
    for span in spans:
        if span.kind is SpanKind.PLAIN:
            result.extend(_split_citations(span.text))
        elif span.kind is SpanKind.STRONG:
            result.extend(_unwrap_citation(span))
        else:
            result.append(span)
    return result


def strip_markdown(text: str) -> str:
    return re.sub(r"\*+", "", text)


# ----------------------------------------------------------------------
# Internal helpers
# ----------------------------------------------------------------------

def _format_run(run: str, preceding: str) -> List[Span]:
    spans: List[Span] = []
    last = 0
    for match in _MARKUP_RE.finditer(run):
        if match.start() > last:
            spans.append(Span.plain(run[last : match.start()]))

        if match.group(1):
            spans.append(Span.strong("(" + _capitalize(match.group(1)[1:-1]) + ")"))
        elif match.group(2) or match.group(3):
            spans.append(Span.strong(match.group(0)))
        elif match.group(4):
            spans.append(
                Span.emphasis(match.group(4) + _capitalize(match.group(5)) + match.group(6))
            )
        else:
            before = preceding + run[: match.start()]
            if _SENTENCE_START_RE.search(before):
                spans.append(Span.strong(match.group(7)))
            else:
                spans.append(Span.plain(match.group(7)))
        last = match.end()

    if last < len(run):
        spans.append(Span.plain(run[last:]))
    return spans


def _split_citations(text: str) -> List[Span]:
    spans: List[Span] = []
    last = 0
    for match in CITATION_RE.finditer(text):
        if match.start() > last:
            spans.append(Span.plain(text[last : match.start()]))
        spans.append(Span.citation(match.group(0)))
        last = match.end()
    if last < len(text):
        spans.append(Span.plain(text[last:]))
    return spans


def _unwrap_citation(span: Span) -> List[Span]:
    text = span.text
    wrapped = text.startswith("(") and text.endswith(")")
    inner = text[1:-1] if wrapped else text
    if not CITATION_RE.fullmatch(inner):
        return [span]
    if wrapped:
        return [Span.plain("("), Span.citation(inner), Span.plain(")")]
    return [Span.citation(inner)]


def _merge_plain(spans: List[Span]) -> List[Span]:
    merged: List[Span] = []
    for span in spans:
        if not span.text:
            continue
        if merged and span.kind is SpanKind.PLAIN and merged[-1].kind is SpanKind.PLAIN:
            merged[-1] = Span.plain(merged[-1].text + span.text)
        else:
            merged.append(span)
    return merged


def _capitalize_line_starts(text: str) -> str:
    return _LINE_START_LOWER_RE.sub(
        lambda m: m.group(1) + m.group(2) + m.group(3).upper(), text
    )


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]
