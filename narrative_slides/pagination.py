"""Split section content into slide-sized chunks.

Two paths share one algorithm. When the layout oracle is ready, overflow is
measured; otherwise a fixed character budget stands in for it. Either way the
text is poured paragraph by paragraph into the current slide, falling back to
sentence-level splitting for a paragraph that does not fit a slide by itself,
and headings are kept on the same slide as the content that follows them.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional, Tuple, Union

from .config import PaginationSettings
from .exceptions import OracleUnavailableError
from .headings import is_heading
from .layout_oracle import (
    CharacterBudgetOracle,
    FontMetricsOracle,
    LayoutOracle,
    ViewportClass,
    get_viewport,
)
from .slide_models import Chunk

LOGGER = logging.getLogger(__name__)

Overflows = Callable[[str], bool]

PARAGRAPH_SEPARATOR = "\n\n"

_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")
_BLANK_RUN_RE = re.compile(r"(?:\n[^\S\n]*){2,}")
_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?]\s)")


def normalize_whitespace(text: str) -> str:
    """Unify line endings, collapse runs of blank lines and trim."""

    if not text:
        return ""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return _BLANK_RUN_RE.sub("\n\n", text).strip()


def split_paragraphs(text: str) -> List[str]:
    return [part.strip() for part in _PARAGRAPH_SPLIT_RE.split(text) if part.strip()]


def split_sentences(paragraph: str) -> List[str]:
    """Split after ``.``/``!``/``?`` + whitespace; the pieces join back exactly."""

    return [piece for piece in _SENTENCE_SPLIT_RE.split(paragraph) if piece]


def paginate_text(
    text: str,
    overflows: Overflows,
    *,
    orphan_scan_lines: int = 5,
) -> List[str]:
    """Return the chunk texts of ``text`` under the ``overflows`` predicate.

    The predicate is either a measurement probe or a character-budget check;
    the accumulation and orphan protection below are identical for both.
    """

    normalized = normalize_whitespace(text)
    if not normalized:
        return [""]
    if not overflows(normalized):
        return [normalized]

    chunks = _accumulate(split_paragraphs(normalized), overflows)
    chunks = _protect_orphans(chunks, overflows, orphan_scan_lines)
    chunks = [chunk for chunk in chunks if chunk.strip()]
    return chunks or [normalized]


class Paginator:
    """Paginates section content for one viewport class."""

    def __init__(
        self,
        oracle: Optional[LayoutOracle] = None,
        viewport: Union[ViewportClass, str, None] = None,
        *,
        settings: Optional[PaginationSettings] = None,
    ) -> None:
        self.settings = settings or PaginationSettings()
        self.settings.validate()
        self.oracle = oracle
        self.viewport = _resolve_viewport(
            viewport if viewport is not None else self.settings.viewport
        )
        self.fallback_oracle = CharacterBudgetOracle(self.settings.char_budget)

    @classmethod
    def from_settings(
        cls,
        settings: PaginationSettings,
        oracle: Optional[LayoutOracle] = None,
    ) -> "Paginator":
        """Build a paginator measuring with font metrics unless told otherwise."""

        if oracle is None:
            oracle = FontMetricsOracle(settings.font_path)
        return cls(oracle, settings=settings)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def paginate(
        self,
        content: str,
        title: str = "",
        subtitle: str = "",
        *,
        viewport: Union[ViewportClass, str, None] = None,
    ) -> List[Chunk]:
        """Return the ordered chunks of ``content`` for one slide layout."""

        target = _resolve_viewport(viewport) if viewport is not None else self.viewport
        normalized = normalize_whitespace(content or "")
        if not normalized:
            return [Chunk(text="", sequence_index=0, sequence_total=1)]
        if target.flowing:
            return [Chunk(text=normalized, sequence_index=0, sequence_total=1)]

        if self.oracle is not None and self._oracle_ready(target):
            try:
                texts = self._paginate_with(self.oracle, normalized, title, subtitle, target)
            except OracleUnavailableError as exc:
                LOGGER.info("Layout oracle became unavailable: %s", exc)
            else:
                LOGGER.debug(
                    "Measured pagination produced %d chunks for %r", len(texts), subtitle
                )
                return _to_chunks(texts)

        return self.paginate_by_budget(normalized, title, subtitle, viewport=target)

    def paginate_by_budget(
        self,
        content: str,
        title: str = "",
        subtitle: str = "",
        *,
        viewport: Union[ViewportClass, str, None] = None,
    ) -> List[Chunk]:
        """Paginate with the character budget regardless of oracle readiness."""

        target = _resolve_viewport(viewport) if viewport is not None else self.viewport
        texts = self._paginate_with(self.fallback_oracle, content, title, subtitle, target)
        LOGGER.debug(
            "Character-budget pagination (%d chars) produced %d chunks for %r",
            self.settings.char_budget,
            len(texts),
            subtitle,
        )
        return _to_chunks(texts)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _oracle_ready(self, viewport: ViewportClass) -> bool:
        try:
            ready = self.oracle.is_ready(viewport)
        except OracleUnavailableError as exc:
            LOGGER.info("Layout oracle unavailable: %s", exc)
            return False
        if not ready:
            LOGGER.info(
                "Layout oracle not ready for %s; using %d character budget",
                viewport.name,
                self.settings.char_budget,
            )
        return ready

    def _paginate_with(
        self,
        oracle: LayoutOracle,
        content: str,
        title: str,
        subtitle: str,
        viewport: ViewportClass,
    ) -> List[str]:
        with oracle.measurement(title, subtitle, viewport) as probe:
            return paginate_text(
                content,
                probe,
                orphan_scan_lines=self.settings.orphan_scan_lines,
            )


# ----------------------------------------------------------------------
# Accumulation
# ----------------------------------------------------------------------

def _accumulate(paragraphs: List[str], overflows: Overflows) -> List[str]:
    chunks: List[str] = []
    current: List[str] = []

    for para in paragraphs:
        candidate = current + [para]
        if not overflows(_join(candidate)):
            current = candidate
            continue

        held = _pop_trailing_headings(current)
        if current:
            chunks.append(_join(current))

        current = held + [para]
        if not overflows(_join(current)):
            continue

        current = _split_paragraph(para, _join(held), overflows, chunks)

    if current:
        chunks.append(_join(current))
    return chunks


def _split_paragraph(
    para: str,
    lead: str,
    overflows: Overflows,
    chunks: List[str],
) -> List[str]:
    """Pour ``para`` sentence by sentence; return what is left to accumulate.

    ``lead`` holds headings carried over from the previous slide; they open
    the first sentence group so they stay above their own content.
    """

    group: List[str] = []
    for sentence in split_sentences(para):
        candidate = group + [sentence]
        if not overflows(_sentence_text(lead, candidate)):
            group = candidate
            continue

        if group:
            chunks.append(_sentence_text(lead, group))
            lead = ""
            group = []
            if not overflows(_sentence_text(lead, [sentence])):
                group = [sentence]
                continue

        if lead or overflows(sentence.strip()):
            text = _sentence_text(lead, [sentence])
            LOGGER.warning(
                "Text does not fit on a single slide (%d chars); emitting it as is",
                len(text),
            )
            chunks.append(text)
            lead = ""
        else:
            group = [sentence]

    remainder = _sentence_text(lead, group)
    return [remainder] if remainder else []


def _pop_trailing_headings(current: List[str]) -> List[str]:
    held: List[str] = []
    while current and is_heading(current[-1]):
        held.insert(0, current.pop())
    return held


def _sentence_text(lead: str, sentences: List[str]) -> str:
    body = "".join(sentences).strip()
    return PARAGRAPH_SEPARATOR.join(part for part in (lead, body) if part)


def _join(paragraphs: List[str]) -> str:
    return PARAGRAPH_SEPARATOR.join(paragraphs)


# ----------------------------------------------------------------------
# Orphan protection
# ----------------------------------------------------------------------

def _protect_orphans(
    chunks: List[str], overflows: Overflows, scan_lines: int
) -> List[str]:
    """Move headings trailing a chunk to the front of the next one."""

    chunks = list(chunks)
    idx = 0
    while idx < len(chunks) - 1:
        body, moved = _split_trailing_headings(chunks[idx], scan_lines)
        if moved:
            chunks[idx] = body
            merged = f"{moved}\n{chunks[idx + 1]}"
            if overflows(merged):
                chunks[idx + 1 : idx + 2] = _accumulate(split_paragraphs(merged), overflows)
            else:
                chunks[idx + 1] = merged
        idx += 1
    return chunks


def _split_trailing_headings(chunk: str, scan_lines: int) -> Tuple[str, str]:
    lines = chunk.split("\n")
    cut = len(lines)
    scanned = 0
    for pos in range(len(lines) - 1, -1, -1):
        stripped = lines[pos].strip()
        if not stripped:
            continue
        if scanned >= scan_lines or not is_heading(stripped):
            break
        scanned += 1
        cut = pos

    if cut == len(lines):
        return chunk, ""
    moved = "\n".join(line.strip() for line in lines[cut:] if line.strip())
    return "\n".join(lines[:cut]).strip(), moved


def _to_chunks(texts: List[str]) -> List[Chunk]:
    total = len(texts)
    return [
        Chunk(text=text, sequence_index=idx, sequence_total=total)
        for idx, text in enumerate(texts)
    ]


def _resolve_viewport(viewport: Union[ViewportClass, str]) -> ViewportClass:
    if isinstance(viewport, ViewportClass):
        return viewport
    return get_viewport(viewport)
