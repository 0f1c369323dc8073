"""Combine sections and pagination into an ordered list of slide descriptors."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from .inline_format import format_text
from .pagination import Paginator
from .sections import split_sections
from .slide_models import Section, SlideDescriptor, TopicGroup

LOGGER = logging.getLogger(__name__)


class SlideAssembler:
    """Turn sections into slides, one per chunk of each section."""

    def __init__(self, paginator: Paginator) -> None:
        self.paginator = paginator

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def assemble(
        self,
        sections: Iterable[Section],
        *,
        title: str = "",
        base_id: str = "section",
        topic: Optional[str] = None,
        fallback_subtitle: str = "",
        index_sections: bool = True,
    ) -> List[SlideDescriptor]:
        """Return the slides for ``sections`` in order.

        A section that fits one slide keeps its heading as the subtitle;
        otherwise every slide gets a ``"Heading (i/N)"`` subtitle. IDs depend
        only on section and chunk position so they survive re-rendering of
        unchanged text. ``topic`` overrides the per-section topic (the
        section heading) when slides should be grouped under one name.
        """

        slides: List[SlideDescriptor] = []
        for section_idx, section in enumerate(sections):
            if section.is_empty:
                continue

            heading = section.heading or fallback_subtitle
            chunks = self.paginator.paginate(section.content, title, heading)
            total = len(chunks)
            for chunk in chunks:
                slides.append(
                    SlideDescriptor(
                        slide_id=_slide_id(
                            base_id,
                            section_idx if index_sections else None,
                            chunk.sequence_index,
                            total,
                        ),
                        topic=topic if topic is not None else section.heading,
                        title=title,
                        subtitle=paginated_subtitle(heading, chunk.sequence_index, total),
                        content=chunk,
                        spans=format_text(chunk.text),
                    )
                )
            LOGGER.debug("Section %r produced %d slides", heading, total)
        return slides

    def assemble_text(
        self,
        text: str,
        *,
        title: str = "",
        base_id: str = "section",
        topic: Optional[str] = None,
        fallback_subtitle: str = "",
    ) -> List[SlideDescriptor]:
        """Split ``text`` into sections and assemble their slides."""

        sections = split_sections(text)
        marker_free = len(sections) == 1 and not sections[0].heading
        return self.assemble(
            sections,
            title=title,
            base_id=base_id,
            topic=topic,
            fallback_subtitle=fallback_subtitle,
            index_sections=not marker_free,
        )


def paginated_subtitle(heading: str, index: int, total: int) -> str:
    if total <= 1:
        return heading
    suffix = f"({index + 1}/{total})"
    return f"{heading} {suffix}" if heading else suffix


def _slide_id(
    base_id: str, section_idx: Optional[int], chunk_idx: int, total: int
) -> str:
    slide_id = base_id if section_idx is None else f"{base_id}-{section_idx}"
    if total > 1:
        slide_id = f"{slide_id}-chunk-{chunk_idx}"
    return slide_id


# ----------------------------------------------------------------------
# Topic navigation
# ----------------------------------------------------------------------

def build_topic_index(slides: Sequence[SlideDescriptor]) -> List[TopicGroup]:
    """Group consecutive slides that share a topic."""

    groups: List[TopicGroup] = []
    for idx, slide in enumerate(slides):
        topic = slide.topic or "Unknown"
        if groups and groups[-1].topic == topic:
            last = groups[-1]
            groups[-1] = TopicGroup(last.topic, last.first_index, last.count + 1)
        else:
            groups.append(TopicGroup(topic, idx, 1))
    return groups


def topic_at(groups: Sequence[TopicGroup], slide_index: int) -> str:
    """Return the topic of the group containing ``slide_index``."""

    for group in reversed(groups):
        if slide_index >= group.first_index:
            return group.topic
    return groups[0].topic if groups else ""


# ----------------------------------------------------------------------
# Report decks
# ----------------------------------------------------------------------

@dataclass(slots=True, frozen=True)
class ReportField:
    """One narrative field of a report payload and how its slides are labelled."""

    key: str
    slide_id: str
    title: str
    fallback_subtitle: str


DEFAULT_REPORT_FIELDS = (
    ReportField(
        "prakriti_assessment",
        "prakriti-assessment",
        "Prakriti Assessment",
        "Understanding your birth constitution",
    ),
    ReportField(
        "comprehensive_summary",
        "comprehensive-summary",
        "Comprehensive Summary",
        "An overview of your health profile",
    ),
    ReportField(
        "detailed_explanation",
        "detailed-explanation",
        "Detailed Explanation",
        "In-depth analysis of your constitution",
    ),
    ReportField(
        "recommendations",
        "recommendations",
        "Recommendations",
        "Personalized guidance for your wellness",
    ),
)


class ReportDeckBuilder:
    """Build the narrative slides of a report, field by field."""

    def __init__(
        self,
        assembler: SlideAssembler,
        fields: Sequence[ReportField] = DEFAULT_REPORT_FIELDS,
    ) -> None:
        self.assembler = assembler
        self.fields = tuple(fields)

    def build(self, interpretation: Mapping[str, Any]) -> List[SlideDescriptor]:
        slides: List[SlideDescriptor] = []
        for field in self.fields:
            text = interpretation.get(field.key)
            if not isinstance(text, str) or not text.strip():
                continue
            slides.extend(
                self.assembler.assemble_text(
                    text,
                    title=field.title,
                    base_id=field.slide_id,
                    topic=field.title,
                    fallback_subtitle=field.fallback_subtitle,
                )
            )
        LOGGER.debug("Built %d narrative slides", len(slides))
        return slides

    def build_from_report(self, report: Mapping[str, Any]) -> List[SlideDescriptor]:
        """Read ``health_assessment.interpretation`` from a full report payload."""

        assessment = report.get("health_assessment") or {}
        interpretation = assessment.get("interpretation") or {}
        return self.build(interpretation)
