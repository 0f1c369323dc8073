"""Data models for sections, chunks, formatted spans and slide descriptors."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass(slots=True, frozen=True)
class Section:
    """A (heading, content) pair recovered from narrative report text."""

    heading: str
    content: str
    number: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return not self.heading.strip() and not self.content.strip()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "heading": self.heading,
            "content": self.content,
            "number": self.number,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Section":
        number = data.get("number")
        return cls(
            heading=data.get("heading", ""),
            content=data.get("content", ""),
            number=int(number) if number is not None else None,
        )


@dataclass(slots=True, frozen=True)
class Chunk:
    """A slice of one section's content that fits a single slide."""

    text: str
    sequence_index: int = 0
    sequence_total: int = 1

    @property
    def is_paginated(self) -> bool:
        return self.sequence_total > 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "index": self.sequence_index,
            "total": self.sequence_total,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Chunk":
        return cls(
            text=data.get("text", ""),
            sequence_index=int(data.get("index", 0)),
            sequence_total=int(data.get("total", 1)),
        )


class SpanKind(str, Enum):
    PLAIN = "plain"
    STRONG = "strong"
    EMPHASIS = "emphasis"
    CITATION = "citation"


@dataclass(slots=True, frozen=True)
class Span:
    """A formatted text fragment. ``kind`` is a rendering hint only."""

    text: str
    kind: SpanKind = SpanKind.PLAIN

    @classmethod
    def plain(cls, text: str) -> "Span":
        return cls(text, SpanKind.PLAIN)

    @classmethod
    def strong(cls, text: str) -> "Span":
        return cls(text, SpanKind.STRONG)

    @classmethod
    def emphasis(cls, text: str) -> "Span":
        return cls(text, SpanKind.EMPHASIS)

    @classmethod
    def citation(cls, text: str) -> "Span":
        return cls(text, SpanKind.CITATION)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "text": self.text}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Span":
        return cls(
            text=data.get("text", ""),
            kind=SpanKind(data.get("kind", SpanKind.PLAIN.value)),
        )


def flatten_spans(spans: List[Span]) -> str:
    """Return the plain-text projection of ``spans``."""

    return "".join(span.text for span in spans)


@dataclass(slots=True)
class SlideDescriptor:
    """A render-ready slide: one chunk plus navigation metadata."""

    slide_id: str
    topic: str
    title: str
    subtitle: str
    content: Chunk
    spans: List[Span] = field(default_factory=list)
    notes: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.slide_id,
            "topic": self.topic,
            "title": self.title,
            "subtitle": self.subtitle,
            "content": self.content.to_dict(),
            "spans": [span.to_dict() for span in self.spans],
            "notes": dict(self.notes),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SlideDescriptor":
        return cls(
            slide_id=data.get("id", ""),
            topic=data.get("topic", ""),
            title=data.get("title", ""),
            subtitle=data.get("subtitle", ""),
            content=Chunk.from_dict(data.get("content", {})),
            spans=[Span.from_dict(item) for item in data.get("spans", [])],
            notes=dict(data.get("notes", {})),
        )


@dataclass(slots=True, frozen=True)
class TopicGroup:
    """Consecutive slides sharing a topic, for the navigation index."""

    topic: str
    first_index: int
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "topic": self.topic,
            "first_index": self.first_index,
            "count": self.count,
        }
