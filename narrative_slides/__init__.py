"""Pagination and inline formatting of narrative report text into slides."""

from .config import PaginationSettings
from .exceptions import (
    ConfigurationError,
    OracleUnavailableError,
    SlideLayoutError,
    UnknownViewportError,
)
from .headings import clean_heading_text, is_heading
from .inline_format import format_text, highlight_citations
from .layout_oracle import (
    VIEWPORTS,
    CharacterBudgetOracle,
    FontMetricsOracle,
    LayoutOracle,
    ViewportClass,
    get_viewport,
)
from .pagination import Paginator, normalize_whitespace, paginate_text
from .pptx_renderer import SlideDeckRenderer
from .sections import split_sections, strip_paragraph_markers
from .slide_assembly import (
    DEFAULT_REPORT_FIELDS,
    ReportDeckBuilder,
    ReportField,
    SlideAssembler,
    build_topic_index,
    topic_at,
)
from .slide_models import (
    Chunk,
    Section,
    SlideDescriptor,
    Span,
    SpanKind,
    TopicGroup,
    flatten_spans,
)

__all__ = [
    "PaginationSettings",
    "SlideLayoutError",
    "OracleUnavailableError",
    "ConfigurationError",
    "UnknownViewportError",
    "is_heading",
    "clean_heading_text",
    "split_sections",
    "strip_paragraph_markers",
    "format_text",
    "highlight_citations",
    "LayoutOracle",
    "CharacterBudgetOracle",
    "FontMetricsOracle",
    "ViewportClass",
    "VIEWPORTS",
    "get_viewport",
    "Paginator",
    "paginate_text",
    "normalize_whitespace",
    "SlideAssembler",
    "ReportDeckBuilder",
    "ReportField",
    "DEFAULT_REPORT_FIELDS",
    "build_topic_index",
    "topic_at",
    "SlideDeckRenderer",
    "Section",
    "Chunk",
    "Span",
    "SpanKind",
    "SlideDescriptor",
    "TopicGroup",
    "flatten_spans",
]
