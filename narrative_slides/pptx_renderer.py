"""Export slide descriptors to PPTX (and optional PNG previews)."""

from __future__ import annotations

import io
import logging
import subprocess
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from pptx import Presentation
from pptx.util import Pt

from .inline_format import format_text
from .slide_models import SlideDescriptor, Span, SpanKind

LOGGER = logging.getLogger(__name__)

TITLE_AND_CONTENT_LAYOUT = 1
BODY_PLACEHOLDER_IDX = 1


class SlideDeckRenderer:
    """Render slide descriptors into PPTX binaries."""

    def __init__(
        self,
        template_path: Optional[Path] = None,
        *,
        body_font_size: int = 18,
        citation_font_size: int = 16,
    ) -> None:
        self.template_path = template_path
        self.body_font_size = body_font_size
        self.citation_font_size = citation_font_size

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def render(self, slides: Sequence[SlideDescriptor]) -> io.BytesIO:
        """Return a PPTX stream with one slide per descriptor."""

        presentation = Presentation(self.template_path) if self.template_path else Presentation()
        layout = presentation.slide_layouts[TITLE_AND_CONTENT_LAYOUT]

        for descriptor in slides:
            slide = presentation.slides.add_slide(layout)
            slide.shapes.title.text = descriptor.title or descriptor.subtitle
            body = slide.placeholders[BODY_PLACEHOLDER_IDX]
            self._write_body(body.text_frame, descriptor)

        buffer = io.BytesIO()
        presentation.save(buffer)
        buffer.seek(0)
        LOGGER.debug("Rendered %d slides to PPTX", len(slides))
        return buffer

    def render_preview_image(
        self,
        slides: Sequence[SlideDescriptor],
        *,
        slide_index: int = 0,
        pptx_bytes: Optional[bytes] = None,
    ) -> Optional[bytes]:
        """Generate a PNG preview of one slide if LibreOffice is available."""

        soffice_path = _locate_soffice()
        if soffice_path is None:
            return None

        payload = pptx_bytes or self.render(slides).getvalue()
        with tempfile.TemporaryDirectory() as tmpdir:
            pptx_path = Path(tmpdir) / "preview.pptx"
            pptx_path.write_bytes(payload)

            cmd = [
                soffice_path,
                "--headless",
                "--convert-to",
                "png",
                "--outdir",
                tmpdir,
                str(pptx_path),
            ]
            try:
                subprocess.run(
                    cmd,
                    check=True,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.PIPE,
                    timeout=60,
                )
            except (subprocess.SubprocessError, OSError) as exc:
                LOGGER.warning("Preview conversion failed: %s", exc)
                return None

            png_files = sorted(Path(tmpdir).glob("*.png"))
            if not png_files:
                return None

            index = max(0, min(slide_index, len(png_files) - 1))
            return png_files[index].read_bytes()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _write_body(self, text_frame, descriptor: SlideDescriptor) -> None:
        text_frame.clear()
        text_frame.word_wrap = True
        paragraph = text_frame.paragraphs[0]

        if descriptor.title and descriptor.subtitle:
            run = paragraph.add_run()
            run.text = descriptor.subtitle
            run.font.bold = True
            run.font.size = Pt(self.body_font_size + 2)
            paragraph = text_frame.add_paragraph()

        spans = descriptor.spans or format_text(descriptor.content.text)
        for line_idx, line in enumerate(_span_lines(spans)):
            if line_idx > 0:
                paragraph = text_frame.add_paragraph()
            for span in line:
                self._add_run(paragraph, span)

    def _add_run(self, paragraph, span: Span) -> None:
        run = paragraph.add_run()
        run.text = span.text
        font = run.font
        font.size = Pt(self.body_font_size)
        if span.kind is SpanKind.STRONG:
            font.bold = True
        elif span.kind is SpanKind.EMPHASIS:
            font.italic = True
        elif span.kind is SpanKind.CITATION:
            font.italic = True
            font.underline = True
            font.size = Pt(self.citation_font_size)


# ----------------------------------------------------------------------
# Helper functions
# ----------------------------------------------------------------------

def _span_lines(spans: Iterable[Span]) -> List[List[Span]]:
    """Break spans at newlines; each line becomes one PPTX paragraph."""

    lines: List[List[Span]] = [[]]
    for span in spans:
        pieces = span.text.split("\n")
        for piece_idx, piece in enumerate(pieces):
            if piece_idx > 0:
                lines.append([])
            if piece:
                lines[-1].append(Span(piece, span.kind))
    return lines


def _locate_soffice() -> Optional[str]:
    candidates = [
        "soffice",
        "/Applications/LibreOffice.app/Contents/MacOS/soffice",
        "/usr/bin/soffice",
    ]
    for candidate in candidates:
        try:
            subprocess.run(
                [candidate, "--version"],
                check=True,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
            return candidate
        except (subprocess.SubprocessError, OSError):
            continue
    return None
