import io

import pytest

pytest.importorskip("pptx")
from pptx import Presentation

from narrative_slides.pptx_renderer import SlideDeckRenderer
from narrative_slides.slide_models import Chunk, SlideDescriptor


def _build_slides():
    return [
        SlideDescriptor(
            slide_id="summary-0",
            topic="Summary",
            title="Summary",
            subtitle="Diet (1/2)",
            content=Chunk("Diet: eat (warm) food.\nSee Charaka Sutra 5.12.", 0, 2),
        ),
        SlideDescriptor(
            slide_id="summary-1",
            topic="Summary",
            title="",
            subtitle="Diet (2/2)",
            content=Chunk("Rest well.", 1, 2),
        ),
    ]


def test_render_writes_one_slide_per_descriptor():
    renderer = SlideDeckRenderer()

    pptx_stream = renderer.render(_build_slides())
    prs = Presentation(io.BytesIO(pptx_stream.getvalue()))

    assert len(prs.slides) == 2
    assert prs.slides[0].shapes.title.text == "Summary"
    assert prs.slides[1].shapes.title.text == "Diet (2/2)"

    body = prs.slides[0].placeholders[1].text_frame
    runs = [run for paragraph in body.paragraphs for run in paragraph.runs]
    assert runs[0].text == "Diet (1/2)"
    assert any(run.text == "(Warm)" and run.font.bold for run in runs)
    assert any(run.text == "Charaka Sutra 5.12" and run.font.italic for run in runs)
    assert len(body.paragraphs) == 3


def test_render_preview_image_returns_none_without_soffice(monkeypatch):
    renderer = SlideDeckRenderer()
    monkeypatch.setattr(
        "narrative_slides.pptx_renderer._locate_soffice", lambda: None
    )

    assert renderer.render_preview_image(_build_slides()) is None
