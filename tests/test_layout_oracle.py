import pytest

from narrative_slides.config import PaginationSettings
from narrative_slides.exceptions import UnknownViewportError
from narrative_slides.layout_oracle import (
    CharacterBudgetOracle,
    FontMetricsOracle,
    get_viewport,
)
from narrative_slides.pagination import Paginator


def test_unknown_viewport_raises():
    with pytest.raises(UnknownViewportError) as excinfo:
        get_viewport("watch")

    assert isinstance(excinfo.value, KeyError)
    assert "watch" in str(excinfo.value)


def test_viewport_geometry():
    desktop = get_viewport("desktop")

    assert desktop.text_width == 1024
    assert desktop.frame_height == 708
    assert not desktop.flowing
    assert get_viewport("mobile").flowing


def test_character_budget_oracle_probe():
    oracle = CharacterBudgetOracle(10)
    viewport = get_viewport("desktop")

    assert not oracle.probe("short", "Title", "Sub", viewport)
    assert oracle.probe("definitely too long", "Title", "Sub", viewport)


def test_character_budget_must_be_positive():
    with pytest.raises(ValueError):
        CharacterBudgetOracle(0)


def test_missing_font_is_not_ready_and_paginator_falls_back():
    oracle = FontMetricsOracle("/nonexistent/font.ttf")
    text = "\n\n".join(f"Paragraph number {idx} here." for idx in range(6))

    assert not oracle.is_ready(get_viewport("desktop"))

    chunks = Paginator(oracle, settings=PaginationSettings(char_budget=30)).paginate(text)

    assert len(chunks) == 6
    assert all(len(chunk.text) <= 30 for chunk in chunks)


def test_font_metrics_detect_overflow():
    oracle = FontMetricsOracle()
    if oracle.font_path is None:
        pytest.skip("no TrueType font available")
    viewport = get_viewport("desktop")

    assert oracle.is_ready(viewport)
    assert not oracle.probe("A short line of text.", "Report", "Diet", viewport)
    assert oracle.probe("word " * 3000, "Report", "Diet", viewport)


def test_font_metrics_account_for_subtitle_block():
    oracle = FontMetricsOracle()
    if oracle.font_path is None:
        pytest.skip("no TrueType font available")
    viewport = get_viewport("tablet")
    text = "\n".join(f"Line {idx}" for idx in range(40))

    with oracle.measurement("", "", viewport) as bare:
        bare_overflow = bare(text)
    with oracle.measurement("Report " * 10, "Subtitle " * 10, viewport) as crowded:
        crowded_overflow = crowded(text)

    assert crowded_overflow or not bare_overflow
