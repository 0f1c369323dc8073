import pytest

from narrative_slides.headings import clean_heading_text, is_heading


@pytest.mark.parametrize(
    "line",
    [
        "Physical Constitution:",
        "Mental & Cognitive Attributes:",
        "DIET & LIFESTYLE:",
        "**Physical Constitution:**",
        "**Key Points**",
        "1. Mental Tendencies:",
        "Your daily routine should include:",
        "Physical Mental Emotional Spiritual Dietary Lifestyle Seasonal Routine:",
    ],
)
def test_is_heading_accepts_structural_labels(line):
    assert is_heading(line)


@pytest.mark.parametrize(
    "line",
    [
        "",
        "   ",
        "as your doctor said:",
        "This is a sentence.",
        "Physical Constitution",
        "Diet:\nEat warm food.",
        "The following recommendations are tailored to your constitution and should be followed:",
    ],
)
def test_is_heading_rejects_body_text(line):
    assert not is_heading(line)


def test_is_heading_ignores_surrounding_whitespace():
    assert is_heading("   Daily Routine:   ")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Diet:", "Diet"),
        ("**Diet:**", "Diet"),
        ("- 1. Diet Plan (120 words):", "Diet Plan"),
        ("## Sleep   Hygiene", "Sleep Hygiene"),
        ("", ""),
    ],
)
def test_clean_heading_text(raw, expected):
    assert clean_heading_text(raw) == expected
