from narrative_slides.sections import (
    split_sections,
    strip_paragraph_markers,
    strip_word_counts,
)
from narrative_slides.slide_models import Section


def test_section_markers_split_into_sections():
    text = "SECTION 1: Diet\nEat more fiber.\n\nSECTION 2: Exercise\nWalk daily."

    sections = split_sections(text)

    assert sections == [
        Section("Diet", "Eat more fiber.", 1),
        Section("Exercise", "Walk daily.", 2),
    ]


def test_section_markers_win_over_inline_headings():
    text = "SECTION 1: Intro\nDiagnosis: Vata imbalance.\n\nSECTION 2: Plan\nRest."

    sections = split_sections(text)

    assert [section.heading for section in sections] == ["Intro", "Plan"]
    assert sections[0].content == "Diagnosis: Vata imbalance."


def test_text_before_first_marker_is_kept_as_preamble():
    text = "Overview text.\nSECTION 1: Diet (120 words)\nEat."

    sections = split_sections(text)

    assert sections == [Section("Diet", "Overview text.\n\nEat.", 1)]


def test_section_titles_are_cleaned_and_defaulted():
    text = "SECTION 1 - **Ahara**:\nEat.\nSECTION 2:\nRest."

    sections = split_sections(text)

    assert [section.heading for section in sections] == ["Ahara", "Section 2"]
    assert [section.content for section in sections] == ["Eat.", "Rest."]


def test_paragraph_labels_split_when_kept():
    text = (
        "PARAGRAPH 1 - Physical Constitution: Your frame is light.\n"
        "You tire easily.\n"
        "PARAGRAPH 2 - Mind: Quick learner."
    )

    sections = split_sections(text, strip_markers=False)

    assert sections == [
        Section("Physical Constitution", "Your frame is light.\nYou tire easily.", 1),
        Section("Mind", "Quick learner.", 2),
    ]


def test_paragraph_labels_are_stripped_by_default():
    text = (
        "PARAGRAPH 1 - Physical Constitution: Your frame is light.\n"
        "You tire easily.\n"
        "PARAGRAPH 2 - Mind: Quick learner."
    )

    sections = split_sections(text)

    assert [section.heading for section in sections] == ["Physical Constitution", "Mind"]
    assert sections[0].content == "Your frame is light.\nYou tire easily."
    assert sections[1].content == "Quick learner."
    assert all(section.number is None for section in sections)


def test_numbered_titles_split_into_sections():
    text = "1. Diet\nEat warm food.\n2. Sleep\nRest early."

    sections = split_sections(text)

    assert sections == [
        Section("Diet", "Eat warm food.", 1),
        Section("Sleep", "Rest early.", 2),
    ]


def test_inline_headings_split_and_keep_preamble():
    text = (
        "Your report follows.\n\n"
        "Physical Constitution: Light frame.\n\n"
        "Mental & Cognitive Attributes: Quick mind."
    )

    sections = split_sections(text)

    assert sections == [
        Section("Physical Constitution", "Your report follows.\n\nLight frame."),
        Section("Mental & Cognitive Attributes", "Quick mind."),
    ]


def test_heading_lines_split_into_sections():
    text = "Diet:\nEat warm food.\nSleep:\nRest early."

    sections = split_sections(text)

    assert sections == [
        Section("Diet", "Eat warm food."),
        Section("Sleep", "Rest early."),
    ]


def test_marker_free_text_is_a_single_untitled_section():
    text = "Just some plain text.\nMore text."

    assert split_sections(text) == [Section("", text)]


def test_empty_text_does_not_raise():
    assert split_sections("") == [Section("", "")]


def test_sections_preserve_every_word():
    text = (
        "Your report follows.\n\n"
        "Physical Constitution: Light frame and dry skin.\n\n"
        "Mental & Cognitive Attributes: Quick mind. Restless sleep."
    )

    sections = split_sections(text)
    rebuilt = " ".join(f"{section.heading} {section.content}" for section in sections)

    assert sorted(rebuilt.split()) == sorted(text.replace(":", "").split())


def test_strip_helpers():
    assert strip_paragraph_markers("PARAGRAPH 3: Body text.") == "Body text."
    assert strip_paragraph_markers("") == ""
    assert strip_word_counts("Diet [80 words]\nEat.") == "Diet\nEat."
