import pytest

from narrative_slides.config import PaginationSettings
from narrative_slides.exceptions import ConfigurationError


def test_defaults_when_environment_is_empty():
    settings = PaginationSettings.from_env({})

    assert settings.char_budget == 1400
    assert settings.viewport == "desktop"
    assert settings.font_path is None
    assert settings.orphan_scan_lines == 5


def test_values_are_read_from_mapping():
    settings = PaginationSettings.from_env(
        {
            "NARRATIVE_SLIDES_CHAR_BUDGET": "900",
            "NARRATIVE_SLIDES_VIEWPORT": "tablet",
            "NARRATIVE_SLIDES_FONT_PATH": "/fonts/Inter.ttf",
            "NARRATIVE_SLIDES_ORPHAN_SCAN_LINES": "3",
        }
    )

    assert settings == PaginationSettings(900, "tablet", "/fonts/Inter.ttf", 3)


@pytest.mark.parametrize(
    "environ",
    [
        {"NARRATIVE_SLIDES_CHAR_BUDGET": "many"},
        {"NARRATIVE_SLIDES_CHAR_BUDGET": "0"},
        {"NARRATIVE_SLIDES_ORPHAN_SCAN_LINES": "-1"},
        {"NARRATIVE_SLIDES_VIEWPORT": "foo"},
    ],
)
def test_invalid_values_raise_configuration_error(environ):
    with pytest.raises(ConfigurationError) as excinfo:
        PaginationSettings.from_env(environ)

    assert "[config]" in str(excinfo.value)


def test_process_environment_wins_over_dotenv(tmp_path, monkeypatch):
    dotenv_file = tmp_path / ".env"
    dotenv_file.write_text("NARRATIVE_SLIDES_VIEWPORT=wide\n", encoding="utf-8")
    monkeypatch.setenv("NARRATIVE_SLIDES_VIEWPORT", "tablet")
    monkeypatch.setenv("NARRATIVE_SLIDES_CHAR_BUDGET", "700")

    settings = PaginationSettings.from_env(dotenv_path=str(dotenv_file))

    assert settings.viewport == "tablet"
    assert settings.char_budget == 700


def test_unknown_viewport_is_rejected_before_pagination():
    with pytest.raises(ConfigurationError) as excinfo:
        PaginationSettings(viewport="watch").validate()

    assert "watch" in str(excinfo.value)
