"""Runtime settings for pagination, loaded from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .layout_oracle import VIEWPORTS

ENV_PREFIX = "NARRATIVE_SLIDES_"

DEFAULT_CHAR_BUDGET = 1400
DEFAULT_VIEWPORT = "desktop"
DEFAULT_ORPHAN_SCAN_LINES = 5


@dataclass(slots=True)
class PaginationSettings:
    """Knobs shared by the pagination engine and the oracles."""

    char_budget: int = DEFAULT_CHAR_BUDGET
    viewport: str = DEFAULT_VIEWPORT
    font_path: Optional[str] = None
    orphan_scan_lines: int = DEFAULT_ORPHAN_SCAN_LINES

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        dotenv_path: Optional[str] = None,
    ) -> "PaginationSettings":
        """Build settings from ``NARRATIVE_SLIDES_*`` variables.

        When ``environ`` is omitted a ``.env`` file is loaded first and the
        process environment is read. Passing a mapping skips both, which keeps
        tests independent of the machine they run on.
        """

        if environ is None:
            load_dotenv(dotenv_path)
            environ = os.environ

        settings = cls(
            char_budget=_read_int(environ, "CHAR_BUDGET", DEFAULT_CHAR_BUDGET),
            viewport=environ.get(ENV_PREFIX + "VIEWPORT", DEFAULT_VIEWPORT).strip()
            or DEFAULT_VIEWPORT,
            font_path=environ.get(ENV_PREFIX + "FONT_PATH") or None,
            orphan_scan_lines=_read_int(
                environ, "ORPHAN_SCAN_LINES", DEFAULT_ORPHAN_SCAN_LINES
            ),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        if self.char_budget <= 0:
            raise ConfigurationError("char_budget must be greater than 0")
        if self.orphan_scan_lines <= 0:
            raise ConfigurationError("orphan_scan_lines must be greater than 0")
        if self.viewport not in VIEWPORTS:
            raise ConfigurationError(
                f"viewport must be one of {sorted(VIEWPORTS)}, got {self.viewport!r}"
            )


def _read_int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(ENV_PREFIX + key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"{ENV_PREFIX}{key} must be an integer, got {raw!r}",
            original_error=exc,
        ) from exc
