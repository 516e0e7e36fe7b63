"""Runtime settings taken from the environment."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional
import logging
import os


@dataclass
class Settings:
    """Values the command line falls back to when no flag is given."""

    password: Optional[str] = None
    log_level: int = logging.WARNING


def _parse_level(value: Optional[str]) -> int:
    if not value:
        return logging.WARNING
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    # getLevelName returns "Level X" for unknown names
    return level if isinstance(level, int) else logging.WARNING


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Read settings from ``environ`` (defaults to ``os.environ``).

    - ``ENCDOC_PASSWORD``: password used when none is passed on the command line
    - ``ENCDOC_LOG_LEVEL``: level name or number for the root logger
    """
    env = os.environ if environ is None else environ
    return Settings(
        password=env.get("ENCDOC_PASSWORD") or None,
        log_level=_parse_level(env.get("ENCDOC_LOG_LEVEL")),
    )
