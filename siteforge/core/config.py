"""Compile options and settings loading."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

ENV_LANG = "SITEFORGE_LANG"
ENV_ESCAPE = "SITEFORGE_ESCAPE"
ENV_LOG_LEVEL = "SITEFORGE_LOG_LEVEL"

DEFAULT_LANG = "fr"
DEFAULT_LOG_LEVEL = "INFO"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class CompileOptions:
    """Knobs shared by every emitter.

    ``escape_content`` is off by default so output stays byte-identical to
    sites generated before escaping existed.
    """

    lang: str = DEFAULT_LANG
    escape_content: bool = False


DEFAULT_OPTIONS = CompileOptions()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in _TRUTHY


def _read_settings(path: Path) -> Dict[str, str]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return {}
    return {str(k): str(v) for k, v in data.items()}


def load_options(path: str | Path | None = None) -> CompileOptions:
    """Build options from an optional JSON file, then the environment."""
    settings: Dict[str, str] = {}
    if path is not None:
        settings = _read_settings(Path(path))

    options = DEFAULT_OPTIONS
    if settings.get("lang"):
        options = replace(options, lang=settings["lang"])
    if "escape_content" in settings:
        options = replace(options, escape_content=_as_bool(settings["escape_content"]))

    env_lang = os.getenv(ENV_LANG)
    if env_lang:
        options = replace(options, lang=env_lang)
    env_escape = os.getenv(ENV_ESCAPE)
    if env_escape is not None:
        options = replace(options, escape_content=_as_bool(env_escape))
    return options


def log_level(default: str = DEFAULT_LOG_LEVEL) -> str:
    level = (os.getenv(ENV_LOG_LEVEL) or default).upper()
    if level not in logging.getLevelNamesMapping():
        return default
    return level


def resolve(options: Optional[CompileOptions]) -> CompileOptions:
    return options if options is not None else DEFAULT_OPTIONS
