"""graphvis.config

Runtime configuration from the environment (a local ``.env`` is loaded first).

  GRAPHVIS_DATA           default CSV source (path or URL)
  GRAPHVIS_SETTINGS_PATH  JSON file backing the settings store
  GRAPHVIS_HTTP_TIMEOUT   seconds allowed for fetching a URL source
  GRAPHVIS_LOG_LEVEL      logging level name (default INFO)
  DEBUG                   "true" forces DEBUG logging
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .sources import DEFAULT_TIMEOUT_S

DEFAULT_SETTINGS_PATH = Path.home() / ".graphvis" / "settings.json"


@dataclass(frozen=True)
class AppConfig:
    data_source: Optional[str] = None
    settings_path: Path = DEFAULT_SETTINGS_PATH
    http_timeout_s: float = DEFAULT_TIMEOUT_S
    log_level: str = "INFO"

    @property
    def log_level_no(self) -> int:
        return getattr(logging, self.log_level.upper(), logging.INFO)


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return max(0.1, float(raw))
    except ValueError:
        logging.getLogger(__name__).warning("%s=%r is not a number; using %s", name, raw, default)
        return default


def load_config(*, dotenv: bool = True) -> AppConfig:
    if dotenv:
        load_dotenv()
    debug = os.environ.get("DEBUG", "false").lower() == "true"
    level = "DEBUG" if debug else (os.environ.get("GRAPHVIS_LOG_LEVEL") or "INFO")
    settings_path = os.environ.get("GRAPHVIS_SETTINGS_PATH")
    return AppConfig(
        data_source=os.environ.get("GRAPHVIS_DATA") or None,
        settings_path=Path(settings_path).expanduser() if settings_path else DEFAULT_SETTINGS_PATH,
        http_timeout_s=_float_env("GRAPHVIS_HTTP_TIMEOUT", DEFAULT_TIMEOUT_S),
        log_level=level.upper(),
    )
