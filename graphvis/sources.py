"""graphvis.sources

Raw-input collaborator: fetch CSV text from a URL or read it from a file.
Every failure surfaces as ReadFailure; no retries happen here.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import requests

from .errors import ReadFailure

_LOG = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 30.0


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def read_raw_input(source: Union[str, Path], *, timeout: float = DEFAULT_TIMEOUT_S) -> str:
    src = str(source)
    _LOG.debug("Reading data from %s", src)
    try:
        if is_url(src):
            r = requests.get(src, timeout=timeout)
            r.raise_for_status()
            if not r.encoding:
                r.encoding = "utf-8"
            text = r.text
        else:
            text = Path(src).read_text(encoding="utf-8-sig")
    except (requests.RequestException, OSError, UnicodeDecodeError) as e:
        _LOG.warning("Failed to read data from %s: %s", src, e)
        raise ReadFailure(src, e) from e
    _LOG.debug("Successfully read %d characters from %s", len(text), src)
    return text
