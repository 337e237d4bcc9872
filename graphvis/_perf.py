"""graphvis._perf

Timing logs for the recompute path.

``timed`` wraps a block and logs ``<name>.start`` and ``<name>.end`` lines
carrying the given fields plus the elapsed ``dt_ms``. The end line is promoted
to a warning when the block took at least ``warn_ms``.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

# longer field values are cut so a log line stays on one screen
MAX_FIELD_CHARS = 200


def _now_ms() -> float:
    return time.perf_counter() * 1000.0


def _fields_suffix(fields: Dict[str, Any]) -> str:
    if not fields:
        return ""
    parts = []
    for key in sorted(fields):
        text = str(fields[key])
        if len(text) > MAX_FIELD_CHARS:
            text = text[:MAX_FIELD_CHARS] + "…"
        parts.append(f"{key}={text}")
    return " | " + " ".join(parts)


@contextmanager
def timed(
    logger: logging.Logger,
    name: str,
    *,
    warn_ms: Optional[float] = None,
    **fields: Any,
) -> Iterator[None]:
    started = _now_ms()
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("%s.start%s", name, _fields_suffix(fields))
    try:
        yield
    finally:
        elapsed = _now_ms() - started
        suffix = _fields_suffix({**fields, "dt_ms": int(elapsed)})
        slow = warn_ms is not None and elapsed >= warn_ms
        logger.log(logging.WARNING if slow else logging.DEBUG, "%s.end%s", name, suffix)
