"""graphvis.errors

Error kinds surfaced by the graph core. Each carries an ``error_code`` so a UI
layer can report failures the same way regardless of where they came from.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class GraphVisError(Exception):
    error_code = "graphvis_error"

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": False, "error_code": self.error_code, "message": self.message, **self.details}


class MalformedInput(GraphVisError, ValueError):
    """The tabular input cannot be turned into a graph model."""

    error_code = "malformed_input"


class ReadFailure(GraphVisError):
    """The raw-input source could not be read (network or file error)."""

    error_code = "read_failure"

    def __init__(self, source: str, cause: Optional[BaseException] = None) -> None:
        reason = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to read data from {source}{reason}", source=source)
        self.source = source
        self.cause = cause


class SettingsDecodeFailure(GraphVisError, ValueError):
    """Stored settings are corrupt. Always recovered locally."""

    error_code = "settings_decode_failure"
