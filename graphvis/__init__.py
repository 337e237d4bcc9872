"""
Node-link graph core for sparse CSV input.

Exports:
- build_model, build_model_from_text: CSV rows/text -> deduplicated GraphModel
- compute_live: visibility configuration -> live nodes/links
- assign_colors, wrap_label: renderer helpers
- encode, decode: flat settings codec
- GraphSession: controller a UI layer drives
"""

from .colors import assign_colors
from .errors import GraphVisError, MalformedInput, ReadFailure, SettingsDecodeFailure
from .graph_build import build_model, build_model_from_text
from .labels import wrap_label
from .schemas import GraphModel, Link, LiveModel, Node, TypeVisibility, VisibilityConfig
from .service_adapter import GraphSession
from .settings_codec import decode, encode
from .visibility import compute_live

__all__ = [
    "assign_colors",
    "build_model",
    "build_model_from_text",
    "compute_live",
    "decode",
    "encode",
    "wrap_label",
    "GraphModel",
    "GraphSession",
    "GraphVisError",
    "Link",
    "LiveModel",
    "MalformedInput",
    "Node",
    "ReadFailure",
    "SettingsDecodeFailure",
    "TypeVisibility",
    "VisibilityConfig",
]
