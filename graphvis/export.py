# graphvis/export.py
"""
Renderer-facing exports of the live model.

Public API
----------
payload(model, live, colors, config) -> dict
write_payload(path, model, live, colors, config) -> str
export_pyvis(live, colors, config, path) -> str

Payload shape (example):
{
  "primary_column": "Company",
  "types": [{"type": "Company", "color": "#...", "css_class": "Company", "show_labels": true}, ...],
  "hidden_label_types": ["Person"],
  "nodes": [{"id": "Company: Acme", "name": "Acme", "type": "Company", "primary": true,
             "degree": 2, "color": "#...", "radius": 6.3, "label_lines": ["Acme"]}, ...],
  "links": [{"source": "Company: Acme", "target": "Person: Bob"}, ...]
}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .labels import wrap_label
from .schemas import GraphModel, LiveModel, VisibilityConfig
from .visibility import css_class, hidden_label_types

# Optional dependency; only needed for export_pyvis
try:
    from pyvis.network import Network
    _HAS_PYVIS = True
except Exception:
    _HAS_PYVIS = False

FALLBACK_COLOR = "#95a5a6"


def node_radius(degree: int) -> float:
    return 5 * degree ** (1 / 3)


def payload(
    model: Optional[GraphModel],
    live: LiveModel,
    colors: Mapping[str, str],
    config: VisibilityConfig,
) -> Dict[str, Any]:
    types = model.types() if model is not None else []
    return {
        "primary_column": model.primary_column if model is not None else None,
        "types": [
            {
                "type": t,
                "color": colors.get(t, FALLBACK_COLOR),
                "css_class": css_class(t),
                "mode": config.mode_of(t),
                "show_labels": config.for_type(t).show_labels,
            }
            for t in types
        ],
        "hidden_label_types": hidden_label_types(types, config),
        "nodes": [
            {
                **n.model_dump(),
                "color": colors.get(n.type, FALLBACK_COLOR),
                "radius": round(node_radius(n.degree), 3),
                "label_lines": wrap_label(n.name),
            }
            for n in live.nodes
        ],
        "links": [l.model_dump() for l in live.links],
    }


def write_payload(
    path: Union[str, Path],
    model: Optional[GraphModel],
    live: LiveModel,
    colors: Mapping[str, str],
    config: VisibilityConfig,
) -> str:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(payload(model, live, colors, config), ensure_ascii=False, indent=2), encoding="utf-8")
    return str(out)


def export_pyvis(
    live: LiveModel,
    colors: Mapping[str, str],
    config: VisibilityConfig,
    path: Union[str, Path],
    *,
    physics: bool = True,
) -> str:
    """
    Export the live model as interactive HTML using pyvis/vis.js.
    Nodes are sized by degree and labelled with their wrapped name unless
    labels are hidden for their type; the hover title is the node id.
    """
    if not _HAS_PYVIS:
        raise RuntimeError("pyvis is not installed. `pip install pyvis`")

    path = str(Path(path).absolute())
    net = Network(height="820px", width="100%", directed=False, notebook=False)
    net.toggle_physics(physics)

    for n in live.nodes:
        label = "\n".join(wrap_label(n.name)) if config.for_type(n.type).show_labels else " "
        net.add_node(
            n.id,
            label=label,
            title=n.id,
            color=colors.get(n.type, FALLBACK_COLOR),
            shape="dot",
            size=node_radius(n.degree) * 2,
            group=n.type,
        )

    for l in live.links:
        net.add_edge(l.source, l.target, color="#999999")

    net.write_html(path, open_browser=False, notebook=False)
    return path
