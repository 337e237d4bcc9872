# graphvis/graph_build.py
"""
Graph model builder: normalised CSV rows → deduplicated nodes + one link per row.

Public API
----------
primary_column(rows) -> str
build_nodes(rows, primary) -> list[Node]
build_links(rows, primary) -> list[Link]
build_model(rows) -> GraphModel
build_model_from_text(text) -> GraphModel
nodes_by_type(nodes) -> dict[str, list[str]]
node_types(nodes) -> list[str]
to_nx(nodes, links) -> nx.MultiGraph

Acceptance notes
----------------
• Node ids are "<type>: <name>"; every id appears exactly once.
• degree = number of rows mentioning the node, counted separately for the
  primary column and for the (other_node_type, other_node) pair.
• Links are not deduplicated: each row yields one link, in row order.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Sequence, Tuple

import networkx as nx

from .csv_normalize import normalize_rows, parse_csv_text
from .errors import MalformedInput
from .schemas import OTHER_NODE, OTHER_NODE_TYPE, RESERVED_COLUMNS, GraphModel, Link, Node, node_id

_LOG = logging.getLogger(__name__)

Row = Mapping[str, str]

# ---- Columns -----------------------------------------------------------------

def primary_column(rows: Sequence[Row]) -> str:
    """
    The primary column is the one header in the first row that is neither
    ``other_node`` nor ``other_node_type``. Its name doubles as the primary
    nodes' type.
    """
    if not rows:
        raise MalformedInput("Input has no data rows.")
    columns = list(rows[0].keys())
    missing = [c for c in RESERVED_COLUMNS if c not in columns]
    if missing:
        raise MalformedInput(
            f"Input is missing required column(s): {', '.join(missing)}",
            columns=columns,
        )
    candidates = [c for c in columns if c not in RESERVED_COLUMNS]
    if len(candidates) != 1:
        raise MalformedInput(
            f"Expected exactly one primary column besides {OTHER_NODE} and {OTHER_NODE_TYPE}, "
            f"found {len(candidates)}: {candidates}",
            columns=columns,
        )
    return candidates[0]

# ---- Builders ----------------------------------------------------------------

def _count_by(rows: Sequence[Row], key) -> Dict[Tuple[str, str], int]:
    # dicts keep first-appearance order, which becomes node order
    counts: Dict[Tuple[str, str], int] = {}
    for row in rows:
        k = key(row)
        counts[k] = counts.get(k, 0) + 1
    return counts


def build_nodes(rows: Sequence[Row], primary: str) -> List[Node]:
    """Primary nodes (grouped by primary value) followed by other nodes (grouped by type+name)."""
    primaries = _count_by(rows, lambda r: (primary, r[primary]))
    others = _count_by(rows, lambda r: (r[OTHER_NODE_TYPE], r[OTHER_NODE]))

    nodes = [
        Node(id=node_id(t, name), name=name, type=t, primary=True, degree=deg)
        for (t, name), deg in primaries.items()
    ]
    nodes.extend(
        Node(id=node_id(t, name), name=name, type=t, primary=False, degree=deg)
        for (t, name), deg in others.items()
    )

    clashes = {k for k in others if k in primaries}
    if clashes:
        _LOG.warning(
            "other_node_type equals primary column %r; %d node id(s) appear twice: %s",
            primary, len(clashes), sorted(node_id(*k) for k in clashes)[:5],
        )
    return nodes


def build_links(rows: Sequence[Row], primary: str) -> List[Link]:
    return [
        Link(
            source=node_id(primary, row[primary]),
            target=node_id(row[OTHER_NODE_TYPE], row[OTHER_NODE]),
        )
        for row in rows
    ]


def build_model(rows: Sequence[Row]) -> GraphModel:
    """
    Normalise raw rows and build the full graph model.

    Raises MalformedInput; never returns a partial model.
    """
    rows = list(rows)
    primary = primary_column(rows)
    normalized = normalize_rows(rows)
    for index, row in enumerate(normalized):
        absent = [c for c in (primary, *RESERVED_COLUMNS) if c not in row]
        if absent:
            raise MalformedInput(f"Row {index + 1} has no value for column(s): {', '.join(absent)}", row=index + 1)
    nodes = build_nodes(normalized, primary)
    links = build_links(normalized, primary)
    _LOG.info("built model: primary=%r nodes=%d links=%d", primary, len(nodes), len(links))
    return GraphModel(primary_column=primary, nodes=tuple(nodes), links=tuple(links))


def build_model_from_text(text: str) -> GraphModel:
    return build_model(parse_csv_text(text))

# ---- Views -------------------------------------------------------------------

def nodes_by_type(nodes: Sequence[Node]) -> Dict[str, List[str]]:
    """
    type -> node names, in first-appearance order of the types and with the
    names sorted case-insensitively (the order of the selection lists).
    """
    grouped: Dict[str, List[str]] = {}
    for n in nodes:
        grouped.setdefault(n.type, []).append(n.name)
    return {t: sorted(names, key=lambda s: (s.casefold(), s)) for t, names in grouped.items()}


def node_types(nodes: Sequence[Node]) -> List[str]:
    return sorted({n.type for n in nodes})


def to_nx(nodes: Sequence[Node], links: Sequence[Link]) -> nx.MultiGraph:
    """
    Undirected multigraph keyed by node id. Parallel links stay distinct edges,
    so adjacency matches the link list one-to-one.
    """
    G = nx.MultiGraph()
    for n in nodes:
        G.add_node(n.id, name=n.name, type=n.type, primary=n.primary, degree=n.degree)
    for link in links:
        G.add_edge(link.source, link.target)
    return G
