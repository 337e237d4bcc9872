"""graphvis.visibility

Computes the live (displayed) subset of the full graph from a per-type
visibility configuration.

Three passes:
  1) directly selected: types in mode "all", or names picked under "selected"
  2) nodes of "adjacent" types linked to a pass-1 node
  3) nodes of "adjacent" types linked to a pass-1 or pass-2 node

The closure stops after ADJACENCY_HOPS passes; it is not iterated to a fixed
point. Whether an adjacent node is admitted depends only on that node's own
type mode, never on the mode of the neighbour that pulls it in.

The engine is pure: it never mutates the model or the configuration, and the
live model is rebuilt wholesale on every call.
"""

from __future__ import annotations

import logging
import re
from typing import Collection, Iterable, List, Optional, Sequence, Set

import networkx as nx

from ._perf import timed
from .graph_build import to_nx
from .schemas import GraphModel, Link, LiveModel, Node, VisibilityConfig

_LOG = logging.getLogger(__name__)

ADJACENCY_HOPS = 2

# a recompute slower than this is logged as a warning
SLOW_RECOMPUTE_MS = 250.0

_NON_WORD = re.compile(r"\W")


def directly_selected(nodes: Iterable[Node], config: VisibilityConfig) -> List[Node]:
    out: List[Node] = []
    for node in nodes:
        vis = config.for_type(node.type)
        if vis.mode == "all":
            out.append(node)
        elif vis.mode == "selected" and node.name in vis.selected_names:
            out.append(node)
    return out


def adjacent_nodes(
    G: nx.MultiGraph,
    nodes: Iterable[Node],
    reference_ids: Collection[str],
    config: VisibilityConfig,
) -> List[Node]:
    """Nodes whose type is in "adjacent" mode and that share a link with a reference node."""
    neighbour_ids: Set[str] = set()
    for rid in reference_ids:
        if rid in G:
            neighbour_ids.update(G.neighbors(rid))
    return [
        n for n in nodes
        if n.id in neighbour_ids and config.mode_of(n.type) == "adjacent"
    ]


def live_links(links: Iterable[Link], live_ids: Collection[str]) -> List[Link]:
    return [l for l in links if l.source in live_ids and l.target in live_ids]


def compute_live(
    nodes: Sequence[Node],
    links: Sequence[Link],
    config: VisibilityConfig,
    *,
    graph: Optional[nx.MultiGraph] = None,
) -> LiveModel:
    """
    Return the live nodes and links for ``config``.

    Live nodes keep the order of ``nodes`` and appear once each; live links
    are every link (duplicates included) whose two endpoints are live.
    A prebuilt adjacency ``graph`` may be passed to skip rebuilding it.
    """
    with timed(_LOG, "visibility.compute_live", warn_ms=SLOW_RECOMPUTE_MS, nodes=len(nodes), links=len(links)):
        G = graph if graph is not None else to_nx(nodes, links)

        reference: Set[str] = {n.id for n in directly_selected(nodes, config)}
        live_ids: Set[str] = set(reference)
        for hop in range(ADJACENCY_HOPS):
            found = {n.id for n in adjacent_nodes(G, nodes, reference, config)}
            _LOG.debug("adjacency pass %d admitted %d node(s)", hop + 1, len(found - live_ids))
            live_ids |= found
            reference = set(live_ids)

        kept_nodes = tuple(n for n in nodes if n.id in live_ids)
        kept_links = tuple(live_links(links, live_ids))
    return LiveModel(nodes=_dedupe(kept_nodes), links=kept_links)


def compute_live_model(model: GraphModel, config: VisibilityConfig, *, graph=None) -> LiveModel:
    return compute_live(model.nodes, model.links, config, graph=graph)


def _dedupe(nodes: Sequence[Node]) -> tuple:
    seen: Set[str] = set()
    out = []
    for n in nodes:
        if n.id not in seen:
            seen.add(n.id)
            out.append(n)
    return tuple(out)

# ---- Label visibility ----------------------------------------------------------

def css_class(node_type: str) -> str:
    """Node type with non-word characters removed, usable as a CSS class name."""
    return _NON_WORD.sub("", node_type)


def hidden_label_types(types: Iterable[str], config: VisibilityConfig) -> List[str]:
    return sorted(t for t in set(types) if not config.for_type(t).show_labels)
