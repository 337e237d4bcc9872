# service_adapter.py
"""
GraphSession: the controller a UI layer drives.

Holds the full model, the visibility configuration and the live model for one
view. Every entry point that changes state runs under a single lock and ends
in a full, synchronous recompute, so recomputations never overlap.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from .colors import assign_colors
from .errors import ReadFailure
from .export import FALLBACK_COLOR, payload as build_payload
from .graph_build import build_model_from_text, nodes_by_type, to_nx
from .labels import wrap_label
from .schemas import MODES, GraphModel, Link, LiveModel, Node, TypeVisibility, VisibilityConfig
from .settings_codec import (
    DATA_KEY,
    MemoryStore,
    SettingsStore,
    decode,
    encode,
    load_settings,
    save_settings,
)
from .sources import read_raw_input
from .visibility import compute_live, hidden_label_types

_LOG = logging.getLogger(__name__)

ModelRebuilt = Callable[[Sequence[Node], Sequence[Link], str], None]
VisibilityChanged = Callable[[Sequence[Node], Sequence[Link]], None]
PartialConfig = Union[VisibilityConfig, Mapping[str, Any]]


class GraphSession:
    def __init__(
        self,
        *,
        store: Optional[SettingsStore] = None,
        reader: Callable[[str], str] = read_raw_input,
        on_model_rebuilt: Optional[ModelRebuilt] = None,
        on_visibility_changed: Optional[VisibilityChanged] = None,
    ) -> None:
        self.store: SettingsStore = store if store is not None else MemoryStore()
        self._reader = reader
        self._on_model_rebuilt = on_model_rebuilt
        self._on_visibility_changed = on_visibility_changed
        self._lock = threading.RLock()

        self.model: Optional[GraphModel] = None
        self.config = VisibilityConfig()
        self.live = LiveModel()
        self.colors: Dict[str, str] = {}
        self._names: Dict[str, List[str]] = {}
        self._graph = None

    # ---- loading ----

    def load_source(self, source: str) -> GraphModel:
        """Read ``source`` through the reader collaborator and rebuild from it."""
        try:
            text = self._reader(source)
        except ReadFailure:
            raise
        except Exception as e:
            raise ReadFailure(str(source), e) from e
        return self.load_text(text)

    def load_text(self, text: str, *, persist: bool = True) -> GraphModel:
        """
        Rebuild the full model from CSV text. On MalformedInput nothing changes
        and the error propagates.
        """
        model = build_model_from_text(text)
        with self._lock:
            if persist:
                self.store.set(DATA_KEY, text)
            self._commit(model)
        return model

    def restore(self) -> Optional[GraphModel]:
        """Rebuild from the raw data saved by the last successful load, if any."""
        text = self.store.get(DATA_KEY)
        if not text:
            return None
        return self.load_text(text, persist=False)

    def _commit(self, model: GraphModel) -> None:
        types = model.types()
        self.model = model
        self._graph = to_nx(model.nodes, model.links)
        self.colors = assign_colors(types)
        self._names = nodes_by_type(model.nodes)
        self.config = decode(load_settings(self.store), types=types)
        self._save_snapshot()
        _LOG.info("model rebuilt: primary=%r types=%s", model.primary_column, types)
        if self._on_model_rebuilt is not None:
            self._on_model_rebuilt(model.nodes, model.links, model.primary_column)
        self._recompute()

    # ---- configuration ----

    def apply_visibility_config(self, partial: PartialConfig) -> LiveModel:
        """
        Merge a UI-originated change into the configuration, save the settings
        snapshot and recompute. Unknown types, unknown modes and ill-typed values
        are skipped rather than rejected.

        Before a model is loaded every change is dropped and the saved settings
        are left as they are.
        """
        with self._lock:
            updates = self._coerce(partial)
            self.config = self.config.merged(updates)
            if self.model is not None:
                self._save_snapshot()
            return self._recompute()

    def _save_snapshot(self) -> None:
        save_settings(self.store, encode(self.effective_config()))

    def effective_config(self) -> VisibilityConfig:
        """The configuration with an explicit entry for every type in the model."""
        types = self.model.types() if self.model is not None else []
        return VisibilityConfig(types={t: self.config.for_type(t) for t in types})

    def _coerce(self, partial: PartialConfig) -> VisibilityConfig:
        items = partial.types if isinstance(partial, VisibilityConfig) else partial
        if not isinstance(items, Mapping):
            _LOG.debug("ignoring visibility change of type %s", type(partial).__name__)
            return VisibilityConfig()
        out: Dict[str, TypeVisibility] = {}
        for node_type, change in items.items():
            if node_type not in self._names:
                _LOG.debug("ignoring visibility change for unknown type %r", node_type)
                continue
            if isinstance(change, TypeVisibility):
                change = change.model_dump()
            if not isinstance(change, Mapping):
                _LOG.debug("ignoring visibility change %r for type %r", change, node_type)
                continue
            out[node_type] = self._apply_change(node_type, change)
        return VisibilityConfig(types=out)

    def _apply_change(self, node_type: str, change: Mapping[str, Any]) -> TypeVisibility:
        current = self.config.for_type(node_type)
        fields = current.model_dump()
        known = self._names[node_type]

        mode = change.get("mode")
        if mode is not None:
            if mode in MODES:
                fields["mode"] = mode
            else:
                _LOG.debug("ignoring unknown mode %r for type %r", mode, node_type)

        names = change.get("selected_names")
        if names is not None:
            if isinstance(names, str):
                names = [names]
            if isinstance(names, (list, tuple, set, frozenset)):
                fields["selected_names"] = frozenset(n for n in names if n in known)
        elif fields["mode"] != current.mode:
            # switching the radio button resets the selection list
            if fields["mode"] == "none":
                fields["selected_names"] = frozenset()
            elif fields["mode"] == "all":
                fields["selected_names"] = frozenset(known)

        show = change.get("show_labels")
        if isinstance(show, bool):
            fields["show_labels"] = show
        return TypeVisibility(**fields)

    # ---- recompute ----

    def _recompute(self) -> LiveModel:
        with self._lock:
            if self.model is None:
                self.live = LiveModel()
            else:
                self.live = compute_live(self.model.nodes, self.model.links, self.config, graph=self._graph)
            _LOG.debug("live model: nodes=%d links=%d", len(self.live.nodes), len(self.live.links))
            if self._on_visibility_changed is not None:
                self._on_visibility_changed(self.live.nodes, self.live.links)
            return self.live

    # ---- renderer helpers ----

    def get_color(self, node_type: str) -> str:
        return self.colors.get(node_type, FALLBACK_COLOR)

    def get_label_lines(self, name: str) -> List[str]:
        return wrap_label(name)

    def names_of_type(self, node_type: str) -> List[str]:
        return list(self._names.get(node_type, []))

    def hidden_label_types(self) -> List[str]:
        return hidden_label_types(self._names.keys(), self.config)

    def payload(self) -> Dict[str, Any]:
        with self._lock:
            return build_payload(self.model, self.live, self.colors, self.config)

