"""graphvis.settings_codec

Flat persistence of the visibility configuration.

Every toolbar control maps to one key, ``quote(type + control_label)``, and
every value is a list of strings (the shape a submitted form produces):

  <type>-mode            ["adjacent" | "all" | "none" | "selected"]
  <type> selected nodes  sorted node names
  <type> display labels  ["on"] when labels are shown, [] when hidden

Absent keys mean "no saved preference". Corrupt stored data never raises to
the caller: it decodes to an empty configuration.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol
from urllib.parse import quote, unquote

from .errors import SettingsDecodeFailure
from .schemas import DEFAULT_MODE, MODES, TypeVisibility, VisibilityConfig

_LOG = logging.getLogger(__name__)

MODE_LABEL = "-mode"
SELECTION_LABEL = " selected nodes"
LABELS_LABEL = " display labels"
CONTROL_LABELS = (MODE_LABEL, SELECTION_LABEL, LABELS_LABEL)

CHECKED = "on"

SETTINGS_KEY = "settings"
DATA_KEY = "data"

# characters encodeURIComponent leaves alone
_SAFE = "-_.!~*'()"

Flat = Dict[str, List[str]]


def setting_key(node_type: str, control_label: str) -> str:
    return quote(node_type + control_label, safe=_SAFE)


def _split_key(key: str):
    """Inverse of setting_key: (type, control_label), or None for foreign keys."""
    plain = unquote(key)
    for label in CONTROL_LABELS:
        if plain.endswith(label):
            return plain[: -len(label)], label
    return None

# ---- Codec -------------------------------------------------------------------

def encode(config: VisibilityConfig) -> Flat:
    flat: Flat = {}
    for node_type, vis in config.types.items():
        flat[setting_key(node_type, MODE_LABEL)] = [vis.mode]
        flat[setting_key(node_type, SELECTION_LABEL)] = sorted(vis.selected_names)
        flat[setting_key(node_type, LABELS_LABEL)] = [CHECKED] if vis.show_labels else []
    return flat


def _validate(flat: Any) -> Mapping[str, List[str]]:
    if not isinstance(flat, Mapping):
        raise SettingsDecodeFailure(f"settings must be a mapping, got {type(flat).__name__}")
    for key, values in flat.items():
        if not isinstance(key, str):
            raise SettingsDecodeFailure(f"settings key {key!r} is not a string")
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise SettingsDecodeFailure(f"settings value for {key!r} is not a list of strings")
    return flat


def decode(flat: Any, types: Optional[Iterable[str]] = None) -> VisibilityConfig:
    """
    Rebuild a (partial) configuration from a flat mapping.

    Only types that have at least one recognised key appear in the result;
    when ``types`` is given, other types are dropped as well.
    """
    try:
        flat = _validate(flat)
    except SettingsDecodeFailure as e:
        _LOG.warning("ignoring saved settings: %s", e)
        return VisibilityConfig()

    wanted = set(types) if types is not None else None
    fields: Dict[str, Dict[str, Any]] = {}
    for key, values in flat.items():
        parsed = _split_key(key)
        if parsed is None:
            continue
        node_type, label = parsed
        if wanted is not None and node_type not in wanted:
            continue
        entry = fields.setdefault(node_type, {})
        if label == MODE_LABEL:
            mode = values[0] if values else DEFAULT_MODE
            if mode in MODES:
                entry["mode"] = mode
            else:
                _LOG.debug("unknown saved mode %r for type %r", mode, node_type)
        elif label == SELECTION_LABEL:
            entry["selected_names"] = frozenset(values)
        else:
            entry["show_labels"] = CHECKED in values
    return VisibilityConfig(types={t: TypeVisibility(**f) for t, f in fields.items()})

# ---- Stores ------------------------------------------------------------------

class SettingsStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._d: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._d.get(key)

    def set(self, key: str, value: str) -> None:
        self._d[key] = value


class JsonFileStore:
    """
    Key-value store persisted as one JSON object on disk. Last write wins.
    An unreadable file is treated as empty.
    """

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read_all(self) -> Dict[str, str]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            _LOG.warning("settings file %s unreadable: %s", self.path, e)
            return {}
        if not isinstance(raw, dict):
            _LOG.warning("settings file %s does not hold an object", self.path)
            return {}
        return {str(k): v for k, v in raw.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(tmp, self.path)


def load_settings(store: SettingsStore) -> Any:
    """The saved flat settings, or {} when there are none or they are not valid JSON."""
    raw = store.get(SETTINGS_KEY)
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except ValueError as e:
        _LOG.warning("ignoring saved settings: %s", SettingsDecodeFailure(str(e)))
        return {}


def save_settings(store: SettingsStore, flat: Mapping[str, List[str]]) -> None:
    store.set(SETTINGS_KEY, json.dumps(dict(flat), ensure_ascii=False, sort_keys=True))
