"""graphvis.cli

Load a CSV, apply visibility modes and write the live graph as JSON and/or
pyvis HTML.

Usage examples:
  graphvis companies.csv --mode Company=all --mode Person=adjacent --out-json live.json
  graphvis https://example.org/graph.csv --mode Company=selected --select Company=Acme --out-html graph.html
  graphvis --hide-labels Person            # reuse the data saved by the previous run
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from .config import AppConfig, load_config
from .errors import GraphVisError
from .export import export_pyvis, write_payload
from .service_adapter import GraphSession
from .settings_codec import JsonFileStore
from .sources import read_raw_input

_LOG = logging.getLogger("graphvis")


def _setup_logger(*, log_level: str) -> logging.Logger:
    level = getattr(logging, log_level.upper(), logging.INFO)
    logger = logging.getLogger("graphvis")
    logger.setLevel(level)
    logger.propagate = False

    # Avoid duplicate handlers if re-entered.
    for h in list(logger.handlers):
        logger.removeHandler(h)

    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
    ch.setLevel(level)
    logger.addHandler(ch)

    logging.getLogger("urllib3").setLevel(max(level, logging.WARNING))
    return logger


def _pairs(values: List[str], flag: str) -> List[tuple]:
    out = []
    for v in values:
        if "=" not in v:
            raise SystemExit(f"{flag} expects TYPE=VALUE, got {v!r}")
        k, _, val = v.partition("=")
        out.append((k.strip(), val.strip()))
    return out


def _changes(args: argparse.Namespace) -> Dict[str, Dict]:
    changes: Dict[str, Dict] = {}
    for t, mode in _pairs(args.mode, "--mode"):
        changes.setdefault(t, {})["mode"] = mode
    for t, name in _pairs(args.select, "--select"):
        changes.setdefault(t, {}).setdefault("selected_names", []).append(name)
    for t in args.hide_labels:
        changes.setdefault(t, {})["show_labels"] = False
    for t in args.show_labels:
        changes.setdefault(t, {})["show_labels"] = True
    return changes


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Filter a CSV-defined node-link graph by node type.")
    ap.add_argument("source", nargs="?", default=None,
                    help="CSV path or URL. Default: $GRAPHVIS_DATA, else the data saved by the last run.")
    ap.add_argument("--mode", action="append", default=[], metavar="TYPE=MODE",
                    help="Visibility mode per type: adjacent | all | none | selected.")
    ap.add_argument("--select", action="append", default=[], metavar="TYPE=NAME",
                    help="Select a node by name (used by mode 'selected'). Repeatable.")
    ap.add_argument("--hide-labels", action="append", default=[], metavar="TYPE")
    ap.add_argument("--show-labels", action="append", default=[], metavar="TYPE")
    ap.add_argument("--settings", default=None, help="Settings JSON file (overrides $GRAPHVIS_SETTINGS_PATH).")
    ap.add_argument("--out-json", default=None, help="Write the live payload JSON here.")
    ap.add_argument("--out-html", default=None, help="Write pyvis HTML here (requires pyvis).")
    ap.add_argument("--log-level", default=None)
    return ap


def run(args: argparse.Namespace, cfg: AppConfig) -> int:
    store = JsonFileStore(args.settings or cfg.settings_path)
    session = GraphSession(
        store=store,
        reader=lambda src: read_raw_input(src, timeout=cfg.http_timeout_s),
    )

    source = args.source or cfg.data_source
    if source:
        session.load_source(source)
    elif session.restore() is None:
        print("[error] No CSV source given and no saved data to restore.", file=sys.stderr)
        return 2

    changes = _changes(args)
    session.apply_visibility_config(changes)

    if args.out_json:
        write_payload(args.out_json, session.model, session.live, session.colors, session.config)
        _LOG.info("wrote payload to %s", args.out_json)
    if args.out_html:
        try:
            export_pyvis(session.live, session.colors, session.config, args.out_html)
            _LOG.info("wrote HTML to %s", args.out_html)
        except RuntimeError as e:
            print(f"[warn] {e}; skipping HTML export.", file=sys.stderr)

    summary = {
        "primary_column": session.model.primary_column,
        "nodes": len(session.model.nodes),
        "links": len(session.model.links),
        "live_nodes": len(session.live.nodes),
        "live_links": len(session.live.links),
        "colors": session.colors,
    }
    print(json.dumps(summary, indent=2, ensure_ascii=False))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = load_config()
    _setup_logger(log_level=args.log_level or cfg.log_level)
    try:
        return run(args, cfg)
    except GraphVisError as e:
        print(f"[error] {e.message}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
