#!/usr/bin/env python
"""
CLI helper to plan a truck load from the project root.

This script is a thin wrapper around the library entry points:

- truckpack.utils.io.load_cargo_csv / load_load_config
- truckpack.planner.plan_load
- truckpack.utils.io.save_layout_csv

Typical usage from the project root
-----------------------------------

    python scripts/plan_load.py data/raw/manifest.csv
    python scripts/plan_load.py data/raw/manifest.csv --truck 13.6 2.45 2.7
    python scripts/plan_load.py --saved data/loads/monday_run.json --show-layout

The script automatically adds `src/` to PYTHONPATH so that it can import the
`truckpack` package without requiring installation.
"""

from __future__ import annotations

import argparse
from pathlib import Path
import sys
from typing import Optional, List


def _ensure_src_on_path() -> Path:
    """
    Ensure that <project_root>/src is on sys.path and return project_root.

    Assumes this file lives in <project_root>/scripts/plan_load.py.
    """
    project_root = Path(__file__).resolve().parents[1]
    src_dir = project_root / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))
    return project_root


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Pack a cargo manifest (or a saved load) into a truck and report utilization.",
    )
    parser.add_argument(
        "manifest",
        type=str,
        nargs="?",
        default=None,
        help="Path to the cargo manifest CSV.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--saved",
        type=str,
        default=None,
        help="Re-pack a saved load configuration (JSON) instead of a manifest.",
    )
    source.add_argument(
        "--truck",
        type=float,
        nargs=3,
        metavar=("LENGTH", "WIDTH", "HEIGHT"),
        default=None,
        help="Cargo bay size in meters (not allowed with --saved).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Re-check the packed layout for boundary / overlap violations.",
    )
    parser.add_argument(
        "--show-layout",
        action="store_true",
        help="Print the packed layout table in addition to the summary.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    project_root = _ensure_src_on_path()

    # Imports done after path configuration
    import pandas as pd

    from truckpack.geometry import DEFAULT_TRUCK, Dimensions
    from truckpack.planner import format_summary, plan_load
    from truckpack.utils.io import load_cargo_csv, load_load_config

    args = _parse_args(argv)

    if args.saved is not None:
        saved = load_load_config(args.saved)
        truck, items = saved.truck, saved.items
        print(f"[plan_load] Restored '{saved.name}' from: {args.saved}")
    elif args.manifest is not None:
        truck = Dimensions(*args.truck) if args.truck is not None else DEFAULT_TRUCK
        items = load_cargo_csv(args.manifest, truck=truck)
        print(f"[plan_load] Manifest: {args.manifest}")
    else:
        raise SystemExit("[plan_load] Give a manifest CSV or --saved <load.json>.")

    print(f"[plan_load] Project root: {project_root}")
    print(f"[plan_load] Items: {len(items)}")

    plan = plan_load(truck, items, strict=args.strict)
    for line in format_summary(plan):
        print(f"[plan_load] {line}")

    if args.show_layout:
        with pd.option_context("display.max_rows", None, "display.float_format", "{:.3f}".format):
            print("[plan_load] Packed layout:")
            print(plan.layout())


if __name__ == "__main__":
    main()
