"""
High-level load planner for truckpack.

This module glues together:

- Truck validation from `truckpack.cargo`.
- The greedy packer from `truckpack.packers`.
- Manual position overrides from `truckpack.overrides`.
- Volume statistics and layout checks from `truckpack.evaluation`.

It exposes `plan_load`, which is what a UI or script calls whenever the
truck or the cargo list changes, and a small CLI:

      python -m truckpack.planner --standard 10
      python -m truckpack.planner --manifest data/raw/manifest.csv --truck 7.2 2.4 2.5

Every call recomputes from scratch; nothing is cached between plans.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

import logging

import pandas as pd

from .cargo import CargoItem, PackedItem, make_standard_pallets, validate_truck
from .config import MAX_INTERACTIVE_ITEMS, set_global_seeds
from .evaluation import (
    LoadStats,
    compute_load_stats,
    find_layout_violations,
    layout_to_df,
    unpacked_guidance,
)
from .geometry import DEFAULT_TRUCK, Dimensions, Position, TruckConfig
from .overrides import apply_overrides
from .packers import PackResult, pack_cargo

logger = logging.getLogger(__name__)


class LayoutError(ValueError):
    """Raised in strict mode when a packed layout breaks a placement guarantee."""


# ---------------------------------------------------------------------------
# Plan container
# ---------------------------------------------------------------------------

@dataclass
class LoadPlan:
    """
    Everything a viewer needs for one truck + cargo combination.

    - `raw_packed`: packer positions (used for stats).
    - `packed`: positions after manual overrides (used for drawing).
    - `unpacked`: cargo with no remaining space, in processing order.
    """

    truck: TruckConfig
    result: PackResult
    stats: LoadStats
    overrides: Mapping[str, Position] = field(default_factory=dict)
    packed: List[PackedItem] = field(default_factory=list)

    @property
    def raw_packed(self) -> List[PackedItem]:
        return self.result.packed

    @property
    def unpacked(self) -> List[CargoItem]:
        return self.result.unpacked

    @property
    def guidance(self) -> str:
        return unpacked_guidance(len(self.result.unpacked))

    def layout(self) -> pd.DataFrame:
        return layout_to_df(self.packed)


def plan_load(
    truck: TruckConfig,
    items: Sequence[CargoItem],
    overrides: Optional[Mapping[str, Position]] = None,
    strict: bool = False,
) -> LoadPlan:
    """
    Pack `items` into `truck` and derive display positions and statistics.

    Parameters
    ----------
    truck:
        Cargo bay envelope; must have positive dimensions.
    items:
        Cargo to load. Sizes should already have been validated at ingestion.
    overrides:
        Optional `{item_id: Position}` map of manual moves. Only affects
        `LoadPlan.packed`, never the stats.
    strict:
        If True, re-check the raw packer output and raise `LayoutError` on any
        boundary or overlap violation.

    Returns
    -------
    LoadPlan
    """
    validate_truck(truck)
    if len(items) > MAX_INTERACTIVE_ITEMS:
        logger.warning(
            "Packing %d items; above %d the planner may not be interactive",
            len(items), MAX_INTERACTIVE_ITEMS,
        )

    result = pack_cargo(truck, items)

    if strict:
        problems = find_layout_violations(truck, result.packed)
        if problems:
            raise LayoutError("; ".join(problems))

    overrides = dict(overrides or {})
    return LoadPlan(
        truck=truck,
        result=result,
        stats=compute_load_stats(truck, result),
        overrides=overrides,
        packed=apply_overrides(result.packed, overrides),
    )


def format_summary(plan: LoadPlan) -> List[str]:
    """Human-readable summary lines for a plan."""
    s = plan.stats
    lines = [
        f"Utilization: {s.utilization_label}%",
        f"Packed items: {s.packed_count}",
        f"Unpacked items: {s.unpacked_count}",
        f"Available volume: {s.available_volume:.1f} m3 of {s.total_volume:.1f} m3",
    ]
    if plan.guidance:
        lines.append(plan.guidance)
    return lines


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Plan how cargo boxes fit into a truck cargo bay.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--truck",
        type=float,
        nargs=3,
        metavar=("LENGTH", "WIDTH", "HEIGHT"),
        default=None,
        help="Cargo bay size in meters (default: 7.2 2.4 2.5).",
    )
    parser.add_argument(
        "--manifest",
        type=str,
        default=None,
        help="Cargo manifest CSV (length/width/height in m, or *_mm columns).",
    )
    parser.add_argument(
        "--standard",
        type=int,
        default=0,
        help="Add this many standard 1.2 m pallets.",
    )
    source.add_argument(
        "--load",
        type=str,
        default=None,
        help="Restore a saved load configuration (JSON) instead of --truck/--manifest.",
    )
    parser.add_argument(
        "--save",
        type=str,
        default=None,
        help="Save the truck and cargo under this name.",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List saved load configurations under data/loads/ and exit.",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the packed layout CSV here (default: timestamped under data/layouts/).",
    )
    parser.add_argument(
        "--no-export",
        action="store_true",
        help="Do not write a layout CSV.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for pallet colour assignment (optional).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every placement.",
    )
    args = parser.parse_args(argv)
    if args.load is not None and args.manifest is not None:
        parser.error("argument --manifest: not allowed with argument --load")
    return args


def main(argv: Optional[List[str]] = None) -> None:
    from .utils.io import (
        list_saved_loads,
        load_cargo_csv,
        load_load_config,
        save_layout_csv,
        save_load_config,
    )

    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    set_global_seeds(args.seed)

    if args.list:
        saved_paths = list_saved_loads()
        if not saved_paths:
            print("[truckpack] No saved load configurations.")
        for path in saved_paths:
            print(f"[truckpack] {path}")
        return

    if args.load is not None:
        saved = load_load_config(args.load)
        truck, items = saved.truck, list(saved.items)
        print(f"[truckpack] Restored '{saved.name}' ({len(items)} items)")
    else:
        truck = Dimensions(*args.truck) if args.truck is not None else DEFAULT_TRUCK
        validate_truck(truck)
        items = load_cargo_csv(args.manifest, truck=truck) if args.manifest else []

    if args.standard:
        items.extend(make_standard_pallets(args.standard))

    if not items:
        raise SystemExit("[truckpack] No cargo given; use --manifest, --standard or --load.")

    print(f"[truckpack] Truck: {truck.length} x {truck.width} x {truck.height} m")
    plan = plan_load(truck, items)
    for line in format_summary(plan):
        print(f"[truckpack] {line}")

    if args.save:
        path = save_load_config(args.save, truck, items)
        print(f"[truckpack] Saved load configuration to: {path}")

    if not args.no_export:
        out = Path(args.output) if args.output is not None else None
        path = save_layout_csv(plan.packed, out)
        print(f"[truckpack] Layout written to: {path}")


__all__ = [
    "LayoutError",
    "LoadPlan",
    "plan_load",
    "format_summary",
    "main",
]


if __name__ == "__main__":
    main()
