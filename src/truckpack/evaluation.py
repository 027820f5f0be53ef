"""
Evaluation utilities for truckpack load plans.

This module turns a packing result into the numbers and tables shown next
to the 3D / 2D views:

- `compute_load_stats`: total, packed and available volume plus the
  utilization percentage (one decimal).
- `layout_to_df`: a pandas table with one row per packed box.
- `find_layout_violations`: an independent, vectorised re-check of the
  packer's guarantees (every box inside the truck, no two boxes overlapping).

Stats are always computed from the packer's *raw* output. Manual overrides
move boxes on screen but do not change the bookkeeping.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from .cargo import PackedItem
from .config import FIT_EPSILON, OVERLAP_EPSILON
from .geometry import TruckConfig, volume
from .packers.greedy import PackResult


LAYOUT_COLUMNS = [
    "id",
    "name",
    "type",
    "x",
    "y",
    "z",
    "length",
    "width",
    "height",
    "color",
    "delivery_stop",
]


# ---------------------------------------------------------------------------
# Volume statistics
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LoadStats:
    """
    Volume bookkeeping for one packing run (cubic meters / percent).
    """

    total_volume: float
    packed_volume: float
    available_volume: float
    utilization_percent: float
    packed_count: int
    unpacked_count: int

    @property
    def utilization_label(self) -> str:
        """Utilization formatted with one decimal, e.g. '12.5'."""
        return f"{self.utilization_percent:.1f}"

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def compute_load_stats(truck: TruckConfig, result: PackResult) -> LoadStats:
    """
    Compute volume statistics from the packer's raw output.

    utilization = round(packed / total * 100, 1). A truck with zero volume
    reports 0.0 rather than dividing by zero.
    """
    total = volume(truck)
    packed = float(sum(volume(p.dimensions) for p in result.packed))
    utilization = round(packed / total * 100.0, 1) if total > 0 else 0.0

    return LoadStats(
        total_volume=total,
        packed_volume=packed,
        available_volume=total - packed,
        utilization_percent=utilization,
        packed_count=len(result.packed),
        unpacked_count=len(result.unpacked),
    )


def unpacked_guidance(count: int) -> str:
    """
    User-facing hint for items that did not fit. Empty when everything fits.

    Leftover cargo is a normal outcome of packing, not a failure.
    """
    if count <= 0:
        return ""
    noun = "item" if count == 1 else "items"
    return (
        f"{count} {noun} could not fit in the current truck configuration: "
        "no remaining space. Reduce the cargo or increase the container size."
    )


# ---------------------------------------------------------------------------
# Layout tables
# ---------------------------------------------------------------------------

def layout_to_df(packed: Sequence[PackedItem]) -> pd.DataFrame:
    """
    One row per packed box, in the given order, with columns
    `LAYOUT_COLUMNS`. Positions are the box's minimum corner.
    """
    records = [
        {
            "id": p.id,
            "name": p.item.label,
            "type": p.type,
            "x": float(p.position.x),
            "y": float(p.position.y),
            "z": float(p.position.z),
            "length": float(p.dimensions.length),
            "width": float(p.dimensions.width),
            "height": float(p.dimensions.height),
            "color": p.color,
            "delivery_stop": p.item.delivery_stop,
        }
        for p in packed
    ]
    return pd.DataFrame(records, columns=LAYOUT_COLUMNS)


# ---------------------------------------------------------------------------
# Layout validation
# ---------------------------------------------------------------------------

def _corners(packed: Sequence[PackedItem]) -> tuple:
    """Return (lo, hi) arrays of shape (n, 3) in x, y, z order."""
    lo = np.array([p.position.as_tuple() for p in packed], dtype=float).reshape(-1, 3)
    ext = np.array([p.dimensions.as_extent() for p in packed], dtype=float).reshape(-1, 3)
    return lo, lo + ext


def find_layout_violations(
    truck: TruckConfig,
    packed: Sequence[PackedItem],
    fit_eps: float = FIT_EPSILON,
    overlap_eps: float = OVERLAP_EPSILON,
) -> List[str]:
    """
    Check a layout against the truck walls and for pairwise overlaps.

    Uses the same tolerances as the packer, so a layout straight out of
    `pack_cargo` always comes back clean. Boxes sharing a face are fine.

    Returns
    -------
    list of str
        One message per problem; empty when the layout is valid.
    """
    if not packed:
        return []

    lo, hi = _corners(packed)
    limit = np.array(truck.as_extent(), dtype=float) + fit_eps
    problems: List[str] = []

    outside = np.any(hi > limit, axis=1) | np.any(lo < -fit_eps, axis=1)
    for i in np.flatnonzero(outside):
        problems.append(f"{packed[i].id} extends outside the truck")

    # (n, n, 3) interval overlap per axis, shrunk by overlap_eps
    overlap = (lo[:, None, :] < hi[None, :, :] - overlap_eps) & (
        hi[:, None, :] > lo[None, :, :] + overlap_eps
    )
    clash = np.triu(np.all(overlap, axis=2), k=1)
    for i, j in zip(*np.nonzero(clash)):
        problems.append(f"{packed[i].id} overlaps {packed[j].id}")

    return problems


__all__ = [
    "LAYOUT_COLUMNS",
    "LoadStats",
    "compute_load_stats",
    "unpacked_guidance",
    "layout_to_df",
    "find_layout_violations",
]
