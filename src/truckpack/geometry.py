"""
Geometry primitives for the truckpack load planner.

This module defines:

- `Dimensions`: a box size (length, width, height) in meters. A truck
  envelope (`TruckConfig`) is just a `Dimensions` value.
- `Position`: the minimum corner (x, y, z) of a placed box. Candidate
  placement corners ("anchors") use the same type.
- The two epsilon-tolerant tests the packer is built on: axis-aligned box
  intersection and containment inside the truck.

Coordinate convention
---------------------

The origin (0, 0, 0) is the back-bottom-left corner of the cargo bay.

- X runs across the truck and is measured by `width`.
- Y is vertical and is measured by `height`.
- Z runs from the back wall towards the doors and is measured by `length`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .config import FIT_EPSILON, OVERLAP_EPSILON, DEFAULT_TRUCK_DIMS, STANDARD_PALLET_DIMS


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Dimensions:
    """
    Size of a box in meters.

    `length` is the Z extent, `width` the X extent and `height` the Y extent.
    """

    length: float
    width: float
    height: float

    def as_extent(self) -> Tuple[float, float, float]:
        """Return the (x, y, z) extent, i.e. (width, height, length)."""
        return (self.width, self.height, self.length)

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.length, self.width, self.height)


@dataclass(frozen=True, order=True)
class Position:
    """
    Minimum corner of a box. Ordering is field order (x, y, z); the packer
    uses its own (y, z, x) key, see `anchor_sort_key`.
    """

    x: float
    y: float
    z: float

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


# A truck envelope is described with the same three numbers as a box.
TruckConfig = Dimensions

# Candidate placement corners are plain positions.
AnchorPoint = Position

ORIGIN = Position(0.0, 0.0, 0.0)

DEFAULT_TRUCK: TruckConfig = Dimensions(*DEFAULT_TRUCK_DIMS)
STANDARD_PALLET: Dimensions = Dimensions(*STANDARD_PALLET_DIMS)


def volume(dims: Dimensions) -> float:
    """Box volume in cubic meters."""
    return dims.length * dims.width * dims.height


# ---------------------------------------------------------------------------
# Intersection / containment
# ---------------------------------------------------------------------------

def intersects(
    pos_a: Position,
    dims_a: Dimensions,
    pos_b: Position,
    dims_b: Dimensions,
    eps: float = OVERLAP_EPSILON,
) -> bool:
    """
    Return True iff the two boxes overlap with positive volume.

    All three axes must overlap at once. The comparisons are strict and each
    interval is shrunk by `eps`, so boxes that share a face (or nearly do,
    after float drift) are not considered overlapping.
    """
    return (
        pos_a.x < pos_b.x + dims_b.width - eps
        and pos_a.x + dims_a.width > pos_b.x + eps
        and pos_a.y < pos_b.y + dims_b.height - eps
        and pos_a.y + dims_a.height > pos_b.y + eps
        and pos_a.z < pos_b.z + dims_b.length - eps
        and pos_a.z + dims_a.length > pos_b.z + eps
    )


def fits_in_bounds(
    pos: Position,
    dims: Dimensions,
    truck: TruckConfig,
    eps: float = FIT_EPSILON,
) -> bool:
    """
    Return True iff a box of size `dims` with minimum corner `pos` stays
    inside the truck on all three axes, allowing `eps` of slack.
    """
    return (
        pos.x + dims.width <= truck.width + eps
        and pos.y + dims.height <= truck.height + eps
        and pos.z + dims.length <= truck.length + eps
    )


def inside_envelope(point: Position, truck: TruckConfig) -> bool:
    """
    True if `point` lies on or past the origin walls and strictly before the
    far walls of the truck.

    A point on a far wall cannot be the minimum corner of any box with
    positive volume, so it is never a useful anchor.
    """
    return (
        0.0 <= point.x < truck.width
        and 0.0 <= point.y < truck.height
        and 0.0 <= point.z < truck.length
    )


__all__ = [
    "Dimensions",
    "Position",
    "TruckConfig",
    "AnchorPoint",
    "ORIGIN",
    "DEFAULT_TRUCK",
    "STANDARD_PALLET",
    "volume",
    "intersects",
    "fits_in_bounds",
    "inside_envelope",
]
