"""
Cargo items and the ingestion boundary.

`CargoItem` is what callers hand to the packer; `PackedItem` is what comes
back for every item that found a place. Both are immutable.

The helpers at the bottom (`make_standard_pallets`, `make_custom_item`,
`validate_dimensions`) are the only sanctioned way to admit new cargo: the
packer itself never rejects an item, so malformed sizes must be caught
here, before packing.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Literal, Optional

import math
import random
import uuid

from .config import CARGO_COLORS
from .geometry import Dimensions, Position, TruckConfig, STANDARD_PALLET, volume


CargoType = Literal["standard", "custom"]
CARGO_TYPES = ("standard", "custom")


class CargoValidationError(ValueError):
    """Raised when cargo (or a truck) has dimensions that cannot be packed."""


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CargoItem:
    """
    A single box to load.

    `delivery_stop` is carried through for display and persistence only;
    placement does not look at it.
    """

    id: str
    type: CargoType
    dimensions: Dimensions
    color: str
    name: Optional[str] = None
    delivery_stop: Optional[int] = None

    @property
    def volume(self) -> float:
        return volume(self.dimensions)

    @property
    def label(self) -> str:
        if self.name:
            return self.name
        return "Standard Pallet" if self.type == "standard" else "Custom Skid"


@dataclass(frozen=True)
class PackedItem:
    """A cargo item together with the minimum corner it was placed at."""

    item: CargoItem
    position: Position

    @property
    def id(self) -> str:
        return self.item.id

    @property
    def dimensions(self) -> Dimensions:
        return self.item.dimensions

    @property
    def color(self) -> str:
        return self.item.color

    @property
    def name(self) -> Optional[str]:
        return self.item.name

    @property
    def type(self) -> CargoType:
        return self.item.type

    def with_position(self, position: Position) -> "PackedItem":
        """Return a copy placed at `position`; the cargo item is shared."""
        return replace(self, position=position)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

_AXES = ("length", "width", "height")


def validate_truck(truck: TruckConfig) -> None:
    """Raise `CargoValidationError` unless every truck dimension is finite and > 0."""
    for axis in _AXES:
        value = getattr(truck, axis)
        if not math.isfinite(value) or value <= 0:
            raise CargoValidationError(
                f"Truck {axis} must be a positive number, got {value!r}"
            )


def validate_dimensions(dims: Dimensions, truck: Optional[TruckConfig] = None) -> None:
    """
    Check a cargo size before it is admitted.

    Every dimension must be finite and strictly positive. If `truck` is
    given, no dimension may exceed the matching truck dimension (items are
    never rotated, so each axis is compared on its own).

    Raises
    ------
    CargoValidationError
        With a message naming the offending axis.
    """
    for axis in _AXES:
        value = getattr(dims, axis)
        if not math.isfinite(value) or value <= 0:
            raise CargoValidationError(
                f"{axis.capitalize()} must be a positive number, got {value!r}"
            )

    if truck is None:
        return

    for axis in ("width", "height", "length"):
        value = getattr(dims, axis)
        limit = getattr(truck, axis)
        if value > limit:
            raise CargoValidationError(
                f"{axis.capitalize()} ({value}m) exceeds truck {axis} ({limit}m)"
            )


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def _new_id() -> str:
    return str(uuid.uuid4())


def _pick_color() -> str:
    return random.choice(CARGO_COLORS)


def make_standard_pallets(count: int) -> List[CargoItem]:
    """
    Build `count` standard 1.2 m pallets, each with a fresh id and a colour
    from the palette.
    """
    if count < 1:
        raise ValueError(f"count must be >= 1, got {count}")

    return [
        CargoItem(
            id=_new_id(),
            type="standard",
            dimensions=STANDARD_PALLET,
            color=_pick_color(),
        )
        for _ in range(count)
    ]


def make_custom_item(
    dims: Dimensions,
    truck: Optional[TruckConfig] = None,
    name: Optional[str] = None,
    delivery_stop: Optional[int] = None,
    color: Optional[str] = None,
) -> CargoItem:
    """
    Validate `dims` against `truck` and build a custom skid.

    Raises `CargoValidationError` if the size is not admissible.
    """
    validate_dimensions(dims, truck)
    return CargoItem(
        id=_new_id(),
        type="custom",
        dimensions=dims,
        color=color or _pick_color(),
        name=name,
        delivery_stop=delivery_stop,
    )


__all__ = [
    "CargoType",
    "CARGO_TYPES",
    "CargoValidationError",
    "CargoItem",
    "PackedItem",
    "validate_truck",
    "validate_dimensions",
    "make_standard_pallets",
    "make_custom_item",
]
