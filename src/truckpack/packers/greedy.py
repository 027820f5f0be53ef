"""
Greedy corner-point packer.

This is the placement engine behind every load plan:

1. Items are sorted by descending box volume (stable, so equal volumes keep
   their input order). Bigger boxes go first to reduce fragmentation.
2. For each item, the anchor pool is sorted bottom / back / left and the
   first anchor where the box fits inside the truck without overlapping an
   already placed box is taken.
3. The used anchor is consumed and its right / top / front successors are
   proposed. If no anchor works the item is reported as unpacked.

Items are never rotated. The run is a pure function of (truck, items):
each call builds its own pool and output lists, so concurrent calls on
independent inputs are safe.

Both output lists follow the volume-sorted processing order, *not* the
caller's input order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import logging

from ..cargo import CargoItem, PackedItem
from ..geometry import AnchorPoint, TruckConfig, fits_in_bounds, intersects, volume
from .anchors import AnchorPool

logger = logging.getLogger(__name__)


@dataclass
class PackResult:
    """Output of one packing run."""

    packed: List[PackedItem] = field(default_factory=list)
    unpacked: List[CargoItem] = field(default_factory=list)

    def packed_ids(self) -> List[str]:
        return [p.id for p in self.packed]

    def unpacked_ids(self) -> List[str]:
        return [it.id for it in self.unpacked]

    @property
    def all_packed(self) -> bool:
        return not self.unpacked


def sort_by_volume(items: Sequence[CargoItem]) -> List[CargoItem]:
    """Largest volume first; `sorted` is stable so ties keep input order."""
    return sorted(items, key=lambda it: volume(it.dimensions), reverse=True)


def _find_anchor(
    item: CargoItem,
    pool: AnchorPool,
    packed: Sequence[PackedItem],
    truck: TruckConfig,
) -> Optional[AnchorPoint]:
    dims = item.dimensions
    for anchor in pool.ordered():
        if not fits_in_bounds(anchor, dims, truck):
            continue
        if any(intersects(anchor, dims, p.position, p.dimensions) for p in packed):
            continue
        return anchor
    return None


def pack_cargo(truck: TruckConfig, items: Sequence[CargoItem]) -> PackResult:
    """
    Place `items` inside `truck`.

    Parameters
    ----------
    truck:
        Cargo bay envelope. Assumed positive; validate at the boundary.
    items:
        Cargo to load. Not modified.

    Returns
    -------
    PackResult
        `packed` and `unpacked`, both in volume-descending order. Every input
        item ends up in exactly one of the two lists.
    """
    pool = AnchorPool()
    result = PackResult()

    for item in sort_by_volume(items):
        anchor = _find_anchor(item, pool, result.packed, truck)
        if anchor is None:
            logger.debug("No space for %s (%s)", item.id, item.dimensions)
            result.unpacked.append(item)
            continue

        result.packed.append(PackedItem(item=item, position=anchor))
        pool.consume(anchor)
        added = pool.propose(anchor, item.dimensions, truck)
        logger.debug(
            "Placed %s at (%.3f, %.3f, %.3f); %d new anchors, pool size %d",
            item.id, anchor.x, anchor.y, anchor.z, len(added), len(pool),
        )

    logger.info(
        "Packed %d of %d items (%d unpacked)",
        len(result.packed), len(items), len(result.unpacked),
    )
    return result


__all__ = [
    "PackResult",
    "sort_by_volume",
    "pack_cargo",
]
