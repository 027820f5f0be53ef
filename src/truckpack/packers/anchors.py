"""
Candidate-point pool for the greedy corner-point packer.

An `AnchorPool` holds the corners at which the next box may start. It is
created fresh for every packing run, seeded with the origin, and threaded
through the placement loop by the caller; nothing here is module-level
state.

After a box is placed at corner p with size d, up to three successors are
proposed:

- right: (p.x + d.width,  p.y,             p.z)
- top:   (p.x,            p.y + d.height,  p.z)
- front: (p.x,            p.y,             p.z + d.length)

A successor is kept only if it lies inside the truck envelope and no anchor
with exactly the same coordinates is already in the pool. Near-duplicates
(within float noise) are *not* merged.
"""

from __future__ import annotations

from typing import Iterator, List, Tuple

from ..geometry import AnchorPoint, Dimensions, Position, TruckConfig, ORIGIN, inside_envelope


def anchor_sort_key(point: AnchorPoint) -> Tuple[float, float, float]:
    """Bottom first, then back, then left."""
    return (point.y, point.z, point.x)


class AnchorPool:
    """
    Unordered set of candidate corners, owned by a single packing run.

    Insertion order is kept so that iteration is reproducible, but callers
    that care about priority should use `ordered()`.
    """

    def __init__(self) -> None:
        self._points: List[AnchorPoint] = [ORIGIN]

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[AnchorPoint]:
        return iter(list(self._points))

    def __contains__(self, point: object) -> bool:
        return point in self._points

    def ordered(self) -> List[AnchorPoint]:
        """Anchors sorted by ascending y, then z, then x."""
        return sorted(self._points, key=anchor_sort_key)

    def consume(self, point: AnchorPoint) -> None:
        """Remove `point` after a box has been placed there."""
        self._points.remove(point)

    def propose(self, point: AnchorPoint, dims: Dimensions, truck: TruckConfig) -> List[AnchorPoint]:
        """
        Add the right / top / front successors of a box placed at `point`.

        Returns the anchors that were actually inserted.
        """
        candidates = (
            Position(point.x + dims.width, point.y, point.z),
            Position(point.x, point.y + dims.height, point.z),
            Position(point.x, point.y, point.z + dims.length),
        )

        added: List[AnchorPoint] = []
        for candidate in candidates:
            if not inside_envelope(candidate, truck):
                continue
            # Exact equality on purpose.
            if candidate in self._points:
                continue
            self._points.append(candidate)
            added.append(candidate)
        return added


__all__ = [
    "anchor_sort_key",
    "AnchorPool",
]
