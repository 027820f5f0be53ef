"""
Manual position overrides.

Users can drag a packed box to a different spot in the viewer. Those moves
are kept in a plain mapping `{item_id: Position}` that lives next to, and
independently of, the packer output:

- Overrides only change where a box is *drawn*. They are never fed back
  into packing and never change the volume bookkeeping.
- Re-packing does not clear them. Whether a changed truck or cargo list
  should discard them is the caller's decision.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence

from .cargo import PackedItem
from .geometry import Position

OverrideMap = Dict[str, Position]


def apply_overrides(
    packed: Sequence[PackedItem],
    overrides: Optional[Mapping[str, Position]],
) -> List[PackedItem]:
    """
    Return `packed` with overridden positions swapped in.

    Only the position changes; size, colour, name and type come from the
    packed item. Override keys that match no packed item are ignored.
    """
    if not overrides:
        return list(packed)

    return [
        p.with_position(overrides[p.id]) if p.id in overrides else p
        for p in packed
    ]


def set_override(
    overrides: Optional[Mapping[str, Position]],
    item_id: str,
    position: Position,
) -> OverrideMap:
    """Return a new override map with `item_id` moved to `position`."""
    updated: OverrideMap = dict(overrides or {})
    updated[item_id] = position
    return updated


def clear_overrides() -> OverrideMap:
    """Discard every override; the next `apply_overrides` shows raw positions."""
    return {}


__all__ = [
    "OverrideMap",
    "apply_overrides",
    "set_override",
    "clear_overrides",
]
