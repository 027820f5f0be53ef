"""
Placement engine for the truckpack load planner.

- Candidate-corner bookkeeping (`anchors.py`)
- The greedy volume-first packer (`greedy.py`)

High-level code (e.g. `truckpack.planner`) should import `pack_cargo` from
here rather than reaching into the submodules.
"""

from .anchors import AnchorPool, anchor_sort_key
from .greedy import PackResult, pack_cargo, sort_by_volume

__all__ = [
    "AnchorPool",
    "anchor_sort_key",
    "PackResult",
    "pack_cargo",
    "sort_by_volume",
]
