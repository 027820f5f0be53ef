"""
Global configuration for the truckpack load planner.

This module centralizes:

- Project-root and data paths
- Random seeds for reproducibility
- Numeric tolerances shared by the geometry checks and the packer
- Default truck / pallet sizes and the display colour palette

Dimensions here are plain (length, width, height) tuples in meters;
`truckpack.geometry` turns them into `Dimensions` values.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple
import random

import numpy as np


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

# This file lives in: <repo>/src/truckpack/config.py
PROJECT_ROOT: Path = Path(__file__).resolve().parents[2]

DATA_DIR: Path = PROJECT_ROOT / "data"
DATA_RAW_DIR: Path = DATA_DIR / "raw"          # cargo manifests (CSV)
DATA_LOADS_DIR: Path = DATA_DIR / "loads"      # saved load configurations (JSON)
DATA_LAYOUTS_DIR: Path = DATA_DIR / "layouts"  # packed layout exports (CSV)


# ---------------------------------------------------------------------------
# Randomness / reproducibility
# ---------------------------------------------------------------------------

# Only colour assignment at ingestion is random. Packing is deterministic.
DEFAULT_SEED: int = 1234


def set_global_seeds(seed: Optional[int] = None) -> int:
    """
    Set Python's and NumPy's global random seeds and return the seed used.

        from truckpack.config import set_global_seeds
        set_global_seeds(2025)
    """
    if seed is None:
        seed = DEFAULT_SEED

    random.seed(seed)
    np.random.seed(seed)
    return seed


# ---------------------------------------------------------------------------
# Tolerances
# ---------------------------------------------------------------------------

# Slack allowed when checking a box against the truck walls. Absorbs drift
# from repeated additions (1.2 + 1.2 + 1.2 ...); far below anything visible.
FIT_EPSILON: float = 0.001

# Shrink applied to each box before the overlap test, so two boxes that share
# a face (up to float drift) never count as overlapping.
OVERLAP_EPSILON: float = 0.001


# ---------------------------------------------------------------------------
# Default sizes (meters, as length, width, height)
# ---------------------------------------------------------------------------

DEFAULT_TRUCK_DIMS: Tuple[float, float, float] = (7.2, 2.4, 2.5)

# Standard pallet footprint is 1.2 x 1.2; height assumed 1.2 when unknown.
STANDARD_PALLET_DIMS: Tuple[float, float, float] = (1.2, 1.2, 1.2)

CARGO_COLORS: Tuple[str, ...] = (
    "#ef4444",
    "#f97316",
    "#f59e0b",
    "#84cc16",
    "#10b981",
    "#06b6d4",
    "#3b82f6",
    "#8b5cf6",
    "#d946ef",
    "#f43f5e",
)

# The packer is O(n^2). Above this many items the planner warns but still
# packs everything it is given.
MAX_INTERACTIVE_ITEMS: int = 300


__all__ = [
    # Paths
    "PROJECT_ROOT",
    "DATA_DIR",
    "DATA_RAW_DIR",
    "DATA_LOADS_DIR",
    "DATA_LAYOUTS_DIR",
    # Seeds / randomness
    "DEFAULT_SEED",
    "set_global_seeds",
    # Tolerances
    "FIT_EPSILON",
    "OVERLAP_EPSILON",
    # Sizes / display
    "DEFAULT_TRUCK_DIMS",
    "STANDARD_PALLET_DIMS",
    "CARGO_COLORS",
    "MAX_INTERACTIVE_ITEMS",
]
