"""
I/O utilities for the truckpack load planner.

This module centralizes file handling so that scripts do not hard-code
paths or formats:

- Cargo manifests are CSV files read with pandas.
- Packed layouts are exported as CSV (one row per box).
- Named load configurations are saved as JSON.

Saved configurations hold the truck and the cargo list *verbatim* and never
any positions. Restoring one means running the packer again, so a layout
may come out differently if cargo order or the packer changed in between.

Typical usage
-------------

    from truckpack.utils.io import load_cargo_csv, save_load_config, load_load_config

    items = load_cargo_csv("data/raw/manifest.csv", truck=truck)
    path = save_load_config("Monday run", truck, items)
    saved = load_load_config(path)
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import datetime as dt
import json
import re
import uuid

import pandas as pd

from ..cargo import (
    CARGO_TYPES,
    CargoItem,
    CargoValidationError,
    PackedItem,
    validate_dimensions,
    validate_truck,
)
from ..config import CARGO_COLORS, DATA_LAYOUTS_DIR, DATA_LOADS_DIR
from ..evaluation import layout_to_df
from ..geometry import Dimensions, TruckConfig


PathLike = Union[str, Path]


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

def _timestamp() -> str:
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%d_%H%M%S")


def _slugify(name: str) -> str:
    slug = re.sub(r"[^A-Za-z0-9]+", "_", name).strip("_").lower()
    return slug or "load"


# ---------------------------------------------------------------------------
# Cargo manifests
# ---------------------------------------------------------------------------

def _dimension(row: pd.Series, columns: pd.Index, axis: str) -> float:
    """Read `axis` in meters, falling back to an `<axis>_mm` column."""
    if axis in columns and not pd.isna(row[axis]):
        return float(row[axis])
    mm = f"{axis}_mm"
    if mm in columns and not pd.isna(row[mm]):
        return float(row[mm]) / 1000.0
    raise ValueError(f"Row {row.name}: missing '{axis}' (or '{mm}') value")


def _optional(row: pd.Series, columns: pd.Index, column: str) -> Any:
    if column not in columns or pd.isna(row[column]):
        return None
    return row[column]


def _check_cargo(dims: Dimensions, cargo_type: Any, truck: Optional[TruckConfig], where: str) -> None:
    """Reject inadmissible sizes and unknown types, prefixing errors with `where`."""
    try:
        validate_dimensions(dims, truck)
    except CargoValidationError as exc:
        raise CargoValidationError(f"{where}: {exc}") from exc
    if cargo_type not in CARGO_TYPES:
        raise CargoValidationError(f"{where}: unknown cargo type {cargo_type!r}")


def cargo_from_df(df: pd.DataFrame, truck: Optional[TruckConfig] = None) -> List[CargoItem]:
    """
    Build cargo items from a manifest DataFrame.

    Required columns: length, width, height (meters) or length_mm, width_mm,
    height_mm. Optional: id, name, type, color, delivery_stop.

    Rows without an id get a fresh uuid; rows without a colour take the next
    palette colour. If `truck` is given every row is validated against it.

    Raises
    ------
    ValueError
        For missing dimension columns.
    CargoValidationError
        For inadmissible sizes or unknown cargo types.
    """
    columns = df.columns
    items: List[CargoItem] = []

    for i, (_, row) in enumerate(df.iterrows()):
        dims = Dimensions(
            length=_dimension(row, columns, "length"),
            width=_dimension(row, columns, "width"),
            height=_dimension(row, columns, "height"),
        )
        cargo_type = _optional(row, columns, "type") or "custom"
        _check_cargo(dims, cargo_type, truck, f"Row {row.name}")

        stop = _optional(row, columns, "delivery_stop")
        name = _optional(row, columns, "name")
        item_id = _optional(row, columns, "id")
        items.append(
            CargoItem(
                id=str(item_id) if item_id is not None else str(uuid.uuid4()),
                type=cargo_type,
                dimensions=dims,
                color=_optional(row, columns, "color") or CARGO_COLORS[i % len(CARGO_COLORS)],
                name=str(name) if name is not None else None,
                delivery_stop=int(stop) if stop is not None else None,
            )
        )
    return items


def load_cargo_csv(path: PathLike, truck: Optional[TruckConfig] = None) -> List[CargoItem]:
    """
    Load a cargo manifest CSV. See `cargo_from_df` for the accepted columns.
    """
    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Cargo manifest not found: {csv_path}")
    return cargo_from_df(pd.read_csv(csv_path, dtype={"id": str}), truck=truck)


# ---------------------------------------------------------------------------
# Layout export
# ---------------------------------------------------------------------------

def save_layout_csv(packed: Sequence[PackedItem], path: Optional[PathLike] = None) -> Path:
    """
    Write a packed layout to CSV and return the path.

    If `path` is None, a timestamped file is created under data/layouts/.
    """
    if path is None:
        DATA_LAYOUTS_DIR.mkdir(parents=True, exist_ok=True)
        out_path = DATA_LAYOUTS_DIR / f"layout_{_timestamp()}.csv"
    else:
        out_path = Path(path)
        out_path.parent.mkdir(parents=True, exist_ok=True)

    layout_to_df(packed).to_csv(out_path, index=False)
    return out_path


# ---------------------------------------------------------------------------
# Saved load configurations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SavedLoad:
    """A named truck + cargo pair as stored on disk."""

    name: str
    truck: TruckConfig
    items: List[CargoItem]
    created_at: Optional[str] = None


def _dims_to_json(dims: Dimensions) -> Dict[str, float]:
    return {"length": dims.length, "width": dims.width, "height": dims.height}


def _dims_from_json(data: Dict[str, Any]) -> Dimensions:
    return Dimensions(
        length=float(data["length"]),
        width=float(data["width"]),
        height=float(data["height"]),
    )


def load_config_to_dict(name: str, truck: TruckConfig, items: Sequence[CargoItem]) -> Dict[str, Any]:
    """Serialize a load configuration (camelCase keys, no positions)."""
    return {
        "name": name,
        "truckConfig": _dims_to_json(truck),
        "cargoItems": [
            {
                "id": it.id,
                "type": it.type,
                "dimensions": _dims_to_json(it.dimensions),
                "color": it.color,
                "name": it.name,
                "deliveryStop": it.delivery_stop,
            }
            for it in items
        ],
        "createdAt": dt.datetime.now(dt.timezone.utc).isoformat(),
    }


def load_config_from_dict(data: Dict[str, Any]) -> SavedLoad:
    """
    Inverse of `load_config_to_dict`.

    Restored cargo goes through the same checks as a manifest row: positive
    sizes within the saved truck and a known cargo type. Missing required
    keys raise ValueError; inadmissible cargo raises CargoValidationError.
    """
    try:
        truck = _dims_from_json(data["truckConfig"])
        items = [
            CargoItem(
                id=str(raw["id"]),
                type=raw.get("type", "custom"),
                dimensions=_dims_from_json(raw["dimensions"]),
                color=raw.get("color") or CARGO_COLORS[0],
                name=raw.get("name"),
                delivery_stop=raw.get("deliveryStop"),
            )
            for raw in data.get("cargoItems", [])
        ]
        name = str(data["name"])
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Malformed load configuration: {exc}") from exc

    validate_truck(truck)
    for item in items:
        _check_cargo(item.dimensions, item.type, truck, f"Item {item.id}")

    return SavedLoad(name=name, truck=truck, items=items, created_at=data.get("createdAt"))


def save_load_config(
    name: str,
    truck: TruckConfig,
    items: Sequence[CargoItem],
    path: Optional[PathLike] = None,
) -> Path:
    """
    Save a named load configuration as JSON and return the path.

    If `path` is None the file goes to data/loads/<slug>_<timestamp>.json.
    """
    if not name:
        raise ValueError("A load configuration needs a name.")

    if path is None:
        DATA_LOADS_DIR.mkdir(parents=True, exist_ok=True)
        out_path = DATA_LOADS_DIR / f"{_slugify(name)}_{_timestamp()}.json"
    else:
        out_path = Path(path)
        out_path.parent.mkdir(parents=True, exist_ok=True)

    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(load_config_to_dict(name, truck, items), f, indent=2)
    return out_path


def load_load_config(path: PathLike) -> SavedLoad:
    """Read a configuration written by `save_load_config`."""
    json_path = Path(path)
    if not json_path.exists():
        raise FileNotFoundError(f"Saved load not found: {json_path}")
    with open(json_path, "r", encoding="utf-8") as f:
        return load_config_from_dict(json.load(f))


def list_saved_loads() -> List[Path]:
    """Saved configurations under data/loads/, newest first."""
    if not DATA_LOADS_DIR.exists():
        return []
    return sorted(DATA_LOADS_DIR.glob("*.json"), key=lambda p: p.stat().st_mtime, reverse=True)


__all__ = [
    "cargo_from_df",
    "load_cargo_csv",
    "save_layout_csv",
    "SavedLoad",
    "load_config_to_dict",
    "load_config_from_dict",
    "save_load_config",
    "load_load_config",
    "list_saved_loads",
]
