"""
Tests for truckpack.utils.io

These tests only touch pytest's `tmp_path`, never the project data/ tree.
"""

from __future__ import annotations

import json

import pandas as pd
import pytest

from truckpack.cargo import CargoItem, CargoValidationError
from truckpack.config import CARGO_COLORS
from truckpack.evaluation import LAYOUT_COLUMNS
from truckpack.geometry import Dimensions
from truckpack.packers import pack_cargo
from truckpack.utils.io import (
    cargo_from_df,
    load_cargo_csv,
    load_config_from_dict,
    load_load_config,
    save_layout_csv,
    save_load_config,
)


TRUCK = Dimensions(length=7.2, width=2.4, height=2.5)


# ---------------------------------------------------------------------------
# Manifests
# ---------------------------------------------------------------------------

def test_load_cargo_csv_meters(tmp_path):
    path = tmp_path / "manifest.csv"
    pd.DataFrame(
        {
            "id": ["A1", "A2"],
            "name": ["Crate", None],
            "length": [1.2, 0.8],
            "width": [1.0, 0.6],
            "height": [1.1, 0.5],
            "delivery_stop": [2, None],
        }
    ).to_csv(path, index=False)

    items = load_cargo_csv(path, truck=TRUCK)
    assert [it.id for it in items] == ["A1", "A2"]
    assert items[0].dimensions == Dimensions(1.2, 1.0, 1.1)
    assert items[0].name == "Crate"
    assert items[0].delivery_stop == 2
    assert items[1].name is None
    assert items[1].delivery_stop is None
    assert all(it.type == "custom" for it in items)
    assert [it.color for it in items] == list(CARGO_COLORS[:2])


def test_cargo_from_df_millimeter_columns():
    df = pd.DataFrame({"length_mm": [1200], "width_mm": [800], "height_mm": [1500]})
    (item,) = cargo_from_df(df)
    assert item.dimensions.length == pytest.approx(1.2)
    assert item.dimensions.width == pytest.approx(0.8)
    assert item.dimensions.height == pytest.approx(1.5)
    assert item.id  # generated


def test_cargo_from_df_rejects_oversized_rows():
    df = pd.DataFrame({"length": [1.0], "width": [3.0], "height": [1.0]})
    with pytest.raises(CargoValidationError, match="Width"):
        cargo_from_df(df, truck=TRUCK)


def test_cargo_from_df_rejects_unknown_type():
    df = pd.DataFrame({"length": [1.0], "width": [1.0], "height": [1.0], "type": ["crate"]})
    with pytest.raises(CargoValidationError, match="unknown cargo type"):
        cargo_from_df(df)


def test_cargo_from_df_requires_dimensions():
    df = pd.DataFrame({"length": [1.0], "width": [1.0]})
    with pytest.raises(ValueError, match="height"):
        cargo_from_df(df)


def test_integer_ids_with_blank_rows_stay_integers(tmp_path):
    path = tmp_path / "manifest.csv"
    path.write_text("id,length,width,height\n1,1.0,1.0,1.0\n,1.0,1.0,1.0\n3,1.0,1.0,1.0\n", encoding="utf-8")

    items = load_cargo_csv(path)
    assert items[0].id == "1"
    assert items[2].id == "3"
    assert items[1].id not in {"nan", "2.0"}


def test_load_cargo_csv_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_cargo_csv(tmp_path / "nope.csv")


# ---------------------------------------------------------------------------
# Layout export
# ---------------------------------------------------------------------------

def test_save_layout_csv(tmp_path):
    items = [
        CargoItem(id=f"p{i}", type="standard", dimensions=Dimensions(1.2, 1.2, 1.2), color="#06b6d4")
        for i in range(2)
    ]
    packed = pack_cargo(TRUCK, items).packed
    out = save_layout_csv(packed, tmp_path / "out" / "layout.csv")

    df = pd.read_csv(out)
    assert list(df.columns) == LAYOUT_COLUMNS
    assert df["id"].tolist() == ["p0", "p1"]
    assert df["x"].tolist() == pytest.approx([0.0, 1.2])


# ---------------------------------------------------------------------------
# Saved loads
# ---------------------------------------------------------------------------

@pytest.mark.integration
def test_saved_load_restores_truck_and_cargo_without_positions(tmp_path):
    items = [
        CargoItem(id="a", type="custom", dimensions=Dimensions(2.0, 1.0, 1.0),
                  color="#ef4444", name="Crate", delivery_stop=1),
        CargoItem(id="b", type="standard", dimensions=Dimensions(1.2, 1.2, 1.2), color="#3b82f6"),
    ]
    path = save_load_config("Monday run", TRUCK, items, path=tmp_path / "monday.json")

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["name"] == "Monday run"
    assert raw["truckConfig"] == {"length": 7.2, "width": 2.4, "height": 2.5}
    assert raw["cargoItems"][0]["deliveryStop"] == 1
    assert "position" not in raw["cargoItems"][0]

    saved = load_load_config(path)
    assert saved.name == "Monday run"
    assert saved.truck == TRUCK
    assert saved.items == items

    # Restoring means re-packing; same inputs give the same layout
    assert [p.position for p in pack_cargo(saved.truck, saved.items).packed] == [
        p.position for p in pack_cargo(TRUCK, items).packed
    ]


def test_save_load_config_requires_name(tmp_path):
    with pytest.raises(ValueError):
        save_load_config("", TRUCK, [], path=tmp_path / "x.json")


def test_malformed_config_raises_value_error():
    with pytest.raises(ValueError, match="Malformed"):
        load_config_from_dict({"name": "broken"})


def test_load_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_load_config(tmp_path / "missing.json")


def _saved_load_json(path, cargo_items):
    path.write_text(
        json.dumps(
            {
                "name": "Restored",
                "truckConfig": {"length": 7.2, "width": 2.4, "height": 2.5},
                "cargoItems": cargo_items,
            }
        ),
        encoding="utf-8",
    )
    return path


def test_restored_negative_dimension_is_rejected(tmp_path):
    path = _saved_load_json(
        tmp_path / "neg.json",
        [{"id": "neg", "type": "custom", "dimensions": {"length": 1.0, "width": -1.0, "height": 1.0}}],
    )
    with pytest.raises(CargoValidationError, match="Item neg: Width"):
        load_load_config(path)


def test_restored_unknown_type_is_rejected(tmp_path):
    path = _saved_load_json(
        tmp_path / "weird.json",
        [{"id": "w", "type": "weird", "dimensions": {"length": 1.0, "width": 1.0, "height": 1.0}}],
    )
    with pytest.raises(CargoValidationError, match="Item w: unknown cargo type 'weird'"):
        load_load_config(path)


def test_restored_truck_must_be_positive():
    with pytest.raises(CargoValidationError):
        load_config_from_dict(
            {"name": "flat", "truckConfig": {"length": 7.2, "width": 0.0, "height": 2.5}, "cargoItems": []}
        )
