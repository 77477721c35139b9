import json

import geopandas as gpd
import pytest

from ne2json.domain.enums import ExportFormat
from ne2json.pipeline.export import (
    COUNT_FILENAME,
    FULL_FILENAME,
    SIMPLIFIED_FILENAME,
    SOURCE_LABEL,
    Exporter,
    records_to_geodataframe,
)
from ne2json.pipeline.transform import process_features


@pytest.fixture
def records(sample_collection):
    return process_features(sample_collection)


def test_json_export_writes_three_files(tmp_path, records):
    out_dir = tmp_path / "nested" / "out"
    paths = Exporter(out_dir).write(records)

    assert [p.name for p in paths] == [FULL_FILENAME, SIMPLIFIED_FILENAME, COUNT_FILENAME]
    assert all(p.parent == out_dir for p in paths)

    full = json.loads((out_dir / FULL_FILENAME).read_text(encoding="utf-8"))
    assert [r["iso_code"] for r in full] == ["JP", "NO"]
    assert full[0]["bbox"] == [129, 31, 141, 41]
    assert full[0]["continent"] == "Asia"

    simplified = json.loads((out_dir / SIMPLIFIED_FILENAME).read_text(encoding="utf-8"))
    assert simplified[1] == {
        "iso_code": "NO",
        "name_display": "挪威",
        "name_english": "Norway",
        "center": [18, 64.5],
        "continent": "Europe",
        "iso_code3": None,
        "population": 5347896,
        "area_sq_km": 0,
    }

    count = json.loads((out_dir / COUNT_FILENAME).read_text(encoding="utf-8"))
    assert count["total"] == 2
    assert count["source"] == SOURCE_LABEL
    assert "T" in count["timestamp"]


def test_non_ascii_names_written_verbatim(tmp_path, records):
    Exporter(tmp_path).write(records)
    text = (tmp_path / SIMPLIFIED_FILENAME).read_text(encoding="utf-8")
    assert "日本" in text
    assert "\\u" not in text


def test_compact_output(tmp_path, records):
    Exporter(tmp_path, indent=None).write(records)
    assert "\n" not in (tmp_path / FULL_FILENAME).read_text(encoding="utf-8")


def test_empty_record_list(tmp_path):
    Exporter(tmp_path).write([])
    assert json.loads((tmp_path / FULL_FILENAME).read_text(encoding="utf-8")) == []
    assert json.loads((tmp_path / COUNT_FILENAME).read_text(encoding="utf-8"))["total"] == 0


def test_geodataframe_points_at_centroid(records):
    gdf = records_to_geodataframe(records)
    assert gdf.crs.to_epsg() == 4326
    assert list(gdf["iso_code"]) == ["JP", "NO"]
    japan = gdf.iloc[0]
    assert japan.geometry.x == pytest.approx(records[0].centroid[0])
    assert japan.geometry.y == pytest.approx(records[0].centroid[1])
    assert japan["center_lon"] == 135
    assert japan["bbox_north"] == 41


def test_geojson_layer(tmp_path, records):
    (path,) = Exporter(tmp_path).write(records, ExportFormat.GEOJSON)
    assert path.name == "sovereign-countries.geojson"

    layer = gpd.read_file(path)
    assert len(layer) == 2
    assert set(layer.geom_type) == {"Point"}
    assert list(layer["name_display"]) == ["日本", "挪威"]


def test_gpkg_layer(tmp_path, records):
    (path,) = Exporter(tmp_path).write(records, ExportFormat.GPKG)
    assert path.name == "sovereign-countries.gpkg"

    layer = gpd.read_file(path, layer="countries")
    assert len(layer) == 2
    assert layer.crs.to_epsg() == 4326
    assert set(layer.geom_type) == {"Point"}
    assert list(layer["iso_code"]) == ["JP", "NO"]
    assert list(layer["name_display"]) == ["日本", "挪威"]
    assert layer.iloc[0].geometry.x == pytest.approx(records[0].centroid[0])
    assert list(layer["sovereignty"]) == ["Independent", "Independent"]


def test_format_accepts_plain_string(tmp_path, records):
    (path,) = Exporter(tmp_path).write(records, "geojson")
    assert path.suffix == ".geojson"
