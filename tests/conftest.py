"""
Shared fixtures for the ne2json test suite.

Features follow the Natural Earth admin_0_countries property naming.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import pytest

from ne2json.config.countries import CountryTables

SQUARE = [[[0.0, 0.0], [0.0, 2.0], [2.0, 2.0], [2.0, 0.0]]]

JAPAN_COORDS = [
    [[[129.0, 31.0], [131.0, 31.0], [131.0, 34.0], [129.0, 34.0], [129.0, 31.0]]],
    [[[139.0, 35.0], [141.0, 35.0], [141.0, 41.0], [139.0, 41.0], [139.0, 35.0]]],
]


def make_feature(
    name: Optional[str] = None,
    code: Optional[str] = None,
    coordinates: Any = None,
    geometry_type: str = "Polygon",
    **properties: Any,
) -> dict[str, Any]:
    props = dict(properties)
    if name is not None:
        props["NAME"] = name
    if code is not None:
        props["ISO_A2"] = code
    geometry = None
    if coordinates is not None:
        geometry = {"type": geometry_type, "coordinates": coordinates}
    return {"type": "Feature", "properties": props, "geometry": geometry}


def make_collection(*features: dict[str, Any]) -> dict[str, Any]:
    return {"type": "FeatureCollection", "features": list(features)}


@pytest.fixture
def tables() -> CountryTables:
    return CountryTables.default()


@pytest.fixture
def japan() -> dict[str, Any]:
    return make_feature(
        "Japan", "JP", JAPAN_COORDS, "MultiPolygon",
        ISO_A3="JPN", UN_A3="392", NAME_LONG="Japan",
        REGION_WB="East Asia & Pacific", REGION_UN="Asia", SUBREGION="Eastern Asia",
        ECONOMY="1. Developed region: G7", INCOME_GRP="1. High income: OECD",
        POP_EST=126264931, AREA_SQKM=377915,
    )


@pytest.fixture
def greenland() -> dict[str, Any]:
    return make_feature("Greenland", "GL", SQUARE, ISO_A3="GRL", POP_EST=56225)


@pytest.fixture
def norway() -> dict[str, Any]:
    # Natural Earth ships Norway with ISO_A2 = -99
    return make_feature(
        "Norway", "-99", [[[5.0, 58.0], [31.0, 58.0], [31.0, 71.0], [5.0, 71.0], [5.0, 58.0]]],
        ISO_A3="-99", NAME_LONG="Norway", NAME_ZH="挪威", REGION_WB="Europe & Central Asia",
        POP_EST=5347896,
    )


@pytest.fixture
def sample_collection(japan, greenland, norway) -> dict[str, Any]:
    return make_collection(japan, greenland, norway)


@pytest.fixture
def collection_file(tmp_path: Path, sample_collection) -> Path:
    path = tmp_path / "countries.geojson"
    path.write_text(json.dumps(sample_collection, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def clean_env(monkeypatch):
    for key in (
        "NE2JSON_OUTPUT_DIR", "NE2JSON_OUTPUT_INDENT", "NE2JSON_COLLISION_POLICY",
        "NE2JSON_DISPLAY_LOCALE", "NE2JSON_TABLES_FILE", "ENVIRONMENT",
    ):
        # recorded so values loaded from .env files are undone at teardown
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return monkeypatch
