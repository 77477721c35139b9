"""
Exporter - Multi-format Record Export

Writes normalized country records as JSON record lists (full + simplified +
count summary) or as a centroid point layer in GeoJSON / GeoPackage.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import geopandas as gpd
from shapely.geometry import Point

from ..domain.enums import ExportFormat
from ..domain.models import NormalizedCountry
from ..utils import ensure_directory

logger = logging.getLogger(__name__)

FULL_FILENAME = "sovereign-countries.json"
SIMPLIFIED_FILENAME = "sovereign-countries-simplified.json"
COUNT_FILENAME = "country-count.json"
LAYER_BASENAME = "sovereign-countries"
SOURCE_LABEL = "Natural Earth Data + UN Member Filter"

# Scalar attributes carried onto the point layer
LAYER_FIELDS = [
    "source_index", "iso_code", "iso_code3", "un_code",
    "name_display", "name_english", "name_local",
    "continent", "region", "subregion", "economy", "income_level",
    "sovereignty", "developed", "feature_class", "scale_rank",
    "population", "area_sq_km", "vertex_count", "geometry_type",
]


def records_to_geodataframe(records: list[NormalizedCountry]) -> gpd.GeoDataFrame:
    """
    Build a point GeoDataFrame (EPSG:4326) located at each record's centroid.

    The bbox and bbox center are flattened into bbox_west/south/east/north and
    center_lon/center_lat columns.
    """
    rows = []
    for record in records:
        row = {name: getattr(record, name) for name in LAYER_FIELDS}
        row["center_lon"], row["center_lat"] = record.center
        row["bbox_west"], row["bbox_south"], row["bbox_east"], row["bbox_north"] = record.bbox
        rows.append(row)

    geometry = [Point(record.centroid) for record in records]
    return gpd.GeoDataFrame(rows, geometry=geometry, crs="EPSG:4326")


class Exporter:
    """
    Multi-format record exporter.

    Example:
        exporter = Exporter(Path("output"))
        paths = exporter.write(result.records, ExportFormat.JSON)
    """

    def __init__(self, out_dir: Path, indent: Optional[int] = 2):
        """
        Args:
            out_dir: Output directory (created on write)
            indent: JSON indent, None for compact output
        """
        self.out_dir = Path(out_dir)
        self.indent = indent

    def write(self, records: list[NormalizedCountry], fmt: ExportFormat = ExportFormat.JSON) -> list[Path]:
        """
        Write records in the requested format.

        Returns:
            Paths of the files written
        """
        fmt = ExportFormat(fmt)
        ensure_directory(self.out_dir)

        if fmt == ExportFormat.JSON:
            paths = self._export_to_json(records)
        elif fmt == ExportFormat.GEOJSON:
            paths = [self._export_layer(records, "GeoJSON", f"{LAYER_BASENAME}.geojson")]
        elif fmt == ExportFormat.GPKG:
            paths = [self._export_layer(records, "GPKG", f"{LAYER_BASENAME}.gpkg")]
        else:
            raise ValueError(f"Unsupported export format: {fmt}")

        logger.info(f"Exported {len(records):,} records to {self.out_dir} ({fmt.value})")
        return paths

    def _dump(self, payload, filename: str) -> Path:
        path = self.out_dir / filename
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=self.indent)
        logger.debug(f"Wrote {path}")
        return path

    def _export_to_json(self, records: list[NormalizedCountry]) -> list[Path]:
        full = [record.model_dump(mode="json") for record in records]
        simplified = [record.simplified() for record in records]
        count = {
            "total": len(records),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "source": SOURCE_LABEL,
        }
        return [
            self._dump(full, FULL_FILENAME),
            self._dump(simplified, SIMPLIFIED_FILENAME),
            self._dump(count, COUNT_FILENAME),
        ]

    def _export_layer(self, records: list[NormalizedCountry], driver: str, filename: str) -> Path:
        path = self.out_dir / filename
        gdf = records_to_geodataframe(records)
        if driver == "GPKG":
            gdf.to_file(path, driver=driver, layer="countries")
        else:
            gdf.to_file(path, driver=driver)
        return path
