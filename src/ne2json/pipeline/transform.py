"""
Transformer - filter, normalize and summarize a country FeatureCollection

Runs the sovereignty filter, identity normalizer and geometry summarizer over
every feature in input order and resolves ISO code collisions according to
the configured policy.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from numbers import Real
from typing import Any, Optional

from ..config.countries import CountryTables
from ..domain.enums import CollisionPolicy, DropReason
from ..domain.models import (
    CountryIdentity,
    FeatureVerdict,
    GeometrySummary,
    NormalizedCountry,
    PipelineResult,
)
from ..types import IdentityCollisionError
from ..utils import timer
from .geometry import summarize_geometry
from .identity import IdentityNormalizer
from .sovereignty import SovereigntyFilter, feature_properties
from .source import validate_collection

logger = logging.getLogger(__name__)


def _label(properties: Mapping[str, Any], *keys: str, default: str = "Unknown") -> str:
    for key in keys:
        value = properties.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return default


def _amount(properties: Mapping[str, Any], *keys: str) -> int | float:
    """First non-negative finite number among keys, else 0."""
    for key in keys:
        value = properties.get(key)
        if isinstance(value, Real) and not isinstance(value, bool):
            if value >= 0 and value != float("inf"):
                return value
    return 0


def _geometry(feature: Any) -> Optional[Mapping[str, Any]]:
    if not isinstance(feature, Mapping):
        return None
    geometry = feature.get("geometry")
    return geometry if isinstance(geometry, Mapping) else None


class Transformer:
    """
    Turn a raw FeatureCollection into NormalizedCountry records.

    Components are built from one CountryTables value passed in by the caller,
    so the same tables drive filtering and normalization.
    """

    def __init__(
        self,
        tables: CountryTables,
        collision_policy: CollisionPolicy = CollisionPolicy.KEEP_FIRST,
        display_locale: str = "zh",
    ):
        """
        Args:
            tables: Immutable lookup tables
            collision_policy: Handling of duplicate ISO codes
            display_locale: Locale suffix of the display-name property
        """
        self.tables = tables
        self.collision_policy = CollisionPolicy(collision_policy)
        self.normalizer = IdentityNormalizer(tables, display_locale)
        self.filter = SovereigntyFilter(tables, self.normalizer)

    def build_record(self, feature: Any, source_index: int) -> NormalizedCountry:
        """Normalize one feature into a record. Never raises on missing data."""
        properties = feature_properties(feature)
        geometry = _geometry(feature)
        identity = self.normalizer.normalize(properties)
        summary = summarize_geometry(geometry)
        return self._record(identity, summary, properties, geometry, source_index)

    def _record(
        self,
        identity: CountryIdentity,
        summary: GeometrySummary,
        properties: Mapping[str, Any],
        geometry: Optional[Mapping[str, Any]],
        source_index: int,
    ) -> NormalizedCountry:
        geometry_type = geometry.get("type") if geometry else None
        return NormalizedCountry(
            source_index=source_index,
            iso_code=identity.iso_code,
            iso_code3=identity.iso_code3,
            un_code=identity.un_code,
            name_display=identity.name_display,
            name_english=identity.name_english,
            name_local=identity.name_local,
            continent=identity.continent,
            region=_label(properties, "REGION_WB", "REGION_UN"),
            subregion=_label(properties, "SUBREGION"),
            economy=_label(properties, "ECONOMY"),
            income_level=_label(properties, "INCOME_GRP"),
            sovereignty=_label(properties, "SOVEREIGNT", default="Independent"),
            developed=_label(properties, "DEVELOPED"),
            feature_class=_label(properties, "FEATURECLA", "FEATURE_CLASS", default="Admin-0 country"),
            scale_rank=_amount(properties, "SCALERANK"),
            population=_amount(properties, "POP_EST", "POPULATION"),
            area_sq_km=_amount(properties, "AREA_SQKM", "AREA"),
            center=summary.center,
            centroid=summary.centroid,
            bbox=summary.bbox,
            vertex_count=summary.vertex_count,
            geometry_type=geometry_type if isinstance(geometry_type, str) else None,
        )

    def classify_all(self, collection: Mapping[str, Any]) -> list[FeatureVerdict]:
        """Verdict for every feature, kept or not."""
        features = validate_collection(collection)["features"]
        return [self.filter.verdict(feature, index) for index, feature in enumerate(features)]

    @timer
    def run(self, collection: Mapping[str, Any]) -> PipelineResult:
        """
        Filter, normalize and summarize a FeatureCollection.

        Args:
            collection: Parsed GeoJSON FeatureCollection

        Returns:
            PipelineResult with records in input order and drop diagnostics

        Raises:
            InputShapeError: If the collection has the wrong shape
            IdentityCollisionError: On duplicate ISO codes under the reject policy
        """
        features = validate_collection(collection)["features"]

        kept: list[tuple[Any, FeatureVerdict]] = []
        dropped: list[FeatureVerdict] = []
        for index, feature in enumerate(features):
            verdict = self.filter.verdict(feature, index)
            if verdict.kept:
                kept.append((feature, verdict))
            else:
                logger.debug(f"Dropped feature {index} ({verdict.name or 'unnamed'}): {verdict.reason.value}")
                dropped.append(verdict)

        kept, collisions, duplicates = self._resolve_collisions(kept)
        dropped.extend(duplicates)
        dropped.sort(key=lambda v: v.feature_index)

        records = [
            self.build_record(feature, position)
            for position, (feature, _) in enumerate(kept, start=1)
        ]

        logger.info(
            f"Kept {len(records):,} of {len(features):,} features "
            f"({len(dropped):,} dropped, {len(collisions)} code collisions)"
        )
        return PipelineResult(
            records=records,
            dropped=dropped,
            collisions=collisions,
            total_features=len(features),
        )

    def _resolve_collisions(
        self, kept: list[tuple[Any, FeatureVerdict]]
    ) -> tuple[list[tuple[Any, FeatureVerdict]], dict[str, list[str]], list[FeatureVerdict]]:
        claims: dict[str, list[FeatureVerdict]] = {}
        for _, verdict in kept:
            claims.setdefault(verdict.iso_code, []).append(verdict)

        collisions = {
            code: [v.name or f"feature {v.feature_index}" for v in verdicts]
            for code, verdicts in claims.items()
            if len(verdicts) > 1
        }
        if not collisions:
            return kept, {}, []

        for code, names in collisions.items():
            if self.collision_policy == CollisionPolicy.REJECT:
                raise IdentityCollisionError(code, names)
            logger.warning(f"ISO code {code} claimed by multiple features: {', '.join(names)}")

        if self.collision_policy == CollisionPolicy.LOG:
            return kept, collisions, []

        seen: set[str] = set()
        unique: list[tuple[Any, FeatureVerdict]] = []
        duplicates: list[FeatureVerdict] = []
        for feature, verdict in kept:
            if verdict.iso_code in seen:
                duplicates.append(verdict.model_copy(update={"reason": DropReason.DUPLICATE_CODE}))
                continue
            seen.add(verdict.iso_code)
            unique.append((feature, verdict))
        return unique, collisions, duplicates


def process_features(
    collection: Mapping[str, Any],
    tables: Optional[CountryTables] = None,
    collision_policy: CollisionPolicy = CollisionPolicy.KEEP_FIRST,
    display_locale: str = "zh",
) -> list[NormalizedCountry]:
    """Records for a FeatureCollection using the default tables unless given."""
    transformer = Transformer(tables or CountryTables.default(), collision_policy, display_locale)
    return transformer.run(collection).records
