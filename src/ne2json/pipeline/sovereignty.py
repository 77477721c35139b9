"""
Sovereignty Filter - separate UN member states from dependent territories

A feature is kept only when all three conditions hold:
1. its repaired ISO alpha-2 code is a UN member code
2. its primary name is not a listed non-sovereign territory
3. its repaired code is a non-empty 2-character string

Membership and exclusion are separate tables: a record can fail membership
without being a named exclusion (wrong or missing code), and the verdict
reports which condition failed.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from ..config.countries import CountryTables
from ..domain.enums import DropReason
from ..domain.models import FeatureVerdict
from .identity import IdentityNormalizer


def feature_properties(feature: Any) -> Mapping[str, Any]:
    """Property bag of a feature; empty for missing or malformed features."""
    if not isinstance(feature, Mapping):
        return {}
    properties = feature.get("properties")
    return properties if isinstance(properties, Mapping) else {}


def primary_name(properties: Mapping[str, Any]) -> str:
    for key in ("NAME", "NAME_LONG"):
        value = properties.get(key)
        if isinstance(value, str) and value:
            return value
    return ""


class SovereigntyFilter:
    """Classify features as sovereign states or excluded territories."""

    def __init__(self, tables: CountryTables, normalizer: Optional[IdentityNormalizer] = None):
        self.tables = tables
        self.normalizer = normalizer or IdentityNormalizer(tables)

    def classify(self, feature: Any) -> Optional[DropReason]:
        """
        First failing condition for a feature.

        Exclusion is checked first so that a listed territory is always
        reported as such, even when its code matches a member state.

        Returns:
            DropReason, or None when the feature is sovereign
        """
        properties = feature_properties(feature)
        if self.tables.is_excluded(primary_name(properties)):
            return DropReason.EXCLUDED_TERRITORY

        code = self.normalizer.resolve_code(properties)
        if not code or len(code) != 2:
            return DropReason.INVALID_CODE
        if not self.tables.is_member(code):
            return DropReason.NOT_MEMBER
        return None

    def is_sovereign(self, feature: Any) -> bool:
        return self.classify(feature) is None

    def verdict(self, feature: Any, index: int) -> FeatureVerdict:
        """FeatureVerdict for the feature at the given input position."""
        properties = feature_properties(feature)
        return FeatureVerdict(
            feature_index=index,
            name=primary_name(properties),
            iso_code=self.normalizer.resolve_code(properties),
            reason=self.classify(feature),
        )
