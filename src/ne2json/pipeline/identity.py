"""
Identity Normalizer - ISO codes, names and continent for one feature

Reconciles the inconsistent identity fields found across Natural Earth style
property bags. Normalization is total: missing or malformed fields fall back
to defaults and nothing is raised.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from ..config.countries import CountryTables
from ..domain.enums import Continent
from ..domain.models import CountryIdentity

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


def _text(properties: Mapping[str, Any], *keys: str) -> Optional[str]:
    """First non-blank string value among keys."""
    for key in keys:
        value = properties.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _code(value: Any, length: int) -> Optional[str]:
    """Upper-cased alphabetic code of the given length, else None."""
    if not isinstance(value, str):
        return None
    code = value.strip().upper()
    if len(code) == length and code.isalpha():
        return code
    return None


class IdentityNormalizer:
    """
    Resolve canonical identity fields from a raw property bag.

    Name resolution:
        english: NAME_LONG -> NAME_EN -> NAME -> ADMIN -> "Unknown"
        display: NAME_<LOCALE> -> localized table -> english
        local:   NAME_LONG -> NAME -> english

    ISO alpha-2 codes equal to the sentinel are repaired through the finite
    name -> code patch list in the tables.
    """

    def __init__(self, tables: CountryTables, display_locale: str = "zh"):
        """
        Args:
            tables: Immutable lookup tables
            display_locale: Suffix of the localized name property (NAME_ZH, NAME_FR, ...)
        """
        self.tables = tables
        self.display_locale = display_locale.strip().lower()
        self.locale_key = f"NAME_{self.display_locale.upper()}"

    def english_name(self, properties: Mapping[str, Any]) -> str:
        return _text(properties, "NAME_LONG", "NAME_EN", "NAME", "ADMIN") or UNKNOWN

    def display_name(self, properties: Mapping[str, Any], english: Optional[str] = None) -> str:
        english = english or self.english_name(properties)
        explicit = _text(properties, self.locale_key)
        if explicit:
            return explicit
        # Built-in localized table is keyed for the default locale only
        if self.display_locale == "zh":
            localized = self.tables.localized_name(english) or self.tables.localized_name(_text(properties, "NAME"))
            if localized:
                return localized
        return english

    def local_name(self, properties: Mapping[str, Any], english: Optional[str] = None) -> str:
        return _text(properties, "NAME_LONG", "NAME") or english or self.english_name(properties)

    def resolve_code(self, properties: Mapping[str, Any]) -> str:
        """
        ISO alpha-2 code after sentinel repair.

        Returns:
            Upper-cased code; the raw (possibly invalid) value when it cannot
            be repaired; empty string when absent.
        """
        raw = properties.get("ISO_A2")
        code = raw.strip().upper() if isinstance(raw, str) else ""
        if code != self.tables.sentinel_code:
            return code

        candidates = [
            _text(properties, "NAME"),
            _text(properties, "NAME_LONG"),
            _text(properties, "NAME_EN"),
            _text(properties, self.locale_key),
        ]
        candidates.append(self.tables.localized_name(candidates[1] or candidates[0]))
        repaired = self.tables.repair_code(candidates)
        if repaired:
            logger.debug(f"Repaired sentinel ISO code for {candidates[0] or candidates[1]} -> {repaired}")
            return repaired
        return code

    def normalize(self, properties: Optional[Mapping[str, Any]]) -> CountryIdentity:
        """
        Build the CountryIdentity for one property bag.

        Args:
            properties: Raw feature properties (None is treated as empty)

        Returns:
            Complete CountryIdentity, possibly with "Unknown" placeholders
        """
        if not isinstance(properties, Mapping):
            properties = {}

        english = self.english_name(properties)
        iso_code = self.resolve_code(properties)
        un_code = properties.get("UN_A3")
        if isinstance(un_code, int) and not isinstance(un_code, bool):
            un_code = f"{un_code:03d}" if un_code >= 0 else None
        elif isinstance(un_code, str):
            un_code = un_code.strip() or None
            if un_code == self.tables.sentinel_code:
                un_code = None
        else:
            un_code = None

        return CountryIdentity(
            iso_code=iso_code,
            iso_code3=_code(properties.get("ISO_A3"), 3),
            un_code=un_code,
            name_english=english,
            name_display=self.display_name(properties, english),
            name_local=self.local_name(properties, english),
            continent=Continent(self.tables.continent_for(iso_code)),
        )
