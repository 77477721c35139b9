"""
Pipeline Enumerations

Core enums for type safety and clear interface definitions across the pipeline.
"""

from enum import Enum


class Continent(str, Enum):
    """Continent classification derived from the ISO alpha-2 code."""
    ASIA = "Asia"
    EUROPE = "Europe"
    AFRICA = "Africa"
    NORTH_AMERICA = "North America"
    SOUTH_AMERICA = "South America"
    OCEANIA = "Oceania"
    ANTARCTICA = "Antarctica"
    UNKNOWN = "Unknown"


class DropReason(str, Enum):
    """Why a feature was left out of the output."""
    EXCLUDED_TERRITORY = "excluded_territory"  # Named dependency / disputed area
    INVALID_CODE = "invalid_code"              # Resolved code is not 2 characters
    NOT_MEMBER = "not_member"                  # Code outside the UN member set
    DUPLICATE_CODE = "duplicate_code"          # Lost an ISO code collision (keep-first)


class CollisionPolicy(str, Enum):
    """Handling of two retained features resolving to one ISO code."""
    REJECT = "reject"          # Abort the run with IdentityCollisionError
    LOG = "log"                # Warn and keep every record
    KEEP_FIRST = "keep-first"  # Warn and keep the earliest record only


class ExportFormat(str, Enum):
    """Export format options for normalized records."""
    JSON = "json"           # Full + simplified record lists and a count summary
    GEOJSON = "geojson"     # Centroid point layer
    GPKG = "gpkg"           # Centroid point layer in a GeoPackage
