"""
Domain Models and Types

This module contains the core domain models and enumerations used throughout the pipeline.

Models:
- NormalizedCountry: Flat record for one sovereign state
- CountryIdentity: Resolved codes, names and continent of one feature
- GeometrySummary: Bounding box, center, centroid and vertex count
- FeatureVerdict: Keep/drop decision for one input feature
- PipelineResult: Records and diagnostics of a run

Enums:
- Continent: Continent classification
- DropReason: Why a feature was dropped
- CollisionPolicy: Handling of duplicate ISO codes
- ExportFormat: Export format options (json, geojson, gpkg)
"""

from .enums import CollisionPolicy, Continent, DropReason, ExportFormat
from .models import (
    CountryIdentity,
    FeatureVerdict,
    GeometrySummary,
    NormalizedCountry,
    PipelineResult,
)

__all__ = [
    "NormalizedCountry", "CountryIdentity", "GeometrySummary", "FeatureVerdict", "PipelineResult",
    "Continent", "DropReason", "CollisionPolicy", "ExportFormat"
]
