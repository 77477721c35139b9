"""
ne2json Pipeline Components

Source -> Transform -> Export

Components:
- source: FeatureCollectionSource for loading and shape validation
- geometry: coordinate extraction and geometry summaries
- identity: IdentityNormalizer for ISO codes, names and continent
- sovereignty: SovereigntyFilter for member state classification
- transform: Transformer orchestrating filter, normalization and collision handling
- export: Exporter for JSON, GeoJSON and GeoPackage output
- stats: per-continent and per-region counts
"""

from .export import Exporter
from .identity import IdentityNormalizer
from .source import FeatureCollectionSource
from .sovereignty import SovereigntyFilter
from .transform import Transformer, process_features

__all__ = [
    "FeatureCollectionSource", "IdentityNormalizer", "SovereigntyFilter",
    "Transformer", "Exporter", "process_features"
]
