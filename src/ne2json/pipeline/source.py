"""
FeatureCollectionSource - input loading and shape validation

Reads an already-downloaded GeoJSON document from disk or accepts an
in-memory mapping. Network access and caching live outside this package.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from ..types import InputShapeError
from ..utils import load_json_file

logger = logging.getLogger(__name__)


def validate_collection(document: Any, source: Optional[str] = None) -> dict[str, Any]:
    """
    Check that a document is a FeatureCollection with a features list.

    Args:
        document: Parsed GeoJSON document
        source: Label used in error messages

    Returns:
        The document, unchanged

    Raises:
        InputShapeError: If the document has the wrong shape
    """
    if not isinstance(document, Mapping):
        raise InputShapeError(f"expected a JSON object, got {type(document).__name__}", source)
    if document.get("type") != "FeatureCollection":
        raise InputShapeError(f"expected type 'FeatureCollection', got {document.get('type')!r}", source)
    features = document.get("features")
    if not isinstance(features, list):
        raise InputShapeError("'features' must be a list", source)
    return document


class FeatureCollectionSource:
    """
    Source of a raw GeoJSON FeatureCollection.

    Example:
        source = FeatureCollectionSource.from_path(Path("ne_10m_admin_0_countries.geojson"))
        collection = source.read()
    """

    def __init__(self, document: Any = None, path: Optional[Path] = None):
        self._document = document
        self.path = path

    @classmethod
    def from_path(cls, path: Path) -> "FeatureCollectionSource":
        return cls(path=Path(path))

    @classmethod
    def from_mapping(cls, document: Mapping[str, Any]) -> "FeatureCollectionSource":
        return cls(document=document)

    @property
    def label(self) -> str:
        return str(self.path) if self.path else "<memory>"

    def read(self) -> dict[str, Any]:
        """
        Load and validate the collection.

        Raises:
            FileNotFoundError: If the input file does not exist
            InputShapeError: If the content is not valid JSON or not a FeatureCollection
        """
        if self.path is not None and self._document is None:
            try:
                self._document = load_json_file(self.path)
            except ValueError as e:
                raise InputShapeError(str(e), self.label) from e
            logger.info(f"Loaded {self.path} ({self.path.stat().st_size / 1024 / 1024:.2f} MB)")

        collection = validate_collection(self._document, self.label)
        logger.info(f"Input contains {len(collection['features']):,} features")
        return collection
