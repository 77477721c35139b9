"""
Pipeline Domain Models

Pydantic models for the normalized country records and the per-run result.
Records are built once per run and never mutated afterwards.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field

from .enums import Continent, DropReason

Point2D = tuple[float, float]
BBox = tuple[float, float, float, float]


class GeometrySummary(BaseModel):
    """Bounding box, bbox center, unweighted centroid and vertex count."""
    bbox: BBox = Field(default=(0.0, 0.0, 0.0, 0.0), description="[min_lon, min_lat, max_lon, max_lat]")
    center: Point2D = Field(default=(0.0, 0.0), description="Bounding box midpoint")
    centroid: Point2D = Field(default=(0.0, 0.0), description="Arithmetic mean of all vertices")
    vertex_count: int = Field(default=0, ge=0, description="Number of coordinate pairs")

    class Config:
        """Pydantic configuration."""
        frozen = True


class CountryIdentity(BaseModel):
    """Resolved identity of one feature."""
    iso_code: str = Field(..., description="ISO 3166-1 alpha-2 code after sentinel repair")
    iso_code3: Optional[str] = Field(None, description="ISO 3166-1 alpha-3 code")
    un_code: Optional[str] = Field(None, description="UN M49 numeric code")
    name_english: str = Field("Unknown", description="English name")
    name_display: str = Field("Unknown", description="Localized display name")
    name_local: str = Field("Unknown", description="Long-form source name")
    continent: Continent = Field(Continent.UNKNOWN, description="Continent derived from iso_code")

    class Config:
        """Pydantic configuration."""
        frozen = True


class NormalizedCountry(BaseModel):
    """Flat record for one sovereign state."""
    source_index: int = Field(..., ge=1, description="1-based position in the output sequence")
    iso_code: str = Field(..., min_length=2, max_length=2, pattern=r"^[A-Za-z]{2}$")
    iso_code3: Optional[str] = None
    un_code: Optional[str] = None
    name_display: str
    name_english: str
    name_local: str
    continent: Continent = Continent.UNKNOWN
    region: str = "Unknown"
    subregion: str = "Unknown"
    economy: str = "Unknown"
    income_level: str = "Unknown"
    sovereignty: str = "Independent"
    developed: str = "Unknown"
    feature_class: str = "Admin-0 country"
    scale_rank: Union[int, float] = Field(default=0, ge=0)
    population: Union[int, float] = Field(default=0, ge=0)
    area_sq_km: Union[int, float] = Field(default=0, ge=0)
    center: Point2D = (0.0, 0.0)
    centroid: Point2D = (0.0, 0.0)
    bbox: BBox = (0.0, 0.0, 0.0, 0.0)
    vertex_count: int = Field(default=0, ge=0)
    geometry_type: Optional[str] = None

    class Config:
        """Pydantic configuration."""
        frozen = True
        use_enum_values = True

    def simplified(self) -> dict:
        """Reduced record for front-end consumption."""
        return {
            'iso_code': self.iso_code,
            'name_display': self.name_display,
            'name_english': self.name_english,
            'center': list(self.center),
            'continent': self.continent,
            'iso_code3': self.iso_code3,
            'population': self.population,
            'area_sq_km': self.area_sq_km,
        }


class FeatureVerdict(BaseModel):
    """Classification outcome for a single input feature."""
    feature_index: int = Field(..., ge=0, description="0-based position in the input collection")
    name: str = Field("", description="Primary source name")
    iso_code: str = Field("", description="Resolved ISO alpha-2 code")
    reason: Optional[DropReason] = Field(None, description="None when the feature is kept")

    class Config:
        """Pydantic configuration."""
        frozen = True

    @property
    def kept(self) -> bool:
        return self.reason is None


class PipelineResult(BaseModel):
    """Records and diagnostics from one pipeline run."""
    records: list[NormalizedCountry] = Field(default_factory=list)
    dropped: list[FeatureVerdict] = Field(default_factory=list)
    collisions: dict[str, list[str]] = Field(default_factory=dict, description="ISO code -> competing names")
    total_features: int = 0

    def drop_counts(self) -> dict[str, int]:
        """Number of dropped features per reason."""
        counts: dict[str, int] = {}
        for verdict in self.dropped:
            key = verdict.reason.value if verdict.reason else "kept"
            counts[key] = counts.get(key, 0) + 1
        return counts
