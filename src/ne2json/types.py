"""
Type definitions and exception hierarchy for the ne2json pipeline.

Only input-shape problems and (optionally) ISO code collisions abort a run.
Per-feature defects are absorbed into defaulted fields and never surface here.
"""

from __future__ import annotations

from typing import Optional


class PipelineError(Exception):
    """Base exception for pipeline runs."""
    pass


class InputShapeError(PipelineError):
    """The input document is not a FeatureCollection with a features list."""
    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        prefix = f"{source}: " if source else ""
        super().__init__(f"{prefix}{message}")


class IdentityCollisionError(PipelineError):
    """Two retained features resolved to the same ISO alpha-2 code."""
    def __init__(self, iso_code: str, names: list[str]):
        self.iso_code = iso_code
        self.names = names
        super().__init__(
            f"ISO code {iso_code} is claimed by {len(names)} features: {', '.join(names)}"
        )
