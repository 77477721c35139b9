"""
Configuration module for the ne2json pipeline.
Environment-driven settings and the static country tables.
"""

from .countries import CountryTables
from .settings import (
    Config,
    ConfigurationError,
    OutputConfig,
    PipelineConfig,
)

__all__ = [
    'Config',
    'ConfigurationError',
    'CountryTables',
    'OutputConfig',
    'PipelineConfig'
]
