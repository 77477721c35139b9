"""
Runtime settings for ne2json, read from the environment.

Usage:
    from ne2json.config.settings import Config
    config = Config()
    policy = config.pipeline.collision_policy

Environment Variables:
    NE2JSON_OUTPUT_DIR: Directory for exported files
    NE2JSON_OUTPUT_INDENT: JSON indent (0 for compact output)
    NE2JSON_COLLISION_POLICY: reject | log | keep-first
    NE2JSON_DISPLAY_LOCALE: Locale suffix of the display-name property
    NE2JSON_TABLES_FILE: Optional YAML file extending the country tables
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from ..domain.enums import CollisionPolicy

logger = logging.getLogger(__name__)

ROOT_MARKERS = ("pyproject.toml", ".git")


@dataclass
class PipelineConfig:
    """Normalization behaviour."""
    collision_policy: CollisionPolicy = CollisionPolicy.KEEP_FIRST
    display_locale: str = "zh"
    tables_file: Optional[Path] = None

    def __post_init__(self):
        if not self.display_locale or not self.display_locale.isalpha():
            raise ValueError(f"Display locale must be alphabetic, got '{self.display_locale}'")
        if self.tables_file is not None and not self.tables_file.exists():
            raise ValueError(f"Tables file not found: {self.tables_file}")


@dataclass
class OutputConfig:
    """Exporter settings."""
    output_dir: Path = Path("output")
    indent: int = 2

    def __post_init__(self):
        if self.indent < 0:
            raise ValueError(f"Indent must be non-negative, got {self.indent}")


class ConfigurationError(Exception):
    """Raised when configuration is invalid or incomplete."""
    pass


class Config:
    """
    Settings for one ne2json run.

    Sources, highest precedence first:
    1. Variables already set in the process environment
    2. An explicit env file, or else .env.{ENVIRONMENT} then .env in the project root

    Example:
        config = Config()
        config = Config(env_file=Path("ci.env"))
    """

    def __init__(self,
                 environment: Optional[str] = None,
                 env_file: Optional[Path] = None):
        """
        Args:
            environment: Name selecting .env.{environment} (default: $ENVIRONMENT or development)
            env_file: Explicit env file; disables the project-root lookup
        """
        self.environment = environment or os.getenv("ENVIRONMENT", "development")
        self.project_root = self._find_project_root()
        self.loaded_env_files = self._load_env_files(env_file)

        self.pipeline = self._read_pipeline_config()
        self.output = self._read_output_config()

    @staticmethod
    def _find_project_root() -> Path:
        for parent in Path(__file__).resolve().parents:
            if any((parent / marker).exists() for marker in ROOT_MARKERS):
                return parent
        return Path.cwd()

    def _load_env_files(self, env_file: Optional[Path]) -> list[Path]:
        if env_file is not None:
            if not env_file.exists():
                raise ConfigurationError(f"Specified env file not found: {env_file}")
            candidates = [env_file]
        else:
            candidates = [
                self.project_root / f".env.{self.environment}",
                self.project_root / ".env",
            ]

        loaded = [path for path in candidates if path.exists()]
        for path in loaded:
            load_dotenv(path)
            logger.info(f"Loaded settings from {path}")
        if not loaded:
            logger.debug("No .env files found, using process environment only")
        return loaded

    def _read_pipeline_config(self) -> PipelineConfig:
        policy = os.getenv("NE2JSON_COLLISION_POLICY", CollisionPolicy.KEEP_FIRST.value)
        tables_file = os.getenv("NE2JSON_TABLES_FILE")
        try:
            return PipelineConfig(
                collision_policy=CollisionPolicy(policy.strip().lower()),
                display_locale=os.getenv("NE2JSON_DISPLAY_LOCALE", "zh").strip(),
                tables_file=Path(tables_file) if tables_file else None,
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid pipeline configuration: {e}") from e

    def _read_output_config(self) -> OutputConfig:
        try:
            return OutputConfig(
                output_dir=Path(os.getenv("NE2JSON_OUTPUT_DIR", "output")),
                indent=int(os.getenv("NE2JSON_OUTPUT_INDENT", "2")),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid output configuration: {e}") from e

    def get_output_settings(self) -> dict[str, Any]:
        """Keyword arguments for Exporter; indent 0 means compact (None)."""
        return {
            'out_dir': self.output.output_dir,
            'indent': self.output.indent or None,
        }

    def __repr__(self) -> str:
        return (
            f"Config(environment={self.environment}, "
            f"collision_policy={self.pipeline.collision_policy.value}, "
            f"output_dir={self.output.output_dir})"
        )
