"""
Country table loading for the ne2json pipeline.

Merges an optional YAML override file over the built-in tables:

    un_members: [XK]
    excluded_territories: [Somaliland]
    sentinel_repairs:
      Kosovo: XK
    continents:
      XK: Europe
    localized_names:
      Kosovo: 科索沃

Every key is optional. The result is a new immutable CountryTables.
"""

from pathlib import Path
from typing import Any, Optional

from .config.countries import CONTINENTS, CountryTables
from .config.settings import Config, ConfigurationError
from .utils import load_yaml_file

LIST_KEYS = ("un_members", "excluded_territories")
MAPPING_KEYS = ("sentinel_repairs", "continents", "localized_names")


def _validate_overrides(overrides: Any, source: Path) -> dict[str, Any]:
    if not isinstance(overrides, dict):
        raise ConfigurationError(f"Tables file {source} must contain a mapping at the top level")

    unknown = set(overrides) - set(LIST_KEYS) - set(MAPPING_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown keys in {source}: {', '.join(sorted(unknown))}")

    for key in LIST_KEYS:
        value = overrides.get(key, [])
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigurationError(f"'{key}' in {source} must be a list of strings")

    for key in MAPPING_KEYS:
        value = overrides.get(key, {})
        if not isinstance(value, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in value.items()
        ):
            raise ConfigurationError(f"'{key}' in {source} must map strings to strings")

    bad_continents = {v for v in overrides.get("continents", {}).values() if v not in CONTINENTS}
    if bad_continents:
        raise ConfigurationError(
            f"Unknown continents in {source}: {', '.join(sorted(bad_continents))}. "
            f"Expected one of: {', '.join(CONTINENTS)}"
        )
    return overrides


def load_country_tables(tables_file: Optional[Path] = None) -> CountryTables:
    """
    Build the country tables for a run.

    Args:
        tables_file: Optional YAML override file

    Returns:
        The shared default tables, or a new CountryTables with overrides merged

    Raises:
        ConfigurationError: If the file is missing, unparsable or malformed
    """
    base = CountryTables.default()
    if tables_file is None:
        return base

    try:
        overrides = load_yaml_file(Path(tables_file))
    except (FileNotFoundError, ValueError) as e:
        raise ConfigurationError(str(e)) from e

    overrides = _validate_overrides(overrides, Path(tables_file))
    try:
        return base.extend(
            un_members=overrides.get("un_members", []),
            excluded_territories=overrides.get("excluded_territories", []),
            sentinel_repairs=overrides.get("sentinel_repairs"),
            continents=overrides.get("continents"),
            localized_names=overrides.get("localized_names"),
        )
    except ValueError as e:
        raise ConfigurationError(f"Invalid tables file {tables_file}: {e}") from e


def load_config(
    tables_file: Optional[str] = None,
    env_file: Optional[str] = None
) -> tuple[Config, CountryTables]:
    """
    Load settings and country tables together.

    Args:
        tables_file: YAML override file; takes precedence over NE2JSON_TABLES_FILE
        env_file: Explicit .env file

    Returns:
        Tuple of (config, tables)
    """
    config = Config(env_file=Path(env_file) if env_file else None)
    path = Path(tables_file) if tables_file else config.pipeline.tables_file
    return config, load_country_tables(path)
