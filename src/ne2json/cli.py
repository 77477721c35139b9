import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from dotenv import load_dotenv

# Load environment variables BEFORE importing local modules that use them
load_dotenv()

from .config.settings import ConfigurationError
from .config_loader import load_config
from .domain.enums import CollisionPolicy, ExportFormat
from .pipeline.export import Exporter
from .pipeline.source import FeatureCollectionSource
from .pipeline.stats import country_statistics
from .pipeline.transform import Transformer
from .types import PipelineError
from .utils import setup_logging

app = typer.Typer(help="Natural Earth countries: Filter -> Normalize -> Summarize -> Export")


def build_transformer(
    tables_file: Optional[str],
    collision_policy: Optional[CollisionPolicy],
    locale: Optional[str],
    env_file: Optional[str] = None,
):
    """
    Load configuration and construct a Transformer.

    CLI options override the environment settings.

    Returns:
        Tuple of (config, transformer)
    """
    config, tables = load_config(tables_file=tables_file, env_file=env_file)
    transformer = Transformer(
        tables,
        collision_policy=collision_policy or config.pipeline.collision_policy,
        display_locale=locale or config.pipeline.display_locale,
    )
    return config, transformer


def read_collection(input_path: str) -> dict:
    return FeatureCollectionSource.from_path(Path(input_path)).read()


def echo_breakdown(title: str, counts: dict[str, int]) -> None:
    typer.echo(f"\n{title}:")
    for label, count in counts.items():
        typer.echo(f"   {label}: {count}")


@app.command("process")
def process_command(
    input_path: Annotated[str, typer.Argument(help="Path to a GeoJSON FeatureCollection of country boundaries")],
    output_dir: Annotated[Optional[str], typer.Option("--output-dir", "-o", help="Output directory (default: NE2JSON_OUTPUT_DIR or ./output)")] = None,
    format: Annotated[ExportFormat, typer.Option("--format", "-f", help="Export format: json, geojson, gpkg")] = ExportFormat.JSON,
    tables: Annotated[Optional[str], typer.Option("--tables", "-t", help="YAML file extending the country tables")] = None,
    collision_policy: Annotated[Optional[CollisionPolicy], typer.Option("--collision-policy", help="Duplicate ISO code handling: reject | log | keep-first")] = None,
    locale: Annotated[Optional[str], typer.Option("--locale", help="Display name locale (reads NAME_<LOCALE>)")] = None,
    env_file: Annotated[Optional[str], typer.Option("--env-file", help="Explicit .env file")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable detailed logging output")] = False,
    log_to_file: Annotated[bool, typer.Option("--log-to-file", help="Create timestamped log files")] = False,
):
    """
    Filter sovereign states, normalize them and write the records.

    Examples:
        ne2json process ne_10m_admin_0_countries.geojson
        ne2json process countries.geojson -f gpkg -o build --collision-policy reject
    """
    log_file = setup_logging(verbose, "process", log_to_file)
    if log_file:
        typer.echo(f"Logging to: {log_file}")

    try:
        config, transformer = build_transformer(tables, collision_policy, locale, env_file)
        result = transformer.run(read_collection(input_path))

        settings = config.get_output_settings()
        if output_dir:
            settings['out_dir'] = Path(output_dir)
        paths = Exporter(**settings).write(result.records, format)

    except (ConfigurationError, PipelineError, FileNotFoundError) as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)
    except Exception as e:
        logging.error(f"Processing failed: {e}")
        if verbose:
            import traceback
            logging.error(f"Full traceback: {traceback.format_exc()}")
        raise typer.Exit(1)

    typer.echo(f"Kept {len(result.records)} of {result.total_features} features")
    for reason, count in result.drop_counts().items():
        typer.echo(f"   dropped ({reason}): {count}")
    for path in paths:
        typer.echo(f"Wrote: {path}")


@app.command("stats")
def stats_command(
    input_path: Annotated[str, typer.Argument(help="Path to a GeoJSON FeatureCollection of country boundaries")],
    tables: Annotated[Optional[str], typer.Option("--tables", "-t", help="YAML file extending the country tables")] = None,
    collision_policy: Annotated[Optional[CollisionPolicy], typer.Option("--collision-policy", help="Duplicate ISO code handling: reject | log | keep-first")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable detailed logging output")] = False,
):
    """
    Print country totals by continent and region.

    Examples:
        ne2json stats ne_10m_admin_0_countries.geojson
    """
    setup_logging(verbose)

    try:
        _, transformer = build_transformer(tables, collision_policy, None)
        result = transformer.run(read_collection(input_path))
    except (ConfigurationError, PipelineError, FileNotFoundError) as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    stats = country_statistics(result.records)
    typer.echo("Country Statistics")
    typer.echo("=" * 50)
    typer.echo(f"Total countries: {stats['total']}")
    echo_breakdown("By continent", stats['by_continent'])
    echo_breakdown("By region", stats['by_region'])


@app.command("classify")
def classify_command(
    input_path: Annotated[str, typer.Argument(help="Path to a GeoJSON FeatureCollection of country boundaries")],
    tables: Annotated[Optional[str], typer.Option("--tables", "-t", help="YAML file extending the country tables")] = None,
    dropped_only: Annotated[bool, typer.Option("--dropped-only", help="Only list features that are filtered out")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable detailed logging output")] = False,
):
    """
    List the sovereignty verdict of every feature.

    Useful to tell features with a missing or wrong code apart from named
    territory exclusions.

    Examples:
        ne2json classify countries.geojson --dropped-only
    """
    setup_logging(verbose)

    try:
        _, transformer = build_transformer(tables, None, None)
        verdicts = transformer.classify_all(read_collection(input_path))
    except (ConfigurationError, PipelineError, FileNotFoundError) as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    shown = 0
    for verdict in verdicts:
        if dropped_only and verdict.kept:
            continue
        status = "kept" if verdict.kept else verdict.reason.value
        typer.echo(f"{verdict.feature_index:>4}  {verdict.iso_code or '--':<4} {verdict.name or '(unnamed)':<40} {status}")
        shown += 1

    kept = sum(1 for v in verdicts if v.kept)
    typer.echo(f"\n{kept} kept, {len(verdicts) - kept} dropped, {shown} listed")


@app.command("version")
def version():
    """Display version information."""
    from . import __version__
    typer.echo(f"ne2json version: {__version__}")


if __name__ == "__main__":
    app()
