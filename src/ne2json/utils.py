"""
Shared helpers: logging setup, run timing and document loading.
"""

import functools
import json
import logging
import sys
import time
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOGS_DIR = Path("logs")


def setup_logging(
    verbose: bool,
    run_name: Optional[str] = None,
    enable_file_logging: bool = False
) -> Optional[Path]:
    """
    Route log records to stdout and, when requested, to logs/<run>_<ts>.log.

    Args:
        verbose: DEBUG level instead of INFO
        run_name: Command name, used as the log file prefix
        enable_file_logging: Also write a timestamped log file

    Returns:
        Path of the log file, if one was created
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    log_file = None

    if enable_file_logging and run_name:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = ensure_directory(LOGS_DIR) / f"{run_name}_{stamp}.log"
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )
    return log_file


def timer(func: Callable) -> Callable:
    """Log how long the wrapped call took."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        started = time.perf_counter()
        result = func(*args, **kwargs)
        logger.info(f"{func.__qualname__} finished in {time.perf_counter() - started:.2f}s")
        return result
    return wrapper


def ensure_directory(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def _read_document(file_path: Path, kind: str, parse: Callable[[Any], Any], errors: tuple) -> Any:
    if not file_path.exists():
        raise FileNotFoundError(f"{kind} file not found: {file_path}")
    with open(file_path, encoding="utf-8") as f:
        try:
            return parse(f)
        except errors as e:
            raise ValueError(f"Invalid {kind} in {file_path}: {e}") from e


def load_yaml_file(file_path: Path) -> Any:
    """
    Parse a YAML file; an empty file yields {}.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid YAML
    """
    return _read_document(file_path, "YAML", yaml.safe_load, (yaml.YAMLError,)) or {}


def load_json_file(file_path: Path) -> Any:
    """
    Parse a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid JSON
    """
    return _read_document(file_path, "JSON", json.load, (json.JSONDecodeError, UnicodeDecodeError))
