"""
JSON files on disk.

The build reads GeoJSON sources and the curated schedule file and writes
the merged dataset. Reading never crashes the application: a missing or
broken file yields the caller's default instead.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List

from hoopfinder.config import DATASET_PATH
from hoopfinder.model import Location, locations_from_payload


logger = logging.getLogger(__name__)


def load_json(path: str | Path, default: Any = None) -> Any:
    """
    Load JSON from a file, or return `default` if it is missing or invalid.
    """
    p = Path(path)
    try:
        return json.loads(p.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return default
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Could not read %s: %s", p, exc)
        return default


def save_json(data: Any, path: str | Path) -> None:
    """
    Write JSON (UTF-8, indented). Creates parent directories if needed.
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


def load_locations(path: str | Path | None = None) -> List[Location]:
    """
    Load the merged dataset and return its locations.

    Returns an empty list if the dataset has not been built yet.
    """
    dataset_path = Path(path) if path is not None else DATASET_PATH
    return locations_from_payload(load_json(dataset_path, default={}))
