from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Tuple

import requests

from hoopfinder.config import SOURCES_DIR
from hoopfinder.storage import save_json


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------

ARCGIS_BASE = "https://services.arcgis.com/ZOyb2t4B0UYuYNYH/arcgis/rest/services"
QUERY = "query?where=1%3D1&outFields=*&f=geojson&outSR=4326"

COURTS_URL = f"{ARCGIS_BASE}/Basketball_Court_Points/FeatureServer/0/{QUERY}"
CENTERS_URL = f"{ARCGIS_BASE}/Community_Centers/FeatureServer/0/{QUERY}"

# (url, file name, label)
SOURCES: Tuple[Tuple[str, str, str], ...] = (
    (COURTS_URL, "courts.geojson", "Basketball Court Points"),
    (CENTERS_URL, "centers.geojson", "Community Centers"),
)


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


def fetch_geojson(url: str, timeout: float = 30) -> Dict[str, Any]:
    """
    Download one GeoJSON feature collection.

    HTTP errors are raised to the caller; nothing is retried here.
    """
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()
    return resp.json()


def fetch_sources(out_dir: Path = SOURCES_DIR, timeout: float = 30) -> Dict[str, int]:
    """
    Fetch courts and community centers and cache them as GeoJSON files.

    Returns a mapping file name -> number of features.
    """
    counts: Dict[str, int] = {}

    for url, filename, label in SOURCES:
        print(f"Fetching {label}...")
        data = fetch_geojson(url, timeout=timeout)

        count = len(data.get("features") or []) if isinstance(data, dict) else 0
        print(f"  Got {count} features")

        out_file = out_dir / filename
        save_json(data, out_file)
        print(f"  Saved to {out_file}")

        counts[filename] = count

    return counts
