# logico2/addressing/coords.py
# -*- coding: utf-8 -*-

"""
Coordinate / geocoder-hit helpers for the addressing subsystem.

Uses:
- CoordinatePair (from logico2.core.types)
- GeoPoint (built here from normalised hits)

Both geocoding tiers return different shapes:
- ORS / Pelias: GeoJSON features, label in properties.label
- Nominatim: flat items with string "lat"/"lon" and "display_name"
normalize_hit() folds both into {"lat","lon","label","layer"}.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Optional

from logico2.core.models import GeoPoint
from logico2.core.types import CoordinatePair
from logico2.infra.logging import get_logger

_log = get_logger(__name__)


_LATLON_RE = re.compile(r"^\s*([+-]?\d+(?:\.\d+)?)\s*,\s*([+-]?\d+(?:\.\d+)?)\s*$")


# ------------------------------------------------------------------------------
# Parse "lat,lon"
# ------------------------------------------------------------------------------

def parse_latlon_str(text: str) -> Optional[CoordinatePair]:
    """
    Accepts 'lat,lon' (spaces allowed). Returns (lat, lon) or None when the
    text is not a coordinate pair or is out of range.
    """
    if not isinstance(text, str):
        return None

    m = _LATLON_RE.match(text.strip())
    if not m:
        return None

    lat = float(m.group(1))
    lon = float(m.group(2))

    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        return None

    return lat, lon


def format_latlon(lat: float, lon: float) -> str:
    return f"{float(lat):.6f},{float(lon):.6f}"


# ------------------------------------------------------------------------------
# Normalize raw provider hit
# ------------------------------------------------------------------------------

def normalize_hit(raw: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Normalize ORS/Pelias features and Nominatim items to:
        {"lat": float, "lon": float, "label": str|None, "layer": str}
    """
    lat = lon = None
    label = raw.get("label") or raw.get("display_name") or raw.get("name")
    layer = ""

    # Nominatim: flat lat/lon (as strings)
    if "lat" in raw and "lon" in raw:
        layer = str(raw.get("layer") or raw.get("addresstype") or raw.get("type") or "").lower()
        try:
            lat = float(raw["lat"])
            lon = float(raw["lon"])
        except (TypeError, ValueError):
            return None

    else:
        # pelias/geojson
        geom = raw.get("geometry") or {}
        coords = geom.get("coordinates") or []
        props = raw.get("properties") or {}

        if len(coords) == 2:
            try:
                lon = float(coords[0])
                lat = float(coords[1])
            except (TypeError, ValueError):
                return None

        label = label or props.get("label") or props.get("name")
        layer = str(props.get("layer") or raw.get("layer") or "").lower()

    if lat is None or lon is None:
        return None
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        return None

    return {"lat": lat, "lon": lon, "label": label, "layer": layer}


# ------------------------------------------------------------------------------
# Filter hits
# ------------------------------------------------------------------------------

def filter_hits(hits: Any) -> List[Dict[str, Any]]:
    """
    Returns a list of normalized {"lat","lon","label","layer"} after
    dropping malformed items and "country"-layer matches.

    Accepts a list, a GeoJSON FeatureCollection dict, a single hit, or None.
    """
    if hits is None:
        arr: List[Any] = []
    elif isinstance(hits, list):
        arr = hits
    elif isinstance(hits, dict):
        arr = hits.get("features") or [hits]
    else:
        arr = [hits]

    out = []

    for item in arr:
        # decode stray JSON strings
        if isinstance(item, str):
            try:
                item = json.loads(item)
            except ValueError:
                continue

        if not isinstance(item, dict):
            continue

        norm = normalize_hit(item)
        if not norm:
            continue

        if norm["layer"] == "country":
            continue

        out.append(norm)

    if len(out) != len(arr):
        _log.debug("filter_hits: kept %s of %s hits", len(out), len(arr))
    return out


def hit_to_point(h: Dict[str, Any], *, source: str) -> GeoPoint:
    """
    Convert a normalised hit into a GeoPoint; missing labels become "lat,lon".
    """
    lat = float(h["lat"])
    lon = float(h["lon"])
    label = h.get("label") or format_latlon(lat, lon)
    return GeoPoint(lat=lat, lon=lon, label=str(label), source=source)


def hit_labels(hits: Any, limit: int) -> List[str]:
    """Non-empty labels of the first `limit` usable hits, in provider order."""
    labels: List[str] = []
    for h in filter_hits(hits):
        label = h.get("label")
        if label:
            labels.append(str(label))
        if len(labels) >= limit:
            break
    return labels
