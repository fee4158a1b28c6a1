# logico2/road/ors_mixins.py
# -*- coding: utf-8 -*-
"""
Reusable mixins for the ORS HTTP client:
- GeocodingMixin: Brazil-restricted search and autocomplete
- RoutingMixin: GeoJSON directions between two coordinates

Expectations for the concrete client class that inherits these mixins:
- Attributes:
    self.cfg                 : ProviderConfig (see logico2.road.ors_common)
- Methods:
    self._get(path, params=None)   -> dict
    self._post(path, json=None)    -> dict

Notes
-----
• Inputs are logged sanitized (_short), outputs as summaries.
• Empty results raise ProviderUnavailable so the resilience chain falls
  through to the next tier.
"""

from __future__ import annotations

from typing import Any as _Any, List as _List, Sequence as _Sequence

from logico2.addressing.coords import filter_hits, hit_labels, hit_to_point
from logico2.core.models import Coordinates, GeoPoint, RouteResult
from logico2.infra.logging import get_logger
from .ors_common import _short, ProviderUnavailable

_log = get_logger(__name__)


def linestring_to_path(geometry: _Any) -> _List[Coordinates]:
    """
    GeoJSON LineString (dict or bare coordinate list) → [Coordinates, ...].
    Malformed vertices are skipped.
    """
    if isinstance(geometry, dict):
        coords = geometry.get("coordinates") or []
    elif isinstance(geometry, list):
        coords = geometry
    else:
        coords = []

    path: _List[Coordinates] = []
    for pair in coords:
        if not isinstance(pair, (list, tuple)) or len(pair) < 2:
            continue
        try:
            path.append(Coordinates.from_lonlat(pair))
        except (TypeError, ValueError):
            continue
    return path


def build_route(
      *
    , distance_meters: _Any
    , duration_seconds: _Any
    , geometry: _Any
    , start: Coordinates
    , end: Coordinates
    , source: str
) -> RouteResult:
    """
    RouteResult from provider fields. A missing polyline degrades to the
    straight segment start→end (and is therefore flagged as estimated).
    """
    path: _Sequence[Coordinates] = linestring_to_path(geometry)
    if len(path) < 2:
        _log.warning("%s: route without usable geometry; using endpoints only", source)
        path = (start, end)
    return RouteResult.from_path(
          distance_meters=float(distance_meters or 0.0)
        , duration_seconds=float(duration_seconds or 0.0)
        , geometry=path
        , source=source
    )


# ────────────────────────────────────────────────────────────────────────────────
# Geocoding
# ────────────────────────────────────────────────────────────────────────────────

class GeocodingMixin:
    """
    Pelias-style geocoding wrappers over ORS endpoints.

    Requires concrete client to provide:
      - self._get(...)
      - self.cfg.country_iso3
    """

    def geocode_search(self, text: str) -> GeoPoint:
        """
        Best match for `text` inside the configured country.

        Raises
        ------
        ProviderUnavailable
            On HTTP failure or when no usable feature comes back.
        """
        country = self.cfg.country_iso3
        _log.info("GEOCODE ors text=%s country=%s", _short(text), country)

        raw = self._get(
            "/geocode/search",
            {
                "text": text,
                "size": 1,
                "boundary.country": country,
            },
        )

        hits = filter_hits(raw)
        _log.debug("GEOCODE ors got %s usable features", len(hits))
        if not hits:
            raise ProviderUnavailable(f"ors: no geocode results for {text!r}")
        return hit_to_point(hits[0], source="ors")

    def geocode_autocomplete(self, text: str, size: int = 5) -> _List[str]:
        """
        Up to `size` labels for a partial address.
        """
        country = self.cfg.country_iso3
        _log.debug("AUTOCOMPLETE ors text=%s size=%s", _short(text), size)
        raw = self._get(
            "/geocode/autocomplete",
            {
                "text": text,
                "size": size,
                "boundary.country": country,
            },
        )
        labels = hit_labels(raw, size)
        if not labels:
            raise ProviderUnavailable(f"ors: no suggestions for {text!r}")
        return labels

    # provider protocol
    def geocode(self, text: str) -> GeoPoint:
        return self.geocode_search(text)

    def suggest(self, text: str, limit: int = 5) -> _List[str]:
        return self.geocode_autocomplete(text, size=limit)


# ────────────────────────────────────────────────────────────────────────────────
# Routing
# ────────────────────────────────────────────────────────────────────────────────

class RoutingMixin:
    """
    Directions helper.

    Requires concrete client to provide:
      - self._post(...)
      - self.cfg.profile
    """

    def directions(
        self,
        start: Coordinates,
        end: Coordinates,
        profile: str | None = None,
    ) -> RouteResult:
        """
        One POST to /v2/directions/{profile}/geojson.

        Returns
        -------
        RouteResult with source="ors".

        Raises
        ------
        ProviderUnavailable / NoRoute / RateLimited
        """
        prof = (profile or self.cfg.profile)
        body = {
            "coordinates": [start.as_lonlat(), end.as_lonlat()],
            "instructions": False,
            "geometry": True,
        }
        _log.info("ROUTE ors %s coords=%s", prof, body["coordinates"])
        data = self._post(f"/v2/directions/{prof}/geojson", json=body)

        feats = data.get("features") if isinstance(data, dict) else None
        if not feats:
            raise ProviderUnavailable("ors: directions response has no features")

        feat = feats[0] or {}
        summ = (feat.get("properties") or {}).get("summary") or {}
        route = build_route(
              distance_meters=summ.get("distance")
            , duration_seconds=summ.get("duration")
            , geometry=feat.get("geometry")
            , start=start
            , end=end
            , source="ors"
        )
        _log.info(
            "ROUTE ors ok %s dist=%.1fm dur=%.0fs points=%s",
            prof,
            route.distance_meters,
            route.duration_seconds,
            len(route.geometry),
        )
        return route

    # provider protocol
    def route(self, start: Coordinates, end: Coordinates) -> RouteResult:
        return self.directions(start, end)
