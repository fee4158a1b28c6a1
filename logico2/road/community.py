# logico2/road/community.py
# -*- coding: utf-8 -*-
"""
Secondary tier: community-run providers, no API key required.

- NominatimClient: OpenStreetMap geocoding index (search / suggestions)
- OSRMClient: OSRM routing engine (GeoJSON overview)

Both follow the same provider protocol as ORSClient:
    geocode(text) -> GeoPoint
    suggest(text, limit) -> list[str]
    route(start, end) -> RouteResult

Notes
-----
• Nominatim's usage policy asks for an identifying User-Agent and at most
  one request per second; ProviderConfig.for_nominatim() sets both.
• The public OSRM demo server only offers the "driving" profile.
"""

from __future__ import annotations

from typing import Any, List

from logico2.addressing.coords import filter_hits, hit_labels, hit_to_point
from logico2.core.models import Coordinates, GeoPoint, RouteResult
from logico2.infra.logging import get_logger
from .http import JSONHTTPClient
from .ors_common import _short, NoRoute, ProviderConfig, ProviderUnavailable
from .ors_mixins import build_route

_log = get_logger(__name__)


# ────────────────────────────────────────────────────────────────────────────────
# Nominatim
# ────────────────────────────────────────────────────────────────────────────────

class NominatimClient(JSONHTTPClient):

    def __init__(self, cfg: ProviderConfig | None = None, *, session: Any = None) -> None:
        super().__init__(cfg or ProviderConfig.for_nominatim(), session=session)

    def _search(self, text: str, limit: int) -> List[Any]:
        raw = self._get(
            "/search",
            {
                "format": "json",
                "q": text,
                "countrycodes": self.cfg.country.lower(),
                "limit": limit,
            },
        )
        if not isinstance(raw, list):
            raise ProviderUnavailable(f"nominatim: unexpected payload {_short(raw, 120)}")
        return raw

    def geocode(self, text: str) -> GeoPoint:
        """
        Best match for `text`.

        Raises
        ------
        ProviderUnavailable
            On HTTP failure or when nothing usable comes back.
        """
        _log.info("GEOCODE nominatim q=%s", _short(text))
        hits = filter_hits(self._search(text, 1))
        if not hits:
            raise ProviderUnavailable(f"nominatim: no geocode results for {text!r}")
        return hit_to_point(hits[0], source="nominatim")

    def suggest(self, text: str, limit: int = 5) -> List[str]:
        _log.debug("SUGGEST nominatim q=%s limit=%s", _short(text), limit)
        labels = hit_labels(self._search(text, limit), limit)
        if not labels:
            raise ProviderUnavailable(f"nominatim: no suggestions for {text!r}")
        return labels


# ────────────────────────────────────────────────────────────────────────────────
# OSRM
# ────────────────────────────────────────────────────────────────────────────────

class OSRMClient(JSONHTTPClient):

    def __init__(self, cfg: ProviderConfig | None = None, *, session: Any = None) -> None:
        super().__init__(cfg or ProviderConfig.for_osrm(), session=session)

    def route(self, start: Coordinates, end: Coordinates) -> RouteResult:
        """
        GET /route/v1/{profile}/{lon},{lat};{lon},{lat}?overview=full&geometries=geojson

        Raises
        ------
        NoRoute
            OSRM answered with a code other than "Ok" or no routes.
        ProviderUnavailable
            Transport / HTTP failure.
        """
        path = (
            f"/route/v1/{self.cfg.profile}/"
            f"{start.lon},{start.lat};{end.lon},{end.lat}"
        )
        _log.info("ROUTE osrm %s", path)
        data = self._get(path, {"overview": "full", "geometries": "geojson"})

        if not isinstance(data, dict):
            raise ProviderUnavailable("osrm: unexpected payload")
        code = data.get("code", "Ok")
        routes = data.get("routes") or []
        if code != "Ok" or not routes:
            raise NoRoute(f"osrm: code={code} routes={len(routes)}")

        r0 = routes[0] or {}
        route = build_route(
              distance_meters=r0.get("distance")
            , duration_seconds=r0.get("duration")
            , geometry=r0.get("geometry")
            , start=start
            , end=end
            , source="osrm"
        )
        _log.info(
            "ROUTE osrm ok dist=%.1fm dur=%.0fs points=%s",
            route.distance_meters,
            route.duration_seconds,
            len(route.geometry),
        )
        return route


__all__ = ["NominatimClient", "OSRMClient"]
