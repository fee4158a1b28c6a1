# logico2/road/heuristic.py
# -*- coding: utf-8 -*-
"""
Heuristic route estimate (last tier, never fails)
=================================================

Purpose
-------
When no routing provider answers, approximate the road route between two
points from great-circle geometry plus a handful of national hub cities.

Public API
----------
- haversine_m(a, b) -> float
- HUB_CITIES
- select_waypoints(start, end, hubs=HUB_CITIES, max_waypoints=2) -> list[HubCity]
- estimate_route(start, end) -> RouteResult   (source="heuristic")

Method
------
1. direct = haversine(start, end)
2. A hub qualifies when  d(start, hub) + d(hub, end) < 1.5 × direct
   and  d(start, hub) > 0.1 × direct  (both strict).
3. Qualifying hubs sorted by distance from start; the nearest two are kept.
4. distance = sum of path segments × 1.3 road factor
5. duration = 45 s per km of that distance
6. geometry = start, waypoints..., end

Notes
-----
- The destination city itself can qualify as a waypoint (d(hub, end) = 0),
  so a trip between two hubs yields a 3-point path.
- The result always has ≤ 4 points; it is flagged as estimated whenever it
  has ≤ 3.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from logico2.core.models import Coordinates, RouteResult
from logico2.core.types import HasLatLon
from logico2.infra.logging import get_logger

_log = get_logger(__name__)


EARTH_RADIUS_M: float = 6_371_000.0
ROAD_FACTOR: float = 1.3
SECONDS_PER_KM: float = 45.0          # ~80 km/h average
DETOUR_LIMIT: float = 1.5
MIN_HUB_OFFSET: float = 0.1
MAX_WAYPOINTS: int = 2


@dataclass(frozen=True)
class HubCity:
    name: str
    lat: float
    lon: float

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(lat=self.lat, lon=self.lon)


HUB_CITIES: Tuple[HubCity, ...] = (
      HubCity("São Paulo", -23.5505, -46.6333)
    , HubCity("Rio de Janeiro", -22.9068, -43.1729)
    , HubCity("Belo Horizonte", -19.9167, -43.9345)
    , HubCity("Brasília", -15.7942, -47.8822)
    , HubCity("Salvador", -12.9714, -38.5014)
    , HubCity("Curitiba", -25.4284, -49.2733)
    , HubCity("Porto Alegre", -30.0346, -51.2177)
    , HubCity("Recife", -8.0476, -34.8770)
    , HubCity("Fortaleza", -3.7172, -38.5433)
    , HubCity("Goiânia", -16.6869, -49.2648)
)


# ────────────────────────────────────────────────────────────────────────────────
# Geometry
# ────────────────────────────────────────────────────────────────────────────────

def haversine_m(a: HasLatLon, b: HasLatLon) -> float:
    """
    Great-circle distance in meters (spherical Earth, R = 6,371 km).
    """
    p1, p2 = math.radians(a.lat), math.radians(b.lat)
    dphi = math.radians(b.lat - a.lat)
    dlmb = math.radians(b.lon - a.lon)
    h = math.sin(dphi / 2) ** 2 + math.cos(p1) * math.cos(p2) * math.sin(dlmb / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_M * c


def path_length_m(points: Sequence[HasLatLon]) -> float:
    return sum(haversine_m(p, q) for p, q in zip(points, points[1:]))


# ────────────────────────────────────────────────────────────────────────────────
# Waypoints
# ────────────────────────────────────────────────────────────────────────────────

def select_waypoints(
      start: HasLatLon
    , end: HasLatLon
    , hubs: Sequence[HubCity] = HUB_CITIES
    , max_waypoints: int = MAX_WAYPOINTS
) -> List[HubCity]:
    """
    Hubs that lie roughly between start and end, nearest to start first.
    """
    direct = haversine_m(start, end)
    scored: List[Tuple[float, HubCity]] = []
    for hub in hubs:
        from_start = haversine_m(start, hub)
        via = from_start + haversine_m(hub, end)
        if via < direct * DETOUR_LIMIT and from_start > direct * MIN_HUB_OFFSET:
            scored.append((from_start, hub))

    scored.sort(key=lambda t: t[0])
    chosen = [hub for _, hub in scored[:max_waypoints]]
    _log.debug(
        "select_waypoints: direct=%.0f m qualifying=%s chosen=%s",
        direct, len(scored), [h.name for h in chosen],
    )
    return chosen


def estimate_route(start: Coordinates, end: Coordinates) -> RouteResult:
    """
    Deterministic route estimate; pure and infallible for valid coordinates.
    """
    waypoints = select_waypoints(start, end)
    path: List[Coordinates] = [start, *(h.coordinates for h in waypoints), end]

    distance_m = path_length_m(path) * ROAD_FACTOR
    duration_s = (distance_m / 1000.0) * SECONDS_PER_KM

    route = RouteResult.from_path(
          distance_meters=distance_m
        , duration_seconds=duration_s
        , geometry=path
        , source="heuristic"
        , is_estimated=True
    )
    _log.info(
        "estimate_route: heuristic dist=%.1f km dur=%.0f s via=%s",
        distance_m / 1000.0, duration_s, [h.name for h in waypoints] or "-",
    )
    return route


__all__ = [
      "EARTH_RADIUS_M"
    , "HUB_CITIES"
    , "HubCity"
    , "ROAD_FACTOR"
    , "SECONDS_PER_KM"
    , "estimate_route"
    , "haversine_m"
    , "select_waypoints"
]
