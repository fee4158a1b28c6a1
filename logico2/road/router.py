# logico2/road/router.py
# -*- coding: utf-8 -*-

"""
Road route resolution between two points.

Tiers, strictly in order (see logico2.road.chain):
    1. ORS directions          (primary, needs ORS_API_KEY)
    2. OSRM route              (community engine)
    3. heuristic estimate      (never fails)

Public API
----------
- calculate_route(start, end, *, providers=None, timeout_s=None) -> RouteResult
- route_between(origin, destination, ...) -> RoutePlan
    geocodes both sides (addresses or coordinates), then calculate_route.

Once both coordinates are known routing cannot fail: at worst the result is
the heuristic estimate, flagged `is_estimated`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from logico2.addressing.resolver import geocode_address
from logico2.core.models import Coordinates, GeoPoint, RouteResult
from logico2.core.types import HasLatLon
from logico2.infra.logging import get_logger
from .chain import ResilienceChain, Tier
from .heuristic import estimate_route
from .providers import ProviderSet, get_default_providers

_log = get_logger(__name__)


@dataclass(frozen=True)
class RoutePlan:
    origin: GeoPoint
    destination: GeoPoint
    route: RouteResult

    def to_dict(self, *, include_geometry: bool = False) -> Dict[str, Any]:
        return {
              "origin": {"label": self.origin.label, "lat": self.origin.lat, "lon": self.origin.lon, "source": self.origin.source}
            , "destination": {"label": self.destination.label, "lat": self.destination.lat, "lon": self.destination.lon, "source": self.destination.source}
            , "route": self.route.to_dict(include_geometry=include_geometry)
        }


def _as_coordinates(p: HasLatLon) -> Coordinates:
    if isinstance(p, Coordinates):
        return p
    return Coordinates(lat=float(p.lat), lon=float(p.lon))


def _route_chain(providers: ProviderSet, timeout_s: Optional[float]) -> ResilienceChain[RouteResult]:
    return ResilienceChain(
          "route"
        , tiers=[
              Tier("ors", providers.primary.route) if providers.primary is not None else None
            , Tier("osrm", providers.router.route) if providers.router is not None else None
        ]
        , default=Tier("heuristic", estimate_route)
        , timeout_s=timeout_s
    )


async def calculate_route(
      start: HasLatLon
    , end: HasLatLon
    , *
    , providers: Optional[ProviderSet] = None
    , timeout_s: Optional[float] = None
) -> RouteResult:
    """
    Route between two known points. Never raises for valid coordinates.
    """
    a = _as_coordinates(start)
    b = _as_coordinates(end)
    chain = _route_chain(providers or get_default_providers(), timeout_s)
    _log.info(
        "calculate_route: (%.5f, %.5f) → (%.5f, %.5f) tiers=%s",
        a.lat, a.lon, b.lat, b.lon, chain.names,
    )
    route = await chain.run(a, b)
    _log.info(
        "calculate_route: %s dist=%.1f km dur=%.0f s points=%s estimated=%s",
        route.source, route.distance_meters / 1000.0, route.duration_seconds,
        len(route.geometry), route.is_estimated,
    )
    return route


async def route_between(
      origin: Any
    , destination: Any
    , *
    , providers: Optional[ProviderSet] = None
    , timeout_s: Optional[float] = None
) -> RoutePlan:
    """
    Geocode origin then destination (sequentially), then route.

    Raises
    ------
    AddressNotFound
        One side could not be geocoded by any tier.
    """
    provs = providers or get_default_providers()
    o = await geocode_address(origin, providers=provs, timeout_s=timeout_s)
    d = await geocode_address(destination, providers=provs, timeout_s=timeout_s)
    route = await calculate_route(o, d, providers=provs, timeout_s=timeout_s)
    return RoutePlan(origin=o, destination=d, route=route)


__all__ = ["RoutePlan", "calculate_route", "route_between"]
