# logico2/addressing/resolver.py
# -*- coding: utf-8 -*-
"""
High-level address / coordinate resolver.

Produces GeoPoint objects from:
- GeoPoint / Coordinates / anything with lat & lon
- (lat, lon) tuples and {"lat", "lon"} dicts
- "lat,lon" strings
- free text (geocoded: ORS → Nominatim)

and address suggestions for partial text (ORS autocomplete → Nominatim).

Coordinates never reach a provider. Free text goes through the geocoding
resilience chain; when every tier fails the caller gets AddressNotFound.
Suggestions never raise: total failure is an empty list.
"""

from __future__ import annotations

from typing import Any, List, Optional

from logico2.core.config import get_routing_defaults
from logico2.core.models import Coordinates, GeoPoint, InvalidInput
from logico2.core.types import HasLatLon
from logico2.infra.logging import get_logger
from logico2.road.chain import ResilienceChain, Tier
from logico2.road.ors_common import _short, AddressNotFound, ProviderUnavailable
from logico2.road.providers import ProviderSet, get_default_providers

from logico2.addressing.coords import format_latlon, parse_latlon_str

_log = get_logger(__name__)


# ------------------------------------------------------------------------------
# Small helpers
# ------------------------------------------------------------------------------

def _make_point(lat: float, lon: float, label: Optional[str] = None) -> GeoPoint:
    coords = Coordinates(lat=float(lat), lon=float(lon))
    return GeoPoint(
          lat=coords.lat
        , lon=coords.lon
        , label=label or format_latlon(coords.lat, coords.lon)
        , source="input"
    )


def coerce_point(value: Any) -> Optional[GeoPoint]:
    """
    GeoPoint for inputs that already carry coordinates, None for free text.

    Raises
    ------
    InvalidInput
        Coordinates out of range.
    TypeError
        Unsupported input type.
    """
    if isinstance(value, GeoPoint):
        return value

    if isinstance(value, HasLatLon):
        return _make_point(value.lat, value.lon)

    if isinstance(value, (list, tuple)) and len(value) == 2:
        return _make_point(float(value[0]), float(value[1]))

    if isinstance(value, dict) and {"lat", "lon"}.issubset(value):
        return _make_point(float(value["lat"]), float(value["lon"]), value.get("label"))

    if isinstance(value, str):
        latlon = parse_latlon_str(value)
        if latlon:
            return _make_point(*latlon)
        return None

    raise TypeError(
        f"Unsupported point type: {type(value).__name__}. "
        f"Use str, GeoPoint, Coordinates, dict, tuple or list."
    )


def _geocode_chain(providers: ProviderSet, timeout_s: Optional[float]) -> ResilienceChain[GeoPoint]:
    return ResilienceChain(
          "geocode"
        , tiers=[
              Tier("ors", providers.primary.geocode) if providers.primary is not None else None
            , Tier("nominatim", providers.geocoder.geocode) if providers.geocoder is not None else None
        ]
        , timeout_s=timeout_s
    )


def _suggest_chain(
      providers: ProviderSet
    , limit: int
    , timeout_s: Optional[float]
) -> ResilienceChain[List[str]]:
    def _bind(provider):
        return lambda text: provider.suggest(text, limit)

    return ResilienceChain(
          "suggest"
        , tiers=[
              Tier("ors", _bind(providers.primary)) if providers.primary is not None else None
            , Tier("nominatim", _bind(providers.geocoder)) if providers.geocoder is not None else None
        ]
        , timeout_s=timeout_s
    )


# ------------------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------------------

async def geocode_address(
      value: Any
    , *
    , providers: Optional[ProviderSet] = None
    , timeout_s: Optional[float] = None
) -> GeoPoint:
    """
    Resolve any accepted location format to a GeoPoint.

    Raises
    ------
    AddressNotFound
        Blank input, or every geocoding tier failed.
    InvalidInput
        Coordinates out of range.
    """
    if isinstance(value, str) and not value.strip():
        raise AddressNotFound(value, "Endereço vazio.")

    try:
        point = coerce_point(value)
    except InvalidInput:
        _log.warning("geocode_address: coordinates out of range: %s", _short(value))
        raise
    if point is not None:
        _log.debug("geocode_address: %s is already a coordinate", _short(value))
        return point

    text = str(value).strip()
    chain = _geocode_chain(providers or get_default_providers(), timeout_s)
    try:
        point = await chain.run(text)
    except ProviderUnavailable as exc:
        _log.warning("geocode_address: all tiers failed for %s (%s)", _short(text), exc)
        raise AddressNotFound(text) from exc

    _log.info(
        "geocode_address: %s → (%.6f, %.6f) via %s",
        _short(text), point.lat, point.lon, point.source,
    )
    return point


async def search_addresses(
      query: str
    , *
    , providers: Optional[ProviderSet] = None
    , limit: Optional[int] = None
    , timeout_s: Optional[float] = None
) -> List[str]:
    """
    Up to `limit` (default 5) address labels for a partial query.
    Short queries and total provider failure both give []. Never raises.
    """
    defaults = get_routing_defaults()
    max_n = int(limit or defaults.max_suggestions)
    text = (query or "").strip()
    if len(text) < defaults.suggestion_min_chars:
        return []

    chain = _suggest_chain(providers or get_default_providers(), max_n, timeout_s)
    try:
        labels = await chain.run(text)
    except ProviderUnavailable as exc:
        _log.warning("search_addresses: no suggestions for %s (%s)", _short(text), exc)
        return []

    return list(labels)[:max_n]


__all__ = ["coerce_point", "geocode_address", "search_addresses"]
