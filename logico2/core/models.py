# logico2/core/models.py
# -*- coding: utf-8 -*-

"""
Core domain models (pure, frozen dataclasses).

    - VehicleProfile / OperationProfile / CargoProfile: calculator inputs
    - EmissionResult: estimator output
    - Coordinates / GeoPoint: geographic points (bare / labelled)
    - RouteResult: resolved route (distance, duration, path)

No HTTP, no logging configuration, no arithmetic beyond trivial helpers.
Every instance is built per request and never mutated; callers that need
"editing" create a new instance with dataclasses.replace().
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple


class InvalidInput(ValueError):
    """
    Raised when calculator input cannot be used (e.g. zero fuel efficiency,
    unknown category key). `problems` lists every issue found.
    """

    def __init__(self, message: str, problems: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.problems: List[str] = list(problems or [message])


# ────────────────────────────────────────────────────────────────────────────────
# Calculator inputs
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class VehicleProfile:
    """
    Truck description.

    Attributes
    ----------
    vehicle_class : str
        light | medium | heavy | semi | road-train
    manufacture_year : int
    fuel_type : str
        diesel | diesel-b12 | biodiesel
    fuel_efficiency_km_per_l : float
        Must be > 0.
    """

    vehicle_class: str
    manufacture_year: int
    fuel_type: str
    fuel_efficiency_km_per_l: float


@dataclass(frozen=True)
class OperationProfile:
    """
    Transport operation. `period` is informational only.
    """

    distance_km_per_trip: float
    route_type: str
    trip_count: int
    period: str = "month"


@dataclass(frozen=True)
class CargoProfile:
    """
    Cargo carried. `cargo_type` is informational only.
    """

    weight_tonnes: float
    cargo_type: str
    load_factor_percent: float


# ────────────────────────────────────────────────────────────────────────────────
# Calculator output
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class EmissionResult:
    total_co2_kg: float
    trees_equivalent: float
    diesel_equivalent_liters: float
    water_equivalent_liters: float
    fuel_consumed_liters: float
    co2_per_tonne_km: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


# ────────────────────────────────────────────────────────────────────────────────
# Geography
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Coordinates:
    """
    A point in decimal degrees.

    Attributes
    ----------
    lat : float
        Latitude in [-90, 90].
    lon : float
        Longitude in [-180, 180].
    """

    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not (-90.0 <= float(self.lat) <= 90.0):
            raise InvalidInput(f"Latitude out of range: {self.lat}")
        if not (-180.0 <= float(self.lon) <= 180.0):
            raise InvalidInput(f"Longitude out of range: {self.lon}")

    def as_lonlat(self) -> List[float]:
        """[lon, lat] order, as GeoJSON / ORS / OSRM expect."""
        return [float(self.lon), float(self.lat)]

    @classmethod
    def from_lonlat(cls, pair: Sequence[Any]) -> "Coordinates":
        return cls(lat=float(pair[1]), lon=float(pair[0]))


@dataclass(frozen=True)
class GeoPoint:
    """
    A labelled point returned by geocoding.

    Attributes
    ----------
    lat, lon : float
    label : str
        Human-readable label (provider label or "lat,lon").
    source : str
        Which tier produced it: "ors", "nominatim" or "input".
    """

    lat: float
    lon: float
    label: str
    source: str = "input"

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(lat=self.lat, lon=self.lon)


@dataclass(frozen=True)
class RouteResult:
    """
    Route between two points.

    Attributes
    ----------
    distance_meters : float
    duration_seconds : float
    geometry : tuple[Coordinates, ...]
        Ordered path from origin to destination.
    is_estimated : bool
        True whenever the path has 3 or fewer points (no turn-by-turn
        polyline was obtained from a real routing provider) and always
        for heuristic routes.
    source : str
        Tier that produced it: "ors", "osrm" or "heuristic".
    """

    distance_meters: float
    duration_seconds: float
    geometry: Tuple[Coordinates, ...]
    is_estimated: bool
    source: str

    @classmethod
    def from_path(
          cls
        , *
        , distance_meters: float
        , duration_seconds: float
        , geometry: Sequence[Coordinates]
        , source: str
        , is_estimated: bool = False
    ) -> "RouteResult":
        path = tuple(geometry)
        estimated = is_estimated or len(path) <= 3
        return cls(
              distance_meters=max(0.0, float(distance_meters))
            , duration_seconds=max(0.0, float(duration_seconds))
            , geometry=path
            , is_estimated=estimated
            , source=source
        )

    def to_dict(self, *, include_geometry: bool = True) -> Dict[str, Any]:
        out: Dict[str, Any] = {
              "distance_m": self.distance_meters
            , "duration_s": self.duration_seconds
            , "is_estimated": self.is_estimated
            , "source": self.source
            , "n_points": len(self.geometry)
        }
        if include_geometry:
            out["geometry"] = {
                  "type": "LineString"
                , "coordinates": [c.as_lonlat() for c in self.geometry]
            }
        return out
