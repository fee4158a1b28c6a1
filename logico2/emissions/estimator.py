# logico2/emissions/estimator.py
# -*- coding: utf-8 -*-
"""
Road-freight CO2 estimator
==========================

Exposes:
- estimate_emissions(vehicle, operation, cargo) -> EmissionResult
- emission_breakdown(vehicle, operation, cargo) -> EmissionBreakdown
- validate_inputs(vehicle, operation, cargo) -> None (raises InvalidInput)
- impact_level(total_co2_kg) -> ImpactLevel

Model
-----
    total_distance  = distance_km_per_trip × trip_count
    fuel_liters     = total_distance / fuel_efficiency_km_per_l
    ef              = 2.68 kg/L × fuel multiplier
    total_co2_kg    = fuel_liters × ef × age × route × load
    co2_per_tonne_km = total_co2_kg / (weight × total_distance × load%)  (0 when the denominator is 0)

Pure functions: no I/O, no caching, identical inputs give identical floats.
`period` and `cargo_type` are carried for reporting but never enter the
arithmetic.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, List, Optional

from logico2.core.models import (
      CargoProfile
    , EmissionResult
    , InvalidInput
    , OperationProfile
    , VehicleProfile
)
from logico2.core.types import CARGO_TYPES, PERIODS, VEHICLE_CLASSES
from logico2.emissions.factors import (
      EF_DIESEL_CO2_KG_PER_L
    , ROUTE_MULTIPLIERS
    , TREE_CO2_KG_PER_YEAR
    , WATER_CO2_KG_PER_L
    , age_multiplier
    , get_fuel_factor
    , load_multiplier
    , normalise_key
    , route_multiplier
)
from logico2.infra.logging import get_logger

_log = get_logger(__name__)

MIN_MANUFACTURE_YEAR = 1980
MIN_LOAD_FACTOR_PERCENT = 10.0
MAX_LOAD_FACTOR_PERCENT = 100.0


# ────────────────────────────────────────────────────────────────────────────────
# Breakdown
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class EmissionBreakdown:
    """
    Every intermediate value of one estimate, for "details" views and tests.
    """
    total_distance_km: float
    fuel_consumed_liters: float
    emission_factor_kg_per_l: float
    vehicle_age_years: int
    age_multiplier: float
    route_multiplier: float
    load_multiplier: float
    tonne_km: float
    total_co2_kg: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _current_year() -> int:
    return date.today().year


def _numeric(field: str, value: Any, *, integer: bool = False) -> float:
    """float(value), or int for counts/years; blanks and text raise InvalidInput."""
    try:
        num = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{field} must be a number, got {value!r}") from None
    if not math.isfinite(num):
        raise InvalidInput(f"{field} must be a finite number, got {value!r}")
    return int(num) if integer else num


def _require_efficiency(km_per_l: float) -> float:
    eff = _numeric("fuel_efficiency_km_per_l", km_per_l)
    if eff <= 0.0:
        raise InvalidInput(
            f"fuel_efficiency_km_per_l must be a positive number, got {km_per_l!r}"
        )
    return eff


def emission_breakdown(
      vehicle: VehicleProfile
    , operation: OperationProfile
    , cargo: CargoProfile
    , *
    , current_year: Optional[int] = None
) -> EmissionBreakdown:
    """
    Run the model and keep every intermediate value.

    Parameters
    ----------
    current_year : int | None
        Reference year for the age multiplier. Defaults to today's year.

    Raises
    ------
    InvalidInput
        Non-numeric field, non-positive / non-finite fuel efficiency,
        unknown fuel or route key.
    """
    year_ref = int(current_year) if current_year is not None else _current_year()

    efficiency = _require_efficiency(vehicle.fuel_efficiency_km_per_l)
    total_distance = (
        _numeric("distance_km_per_trip", operation.distance_km_per_trip)
        * _numeric("trip_count", operation.trip_count, integer=True)
    )
    fuel_liters = total_distance / efficiency

    fuel = get_fuel_factor(vehicle.fuel_type)
    emission_factor = EF_DIESEL_CO2_KG_PER_L * fuel.multiplier

    age = year_ref - _numeric("manufacture_year", vehicle.manufacture_year, integer=True)
    age_mult = age_multiplier(age)
    route_mult = route_multiplier(operation.route_type)
    load_pct = _numeric("load_factor_percent", cargo.load_factor_percent)
    load_mult = load_multiplier(load_pct)

    total_co2 = fuel_liters * emission_factor * age_mult * route_mult * load_mult
    tonne_km = _numeric("weight_tonnes", cargo.weight_tonnes) * total_distance * (load_pct / 100.0)

    _log.debug(
        "emission_breakdown: dist=%.3f km fuel=%.4f L ef=%.4f age=%s(%.2f) route=%.2f load=%.4f → co2=%.4f kg",
        total_distance, fuel_liters, emission_factor, age, age_mult, route_mult, load_mult, total_co2,
    )

    return EmissionBreakdown(
          total_distance_km=total_distance
        , fuel_consumed_liters=fuel_liters
        , emission_factor_kg_per_l=emission_factor
        , vehicle_age_years=age
        , age_multiplier=age_mult
        , route_multiplier=route_mult
        , load_multiplier=load_mult
        , tonne_km=tonne_km
        , total_co2_kg=total_co2
    )


def estimate_emissions(
      vehicle: VehicleProfile
    , operation: OperationProfile
    , cargo: CargoProfile
    , *
    , current_year: Optional[int] = None
) -> EmissionResult:
    """
    Estimate CO2 and its equivalences for one operation.

    Zero distance, trips, weight or load give zero-valued (guarded) results;
    only a non-positive fuel efficiency is rejected.
    """
    b = emission_breakdown(vehicle, operation, cargo, current_year=current_year)
    total = b.total_co2_kg

    co2_per_tonne_km = total / b.tonne_km if b.tonne_km > 0 else 0.0

    result = EmissionResult(
          total_co2_kg=total
        , trees_equivalent=total / TREE_CO2_KG_PER_YEAR
        , diesel_equivalent_liters=total / EF_DIESEL_CO2_KG_PER_L
        , water_equivalent_liters=total / WATER_CO2_KG_PER_L
        , fuel_consumed_liters=b.fuel_consumed_liters
        , co2_per_tonne_km=co2_per_tonne_km
    )
    _log.info(
        "estimate_emissions: class=%s fuel=%s route=%s → co2=%.2f kg fuel=%.2f L co2/tkm=%.5f",
        vehicle.vehicle_class, vehicle.fuel_type, operation.route_type,
        result.total_co2_kg, result.fuel_consumed_liters, result.co2_per_tonne_km,
    )
    return result


# ────────────────────────────────────────────────────────────────────────────────
# Validation layer (forms / CLIs call this before estimating)
# ────────────────────────────────────────────────────────────────────────────────

def _is_number(v: Any) -> bool:
    try:
        return math.isfinite(float(v))
    except (TypeError, ValueError):
        return False


def validate_inputs(
      vehicle: VehicleProfile
    , operation: OperationProfile
    , cargo: CargoProfile
    , *
    , current_year: Optional[int] = None
) -> None:
    """
    Check every field against the form rules and raise one InvalidInput that
    lists all problems.
    """
    year_ref = int(current_year) if current_year is not None else _current_year()
    problems: List[str] = []

    if normalise_key(vehicle.vehicle_class) not in VEHICLE_CLASSES:
        problems.append(f"vehicle_class must be one of {list(VEHICLE_CLASSES)}")
    if not isinstance(vehicle.manufacture_year, int) or not (
        MIN_MANUFACTURE_YEAR <= vehicle.manufacture_year <= year_ref
    ):
        problems.append(f"manufacture_year must be an integer in [{MIN_MANUFACTURE_YEAR}, {year_ref}]")
    try:
        get_fuel_factor(vehicle.fuel_type)
    except InvalidInput as exc:
        problems.append(str(exc))
    if not _is_number(vehicle.fuel_efficiency_km_per_l) or float(vehicle.fuel_efficiency_km_per_l) <= 0:
        problems.append("fuel_efficiency_km_per_l must be > 0")

    if not _is_number(operation.distance_km_per_trip) or float(operation.distance_km_per_trip) < 0:
        problems.append("distance_km_per_trip must be >= 0")
    if normalise_key(operation.route_type) not in ROUTE_MULTIPLIERS:
        problems.append(f"route_type must be one of {sorted(ROUTE_MULTIPLIERS)}")
    if not isinstance(operation.trip_count, int) or operation.trip_count < 1:
        problems.append("trip_count must be a positive integer")
    if normalise_key(operation.period) not in PERIODS:
        problems.append(f"period must be one of {list(PERIODS)}")

    if not _is_number(cargo.weight_tonnes) or float(cargo.weight_tonnes) < 0:
        problems.append("weight_tonnes must be >= 0")
    if normalise_key(cargo.cargo_type) not in CARGO_TYPES:
        problems.append(f"cargo_type must be one of {list(CARGO_TYPES)}")
    if not _is_number(cargo.load_factor_percent) or not (
        MIN_LOAD_FACTOR_PERCENT <= float(cargo.load_factor_percent) <= MAX_LOAD_FACTOR_PERCENT
    ):
        problems.append(
            f"load_factor_percent must be in [{MIN_LOAD_FACTOR_PERCENT:g}, {MAX_LOAD_FACTOR_PERCENT:g}]"
        )

    if problems:
        _log.warning("validate_inputs: %d problem(s): %s", len(problems), "; ".join(problems))
        raise InvalidInput("Invalid calculator input: " + "; ".join(problems), problems)


# ────────────────────────────────────────────────────────────────────────────────
# Impact level
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ImpactLevel:
    level: str
    color: str
    progress_percent: float


_IMPACT_BRACKETS = (
      (100.0, "Baixo", "green")
    , (500.0, "Moderado", "yellow")
    , (1000.0, "Alto", "orange")
)


def impact_level(total_co2_kg: float) -> ImpactLevel:
    """
    Classify a total: < 100 kg Baixo, < 500 Moderado, < 1000 Alto, else
    Muito Alto. Progress is the share of 1 t, capped at 100%.
    """
    progress = min(float(total_co2_kg) / 1000.0 * 100.0, 100.0)
    for upper, level, color in _IMPACT_BRACKETS:
        if total_co2_kg < upper:
            return ImpactLevel(level=level, color=color, progress_percent=progress)
    return ImpactLevel(level="Muito Alto", color="red", progress_percent=progress)


REDUCTION_TIPS: List[str] = [
      "Otimize rotas para reduzir distâncias e evitar congestionamentos"
    , "Mantenha o veículo em boas condições com manutenção preventiva regular"
    , "Considere a transição para combustíveis alternativos como biodiesel"
    , "Maximize o fator de carga para aumentar a eficiência por tonelada transportada"
    , "Treine motoristas em técnicas de condução econômica (Programa Despoluir da CNT)"
    , "Participe de programas de compensação de carbono reconhecidos no Brasil"
]


__all__ = [
      "EmissionBreakdown"
    , "ImpactLevel"
    , "REDUCTION_TIPS"
    , "emission_breakdown"
    , "estimate_emissions"
    , "impact_level"
    , "validate_inputs"
]
