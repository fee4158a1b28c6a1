# logico2/emissions/factors.py
# -*- coding: utf-8 -*-
"""
Emission factors and multipliers
================================

Planning-level constants used by the road-freight CO2 estimator. Values are
kept verbatim from the methodology notes shown to users (CNT / Programa
Despoluir references for Brazilian diesel) and are **not** audited inventory
factors.

Public API
----------
- EF_DIESEL_CO2_KG_PER_L
- get_fuel_factor(fuel_type) -> FuelFactor
- route_multiplier(route_type) -> float
- age_multiplier(vehicle_age_years) -> float
- load_multiplier(load_factor_percent) -> float
- equivalence constants (trees, diesel, water)

Keys
----
Canonical keys match the form values ("diesel-b12", "road-train", ...).
Aliases such as "B12", "diesel_b12" or "Diesel S10" are normalised first;
unknown keys raise InvalidInput.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from logico2.core.models import InvalidInput
from logico2.infra.logging import get_logger

log = get_logger(__name__)


# ────────────────────────────────────────────────────────────────────────────────
# Base factor & equivalences
# ────────────────────────────────────────────────────────────────────────────────

# Tailpipe CO2 per liter of Brazilian diesel.
EF_DIESEL_CO2_KG_PER_L: float = 2.68

# kg CO2 absorbed by one tree in a year.
TREE_CO2_KG_PER_YEAR: float = 21.0

# kg CO2 per liter of treated water (0.34 kg per 1000 L).
WATER_CO2_KG_PER_L: float = 0.00034


# ────────────────────────────────────────────────────────────────────────────────
# Fuel factors
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FuelFactor:
    """
    key : str
        Canonical fuel key.
    multiplier : float
        Applied on top of EF_DIESEL_CO2_KG_PER_L.
    label : str
        pt-BR display name.
    """
    key: str
    multiplier: float
    label: str

    @property
    def ef_kg_per_l(self) -> float:
        return EF_DIESEL_CO2_KG_PER_L * self.multiplier


_FUEL_FACTORS: Dict[str, FuelFactor] = {
      "diesel": FuelFactor(
          key="diesel"
        , multiplier=1.0
        , label="Diesel S10"
    )
    # B12: 12% biodiesel blend, the mandatory blend at the pump in Brazil
    , "diesel-b12": FuelFactor(
          key="diesel-b12"
        , multiplier=0.97
        , label="Diesel B12 (12% biodiesel)"
    )
    , "biodiesel": FuelFactor(
          key="biodiesel"
        , multiplier=0.75
        , label="Biodiesel B100"
    )
}

_FUEL_ALIASES: Dict[str, str] = {
      "diesel": "diesel"
    , "diesel-s10": "diesel"
    , "s10": "diesel"
    , "diesel-b12": "diesel-b12"
    , "b12": "diesel-b12"
    , "biodiesel": "biodiesel"
    , "biodiesel-b100": "biodiesel"
    , "b100": "biodiesel"
}


# ────────────────────────────────────────────────────────────────────────────────
# Route & age multipliers
# ────────────────────────────────────────────────────────────────────────────────

ROUTE_MULTIPLIERS: Dict[str, float] = {
      "highway": 1.0
    , "urban": 1.20        # stop-and-go
    , "mixed": 1.10
    , "mountainous": 1.25  # Serra do Mar style grades
}

# (minimum age exclusive, multiplier), checked from oldest to newest
AGE_BRACKETS = (
      (20, 1.30)
    , (10, 1.15)
)

LOAD_MULTIPLIER_BASE: float = 0.7
LOAD_MULTIPLIER_SLOPE: float = 0.3


# ────────────────────────────────────────────────────────────────────────────────
# Normalisation helpers
# ────────────────────────────────────────────────────────────────────────────────

def normalise_key(value: str) -> str:
    """
    Lowercase, trim, and turn spaces/underscores into hyphens
    ("Diesel_B12" → "diesel-b12", "Road Train" → "road-train").
    """
    key = str(value).strip().lower()
    return key.replace("_", "-").replace(" ", "-")


def get_fuel_factor(fuel_type: str) -> FuelFactor:
    key = normalise_key(fuel_type)
    canonical = _FUEL_ALIASES.get(key, key)
    factor = _FUEL_FACTORS.get(canonical)
    if factor is None:
        log.warning("factors.get_fuel_factor: unknown fuel_type %r", fuel_type)
        raise InvalidInput(
            f"Unknown fuel type {fuel_type!r}; expected one of {sorted(_FUEL_FACTORS)}"
        )
    return factor


def route_multiplier(route_type: str) -> float:
    key = normalise_key(route_type)
    try:
        return ROUTE_MULTIPLIERS[key]
    except KeyError:
        log.warning("factors.route_multiplier: unknown route_type %r", route_type)
        raise InvalidInput(
            f"Unknown route type {route_type!r}; expected one of {sorted(ROUTE_MULTIPLIERS)}"
        ) from None


def age_multiplier(vehicle_age_years: int) -> float:
    """
    > 20 years → 1.30, > 10 years → 1.15, otherwise 1.0.
    Negative ages (year in the future) count as new.
    """
    for min_age, mult in AGE_BRACKETS:
        if vehicle_age_years > min_age:
            return mult
    return 1.0


def load_multiplier(load_factor_percent: float) -> float:
    """
    0.7 + 0.3 × (load / 100): 0.73 at 10% load, 1.0 at full load.
    """
    return LOAD_MULTIPLIER_BASE + LOAD_MULTIPLIER_SLOPE * (float(load_factor_percent) / 100.0)


__all__ = [
      "EF_DIESEL_CO2_KG_PER_L"
    , "TREE_CO2_KG_PER_YEAR"
    , "WATER_CO2_KG_PER_L"
    , "FuelFactor"
    , "ROUTE_MULTIPLIERS"
    , "normalise_key"
    , "get_fuel_factor"
    , "route_multiplier"
    , "age_multiplier"
    , "load_multiplier"
]
