# logico2/emissions/bulk.py
# -*- coding: utf-8 -*-
"""
Bulk emission estimates over tabular inputs
===========================================

Main entry points
-----------------
- load_operations_csv(csv_path) -> pandas.DataFrame (canonical column names)
- estimate_frame(df, *, current_year=None, validate=True) -> pandas.DataFrame
- write_results_csv(df, out_path) -> Path

CSV expectations
----------------
One row per operation. Required columns (case-insensitive, aliases accepted):

  vehicle_class, manufacture_year, fuel_type, fuel_efficiency_km_per_l,
  distance_km_per_trip, route_type, trip_count,
  weight_tonnes, load_factor_percent

Optional: period (default "month"), cargo_type (default "general").

Rows that fail validation are kept in the output with empty result columns
and the reason in `error`; one bad row never aborts the batch.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from logico2.core.models import (
      CargoProfile
    , InvalidInput
    , OperationProfile
    , VehicleProfile
)
from logico2.emissions.estimator import (
      estimate_emissions
    , impact_level
    , validate_inputs
)
from logico2.infra.logging import get_logger

_log = get_logger(__name__)


REQUIRED_COLUMNS: List[str] = [
      "vehicle_class"
    , "manufacture_year"
    , "fuel_type"
    , "fuel_efficiency_km_per_l"
    , "distance_km_per_trip"
    , "route_type"
    , "trip_count"
    , "weight_tonnes"
    , "load_factor_percent"
]

OPTIONAL_DEFAULTS: Dict[str, Any] = {
      "period": "month"
    , "cargo_type": "general"
}

RESULT_COLUMNS: List[str] = [
      "total_co2_kg"
    , "trees_equivalent"
    , "diesel_equivalent_liters"
    , "water_equivalent_liters"
    , "fuel_consumed_liters"
    , "co2_per_tonne_km"
    , "impact_level"
    , "error"
]

_COLUMN_ALIASES: Dict[str, str] = {
      "vehicle": "vehicle_class"
    , "vehicle_type": "vehicle_class"
    , "year": "manufacture_year"
    , "fuel": "fuel_type"
    , "efficiency": "fuel_efficiency_km_per_l"
    , "km_per_l": "fuel_efficiency_km_per_l"
    , "fuel_efficiency": "fuel_efficiency_km_per_l"
    , "distance": "distance_km_per_trip"
    , "distance_km": "distance_km_per_trip"
    , "route": "route_type"
    , "trips": "trip_count"
    , "weight": "weight_tonnes"
    , "weight_t": "weight_tonnes"
    , "tonnes": "weight_tonnes"
    , "cargo": "cargo_type"
    , "load_factor": "load_factor_percent"
    , "load_pct": "load_factor_percent"
}


# ────────────────────────────────────────────────────────────────────────────────
# Column handling
# ────────────────────────────────────────────────────────────────────────────────

def normalise_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Return a copy with canonical column names and optional columns filled.

    Raises
    ------
    InvalidInput
        When a required column is missing after alias resolution.
    """
    rename: Dict[str, str] = {}
    for col in df.columns:
        key = str(col).strip().lower().replace(" ", "_").replace("-", "_")
        rename[col] = _COLUMN_ALIASES.get(key, key)

    out = df.rename(columns=rename)
    missing = [c for c in REQUIRED_COLUMNS if c not in out.columns]
    if missing:
        _log.error("normalise_columns: missing required columns %s (have %s)", missing, list(out.columns))
        raise InvalidInput(f"Missing required columns: {missing}", [f"missing column {c}" for c in missing])

    for col, default in OPTIONAL_DEFAULTS.items():
        if col not in out.columns:
            out[col] = default
        else:
            out[col] = out[col].fillna(default)
    return out


def load_operations_csv(csv_path: str | Path) -> pd.DataFrame:
    path = Path(csv_path)
    if not path.is_file():
        raise FileNotFoundError(f"Operations CSV not found: {path}")
    df_raw = pd.read_csv(path)
    _log.info("load_operations_csv: %s rows from %s", len(df_raw), path)
    return normalise_columns(df_raw)


# ────────────────────────────────────────────────────────────────────────────────
# Row → profiles
# ────────────────────────────────────────────────────────────────────────────────

def _as_int(value: Any) -> Any:
    try:
        f = float(value)
    except (TypeError, ValueError):
        return value
    if math.isfinite(f) and f.is_integer():
        return int(f)
    return value


def row_to_profiles(row: Mapping[str, Any]):
    """(VehicleProfile, OperationProfile, CargoProfile) from a canonical row."""
    vehicle = VehicleProfile(
          vehicle_class=str(row["vehicle_class"])
        , manufacture_year=_as_int(row["manufacture_year"])
        , fuel_type=str(row["fuel_type"])
        , fuel_efficiency_km_per_l=row["fuel_efficiency_km_per_l"]
    )
    operation = OperationProfile(
          distance_km_per_trip=row["distance_km_per_trip"]
        , route_type=str(row["route_type"])
        , trip_count=_as_int(row["trip_count"])
        , period=str(row.get("period", OPTIONAL_DEFAULTS["period"]))
    )
    cargo = CargoProfile(
          weight_tonnes=row["weight_tonnes"]
        , cargo_type=str(row.get("cargo_type", OPTIONAL_DEFAULTS["cargo_type"]))
        , load_factor_percent=row["load_factor_percent"]
    )
    return vehicle, operation, cargo


# ────────────────────────────────────────────────────────────────────────────────
# Batch
# ────────────────────────────────────────────────────────────────────────────────

def estimate_frame(
      df: pd.DataFrame
    , *
    , current_year: Optional[int] = None
    , validate: bool = True
) -> pd.DataFrame:
    """
    Estimate every row of `df` and return a copy with RESULT_COLUMNS appended.

    Parameters
    ----------
    validate : bool
        Run validate_inputs per row (form rules) before estimating. When False
        only the estimator's own checks apply.
    """
    data = normalise_columns(df)
    records: List[Dict[str, Any]] = []
    n_err = 0

    for idx, row in data.iterrows():
        rec: Dict[str, Any] = {c: None for c in RESULT_COLUMNS}
        try:
            vehicle, operation, cargo = row_to_profiles(row)
            if validate:
                validate_inputs(vehicle, operation, cargo, current_year=current_year)
            res = estimate_emissions(vehicle, operation, cargo, current_year=current_year)
        except InvalidInput as exc:
            n_err += 1
            rec["error"] = "; ".join(exc.problems)
            _log.warning("estimate_frame: row %s skipped: %s", idx, rec["error"])
        else:
            rec.update(res.to_dict())
            rec["impact_level"] = impact_level(res.total_co2_kg).level
        records.append(rec)

    results = pd.DataFrame.from_records(records, columns=RESULT_COLUMNS, index=data.index)
    out = pd.concat([data.drop(columns=[c for c in RESULT_COLUMNS if c in data.columns]), results], axis=1)

    _log.info(
        "estimate_frame: rows=%s ok=%s errors=%s total_co2_kg=%.2f",
        len(out), len(out) - n_err, n_err, float(pd.to_numeric(out["total_co2_kg"]).fillna(0).sum()),
    )
    return out


def write_results_csv(df: pd.DataFrame, out_path: str | Path) -> Path:
    path = Path(out_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    _log.info("write_results_csv: wrote %s rows → %s", len(df), path)
    return path


__all__ = [
      "REQUIRED_COLUMNS"
    , "RESULT_COLUMNS"
    , "estimate_frame"
    , "load_operations_csv"
    , "normalise_columns"
    , "row_to_profiles"
    , "write_results_csv"
]
