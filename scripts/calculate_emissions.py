#!/usr/bin/env python3
# scripts/calculate_emissions.py
# -*- coding: utf-8 -*-

"""
Estimate the CO2 of one road-freight operation and print JSON.

Examples
--------
    python scripts/calculate_emissions.py --example long-haul --pretty
    python scripts/calculate_emissions.py \
        --vehicle-class semi --manufacture-year 2020 --fuel-type diesel --km-per-l 2.5 \
        --distance-km 500 --route-type highway --trips 2 \
        --weight-t 25 --load-factor 80 --details --pretty
"""

from __future__ import annotations

# --- path bootstrap (must be the first lines of the file) ---
from pathlib import Path
import sys
ROOT = Path(__file__).resolve().parents[1]  # repo root (one level above /scripts)
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
# ------------------------------------------------------------

import argparse
import json
import logging
from typing import Any, Dict

from logico2.core.models import CargoProfile, InvalidInput, OperationProfile, VehicleProfile
from logico2.core.types import CARGO_TYPES, FUEL_TYPES, PERIODS, ROUTE_TYPES, VEHICLE_CLASSES
from logico2.emissions.estimator import (
      REDUCTION_TIPS
    , emission_breakdown
    , estimate_emissions
    , impact_level
    , validate_inputs
)
from logico2.emissions.examples import get_example, list_examples
from logico2.infra.logging import init_logging

log = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Estimate CO2 (kg) for a road-freight operation and print JSON."
    )
    p.add_argument(
          "--example"
        , default=None
        , choices=[ex.id for ex in list_examples()]
        , help="Use a preset scenario instead of the profile flags."
    )

    # ── vehicle ────────────────────────────────────────────────────────────────
    p.add_argument("--vehicle-class", default="semi", choices=list(VEHICLE_CLASSES))
    p.add_argument("--manufacture-year", type=int, default=2020)
    p.add_argument("--fuel-type", default="diesel", choices=list(FUEL_TYPES))
    p.add_argument("--km-per-l", type=float, default=2.5, help="Fuel efficiency [km/L]. Default: 2.5")

    # ── operation ──────────────────────────────────────────────────────────────
    p.add_argument("--distance-km", type=float, default=None, help="Distance per trip [km].")
    p.add_argument("--route-type", default="highway", choices=list(ROUTE_TYPES))
    p.add_argument("--trips", type=int, default=1, help="Number of trips. Default: 1")
    p.add_argument("--period", default="month", choices=list(PERIODS))

    # ── cargo ──────────────────────────────────────────────────────────────────
    p.add_argument("--weight-t", type=float, default=None, help="Cargo weight [t].")
    p.add_argument("--cargo-type", default="general", choices=list(CARGO_TYPES))
    p.add_argument("--load-factor", type=float, default=80.0, help="Load factor [%%]. Default: 80")

    p.add_argument("--current-year", type=int, default=None, help="Reference year for vehicle age.")
    p.add_argument("--details", action="store_true", help="Include the intermediate values.")

    # UX
    p.add_argument("--pretty", action="store_true", help="Pretty-print JSON.")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def _profiles_from_args(args: argparse.Namespace):
    if args.example:
        return get_example(args.example).as_inputs()

    if args.distance_km is None or args.weight_t is None:
        raise InvalidInput(
              "--distance-km and --weight-t are required without --example"
            , ["missing --distance-km or --weight-t"]
        )
    vehicle = VehicleProfile(
          vehicle_class=args.vehicle_class
        , manufacture_year=args.manufacture_year
        , fuel_type=args.fuel_type
        , fuel_efficiency_km_per_l=args.km_per_l
    )
    operation = OperationProfile(
          distance_km_per_trip=args.distance_km
        , route_type=args.route_type
        , trip_count=args.trips
        , period=args.period
    )
    cargo = CargoProfile(
          weight_tonnes=args.weight_t
        , cargo_type=args.cargo_type
        , load_factor_percent=args.load_factor
    )
    return vehicle, operation, cargo


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)

    init_logging(level=args.log_level, force=True, write_output=False)

    try:
        vehicle, operation, cargo = _profiles_from_args(args)
        validate_inputs(vehicle, operation, cargo, current_year=args.current_year)
        result = estimate_emissions(vehicle, operation, cargo, current_year=args.current_year)
    except InvalidInput as exc:
        log.error("%s", exc)
        print(json.dumps({"error": str(exc), "problems": exc.problems}, ensure_ascii=False))
        return 2

    impact = impact_level(result.total_co2_kg)
    out: Dict[str, Any] = {
          "result": result.to_dict()
        , "impact": {
              "level": impact.level
            , "color": impact.color
            , "progress_percent": impact.progress_percent
        }
        , "tips": REDUCTION_TIPS
    }
    if args.example:
        out["example"] = args.example
    if args.details:
        out["details"] = emission_breakdown(vehicle, operation, cargo, current_year=args.current_year).to_dict()

    if args.pretty:
        print(json.dumps(out, ensure_ascii=False, indent=2))
    else:
        print(json.dumps(out, ensure_ascii=False, separators=(",", ":")))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
