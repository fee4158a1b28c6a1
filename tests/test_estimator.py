# tests/test_estimator.py
# -*- coding: utf-8 -*-

import math
from dataclasses import replace

import pytest

from logico2.core.models import CargoProfile, InvalidInput, OperationProfile, VehicleProfile
from logico2.emissions.estimator import (
      REDUCTION_TIPS
    , emission_breakdown
    , estimate_emissions
    , impact_level
    , validate_inputs
)

YEAR = 2024

VEHICLE = VehicleProfile("semi", 2019, "diesel-b12", 2.2)
OPERATION = OperationProfile(430, "highway", 2, "week")
CARGO = CargoProfile(28, "container", 90)


def test_long_haul_end_to_end():
    res = estimate_emissions(VEHICLE, OPERATION, CARGO, current_year=YEAR)

    assert res.fuel_consumed_liters == pytest.approx(390.909, abs=0.01)
    assert res.total_co2_kg == pytest.approx(985.7, abs=0.5)
    assert res.trees_equivalent == pytest.approx(res.total_co2_kg / 21.0)
    assert res.diesel_equivalent_liters == pytest.approx(res.total_co2_kg / 2.68)
    assert res.water_equivalent_liters == pytest.approx(res.total_co2_kg / 0.00034)
    assert res.co2_per_tonne_km == pytest.approx(res.total_co2_kg / (28 * 860 * 0.9))


def test_breakdown_exposes_every_multiplier():
    b = emission_breakdown(VEHICLE, OPERATION, CARGO, current_year=YEAR)
    assert b.total_distance_km == 860
    assert b.emission_factor_kg_per_l == pytest.approx(2.68 * 0.97)
    assert b.vehicle_age_years == 5
    assert b.age_multiplier == 1.0
    assert b.route_multiplier == 1.0
    assert b.load_multiplier == pytest.approx(0.97)
    assert b.tonne_km == pytest.approx(21672.0)


def test_estimate_is_idempotent():
    a = estimate_emissions(VEHICLE, OPERATION, CARGO, current_year=YEAR)
    b = estimate_emissions(VEHICLE, OPERATION, CARGO, current_year=YEAR)
    assert a == b


def test_biodiesel_is_three_quarters_of_diesel():
    diesel = estimate_emissions(replace(VEHICLE, fuel_type="diesel"), OPERATION, CARGO, current_year=YEAR)
    bio = estimate_emissions(replace(VEHICLE, fuel_type="biodiesel"), OPERATION, CARGO, current_year=YEAR)
    assert bio.total_co2_kg == pytest.approx(0.75 * diesel.total_co2_kg)


def test_old_truck_costs_thirty_percent_more():
    new = estimate_emissions(replace(VEHICLE, manufacture_year=YEAR), OPERATION, CARGO, current_year=YEAR)
    old = estimate_emissions(replace(VEHICLE, manufacture_year=YEAR - 21), OPERATION, CARGO, current_year=YEAR)
    assert old.total_co2_kg == pytest.approx(1.30 * new.total_co2_kg)


@pytest.mark.parametrize("eff", [0, -1.5, float("nan"), float("inf")])
def test_non_positive_efficiency_rejected(eff):
    with pytest.raises(InvalidInput):
        estimate_emissions(replace(VEHICLE, fuel_efficiency_km_per_l=eff), OPERATION, CARGO, current_year=YEAR)


def test_zero_weight_guards_intensity():
    res = estimate_emissions(VEHICLE, OPERATION, replace(CARGO, weight_tonnes=0), current_year=YEAR)
    assert res.total_co2_kg > 0
    assert res.co2_per_tonne_km == 0.0
    assert math.isfinite(res.co2_per_tonne_km)


def test_zero_load_factor_guards_intensity():
    full = estimate_emissions(VEHICLE, OPERATION, CARGO, current_year=YEAR)
    res = estimate_emissions(VEHICLE, OPERATION, replace(CARGO, load_factor_percent=0), current_year=YEAR)
    assert res.total_co2_kg == pytest.approx(full.total_co2_kg * 0.7 / 0.97)
    assert res.co2_per_tonne_km == 0.0


@pytest.mark.parametrize(
    "vehicle, operation, cargo, field",
    [
          (replace(VEHICLE, fuel_efficiency_km_per_l="abc"), OPERATION, CARGO, "fuel_efficiency_km_per_l")
        , (replace(VEHICLE, manufacture_year=""), OPERATION, CARGO, "manufacture_year")
        , (VEHICLE, replace(OPERATION, trip_count=None), CARGO, "trip_count")
        , (VEHICLE, replace(OPERATION, distance_km_per_trip=float("nan")), CARGO, "distance_km_per_trip")
        , (VEHICLE, OPERATION, replace(CARGO, weight_tonnes="heavy"), "weight_tonnes")
    ],
)
def test_non_numeric_fields_are_invalid_input(vehicle, operation, cargo, field):
    with pytest.raises(InvalidInput) as ei:
        estimate_emissions(vehicle, operation, cargo, current_year=YEAR)
    assert field in str(ei.value)


def test_zero_distance_gives_zero():
    res = estimate_emissions(VEHICLE, replace(OPERATION, distance_km_per_trip=0), CARGO, current_year=YEAR)
    assert res.total_co2_kg == 0.0
    assert res.co2_per_tonne_km == 0.0


def test_period_and_cargo_type_do_not_change_result():
    base = estimate_emissions(VEHICLE, OPERATION, CARGO, current_year=YEAR)
    other = estimate_emissions(
          VEHICLE
        , replace(OPERATION, period="year")
        , replace(CARGO, cargo_type="dangerous")
        , current_year=YEAR
    )
    assert base == other


def test_validate_inputs_accepts_valid():
    validate_inputs(VEHICLE, OPERATION, CARGO, current_year=YEAR)


def test_validate_inputs_lists_every_problem():
    with pytest.raises(InvalidInput) as ei:
        validate_inputs(
              VehicleProfile("spaceship", 1970, "diesel", 0)
            , OperationProfile(-1, "offroad", 0, "decade")
            , CargoProfile(-5, "sand", 5)
            , current_year=YEAR
        )
    problems = ei.value.problems
    assert len(problems) == 10
    assert str(ei.value).startswith("Invalid calculator input:")


def test_validate_rejects_future_year():
    with pytest.raises(InvalidInput):
        validate_inputs(replace(VEHICLE, manufacture_year=YEAR + 1), OPERATION, CARGO, current_year=YEAR)


@pytest.mark.parametrize(
    "total, level, color",
    [
          (0, "Baixo", "green")
        , (99.9, "Baixo", "green")
        , (100, "Moderado", "yellow")
        , (499, "Moderado", "yellow")
        , (500, "Alto", "orange")
        , (999.9, "Alto", "orange")
        , (1000, "Muito Alto", "red")
    ],
)
def test_impact_level(total, level, color):
    imp = impact_level(total)
    assert (imp.level, imp.color) == (level, color)


def test_impact_progress_is_capped():
    assert impact_level(250).progress_percent == pytest.approx(25.0)
    assert impact_level(5000).progress_percent == 100.0


def test_reduction_tips_are_present():
    assert len(REDUCTION_TIPS) == 6
    assert all(isinstance(t, str) and t for t in REDUCTION_TIPS)
