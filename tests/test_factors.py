# tests/test_factors.py
# -*- coding: utf-8 -*-

import pytest

from logico2.core.models import InvalidInput
from logico2.emissions.factors import (
      EF_DIESEL_CO2_KG_PER_L
    , age_multiplier
    , get_fuel_factor
    , load_multiplier
    , normalise_key
    , route_multiplier
)


def test_base_factor_constant():
    assert EF_DIESEL_CO2_KG_PER_L == 2.68


@pytest.mark.parametrize("key, mult", [("diesel", 1.0), ("diesel-b12", 0.97), ("biodiesel", 0.75)])
def test_fuel_multipliers(key, mult):
    assert get_fuel_factor(key).multiplier == mult


@pytest.mark.parametrize("alias", ["B12", "diesel_b12", "Diesel B12", " diesel-b12 "])
def test_fuel_aliases_resolve(alias):
    assert get_fuel_factor(alias).key == "diesel-b12"


def test_unknown_fuel_rejected():
    with pytest.raises(InvalidInput):
        get_fuel_factor("gasoline")


def test_route_multipliers():
    assert route_multiplier("highway") == 1.0
    assert route_multiplier("urban") == 1.2
    assert route_multiplier("Mixed") == 1.1
    assert route_multiplier("mountainous") == 1.25
    with pytest.raises(InvalidInput):
        route_multiplier("offroad")


@pytest.mark.parametrize(
    "age, mult",
    [(-1, 1.0), (0, 1.0), (10, 1.0), (11, 1.15), (20, 1.15), (21, 1.30), (40, 1.30)],
)
def test_age_brackets_are_strict(age, mult):
    assert age_multiplier(age) == mult


def test_load_multiplier_endpoints():
    assert load_multiplier(100) == pytest.approx(1.0)
    assert load_multiplier(10) == pytest.approx(0.73)
    assert load_multiplier(90) == pytest.approx(0.97)


def test_normalise_key():
    assert normalise_key("Road Train") == "road-train"
    assert normalise_key("Diesel_B12") == "diesel-b12"
