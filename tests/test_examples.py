# tests/test_examples.py
# -*- coding: utf-8 -*-

import pytest

from logico2.core.models import InvalidInput
from logico2.emissions.estimator import estimate_emissions, validate_inputs
from logico2.emissions.examples import EXAMPLE_CATEGORIES, get_example, list_examples


def test_catalogue_has_six_scenarios():
    ids = [ex.id for ex in list_examples()]
    assert ids == ["regional-delivery", "long-haul", "agribusiness", "mountainous", "biodiesel", "livestock"]
    assert list_examples("all") == list_examples(None)


@pytest.mark.parametrize("category", sorted(set(EXAMPLE_CATEGORIES) - {"all"}))
def test_filter_by_category(category):
    found = list_examples(category)
    assert found
    assert all(ex.category == category for ex in found)


def test_unknown_category_and_id():
    with pytest.raises(InvalidInput):
        list_examples("maritime")
    with pytest.raises(InvalidInput):
        get_example("nope")


@pytest.mark.parametrize("example", list_examples(), ids=lambda ex: ex.id)
def test_every_example_is_valid_calculator_input(example):
    vehicle, operation, cargo = example.as_inputs()
    validate_inputs(vehicle, operation, cargo, current_year=2024)
    assert estimate_emissions(vehicle, operation, cargo, current_year=2024).total_co2_kg > 0


def test_long_haul_example_matches_reference():
    res = estimate_emissions(*get_example("long-haul").as_inputs(), current_year=2024)
    assert res.total_co2_kg == pytest.approx(985.7, abs=0.5)
