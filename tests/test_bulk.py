# tests/test_bulk.py
# -*- coding: utf-8 -*-

import pandas as pd
import pytest

from logico2.core.models import InvalidInput
from logico2.emissions.bulk import (
      RESULT_COLUMNS
    , estimate_frame
    , load_operations_csv
    , normalise_columns
    , write_results_csv
)


def _frame() -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                  "Vehicle Class": "semi"
                , "year": 2019
                , "fuel": "diesel-b12"
                , "km_per_l": 2.2
                , "distance": 430
                , "route": "highway"
                , "trips": 2
                , "weight": 28
                , "load_factor": 90
            },
            {
                  "Vehicle Class": "medium"
                , "year": 2015
                , "fuel": "diesel"
                , "km_per_l": 3.5
                , "distance": 250
                , "route": "mixed"
                , "trips": 1
                , "weight": 8
                , "load_factor": 5
            },
        ]
    )


def test_aliases_are_normalised_and_defaults_filled():
    df = normalise_columns(_frame())
    assert "fuel_efficiency_km_per_l" in df.columns
    assert "vehicle_class" in df.columns
    assert list(df["period"]) == ["month", "month"]
    assert list(df["cargo_type"]) == ["general", "general"]


def test_missing_required_column():
    with pytest.raises(InvalidInput) as ei:
        normalise_columns(_frame().drop(columns=["trips"]))
    assert "missing column trip_count" in ei.value.problems


def test_invalid_row_is_kept_with_error():
    out = estimate_frame(_frame(), current_year=2024)

    assert len(out) == 2
    assert all(c in out.columns for c in RESULT_COLUMNS)
    assert out.loc[0, "total_co2_kg"] == pytest.approx(985.7, abs=0.5)
    assert out.loc[0, "impact_level"] == "Alto"
    assert pd.isna(out.loc[0, "error"])
    assert "load_factor_percent" in out.loc[1, "error"]
    assert pd.isna(out.loc[1, "total_co2_kg"])


def test_without_validation_only_estimator_checks_apply():
    out = estimate_frame(_frame(), current_year=2024, validate=False)
    assert out["error"].isna().all()
    assert out.loc[1, "total_co2_kg"] > 0


def test_unparseable_cells_stay_row_errors_without_validation():
    df = _frame()
    df["km_per_l"] = [2.2, "abc"]
    df["trips"] = [None, 1]

    out = estimate_frame(df, current_year=2024, validate=False)

    assert len(out) == 2
    assert "trip_count" in out.loc[0, "error"]
    assert "fuel_efficiency_km_per_l" in out.loc[1, "error"]
    assert out["total_co2_kg"].isna().all()


def test_csv_round_trip(tmp_path):
    src = tmp_path / "ops.csv"
    _frame().to_csv(src, index=False)

    df = load_operations_csv(src)
    res = estimate_frame(df, current_year=2024)
    out = write_results_csv(res, tmp_path / "out" / "ops_co2.csv")

    back = pd.read_csv(out)
    assert len(back) == 2
    assert back.loc[0, "total_co2_kg"] == pytest.approx(985.7, abs=0.5)


def test_missing_csv(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_operations_csv(tmp_path / "missing.csv")
