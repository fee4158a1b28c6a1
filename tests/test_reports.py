# tests/test_reports.py
# -*- coding: utf-8 -*-

import random
from dataclasses import replace
from datetime import date, datetime, timezone

import pytest

from logico2.core.models import InvalidInput
from logico2.reports.pdf_report import (
      PDFGenerationFailure
    , render_report_pdf
    , report_filename
    , write_report_pdf
)
from logico2.reports.report_data import COMPANIES, generate_mock_report, parse_period

NOW = datetime(2024, 12, 15, 14, 0, tzinfo=timezone.utc)


def _report(period="Q4-2024", report_type="quarterly", company="transportadora-abc", seed=7):
    return generate_mock_report(period, report_type, company, rng=random.Random(seed), now=NOW)


@pytest.mark.parametrize(
    "period, start, end",
    [
          ("2024", date(2024, 1, 1), date(2024, 12, 31))
        , ("Q4-2024", date(2024, 10, 1), date(2024, 12, 31))
        , ("Q1-2024", date(2024, 1, 1), date(2024, 3, 31))
        , ("Nov-2024", date(2024, 11, 1), date(2024, 11, 30))
        , ("Dez-2024", date(2024, 12, 1), date(2024, 12, 31))
        , ("Fev-2024", date(2024, 2, 1), date(2024, 2, 29))
    ],
)
def test_parse_period(period, start, end):
    p = parse_period(period, "monthly")
    assert (p.start, p.end) == (start, end)


@pytest.mark.parametrize("bad", ["", "Q5-2024", "Foo-2024", "24"])
def test_parse_period_rejects(bad):
    with pytest.raises(InvalidInput):
        parse_period(bad, "annual")


def test_seeded_report_is_reproducible():
    assert _report().to_dict() == _report().to_dict()


def test_report_type_scales_summary():
    annual = _report("2024", "annual").summary
    monthly = _report("Nov-2024", "monthly").summary
    assert 540_000 <= annual.total_emissions_kg <= 545_000
    assert 45_000 <= monthly.total_emissions_kg <= 50_000


def test_report_contents():
    r = _report("Q4-2023")
    assert r.company.name == "Transportadora ABC Ltda"
    assert len(r.vehicles) == 4
    assert len(r.routes) == 4
    assert [p.period for p in r.timeline][:2] == ["2023-01", "2023-02"]
    assert len(r.timeline) == 12
    assert r.to_dict()["period"]["start"] == "2023-10-01"


def test_unknown_company_and_type():
    with pytest.raises(InvalidInput):
        generate_mock_report("2024", "annual", "acme")
    with pytest.raises(InvalidInput):
        generate_mock_report("2024", "weekly", "transportadora-abc")


@pytest.mark.parametrize("company", sorted(COMPANIES))
def test_pdf_renders(company):
    data = render_report_pdf(_report(company=company))
    assert data.startswith(b"%PDF")
    assert len(data) > 2_000


def test_malformed_report_is_pdf_failure():
    broken = replace(_report(), vehicles=[None])
    with pytest.raises(PDFGenerationFailure) as ei:
        render_report_pdf(broken)
    assert str(ei.value) == PDFGenerationFailure.USER_MESSAGE


def test_report_filename():
    r = _report(company="logistica-xyz")
    assert report_filename(r) == "relatorio-sustentabilidade-logistica-xyz-s-a-2024-10-01.pdf"


def test_write_report_into_directory(tmp_path):
    path = write_report_pdf(_report(), tmp_path)
    assert path.name == "relatorio-sustentabilidade-transportadora-abc-ltda-2024-10-01.pdf"
    assert path.read_bytes()[:4] == b"%PDF"


def _page_count(data: bytes) -> int:
    return data.count(b"/Type /Page") - data.count(b"/Type /Pages")


def test_long_fleet_table_breaks_across_pages():
    r = _report()
    long_fleet = replace(r, vehicles=list(r.vehicles) * 15)

    short_pdf = render_report_pdf(r)
    long_pdf = render_report_pdf(long_fleet)

    assert long_pdf.startswith(b"%PDF")
    assert _page_count(long_pdf) > _page_count(short_pdf)
