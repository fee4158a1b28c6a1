# logico2/reports/report_data.py
# -*- coding: utf-8 -*-
"""
Report data supplier
====================

Builds the ReportData consumed by the PDF renderer. There is no fleet
database behind this: figures are representative fixtures with seeded noise,
scaled by report type.

Main entry point
----------------
- generate_mock_report(period, report_type, company_id, *, rng=None, now=None)

Periods
-------
"2024"       → 2024-01-01 .. 2024-12-31
"Q4-2024"    → 2024-10-01 .. 2024-12-31
"Nov-2024"   → 2024-11-01 .. 2024-11-30   (pt-BR or English month abbreviations)

Report types and summary multipliers
------------------------------------
annual ×12, quarterly ×3, monthly / sustainability / compliance ×1
"""

from __future__ import annotations

import calendar
import math
import random
import re
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from logico2.core.models import InvalidInput
from logico2.infra.logging import get_logger

_log = get_logger(__name__)


REPORT_TYPE_MULTIPLIERS: Dict[str, int] = {
      "annual": 12
    , "quarterly": 3
    , "monthly": 1
    , "sustainability": 1
    , "compliance": 1
}

PERIOD_OPTIONS: Tuple[str, ...] = ("2024", "2023", "Q4-2024", "Q3-2024", "Nov-2024", "Dez-2024")

_MONTHS: Dict[str, int] = {
      "jan": 1, "fev": 2, "feb": 2, "mar": 3, "abr": 4, "apr": 4, "mai": 5, "may": 5
    , "jun": 6, "jul": 7, "ago": 8, "aug": 8, "set": 9, "sep": 9, "out": 10, "oct": 10
    , "nov": 11, "dez": 12, "dec": 12
}


# ────────────────────────────────────────────────────────────────────────────────
# Data model
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Company:
    id: str
    name: str
    cnpj: str
    address: str
    contact: str


@dataclass(frozen=True)
class ReportPeriod:
    label: str
    start: date
    end: date
    type: str


@dataclass(frozen=True)
class ReportSummary:
    total_emissions_kg: float
    total_distance_km: float
    total_trips: int
    total_fuel_liters: float
    average_efficiency_km_per_l: float
    water_footprint_liters: float
    trees_equivalent: float


@dataclass(frozen=True)
class FleetVehicle:
    id: str
    plate: str
    model: str
    year: int
    vehicle_class: str
    fuel_type: str
    emissions_kg: float
    distance_km: float
    trips: int
    efficiency_km_per_l: float
    status: str


@dataclass(frozen=True)
class FleetRoute:
    id: str
    name: str
    origin: str
    destination: str
    distance_km: float
    frequency: int
    emissions_kg: float
    avg_time_min: int


@dataclass(frozen=True)
class TimelinePoint:
    period: str
    emissions_kg: float
    distance_km: float
    trips: int
    efficiency_km_per_l: float


@dataclass(frozen=True)
class PeriodComparison:
    previous_emissions_kg: float
    previous_distance_km: float
    previous_efficiency_km_per_l: float
    industry_avg_emissions_kg: float
    industry_avg_efficiency_km_per_l: float
    industry_ranking: int


@dataclass(frozen=True)
class Targets:
    emission_reduction_percent: float
    efficiency_improvement_percent: float
    deadline: date
    status: str


@dataclass(frozen=True)
class Initiative:
    name: str
    description: str
    impact_kg: float
    status: str
    investment_brl: float


@dataclass(frozen=True)
class Certification:
    name: str
    issuer: str
    valid_until: date
    status: str


@dataclass(frozen=True)
class ReportData:
    company: Company
    period: ReportPeriod
    report_type: str
    generated_at: datetime
    summary: ReportSummary
    vehicles: List[FleetVehicle] = field(default_factory=list)
    routes: List[FleetRoute] = field(default_factory=list)
    timeline: List[TimelinePoint] = field(default_factory=list)
    comparison: Optional[PeriodComparison] = None
    targets: Optional[Targets] = None
    initiatives: List[Initiative] = field(default_factory=list)
    certifications: List[Certification] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly dict (dates as ISO strings)."""
        def _conv(v: Any) -> Any:
            if isinstance(v, (date, datetime)):
                return v.isoformat()
            if isinstance(v, dict):
                return {k: _conv(x) for k, x in v.items()}
            if isinstance(v, list):
                return [_conv(x) for x in v]
            return v
        return _conv(asdict(self))


# ────────────────────────────────────────────────────────────────────────────────
# Fixtures
# ────────────────────────────────────────────────────────────────────────────────

COMPANIES: Dict[str, Company] = {
      "transportadora-abc": Company(
          "transportadora-abc", "Transportadora ABC Ltda", "12.345.678/0001-90"
        , "Av. Paulista, 1000 - São Paulo, SP", "contato@transportadoraabc.com.br"
    )
    , "logistica-xyz": Company(
          "logistica-xyz", "Logística XYZ S.A.", "98.765.432/0001-10"
        , "Rua das Flores, 500 - Rio de Janeiro, RJ", "admin@logisticaxyz.com.br"
    )
    , "frota-verde": Company(
          "frota-verde", "Frota Verde Transportes", "11.222.333/0001-44"
        , "Rod. Anhanguera, km 25 - Campinas, SP", "sustentabilidade@frotaverde.com.br"
    )
}

_VEHICLES: Tuple[FleetVehicle, ...] = (
      FleetVehicle("v001", "ABC-1234", "Volvo FH 540", 2020, "semi", "diesel", 15420, 65000, 145, 2.8, "active")
    , FleetVehicle("v002", "XYZ-5678", "Scania R450", 2019, "semi", "diesel-b12", 14230, 58000, 132, 2.6, "active")
    , FleetVehicle("v003", "DEF-9012", "Mercedes Actros", 2021, "heavy", "diesel", 8950, 42000, 98, 3.1, "maintenance")
    , FleetVehicle("v004", "GHI-3456", "Iveco Stralis", 2018, "semi", "biodiesel", 6400, 35000, 78, 2.2, "active")
)

_ROUTES: Tuple[FleetRoute, ...] = (
      FleetRoute("r001", "São Paulo - Rio de Janeiro", "São Paulo, SP", "Rio de Janeiro, RJ", 430, 45, 8650, 360)
    , FleetRoute("r002", "São Paulo - Belo Horizonte", "São Paulo, SP", "Belo Horizonte, MG", 586, 32, 7240, 420)
    , FleetRoute("r003", "Rio de Janeiro - Salvador", "Rio de Janeiro, RJ", "Salvador, BA", 1165, 18, 12450, 780)
    , FleetRoute("r004", "São Paulo - Curitiba", "São Paulo, SP", "Curitiba, PR", 408, 28, 5890, 300)
)

_COMPARISON = PeriodComparison(
      previous_emissions_kg=47800
    , previous_distance_km=185000
    , previous_efficiency_km_per_l=2.2
    , industry_avg_emissions_kg=52000
    , industry_avg_efficiency_km_per_l=2.1
    , industry_ranking=3
)

_TARGETS = Targets(
      emission_reduction_percent=15
    , efficiency_improvement_percent=10
    , deadline=date(2025, 12, 31)
    , status="on-track"
)

_INITIATIVES: Tuple[Initiative, ...] = (
      Initiative(
          "Treinamento de Condução Econômica"
        , "Programa de capacitação para motoristas focado em técnicas de direção eficiente"
        , 2400, "completed", 15000
    )
    , Initiative(
          "Renovação da Frota"
        , "Substituição de veículos antigos por modelos mais eficientes"
        , 8500, "in-progress", 850000
    )
    , Initiative(
          "Sistema de Telemetria"
        , "Implementação de monitoramento em tempo real do consumo de combustível"
        , 3200, "planned", 45000
    )
    , Initiative(
          "Uso de Biodiesel B20"
        , "Transição para combustível com maior percentual de biodiesel"
        , 5600, "in-progress", 25000
    )
)

_CERTIFICATIONS: Tuple[Certification, ...] = (
      Certification("ISO 14001 - Gestão Ambiental", "Bureau Veritas", date(2025, 6, 30), "valid")
    , Certification("Programa Despoluir CNT", "Confederação Nacional do Transporte", date(2024, 12, 31), "valid")
    , Certification("Selo Verde ANTT", "Agência Nacional de Transportes Terrestres", date(2024, 8, 15), "expired")
)


# ────────────────────────────────────────────────────────────────────────────────
# Helpers
# ────────────────────────────────────────────────────────────────────────────────

def parse_period(period: str, report_type: str) -> ReportPeriod:
    """
    "YYYY", "Qn-YYYY" or "Mon-YYYY" → ReportPeriod.

    Raises
    ------
    InvalidInput
        Unrecognised period string.
    """
    text = (period or "").strip()

    m = re.fullmatch(r"(\d{4})", text)
    if m:
        year = int(m.group(1))
        return ReportPeriod(text, date(year, 1, 1), date(year, 12, 31), report_type)

    m = re.fullmatch(r"[Qq]([1-4])-(\d{4})", text)
    if m:
        q, year = int(m.group(1)), int(m.group(2))
        first_month = 3 * (q - 1) + 1
        last_month = first_month + 2
        last_day = calendar.monthrange(year, last_month)[1]
        return ReportPeriod(text, date(year, first_month, 1), date(year, last_month, last_day), report_type)

    m = re.fullmatch(r"([A-Za-z]{3})-(\d{4})", text)
    if m and m.group(1).lower() in _MONTHS:
        month, year = _MONTHS[m.group(1).lower()], int(m.group(2))
        last_day = calendar.monthrange(year, month)[1]
        return ReportPeriod(text, date(year, month, 1), date(year, month, last_day), report_type)

    raise InvalidInput(f"Unknown report period {period!r}; expected e.g. {list(PERIOD_OPTIONS)}")


def _summary(rnd: random.Random, mult: int) -> ReportSummary:
    return ReportSummary(
          total_emissions_kg=round(45000 * mult + rnd.random() * 5000)
        , total_distance_km=round(180000 * mult + rnd.random() * 20000)
        , total_trips=round(850 * mult + rnd.random() * 100)
        , total_fuel_liters=round(18500 * mult + rnd.random() * 2000)
        , average_efficiency_km_per_l=round(2.4 + rnd.random() * 0.6, 1)
        , water_footprint_liters=round(46250 * mult + rnd.random() * 5000)
        , trees_equivalent=round(2143 * mult + rnd.random() * 200)
    )


def _timeline(rnd: random.Random, year: int) -> List[TimelinePoint]:
    out: List[TimelinePoint] = []
    for i in range(12):
        wave = math.sin(i / 2)
        out.append(TimelinePoint(
              period=f"{year}-{i + 1:02d}"
            , emissions_kg=round(3500 + rnd.random() * 1000 + wave * 500)
            , distance_km=round(14000 + rnd.random() * 2000 + wave * 1000)
            , trips=round(65 + rnd.random() * 15 + wave * 5)
            , efficiency_km_per_l=round(2.3 + rnd.random() * 0.4 + math.sin(i / 3) * 0.1, 1)
        ))
    return out


# ────────────────────────────────────────────────────────────────────────────────
# Public API
# ────────────────────────────────────────────────────────────────────────────────

def generate_mock_report(
      period: str
    , report_type: str
    , company_id: str
    , *
    , rng: Optional[random.Random] = None
    , now: Optional[datetime] = None
) -> ReportData:
    """
    Representative report for one company and period.

    Parameters
    ----------
    rng : random.Random | None
        Noise source; pass a seeded instance for reproducible output.
    now : datetime | None
        Generation timestamp (UTC now by default).

    Raises
    ------
    InvalidInput
        Unknown company, report type or period.
    """
    company = COMPANIES.get(company_id)
    if company is None:
        raise InvalidInput(f"Unknown company {company_id!r}; expected one of {sorted(COMPANIES)}")
    if report_type not in REPORT_TYPE_MULTIPLIERS:
        raise InvalidInput(
            f"Unknown report type {report_type!r}; expected one of {sorted(REPORT_TYPE_MULTIPLIERS)}"
        )

    rep_period = parse_period(period, report_type)
    mult = REPORT_TYPE_MULTIPLIERS[report_type]
    rnd = rng or random.Random()

    report = ReportData(
          company=company
        , period=rep_period
        , report_type=report_type
        , generated_at=now or datetime.now(timezone.utc)
        , summary=_summary(rnd, mult)
        , vehicles=list(_VEHICLES)
        , routes=list(_ROUTES)
        , timeline=_timeline(rnd, rep_period.start.year)
        , comparison=_COMPARISON
        , targets=_TARGETS
        , initiatives=list(_INITIATIVES)
        , certifications=list(_CERTIFICATIONS)
    )
    _log.info(
        "generate_mock_report: company=%s period=%s..%s type=%s (×%s) emissions=%.0f kg",
        company_id, rep_period.start, rep_period.end, report_type, mult,
        report.summary.total_emissions_kg,
    )
    return report


__all__ = [
      "COMPANIES"
    , "PERIOD_OPTIONS"
    , "REPORT_TYPE_MULTIPLIERS"
    , "ReportData"
    , "generate_mock_report"
    , "parse_period"
]
