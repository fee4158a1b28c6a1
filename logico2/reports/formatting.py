# logico2/reports/formatting.py
# -*- coding: utf-8 -*-
"""
pt-BR display helpers shared by the CLIs, the route planner and the PDF.

- Labels for every category key (vehicle, fuel, route, cargo, period,
  report type, statuses)
- format_distance / format_duration for routes
- format_number (K / M), format_brl, format_percent_change
- format_date_br
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Optional, Union
from zoneinfo import ZoneInfo

from logico2.core.config import get_project_config


VEHICLE_CLASS_LABELS: Dict[str, str] = {
      "light": "VUC / Caminhão Leve"
    , "medium": "Toco / Médio"
    , "heavy": "Truck / Pesado"
    , "semi": "Carreta / Semi-reboque"
    , "road-train": "Bi-trem / Rodotrem"
}

FUEL_TYPE_LABELS: Dict[str, str] = {
      "diesel": "Diesel S10"
    , "diesel-b12": "Diesel B12"
    , "biodiesel": "Biodiesel B100"
}

ROUTE_TYPE_LABELS: Dict[str, str] = {
      "highway": "Rodovia"
    , "urban": "Urbana"
    , "mixed": "Mista"
    , "mountainous": "Montanhosa"
}

CARGO_TYPE_LABELS: Dict[str, str] = {
      "general": "Carga Geral"
    , "refrigerated": "Refrigerada"
    , "liquid": "Líquida (Tanque)"
    , "bulk": "Granel"
    , "container": "Contêiner"
    , "livestock": "Animais Vivos"
    , "dangerous": "Produtos Perigosos"
}

PERIOD_LABELS: Dict[str, str] = {
      "day": "Diário"
    , "week": "Semanal"
    , "month": "Mensal"
    , "year": "Anual"
}

REPORT_TYPE_LABELS: Dict[str, str] = {
      "annual": "Relatório Anual"
    , "quarterly": "Relatório Trimestral"
    , "monthly": "Relatório Mensal"
    , "sustainability": "Relatório de Sustentabilidade"
    , "compliance": "Relatório de Compliance"
}

STATUS_LABELS: Dict[str, str] = {
      "active": "Ativo"
    , "inactive": "Inativo"
    , "maintenance": "Manutenção"
    , "valid": "Válido"
    , "expired": "Expirado"
    , "pending": "Pendente"
    , "completed": "Concluído"
    , "in-progress": "Em andamento"
    , "planned": "Planejado"
    , "on-track": "No caminho certo"
    , "at-risk": "Em risco"
    , "behind": "Atrasado"
}


def label_for(table: Dict[str, str], key: str) -> str:
    """Label from `table`, falling back to the key itself."""
    return table.get(key, key)


# ────────────────────────────────────────────────────────────────────────────────
# Routes
# ────────────────────────────────────────────────────────────────────────────────

def format_distance(meters: float) -> str:
    """850 → "850 m"; 465_012 → "465.0 km"."""
    if meters < 1000:
        return f"{round(meters)} m"
    return f"{meters / 1000:.1f} km"


def format_duration(seconds: float) -> str:
    """20_880 → "5h 48min"; 2_520 → "42 minutos"."""
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    if hours > 0:
        return f"{hours}h {minutes}min"
    return f"{minutes} minutos"


# ────────────────────────────────────────────────────────────────────────────────
# Numbers
# ────────────────────────────────────────────────────────────────────────────────

def _group_br(value: float, decimals: int) -> str:
    # 1,234,567.89 → 1.234.567,89
    s = f"{value:,.{decimals}f}"
    return s.replace(",", "_").replace(".", ",").replace("_", ".")


def format_number(value: float) -> str:
    """
    Compact form used in reports: 1_500_000 → "1.5M", 45_000 → "45.0K",
    smaller values with pt-BR grouping and no decimals.
    """
    if abs(value) >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if abs(value) >= 1_000:
        return f"{value / 1_000:.1f}K"
    return _group_br(value, 0)


def format_decimal(value: float, decimals: int = 2) -> str:
    """pt-BR decimal with thousands grouping: 1234.5 → "1.234,50"."""
    return _group_br(value, decimals)


def format_brl(value: float) -> str:
    """15000 → "R$ 15.000,00"."""
    sign = "-" if value < 0 else ""
    return f"{sign}R$ {_group_br(abs(value), 2)}"


def percent_change(current: float, previous: float) -> Optional[float]:
    if not previous:
        return None
    return (current - previous) / previous * 100.0


def format_percent_change(current: float, previous: float) -> str:
    """
    "+4.2% ↑" / "-6.1% ↓"; "-" when there is no baseline.
    """
    change = percent_change(current, previous)
    if change is None:
        return "-"
    arrow = "↑" if change > 0 else "↓"
    sign = "+" if change > 0 else ""
    return f"{sign}{change:.1f}% {arrow}"


# ────────────────────────────────────────────────────────────────────────────────
# Dates
# ────────────────────────────────────────────────────────────────────────────────

def format_date_br(value: Union[date, datetime, str]) -> str:
    """
    dd/mm/yyyy. Aware datetimes are converted to the project timezone first;
    ISO strings ("2024-12-31") are accepted.
    """
    if isinstance(value, str):
        value = date.fromisoformat(value[:10])
    if isinstance(value, datetime) and value.tzinfo is not None:
        value = value.astimezone(ZoneInfo(get_project_config().timezone))
    return value.strftime("%d/%m/%Y")


def format_datetime_br(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(ZoneInfo(get_project_config().timezone))
    return value.strftime("%d/%m/%Y %H:%M")
