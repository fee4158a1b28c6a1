# logico2/reports/pdf_report.py
# -*- coding: utf-8 -*-
"""
Sustainability report → PDF (fpdf2)
===================================

Main entry points
-----------------
- render_report_pdf(report) -> bytes
- write_report_pdf(report, out_path) -> Path
- report_filename(report) -> str

Layout (A4, 20 mm margins)
--------------------------
header (brand box, title, company, period, type, timestamp)
RESUMO EXECUTIVO                      metrics table with period comparisons
EVOLUÇÃO DAS EMISSÕES                 monthly bar chart
ANÁLISE DA FROTA                      vehicles table + fleet counts
PRINCIPAIS ROTAS                      routes table
EVOLUÇÃO TEMPORAL (ÚLTIMOS 6 MESES)   timeline table
INICIATIVAS DE SUSTENTABILIDADE
CERTIFICAÇÕES E COMPLIANCE
DECLARAÇÃO DE VERACIDADE              declaration + signature line
footer on every page: brand line and "Página i de n"

Notes
-----
Core PDF fonts are latin-1 only: subscripts and arrows are transliterated
before drawing (CO₂ → CO2, ↑ → (+), ↓ → (-)).
"""

from __future__ import annotations

import re
import unicodedata
from datetime import datetime
from pathlib import Path
from typing import List, Sequence

from fpdf import FPDF
from fpdf.errors import FPDFException

from logico2.infra.logging import get_logger
from logico2.reports.formatting import (
      REPORT_TYPE_LABELS
    , STATUS_LABELS
    , format_brl
    , format_date_br
    , format_datetime_br
    , format_number
    , format_percent_change
    , label_for
)
from logico2.reports.report_data import ReportData

_log = get_logger(__name__)


class PDFGenerationFailure(RuntimeError):
    """Renderer failure; the user is asked to try again."""

    USER_MESSAGE = "Não foi possível gerar o relatório PDF. Tente novamente."


BRAND_GREEN = (34, 197, 94)
ROW_SHADE = (248, 250, 252)
BORDER_GREY = (200, 200, 200)
FOOTER_GREY = (128, 128, 128)
MARGIN_MM = 20.0
FONT = "Helvetica"

_MONTHS_SHORT = ("jan", "fev", "mar", "abr", "mai", "jun", "jul", "ago", "set", "out", "nov", "dez")

_LATIN1_SUBS = {
      "₂": "2"
    , "↑": "(+)"
    , "↓": "(-)"
    , "–": "-"
    , "—": "-"
    , "“": '"'
    , "”": '"'
    , "’": "'"
    , "…": "..."
}


def _latin1(text: str) -> str:
    s = str(text)
    for src, dst in _LATIN1_SUBS.items():
        s = s.replace(src, dst)
    return s.encode("latin-1", "replace").decode("latin-1")


def _month_label(period: str, *, with_year: bool = False) -> str:
    """'2024-03' → 'mar' (or 'mar/24')."""
    year, month = period.split("-")[:2]
    name = _MONTHS_SHORT[int(month) - 1]
    return f"{name}/{year[-2:]}" if with_year else name


# ────────────────────────────────────────────────────────────────────────────────
# Document
# ────────────────────────────────────────────────────────────────────────────────

class _ReportPDF(FPDF):

    def __init__(self) -> None:
        super().__init__(orientation="P", unit="mm", format="A4")
        self.set_margins(MARGIN_MM, MARGIN_MM, MARGIN_MM)
        self.set_auto_page_break(auto=True, margin=MARGIN_MM + 10)
        self.alias_nb_pages()

    @property
    def content_width(self) -> float:
        return self.w - 2 * MARGIN_MM

    def footer(self) -> None:
        self.set_y(-15)
        self.set_font(FONT, "", 8)
        self.set_text_color(*FOOTER_GREY)
        self.cell(self.content_width / 2, 10, _latin1("LogiCO₂ - Relatório de Sustentabilidade"))
        self.cell(self.content_width / 2, 10, _latin1(f"Página {self.page_no()} de {{nb}}"), align="R")
        self.set_text_color(0, 0, 0)

    # ── primitives ───────────────────────────────────────────────────────────
    def ensure_space(self, height: float) -> None:
        if self.get_y() + height > self.h - MARGIN_MM - 20:
            self.add_page()

    def text_line(self, text: str, *, h: float = 6, style: str = "", size: int = 10) -> None:
        self.set_font(FONT, style, size)
        self.set_x(MARGIN_MM)
        self.cell(self.content_width, h, _latin1(text), new_x="LMARGIN", new_y="NEXT")

    def body_text(self, text: str, *, h: float = 5, size: int = 10) -> None:
        self.set_font(FONT, "", size)
        self.set_x(MARGIN_MM)
        self.multi_cell(self.content_width, h, _latin1(text), new_x="LMARGIN", new_y="NEXT")

    def section_title(self, title: str) -> None:
        self.ensure_space(20)
        self.ln(4)
        self.set_text_color(*BRAND_GREEN)
        self.text_line(title, h=10, style="B", size=14)
        self.set_text_color(0, 0, 0)
        self.ln(2)

    def _fit_text(self, text: str, width: float) -> str:
        s = _latin1(text)
        if self.get_string_width(s) <= width:
            return s
        while s and self.get_string_width(s + "...") > width:
            s = s[:-1]
        return s + "..."

    def grid_table(self, headers: Sequence[str], rows: Sequence[Sequence[str]], widths: Sequence[float]) -> None:
        """Green header row, zebra rows, grey outline; cells truncated to fit."""
        row_h, head_h = 8.0, 10.0
        scale = self.content_width / float(sum(widths))
        cols = [w * scale for w in widths]

        self.ensure_space(head_h + row_h * (len(rows) + 1))
        top = self.get_y()

        self.set_fill_color(*BRAND_GREEN)
        self.set_text_color(255, 255, 255)
        self.set_font(FONT, "B", 10)
        self.set_x(MARGIN_MM)
        for head, w in zip(headers, cols):
            self.cell(w, head_h, self._fit_text(head, w - 3), fill=True)
        self.ln(head_h)

        self.set_text_color(0, 0, 0)
        self.set_font(FONT, "", 9)
        for i, row in enumerate(rows):
            if self.get_y() + row_h > self.h - MARGIN_MM - 20:
                self._draw_table_border(top)
                self.add_page()
                top = self.get_y()
                self.set_font(FONT, "", 9)
            self.set_fill_color(*ROW_SHADE)
            self.set_x(MARGIN_MM)
            for cell_text, w in zip(row, cols):
                self.cell(w, row_h, self._fit_text(cell_text, w - 3), fill=(i % 2 == 0))
            self.ln(row_h)

        self._draw_table_border(top)

    def _draw_table_border(self, top: float) -> None:
        self.set_draw_color(*BORDER_GREY)
        self.set_line_width(0.1)
        self.rect(MARGIN_MM, top, self.content_width, self.get_y() - top)


# ────────────────────────────────────────────────────────────────────────────────
# Sections
# ────────────────────────────────────────────────────────────────────────────────

def _header(pdf: _ReportPDF, data: ReportData) -> None:
    y0 = pdf.get_y()
    pdf.set_fill_color(*BRAND_GREEN)
    pdf.rect(MARGIN_MM, y0, 30, 15, style="F")
    pdf.set_text_color(255, 255, 255)
    pdf.set_font(FONT, "B", 12)
    pdf.set_xy(MARGIN_MM, y0)
    pdf.cell(30, 15, _latin1("LogiCO₂"), align="C")

    pdf.set_text_color(0, 0, 0)
    pdf.set_xy(MARGIN_MM, y0 + 18)
    pdf.set_font(FONT, "B", 20)
    pdf.cell(pdf.content_width, 12, _latin1("RELATÓRIO DE SUSTENTABILIDADE"), align="C", new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)

    pdf.text_line(f"Empresa: {data.company.name}", size=12)
    pdf.text_line(f"CNPJ: {data.company.cnpj}", size=12)
    pdf.text_line(f"Endereço: {data.company.address}", size=12)
    pdf.text_line(
        f"Período: {format_date_br(data.period.start)} a {format_date_br(data.period.end)}",
        style="B", size=12,
    )
    pdf.text_line(f"Tipo: {label_for(REPORT_TYPE_LABELS, data.report_type)}", style="B", size=12)
    pdf.text_line(f"Gerado em: {format_datetime_br(data.generated_at)}", style="B", size=12)

    pdf.ln(6)
    pdf.set_draw_color(*BRAND_GREEN)
    pdf.set_line_width(0.5)
    y = pdf.get_y()
    pdf.line(MARGIN_MM, y, pdf.w - MARGIN_MM, y)
    pdf.ln(6)


def _executive_summary(pdf: _ReportPDF, data: ReportData) -> None:
    s = data.summary
    prev = data.comparison
    pdf.section_title("RESUMO EXECUTIVO")
    rows = [
          ["Emissões Totais de CO₂", f"{format_number(s.total_emissions_kg)} kg"
            , format_percent_change(s.total_emissions_kg, prev.previous_emissions_kg) if prev else ""]
        , ["Distância Total Percorrida", f"{format_number(s.total_distance_km)} km"
            , format_percent_change(s.total_distance_km, prev.previous_distance_km) if prev else ""]
        , ["Total de Viagens", f"{s.total_trips}", ""]
        , ["Combustível Consumido", f"{format_number(s.total_fuel_liters)} L", ""]
        , ["Eficiência Média", f"{s.average_efficiency_km_per_l} km/L"
            , format_percent_change(s.average_efficiency_km_per_l, prev.previous_efficiency_km_per_l) if prev else ""]
        , ["Pegada Hídrica", f"{format_number(s.water_footprint_liters)} L", ""]
        , ["Equivalente em Árvores", format_number(s.trees_equivalent), "Absorver CO₂ em 1 ano"]
    ]
    pdf.grid_table(["Métrica", "Valor", "Comparação"], rows, [55, 35, 80])
    if prev is not None:
        pdf.ln(3)
        pdf.text_line(
            f"Média do setor: {format_number(prev.industry_avg_emissions_kg)} kg CO₂, "
            f"{prev.industry_avg_efficiency_km_per_l} km/L. Posição no setor: {prev.industry_ranking}º.",
            size=9,
        )


def _emissions_chart(pdf: _ReportPDF, data: ReportData) -> None:
    chart_h = 60.0
    pdf.ensure_space(chart_h + 40)
    pdf.section_title("EVOLUÇÃO DAS EMISSÕES")
    pdf.text_line("Emissões Mensais (kg CO₂)", style="B", size=10)

    top = pdf.get_y() + 2
    width = pdf.content_width
    pdf.set_fill_color(*ROW_SHADE)
    pdf.rect(MARGIN_MM, top, width, chart_h, style="F")

    points = data.timeline
    bar_w = width / max(len(points), 1)
    peak = max([p.emissions_kg for p in points] + [1.0])
    pdf.set_font(FONT, "", 8)
    for i, p in enumerate(points):
        bar_h = (p.emissions_kg / peak) * (chart_h - 10)
        x = MARGIN_MM + i * bar_w + bar_w * 0.1
        y = top + chart_h - bar_h - 5
        pdf.set_fill_color(*BRAND_GREEN)
        pdf.rect(x, y, bar_w * 0.8, bar_h, style="F")
        pdf.set_xy(x, top + chart_h + 1)
        pdf.cell(bar_w * 0.8, 5, _month_label(p.period), align="C")

    pdf.set_xy(MARGIN_MM, top + chart_h + 8)


def _fleet(pdf: _ReportPDF, data: ReportData) -> None:
    pdf.ensure_space(80)
    pdf.section_title("ANÁLISE DA FROTA")
    rows = [
        [
              v.plate
            , v.model
            , str(v.year)
            , f"{format_number(v.emissions_kg)} kg"
            , f"{format_number(v.distance_km)} km"
            , f"{v.efficiency_km_per_l} km/L"
        ]
        for v in data.vehicles
    ]
    pdf.grid_table(["Veículo", "Modelo", "Ano", "Emissões", "Distância", "Eficiência"], rows, [25, 35, 15, 25, 25, 25])
    pdf.ln(4)
    pdf.text_line(f"Total de veículos: {len(data.vehicles)}", h=5)
    pdf.text_line(f"Veículos ativos: {sum(1 for v in data.vehicles if v.status == 'active')}", h=5)
    pdf.text_line(f"Em manutenção: {sum(1 for v in data.vehicles if v.status == 'maintenance')}", h=5)


def _routes(pdf: _ReportPDF, data: ReportData) -> None:
    pdf.ensure_space(60)
    pdf.section_title("PRINCIPAIS ROTAS")
    rows = [
        [
              r.name
            , f"{r.distance_km:g} km"
            , f"{r.frequency} viagens"
            , f"{format_number(r.emissions_kg)} kg"
            , f"{r.avg_time_min // 60}h {r.avg_time_min % 60}min"
        ]
        for r in data.routes
    ]
    pdf.grid_table(["Rota", "Distância", "Frequência", "Emissões", "Tempo"], rows, [40, 25, 25, 25, 25])


def _timeline(pdf: _ReportPDF, data: ReportData) -> None:
    pdf.ensure_space(80)
    pdf.section_title("EVOLUÇÃO TEMPORAL (ÚLTIMOS 6 MESES)")
    rows = [
        [
              _month_label(p.period, with_year=True)
            , f"{format_number(p.emissions_kg)} kg"
            , f"{format_number(p.distance_km)} km"
            , str(p.trips)
            , f"{p.efficiency_km_per_l} km/L"
        ]
        for p in data.timeline[-6:]
    ]
    pdf.grid_table(["Mês", "Emissões", "Distância", "Viagens", "Eficiência"], rows, [30, 35, 35, 20, 30])


def _initiatives(pdf: _ReportPDF, data: ReportData) -> None:
    pdf.ensure_space(100)
    pdf.section_title("INICIATIVAS DE SUSTENTABILIDADE")
    for item in data.initiatives:
        pdf.ensure_space(40)
        pdf.text_line(item.name, h=8, style="B", size=11)
        pdf.body_text(item.description)
        pdf.ln(2)
        pdf.text_line(f"Impacto: -{format_number(item.impact_kg)} kg CO₂", h=5)
        pdf.text_line(f"Investimento: {format_brl(item.investment_brl)}", h=5)
        pdf.text_line(f"Status: {label_for(STATUS_LABELS, item.status)}", h=5)
        pdf.ln(5)

    if data.targets is not None:
        t = data.targets
        pdf.text_line(
            f"Metas: reduzir emissões em {t.emission_reduction_percent:g}% e melhorar a eficiência em "
            f"{t.efficiency_improvement_percent:g}% até {format_date_br(t.deadline)} "
            f"({label_for(STATUS_LABELS, t.status)}).",
            h=5, style="B",
        )


def _compliance(pdf: _ReportPDF, data: ReportData) -> None:
    pdf.ensure_space(60)
    pdf.section_title("CERTIFICAÇÕES E COMPLIANCE")
    rows = [
        [c.name, c.issuer, format_date_br(c.valid_until), label_for(STATUS_LABELS, c.status)]
        for c in data.certifications
    ]
    pdf.grid_table(["Certificação", "Emissor", "Válido até", "Status"], rows, [40, 60, 25, 25])


def _declaration(pdf: _ReportPDF, data: ReportData) -> None:
    pdf.ensure_space(60)
    pdf.section_title("DECLARAÇÃO DE VERACIDADE")
    pdf.body_text(
        "Declaro que as informações contidas neste relatório são verdadeiras e foram "
        "elaboradas com base em dados reais de operação da empresa "
        f"{data.company.name}, CNPJ {data.company.cnpj}, referentes ao período de "
        f"{format_date_br(data.period.start)} a {format_date_br(data.period.end)}."
    )
    pdf.ln(8)
    pdf.text_line(f"Local e Data: São Paulo, {format_date_br(data.generated_at)}")
    pdf.ln(18)
    y = pdf.get_y()
    pdf.set_draw_color(0, 0, 0)
    pdf.line(MARGIN_MM, y, MARGIN_MM + 60, y)
    pdf.ln(3)
    pdf.text_line("Assinatura do Responsável")


_SECTIONS = (
      _header
    , _executive_summary
    , _emissions_chart
    , _fleet
    , _routes
    , _timeline
    , _initiatives
    , _compliance
    , _declaration
)


# ────────────────────────────────────────────────────────────────────────────────
# Public API
# ────────────────────────────────────────────────────────────────────────────────

def render_report_pdf(report: ReportData) -> bytes:
    """
    Render `report` and return the PDF bytes.

    Raises
    ------
    PDFGenerationFailure
        Any renderer error or malformed report data.
    """
    try:
        pdf = _ReportPDF()
        pdf.add_page()
        for section in _SECTIONS:
            section(pdf, report)
        out = bytes(pdf.output())
    except (FPDFException, AttributeError, KeyError, TypeError, ValueError, IndexError) as exc:
        _log.error("render_report_pdf: failed (%s: %s)", type(exc).__name__, exc)
        raise PDFGenerationFailure(PDFGenerationFailure.USER_MESSAGE) from exc

    _log.info(
        "render_report_pdf: company=%s pages=%s size=%s B",
        report.company.id, pdf.page_no(), len(out),
    )
    return out


def report_filename(report: ReportData) -> str:
    """relatorio-sustentabilidade-<company-slug>-<start>.pdf"""
    name = unicodedata.normalize("NFKD", report.company.name).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return f"relatorio-sustentabilidade-{slug}-{report.period.start.isoformat()}.pdf"


def write_report_pdf(report: ReportData, out_path: str | Path) -> Path:
    path = Path(out_path)
    if path.is_dir():
        path = path / report_filename(report)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(render_report_pdf(report))
    _log.info("write_report_pdf: wrote %s", path)
    return path


__all__ = [
      "PDFGenerationFailure"
    , "render_report_pdf"
    , "report_filename"
    , "write_report_pdf"
]
