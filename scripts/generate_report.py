#!/usr/bin/env python3
# scripts/generate_report.py
# -*- coding: utf-8 -*-

"""
Render the sustainability report PDF for one company and period.

    python scripts/generate_report.py --company transportadora-abc --period Q4-2024 \
        --report-type quarterly --out reports/
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
import random

from logico2.core.models import InvalidInput
from logico2.infra.logging import init_logging
from logico2.reports.pdf_report import PDFGenerationFailure, write_report_pdf
from logico2.reports.report_data import (
      COMPANIES
    , PERIOD_OPTIONS
    , REPORT_TYPE_MULTIPLIERS
    , generate_mock_report
)

log = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Generate the sustainability report PDF.")
    p.add_argument("--company", default="transportadora-abc", choices=sorted(COMPANIES))
    p.add_argument(
          "--period"
        , default=PERIOD_OPTIONS[0]
        , help=f"YYYY, Qn-YYYY or Mon-YYYY (e.g. {', '.join(PERIOD_OPTIONS)})."
    )
    p.add_argument("--report-type", default="annual", choices=sorted(REPORT_TYPE_MULTIPLIERS))
    p.add_argument("--seed", type=int, default=None, help="Seed for reproducible figures.")
    p.add_argument("--out", type=Path, default=Path("reports"), help="Output directory or .pdf path.")
    p.add_argument("--json", action="store_true", help="Print the report data as JSON instead of rendering.")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)

    init_logging(level=args.log_level, force=True, write_output=False)

    try:
        report = generate_mock_report(
              args.period
            , args.report_type
            , args.company
            , rng=random.Random(args.seed) if args.seed is not None else None
        )
    except InvalidInput as exc:
        log.error("%s", exc)
        return 2

    if args.json:
        print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
        return 0

    out = args.out
    if out.suffix.lower() != ".pdf":
        out.mkdir(parents=True, exist_ok=True)
    try:
        path = write_report_pdf(report, out)
    except PDFGenerationFailure as exc:
        log.error("%s", exc)
        return 1

    log.info("Report → %s", path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
