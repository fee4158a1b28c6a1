#!/usr/bin/env python3
# scripts/bulk_emissions.py
# -*- coding: utf-8 -*-

"""
Batch CO2 estimates: one row per operation in, same rows plus result
columns out. Invalid rows are kept with the reason in `error`.

    python scripts/bulk_emissions.py --input data/operations.csv --output data/operations_co2.csv
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
import logging

from logico2.core.models import InvalidInput
from logico2.emissions.bulk import estimate_frame, load_operations_csv, write_results_csv
from logico2.infra.logging import get_current_log_path, init_logging, log_banner

log = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Estimate CO2 for every operation of a CSV and write the results CSV."
    )
    p.add_argument("--input", type=Path, required=True, help="Operations CSV.")
    p.add_argument(
          "--output"
        , type=Path
        , default=None
        , help="Results CSV. Default: <input>_co2.csv next to the input."
    )
    p.add_argument("--current-year", type=int, default=None, help="Reference year for vehicle age.")
    p.add_argument(
          "--no-validate"
        , dest="validate"
        , action="store_false"
        , help="Skip form validation; only the estimator's own checks apply."
    )
    p.add_argument("--write-log", action="store_true", help="Also write a log file under logs/.")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)

    init_logging(level=args.log_level, force=True, write_output=args.write_log)
    log_banner(log, "Bulk emissions", box=True)

    out_path = args.output or args.input.with_name(f"{args.input.stem}_co2.csv")

    try:
        df = load_operations_csv(args.input)
    except (FileNotFoundError, InvalidInput) as exc:
        log.error("%s", exc)
        return 2

    res = estimate_frame(df, current_year=args.current_year, validate=args.validate)
    write_results_csv(res, out_path)

    n_err = int(res["error"].notna().sum())
    log.info("Done: %s rows, %s with errors → %s", len(res), n_err, out_path)
    log_path = get_current_log_path()
    if log_path is not None:
        log.info("Log file → %s", log_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
