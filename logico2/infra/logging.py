# logico2/infra/logging.py
# -*- coding: utf-8 -*-

"""
Logging setup shared by every LogiCO2 entry point.

Library modules only call `get_logger(__name__)`; scripts call
`init_logging()` once, before doing any work.

    from logico2.infra.logging import init_logging, get_logger

    init_logging(level="INFO", write_output=True)   # stdout + logs/<script>__<ts>.log
    log = get_logger(__name__)

Environment
-----------
- LOGICO2_LOG_LEVEL overrides the `level` argument.

Third-party chatter
-------------------
urllib3 (connection pool / retries) and fontTools (fpdf2 font subsetting)
log at INFO/DEBUG on every request and page. They are held at WARNING
unless the project level itself is DEBUG.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

LOG_LEVEL_ENV = "LOGICO2_LOG_LEVEL"
LOG_FORMAT = "[{asctime}][{levelname}][{name}] {message}"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

NOISY_LOGGERS = ("urllib3", "fontTools", "fpdf")

_DEFAULT_LOGS_DIR = Path("logs")

_state = {
      "logs_dir": _DEFAULT_LOGS_DIR
    , "log_file": None
}


# ────────────────────────────────────────────────────────────────────────────────
# Introspection
# ────────────────────────────────────────────────────────────────────────────────

def get_logs_dir() -> Path:
    return _state["logs_dir"]


def get_current_log_path() -> Optional[Path]:
    """
    File written by the last init_logging() call, or by any FileHandler on
    the root logger when logging was set up elsewhere; None for stdout only.
    """
    if _state["log_file"] is not None:
        return _state["log_file"]
    files: List[Path] = [
        Path(h.baseFilename) for h in logging.getLogger().handlers
        if isinstance(h, logging.FileHandler)
    ]
    return files[0] if files else None


# ────────────────────────────────────────────────────────────────────────────────
# Setup
# ────────────────────────────────────────────────────────────────────────────────

def _resolve_level(level: str) -> int:
    name = os.getenv(LOG_LEVEL_ENV) or level
    return getattr(logging, str(name).upper(), logging.INFO)


def _run_log_file(logs_dir: Optional[Path]) -> Path:
    """logs/<script>__YYYYmmdd-HHMMSS.log, e.g. plan_route__20251117-174709.log"""
    base = Path(logs_dir) if logs_dir is not None else _DEFAULT_LOGS_DIR
    stem = Path(sys.argv[0] or "").stem
    if stem in {"", "-m", "-c"}:
        stem = "logico2"
    return base / f"{stem}__{datetime.now():%Y%m%d-%H%M%S}.log"


def init_logging(
      level: str = "INFO"
    , *
    , force: bool = True
    , write_output: bool = False
    , log_file: Optional[Path] = None
    , logs_dir: Optional[Path] = None
) -> Optional[Path]:
    """
    Configure the root logger: stdout always, plus a file when asked.

    Parameters
    ----------
    level : str
        DEBUG | INFO | WARNING | ERROR | CRITICAL (LOGICO2_LOG_LEVEL wins).
    force : bool
        Drop handlers already on the root logger first.
    write_output : bool
        Add a per-run file under `logs_dir` (default ./logs).
    log_file : Path | None
        Explicit file; implies write_output.
    logs_dir : Path | None

    Returns
    -------
    Path | None
        The log file in use, if any.
    """
    numeric_level = _resolve_level(level)
    root = logging.getLogger()
    if force:
        for handler in list(root.handlers):
            root.removeHandler(handler)
    root.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT, style="{")
    console = logging.StreamHandler(stream=sys.stdout)
    console.setFormatter(formatter)
    root.addHandler(console)

    _state["log_file"] = None
    if write_output or log_file is not None:
        path = Path(log_file) if log_file is not None else _run_log_file(logs_dir)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        _state["logs_dir"] = path.parent
        _state["log_file"] = path.resolve()

    quiet = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet)

    get_logger(__name__).info(
        "Logging configured (level=%s, file=%s)",
        logging.getLevelName(numeric_level), _state["log_file"] or "-",
    )
    return _state["log_file"]


# ────────────────────────────────────────────────────────────────────────────────
# Helpers
# ────────────────────────────────────────────────────────────────────────────────

def log_banner(
      log: logging.Logger
    , msg: str
    , *
    , char: str = "="
    , width: int = 60
    , box: bool = False
) -> None:
    """Section banner: bar / message / bar, or a centred Unicode box."""
    if box:
        top = "╔" + "═" * width + "╗"
        bottom = "╚" + "═" * width + "╝"
        lines = [top, "║" + f" {msg} ".center(width) + "║", bottom]
    else:
        lines = [char * width, msg, char * width]
    for line in lines:
        log.info(line)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or "logico2")
