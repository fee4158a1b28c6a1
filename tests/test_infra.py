# tests/test_infra.py
# -*- coding: utf-8 -*-

import logging

from logico2.core.config import get_project_config, get_routing_defaults
from logico2.infra.logging import get_current_log_path, get_logger, init_logging, log_banner


def test_config_defaults():
    project = get_project_config()
    routing = get_routing_defaults()
    assert (project.default_country, project.default_country_iso3) == ("BR", "BRA")
    assert project.timezone == "America/Sao_Paulo"
    assert routing.primary_profile == "driving-car"
    assert routing.max_suggestions == 5


def test_init_logging_writes_file(tmp_path, monkeypatch):
    monkeypatch.delenv("LOGICO2_LOG_LEVEL", raising=False)
    log_file = tmp_path / "run.log"
    init_logging("DEBUG", log_file=log_file)
    log = get_logger("tests.infra")

    log_banner(log, "LogiCO2", box=True)
    log.debug("hello %s", "file")
    for h in logging.getLogger().handlers:
        h.flush()

    assert get_current_log_path() == log_file.resolve()
    text = log_file.read_text(encoding="utf-8")
    assert "[DEBUG][tests.infra] hello file" in text
    assert "╔" in text

    init_logging("INFO")


def test_env_level_override(monkeypatch):
    monkeypatch.setenv("LOGICO2_LOG_LEVEL", "ERROR")
    init_logging("DEBUG")
    assert logging.getLogger().level == logging.ERROR
    monkeypatch.delenv("LOGICO2_LOG_LEVEL")
    init_logging("INFO")
