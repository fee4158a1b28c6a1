# logico2/core/config.py
# -*- coding: utf-8 -*-

"""
Core configuration models and globals.

Pure configuration structures, independent of any HTTP client, safe to import
from anywhere.

Current contents
----------------
- ProjectConfig: country/locale defaults for the whole project
- RoutingDefaults: routing profile, per-tier timeout and suggestion knobs
"""

from __future__ import annotations

import os
from dataclasses import dataclass


# ────────────────────────────────────────────────────────────────────────────────
# High-level project configuration
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ProjectConfig:
    """
    Global project configuration.

    Attributes
    ----------
    default_country : str
        ISO 3166-1 alpha-2 code (used by Nominatim `countrycodes`).
    default_country_iso3 : str
        ISO 3166-1 alpha-3 code (used by ORS `boundary.country`).
    default_language : str
        Language tag for labels and provider `Accept-Language`.
    timezone : str
        IANA timezone used when rendering dates for users.
    user_agent : str
        Sent to every external provider.
    """

    default_country: str = "BR"
    default_country_iso3: str = "BRA"
    default_language: str = "pt-BR"
    timezone: str = "America/Sao_Paulo"
    user_agent: str = "LogiCO2-Calculator/1.0"


# ────────────────────────────────────────────────────────────────────────────────
# Routing defaults
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RoutingDefaults:
    """
    Routing-related defaults.

    Attributes
    ----------
    primary_profile : str
        ORS directions profile.
    tier_timeout_s : float
        Upper bound for a single provider tier before falling through.
    suggestion_debounce_s : float
        Quiet period after the last keystroke before querying suggestions.
    suggestion_min_chars : int
        Shorter inputs never trigger a lookup.
    max_suggestions : int
        Size of the suggestion list.
    """

    primary_profile: str = "driving-car"
    tier_timeout_s: float = 10.0
    suggestion_debounce_s: float = 0.5
    suggestion_min_chars: int = 3
    max_suggestions: int = 5


# ────────────────────────────────────────────────────────────────────────────────
# Singleton-style instances
# ────────────────────────────────────────────────────────────────────────────────

PROJECT_CONFIG = ProjectConfig()
ROUTING_DEFAULTS = RoutingDefaults(
    tier_timeout_s=float(os.getenv("LOGICO2_TIER_TIMEOUT_S", "10.0")),
)


def get_project_config() -> ProjectConfig:
    """
    Return the global project configuration.

    Kept as a function so it can become dynamic without touching call sites.
    """
    return PROJECT_CONFIG


def get_routing_defaults() -> RoutingDefaults:
    """
    Return the global routing defaults.
    """
    return ROUTING_DEFAULTS
