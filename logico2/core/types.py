# logico2/core/types.py
# -*- coding: utf-8 -*-

"""
Shared type aliases, category vocabularies and lightweight protocols.

Importable from anywhere without creating circular dependencies.

Contents
--------
- CoordinatePair: (lat, lon) tuple
- Category keys: vehicle classes, fuel types, route types, periods, cargo types
- HasLatLon: Protocol for duck-typed points
"""

from __future__ import annotations

from typing import Protocol, Tuple, runtime_checkable


# ────────────────────────────────────────────────────────────────────────────────
# Geographic helpers
# ────────────────────────────────────────────────────────────────────────────────

CoordinatePair = Tuple[float, float]
"""Simple (lat, lon) pair in decimal degrees."""


# ────────────────────────────────────────────────────────────────────────────────
# Category vocabularies (keys as used by forms, CSVs and CLIs)
# ────────────────────────────────────────────────────────────────────────────────

VEHICLE_CLASSES: Tuple[str, ...] = ("light", "medium", "heavy", "semi", "road-train")
FUEL_TYPES: Tuple[str, ...] = ("diesel", "diesel-b12", "biodiesel")
ROUTE_TYPES: Tuple[str, ...] = ("highway", "urban", "mixed", "mountainous")
PERIODS: Tuple[str, ...] = ("day", "week", "month", "year")
CARGO_TYPES: Tuple[str, ...] = (
    "general", "refrigerated", "liquid", "bulk", "container", "livestock", "dangerous"
)


# ────────────────────────────────────────────────────────────────────────────────
# Lightweight protocols
# ────────────────────────────────────────────────────────────────────────────────

@runtime_checkable
class HasLatLon(Protocol):
    """
    Anything exposing `lat` and `lon` attributes (Coordinates, GeoPoint, ...).
    """

    lat: float
    lon: float
