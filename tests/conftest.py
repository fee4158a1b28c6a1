# tests/conftest.py
# -*- coding: utf-8 -*-

from __future__ import annotations

# --- path bootstrap ---
from pathlib import Path
import sys
ROOT = Path(__file__).resolve().parents[1]  # repo root (one level above /tests)
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
# ----------------------

import importlib.util
from typing import Any, Callable, Dict, List, Optional

import pytest

from logico2.core.models import Coordinates, GeoPoint, RouteResult
from logico2.road.ors_common import ProviderUnavailable
from logico2.road.providers import ProviderSet


SAO_PAULO = Coordinates(lat=-23.5505, lon=-46.6333)
RIO = Coordinates(lat=-22.9068, lon=-43.1729)

_INVALID_JSON = object()


# ────────────────────────────────────────────────────────────────────────────────
# HTTP fakes
# ────────────────────────────────────────────────────────────────────────────────

class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        payload: Any = None,
        *,
        headers: Optional[Dict[str, str]] = None,
        text: str = "",
    ) -> None:
        self.status_code = status_code
        self._payload = payload
        self.headers = headers or {}
        self.text = text

    def json(self) -> Any:
        if self._payload is _INVALID_JSON:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    """Stands in for requests.Session: replays queued responses, records calls."""

    def __init__(self, *responses: Any) -> None:
        self._queue: List[Any] = list(responses)
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def request(self, method, url, params=None, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "params": params, "json": json, "timeout": timeout})
        item = self._queue.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def close(self) -> None:
        self.closed = True


# ────────────────────────────────────────────────────────────────────────────────
# Provider fakes
# ────────────────────────────────────────────────────────────────────────────────

class FakeProvider:
    """
    Provider protocol double. Each behaviour is a value, an exception (raised)
    or a callable (called with the same arguments).
    """

    def __init__(self, *, geocode: Any = None, suggest: Any = None, route: Any = None) -> None:
        self._behaviour = {"geocode": geocode, "suggest": suggest, "route": route}
        self.calls: Dict[str, List[tuple]] = {"geocode": [], "suggest": [], "route": []}

    def _act(self, op: str, *args: Any) -> Any:
        self.calls[op].append(args)
        b = self._behaviour[op]
        if isinstance(b, BaseException):
            raise b
        if callable(b):
            return b(*args)
        if b is None:
            raise ProviderUnavailable(f"fake: {op} not configured")
        return b

    def geocode(self, text: str) -> GeoPoint:
        return self._act("geocode", text)

    def suggest(self, text: str, limit: int = 5) -> List[str]:
        return self._act("suggest", text, limit)

    def route(self, start: Coordinates, end: Coordinates) -> RouteResult:
        return self._act("route", start, end)


def make_route(source: str = "ors", n_points: int = 5, distance_m: float = 430_000.0) -> RouteResult:
    lats = [SAO_PAULO.lat + (RIO.lat - SAO_PAULO.lat) * i / (n_points - 1) for i in range(n_points)]
    lons = [SAO_PAULO.lon + (RIO.lon - SAO_PAULO.lon) * i / (n_points - 1) for i in range(n_points)]
    return RouteResult.from_path(
          distance_meters=distance_m
        , duration_seconds=distance_m / 1000.0 * 50.0
        , geometry=[Coordinates(lat=a, lon=b) for a, b in zip(lats, lons)]
        , source=source
    )


@pytest.fixture
def fake_providers() -> Callable[..., ProviderSet]:
    def _make(primary: Any = None, geocoder: Any = None, router: Any = None) -> ProviderSet:
        return ProviderSet(primary=primary, geocoder=geocoder, router=router)
    return _make


@pytest.fixture
def invalid_json() -> Any:
    return _INVALID_JSON


# ────────────────────────────────────────────────────────────────────────────────
# Script loader
# ────────────────────────────────────────────────────────────────────────────────

def load_script(name: str):
    path = ROOT / "scripts" / f"{name}.py"
    spec = importlib.util.spec_from_file_location(f"scripts_{name}", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
