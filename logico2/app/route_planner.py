# logico2/app/route_planner.py
# -*- coding: utf-8 -*-
"""
Route planner session
=====================

Holds what a user has typed/selected for one origin → destination pair and
turns resolver outcomes into pt-BR messages a front-end can show as is.

    planner = RoutePlanner()
    planner.set_origin("Av. Paulista, 1000 - São Paulo")
    planner.set_destination("-22.9068,-43.1729")
    route = await planner.calculate()
    planner.error, planner.summary()

State is per-session and owned by the caller; the resolver functions it
calls are stateless.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from logico2.addressing.resolver import geocode_address
from logico2.core.models import GeoPoint, InvalidInput, RouteResult
from logico2.infra.logging import get_logger
from logico2.reports.formatting import format_distance, format_duration
from logico2.road.ors_common import AddressNotFound
from logico2.road.providers import ProviderSet
from logico2.road.router import calculate_route

_log = get_logger(__name__)


MSG_MISSING_INPUT = "Por favor, informe os endereços de origem e destino."
MSG_ORIGIN_NOT_FOUND = "Não foi possível encontrar o endereço de origem. Tente ser mais específico."
MSG_DESTINATION_NOT_FOUND = "Não foi possível encontrar o endereço de destino. Tente ser mais específico."
MSG_ADDRESSES_NOT_FOUND = (
    "Não foi possível encontrar os endereços informados. "
    "Verifique a ortografia e tente novamente."
)
MSG_ROUTE_FAILED = (
    "Não foi possível calcular a rota entre os pontos selecionados. "
    "Isso pode acontecer quando não há rotas terrestres diretas disponíveis "
    "ou quando os serviços de roteamento estão indisponíveis."
)
MSG_ESTIMATED = (
    "Rota estimada: os serviços de roteamento não responderam e a distância "
    "foi aproximada a partir de cidades de referência."
)


class RoutePlanner:

    def __init__(
        self,
        providers: Optional[ProviderSet] = None,
        *,
        timeout_s: float | None = None,
    ) -> None:
        self._providers = providers
        self._timeout_s = timeout_s
        self.origin_text: str = ""
        self.destination_text: str = ""
        self.origin: Optional[GeoPoint] = None
        self.destination: Optional[GeoPoint] = None
        self.route: Optional[RouteResult] = None
        self.error: Optional[str] = None

    # ── input ────────────────────────────────────────────────────────────────
    def set_origin(self, text: str) -> None:
        """Typed text; a previously resolved origin no longer applies."""
        if text != self.origin_text:
            self.origin_text = text
            self.origin = None
            self.route = None
        self.error = None

    def set_destination(self, text: str) -> None:
        if text != self.destination_text:
            self.destination_text = text
            self.destination = None
            self.route = None
        self.error = None

    async def select_origin(self, address: str) -> Optional[RouteResult]:
        """
        A suggestion was picked: geocode it and route if the other side is known.
        """
        self.set_origin(address)
        try:
            self.origin = await self._geocode(address)
        except (AddressNotFound, InvalidInput) as exc:
            _log.warning("select_origin: %s", exc)
            self.error = MSG_ORIGIN_NOT_FOUND
            return None
        if self.destination is not None:
            return await self._route()
        return None

    async def select_destination(self, address: str) -> Optional[RouteResult]:
        self.set_destination(address)
        try:
            self.destination = await self._geocode(address)
        except (AddressNotFound, InvalidInput) as exc:
            _log.warning("select_destination: %s", exc)
            self.error = MSG_DESTINATION_NOT_FOUND
            return None
        if self.origin is not None:
            return await self._route()
        return None

    async def swap(self) -> Optional[RouteResult]:
        """
        Exchange origin and destination (text and coordinates); re-route
        when both sides are already resolved.
        """
        self.origin_text, self.destination_text = self.destination_text, self.origin_text
        self.origin, self.destination = self.destination, self.origin
        self.route = None
        self.error = None
        if self.origin is not None and self.destination is not None:
            return await self._route()
        return None

    # ── actions ──────────────────────────────────────────────────────────────
    async def calculate(self) -> Optional[RouteResult]:
        """
        Geocode whichever side is still unresolved, then route.
        Failures end up in `self.error`; nothing is raised.
        """
        if not self.origin_text.strip() or not self.destination_text.strip():
            self.error = MSG_MISSING_INPUT
            return None

        self.error = None
        try:
            if self.origin is None:
                self.origin = await self._geocode(self.origin_text)
            if self.destination is None:
                self.destination = await self._geocode(self.destination_text)
        except (AddressNotFound, InvalidInput) as exc:
            _log.warning("calculate: geocoding failed (%s)", exc)
            self.error = MSG_ADDRESSES_NOT_FOUND
            return None

        return await self._route()

    def summary(self) -> Dict[str, Any]:
        """Display-ready view of the current state."""
        out: Dict[str, Any] = {
              "origin": self.origin.label if self.origin else self.origin_text
            , "destination": self.destination.label if self.destination else self.destination_text
            , "error": self.error
        }
        if self.route is not None:
            out.update({
                  "distance": format_distance(self.route.distance_meters)
                , "duration": format_duration(self.route.duration_seconds)
                , "is_estimated": self.route.is_estimated
                , "source": self.route.source
                , "notice": MSG_ESTIMATED if self.route.source == "heuristic" else None
            })
        return out

    # ── internals ────────────────────────────────────────────────────────────
    async def _geocode(self, text: str) -> GeoPoint:
        return await geocode_address(text, providers=self._providers, timeout_s=self._timeout_s)

    async def _route(self) -> Optional[RouteResult]:
        if self.origin is None or self.destination is None:
            _log.warning("route: both sides must be resolved first")
            self.route = None
            self.error = MSG_MISSING_INPUT
            return None
        try:
            self.route = await calculate_route(
                  self.origin
                , self.destination
                , providers=self._providers
                , timeout_s=self._timeout_s
            )
        except InvalidInput as exc:
            _log.error("route: %s", exc)
            self.route = None
            self.error = MSG_ROUTE_FAILED
        return self.route


__all__ = ["RoutePlanner"]
