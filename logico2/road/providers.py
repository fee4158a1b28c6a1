# logico2/road/providers.py
# -*- coding: utf-8 -*-
"""
Provider wiring for the resolver tiers.

ProviderSet groups the clients each tier uses:
    primary  : ORS (geocode, suggest, route); None when ORS_API_KEY is unset
    geocoder : Nominatim (geocode, suggest)
    router   : OSRM (route)

Anything with the matching methods can stand in (tests pass fakes).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Optional

from logico2.infra.logging import get_logger
from .community import NominatimClient, OSRMClient
from .ors_client import ORSClient
from .ors_common import ProviderConfig

_log = get_logger(__name__)


@dataclass
class ProviderSet:
    primary: Optional[Any] = None
    geocoder: Optional[Any] = None
    router: Optional[Any] = None

    @classmethod
    def from_env(cls, *, ors_profile: Optional[str] = None) -> "ProviderSet":
        """
        Build real clients. Without ORS_API_KEY the primary tier is skipped.
        `ors_profile` overrides the ORS directions profile (e.g. "driving-hgv").
        """
        primary = None
        if os.getenv("ORS_API_KEY", "").strip():
            overrides = {"profile": ors_profile} if ors_profile else {}
            primary = ORSClient(ProviderConfig.for_ors(**overrides))
        else:
            _log.warning("ProviderSet.from_env: ORS_API_KEY not set; primary tier disabled")
        return cls(primary=primary, geocoder=NominatimClient(), router=OSRMClient())

    def close(self) -> None:
        for client in (self.primary, self.geocoder, self.router):
            close = getattr(client, "close", None)
            if callable(close):
                close()


_default: Optional[ProviderSet] = None


def get_default_providers() -> ProviderSet:
    """Process-wide ProviderSet, built on first use."""
    global _default
    if _default is None:
        _default = ProviderSet.from_env()
    return _default


__all__ = ["ProviderSet", "get_default_providers"]
