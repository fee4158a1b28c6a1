# logico2/road/ors_client.py
# -*- coding: utf-8 -*-
"""
Concrete ORS HTTP client (primary tier):
- Composes GeocodingMixin + RoutingMixin over JSONHTTPClient
- Provider protocol: geocode(text), suggest(text, limit), route(start, end)

Notes
-----
• Keep infra knobs in ProviderConfig (timeouts, retries, UA, API key).
• Entry points should call init_logging(); this module only fetches the logger.
"""

from __future__ import annotations

from typing import Any as _Any

from logico2.infra.logging import get_logger
from .http import JSONHTTPClient
from .ors_common import ProviderConfig
from .ors_mixins import GeocodingMixin, RoutingMixin

_log = get_logger(__name__)


class ORSClient(GeocodingMixin, RoutingMixin, JSONHTTPClient):
    """
    ORSClient(cfg=ProviderConfig.for_ors(...)) or ORSClient.from_env().
    """

    def __init__(
        self,
        cfg: ProviderConfig | None = None,
        *,
        api_key: str | None = None,
        session: _Any = None,
    ) -> None:
        super().__init__(cfg or ProviderConfig.for_ors(api_key=api_key), session=session)

    @classmethod
    def from_env(cls) -> "ORSClient":
        """Convenience ctor that pulls ORS_API_KEY from env."""
        return cls(cfg=ProviderConfig.for_ors())


__all__ = ["ORSClient"]
