# logico2/road/ors_common.py
# -*- coding: utf-8 -*-
"""
Common pieces for the provider client stack (ORS, Nominatim, OSRM):
- Error classes
- Standardized logging helpers (_short)
- Simple sliding-window rate limiter
- Helpers for Retry-After and response error extraction
- ProviderConfig (base URL, API key, timeouts, retries, UA, country)

This module is "pure infra": it does not perform HTTP calls; the HTTP logic
lives in logico2/road/http.py. Keep it side-effect free (no init_logging
here); entry points call init_logging().
"""

from __future__ import annotations

import json
import os
import time
from datetime import datetime, timezone
from typing import Any, Optional, Tuple

from logico2.core.config import get_project_config, get_routing_defaults
from logico2.infra.logging import get_logger

# ────────────────────────────────────────────────────────────────────────────────
# Errors
# ────────────────────────────────────────────────────────────────────────────────

class ProviderUnavailable(Exception):
    """
    A provider tier could not answer: network error, timeout, non-2xx,
    invalid JSON or an empty result. Callers fall through to the next tier.
    """
    ...

class RateLimited(ProviderUnavailable):
    """Raised on HTTP 429. `retry_after_s` carries the server hint, if any."""

    def __init__(self, message: str, retry_after_s: Optional[float] = None) -> None:
        super().__init__(message)
        self.retry_after_s = retry_after_s

class NoRoute(ProviderUnavailable):
    """Raised when a routing provider reports that no route could be found."""
    ...

class AddressNotFound(Exception):
    """Raised when every geocoding tier failed for an address."""

    USER_MESSAGE = "Endereço não encontrado. Tente ser mais específico."

    def __init__(self, address: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"{self.USER_MESSAGE} ({address!r})")
        self.address = address


# ────────────────────────────────────────────────────────────────────────────────
# Logging
# ────────────────────────────────────────────────────────────────────────────────

_log = get_logger(__name__)

def _short(v: Any, maxlen: int = 420) -> str:
    """
    Safe, concise preview of a Python object. Useful in logs.
    """
    try:
        s = json.dumps(v, ensure_ascii=False, sort_keys=True)
    except (TypeError, ValueError):
        s = str(v)
    return s if len(s) <= maxlen else (s[:maxlen] + " …")


# ────────────────────────────────────────────────────────────────────────────────
# Rate limiter
# ────────────────────────────────────────────────────────────────────────────────

class _RateLimiter:
    """
    Very simple sliding-window rate limiter, one per client.
    ORS free tier: ~40 directions/min. Nominatim usage policy: 1 req/s.
    """
    def __init__(self, max_calls: int = 35, per_seconds: float = 60.0) -> None:
        self.max_calls = int(max_calls)
        self.per = float(per_seconds)
        self.ts: list[float] = []

    def wait(self) -> None:
        """
        If window is saturated, sleep just enough to fall below the threshold.
        """
        now = time.time()
        # keep timestamps inside the current window
        self.ts = [t for t in self.ts if (now - t) < self.per]
        if len(self.ts) >= self.max_calls:
            sleep_s = self.per - (now - self.ts[0]) + 0.05
            if sleep_s > 0:
                _log.debug(
                    "rate-limit: window=%ss max_calls=%s current=%s → sleeping %.3fs",
                    self.per, self.max_calls, len(self.ts), sleep_s
                )
                time.sleep(sleep_s)
        self.ts.append(time.time())


# ────────────────────────────────────────────────────────────────────────────────
# Retry-After helper (RFC 7231)
# ────────────────────────────────────────────────────────────────────────────────

def _retry_after_seconds(resp) -> Optional[float]:
    """
    Extract Retry-After header as seconds.
    Supports delta-seconds or HTTP-date. Returns None if not present/parsable.
    """
    ra = (getattr(resp, "headers", None) or {}).get("Retry-After")
    if not ra:
        return None
    # delta-seconds
    try:
        return float(ra)
    except (ValueError, TypeError):
        pass
    # HTTP-date, e.g. 'Wed, 21 Oct 2015 07:28:00 GMT'
    try:
        dt = datetime.strptime(ra, "%a, %d %b %Y %H:%M:%S %Z").replace(tzinfo=timezone.utc)
    except ValueError:
        return None
    now = datetime.now(timezone.utc)
    return max(0.0, (dt - now).total_seconds())


def _extract_error_text(resp) -> str:
    """
    Best-effort extraction of a human-friendly error from a HTTP response.
    """
    try:
        j = resp.json()
    except ValueError:
        return (getattr(resp, "text", "") or "")[:500] or "<no-text>"
    if isinstance(j, dict):
        return _short(j)
    return str(j)


# ────────────────────────────────────────────────────────────────────────────────
# Config
# ────────────────────────────────────────────────────────────────────────────────

ORS_DEFAULT_BASE_URL = "https://api.openrouteservice.org"
NOMINATIM_DEFAULT_BASE_URL = "https://nominatim.openstreetmap.org"
OSRM_DEFAULT_BASE_URL = "https://router.project-osrm.org"


class ProviderConfig:
    """
    Configuration bundle for one provider client.

    Parameters
    ----------
    name : str
        Short provider tag used in logs and RouteResult.source.
    base_url : str
        Provider base URL (no trailing slash).
    api_key : str | None
        Sent as the Authorization header when set.
    require_api_key : bool
        Refuse to build without an API key (ORS).
    connect_timeout_s, read_timeout_s : float
        requests timeouts. The chain's per-tier timeout bounds the total.
    max_retries : int
        HTTP retries for transient failures (5xx / connect / read).
    backoff_s : float
        urllib3 backoff factor.
    rate_limit_calls, rate_limit_per_s : int | None, float
        Sliding-window limit; None disables it.
    country, country_iso3 : str
        Country hints for geocoding (Nominatim uses ISO2, ORS ISO3).
    language : str
        Accept-Language header.
    user_agent : str
        Sent as User-Agent (required by the Nominatim usage policy).
    profile : str
        Routing profile (ORS "driving-car", OSRM "driving").
    """
    def __init__(
        self,
        name: str,
        base_url: str,
        *,
        api_key: str | None = None,
        require_api_key: bool = False,
        connect_timeout_s: float = 5.0,
        read_timeout_s: float = 8.0,
        max_retries: int = 1,
        backoff_s: float = 0.2,
        rate_limit_calls: int | None = 35,
        rate_limit_per_s: float = 60.0,
        country: str | None = None,
        country_iso3: str | None = None,
        language: str | None = None,
        user_agent: str | None = None,
        profile: str | None = None,
    ) -> None:
        project = get_project_config()
        self.name = str(name)
        self.base_url = str(base_url).rstrip("/")
        self.api_key = (api_key or "").strip() or None
        self.connect_timeout_s = float(connect_timeout_s)
        self.read_timeout_s = float(read_timeout_s)
        self.max_retries = int(max_retries)
        self.backoff_s = float(backoff_s)
        self.rate_limit_calls = rate_limit_calls
        self.rate_limit_per_s = float(rate_limit_per_s)
        self.country = (country or project.default_country).upper()
        self.country_iso3 = (country_iso3 or project.default_country_iso3).upper()
        self.language = language or project.default_language
        self.user_agent = user_agent or project.user_agent
        self.profile = profile or get_routing_defaults().primary_profile

        if require_api_key and not self.api_key:
            _log.error("ProviderConfig(%s) init: API key not set", self.name)
            raise RuntimeError(
                f"{self.name} API key not set. Export ORS_API_KEY or pass api_key=."
            )

        # concise, non-sensitive summary
        _log.debug(
            "ProviderConfig(%s): base_url=%s timeouts=(%.1f,%.1f)s retries=%s backoff=%.2fs "
            "rate=%s/%ss country=%s profile=%s key=%s",
            self.name,
            self.base_url,
            self.connect_timeout_s,
            self.read_timeout_s,
            self.max_retries,
            self.backoff_s,
            self.rate_limit_calls,
            self.rate_limit_per_s,
            self.country,
            self.profile,
            "set" if self.api_key else "none",
        )

    @property
    def timeouts(self) -> Tuple[float, float]:
        """Return (connect_timeout_s, read_timeout_s) for requests."""
        return (self.connect_timeout_s, self.read_timeout_s)

    def make_rate_limiter(self) -> Optional[_RateLimiter]:
        if not self.rate_limit_calls:
            return None
        return _RateLimiter(self.rate_limit_calls, self.rate_limit_per_s)

    # ── provider presets ─────────────────────────────────────────────────────
    @classmethod
    def for_ors(cls, api_key: str | None = None, **overrides: Any) -> "ProviderConfig":
        """OpenRouteService; reads ORS_API_KEY / ORS_BASE_URL."""
        return cls(
            "ors",
            overrides.pop("base_url", None) or os.getenv("ORS_BASE_URL", ORS_DEFAULT_BASE_URL),
            api_key=api_key or os.getenv("ORS_API_KEY", ""),
            require_api_key=True,
            rate_limit_calls=overrides.pop("rate_limit_calls", 35),
            **overrides,
        )

    @classmethod
    def for_nominatim(cls, **overrides: Any) -> "ProviderConfig":
        """Nominatim public instance; reads NOMINATIM_BASE_URL."""
        return cls(
            "nominatim",
            overrides.pop("base_url", None) or os.getenv("NOMINATIM_BASE_URL", NOMINATIM_DEFAULT_BASE_URL),
            rate_limit_calls=overrides.pop("rate_limit_calls", 1),
            rate_limit_per_s=overrides.pop("rate_limit_per_s", 1.0),
            **overrides,
        )

    @classmethod
    def for_osrm(cls, **overrides: Any) -> "ProviderConfig":
        """OSRM demo server; reads OSRM_BASE_URL."""
        return cls(
            "osrm",
            overrides.pop("base_url", None) or os.getenv("OSRM_BASE_URL", OSRM_DEFAULT_BASE_URL),
            profile=overrides.pop("profile", "driving"),
            rate_limit_calls=overrides.pop("rate_limit_calls", None),
            **overrides,
        )


__all__ = [
      "AddressNotFound"
    , "NoRoute"
    , "ProviderConfig"
    , "ProviderUnavailable"
    , "RateLimited"
]
