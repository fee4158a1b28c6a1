# logico2/road/http.py
# -*- coding: utf-8 -*-
"""
Shared JSON-over-HTTP layer for every provider client.

- Centralizes HTTP (session, retries, headers)
- Applies the per-client rate limiter
- Emits standardized logs (method, path, status, latency, size)
- Maps failures onto the provider error family:
    429            → RateLimited
    404 / 422      → NoRoute
    other non-2xx  → ProviderUnavailable
    requests error → ProviderUnavailable
    invalid JSON   → ProviderUnavailable

Notes
-----
• Knobs live in ProviderConfig (timeouts, retries, UA, API key).
• A `session` can be injected (tests pass a fake with a `.request()` method).
• A 429 is raised immediately with the Retry-After hint; the resilience
  chain moves on to the next tier instead of sleeping inside a tier budget.
"""

from __future__ import annotations

import json as _json
import time as _time
from typing import Any as _Any, Dict as _Dict, Optional as _Optional

import requests as _req
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from logico2.infra.logging import get_logger
from .ors_common import (
      _extract_error_text
    , _retry_after_seconds
    , NoRoute
    , ProviderConfig
    , ProviderUnavailable
    , RateLimited
)

_log = get_logger(__name__)


def build_session(cfg: ProviderConfig) -> _req.Session:
    """
    requests.Session with a status-based Retry adapter and provider headers.
    """
    sess = _req.Session()
    retries = Retry(
          total=cfg.max_retries
        , connect=0                         # let connect timeout govern latency
        , read=min(1, cfg.max_retries)      # at most one re-read
        , backoff_factor=cfg.backoff_s
        , status_forcelist=(500, 502, 503, 504)
        , allowed_methods=frozenset(["GET", "POST", "HEAD", "OPTIONS"])
        , respect_retry_after_header=False
        , raise_on_status=False
    )
    adapter = HTTPAdapter(max_retries=retries)
    sess.mount("https://", adapter)
    sess.mount("http://", adapter)

    headers = {
          "User-Agent": cfg.user_agent
        , "Accept": "application/json"
        , "Accept-Language": cfg.language
    }
    if cfg.api_key:
        headers["Authorization"] = cfg.api_key
    sess.headers.update(headers)
    return sess


class JSONHTTPClient:
    """
    Base class for provider clients. Subclasses call _get/_post.
    """

    def __init__(
        self,
        cfg: ProviderConfig,
        *,
        session: _Any = None,
    ) -> None:
        self.cfg = cfg
        self.base_url = cfg.base_url
        self._sess = session if session is not None else build_session(cfg)
        self._rate_limiter = cfg.make_rate_limiter()

        _log.debug(
            "%s ready base=%s ct=%.1fs rt=%.1fs retries=%s",
              type(self).__name__
            , self.base_url
            , cfg.connect_timeout_s
            , cfg.read_timeout_s
            , cfg.max_retries
        )

    @property
    def name(self) -> str:
        return self.cfg.name

    # ────────────────────────────────────────────────────────────────────────
    # Lifecycle helpers
    # ────────────────────────────────────────────────────────────────────────
    def close(self) -> None:
        """Explicitly close the underlying HTTP session."""
        close = getattr(self._sess, "close", None)
        if callable(close):
            close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ────────────────────────────────────────────────────────────────────────
    # Core HTTP layer
    # ────────────────────────────────────────────────────────────────────────
    def _request(
        self,
        method: str,
        path: str,
        *,
        params: _Optional[_Dict[str, _Any]] = None,
        json: _Optional[_Dict[str, _Any]] = None,
    ) -> _Any:
        """
        Single entry point for GET/POST:
          1) rate-limit gate
          2) request with retries
          3) map errors; parse JSON

        Parameters
        ----------
        method : str
            "GET" or "POST".
        path : str
            Endpoint path starting with "/".
        params / json : dict | None
            Query string (GET) or JSON body (POST).
        """
        method_u = method.upper()
        url = f"{self.base_url}{path}"
        tag = self.cfg.name

        if self._rate_limiter is not None:
            self._rate_limiter.wait()

        t0 = _time.time()
        try:
            resp = self._sess.request(
                  method_u
                , url
                , params=params if method_u == "GET" else None
                , json=json if method_u == "POST" else None
                , timeout=self.cfg.timeouts
            )
        except _req.RequestException as e:
            dt_ms = (_time.time() - t0) * 1000.0
            _log.error(
                "[%s] HTTP %s %s — request exception %s after %.0f ms",
                  tag
                , method_u
                , path
                , type(e).__name__
                , dt_ms
            )
            raise ProviderUnavailable(f"{tag}: {type(e).__name__} on {path}") from e

        dt_ms = (_time.time() - t0) * 1000.0
        status = resp.status_code

        # 429: surface the server backpressure without waiting here
        if status == 429:
            wait_s = _retry_after_seconds(resp)
            _log.warning(
                "[%s] HTTP 429 %s (%.0f ms) retry_after=%s",
                  tag
                , path
                , dt_ms
                , wait_s
            )
            raise RateLimited(f"{tag}: 429 from {path}", retry_after_s=wait_s)

        # 2xx: parse JSON once, log size and duration
        if 200 <= status < 300:
            try:
                data = resp.json()
            except ValueError as e:
                txt = (getattr(resp, "text", "") or "")[:200]
                _log.error(
                    "[%s] HTTP %s %s — invalid JSON (%.0f ms): %s",
                      tag
                    , method_u
                    , path
                    , dt_ms
                    , txt
                )
                raise ProviderUnavailable(f"{tag}: invalid JSON from {path}") from e

            size_b = len(_json.dumps(data, ensure_ascii=False).encode("utf-8"))
            _log.info(
                "[%s] HTTP %s %s — %s (%.0f ms, %s B)",
                  tag
                , method_u
                , path
                , status
                , dt_ms
                , size_b
            )
            return data

        # Known "no route" family
        if status in (404, 422):
            msg = _extract_error_text(resp)
            _log.warning(
                "[%s] HTTP %s %s — %s (%.0f ms) no-route: %s",
                  tag
                , method_u
                , path
                , status
                , dt_ms
                , msg
            )
            raise NoRoute(f"{tag}: no route for {path}: {msg}")

        # Other HTTP errors (adapter already retried 5xx)
        msg = _extract_error_text(resp)
        _log.error(
            "[%s] HTTP %s %s — %s (%.0f ms) body=%s",
              tag
            , method_u
            , path
            , status
            , dt_ms
            , msg
        )
        raise ProviderUnavailable(f"{tag}: HTTP {status} from {path}: {msg}")

    # Thin wrappers used by subclasses / mixins
    def _get(
        self,
        path: str,
        params: _Optional[_Dict[str, _Any]] = None,
    ) -> _Any:
        return self._request("GET", path, params=params)

    def _post(
        self,
        path: str,
        json: _Optional[_Dict[str, _Any]] = None,
    ) -> _Any:
        return self._request("POST", path, json=json)


__all__ = ["JSONHTTPClient", "build_session"]
