# logico2/road/chain.py
# -*- coding: utf-8 -*-
"""
Resilience chain: ordered fallible tiers plus an optional infallible default.

    chain = ResilienceChain(
          "route"
        , tiers=[Tier("ors", ors.route), Tier("osrm", osrm.route)]
        , default=Tier("heuristic", estimate_route)
        , timeout_s=10.0
    )
    result = await chain.run(start, end)

Semantics
---------
- Tiers run strictly one after another, never raced.
- Each tier is a blocking callable executed in a worker thread and bounded
  by `timeout_s`. A tier that times out is abandoned (its thread is left to
  finish on its own) and its result is never used.
- ProviderUnavailable (and its subclasses), timeouts and malformed provider
  payloads fall through to the next tier, logged at WARNING.
- The default runs inline, without a timeout. Without a default, exhausting
  the tiers raises ProviderUnavailable chained to the last failure.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar

from logico2.core.config import get_routing_defaults
from logico2.infra.logging import get_logger
from .ors_common import ProviderUnavailable

_log = get_logger(__name__)

T = TypeVar("T")

# payload shapes a provider did not promise (missing keys, wrong types)
_MALFORMED = (KeyError, TypeError, ValueError, AttributeError, IndexError)


@dataclass(frozen=True)
class Tier(Generic[T]):
    name: str
    call: Callable[..., T]


class ResilienceChain(Generic[T]):

    def __init__(
        self,
        label: str,
        tiers: Sequence[Optional[Tier[T]]],
        default: Optional[Tier[T]] = None,
        *,
        timeout_s: float | None = None,
    ) -> None:
        self.label = label
        # None entries are unconfigured providers (e.g. no ORS key)
        self.tiers: List[Tier[T]] = [t for t in tiers if t is not None]
        self.default = default
        self.timeout_s = get_routing_defaults().tier_timeout_s if timeout_s is None else timeout_s

    @property
    def names(self) -> List[str]:
        out = [t.name for t in self.tiers]
        if self.default is not None:
            out.append(self.default.name)
        return out

    async def _run_tier(self, tier: Tier[T], args: Sequence[Any]) -> T:
        call = asyncio.to_thread(tier.call, *args)
        if self.timeout_s and self.timeout_s > 0:
            return await asyncio.wait_for(call, timeout=self.timeout_s)
        return await call

    async def run(self, *args: Any) -> T:
        last_exc: Optional[BaseException] = None

        for tier in self.tiers:
            t0 = time.time()
            try:
                result = await self._run_tier(tier, args)
            except asyncio.TimeoutError as exc:
                last_exc = exc
                _log.warning(
                    "%s: tier %s timed out after %.1fs; falling through",
                    self.label, tier.name, self.timeout_s,
                )
                continue
            except ProviderUnavailable as exc:
                last_exc = exc
                _log.warning(
                    "%s: tier %s unavailable (%s: %s); falling through",
                    self.label, tier.name, type(exc).__name__, exc,
                )
                continue
            except _MALFORMED as exc:
                last_exc = exc
                _log.warning(
                    "%s: tier %s returned an unusable payload (%s: %s); falling through",
                    self.label, tier.name, type(exc).__name__, exc,
                )
                continue

            _log.debug(
                "%s: tier %s ok in %.0f ms", self.label, tier.name, (time.time() - t0) * 1000.0
            )
            return result

        if self.default is not None:
            _log.info("%s: all provider tiers failed; using %s", self.label, self.default.name)
            return self.default.call(*args)

        raise ProviderUnavailable(
            f"{self.label}: all tiers failed ({', '.join(t.name for t in self.tiers) or 'none configured'})"
        ) from last_exc


__all__ = ["ResilienceChain", "Tier"]
