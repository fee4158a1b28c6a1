# logico2/road/suggestions.py
# -*- coding: utf-8 -*-
"""
Debounced address suggestions.

Every keystroke calls `update(text)`. A lookup only starts after a quiet
period (default 0.5 s) and only for inputs of at least 3 characters. Each
lookup is a task keyed by its input text; a newer input cancels the older
tasks, and any result whose key no longer matches the latest input is
dropped, so out-of-order responses never overwrite newer suggestions.

Must be driven from a running event loop.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Dict, List, Optional

from logico2.addressing.resolver import search_addresses
from logico2.core.config import get_routing_defaults
from logico2.infra.logging import get_logger
from .ors_common import _short

_log = get_logger(__name__)

Lookup = Callable[[str], Awaitable[List[str]]]
OnResults = Callable[[str, List[str]], None]


class SuggestionDebouncer:
    """
    Parameters
    ----------
    lookup : async callable(text) -> list[str]
        Defaults to search_addresses with the default providers.
    delay_s : float | None
        Quiet period; RoutingDefaults.suggestion_debounce_s when None.
    min_chars : int | None
        Shorter inputs clear the list without a lookup.
    on_results : callable(text, labels) | None
        Called whenever fresh suggestions are accepted.
    """

    def __init__(
        self,
        lookup: Optional[Lookup] = None,
        *,
        delay_s: float | None = None,
        min_chars: int | None = None,
        on_results: Optional[OnResults] = None,
    ) -> None:
        defaults = get_routing_defaults()
        self._lookup: Lookup = lookup or search_addresses
        self.delay_s = defaults.suggestion_debounce_s if delay_s is None else float(delay_s)
        self.min_chars = defaults.suggestion_min_chars if min_chars is None else int(min_chars)
        self._on_results = on_results
        self._tasks: Dict[str, asyncio.Task] = {}
        self._latest: str = ""
        self.suggestions: List[str] = []

    @property
    def latest(self) -> str:
        return self._latest

    def update(self, text: str) -> Optional[asyncio.Task]:
        """
        Register the newest input. Returns the scheduled task (None when the
        input is too short or unchanged while a lookup is pending).
        """
        key = (text or "").strip()
        if key == self._latest and key in self._tasks:
            return self._tasks[key]

        self._latest = key
        self._cancel_stale(keep=key)

        if len(key) < self.min_chars:
            self.suggestions = []
            return None

        task = asyncio.get_running_loop().create_task(self._run(key))
        self._tasks[key] = task
        task.add_done_callback(lambda t, k=key: self._forget(k, t))
        return task

    def cancel(self) -> None:
        self._cancel_stale(keep=None)

    async def wait(self) -> List[str]:
        """Wait for the lookup of the latest input (if any) and return the list."""
        task = self._tasks.get(self._latest)
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass
        return self.suggestions

    # ── internals ────────────────────────────────────────────────────────────
    def _cancel_stale(self, keep: Optional[str]) -> None:
        for key, task in list(self._tasks.items()):
            if key != keep and not task.done():
                task.cancel()
                _log.debug("suggestions: cancelled stale lookup %s", _short(key))

    def _forget(self, key: str, task: asyncio.Task) -> None:
        if self._tasks.get(key) is task:
            del self._tasks[key]

    async def _run(self, key: str) -> None:
        await asyncio.sleep(self.delay_s)
        if key != self._latest:
            return
        labels = await self._lookup(key)
        if key != self._latest:
            _log.debug("suggestions: discarded stale result for %s", _short(key))
            return
        self.suggestions = list(labels)
        _log.debug("suggestions: %s → %s labels", _short(key), len(self.suggestions))
        if self._on_results is not None:
            self._on_results(key, self.suggestions)


__all__ = ["SuggestionDebouncer"]
