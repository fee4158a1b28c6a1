# tests/test_chain.py
# -*- coding: utf-8 -*-

import asyncio
import time

import pytest

from logico2.road.chain import ResilienceChain, Tier
from logico2.road.ors_common import NoRoute, ProviderUnavailable, RateLimited


def _recorder(calls, name, result=None, exc=None):
    def _call(*args):
        calls.append(name)
        if exc is not None:
            raise exc
        return result
    return _call


def test_first_success_wins_and_later_tiers_are_skipped():
    calls = []
    chain = ResilienceChain(
          "t"
        , tiers=[Tier("a", _recorder(calls, "a", "A")), Tier("b", _recorder(calls, "b", "B"))]
        , timeout_s=1.0
    )
    assert asyncio.run(chain.run()) == "A"
    assert calls == ["a"]


@pytest.mark.parametrize(
    "exc",
    [ProviderUnavailable("down"), RateLimited("429", retry_after_s=3), NoRoute("none"), KeyError("features")],
)
def test_failures_fall_through_in_order(exc):
    calls = []
    chain = ResilienceChain(
          "t"
        , tiers=[Tier("a", _recorder(calls, "a", exc=exc)), Tier("b", _recorder(calls, "b", "B"))]
        , timeout_s=1.0
    )
    assert asyncio.run(chain.run()) == "B"
    assert calls == ["a", "b"]


def test_default_used_when_all_tiers_fail():
    calls = []
    chain = ResilienceChain(
          "t"
        , tiers=[Tier("a", _recorder(calls, "a", exc=ProviderUnavailable("x")))]
        , default=Tier("d", _recorder(calls, "d", "D"))
        , timeout_s=1.0
    )
    assert asyncio.run(chain.run()) == "D"
    assert calls == ["a", "d"]
    assert chain.names == ["a", "d"]


def test_without_default_raises_chained():
    cause = NoRoute("none")
    chain = ResilienceChain("t", tiers=[Tier("a", _recorder([], "a", exc=cause))], timeout_s=1.0)
    with pytest.raises(ProviderUnavailable) as ei:
        asyncio.run(chain.run())
    assert ei.value.__cause__ is cause


def test_slow_tier_is_abandoned():
    def slow(*args):
        time.sleep(0.5)
        return "late"

    chain = ResilienceChain(
          "t"
        , tiers=[Tier("slow", slow), Tier("fast", lambda *a: "fast")]
        , timeout_s=0.05
    )
    assert asyncio.run(chain.run()) == "fast"


def test_unconfigured_tiers_are_skipped():
    chain = ResilienceChain("t", tiers=[None, Tier("b", lambda x: x * 2)], timeout_s=1.0)
    assert chain.names == ["b"]
    assert asyncio.run(chain.run(21)) == 42


def test_programming_errors_propagate():
    chain = ResilienceChain(
          "t"
        , tiers=[Tier("a", _recorder([], "a", exc=RuntimeError("bug")))]
        , default=Tier("d", lambda: "D")
        , timeout_s=1.0
    )
    with pytest.raises(RuntimeError):
        asyncio.run(chain.run())
