"""Tests for inter-call spacing."""

import asyncio
import time

import pytest

from coinbase_trade.api.rate_limit import DEFAULT_MIN_INTERVAL, RateGate

# asyncio timers may fire a hair early
SLACK = 0.005


@pytest.mark.asyncio
class TestRateGate:
    async def test_first_call_is_immediate(self):
        gate = RateGate(0.5)
        start = time.monotonic()

        await gate.wait()

        assert time.monotonic() - start < 0.1

    async def test_back_to_back_calls_are_spaced(self):
        gate = RateGate(DEFAULT_MIN_INTERVAL)
        calls = 5
        start = time.monotonic()

        for _ in range(calls):
            await gate.wait()
            gate.touch()

        assert time.monotonic() - start >= (calls - 1) * DEFAULT_MIN_INTERVAL - SLACK

    async def test_concurrent_callers_are_spaced(self):
        gate = RateGate(0.03)
        starts = []

        async def call():
            await gate.wait()
            starts.append(time.monotonic())
            gate.touch()

        await asyncio.gather(*(call() for _ in range(4)))

        starts.sort()
        gaps = [b - a for a, b in zip(starts, starts[1:])]
        assert all(gap >= 0.03 - SLACK for gap in gaps)

    async def test_touch_moves_watermark(self):
        now = [100.0]
        gate = RateGate(0.05, clock=lambda: now[0])

        await gate.wait()
        assert gate.last_call == 100.0

        now[0] = 101.0
        gate.touch()
        assert gate.last_call == 101.0

    async def test_no_wait_after_interval_elapsed(self):
        now = [10.0]
        gate = RateGate(0.05, clock=lambda: now[0])
        await gate.wait()

        now[0] = 10.06
        start = time.monotonic()
        await gate.wait()

        assert time.monotonic() - start < 0.04
        assert gate.last_call == 10.06


class TestRateGateConfig:
    def test_negative_interval_rejected(self):
        with pytest.raises(ValueError):
            RateGate(-1)

    def test_default_interval(self):
        assert RateGate().min_interval == 0.05
