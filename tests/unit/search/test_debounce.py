"""Unit tests for the Debouncer."""

import asyncio

import pytest

from wherewolf.search.debounce import Debouncer


@pytest.mark.unit
class TestDebouncer:
    """Test Debouncer scheduling semantics."""

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError, match="delay cannot be negative"):
            Debouncer(-0.1)

    @pytest.mark.asyncio
    async def test_fires_once_after_delay(self):
        calls = []
        debouncer = Debouncer(0.02)

        debouncer.arm(calls.append, "a")
        assert debouncer.pending
        await asyncio.sleep(0.08)

        assert calls == ["a"]
        assert not debouncer.pending

    @pytest.mark.asyncio
    async def test_burst_collapses_to_last_call(self):
        calls = []
        debouncer = Debouncer(0.05)

        for value in ("f", "fo", "foo"):
            debouncer.arm(calls.append, value)
            await asyncio.sleep(0.01)
        await asyncio.sleep(0.12)

        assert calls == ["foo"]

    @pytest.mark.asyncio
    async def test_disarm_cancels_pending_callback(self):
        calls = []
        debouncer = Debouncer(0.02)

        debouncer.arm(calls.append, "x")
        debouncer.disarm()
        await asyncio.sleep(0.06)

        assert calls == []
        assert not debouncer.pending

    @pytest.mark.asyncio
    async def test_fire_now_runs_immediately_and_only_once(self):
        calls = []
        debouncer = Debouncer(0.02)

        debouncer.arm(calls.append, "now")
        assert debouncer.fire_now() is True
        assert calls == ["now"]

        await asyncio.sleep(0.06)
        assert calls == ["now"]

    @pytest.mark.asyncio
    async def test_fire_now_without_pending_callback(self):
        assert Debouncer(0.01).fire_now() is False

    @pytest.mark.asyncio
    async def test_zero_delay_runs_on_next_loop_iteration(self):
        calls = []
        debouncer = Debouncer(0)

        debouncer.arm(calls.append, 1)
        assert calls == []
        await asyncio.sleep(0.01)

        assert calls == [1]
