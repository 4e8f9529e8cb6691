"""Tests for scheduler strategies and frame clocks."""

import asyncio

import pytest

from sensor_stream.array.scheduler import (
    FixedDelay,
    FrameSync,
    IntervalFrameClock,
    ManualFrameClock,
)


@pytest.mark.asyncio
class TestFixedDelay:
    """Test the timer strategy."""

    async def test_waits_for_duration(self) -> None:
        """Test the pause lasts at least the configured milliseconds."""
        loop = asyncio.get_running_loop()
        started = loop.time()

        await FixedDelay(30).wait()

        assert loop.time() - started >= 0.025

    async def test_zero_delay_yields_immediately(self) -> None:
        """Test a zero delay completes without a measurable pause."""
        await asyncio.wait_for(FixedDelay(0).wait(), timeout=0.5)


@pytest.mark.asyncio
class TestManualFrameClock:
    """Test the host-driven frame clock."""

    async def test_waits_until_tick(self) -> None:
        """Test next_frame blocks until tick()."""
        clock = ManualFrameClock()
        waiter = asyncio.create_task(clock.next_frame())
        await asyncio.sleep(0.01)
        assert not waiter.done()

        clock.tick()
        await asyncio.wait_for(waiter, timeout=1.0)
        assert clock.frame_count == 1

    async def test_tick_releases_all_waiters(self) -> None:
        """Test one tick wakes every pending waiter."""
        clock = ManualFrameClock()
        waiters = [asyncio.create_task(clock.next_frame()) for _ in range(3)]
        await asyncio.sleep(0.01)

        clock.tick()
        await asyncio.wait_for(asyncio.gather(*waiters), timeout=1.0)

    async def test_waiter_after_tick_needs_next_tick(self) -> None:
        """Test a tick is not remembered for later waiters."""
        clock = ManualFrameClock()
        clock.tick()

        waiter = asyncio.create_task(clock.next_frame())
        await asyncio.sleep(0.01)
        assert not waiter.done()

        clock.tick()
        await asyncio.wait_for(waiter, timeout=1.0)
        assert clock.frame_count == 2


@pytest.mark.asyncio
class TestIntervalFrameClock:
    """Test the fixed refresh rate frame clock."""

    async def test_next_frame_within_one_period(self) -> None:
        """Test a frame arrives within one refresh period."""
        clock = IntervalFrameClock(refresh_hz=50)
        loop = asyncio.get_running_loop()
        started = loop.time()

        await asyncio.wait_for(clock.next_frame(), timeout=1.0)

        assert loop.time() - started <= clock.period + 0.05

    async def test_frame_sync_delegates_to_clock(self) -> None:
        """Test FrameSync waits on its clock."""
        clock = ManualFrameClock()
        waiter = asyncio.create_task(FrameSync(clock).wait())
        await asyncio.sleep(0.01)
        assert not waiter.done()

        clock.tick()
        await asyncio.wait_for(waiter, timeout=1.0)


def test_interval_clock_rejects_non_positive_rate() -> None:
    """Test refresh rates must be positive."""
    with pytest.raises(ValueError, match="refresh_hz"):
        IntervalFrameClock(refresh_hz=0)
