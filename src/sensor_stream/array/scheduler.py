"""Scheduler strategies for the pause between merge cycles.

Two strategies exist:
- ``FixedDelay``: sleep for a number of milliseconds
- ``FrameSync``: wait for the next frame of a ``FrameClock``

A frame clock is the host's rendering cadence. Hosts that own a render loop
drive a ``ManualFrameClock`` by calling ``tick()`` once per frame; everything
else gets an ``IntervalFrameClock`` that ticks on a fixed refresh rate.
"""

import asyncio
import math
from abc import ABC, abstractmethod

from sensor_stream.config.validators import FRAME_SYNC


class FrameClock(ABC):
    """Source of "next frame" signals."""

    @abstractmethod
    async def next_frame(self) -> None:
        """Resolve at the next rendering opportunity."""
        pass


class IntervalFrameClock(FrameClock):
    """Frame clock aligned to a fixed refresh rate on the event loop clock."""

    def __init__(self, refresh_hz: float = 60.0) -> None:
        if refresh_hz <= 0:
            raise ValueError(f"refresh_hz must be positive, got {refresh_hz}")
        self.refresh_hz = refresh_hz
        self.period = 1.0 / refresh_hz

    async def next_frame(self) -> None:
        now = asyncio.get_running_loop().time()
        # Frame boundaries are multiples of the period, so every waiter wakes together
        next_boundary = (math.floor(now / self.period) + 1) * self.period
        await asyncio.sleep(next_boundary - now)


class ManualFrameClock(FrameClock):
    """Frame clock driven explicitly by the host.

    Every coroutine waiting in ``next_frame`` is released by the following
    ``tick()``.
    """

    def __init__(self) -> None:
        self._frame = asyncio.Event()
        self.frame_count = 0

    async def next_frame(self) -> None:
        await self._frame.wait()

    def tick(self) -> None:
        """Signal a new frame."""
        frame, self._frame = self._frame, asyncio.Event()
        self.frame_count += 1
        frame.set()


class DelayStrategy(ABC):
    """Pause applied after every merge cycle."""

    @abstractmethod
    async def wait(self) -> None:
        pass


class FixedDelay(DelayStrategy):
    """Sleep for a fixed number of milliseconds (0 only yields to the event loop)."""

    def __init__(self, milliseconds: int) -> None:
        self.milliseconds = milliseconds

    async def wait(self) -> None:
        await asyncio.sleep(self.milliseconds / 1000)

    def __repr__(self) -> str:
        return f"FixedDelay({self.milliseconds})"


class FrameSync(DelayStrategy):
    """Wait for the next frame of a frame clock."""

    def __init__(self, clock: FrameClock) -> None:
        self.clock = clock

    async def wait(self) -> None:
        await self.clock.next_frame()

    def __repr__(self) -> str:
        return f"FrameSync({type(self.clock).__name__})"


__all__ = [
    "FRAME_SYNC",
    "FrameClock",
    "IntervalFrameClock",
    "ManualFrameClock",
    "DelayStrategy",
    "FixedDelay",
    "FrameSync",
]
