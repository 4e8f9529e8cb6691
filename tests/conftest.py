"""Shared fixtures for sensor-stream tests."""

from collections.abc import AsyncIterator, Callable, Mapping
from typing import Any

import pytest

from sensor_stream.sensors.base import NamedState, Sample, Sensor


class FakeSensor(Sensor):
    """In-test sensor fed with ready-made contributions."""

    def __init__(self, label: str = "fake") -> None:
        super().__init__()
        self.label = label
        self.pending: list[Sample] = []
        self.pop_count = 0
        self.error: Exception | None = None

    @property
    def name(self) -> str:
        return f"FakeSensor[{self.label}]"

    def feed(self, contribution: Mapping[str, Any], timestamp: float = 1000.0) -> None:
        self.pending.append(Sample(value=contribution, timestamp=timestamp))

    def has_data(self) -> bool:
        return bool(self.pending) or self.error is not None

    async def pop_data(self) -> Sample:
        self.pop_count += 1
        if self.error is not None:
            raise self.error
        return self.pending.pop(0)

    def extract_state(self, sample: Sample) -> NamedState:
        # Copy nested mappings so stamping never mutates the fed contribution
        return {
            key: dict(value) if isinstance(value, Mapping) else value
            for key, value in sample.value.items()
        }


@pytest.fixture
def make_sensor() -> Callable[..., FakeSensor]:
    """Factory for FakeSensor instances."""
    return FakeSensor


async def next_or_none(stream: AsyncIterator[NamedState]) -> NamedState | None:
    """Await the next snapshot, or None once the stream is exhausted."""
    try:
        return await anext(stream)
    except StopAsyncIteration:
        return None


@pytest.fixture
def next_snapshot() -> Callable[[AsyncIterator[NamedState]], Any]:
    """Coroutine function returning the next snapshot or None."""
    return next_or_none
