"""Sensor array: merges many asynchronous sensors into one snapshot stream.

Each cycle the array polls every registered sensor that reports pending data,
merges their named state contributions into one mapping and yields it, then
pauses through the active scheduler strategy before the next cycle.

Lifecycle:
    IDLE ──start() / begin consuming──▶ STREAMING ──stop()──▶ IDLE

The streaming state belongs to the array, not to a consumer. Every stream
obtained from the same array (``array.stream`` or ``async for ... in array``)
shares it: ``start()`` resumes all of them and ``stop()`` ends all of them once
their current pause resolves.

Usage:
    >>> array = SensorArray(delay=100, accumulate=True)
    >>> array.add(temperature_sensor)
    >>> async for snapshot in array:
    ...     render(snapshot)
"""

import time
import uuid
from collections.abc import AsyncIterator, Iterable, Mapping, MutableMapping
from enum import Enum
from typing import Any

from sensor_stream.array.scheduler import (
    DelayStrategy,
    FixedDelay,
    FrameClock,
    FrameSync,
    IntervalFrameClock,
)
from sensor_stream.config import settings
from sensor_stream.config.validators import FRAME_SYNC, validate_delay
from sensor_stream.exceptions import ConfigurationError, DelayValidationError
from sensor_stream.sensors.base import NamedState, Sample, Sensor
from sensor_stream.telemetry import (
    DELAY_CHANGED,
    SENSOR_REGISTERED,
    SENSOR_REJECTED,
    SENSOR_REMOVED,
    SNAPSHOT_EMITTED,
    STATE_TRANSITION,
    STREAM_CYCLE_FAILED,
    STREAM_STARTED,
    STREAM_STOPPED,
    get_logger,
)

log = get_logger(__name__)

TIMESTAMP_KEY = "$timestamp"


class StreamState(str, Enum):
    """Streaming state shared by every stream of one array."""

    IDLE = "IDLE"
    STREAMING = "STREAMING"


class MergePolicy(str, Enum):
    """Resolution of key collisions between sensors within one cycle."""

    LAST_WINS = "last_wins"
    FIRST_WINS = "first_wins"


class SensorArray:
    """Multiplexer producing merged snapshots from a collection of sensors.

    Recognized options (passed as a mapping, as keyword arguments, or both):
        delay: Milliseconds between cycles (non-negative int) or "frame_sync".
        accumulate: Fold each cycle into one long-lived mapping and yield it.
        timestamp: Attach ``$timestamp`` to snapshots and sensor fields.
        merge_policy: "last_wins" (default) or "first_wins".

    In accumulate mode the same dict object is yielded every cycle and mutated
    in place; copy it if you need per-cycle isolation.

    Attributes:
        _sensors: Registered sensors in registration order.
        _state: Current StreamState.
        _scheduler: Active delay strategy, rebuilt whenever delay changes.
        _cumulative_state: Folded state (accumulate mode only).
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        *,
        frame_clock: FrameClock | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the array.

        Args:
            options: Mapping of recognized options.
            frame_clock: Clock used when delay is "frame_sync". Defaults to an
                IntervalFrameClock at settings.frame_rate_hz.
            **kwargs: Recognized options; override entries of ``options``.

        Raises:
            ConfigurationError: If an option is unknown or has a malformed value.
            DelayValidationError: If the delay is invalid.
        """
        self._sensors: list[Sensor] = []
        self._state = StreamState.IDLE
        self._frame_clock = frame_clock
        self._accumulate = settings.default_accumulate
        self._timestamp = settings.default_timestamp
        self._merge_policy = MergePolicy.LAST_WINS
        self._cumulative_state: NamedState = {}
        self.delay = settings.default_delay

        for key, value in {**(options or {}), **kwargs}.items():
            if key == "delay":
                self.delay = value
            elif key == "accumulate":
                self._accumulate = bool(value)
            elif key == "timestamp":
                self._timestamp = bool(value)
            elif key == "merge_policy":
                try:
                    self._merge_policy = MergePolicy(value)
                except ValueError:
                    raise ConfigurationError(key, value, reason="Invalid option value") from None
            else:
                raise ConfigurationError(key, value)

    @classmethod
    def from_sensors(
        cls,
        sensors: Iterable[Any],
        options: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> "SensorArray":
        """Build an array and register every sensor in ``sensors``.

        Entries that are not Sensor instances are reported and skipped; the
        rest of the batch is still registered.

        Args:
            sensors: Candidate sensors, in registration order.
            options: Options forwarded to the constructor.
            **kwargs: Options forwarded to the constructor.

        Returns:
            The populated SensorArray.
        """
        instance = cls(options, **kwargs)
        for sensor in sensors:
            instance.add(sensor)
        return instance

    # Configuration

    @property
    def delay(self) -> int | str:
        """Milliseconds between cycles, or FRAME_SYNC."""
        return self._delay

    @delay.setter
    def delay(self, value: Any) -> None:
        try:
            delay = validate_delay(value)
        except ValueError as e:
            raise DelayValidationError(str(e)) from None

        self._delay = delay
        self._scheduler = self._build_scheduler(delay)
        log.debug(DELAY_CHANGED, delay=delay, strategy=repr(self._scheduler))

    def _build_scheduler(self, delay: int | str) -> DelayStrategy:
        if delay == FRAME_SYNC:
            if self._frame_clock is None:
                self._frame_clock = IntervalFrameClock(settings.frame_rate_hz)
            return FrameSync(self._frame_clock)
        return FixedDelay(int(delay))

    @property
    def scheduler(self) -> DelayStrategy:
        return self._scheduler

    @property
    def accumulate(self) -> bool:
        return self._accumulate

    @property
    def timestamp(self) -> bool:
        return self._timestamp

    @property
    def merge_policy(self) -> MergePolicy:
        return self._merge_policy

    @property
    def cumulative_state(self) -> NamedState:
        """State folded across cycles. Only populated in accumulate mode."""
        return self._cumulative_state

    # Collection management

    @property
    def sensors(self) -> tuple[Sensor, ...]:
        return tuple(self._sensors)

    def __len__(self) -> int:
        return len(self._sensors)

    def __contains__(self, sensor: object) -> bool:
        return any(registered is sensor for registered in self._sensors)

    def add(self, sensor: Any) -> bool:
        """Register a sensor.

        Non-Sensor objects are rejected with a logged warning and never raise;
        adding an already registered sensor does nothing.

        Args:
            sensor: Sensor to register.

        Returns:
            True if the sensor was newly registered.
        """
        if not isinstance(sensor, Sensor):
            log.warning(
                SENSOR_REJECTED,
                candidate=repr(sensor),
                candidate_type=type(sensor).__name__,
            )
            return False

        if sensor in self:
            return False

        sensor.timestamp = self._timestamp
        self._sensors.append(sensor)
        log.info(SENSOR_REGISTERED, sensor=sensor.name, sensors=len(self._sensors))
        return True

    def remove(self, sensor: Any) -> None:
        """Unregister a sensor. Unknown sensors are ignored."""
        if sensor not in self:
            return

        # Rebind rather than mutate so an in-flight cycle keeps its own list
        self._sensors = [registered for registered in self._sensors if registered is not sensor]
        log.info(SENSOR_REMOVED, sensor=sensor.name, sensors=len(self._sensors))

    # Lifecycle

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def is_streaming(self) -> bool:
        return self._state is StreamState.STREAMING

    def _transition(self, target: StreamState, reason: str) -> None:
        if self._state is target:
            return
        log.info(
            STATE_TRANSITION,
            from_state=self._state.value,
            to_state=target.value,
            reason=reason,
        )
        self._state = target

    def start(self) -> None:
        """Enter STREAMING."""
        self._transition(StreamState.STREAMING, reason="start")

    def stop(self) -> None:
        """Return to IDLE.

        Streams finish after their current pause resolves; in-flight sensor
        polls are not cancelled.
        """
        self._transition(StreamState.IDLE, reason="stop")

    # Merge loop

    def _stamp(self, sensor: Sensor, contribution: NamedState, sample: Sample) -> None:
        """Attach the sample capture time to the first field of a contribution."""
        if not contribution:
            return
        first_key = next(iter(contribution))
        value = contribution[first_key]
        if isinstance(value, MutableMapping):
            value[TIMESTAMP_KEY] = sample.timestamp
        else:
            log.debug(
                "timestamp_skipped",
                sensor=sensor.name,
                key=first_key,
                value_type=type(value).__name__,
            )

    def _merge(self, merged: NamedState, contribution: NamedState) -> None:
        if self._merge_policy is MergePolicy.LAST_WINS:
            merged.update(contribution)
        else:
            for key, value in contribution.items():
                merged.setdefault(key, value)

    async def _run_cycle(self) -> NamedState | None:
        """Poll every sensor with pending data and merge the results.

        Returns:
            The snapshot to yield, or None when no sensor had data.
        """
        merged: NamedState = {}

        ready = [sensor for sensor in self._sensors if sensor.has_data()]
        for sensor in ready:
            sample = await sensor.pop_data()
            contribution = sensor.extract_state(sample)
            if self._timestamp:
                self._stamp(sensor, contribution, sample)
            self._merge(merged, contribution)

        if not merged:
            return None

        if self._timestamp:
            merged[TIMESTAMP_KEY] = time.time()

        if self._accumulate:
            self._cumulative_state.update(merged)
            return self._cumulative_state
        return merged

    async def _generate_stream(self) -> AsyncIterator[NamedState]:
        stream_id = uuid.uuid4().hex[:8]
        self._transition(StreamState.STREAMING, reason="consumption_started")
        log.info(
            STREAM_STARTED,
            stream_id=stream_id,
            sensors=len(self._sensors),
            delay=self._delay,
            accumulate=self._accumulate,
            timestamp=self._timestamp,
        )

        cycles = 0
        emitted = 0
        try:
            while self._state is StreamState.STREAMING:
                try:
                    snapshot = await self._run_cycle()
                except Exception as e:
                    log.error(
                        STREAM_CYCLE_FAILED,
                        stream_id=stream_id,
                        cycle=cycles,
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    raise
                cycles += 1

                if snapshot is not None:
                    emitted += 1
                    log.debug(
                        SNAPSHOT_EMITTED,
                        stream_id=stream_id,
                        cycle=cycles,
                        keys=[key for key in snapshot if key != TIMESTAMP_KEY],
                    )
                    yield snapshot

                await self._scheduler.wait()
        finally:
            log.info(STREAM_STOPPED, stream_id=stream_id, cycles=cycles, snapshots=emitted)

    @property
    def stream(self) -> AsyncIterator[NamedState]:
        """A fresh snapshot stream over this array."""
        return self._generate_stream()

    def __aiter__(self) -> AsyncIterator[NamedState]:
        return self.stream

    def __repr__(self) -> str:
        return (
            f"SensorArray(sensors={len(self._sensors)}, state={self._state.value}, "
            f"delay={self._delay!r}, accumulate={self._accumulate}, timestamp={self._timestamp})"
        )
