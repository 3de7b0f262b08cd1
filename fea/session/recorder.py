"""Active-session recording with snapshot reads."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from fea.domain import EmotionSample, Session, check_timestamp_order
from fea.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)


class SessionStateError(RuntimeError):
    """Raised when recording operations are called in the wrong state."""


def epoch_millis() -> int:
    return int(time.time() * 1000)


class SessionRecorder:
    """Collects samples from one capture producer while a session is active.

    Analytics must only run against ``snapshot()`` or the ``Session`` returned
    by ``stop()``; both are immutable tuples.
    """

    def __init__(self, clock: Callable[[], int] = epoch_millis) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._start_time: int | None = None
        self._samples: list[EmotionSample] = []

    @property
    def is_recording(self) -> bool:
        with self._lock:
            return self._start_time is not None

    def start(self) -> None:
        with self._lock:
            if self._start_time is not None:
                raise SessionStateError("A session is already being recorded.")
            self._start_time = self._clock()
            self._samples = []
        logger.info("Session recording started.")

    def record(self, sample: EmotionSample) -> None:
        """Appends one sample; ticks without a detected face are simply not recorded."""
        with self._lock:
            if self._start_time is None:
                raise SessionStateError("Cannot record samples without an active session.")
            if self._samples:
                check_timestamp_order(self._samples[-1].timestamp, sample.timestamp)
            self._samples.append(sample)

    def snapshot(self) -> tuple[EmotionSample, ...]:
        with self._lock:
            return tuple(self._samples)

    def stop(self) -> Session:
        """Finalizes the active session and freezes its sample sequence."""
        with self._lock:
            if self._start_time is None:
                raise SessionStateError("No active session to stop.")
            start_time = self._start_time
            samples = tuple(self._samples)
            self._start_time = None
            self._samples = []
        duration = max(0, self._clock() - start_time)
        logger.info(
            "Session recording stopped after %d ms with %d samples.",
            duration,
            len(samples),
        )
        return Session(start_time=start_time, duration=duration, emotions=samples)
