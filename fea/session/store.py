"""Injected persistence for finalized sessions."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol, cast

from fea.analytics.aggregator import crying_episodes
from fea.config import DEFAULT_SAMPLES_PER_SECOND
from fea.domain import SavedSessionRecord, Session
from fea.session.recorder import epoch_millis
from fea.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)


class SessionStore(Protocol):
    """Append-only storage contract for saved sessions."""

    def append_session(self, record: SavedSessionRecord) -> None: ...

    def list_sessions(self) -> list[SavedSessionRecord]: ...


class InMemorySessionStore:
    """Process-local store, mainly for tests and embedding."""

    def __init__(self) -> None:
        self._records: list[SavedSessionRecord] = []

    def append_session(self, record: SavedSessionRecord) -> None:
        self._records.append(record)

    def list_sessions(self) -> list[SavedSessionRecord]:
        return list(self._records)


class JsonlSessionStore:
    """File-backed store holding one JSON record per line."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def append_session(self, record: SavedSessionRecord) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record.to_record(), sort_keys=True, ensure_ascii=False))
            handle.write("\n")
        logger.info("Saved session %s to %s", record.id, self.path)

    def list_sessions(self) -> list[SavedSessionRecord]:
        if not self.path.exists():
            return []
        records: list[SavedSessionRecord] = []
        with self.path.open("r", encoding="utf-8") as handle:
            for line_number, line in enumerate(handle, start=1):
                raw = line.strip()
                if not raw:
                    continue
                try:
                    payload = json.loads(raw)
                except json.JSONDecodeError as err:
                    raise ValueError(
                        f"Invalid JSON in session store {self.path} at line {line_number}: {err}"
                    ) from err
                if not isinstance(payload, dict):
                    raise ValueError(
                        f"Session store {self.path} line {line_number} must be a JSON object."
                    )
                records.append(
                    SavedSessionRecord.from_record(cast(dict[str, object], payload))
                )
        return records


def build_saved_record(
    session: Session,
    *,
    clock: Callable[[], int] = epoch_millis,
    samples_per_second: float = DEFAULT_SAMPLES_PER_SECOND,
) -> SavedSessionRecord:
    """Wraps a finalized session with id, timestamp, and summary counts.

    ``duration`` is the span between the first and last sample timestamps;
    ``crying_episodes`` is the aggregator's run count.
    """
    now = clock()
    samples = session.emotions
    span = samples[-1].timestamp - samples[0].timestamp if samples else 0
    return SavedSessionRecord(
        id=now,
        iso_timestamp=datetime.fromtimestamp(now / 1000, tz=timezone.utc).isoformat(),
        duration=span,
        emotion_count=len(samples),
        crying_episodes=crying_episodes(
            samples, samples_per_second=samples_per_second
        ).count,
        session=session,
    )


def save_session(
    store: SessionStore,
    session: Session,
    *,
    clock: Callable[[], int] = epoch_millis,
    samples_per_second: float = DEFAULT_SAMPLES_PER_SECOND,
) -> SavedSessionRecord:
    """Builds the saved envelope for ``session`` and appends it to ``store``."""
    started = time.perf_counter()
    record = build_saved_record(
        session, clock=clock, samples_per_second=samples_per_second
    )
    store.append_session(record)
    logger.debug("Session persisted in %.4f seconds.", time.perf_counter() - started)
    return record
