"""Domain data structures for emotion samples, sessions, and insights."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import NamedTuple, TypeAlias

# Canonical emotion ordering. Every tie-break walks keys in this order.
EMOTIONS: tuple[str, ...] = (
    "happy",
    "sad",
    "angry",
    "fearful",
    "disgusted",
    "surprised",
    "neutral",
)

EmotionScoreVector: TypeAlias = Mapping[str, float]


class MalformedEmotionVectorError(ValueError):
    """Raised when an emotion score vector does not cover exactly EMOTIONS."""


def validate_emotion_vector(vector: Mapping[str, object]) -> dict[str, float]:
    """Checks a raw score mapping and returns a canonical-ordered float copy.

    Raises:
        MalformedEmotionVectorError: When a key is missing or unknown, or a
            value is not a finite number.
    """
    if not isinstance(vector, Mapping):
        raise MalformedEmotionVectorError(
            f"Emotion vector must be a mapping; got {type(vector).__name__}."
        )
    missing = [emotion for emotion in EMOTIONS if emotion not in vector]
    if missing:
        raise MalformedEmotionVectorError(
            f"Emotion vector is missing required keys: {', '.join(missing)}."
        )
    unknown = sorted(str(key) for key in vector if key not in EMOTIONS)
    if unknown:
        raise MalformedEmotionVectorError(
            f"Emotion vector has unknown keys: {', '.join(unknown)}."
        )
    scores: dict[str, float] = {}
    for emotion in EMOTIONS:
        raw = vector[emotion]
        if isinstance(raw, bool) or not isinstance(raw, int | float):
            raise MalformedEmotionVectorError(
                f"Score for {emotion!r} must be a number; got {raw!r}."
            )
        if not math.isfinite(raw):
            raise MalformedEmotionVectorError(
                f"Score for {emotion!r} must be finite; got {raw!r}."
            )
        scores[emotion] = float(raw)
    return scores


def zero_vector() -> dict[str, float]:
    return {emotion: 0.0 for emotion in EMOTIONS}


def check_timestamp_order(previous: int, current: int) -> None:
    if current < previous:
        raise ValueError(
            f"Sample timestamps must be non-decreasing: {current} < {previous}."
        )


@dataclass(frozen=True)
class EmotionSample:
    """One capture tick: a timestamp, a validated score vector, a crying flag."""

    timestamp: int
    emotions: Mapping[str, float]
    is_crying: bool = False

    def __post_init__(self) -> None:
        scores = validate_emotion_vector(self.emotions)
        object.__setattr__(self, "emotions", MappingProxyType(scores))
        object.__setattr__(self, "timestamp", int(self.timestamp))
        object.__setattr__(self, "is_crying", bool(self.is_crying))

    @staticmethod
    def from_record(record: Mapping[str, object]) -> EmotionSample:
        """Builds a sample from a capture payload (``timestamp``, ``emotions``, ``isCrying``)."""
        timestamp = record.get("timestamp")
        if isinstance(timestamp, bool) or not isinstance(timestamp, int | float):
            raise ValueError(f"Sample timestamp must be a number; got {timestamp!r}.")
        emotions = record.get("emotions")
        if not isinstance(emotions, Mapping):
            raise MalformedEmotionVectorError("Sample record must include an emotions mapping.")
        is_crying = record.get("isCrying", False)
        if not isinstance(is_crying, bool):
            raise ValueError(f"Sample isCrying must be a boolean; got {is_crying!r}.")
        return EmotionSample(
            timestamp=int(timestamp),
            emotions=emotions,
            is_crying=is_crying,
        )

    def to_record(self) -> dict[str, object]:
        return {
            "timestamp": self.timestamp,
            "emotions": dict(self.emotions),
            "isCrying": self.is_crying,
        }


@dataclass(frozen=True)
class Session:
    """A finalized recording: start time, duration in ms, and ordered samples."""

    start_time: int
    duration: int = 0
    emotions: tuple[EmotionSample, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "emotions", tuple(self.emotions))
        for previous, current in zip(self.emotions, self.emotions[1:]):
            check_timestamp_order(previous.timestamp, current.timestamp)
        if self.duration < 0:
            raise ValueError("Session duration cannot be negative.")

    @staticmethod
    def from_record(record: Mapping[str, object]) -> Session:
        """Builds a session from ``startTime``/``duration``/``emotions`` fields."""
        raw_samples = record.get("emotions", [])
        if not isinstance(raw_samples, list):
            raise ValueError("Session record emotions must be a list.")
        samples = tuple(_sample_from_item(item) for item in raw_samples)
        start_time = record.get("startTime")
        if not isinstance(start_time, int | float) or isinstance(start_time, bool):
            start_time = samples[0].timestamp if samples else 0
        duration = record.get("duration")
        if not isinstance(duration, int | float) or isinstance(duration, bool):
            duration = samples[-1].timestamp - samples[0].timestamp if samples else 0
        return Session(
            start_time=int(start_time),
            duration=int(duration),
            emotions=samples,
        )

    def to_record(self) -> dict[str, object]:
        return {
            "startTime": self.start_time,
            "duration": self.duration,
            "emotions": [sample.to_record() for sample in self.emotions],
        }


def _sample_from_item(item: object) -> EmotionSample:
    if not isinstance(item, Mapping):
        raise ValueError(f"Session sample must be an object; got {item!r}.")
    return EmotionSample.from_record(item)


class Phases(NamedTuple):
    """Three contiguous thirds of a session, split by sample count."""

    start: tuple[EmotionSample, ...]
    middle: tuple[EmotionSample, ...]
    end: tuple[EmotionSample, ...]


class Insight(NamedTuple):
    """A human-readable insight card."""

    emoji: str
    title: str
    description: str


class EpisodeRange(NamedTuple):
    """First and last timestamps of one crying episode."""

    start: int
    end: int


@dataclass(frozen=True)
class CryingEpisodes:
    """Crying runs detected in a sample sequence."""

    count: int = 0
    total_duration_seconds: float = 0.0
    ranges: tuple[EpisodeRange, ...] = ()


@dataclass(frozen=True)
class SavedSessionRecord:
    """Append-only persisted envelope around a finalized session."""

    id: int
    iso_timestamp: str
    duration: int
    emotion_count: int
    crying_episodes: int
    session: Session

    def to_record(self) -> dict[str, object]:
        return {
            "id": self.id,
            "timestamp": self.iso_timestamp,
            "duration": self.duration,
            "emotionCount": self.emotion_count,
            "cryingEpisodes": self.crying_episodes,
            "session": self.session.to_record(),
        }

    @staticmethod
    def from_record(record: Mapping[str, object]) -> SavedSessionRecord:
        session_record = record.get("session")
        if not isinstance(session_record, Mapping):
            raise ValueError("Saved session record must include a session object.")
        try:
            return SavedSessionRecord(
                id=int(record["id"]),  # type: ignore[arg-type]
                iso_timestamp=str(record["timestamp"]),
                duration=int(record.get("duration", 0)),  # type: ignore[arg-type]
                emotion_count=int(record["emotionCount"]),  # type: ignore[arg-type]
                crying_episodes=int(record["cryingEpisodes"]),  # type: ignore[arg-type]
                session=Session.from_record(session_record),
            )
        except KeyError as err:
            raise ValueError(f"Saved session record is missing field {err}.") from err
