"""One-shot session analysis consumed by every presentation layer."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import asdict, dataclass

from fea.analytics.aggregator import (
    average_emotions,
    crying_episodes,
    emotion_counts,
    normalized_wellness,
    session_duration_seconds,
    top_emotions,
    transition_count,
    wellness_score,
)
from fea.analytics.classifier import dominant_emotion, intensity, intensity_label
from fea.analytics.insights import (
    WellnessStatus,
    generate_insights,
    generate_recommendations,
    wellness_status,
)
from fea.analytics.segmenter import describe_phase, overall_mood, split_into_phases
from fea.config import AnalyticsConfig
from fea.domain import EMOTIONS, CryingEpisodes, EmotionSample, Insight
from fea.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)

THREE_PHASE_NAMES: tuple[str, ...] = ("start", "middle", "end")


@dataclass(frozen=True)
class TimelineEvent:
    """Per-sample view: dominant emotion and how strongly it was expressed."""

    timestamp: int
    dominant_emotion: str
    intensity: float
    intensity_label: str
    is_crying: bool


@dataclass(frozen=True)
class PhaseHighlight:
    name: str
    sample_count: int
    description: str


@dataclass(frozen=True)
class SessionReport:
    """Every derived metric for one sample sequence."""

    sample_count: int
    duration_seconds: float
    average_emotions: dict[str, float]
    dominant_emotion: str | None
    emotion_counts: dict[str, int]
    top_emotions: list[tuple[str, float]]
    wellness_score: float
    normalized_wellness: float
    wellness: WellnessStatus | None
    transition_count: int
    crying: CryingEpisodes
    overall_mood: str
    phase_highlights: list[PhaseHighlight]
    insights: list[Insight]
    recommendations: list[str]
    timeline: list[TimelineEvent]
    trend_series: dict[str, object] | None

    def to_dict(self) -> dict[str, object]:
        """Returns plain JSON-compatible data."""
        payload = asdict(self)
        payload["top_emotions"] = [
            {"emotion": emotion, "percentage": share}
            for emotion, share in self.top_emotions
        ]
        payload["crying"] = {
            "count": self.crying.count,
            "total_duration_seconds": self.crying.total_duration_seconds,
            "ranges": [
                {"start": episode.start, "end": episode.end}
                for episode in self.crying.ranges
            ],
        }
        payload["insights"] = [insight._asdict() for insight in self.insights]
        return payload


def phase_names(phase_count: int) -> list[str]:
    if phase_count == len(THREE_PHASE_NAMES):
        return list(THREE_PHASE_NAMES)
    return [f"phase {index + 1}" for index in range(phase_count)]


def build_timeline_events(samples: Sequence[EmotionSample]) -> list[TimelineEvent]:
    events: list[TimelineEvent] = []
    for sample in samples:
        value = intensity(sample.emotions)
        events.append(
            TimelineEvent(
                timestamp=sample.timestamp,
                dominant_emotion=dominant_emotion(sample.emotions),
                intensity=value,
                intensity_label=intensity_label(value),
                is_crying=sample.is_crying,
            )
        )
    return events


def trend_series(samples: Sequence[EmotionSample]) -> dict[str, object] | None:
    """Chart payload: timestamps plus one series per emotion and crying (0/1).

    Returns ``None`` for an empty sequence so charts can skip rendering.
    """
    if not samples:
        return None
    series: dict[str, list[float]] = {
        emotion: [sample.emotions[emotion] for sample in samples]
        for emotion in EMOTIONS
    }
    series["crying"] = [1.0 if sample.is_crying else 0.0 for sample in samples]
    return {
        "timestamps": [sample.timestamp for sample in samples],
        "series": series,
    }


def analyze_session(
    samples: Sequence[EmotionSample],
    *,
    config: AnalyticsConfig | None = None,
) -> SessionReport:
    """Runs the full analytics engine over an immutable sample snapshot.

    Args:
        samples: Ordered samples; copied into a tuple before analysis.
        config: Thresholds and rates. Defaults to ``AnalyticsConfig()``.

    Returns:
        A ``SessionReport``; empty input yields neutral values throughout.
    """
    resolved = config if config is not None else AnalyticsConfig()
    snapshot = tuple(samples)
    logger.info("Analyzing session snapshot with %d samples.", len(snapshot))

    score = wellness_score(snapshot)
    normalized = normalized_wellness(score)
    phases = split_into_phases(snapshot, resolved.phase_count)
    highlights = [
        PhaseHighlight(name=name, sample_count=len(phase), description=describe_phase(phase))
        for name, phase in zip(phase_names(resolved.phase_count), phases)
    ]

    report = SessionReport(
        sample_count=len(snapshot),
        duration_seconds=session_duration_seconds(snapshot),
        average_emotions=average_emotions(snapshot),
        dominant_emotion=(
            dominant_emotion(average_emotions(snapshot)) if snapshot else None
        ),
        emotion_counts=dict(emotion_counts(snapshot)),
        top_emotions=top_emotions(snapshot),
        wellness_score=score,
        normalized_wellness=normalized,
        wellness=wellness_status(normalized) if snapshot else None,
        transition_count=transition_count(snapshot),
        crying=crying_episodes(
            snapshot, samples_per_second=resolved.samples_per_second
        ),
        overall_mood=overall_mood(
            snapshot, sadness_fraction=resolved.sadness_mood_fraction
        ),
        phase_highlights=highlights,
        insights=generate_insights(
            snapshot,
            samples_per_second=resolved.samples_per_second,
            high_crying_episodes=resolved.high_crying_episodes,
            stability_shifts_per_minute=resolved.stability_shifts_per_minute,
        ),
        recommendations=generate_recommendations(
            snapshot,
            samples_per_second=resolved.samples_per_second,
            high_crying_episodes=resolved.high_crying_episodes,
            high_transition_count=resolved.high_transition_count,
        ),
        timeline=build_timeline_events(snapshot),
        trend_series=trend_series(snapshot),
    )
    logger.info(
        "Session analysis complete: mood=%r, transitions=%d, crying episodes=%d.",
        report.overall_mood,
        report.transition_count,
        report.crying.count,
    )
    return report
