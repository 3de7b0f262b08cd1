"""Rule-based insight cards, recommendations, and wellness status."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from fea.analytics.aggregator import (
    average_emotions,
    crying_episodes,
    session_duration_seconds,
    transition_count,
)
from fea.analytics.classifier import dominant_emotion
from fea.config import (
    DEFAULT_HIGH_CRYING_EPISODES,
    DEFAULT_HIGH_TRANSITION_COUNT,
    DEFAULT_SAMPLES_PER_SECOND,
    DEFAULT_STABILITY_SHIFTS_PER_MINUTE,
)
from fea.domain import EmotionSample, Insight
from fea.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)

DOMINANT_EMOTION_INSIGHTS: dict[str, Insight] = {
    "happy": Insight(
        emoji="😊",
        title="Positive Emotional State",
        description=(
            "You maintained a generally positive disposition during this session. "
            "This suggests good emotional well-being."
        ),
    ),
    "neutral": Insight(
        emoji="😐",
        title="Balanced Emotional State",
        description=(
            "You appeared calm and steady throughout most of the session, "
            "showing good emotional regulation."
        ),
    ),
    "sad": Insight(
        emoji="😢",
        title="Signs of Sadness",
        description=(
            "The session revealed some emotional heaviness. It's okay to feel "
            "this way, and expressing these feelings can be therapeutic."
        ),
    ),
    "angry": Insight(
        emoji="😠",
        title="Heightened Tension",
        description=(
            "There were noticeable signs of frustration or anger. Consider "
            "exploring what triggered these feelings."
        ),
    ),
    "fearful": Insight(
        emoji="😨",
        title="Anxiety Indicators",
        description=(
            "The session showed signs of anxiety or unease. This might be a good "
            "time to practice some calming techniques."
        ),
    ),
}

MIXED_EMOTIONS_INSIGHT = Insight(
    emoji="🤔",
    title="Mixed Emotions",
    description=(
        "Your emotional state varied throughout the session, which is completely normal."
    ),
)

DYNAMIC_FLOW_INSIGHT = Insight(
    emoji="🌊",
    title="Dynamic Emotional Flow",
    description=(
        "Your emotions showed significant variation, which might reflect "
        "processing of complex feelings."
    ),
)

STABILITY_INSIGHT = Insight(
    emoji="🌟",
    title="Emotional Stability",
    description=(
        "You maintained relatively stable emotional states, showing good "
        "emotional regulation."
    ),
)

HIGH_CRYING_RECOMMENDATIONS: tuple[str, ...] = (
    "Consider journaling about the feelings that surfaced during this session.",
    "Practice self-care activities that help you feel grounded and supported.",
)
HIGH_TRANSITION_RECOMMENDATIONS: tuple[str, ...] = (
    "Try mindfulness exercises to help stabilize your emotional state.",
    "Identify specific triggers that might be causing emotional fluctuations.",
)
NEUTRAL_RECOMMENDATIONS: tuple[str, ...] = (
    "Continue practicing emotional awareness to maintain this balance.",
    "Consider exploring ways to safely express and process deeper emotions.",
)
GENERAL_RECOMMENDATIONS: tuple[str, ...] = (
    "Continue regular check-ins with your emotions.",
    "Practice mindful breathing during future sessions.",
    "Consider setting emotional wellness goals for your next session.",
)


@dataclass(frozen=True)
class SessionMetrics:
    """Inputs shared by the insight and recommendation rules."""

    duration_seconds: float
    crying_episode_count: int
    dominant_emotion: str
    transition_count: int


@dataclass(frozen=True)
class WellnessStatus:
    label: str
    emoji: str
    feedback: str


def session_metrics(
    samples: Sequence[EmotionSample],
    *,
    samples_per_second: float = DEFAULT_SAMPLES_PER_SECOND,
) -> SessionMetrics:
    """Derives rule inputs from the aggregator and classifier."""
    return SessionMetrics(
        duration_seconds=session_duration_seconds(samples),
        crying_episode_count=crying_episodes(
            samples, samples_per_second=samples_per_second
        ).count,
        dominant_emotion=dominant_emotion(average_emotions(samples)),
        transition_count=transition_count(samples),
    )


def dominant_emotion_insight(emotion: str) -> Insight:
    return DOMINANT_EMOTION_INSIGHTS.get(emotion, MIXED_EMOTIONS_INSIGHT)


def crying_insight(
    episodes: int,
    *,
    high_crying_episodes: int = DEFAULT_HIGH_CRYING_EPISODES,
) -> Insight:
    if episodes > high_crying_episodes:
        return Insight(
            emoji="💭",
            title="Emotional Release",
            description=(
                f"There were {episodes} moments of intense emotion. This can be a "
                "healthy way to process deep feelings."
            ),
        )
    return Insight(
        emoji="💧",
        title="Brief Emotional Moments",
        description=(
            f"You experienced {episodes} brief emotional moment(s). This shows "
            "you're in touch with your feelings."
        ),
    )


def shifts_per_minute(transitions: int, duration_seconds: float) -> float:
    """Transition rate per minute.

    A zero-length session has no rate: it reports 0.0 without transitions and
    ``inf`` otherwise.
    """
    if duration_seconds <= 0.0:
        return float("inf") if transitions > 0 else 0.0
    return transitions / duration_seconds * 60


def stability_insight(
    transitions: int,
    duration_seconds: float,
    *,
    stability_shifts_per_minute: float = DEFAULT_STABILITY_SHIFTS_PER_MINUTE,
) -> Insight:
    if shifts_per_minute(transitions, duration_seconds) > stability_shifts_per_minute:
        return DYNAMIC_FLOW_INSIGHT
    return STABILITY_INSIGHT


def generate_insights(
    samples: Sequence[EmotionSample],
    *,
    samples_per_second: float = DEFAULT_SAMPLES_PER_SECOND,
    high_crying_episodes: int = DEFAULT_HIGH_CRYING_EPISODES,
    stability_shifts_per_minute: float = DEFAULT_STABILITY_SHIFTS_PER_MINUTE,
) -> list[Insight]:
    """Builds insight cards for a session or any contiguous sub-sequence.

    Returns:
        The dominant-emotion card, a crying card when crying episodes exist,
        and a stability card. Empty input yields an empty list.
    """
    if not samples:
        return []
    metrics = session_metrics(samples, samples_per_second=samples_per_second)
    logger.debug("Insight metrics: %s", metrics)

    insights = [dominant_emotion_insight(metrics.dominant_emotion)]
    if metrics.crying_episode_count > 0:
        insights.append(
            crying_insight(
                metrics.crying_episode_count,
                high_crying_episodes=high_crying_episodes,
            )
        )
    insights.append(
        stability_insight(
            metrics.transition_count,
            metrics.duration_seconds,
            stability_shifts_per_minute=stability_shifts_per_minute,
        )
    )
    return insights


def generate_recommendations(
    samples: Sequence[EmotionSample],
    *,
    samples_per_second: float = DEFAULT_SAMPLES_PER_SECOND,
    high_crying_episodes: int = DEFAULT_HIGH_CRYING_EPISODES,
    high_transition_count: int = DEFAULT_HIGH_TRANSITION_COUNT,
) -> list[str]:
    """Returns de-duplicated recommendation strings; empty input yields []."""
    if not samples:
        return []
    metrics = session_metrics(samples, samples_per_second=samples_per_second)

    recommendations: list[str] = []
    if metrics.crying_episode_count > high_crying_episodes:
        recommendations.extend(HIGH_CRYING_RECOMMENDATIONS)
    if metrics.transition_count > high_transition_count:
        recommendations.extend(HIGH_TRANSITION_RECOMMENDATIONS)
    if metrics.dominant_emotion == "neutral":
        recommendations.extend(NEUTRAL_RECOMMENDATIONS)
    if not recommendations:
        recommendations.extend(GENERAL_RECOMMENDATIONS)
    return list(dict.fromkeys(recommendations))


def wellness_status(normalized_score: float) -> WellnessStatus:
    """Maps a normalized wellness score onto a display status."""
    if normalized_score >= 0.7:
        return WellnessStatus(
            label="Positive",
            emoji="🟢",
            feedback=(
                "Your emotional state is very positive. Keep maintaining these "
                "healthy patterns!"
            ),
        )
    if normalized_score >= 0.4:
        return WellnessStatus(
            label="Balanced",
            emoji="🟡",
            feedback=(
                "You're maintaining a balanced emotional state. Consider "
                "activities that bring more joy."
            ),
        )
    return WellnessStatus(
        label="Distressed",
        emoji="🔴",
        feedback=(
            "You might be experiencing some emotional challenges. Consider "
            "reaching out for support."
        ),
    )
