"""Emotion analytics engine: classifier, aggregator, segmenter, insights."""

from .aggregator import (
    average_emotions,
    crying_episodes,
    emotion_counts,
    normalized_wellness,
    transition_count,
    wellness_score,
)
from .classifier import CryingRule, dominant_emotion, intensity, is_crying
from .insights import generate_insights, generate_recommendations
from .report import SessionReport, analyze_session
from .segmenter import describe_phase, overall_mood, segment_phases

__all__ = [
    "CryingRule",
    "SessionReport",
    "analyze_session",
    "average_emotions",
    "crying_episodes",
    "describe_phase",
    "dominant_emotion",
    "emotion_counts",
    "generate_insights",
    "generate_recommendations",
    "intensity",
    "is_crying",
    "normalized_wellness",
    "overall_mood",
    "segment_phases",
    "transition_count",
    "wellness_score",
]
