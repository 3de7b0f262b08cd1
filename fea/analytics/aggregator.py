"""Session-wide reductions over emotion sample sequences.

Every function here is total: an empty sequence yields a documented neutral
value instead of an error. Callers are expected to pass an immutable snapshot
of the samples (a tuple), never a list that is still being appended to.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from statistics import fmean

from fea.analytics.classifier import dominant_emotion
from fea.config import DEFAULT_SAMPLES_PER_SECOND
from fea.domain import EMOTIONS, CryingEpisodes, EmotionSample, EpisodeRange, zero_vector
from fea.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)


def average_emotions(samples: Sequence[EmotionSample]) -> dict[str, float]:
    """Returns the per-emotion arithmetic mean; the zero vector when empty."""
    if not samples:
        return zero_vector()
    return {
        emotion: float(fmean(sample.emotions[emotion] for sample in samples))
        for emotion in EMOTIONS
    }


def crying_fraction(samples: Sequence[EmotionSample]) -> float:
    if not samples:
        return 0.0
    return sum(1 for sample in samples if sample.is_crying) / len(samples)


def wellness_score(samples: Sequence[EmotionSample]) -> float:
    """Computes the unnormalized wellness score.

    ``(happy*2 + neutral) - (sad + angry + fearful + crying_fraction*2)`` over
    averaged scores. The result is not clamped: it nominally spans [-3, 3]
    even though presentation code rescales it as if it spanned [-1, 1].

    Returns:
        The score, or 0.0 for an empty sequence.
    """
    if not samples:
        return 0.0
    avg = average_emotions(samples)
    score = (avg["happy"] * 2 + avg["neutral"]) - (
        avg["sad"] + avg["angry"] + avg["fearful"] + crying_fraction(samples) * 2
    )
    logger.debug("Wellness score %.4f over %d samples.", score, len(samples))
    return score


def normalized_wellness(score: float) -> float:
    """Rescales a wellness score with ``(score + 1) / 2``; no clamping."""
    return (score + 1) / 2


def transition_count(samples: Sequence[EmotionSample]) -> int:
    """Counts dominant-emotion changes between consecutive samples.

    Comparison starts from an empty sentinel, so the first sample always
    registers once; that artifact is subtracted from the reported count.
    """
    if len(samples) <= 1:
        return 0
    transitions = 0
    last_dominant = ""
    for sample in samples:
        dominant = dominant_emotion(sample.emotions)
        if dominant != last_dominant:
            transitions += 1
            last_dominant = dominant
    return transitions - 1


def crying_episodes(
    samples: Sequence[EmotionSample],
    *,
    samples_per_second: float = DEFAULT_SAMPLES_PER_SECOND,
) -> CryingEpisodes:
    """Finds maximal runs of crying samples.

    Args:
        samples: Ordered samples.
        samples_per_second: Assumed capture rate used to turn the number of
            crying samples into seconds.

    Returns:
        Episode count, total crying duration in seconds, and the first/last
        timestamp of every run.
    """
    if samples_per_second <= 0.0:
        raise ValueError("samples_per_second must be positive.")

    ranges: list[EpisodeRange] = []
    crying_samples = 0
    in_episode = False
    for sample in samples:
        if not sample.is_crying:
            in_episode = False
            continue
        crying_samples += 1
        if in_episode:
            ranges[-1] = EpisodeRange(start=ranges[-1].start, end=sample.timestamp)
            continue
        in_episode = True
        ranges.append(EpisodeRange(start=sample.timestamp, end=sample.timestamp))

    return CryingEpisodes(
        count=len(ranges),
        total_duration_seconds=crying_samples / samples_per_second,
        ranges=tuple(ranges),
    )


def emotion_counts(samples: Sequence[EmotionSample]) -> Counter[str]:
    """Counts each sample's dominant emotion; keys keep first-occurrence order."""
    return Counter(dominant_emotion(sample.emotions) for sample in samples)


def session_duration_seconds(samples: Sequence[EmotionSample]) -> float:
    """Elapsed seconds between the first and last sample timestamps."""
    if not samples:
        return 0.0
    return (samples[-1].timestamp - samples[0].timestamp) / 1000


def top_emotions(
    samples: Sequence[EmotionSample],
    *,
    limit: int = 3,
) -> list[tuple[str, float]]:
    """Returns the most frequent dominant emotions with their share in percent."""
    if not samples:
        return []
    counts = emotion_counts(samples)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [
        (emotion, round(count / len(samples) * 100, 1))
        for emotion, count in ranked[:limit]
    ]
