"""Phase segmentation and narrative mood labels."""

from __future__ import annotations

from collections.abc import Sequence

from fea.analytics.aggregator import emotion_counts
from fea.config import DEFAULT_PHASE_COUNT, DEFAULT_SADNESS_MOOD_FRACTION
from fea.domain import EmotionSample, Phases

PHASE_DESCRIPTIONS: dict[str, str] = {
    "happy": "Positive and engaged",
    "sad": "Dip into sadness",
    "neutral": "Stable and reflective",
    "angry": "Intense and expressive",
    "fearful": "Cautious and reserved",
    "surprised": "Alert and responsive",
}
MIXED_DESCRIPTION = "Mixed emotions"
EMPTY_PHASE_DESCRIPTION = "No data"
NOT_ENOUGH_DATA = "Not enough data"
SADNESS_SUFFIX = " with brief sadness"


def split_into_phases(
    samples: Sequence[EmotionSample],
    phase_count: int = DEFAULT_PHASE_COUNT,
) -> list[tuple[EmotionSample, ...]]:
    """Splits samples into ``phase_count`` contiguous runs by sample count.

    Boundary ``i`` sits at ``floor(i * n / phase_count)``, so earlier phases
    are never longer than later ones.
    """
    if phase_count < 1:
        raise ValueError("phase_count must be greater than or equal to 1.")
    total = len(samples)
    bounds = [index * total // phase_count for index in range(phase_count + 1)]
    return [
        tuple(samples[bounds[index] : bounds[index + 1]])
        for index in range(phase_count)
    ]


def segment_phases(samples: Sequence[EmotionSample]) -> Phases:
    start, middle, end = split_into_phases(samples, 3)
    return Phases(start=start, middle=middle, end=end)


def dominant_mode(samples: Sequence[EmotionSample]) -> str | None:
    """Most frequent dominant emotion; ties go to the first one seen."""
    counts = emotion_counts(samples)
    if not counts:
        return None
    return max(counts, key=counts.__getitem__)


def describe_phase(samples: Sequence[EmotionSample]) -> str:
    mode = dominant_mode(samples)
    if mode is None:
        return EMPTY_PHASE_DESCRIPTION
    return PHASE_DESCRIPTIONS.get(mode, MIXED_DESCRIPTION)


def overall_mood(
    samples: Sequence[EmotionSample],
    *,
    sadness_fraction: float = DEFAULT_SADNESS_MOOD_FRACTION,
) -> str:
    """Session mood: the dominant-emotion mode, flagged when sadness is frequent."""
    if not samples:
        return NOT_ENOUGH_DATA
    counts = emotion_counts(samples)
    primary = max(counts, key=counts.__getitem__)
    if counts["sad"] > len(samples) * sadness_fraction:
        return f"{primary}{SADNESS_SUFFIX}"
    return primary
