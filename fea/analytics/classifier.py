"""Per-sample classification: dominant emotion, intensity, and crying flags."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from fea.config import (
    DEFAULT_COMPOUND_FEARFUL_THRESHOLD,
    DEFAULT_COMPOUND_NEUTRAL_CEILING,
    DEFAULT_COMPOUND_SAD_THRESHOLD,
    DEFAULT_CRYING_SAD_THRESHOLD,
    AnalyticsConfig,
    CryingRuleName,
)
from fea.domain import EMOTIONS, EmotionSample, validate_emotion_vector

EMOTION_EMOJIS: dict[str, str] = {
    "neutral": "😐",
    "happy": "😊",
    "sad": "😢",
    "angry": "😠",
    "fearful": "😨",
    "disgusted": "🤢",
    "surprised": "😮",
}


def dominant_emotion(vector: Mapping[str, float]) -> str:
    """Returns the emotion with the highest score.

    Ties resolve to the earliest emotion in ``EMOTIONS``.

    Raises:
        MalformedEmotionVectorError: When the vector does not cover ``EMOTIONS``.
    """
    scores = validate_emotion_vector(vector)
    best = EMOTIONS[0]
    for emotion in EMOTIONS[1:]:
        if scores[emotion] > scores[best]:
            best = emotion
    return best


def intensity(vector: Mapping[str, float]) -> float:
    """Returns the maximum score in the vector."""
    scores = validate_emotion_vector(vector)
    return max(scores.values())


def intensity_label(value: float) -> str:
    if value >= 0.7:
        return "High"
    if value >= 0.4:
        return "Medium"
    return "Low"


def emotion_emoji(emotion: str) -> str:
    return EMOTION_EMOJIS.get(emotion, "")


@dataclass(frozen=True)
class CryingRule:
    """Decides whether one score vector counts as crying.

    ``threshold`` flags ``sad > sad_threshold`` (live capture path).
    ``compound`` flags ``sad > compound_sad and (fearful > compound_fearful
    or neutral < compound_neutral)`` (offline classification path).
    """

    name: CryingRuleName = "threshold"
    sad_threshold: float = DEFAULT_CRYING_SAD_THRESHOLD
    compound_sad: float = DEFAULT_COMPOUND_SAD_THRESHOLD
    compound_fearful: float = DEFAULT_COMPOUND_FEARFUL_THRESHOLD
    compound_neutral: float = DEFAULT_COMPOUND_NEUTRAL_CEILING

    @staticmethod
    def from_config(config: AnalyticsConfig) -> CryingRule:
        return CryingRule(
            name=config.crying_rule or "threshold",
            sad_threshold=config.crying_sad_threshold,
            compound_sad=config.compound_sad_threshold,
            compound_fearful=config.compound_fearful_threshold,
            compound_neutral=config.compound_neutral_ceiling,
        )

    def __call__(self, vector: Mapping[str, float]) -> bool:
        scores = validate_emotion_vector(vector)
        if self.name == "threshold":
            return scores["sad"] > self.sad_threshold
        if self.name == "compound":
            return scores["sad"] > self.compound_sad and (
                scores["fearful"] > self.compound_fearful
                or scores["neutral"] < self.compound_neutral
            )
        raise ValueError(f"Unknown crying rule {self.name!r}.")


DEFAULT_CRYING_RULE = CryingRule()


def is_crying(
    vector: Mapping[str, float],
    *,
    rule: CryingRule = DEFAULT_CRYING_RULE,
) -> bool:
    return rule(vector)


def classify_sample(
    timestamp: int,
    vector: Mapping[str, float],
    *,
    rule: CryingRule = DEFAULT_CRYING_RULE,
) -> EmotionSample:
    """Wraps one detector output into an ``EmotionSample`` with its crying flag."""
    return EmotionSample(
        timestamp=timestamp,
        emotions=vector,
        is_crying=rule(vector),
    )


def reclassify_crying(
    samples: Sequence[EmotionSample],
    *,
    rule: CryingRule,
) -> tuple[EmotionSample, ...]:
    """Re-derives crying flags for already captured samples under ``rule``."""
    return tuple(
        classify_sample(sample.timestamp, sample.emotions, rule=rule)
        for sample in samples
    )
