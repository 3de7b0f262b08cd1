"""Tests for per-sample dominant emotion, intensity, and crying rules."""

from __future__ import annotations

import pytest

from fea.analytics.classifier import (
    CryingRule,
    classify_sample,
    dominant_emotion,
    emotion_emoji,
    intensity,
    intensity_label,
    is_crying,
    reclassify_crying,
)
from fea.config import AnalyticsConfig
from fea.domain import EMOTIONS, MalformedEmotionVectorError


def _vector(**overrides: float) -> dict[str, float]:
    vector = {emotion: 0.05 for emotion in EMOTIONS}
    vector.update(overrides)
    return vector


def test_dominant_emotion_returns_unique_maximum() -> None:
    """A unique maximum should always win."""
    assert dominant_emotion(_vector(surprised=0.8)) == "surprised"
    assert dominant_emotion(_vector(neutral=0.51, fearful=0.5)) == "neutral"


def test_dominant_emotion_all_equal_returns_canonical_first_key() -> None:
    """Equal scores should resolve to the first emotion in canonical order."""
    assert dominant_emotion({emotion: 0.2 for emotion in EMOTIONS}) == "happy"


def test_dominant_emotion_partial_tie_uses_canonical_order() -> None:
    """Ties between later keys still follow the canonical ordering."""
    assert dominant_emotion(_vector(neutral=0.5, sad=0.5)) == "sad"
    assert dominant_emotion(_vector(surprised=0.5, disgusted=0.5)) == "disgusted"


def test_intensity_matches_dominant_score() -> None:
    """Intensity must equal the score of the dominant emotion."""
    for vector in (
        _vector(angry=0.66),
        _vector(happy=0.3, sad=0.3),
        {emotion: 0.0 for emotion in EMOTIONS},
    ):
        assert intensity(vector) == vector[dominant_emotion(vector)]


def test_missing_emotion_key_fails_fast() -> None:
    """An incomplete vector is a precondition violation."""
    vector = _vector()
    del vector["neutral"]

    with pytest.raises(MalformedEmotionVectorError, match="missing required keys: neutral"):
        dominant_emotion(vector)


def test_unknown_emotion_key_is_rejected() -> None:
    """Vectors must cover exactly the canonical emotion set."""
    with pytest.raises(MalformedEmotionVectorError, match="unknown keys: calm"):
        intensity(_vector(calm=0.9))


def test_non_numeric_score_is_rejected() -> None:
    """Scores must be real numbers."""
    vector: dict[str, object] = dict(_vector())
    vector["happy"] = "high"

    with pytest.raises(MalformedEmotionVectorError, match="happy"):
        dominant_emotion(vector)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("value", "label"),
    [(0.95, "High"), (0.7, "High"), (0.69, "Medium"), (0.4, "Medium"), (0.39, "Low")],
)
def test_intensity_label_thresholds(value: float, label: str) -> None:
    assert intensity_label(value) == label


def test_threshold_crying_rule_is_strict() -> None:
    """The live-capture rule flags sad scores strictly above 0.6."""
    assert is_crying(_vector(sad=0.61)) is True
    assert is_crying(_vector(sad=0.6)) is False


def test_compound_crying_rule() -> None:
    """The compound rule needs moderate sadness plus fear or very low neutral."""
    rule = CryingRule(name="compound")

    assert rule(_vector(sad=0.5, fearful=0.3, neutral=0.5)) is True
    assert rule(_vector(sad=0.5, fearful=0.1, neutral=0.05)) is True
    assert rule(_vector(sad=0.5, fearful=0.1, neutral=0.2)) is False
    assert rule(_vector(sad=0.4, fearful=0.9, neutral=0.0)) is False


def test_classify_sample_sets_crying_flag_from_rule() -> None:
    sample = classify_sample(1000, _vector(sad=0.7))

    assert sample.timestamp == 1000
    assert sample.is_crying is True
    assert sample.emotions["sad"] == pytest.approx(0.7)


def test_reclassify_crying_applies_new_rule() -> None:
    """Re-deriving flags should use the supplied rule, not stored flags."""
    samples = [
        classify_sample(0, _vector(sad=0.5, fearful=0.3)),
        classify_sample(1000, _vector(sad=0.7, neutral=0.3)),
    ]
    assert [sample.is_crying for sample in samples] == [False, True]

    compound = reclassify_crying(samples, rule=CryingRule(name="compound"))

    assert [sample.is_crying for sample in compound] == [True, False]


def test_emotion_emoji_lookup() -> None:
    assert emotion_emoji("happy") == "😊"
    assert emotion_emoji("calm") == ""


def test_crying_rule_from_config_falls_back_to_threshold() -> None:
    assert CryingRule.from_config(AnalyticsConfig()).name == "threshold"
    assert CryingRule.from_config(AnalyticsConfig(crying_rule="compound")).name == "compound"
