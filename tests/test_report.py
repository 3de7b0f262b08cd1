"""Tests for the one-shot session report."""

from __future__ import annotations

import json

import pytest

from fea.analytics.report import analyze_session, trend_series
from fea.config import AnalyticsConfig
from fea.domain import EMOTIONS


def test_empty_session_report_is_neutral() -> None:
    report = analyze_session([])

    assert report.sample_count == 0
    assert report.dominant_emotion is None
    assert report.wellness is None
    assert report.wellness_score == 0
    assert report.overall_mood == "Not enough data"
    assert report.insights == []
    assert report.recommendations == []
    assert report.trend_series is None
    assert [highlight.description for highlight in report.phase_highlights] == [
        "No data",
        "No data",
        "No data",
    ]
    json.dumps(report.to_dict())


def test_report_for_three_block_session(make_samples) -> None:
    samples = make_samples(["happy"] * 3 + ["sad"] * 3 + ["neutral"] * 3)

    report = analyze_session(samples)

    assert report.sample_count == 9
    assert report.duration_seconds == pytest.approx(8.0)
    assert report.transition_count == 2
    assert [(h.name, h.sample_count, h.description) for h in report.phase_highlights] == [
        ("start", 3, "Positive and engaged"),
        ("middle", 3, "Dip into sadness"),
        ("end", 3, "Stable and reflective"),
    ]
    assert report.overall_mood == "happy with brief sadness"
    assert report.crying.count == 0
    assert report.timeline[0].dominant_emotion == "happy"
    assert report.timeline[0].intensity == pytest.approx(0.9)
    assert report.timeline[0].intensity_label == "High"
    assert report.wellness is not None


def test_report_honours_configured_thresholds(make_samples) -> None:
    samples = make_samples(["sad"] * 4, crying=[True, False, True, False])

    report = analyze_session(
        samples,
        config=AnalyticsConfig(samples_per_second=1.0, phase_count=4),
    )

    assert report.crying.count == 2
    assert report.crying.total_duration_seconds == pytest.approx(2.0)
    assert [highlight.name for highlight in report.phase_highlights] == [
        "phase 1",
        "phase 2",
        "phase 3",
        "phase 4",
    ]


def test_report_is_detached_from_caller_list(make_samples) -> None:
    """The engine works on a snapshot, not the caller's growing list."""
    samples = make_samples(["happy"] * 3)

    report = analyze_session(samples)
    samples.extend(make_samples(["sad"] * 3, start=1_800_000_000_000))

    assert report.sample_count == 3


def test_to_dict_returns_plain_data(make_samples) -> None:
    samples = make_samples(["sad"] * 3, crying=[True, True, False])

    payload = analyze_session(samples).to_dict()
    encoded = json.loads(json.dumps(payload))

    assert encoded["crying"]["ranges"] == [
        {"start": samples[0].timestamp, "end": samples[1].timestamp}
    ]
    assert set(encoded["insights"][0]) == {"emoji", "title", "description"}
    assert encoded["top_emotions"] == [{"emotion": "sad", "percentage": 100.0}]
    assert encoded["phase_highlights"][0]["name"] == "start"


def test_trend_series_has_one_series_per_emotion_and_crying(make_samples) -> None:
    samples = make_samples(["happy", "sad"], crying=[False, True])

    payload = trend_series(samples)

    assert payload is not None
    assert payload["timestamps"] == [sample.timestamp for sample in samples]
    series = payload["series"]
    assert list(series) == [*EMOTIONS, "crying"]
    assert series["crying"] == [0.0, 1.0]
    assert series["happy"] == [pytest.approx(0.9), pytest.approx(0.01)]
