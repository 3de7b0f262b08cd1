"""Tests for typed configuration loading and environment refresh."""

from pathlib import Path

import pytest

import fea.config as config


def test_defaults_without_environment_overrides() -> None:
    settings = config.reload_settings()

    assert settings.analytics == config.AnalyticsConfig()
    assert settings.analytics.samples_per_second == pytest.approx(10.0)
    assert settings.analytics.crying_rule is None
    assert settings.storage.sessions_file.name == "sessions.jsonl"


def test_reload_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment variables should be reflected in loaded settings."""
    monkeypatch.setenv("FEA_SAMPLES_PER_SECOND", "1")
    monkeypatch.setenv("FEA_CRYING_RULE", "Compound")
    monkeypatch.setenv("FEA_CRYING_SAD_THRESHOLD", "0.75")
    monkeypatch.setenv("FEA_PHASE_COUNT", "4")
    monkeypatch.setenv("FEA_STABILITY_SHIFTS_PER_MINUTE", "3.5")
    monkeypatch.setenv("FEA_HIGH_CRYING_EPISODES", "2")
    monkeypatch.setenv("FEA_HIGH_TRANSITION_COUNT", "20")
    monkeypatch.setenv("FEA_SADNESS_MOOD_FRACTION", "0.5")
    monkeypatch.setenv("FEA_DATA_DIR", "custom/data")
    monkeypatch.setenv("FEA_SESSIONS_FILE_NAME", "history.jsonl")
    monkeypatch.setenv("FEA_TIMELINE_DIR", "custom/timelines")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = config.reload_settings()

    assert settings.analytics.samples_per_second == pytest.approx(1.0)
    assert settings.analytics.crying_rule == "compound"
    assert settings.analytics.crying_sad_threshold == pytest.approx(0.75)
    assert settings.analytics.phase_count == 4
    assert settings.analytics.stability_shifts_per_minute == pytest.approx(3.5)
    assert settings.analytics.high_crying_episodes == 2
    assert settings.analytics.high_transition_count == 20
    assert settings.analytics.sadness_mood_fraction == pytest.approx(0.5)
    assert settings.storage.sessions_file == Path("custom/data/history.jsonl")
    assert settings.storage.timeline_folder == Path("custom/timelines")
    assert settings.log_level == "DEBUG"


def test_get_settings_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    first = config.get_settings()
    monkeypatch.setenv("FEA_PHASE_COUNT", "5")

    assert config.get_settings() is first
    assert config.reload_settings().analytics.phase_count == 5


def test_invalid_crying_rule_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FEA_CRYING_RULE", "tears")

    with pytest.raises(ValueError, match="crying_rule"):
        config.reload_settings()


@pytest.mark.parametrize(
    ("name", "value"),
    [("FEA_SAMPLES_PER_SECOND", "fast"), ("FEA_PHASE_COUNT", "3.5")],
)
def test_non_numeric_values_are_rejected(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=name):
        config.reload_settings()


@pytest.mark.parametrize(
    "overrides",
    [
        {"samples_per_second": 0.0},
        {"phase_count": 0},
        {"sadness_mood_fraction": 1.5},
        {"high_transition_count": -1},
    ],
)
def test_analytics_config_validates_ranges(overrides: dict[str, float]) -> None:
    with pytest.raises(ValueError):
        config.AnalyticsConfig(**overrides)  # type: ignore[arg-type]
