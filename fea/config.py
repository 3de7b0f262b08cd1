"""Typed application settings loaded from the environment.

Values are read once from the process environment (after loading an optional
``.env`` file) and cached. Call ``reload_settings`` to rebuild them, e.g. after
changing environment variables in tests.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, TypeAlias

from dotenv import load_dotenv

CryingRuleName: TypeAlias = Literal["threshold", "compound"]

CRYING_RULES: tuple[CryingRuleName, ...] = ("threshold", "compound")

# Crying-duration conversion rate assumed by the offline analysis path.
# The live capture loop ticks roughly once per second, so this is a
# configurable assumption rather than a measured property.
DEFAULT_SAMPLES_PER_SECOND = 10.0
DEFAULT_CRYING_SAD_THRESHOLD = 0.6
DEFAULT_COMPOUND_SAD_THRESHOLD = 0.4
DEFAULT_COMPOUND_FEARFUL_THRESHOLD = 0.2
DEFAULT_COMPOUND_NEUTRAL_CEILING = 0.1
DEFAULT_PHASE_COUNT = 3
DEFAULT_STABILITY_SHIFTS_PER_MINUTE = 2.0
DEFAULT_HIGH_CRYING_EPISODES = 5
DEFAULT_HIGH_TRANSITION_COUNT = 10
DEFAULT_SADNESS_MOOD_FRACTION = 0.2


@dataclass(frozen=True)
class AnalyticsConfig:
    """Thresholds and rates used by the analytics engine."""

    samples_per_second: float = DEFAULT_SAMPLES_PER_SECOND
    # None keeps recorded isCrying flags; a rule name re-derives them.
    crying_rule: CryingRuleName | None = None
    crying_sad_threshold: float = DEFAULT_CRYING_SAD_THRESHOLD
    compound_sad_threshold: float = DEFAULT_COMPOUND_SAD_THRESHOLD
    compound_fearful_threshold: float = DEFAULT_COMPOUND_FEARFUL_THRESHOLD
    compound_neutral_ceiling: float = DEFAULT_COMPOUND_NEUTRAL_CEILING
    phase_count: int = DEFAULT_PHASE_COUNT
    stability_shifts_per_minute: float = DEFAULT_STABILITY_SHIFTS_PER_MINUTE
    high_crying_episodes: int = DEFAULT_HIGH_CRYING_EPISODES
    high_transition_count: int = DEFAULT_HIGH_TRANSITION_COUNT
    sadness_mood_fraction: float = DEFAULT_SADNESS_MOOD_FRACTION

    def __post_init__(self) -> None:
        if self.samples_per_second <= 0.0:
            raise ValueError("samples_per_second must be positive.")
        if self.crying_rule is not None and self.crying_rule not in CRYING_RULES:
            raise ValueError(
                f"crying_rule must be one of {', '.join(CRYING_RULES)}; "
                f"got {self.crying_rule!r}."
            )
        if self.phase_count < 1:
            raise ValueError("phase_count must be greater than or equal to 1.")
        if self.stability_shifts_per_minute < 0.0:
            raise ValueError("stability_shifts_per_minute cannot be negative.")
        if self.high_crying_episodes < 0:
            raise ValueError("high_crying_episodes cannot be negative.")
        if self.high_transition_count < 0:
            raise ValueError("high_transition_count cannot be negative.")
        if not 0.0 <= self.sadness_mood_fraction <= 1.0:
            raise ValueError("sadness_mood_fraction must be within [0, 1].")


@dataclass(frozen=True)
class StorageConfig:
    """Locations for persisted sessions and exported timelines."""

    data_folder: Path = Path("./fea/data")
    sessions_file_name: str = "sessions.jsonl"
    timeline_folder: Path = Path("./fea/timelines")

    @property
    def sessions_file(self) -> Path:
        return self.data_folder / self.sessions_file_name


@dataclass(frozen=True)
class AppConfig:
    """Top-level FEA settings."""

    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    log_level: str = "INFO"


def _env_text(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be a number; got {raw!r}.") from err


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be an integer; got {raw!r}.") from err


def _load_settings() -> AppConfig:
    load_dotenv()
    analytics = AnalyticsConfig(
        samples_per_second=_env_float(
            "FEA_SAMPLES_PER_SECOND", DEFAULT_SAMPLES_PER_SECOND
        ),
        crying_rule=_env_text("FEA_CRYING_RULE", "").lower() or None,  # type: ignore[arg-type]
        crying_sad_threshold=_env_float(
            "FEA_CRYING_SAD_THRESHOLD", DEFAULT_CRYING_SAD_THRESHOLD
        ),
        compound_sad_threshold=_env_float(
            "FEA_COMPOUND_SAD_THRESHOLD", DEFAULT_COMPOUND_SAD_THRESHOLD
        ),
        compound_fearful_threshold=_env_float(
            "FEA_COMPOUND_FEARFUL_THRESHOLD", DEFAULT_COMPOUND_FEARFUL_THRESHOLD
        ),
        compound_neutral_ceiling=_env_float(
            "FEA_COMPOUND_NEUTRAL_CEILING", DEFAULT_COMPOUND_NEUTRAL_CEILING
        ),
        phase_count=_env_int("FEA_PHASE_COUNT", DEFAULT_PHASE_COUNT),
        stability_shifts_per_minute=_env_float(
            "FEA_STABILITY_SHIFTS_PER_MINUTE", DEFAULT_STABILITY_SHIFTS_PER_MINUTE
        ),
        high_crying_episodes=_env_int(
            "FEA_HIGH_CRYING_EPISODES", DEFAULT_HIGH_CRYING_EPISODES
        ),
        high_transition_count=_env_int(
            "FEA_HIGH_TRANSITION_COUNT", DEFAULT_HIGH_TRANSITION_COUNT
        ),
        sadness_mood_fraction=_env_float(
            "FEA_SADNESS_MOOD_FRACTION", DEFAULT_SADNESS_MOOD_FRACTION
        ),
    )
    storage = StorageConfig(
        data_folder=Path(_env_text("FEA_DATA_DIR", "./fea/data")),
        sessions_file_name=_env_text("FEA_SESSIONS_FILE_NAME", "sessions.jsonl"),
        timeline_folder=Path(_env_text("FEA_TIMELINE_DIR", "./fea/timelines")),
    )
    return AppConfig(
        analytics=analytics,
        storage=storage,
        log_level=_env_text("LOG_LEVEL", "INFO").upper(),
    )


_SETTINGS: AppConfig | None = None


def get_settings() -> AppConfig:
    """Returns cached settings, loading them on first access."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = _load_settings()
    return _SETTINGS


def reload_settings() -> AppConfig:
    """Rebuilds settings from the current environment."""
    global _SETTINGS
    _SETTINGS = _load_settings()
    return _SETTINGS
