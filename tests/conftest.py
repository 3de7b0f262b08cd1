import contextlib
import io
import logging
import sys
from collections.abc import Callable, Sequence

import pytest

import fea.__main__ as fea_main
import fea.config as config
from fea.domain import EMOTIONS, EmotionSample


def _emotion_vector(dominant: str | None = None, score: float = 0.9, rest: float = 0.01) -> dict[str, float]:
    """Builds a full score vector with one clear winner."""
    vector = {emotion: rest for emotion in EMOTIONS}
    if dominant is not None:
        vector[dominant] = score
    return vector


@pytest.fixture
def make_samples() -> Callable[..., list[EmotionSample]]:
    """Builds samples from dominant labels, one second apart."""

    def _make_samples(
        labels: Sequence[str],
        *,
        crying: Sequence[bool] | None = None,
        start: int = 1_700_000_000_000,
        step_ms: int = 1000,
    ) -> list[EmotionSample]:
        flags = list(crying) if crying is not None else [False] * len(labels)
        return [
            EmotionSample(
                timestamp=start + index * step_ms,
                emotions=_emotion_vector(label),
                is_crying=flags[index],
            )
            for index, label in enumerate(labels)
        ]

    return _make_samples


@pytest.fixture(autouse=True)
def _reset_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keeps settings isolated from the developer environment."""
    monkeypatch.setattr(config, "load_dotenv", lambda *args, **kwargs: False)
    monkeypatch.setenv("FEA_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("FEA_TIMELINE_DIR", str(tmp_path / "timelines"))
    config.reload_settings()


@pytest.fixture
def run_cli(monkeypatch):
    """Run the FEA CLI with a custom argv list."""

    def _run_cli(args: Sequence[str], *, expect_exit: bool = True) -> tuple[int, str]:
        argv = ["fea", *args]
        monkeypatch.setattr(sys, "argv", argv)
        config.reload_settings()
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stdout):
            try:
                fea_main.main()
            except SystemExit as exc:
                return exc.code, stdout.getvalue()
        if expect_exit:
            raise AssertionError("CLI did not exit as expected")
        return 0, stdout.getvalue()

    return _run_cli


@pytest.fixture(autouse=True)
def _silence_halo(monkeypatch):
    """Replace Halo spinners with a no-op context manager for tests."""

    class _DummyHalo:
        def __init__(self, *args, **kwargs):
            self.text = kwargs.get("text")

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            return False

    monkeypatch.setattr("fea.utils.timeline_utils.Halo", _DummyHalo, raising=False)


@pytest.fixture
def caplog_info(caplog):
    caplog.set_level(logging.INFO)
    return caplog
