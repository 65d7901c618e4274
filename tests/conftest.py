from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
	return FIXTURES


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):  # pyright: ignore[reportUnusedFunction]
	monkeypatch.delenv("PULSE_REFRESH_LOG_LEVEL", raising=False)
	monkeypatch.delenv("PULSE_REFRESH_DEBUG", raising=False)
