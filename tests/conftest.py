from __future__ import annotations

from pathlib import Path

import pytest

_PROVIDER_ENV_VARS = (
    "GEMINI_API_KEY",
    "DEEPSEAK_API_KEY",
    "DEEPSEEK_API_KEY",
    "GEMINI_BASE_URL",
    "DEEPSEAK_BASE_URL",
    "DEFAULT_TONE",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    # Never pick up real keys from the developer's shell or .env.
    for name in _PROVIDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    # Settings are cached via @lru_cache; clear so each test sees its own environment.
    from mood_relay.core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from mood_relay.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c
