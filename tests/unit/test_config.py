"""Tests for typed settings."""

import pytest

from packpal.engine.config import Settings


def test_defaults() -> None:
    settings = Settings(_env_file=None, hf_api_token=None, openweather_api_key=None)

    assert settings.generation_timeout_s == 30.0
    assert settings.weather_timeout_s == 10.0
    assert settings.weather_ttl_seconds == 3600
    assert settings.packing_max_new_tokens == 500
    assert settings.chat_max_new_tokens == 200
    assert settings.embedding_dim == 768
    assert settings.weather_single_flight is True
    assert settings.temperature_unit == "c"


def test_env_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PACKPAL_WEATHER_TTL_SECONDS", "120")
    monkeypatch.setenv("PACKPAL_TEMPERATURE_UNIT", "f")
    monkeypatch.setenv("PACKPAL_HF_API_TOKEN", "secret-token")

    settings = Settings(_env_file=None)

    assert settings.weather_ttl_seconds == 120
    assert settings.temperature_unit == "f"
    assert settings.hf_api_token is not None
    assert settings.hf_api_token.get_secret_value() == "secret-token"
    assert "secret-token" not in repr(settings)
