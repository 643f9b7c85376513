"""Typed settings configuration - single source of truth."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables (PACKPAL_*)."""

    model_config = SettingsConfigDict(
        env_prefix="PACKPAL_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Remote text generation
    hf_api_token: SecretStr | None = None
    hf_model_url: str = (
        "https://api-inference.huggingface.co/models/mistralai/Mistral-7B-Instruct-v0.2"
    )
    generation_timeout_s: float = 30.0
    packing_max_new_tokens: int = 500
    chat_max_new_tokens: int = 200
    generation_temperature: float = 0.7
    generation_top_p: float = 0.95

    # Weather (OpenWeather geocoding + One Call forecast)
    openweather_api_key: SecretStr | None = None
    geocoding_url: str = "https://api.openweathermap.org/geo/1.0/direct"
    forecast_url: str = "https://api.openweathermap.org/data/3.0/onecall"
    weather_timeout_s: float = 10.0
    weather_ttl_seconds: int = 3600
    weather_single_flight: bool = True
    temperature_unit: Literal["c", "f"] = "c"

    # On-device encoder assets
    vocab_path: str = "assets/vocab.txt"
    embedding_model_path: str = "assets/encoder.onnx"
    embedding_max_length: int = 384
    embedding_dim: int = 768

    # Asset download sources (scripts/download_assets.py)
    vocab_source_url: str = "https://huggingface.co/bert-base-uncased/resolve/main/vocab.txt"
    embedding_model_source_url: str = (
        "https://huggingface.co/Xenova/bert-base-uncased/resolve/main/onnx/model.onnx"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
