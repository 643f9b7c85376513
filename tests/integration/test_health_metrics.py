"""Integration tests for /health, /healthz and /metrics endpoints."""

from collections.abc import Iterator

import numpy as np
import pytest
from fastapi.testclient import TestClient

from packpal.engine.errors import TierResult
from packpal.engine.llm.client import DeterministicStubClient, HuggingFaceClient
from packpal.engine.main import app
from packpal.engine.nlp.tokenizer import WordTokenizer
from packpal.engine.orchestration.orchestrator import GenerationOrchestrator, get_orchestrator
from packpal.engine.utils.metrics import PrometheusCallMetrics
from packpal.engine.weather.cache import UnconfiguredLookup, WeatherCache


class LoadedEmbedder:
    """Embedder reporting a loaded model and vocabulary."""

    def __init__(self) -> None:
        self.tokenizer = WordTokenizer({"[UNK]": 0})
        self.available = True

    def embed(self, text: str) -> TierResult[np.ndarray]:
        return TierResult.success(np.zeros(4, dtype=np.float32))

    def get_embedding(self, text: str) -> np.ndarray:
        return np.zeros(4, dtype=np.float32)


class ConfiguredLookup:
    async def lookup(self, destination, unit):
        raise AssertionError("not called")


@pytest.fixture
def client() -> Iterator[TestClient]:
    yield TestClient(app)
    app.dependency_overrides.clear()


def override(orchestrator: GenerationOrchestrator) -> None:
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator


class TestHealthEndpoint:
    """Test /health and /healthz."""

    def test_health_always_ok(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_healthz_ok_when_all_components_loaded(self, client: TestClient) -> None:
        override(
            GenerationOrchestrator(
                embedder=LoadedEmbedder(),
                text_generator=HuggingFaceClient("token", "https://inference.test/model"),
                weather_provider=WeatherCache(ConfiguredLookup()),
            )
        )

        response = client.get("/healthz")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "components": {
                "vocab": "ok",
                "embedding_model": "ok",
                "text_generator": "ok",
                "weather": "ok",
            },
        }

    def test_healthz_degraded_is_still_200(self, client: TestClient) -> None:
        override(
            GenerationOrchestrator(
                embedder=LoadedEmbedder(),
                text_generator=DeterministicStubClient(),
                weather_provider=WeatherCache(UnconfiguredLookup()),
            )
        )

        response = client.get("/healthz")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["components"]["text_generator"] == "degraded"
        assert data["components"]["weather"] == "degraded"
        assert data["components"]["vocab"] == "ok"


class TestMetricsEndpoint:
    """Test /metrics endpoint."""

    def test_metrics_exposes_engine_series(self, client: TestClient) -> None:
        metrics = PrometheusCallMetrics()
        metrics.record_latency("weather.geocode", "success", 42.0)
        metrics.inc_error("generation", "server_error")
        metrics.inc_cache_hit()
        metrics.inc_fallback("remote", "transport")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]
        body = response.text
        assert "upstream_latency_ms_bucket" in body
        assert 'service="weather.geocode"' in body
        assert "upstream_errors_total" in body
        assert 'reason="server_error"' in body
        assert "weather_cache_hits_total" in body
        assert "generation_fallbacks_total" in body
        assert 'strategy="remote"' in body
