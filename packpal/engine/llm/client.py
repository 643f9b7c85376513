"""Remote text generation client for packing lists and chat.

Security: the API token is read from settings only, never hardcoded.
Provides a deterministic stub client when no token is configured.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Any, Protocol

import httpx

from packpal.engine.config import Settings, get_settings
from packpal.engine.errors import (
    CancelToken,
    DecodeError,
    EmptyResultError,
    EngineError,
    FailureKind,
    OperationCancelledError,
    TierResult,
    TransportError,
)
from packpal.engine.llm.parser import parse_generated_text
from packpal.engine.llm.prompts import build_packing_prompt
from packpal.engine.models.packing import PackingCategory
from packpal.engine.models.trip import Trip
from packpal.engine.models.weather import WeatherSummary
from packpal.engine.rules.categorizer import categorize_trip
from packpal.engine.utils.logging import StructuredCallLogger
from packpal.engine.utils.metrics import CallMetrics

logger = logging.getLogger(__name__)

SERVICE_NAME = "generation"

CHAT_EMPTY_REPLY = "I'd be happy to help! Could you please rephrase your question?"

# Chat replies per failure kind; keys are FailureKind values or status diagnostics
CHAT_FAILURE_REPLIES: dict[str, str] = {
    FailureKind.TRANSPORT.value: (
        "Sorry, I'm having trouble connecting right now. Please check your internet connection."
    ),
    "http_status": "Sorry, I'm having trouble responding right now. Please try again later.",
    FailureKind.DECODE.value: "Sorry, I had trouble understanding the response. Please try again.",
    FailureKind.EMPTY_RESULT.value: (
        "I'm not sure how to respond to that. Could you rephrase your question?"
    ),
    FailureKind.CANCELLED.value: "The request was cancelled. Please try again.",
}

STATUS_DIAGNOSTICS = ("auth", "not_found", "rate_limited", "server_error", "unexpected")


def classify_status(status_code: int) -> str:
    """Classify a non-200 generation status for diagnostics."""
    if status_code in (401, 403):
        return "auth"
    if status_code == 404:
        return "not_found"
    if status_code == 429:
        return "rate_limited"
    if 500 <= status_code <= 599:
        return "server_error"
    return "unexpected"


def chat_failure_reply(result: TierResult[Any]) -> str:
    """Friendly chat text for a failed generation call."""
    if result.detail in STATUS_DIAGNOSTICS:
        return CHAT_FAILURE_REPLIES["http_status"]
    kind = result.failure.value if result.failure else FailureKind.EMPTY_RESULT.value
    return CHAT_FAILURE_REPLIES.get(kind, CHAT_EMPTY_REPLY)


def extract_generated_text(payload: Any) -> str:
    """Pull `generated_text` from `[{"generated_text": ...}, ...]`.

    Raises:
        DecodeError: If payload is not a list of objects or the field is missing
        EmptyResultError: If the list is empty
    """
    if not isinstance(payload, list) or not all(isinstance(x, dict) for x in payload):
        raise DecodeError("Response is not an array of objects")
    if not payload:
        raise EmptyResultError("Empty response array")
    generated = payload[0].get("generated_text")
    if not isinstance(generated, str):
        keys = ", ".join(payload[0].keys())
        raise DecodeError(f"No 'generated_text' field in response (keys: {keys})")
    return generated


def strip_echoed_prompt(generated: str, prompt: str) -> str:
    return generated.strip().replace(prompt, "").strip()


class TextGenerator(Protocol):
    """Protocol for text generator implementations."""

    async def request_packing_list(
        self,
        trip: Trip,
        weather: WeatherSummary | None = None,
        *,
        cancel_token: CancelToken | None = None,
    ) -> TierResult[list[PackingCategory]]:
        """Generate categories, reporting failure as a TierResult (no fallback)."""
        ...

    async def generate_packing_list(
        self,
        trip: Trip,
        weather: WeatherSummary | None = None,
        *,
        cancel_token: CancelToken | None = None,
    ) -> list[PackingCategory]:
        """Generate categories, falling back to the rule-based list on failure."""
        ...

    async def generate_chat_response(
        self, prompt: str, *, cancel_token: CancelToken | None = None
    ) -> str:
        """Answer a packing question; never empty."""
        ...


class DeterministicStubClient:
    """Deterministic stub generator (no API token required)."""

    async def request_packing_list(
        self,
        trip: Trip,
        weather: WeatherSummary | None = None,
        *,
        cancel_token: CancelToken | None = None,
    ) -> TierResult[list[PackingCategory]]:
        return TierResult.success(categorize_trip(trip))

    async def generate_packing_list(
        self,
        trip: Trip,
        weather: WeatherSummary | None = None,
        *,
        cancel_token: CancelToken | None = None,
    ) -> list[PackingCategory]:
        return categorize_trip(trip)

    async def generate_chat_response(
        self, prompt: str, *, cancel_token: CancelToken | None = None
    ) -> str:
        """Keyword-driven canned reply."""
        lower = prompt.lower()
        if "add" in lower and "item" in lower:
            return "Tap '+' in the packing list, pick a category, and enter the item name."
        if "weather" in lower:
            return (
                "Check the weather card in your trip. Consider adding an umbrella, "
                "jacket, or sunscreen based on the forecast."
            )
        return (
            "I can help modify your packing list. "
            "Ask about items by category, weather, or activities."
        )


class HuggingFaceClient:
    """Hosted inference client (text-generation task, bearer auth)."""

    def __init__(
        self,
        api_token: str,
        model_url: str,
        *,
        timeout_s: float = 30.0,
        packing_max_new_tokens: int = 500,
        chat_max_new_tokens: int = 200,
        temperature: float = 0.7,
        top_p: float = 0.95,
        client: httpx.AsyncClient | None = None,
        metrics: CallMetrics | None = None,
        call_logger: StructuredCallLogger | None = None,
        fallback: Callable[[Trip], list[PackingCategory]] | None = None,
    ) -> None:
        """Initialize client.

        Args:
            api_token: Bearer token (read from settings)
            model_url: Inference endpoint URL
            timeout_s: Per-request timeout; expiry is a transport failure
            packing_max_new_tokens: Token budget for packing lists
            chat_max_new_tokens: Token budget for chat replies
            temperature: Sampling temperature
            top_p: Nucleus sampling threshold
            client: Optional httpx client (for testing with mocks)
            metrics: Metrics recorder (optional, defaults to no-op)
            call_logger: Structured logger (optional)
            fallback: Rule-based generator used by generate_packing_list
        """
        self._api_token = api_token
        self.model_url = model_url
        self._timeout_s = timeout_s
        self._packing_max_new_tokens = packing_max_new_tokens
        self._chat_max_new_tokens = chat_max_new_tokens
        self._temperature = temperature
        self._top_p = top_p
        self._client = client
        self._metrics = metrics or CallMetrics()
        self._call_logger = call_logger or StructuredCallLogger()
        self._fallback = fallback or categorize_trip

    def build_body(self, prompt: str, max_new_tokens: int) -> dict[str, Any]:
        """Request body for the text-generation task."""
        return {
            "inputs": prompt,
            "parameters": {
                "max_new_tokens": max_new_tokens,
                "temperature": self._temperature,
                "top_p": self._top_p,
                "do_sample": True,
                "return_full_text": False,
            },
            "options": {
                "use_cache": False,
                "wait_for_model": True,
            },
        }

    async def _send(self, client: httpx.AsyncClient, body: dict[str, Any]) -> httpx.Response:
        try:
            return await client.post(
                self.model_url,
                json=body,
                headers={"Authorization": f"Bearer {self._api_token}"},
                timeout=self._timeout_s,
            )
        except httpx.HTTPError as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e

    async def _send_cancellable(
        self,
        client: httpx.AsyncClient,
        body: dict[str, Any],
        cancel_token: CancelToken | None,
    ) -> httpx.Response:
        if cancel_token is None:
            return await self._send(client, body)

        cancel_token.throw_if_cancelled()
        request = asyncio.ensure_future(self._send(client, body))
        cancelled = asyncio.ensure_future(cancel_token.wait())
        try:
            await asyncio.wait({request, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            request.cancel()
            raise
        finally:
            cancelled.cancel()
        if not request.done():
            request.cancel()
            raise OperationCancelledError("generation request cancelled in flight")
        return request.result()

    async def _generate(
        self, prompt: str, max_new_tokens: int, cancel_token: CancelToken | None
    ) -> str:
        """POST the prompt and return the raw generated text.

        Raises:
            TransportError: Network failure, timeout or non-200 status
            DecodeError: Body is not the expected JSON shape
            EmptyResultError: Body is an empty array
            OperationCancelledError: cancel_token fired
        """
        body = self.build_body(prompt, max_new_tokens)
        close_client = False
        client = self._client
        if client is None:
            client = httpx.AsyncClient(timeout=self._timeout_s)
            close_client = True

        try:
            response = await self._send_cancellable(client, body, cancel_token)
        finally:
            if close_client:
                await client.aclose()

        if response.status_code != 200:
            diagnostic = classify_status(response.status_code)
            logger.error(
                f"Generation API error - status {response.status_code} ({diagnostic}): "
                f"{response.text[:500]}"
            )
            raise TransportError(f"HTTP {response.status_code}", diagnostic=diagnostic)

        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(f"JSON parse error: {e}; raw: {response.text[:200]}") from e

        return extract_generated_text(payload)

    async def _call(
        self, prompt: str, max_new_tokens: int, cancel_token: CancelToken | None
    ) -> TierResult[str]:
        start = time.monotonic()
        try:
            text = await self._generate(prompt, max_new_tokens, cancel_token)
        except EngineError as e:
            elapsed_ms = (time.monotonic() - start) * 1000
            reason = e.diagnostic or e.kind.value
            self._metrics.record_latency(SERVICE_NAME, "error", elapsed_ms)
            self._metrics.inc_error(SERVICE_NAME, reason)
            self._call_logger.log_call(SERVICE_NAME, "error", elapsed_ms, error_reason=reason)
            return TierResult.from_error(e)

        elapsed_ms = (time.monotonic() - start) * 1000
        self._metrics.record_latency(SERVICE_NAME, "success", elapsed_ms)
        self._call_logger.log_call(SERVICE_NAME, "success", elapsed_ms)
        return TierResult.success(text)

    async def request_packing_list(
        self,
        trip: Trip,
        weather: WeatherSummary | None = None,
        *,
        cancel_token: CancelToken | None = None,
    ) -> TierResult[list[PackingCategory]]:
        prompt = build_packing_prompt(trip, weather)
        result = await self._call(prompt, self._packing_max_new_tokens, cancel_token)
        if not result.ok or result.value is None:
            return TierResult(failure=result.failure, detail=result.detail)

        categories = parse_generated_text(result.value)
        if not categories:
            logger.warning("No categories parsed from generated text")
            return TierResult.fail(FailureKind.EMPTY_RESULT, "no categories parsed")

        total_items = sum(len(c.items) for c in categories)
        logger.info(f"Parsed {len(categories)} categories with {total_items} total items")
        return TierResult.success(categories)

    async def generate_packing_list(
        self,
        trip: Trip,
        weather: WeatherSummary | None = None,
        *,
        cancel_token: CancelToken | None = None,
    ) -> list[PackingCategory]:
        result = await self.request_packing_list(trip, weather, cancel_token=cancel_token)
        if result.ok and result.value:
            return result.value
        logger.warning(f"Using fallback packing list generation ({result.failure}: {result.detail})")
        return self._fallback(trip)

    async def generate_chat_response(
        self, prompt: str, *, cancel_token: CancelToken | None = None
    ) -> str:
        result = await self._call(prompt, self._chat_max_new_tokens, cancel_token)
        if not result.ok or result.value is None:
            return chat_failure_reply(result)
        reply = strip_echoed_prompt(result.value, prompt)
        return reply or CHAT_EMPTY_REPLY


def get_text_generator(
    settings: Settings | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    metrics: CallMetrics | None = None,
) -> TextGenerator:
    """Factory function to get appropriate generator based on config.

    Returns:
        HuggingFaceClient if a token is configured, DeterministicStubClient otherwise
    """
    settings = settings or get_settings()
    token = settings.hf_api_token

    if token and token.get_secret_value():
        logger.info("Using hosted inference client for generation")
        return HuggingFaceClient(
            api_token=token.get_secret_value(),
            model_url=settings.hf_model_url,
            timeout_s=settings.generation_timeout_s,
            packing_max_new_tokens=settings.packing_max_new_tokens,
            chat_max_new_tokens=settings.chat_max_new_tokens,
            temperature=settings.generation_temperature,
            top_p=settings.generation_top_p,
            client=client,
            metrics=metrics,
        )
    else:
        logger.warning("No generation API token configured, using deterministic stub client")
        return DeterministicStubClient()

