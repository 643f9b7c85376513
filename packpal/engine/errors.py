"""Failure taxonomy and typed tier results.

Every tier of the engine (embedding, remote generation, chat, weather lookup)
reports its outcome as a TierResult. Exceptions from this module are raised
inside a tier and converted to a TierResult at the tier boundary; none of them
ever reaches a caller of the orchestrator.
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class FailureKind(str, Enum):
    """Why a tier could not produce its result."""

    TRANSPORT = "transport"
    DECODE = "decode"
    MODEL_UNAVAILABLE = "model_unavailable"
    EMPTY_RESULT = "empty_result"
    CANCELLED = "cancelled"


class EngineError(Exception):
    """Base class for tier failures."""

    kind: FailureKind = FailureKind.TRANSPORT

    def __init__(self, message: str, *, diagnostic: str | None = None) -> None:
        super().__init__(message)
        self.diagnostic = diagnostic


class TransportError(EngineError):
    """Network failure, timeout or non-200 status."""

    kind = FailureKind.TRANSPORT


class DecodeError(EngineError):
    """Malformed JSON body or unexpected tensor shape."""

    kind = FailureKind.DECODE


class ModelUnavailableError(EngineError):
    """Model or vocabulary asset missing or failed to load."""

    kind = FailureKind.MODEL_UNAVAILABLE


class EmptyResultError(EngineError):
    """Parser or upstream produced nothing usable."""

    kind = FailureKind.EMPTY_RESULT


class OperationCancelledError(EngineError):
    """Caller cancelled an in-flight remote call."""

    kind = FailureKind.CANCELLED


@dataclass(frozen=True)
class TierResult(Generic[T]):
    """Success value or failure kind from a single tier."""

    value: T | None = None
    failure: FailureKind | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> "TierResult[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, kind: FailureKind, detail: str | None = None) -> "TierResult[T]":
        return cls(failure=kind, detail=detail)

    @classmethod
    def from_error(cls, error: EngineError) -> "TierResult[T]":
        detail = error.diagnostic or str(error)
        return cls(failure=error.kind, detail=detail)


@dataclass
class CancelToken:
    """Cooperative cancellation signal for in-flight remote calls."""

    _event: asyncio.Event = field(default_factory=asyncio.Event, repr=False)

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()

    def throw_if_cancelled(self) -> None:
        """Raise OperationCancelledError if cancelled."""
        if self.cancelled:
            raise OperationCancelledError("operation cancelled")
