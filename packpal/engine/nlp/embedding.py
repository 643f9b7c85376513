"""On-device text embeddings from an ONNX text encoder.

The encoder is loaded lazily on first use. If the asset is missing or fails to
load, the client stays in no-model mode for the life of the process and every
embedding is the zero vector.

Encoders exported by different toolchains name their tensors differently, so
input and output names are negotiated against explicit candidate lists.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Protocol

import numpy as np
import onnxruntime

from packpal.engine.errors import (
    DecodeError,
    EngineError,
    FailureKind,
    ModelUnavailableError,
    TierResult,
)
from packpal.engine.nlp.tokenizer import Tokenizer

logger = logging.getLogger(__name__)

DEFAULT_EMBEDDING_DIM = 768
DEFAULT_MAX_LENGTH = 384


class InputRole(str, Enum):
    """What a model input tensor carries."""

    ids = "ids"
    mask = "mask"
    type_ids = "type_ids"


@dataclass(frozen=True)
class InputNameSet:
    """A complete set of input names some encoder variant declares."""

    names: tuple[tuple[str, InputRole], ...]

    def matches(self, declared: set[str]) -> bool:
        return {name for name, _ in self.names} == declared

    def roles(self) -> dict[str, InputRole]:
        return dict(self.names)


# Tried in order against the model's declared inputs (exact set match).
INPUT_NAME_CANDIDATES: tuple[InputNameSet, ...] = (
    InputNameSet((("wordIDs", InputRole.ids), ("wordTypes", InputRole.type_ids))),
    InputNameSet(
        (
            ("input_ids", InputRole.ids),
            ("attention_mask", InputRole.mask),
            ("token_type_ids", InputRole.type_ids),
        )
    ),
    InputNameSet((("input_ids", InputRole.ids), ("attention_mask", InputRole.mask))),
)

# Superset used when no candidate matches exactly; filtered to declared names.
INPUT_NAME_ALIASES: dict[str, InputRole] = {
    "wordIDs": InputRole.ids,
    "input_ids": InputRole.ids,
    "attentionMask": InputRole.mask,
    "attention_mask": InputRole.mask,
    "wordMask": InputRole.mask,
    "tokenTypeIDs": InputRole.type_ids,
    "token_type_ids": InputRole.type_ids,
    "wordTypes": InputRole.type_ids,
}

# Hidden-state output names in priority order.
OUTPUT_NAME_CANDIDATES: tuple[str, ...] = (
    "last_hidden_state",
    "embeddings",
    "sequence_output",
    "output",
)


class EncoderSession(Protocol):
    """Subset of onnxruntime.InferenceSession the client relies on."""

    def get_inputs(self) -> list[Any]: ...

    def get_outputs(self) -> list[Any]: ...

    def run(self, output_names: list[str] | None, input_feed: dict[str, Any]) -> list[Any]: ...


SessionFactory = Callable[[str], EncoderSession]


class EmbeddingModel(Protocol):
    """Protocol for embedding model implementations."""

    def embed(self, text: str) -> TierResult[np.ndarray]:
        """Embed text, reporting failure as a TierResult."""
        ...

    def get_embedding(self, text: str) -> np.ndarray:
        """Embed text; zero vector on any failure."""
        ...


def default_session_factory(path: str) -> EncoderSession:
    """Create a CPU onnxruntime session."""
    return onnxruntime.InferenceSession(path, providers=["CPUExecutionProvider"])


def resolve_input_roles(declared: list[str]) -> dict[str, InputRole]:
    """Map each declared input name to the tensor it should receive.

    Raises:
        DecodeError: If a declared input has no known alias
    """
    declared_set = set(declared)
    for candidate in INPUT_NAME_CANDIDATES:
        if candidate.matches(declared_set):
            return candidate.roles()

    unknown = sorted(name for name in declared if name not in INPUT_NAME_ALIASES)
    if unknown:
        raise DecodeError(f"Unsupported encoder inputs: {unknown}")
    return {name: INPUT_NAME_ALIASES[name] for name in declared}


def resolve_output_name(declared: list[str]) -> str:
    """Pick the first candidate hidden-state output the model exposes.

    Raises:
        DecodeError: If no candidate output is declared
    """
    for name in OUTPUT_NAME_CANDIDATES:
        if name in declared:
            return name
    raise DecodeError(f"No hidden-state output among {declared}")


def _tensor_dtype(onnx_type: str | None) -> type[np.integer]:
    """Integer dtype the encoder declares for an input (default int32)."""
    if onnx_type and "int64" in onnx_type:
        return np.int64
    return np.int32


class EmbeddingClient:
    """Lazily-loaded ONNX encoder producing CLS-position embeddings."""

    def __init__(
        self,
        tokenizer: Tokenizer,
        model_path: str | Path,
        *,
        max_length: int = DEFAULT_MAX_LENGTH,
        dim: int = DEFAULT_EMBEDDING_DIM,
        session_factory: SessionFactory | None = None,
    ) -> None:
        """Initialize client. Nothing is loaded until first use.

        Args:
            tokenizer: Tokenizer used to build encoder inputs
            model_path: Path to the ONNX encoder
            max_length: Sequence length fed to the encoder
            dim: Expected hidden size of the embedding
            session_factory: Injectable session constructor (default: onnxruntime)
        """
        self._tokenizer = tokenizer
        self._model_path = Path(model_path)
        self._max_length = max_length
        self._dim = dim
        self._session_factory = session_factory or default_session_factory
        self._session: EncoderSession | None = None
        self._load_error: str | None = None
        self._loaded = False
        self._lock = threading.Lock()

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    @property
    def dim(self) -> int:
        return self._dim

    @property
    def available(self) -> bool:
        """Whether the encoder is loaded (triggers the one-time load)."""
        return self._ensure_session() is not None

    def zero_vector(self) -> np.ndarray:
        return np.zeros(self._dim, dtype=np.float32)

    def _ensure_session(self) -> EncoderSession | None:
        if self._loaded:
            return self._session
        with self._lock:
            if not self._loaded:
                self._session = self._load()
                self._loaded = True
        return self._session

    def _load(self) -> EncoderSession | None:
        if not self._model_path.exists():
            self._load_error = f"encoder not found at {self._model_path}"
            logger.warning(f"Embedding model unavailable: {self._load_error}")
            return None
        try:
            session = self._session_factory(str(self._model_path))
            input_names = [i.name for i in session.get_inputs()]
        except Exception as e:
            self._load_error = f"{type(e).__name__}: {e}"
            logger.error(f"Failed to load embedding model: {self._load_error}")
            return None
        logger.info(f"Loaded embedding model from {self._model_path}, inputs={input_names}")
        return session

    def _build_feeds(self, session: EncoderSession, text: str) -> dict[str, np.ndarray]:
        ids, mask = self._tokenizer.encode(text, max_length=self._max_length)
        tensors = {
            InputRole.ids: ids.reshape(1, -1),
            InputRole.mask: mask.reshape(1, -1),
            InputRole.type_ids: np.zeros((1, ids.shape[0]), dtype=np.int32),
        }
        inputs = session.get_inputs()
        roles = resolve_input_roles([i.name for i in inputs])
        return {
            i.name: tensors[roles[i.name]].astype(_tensor_dtype(getattr(i, "type", None)))
            for i in inputs
        }

    def _cls_vector(self, hidden: Any) -> np.ndarray:
        hidden = np.asarray(hidden)
        if hidden.ndim != 3 or hidden.shape[0] < 1 or hidden.shape[1] < 1:
            raise DecodeError(f"Expected hidden state [1, N, H], got {hidden.shape}")
        if hidden.shape[2] != self._dim:
            raise DecodeError(f"Hidden size {hidden.shape[2]} != expected {self._dim}")
        return hidden[0, 0, :].astype(np.float32)

    def embed(self, text: str) -> TierResult[np.ndarray]:
        """Embed text via the CLS position of the encoder's hidden state."""
        try:
            session = self._ensure_session()
            if session is None:
                raise ModelUnavailableError(self._load_error or "encoder unavailable")
            feeds = self._build_feeds(session, text)
            output_name = resolve_output_name([o.name for o in session.get_outputs()])
            outputs = session.run([output_name], feeds)
            if not outputs:
                raise DecodeError("Encoder returned no outputs")
            return TierResult.success(self._cls_vector(outputs[0]))
        except EngineError as e:
            logger.warning(f"Embedding failed: {e}")
            return TierResult.from_error(e)
        except Exception as e:
            # onnxruntime surfaces shape/dtype mismatches as its own exception types
            logger.warning(f"Embedding inference error: {type(e).__name__}: {e}")
            return TierResult.fail(FailureKind.DECODE, f"{type(e).__name__}: {e}")

    def get_embedding(self, text: str) -> np.ndarray:
        result = self.embed(text)
        if result.ok and result.value is not None:
            return result.value
        return self.zero_vector()

