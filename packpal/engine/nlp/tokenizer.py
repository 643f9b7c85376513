"""Word-level tokenizer over a BERT-style vocabulary.

Text is lowercased and split on whitespace; each word maps to its exact
vocabulary id or to [UNK]. There is no sub-word segmentation.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import numpy as np

logger = logging.getLogger(__name__)

CLS_TOKEN = "[CLS]"
SEP_TOKEN = "[SEP]"
PAD_TOKEN = "[PAD]"
UNK_TOKEN = "[UNK]"

# [UNK] position in the standard uncased BERT vocabulary
FALLBACK_UNK_ID = 100

DEFAULT_MAX_LENGTH = 64


@dataclass(frozen=True)
class EncodedText:
    """Fixed-length id and mask arrays (int32)."""

    ids: np.ndarray
    mask: np.ndarray

    def __iter__(self):
        return iter((self.ids, self.mask))


class Tokenizer(Protocol):
    """Protocol for tokenizer implementations."""

    def encode(self, text: str, max_length: int = DEFAULT_MAX_LENGTH) -> EncodedText:
        ...


def load_vocab(path: Path) -> dict[str, int]:
    """Read a newline-delimited token list; token id is the line index.

    Blank lines keep their index but map no token.
    """
    vocab: dict[str, int] = {}
    with open(path, encoding="utf-8") as f:
        for index, line in enumerate(f):
            token = line.strip()
            if token:
                vocab.setdefault(token, index)
    return vocab


class WordTokenizer:
    """Tokenizer backed by an in-memory vocabulary, read-only after init."""

    def __init__(self, vocab: dict[str, int] | None = None) -> None:
        self._vocab: dict[str, int] = dict(vocab or {})

    @classmethod
    def from_file(cls, path: str | Path) -> "WordTokenizer":
        """Load the vocabulary asset, or return a degraded tokenizer if missing."""
        vocab_path = Path(path)
        try:
            vocab = load_vocab(vocab_path)
        except OSError as e:
            logger.warning(f"Vocabulary not loaded from {vocab_path}: {e}; tokenizer degraded")
            return cls()
        logger.info(f"Loaded vocabulary with {len(vocab)} tokens from {vocab_path}")
        return cls(vocab)

    @property
    def degraded(self) -> bool:
        """True when no vocabulary is loaded (every word maps to [UNK])."""
        return not self._vocab

    @property
    def vocab_size(self) -> int:
        return len(self._vocab)

    def token_id(self, token: str) -> int:
        found = self._vocab.get(token)
        if found is not None:
            return found
        return self._vocab.get(UNK_TOKEN, FALLBACK_UNK_ID)

    def encode(self, text: str, max_length: int = DEFAULT_MAX_LENGTH) -> EncodedText:
        """Encode text as `[CLS] words... [SEP] [PAD]...`.

        Args:
            text: Input text
            max_length: Output length; at most max_length - 2 words are kept

        Returns:
            EncodedText with ids and mask of exactly max_length entries

        Raises:
            ValueError: If max_length is negative
        """
        if max_length < 0:
            raise ValueError("max_length must be >= 0")

        words = text.lower().split()
        content = words[: max(0, max_length - 2)]

        tokens = [self.token_id(CLS_TOKEN)]
        tokens += [self.token_id(word) for word in content]
        tokens.append(self.token_id(SEP_TOKEN))
        tokens = tokens[:max_length]

        real = len(tokens)
        ids = np.full(max_length, self.token_id(PAD_TOKEN), dtype=np.int32)
        mask = np.zeros(max_length, dtype=np.int32)
        ids[:real] = tokens
        mask[:real] = 1
        return EncodedText(ids=ids, mask=mask)
