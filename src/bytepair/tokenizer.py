"""Byte-level BPE tokenizer."""

from concurrent.futures import ThreadPoolExecutor
import logging
import os
from pathlib import Path

from .codec import decode, decode_text, encode
from .errors import TrainingError, VocabularyError
from .merges import MergeTable
from .serialization import load_model, save_model, save_vocab
from .trainer import learn_merges
from .types import Token, Vocabulary
from .vocab import build_vocabulary

log = logging.getLogger(__name__)


class ByteTokenizer:
    """
    Tokenizer that operates directly on byte sequences.

    Holds a learned merge table and the vocabulary derived from it. Both are
    replaced wholesale by :meth:`train` and :meth:`load` and never mutated in
    place, so a trained tokenizer can be shared across threads.

    Example:
       >>> tok = ByteTokenizer()
       >>> tok.train("hello world hello world", vocab_size=260)
       >>> tok.decode(tok.encode("hello"))
       'hello'
    """

    def __init__(self, merges: MergeTable | None = None) -> None:
        """Initialize with an optional pre-built merge table."""
        # byte pair -> merge token
        self.merges: MergeTable = merges if merges is not None else MergeTable()
        # tokens -> bytes
        self.vocab: Vocabulary = build_vocabulary(self.merges)

    def train(
        self,
        text: str | bytes | list[str],
        vocab_size: int,
        verbose: bool = False,
        show_progress: bool = True,
    ) -> None:
        """
        Train the tokenizer on raw text using byte-level BPE.

        List inputs are concatenated and ``str`` is encoded as UTF-8 before
        ``vocab_size - 256`` merges are learned on top of the byte vocabulary.

        :param text: Training text as a string, bytes, or list of strings.
        :param vocab_size: Target vocabulary size including the base 256 bytes.
        :param verbose: Log each learned merge when ``True``.
        :param show_progress: Log training progress checkpoints when ``True``.
        :raises VocabularyError: If ``vocab_size`` is less than or equal to 256.
        """
        if vocab_size <= 256:
            raise VocabularyError(
                "vocab size must be greater than 256", vocab_size=vocab_size
            )

        # handle list input
        if isinstance(text, list):
            text = "".join(text)

        merges = learn_merges(
            text, vocab_size=vocab_size, verbose=verbose, show_progress=show_progress
        )

        self.merges = merges  # used for encoding text -> tokens
        self.vocab = build_vocabulary(merges)  # used for decoding tokens -> text

    def encode(self, text: str | bytes) -> list[Token]:
        """Encode text into a sequence of tokens."""
        return encode(text, self.merges)

    def decode(self, tokens: list[Token], errors: str = "replace") -> str:
        """
        Decode tokens into UTF-8 text.

        :param errors: How to handle invalid UTF-8, "strict" or "replace".
        :raises VocabularyError: If any token ID is not in the vocabulary.
        """
        return decode_text(tokens, self.vocab, errors=errors)

    def decode_bytes(self, tokens: list[Token]) -> bytes:
        """
        Decode tokens into the exact original bytes.

        :raises VocabularyError: If any token ID is not in the vocabulary.
        """
        return decode(tokens, self.vocab)

    def encode_batch(
        self, texts: list[str | bytes], num_workers: int | None = None
    ) -> list[list[Token]]:
        """
        Encode multiple texts concurrently.

        Parallelization happens across texts, never within a single text,
        because merges can span arbitrary byte boundaries.

        :param texts: Text inputs to encode.
        :param num_workers: Thread count; defaults to the CPU count.
        :returns: Encoded token sequences in input order.
        """
        if len(texts) <= 1:
            return [self.encode(text) for text in texts]
        with ThreadPoolExecutor(max_workers=self._workers(num_workers)) as pool:
            return list(pool.map(self.encode, texts))

    def decode_batch(
        self,
        token_batch: list[list[Token]],
        errors: str = "replace",
        num_workers: int | None = None,
    ) -> list[str]:
        """
        Decode multiple token sequences concurrently.

        :raises VocabularyError: If any token ID is not in the vocabulary.
        """
        if len(token_batch) <= 1:
            return [self.decode(tokens, errors=errors) for tokens in token_batch]
        with ThreadPoolExecutor(max_workers=self._workers(num_workers)) as pool:
            return list(pool.map(lambda toks: self.decode(toks, errors=errors), token_batch))

    def vocab_size(self) -> int:
        """Return the number of tokens in the vocabulary."""
        return len(self.vocab)

    def save(self, file_prefix: str | Path) -> None:
        """
        Save tokenizer state to disk.

        Creates two files: a .model file with merge mappings and a .vocab file
        with human-readable token representations.

        :param file_prefix: Path prefix for output files.
        :raises TrainingError: If the tokenizer has not been trained yet.
        """
        if not self.merges:
            raise TrainingError(
                f"{self.__class__.__name__} must be trained before saving"
            )
        log.info(f"saving tokenizer to {file_prefix}")
        save_model(self.merges, file_prefix)
        save_vocab(self.merges, self.vocab, file_prefix)
        log.info("tokenizer saved successfully")

    def load(self, model_filename: str | Path) -> None:
        """
        Load tokenizer state from a .model file.

        Restores merge mappings and rebuilds vocabulary.

        :raises ModelLoadError: If the file is missing or malformed.
        """
        merges = load_model(model_filename)
        # update state only after a successful read
        self.merges = merges
        self.vocab = build_vocabulary(merges)

    @classmethod
    def from_file(cls, model_filename: str | Path) -> "ByteTokenizer":
        """Create a tokenizer from a saved .model file."""
        return cls(load_model(model_filename))

    @staticmethod
    def _workers(num_workers: int | None) -> int:
        if num_workers is None:
            return os.cpu_count() or 1
        return max(1, num_workers)


__all__ = ["ByteTokenizer"]
