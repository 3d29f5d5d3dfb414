"""Custom exception hierarchy for bytepair errors."""

from .types import Token


class BytePairError(Exception):
    """Base exception for all bytepair errors."""


class TrainingError(BytePairError):
    """Raised when merge learning is given invalid arguments or input."""

    def __init__(self, message: str, *, vocab_size: int | None = None) -> None:
        if vocab_size is not None:
            message = f"{message} (vocab size: {vocab_size})"
        super().__init__(message)
        self.vocab_size = vocab_size


class MergeTableError(BytePairError):
    """Raised when a merge table is malformed."""

    def __init__(self, message: str, *, invalid_tok: Token | None = None) -> None:
        if invalid_tok is not None:
            message = f"{message} (invalid token: {invalid_tok})"
        super().__init__(message)
        self.invalid_tok = invalid_tok


class VocabularyError(BytePairError):
    """Raised when vocabulary operations fail."""

    def __init__(
        self,
        message: str,
        *,
        vocab_size: int | None = None,
        invalid_tok: Token | None = None,
    ) -> None:
        """Initialize with optional token and vocab_size that get appended to the message."""
        extra = " "
        # training: vocab size <= 256
        if vocab_size is not None:
            extra += f"(vocab size: {vocab_size}) "
        # decoding: token not in vocab
        if invalid_tok is not None:
            extra += f"(invalid token: {invalid_tok}) "
        super().__init__((message + extra).rstrip())
        self.vocab_size = vocab_size
        self.invalid_tok = invalid_tok


class ModelLoadError(BytePairError):
    """Raised when loading a model file fails."""

    def __init__(
        self,
        message: str,
        *,
        model_path: str | None = None,
        version_mismatch: tuple[str, str] | None = None,
    ) -> None:
        extra = " "
        if model_path:
            extra += f"(path: {model_path}) "
        if version_mismatch is not None:
            extra += f"(expected: {version_mismatch[1]}) (got {version_mismatch[0]}) "
        super().__init__((message + extra).rstrip())
        self.model_path = model_path
        self.version_mismatch = version_mismatch


__all__ = [
    "BytePairError",
    "TrainingError",
    "MergeTableError",
    "VocabularyError",
    "ModelLoadError",
]
