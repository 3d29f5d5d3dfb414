"""Vocabulary construction from a merge table."""

import logging

from .errors import MergeTableError
from .merges import MergeTable
from .types import Vocabulary

log = logging.getLogger(__name__)


def base_vocabulary() -> Vocabulary:
    """Return the 256 literal byte tokens."""
    return {btok: bytes([btok]) for btok in range(256)}


def build_vocabulary(merges: MergeTable) -> Vocabulary:
    """
    Build the token -> bytes vocabulary for a merge table.

    Merged tokens are expanded in priority order so both children of a merge
    are always resolved before their parent.

    :param merges: Merge table to expand.
    :returns: Mapping for the 256 byte tokens plus every merge token.
    :raises MergeTableError: If an entry references a token not defined by
        the byte range or an earlier entry.
    """
    vocab = base_vocabulary()
    for (tok0, tok1), mtok in merges.items():
        for ctok in (tok0, tok1):
            if ctok not in vocab:
                raise MergeTableError(
                    f"merge {(tok0, tok1)} -> {mtok} references an undefined token",
                    invalid_tok=ctok,
                )
        vocab[mtok] = vocab[tok0] + vocab[tok1]

    log.debug(f"built vocabulary with {len(vocab)} tokens")
    return vocab


__all__ = ["base_vocabulary", "build_vocabulary"]
