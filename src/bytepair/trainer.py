"""Standalone BPE training module."""

from collections.abc import Sequence
import logging

from ._bpe import bpe_merge, most_frequent_pair, pair_counts
from ._decorators import measure_time
from ._progress import is_progress_enabled
from .errors import TrainingError
from .merges import MergeTable
from .types import Token, TokenPair

log = logging.getLogger(__name__)

# number of progress checkpoints logged per training run
_PROGRESS_STEPS = 10


def _to_byte_tokens(data: bytes | bytearray | str | Sequence[Token]) -> list[Token]:
    """Convert training input into a stream of literal byte tokens."""
    if isinstance(data, str):
        return list(data.encode("utf-8"))
    if isinstance(data, (bytes, bytearray)):
        return list(data)
    try:
        # bytes() validates that every int lies in 0-255
        return list(bytes(list(data)))
    except (TypeError, ValueError) as e:
        raise TrainingError("training data must be bytes, str or ints in 0-255") from e


def _resolve_n_merges(n_merges: int | None, vocab_size: int | None) -> int:
    """Turn a merge count or a target vocab size into a merge count."""
    if (n_merges is None) == (vocab_size is None):
        raise TrainingError("pass exactly one of n_merges or vocab_size")
    if vocab_size is not None:
        if vocab_size < 256:
            raise TrainingError("vocab size must be at least 256", vocab_size=vocab_size)
        return vocab_size - 256
    if n_merges < 0:
        raise TrainingError(f"merge count must be non-negative (got {n_merges})")
    return n_merges


@measure_time
def learn_merges(
    data: bytes | bytearray | str | Sequence[Token],
    n_merges: int | None = None,
    *,
    vocab_size: int | None = None,
    verbose: bool = False,
    show_progress: bool = True,
) -> MergeTable:
    """
    Learn an ordered merge table from a training byte stream.

    Each step merges the most frequent adjacent pair into the next unused
    token (``256 + merges so far``). Training stops early, without error,
    once no pair occurs more than once.

    Example:
       >>> table = learn_merges(b"aaabdaaabac", vocab_size=259, show_progress=False)
       >>> list(table.items())
       [((97, 97), 256), ((97, 98), 257), ((256, 257), 258)]

    :param data: Training data; ``str`` is UTF-8 encoded.
    :param n_merges: Number of merges to learn.
    :param vocab_size: Target vocabulary size, i.e. ``256 + n_merges``.
    :param verbose: Log each learned merge when ``True``.
    :param show_progress: Log progress checkpoints when ``True`` and progress is enabled.
    :returns: Merge table with at most ``n_merges`` entries.
    :raises TrainingError: If the arguments are inconsistent or the data is not bytes.
    """
    n_merges = _resolve_n_merges(n_merges, vocab_size)
    if n_merges == 0:
        return MergeTable()

    tokens = _to_byte_tokens(data)
    report_progress = show_progress and is_progress_enabled()
    checkpoint = max(1, n_merges // _PROGRESS_STEPS)

    merges: list[tuple[TokenPair, Token]] = []
    for i in range(n_merges):
        # counts are rebuilt from the current stream on every step
        pair = most_frequent_pair(pair_counts(tokens))
        # 1. empty or single-token stream
        # 2. no pair repeats, so further merges would not compress anything
        if pair is None:
            log.warning(
                "no byte pair occurs more than once after %d merges "
                "(requested %d), stopping early",
                i,
                n_merges,
            )
            break

        new_tok = 256 + i
        tokens = bpe_merge(tokens, pair, new_tok)
        merges.append((pair, new_tok))

        if verbose:
            log.info("merge %d/%d: %s -> %d", i + 1, n_merges, pair, new_tok)
        if report_progress and (i + 1) % checkpoint == 0:
            log.info(
                "training progress: %d/%d merges (%d%%), %d tokens remain",
                i + 1,
                n_merges,
                100 * (i + 1) // n_merges,
                len(tokens),
            )

    return MergeTable(merges)


__all__ = ["learn_merges"]
