"""
Core Byte Pair Encoding (BPE) operations.
"""

from collections import Counter
from collections.abc import Sequence

from .types import PairCounts, Token, TokenPair


def pair_counts(tokens: Sequence[Token]) -> PairCounts:
    """
    Count every adjacent token pair in a token sequence.

    Overlapping pairs are counted at each position, so a run of ``k`` equal
    tokens contributes ``k - 1`` pairs. Sequences shorter than two tokens
    produce an empty counter.

    :param tokens: Token sequence to scan.
    :returns: Mapping of token pairs to their occurrence counts.
    """
    return Counter(zip(tokens, tokens[1:]))


def most_frequent_pair(counts: PairCounts) -> TokenPair | None:
    """
    Select the pair to merge next from a frequency counter.

    Ties on the highest count go to the numerically smallest ``(left, right)``
    pair so that training is reproducible.

    :param counts: Pair frequencies for the current token sequence.
    :returns: The winning pair, or ``None`` if no pair occurs more than once.
    """
    if not counts:
        return None
    # highest count first, then smallest pair
    pair = min(counts, key=lambda bp: (-counts[bp], bp))
    if counts[pair] <= 1:
        return None
    return pair


def bpe_merge(tokens: Sequence[Token], target: TokenPair, new_tok: Token) -> list[Token]:
    """
    Merge all occurrences of a target token pair into a single new token.

    Scans left to right; a merge at position ``i`` consumes ``i`` and ``i + 1``
    and scanning resumes at ``i + 2``, so a run like ``a a a`` merged on
    ``(a, a)`` becomes ``new a``.

    Note that some of the new tokens may be partial UTF-8 sequences, so the
    bytes they expand to cannot always be decoded into valid strings on
    their own.

    :param tokens: Original token sequence. Left untouched.
    :param target: The consecutive pair of tokens to merge.
    :param new_tok: The token that replaces the target pair.
    :returns: New token sequence with every target pair replaced by ``new_tok``.
    """
    newtoks: list[Token] = []

    i = 0
    n = len(tokens)
    while i < n:
        # check if we can form a pair and it matches the target
        if i < n - 1 and tokens[i] == target[0] and tokens[i + 1] == target[1]:
            newtoks.append(new_tok)
            i += 2
        else:
            newtoks.append(tokens[i])
            i += 1

    return newtoks


__all__ = ["pair_counts", "most_frequent_pair", "bpe_merge"]
