"""
Encoding text into tokens and decoding tokens back into bytes.
"""

from collections.abc import Mapping, Sequence

from ._bpe import bpe_merge
from .errors import VocabularyError
from .merges import MergeTable
from .types import Token, TokenBytes, TokenPair


def apply_merges(tokens: Sequence[Token], merges: MergeTable) -> list[Token]:
    """
    Apply BPE merges to a token sequence.

    :param tokens: List of tokens (initially bytes 0-255). Left untouched.
    :param merges: Learned merge table.
    :returns: Compressed token sequence after applying learned merges.
    """
    tokens = list(tokens)
    # loop text compression using BPE algorithm.
    while len(tokens) >= 2:
        # get all unique bigram pairs.
        # frequencies are irrelevant here, only merge priority matters.
        bigrams = set(zip(tokens, tokens[1:]))
        # retrieve the byte pair with the lowest merge rank.
        # later merges may be built from tokens produced by earlier ones.
        pair: TokenPair = min(
            bigrams,
            key=lambda bp: (_rank_or_inf(merges, bp), bp),
        )
        # no pair to merge.
        if pair not in merges:
            break
        # merge target pair.
        tokens = bpe_merge(tokens, pair, merges[pair])

    return tokens


def _rank_or_inf(merges: MergeTable, pair: TokenPair) -> float:
    rank = merges.rank(pair)
    return float("inf") if rank is None else rank


def encode(text: str | bytes | bytearray, merges: MergeTable) -> list[Token]:
    """
    Encode text into a sequence of tokens.

    :param text: Input text; ``str`` is UTF-8 encoded first.
    :param merges: Learned merge table.
    :returns: Token sequence. Bytes not covered by any merge stay literal tokens.
    """
    if isinstance(text, str):
        text = text.encode("utf-8")
    # each byte maps to a token in the 0-255 range
    return apply_merges(list(text), merges)


def decode(tokens: Sequence[Token], vocab: Mapping[Token, TokenBytes]) -> bytes:
    """
    Decode a sequence of tokens back into raw bytes.

    :param tokens: Token sequence to decode.
    :param vocab: Vocabulary built from the merge table used for encoding.
    :returns: Concatenated bytes of every token.
    :raises VocabularyError: If a token is not in the vocabulary.
    """
    parts: list[TokenBytes] = []
    for tok in tokens:
        try:
            parts.append(vocab[tok])
        except KeyError:
            raise VocabularyError("token not in vocabulary", invalid_tok=tok) from None
    return b"".join(parts)


def decode_text(
    tokens: Sequence[Token],
    vocab: Mapping[Token, TokenBytes],
    errors: str = "replace",
) -> str:
    """
    Decode a sequence of tokens into a UTF-8 string.

    :param errors: How to handle invalid UTF-8, passed to ``bytes.decode``.
    :raises VocabularyError: If a token is not in the vocabulary.
    """
    return decode(tokens, vocab).decode("utf-8", errors=errors)


__all__ = ["apply_merges", "encode", "decode", "decode_text"]
