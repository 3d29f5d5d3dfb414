"""
Ordered, immutable merge table.

A merge table maps byte pairs to the token that replaced them during
training. Insertion order is the merge priority used when encoding, so the
table keeps an explicit rank for every entry next to the pair lookup.
"""

from collections.abc import Iterable, Iterator

from .errors import MergeTableError
from .types import Token, TokenPair


class MergeTable:
    """
    Byte pair -> merge token mapping with load-bearing insertion order.

    Entries are validated on construction: a pair may appear only once and
    merge tokens must be above 255 and strictly increasing.

    Example:
       >>> table = MergeTable([((97, 97), 256), ((256, 98), 257)])
       >>> table[(97, 97)]
       256
       >>> table.rank((256, 98))
       1
    """

    __slots__ = ("_entries", "_index", "_pairs_by_tok")

    def __init__(self, entries: Iterable[tuple[TokenPair, Token]] = ()) -> None:
        ordered: list[tuple[TokenPair, Token]] = []
        # pair -> (rank, merge token)
        index: dict[TokenPair, tuple[int, Token]] = {}
        pairs_by_tok: dict[Token, TokenPair] = {}
        last_tok = 255

        for rank, (pair, mtok) in enumerate(entries):
            try:
                left, right = pair
                pair = (int(left), int(right))
                mtok = int(mtok)
            except (TypeError, ValueError):
                raise MergeTableError(
                    f"merge entry must be a pair of ints and a token: {(pair, mtok)!r}"
                ) from None
            if pair in index:
                raise MergeTableError(f"duplicate merge pair {pair}", invalid_tok=mtok)
            if mtok <= last_tok:
                raise MergeTableError(
                    f"merge tokens must be above 255 and strictly increasing "
                    f"(previous: {last_tok})",
                    invalid_tok=mtok,
                )
            last_tok = mtok
            ordered.append((pair, mtok))
            index[pair] = (rank, mtok)
            pairs_by_tok[mtok] = pair

        self._entries: tuple[tuple[TokenPair, Token], ...] = tuple(ordered)
        self._index = index
        self._pairs_by_tok = pairs_by_tok

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[TokenPair]:
        """Iterate over pairs in priority order."""
        return (pair for pair, _ in self._entries)

    def __contains__(self, pair: object) -> bool:
        return pair in self._index

    def __getitem__(self, pair: TokenPair) -> Token:
        return self._index[pair][1]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MergeTable):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self._entries)!r})"

    def get(self, pair: TokenPair, default: Token | None = None) -> Token | None:
        """Return the merge token for ``pair`` or ``default``."""
        entry = self._index.get(pair)
        return default if entry is None else entry[1]

    def rank(self, pair: TokenPair) -> int | None:
        """Return the priority of ``pair`` (0 is applied first), or ``None``."""
        entry = self._index.get(pair)
        return None if entry is None else entry[0]

    def items(self) -> tuple[tuple[TokenPair, Token], ...]:
        """Return ``(pair, merge token)`` entries in priority order."""
        return self._entries

    def pair_of(self, tok: Token) -> TokenPair | None:
        """Return the pair that ``tok`` was merged from, or ``None`` for literals."""
        return self._pairs_by_tok.get(tok)


__all__ = ["MergeTable"]
