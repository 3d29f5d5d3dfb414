"""
Core types for byte pair encoding.
"""

from collections import Counter
from typing import TypeAlias

Token: TypeAlias = int
TokenBytes: TypeAlias = bytes
TokenPair: TypeAlias = tuple[Token, Token]
PairCounts: TypeAlias = Counter[TokenPair]
Vocabulary: TypeAlias = dict[Token, TokenBytes]
