"""bytepair: byte-level byte pair encoding."""

from ._bpe import bpe_merge, most_frequent_pair, pair_counts
from ._progress import disable_progress, enable_progress
from .codec import apply_merges, decode, decode_text, encode
from .errors import (
    BytePairError,
    MergeTableError,
    ModelLoadError,
    TrainingError,
    VocabularyError,
)
from .merges import MergeTable
from .serialization import VERSION, load_model, save_model, save_vocab
from .tokenizer import ByteTokenizer
from .trainer import learn_merges
from .vocab import build_vocabulary

__version__ = VERSION

__all__ = [
    "ByteTokenizer",
    "MergeTable",
    "learn_merges",
    "build_vocabulary",
    "encode",
    "apply_merges",
    "decode",
    "decode_text",
    "pair_counts",
    "most_frequent_pair",
    "bpe_merge",
    "save_model",
    "load_model",
    "save_vocab",
    "enable_progress",
    "disable_progress",
    "BytePairError",
    "TrainingError",
    "MergeTableError",
    "VocabularyError",
    "ModelLoadError",
]
