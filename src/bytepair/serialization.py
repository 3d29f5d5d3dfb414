"""
Model files for persisting merge tables.

A ``.model`` file stores the merge table in priority order so it can be
loaded back; a ``.vocab`` file is a human-readable dump of the vocabulary.
"""

import logging
import unicodedata
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Final, TextIO

from .errors import BytePairError, ModelLoadError
from .merges import MergeTable
from .types import Token, TokenPair, Vocabulary
from .vocab import build_vocabulary

PREFIX: Final[str] = "BytePair"
TOKENIZER_TYPE: Final[str] = "basic"
MODEL_SUFFIX: Final[str] = ".model"
VOCAB_SUFFIX: Final[str] = ".vocab"
SECTION_MARKER: Final[str] = "---"

try:
    _version = version("bytepair")
except PackageNotFoundError:
    _version = "dev"

VERSION: Final[str] = _version

log = logging.getLogger(__name__)


def render_bytes(b: bytes) -> str:
    """
    Decode bytes as UTF-8 for display, escaping control characters.

    Invalid UTF-8 sequences are replaced with the Unicode replacement character.
    """
    text = b.decode("utf-8", errors="replace")
    # control category codes vary: Cc, Cf, Cn etc.
    return "".join(
        c if unicodedata.category(c)[0] != "C" else f"\\u{ord(c):04x}" for c in text
    )


def save_model(merges: MergeTable, file_prefix: str | Path) -> Path:
    """
    Persist a merge table to ``<file_prefix>.model``.

    :param merges: Merge table to write, one line per merge in priority order.
    :param file_prefix: Path prefix for the output file.
    :returns: Path of the written file.
    """
    model_path = Path(file_prefix).with_suffix(MODEL_SUFFIX)
    # create directory if does not exist
    model_path.parent.mkdir(parents=True, exist_ok=True)

    log.debug(f"saving {len(merges)} merge rules to {model_path}")

    with model_path.open("w", encoding="utf-8", newline="\n") as f:
        # header: version and tokenizer type
        f.write(f"{PREFIX} {VERSION}\n")
        f.write(f"type {TOKENIZER_TYPE}\n")
        # merge count section
        f.write(f"{SECTION_MARKER}\n")
        f.write(f"{len(merges)}\n")
        f.write(f"{SECTION_MARKER}\n")
        # body: mapping for all merged tokens
        for pair, mtok in merges.items():
            f.write(f"{pair[0]} {pair[1]} {mtok}\n")

    return model_path


def _read_model(f: TextIO, path: Path) -> tuple[int, list[tuple[TokenPair, Token]]]:
    """Parse an open .model file into its declared merge count and entries."""
    # verify header and version match
    header = f.readline().strip().split(" ")
    if len(header) != 2 or header[0] != PREFIX:
        raise ModelLoadError("not a bytepair model file", model_path=str(path))
    if header[1] != VERSION:
        raise ModelLoadError(
            "model version mismatch",
            model_path=str(path),
            version_mismatch=(header[1], VERSION),
        )

    tok_type = f.readline().strip()
    if tok_type != f"type {TOKENIZER_TYPE}":
        raise ModelLoadError(f"unsupported tokenizer type: {tok_type!r}")

    start_marker = f.readline().strip()
    if start_marker != SECTION_MARKER:
        raise ModelLoadError(
            f"start sequence marker missing: (expected {SECTION_MARKER}) (got {start_marker})"
        )

    raw_count = f.readline().strip()
    try:
        n_merges = int(raw_count)
        if n_merges < 0:
            raise ValueError(raw_count)
    except ValueError:
        raise ModelLoadError(f"invalid merge count: {raw_count}") from None

    end_marker = f.readline().strip()
    if end_marker != SECTION_MARKER:
        raise ModelLoadError(
            f"end sequence marker missing: (expected {SECTION_MARKER}) (got {end_marker})"
        )

    log.debug(f"loading {n_merges} merge rules")
    entries: list[tuple[TokenPair, Token]] = []
    for line in f:
        if not line.strip():
            continue
        try:
            # tokens are stored as strings in file
            ctok0, ctok1, mtok = map(int, line.split())
        except ValueError:
            raise ModelLoadError(
                f"invalid merge format at line: {line.strip()}"
            ) from None
        entries.append(((ctok0, ctok1), mtok))

    return n_merges, entries


def load_model(model_filename: str | Path) -> MergeTable:
    """
    Load a merge table from a ``.model`` file.

    :param model_filename: Path to the .model file.
    :returns: The merge table, in the priority order it was saved in.
    :raises ModelLoadError: If the file is missing or unreadable, malformed,
        written by a different version, or describes an invalid merge table.
    """
    path = Path(model_filename)

    if not path.is_file():
        raise ModelLoadError("model filepath is not a file", model_path=str(path))

    if path.suffix != MODEL_SUFFIX:
        raise ModelLoadError("expected .model file", model_path=str(path))

    log.info(f"loading model from {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            n_merges, entries = _read_model(f, path)
    except (OSError, UnicodeDecodeError) as e:
        raise ModelLoadError("could not read model file", model_path=str(path)) from e

    if len(entries) != n_merges:
        raise ModelLoadError(
            f"merge count mismatch: (expected {n_merges}) (got {len(entries)})",
            model_path=str(path),
        )

    try:
        merges = MergeTable(entries)
        # make sure every merge expands to known tokens
        build_vocabulary(merges)
    except BytePairError as e:
        raise ModelLoadError(f"invalid merge table: {e}", model_path=str(path)) from e

    log.info(f"model loaded successfully: {len(merges)} merge rules")
    return merges


def save_vocab(merges: MergeTable, vocab: Vocabulary, file_prefix: str | Path) -> Path:
    """
    Persist human-readable token representations to ``<file_prefix>.vocab``.

    :returns: Path of the written file.
    """
    vocab_path = Path(file_prefix).with_suffix(VOCAB_SUFFIX)
    vocab_path.parent.mkdir(parents=True, exist_ok=True)

    log.debug(f"saving vocab to {vocab_path}")

    with vocab_path.open("w", encoding="utf-8", newline="\n") as f:
        for tok, b in vocab.items():
            subword = render_bytes(b)
            pair = merges.pair_of(tok)
            # token arises from merging: show derivation from child tokens
            if pair is not None:
                subword0, subword1 = (
                    render_bytes(vocab[pair[0]]),
                    render_bytes(vocab[pair[1]]),
                )
                f.write(f"[{tok}] [{subword0}][{subword1}] -> {subword}\n")
            else:
                # one of base 256 tokens: no merging
                f.write(f"[{tok}] {subword}\n")

    return vocab_path


__all__ = [
    "MODEL_SUFFIX",
    "VOCAB_SUFFIX",
    "VERSION",
    "save_model",
    "load_model",
    "save_vocab",
]
