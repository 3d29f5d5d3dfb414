"""Train a byte-level BPE tokenizer on a text file or a Hugging Face dataset."""

import argparse
import logging
import time
from pathlib import Path

from datasets import load_dataset

from bytepair import ByteTokenizer

log = logging.getLogger("bytepair.train")


def format_bytes(num_bytes: float) -> str:
    """Format bytes to human-readable string."""
    for unit in ["B", "KB", "MB", "GB"]:
        if num_bytes < 1024.0:
            return f"{num_bytes:.2f} {unit}"
        num_bytes /= 1024.0
    return f"{num_bytes:.2f} TB"


def load_corpus(args: argparse.Namespace) -> str:
    """Return the training text from a local file or a dataset slice."""
    if args.input:
        return Path(args.input).read_text(encoding="utf-8")

    log.info(f"loading {args.dataset} (split={args.split})")
    ds = load_dataset(args.dataset, split=args.split)
    if args.num_docs is not None:
        return "".join(ds[: args.num_docs][args.text_column])
    return "".join(ds[args.text_column])


def main() -> None:
    """Train, save and report compression on the training text."""
    parser = argparse.ArgumentParser(description="Train a bytepair tokenizer.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", type=str, help="Path to a UTF-8 text file.")
    source.add_argument(
        "--dataset", type=str, help="Hugging Face dataset name, e.g. stevez80/Sci-Fi-Books-gutenberg."
    )
    parser.add_argument("--split", type=str, default="train", help="Dataset split (default: train).")
    parser.add_argument(
        "--num-docs",
        type=int,
        default=None,
        help="Number of dataset documents to use (default: all).",
    )
    parser.add_argument(
        "--text-column", type=str, default="text", help="Dataset text column (default: text)."
    )
    parser.add_argument(
        "--vocab-size",
        type=int,
        default=512,
        help="Target vocab size including the 256 byte tokens (default: 512).",
    )
    parser.add_argument(
        "--output", type=str, default="bytepair", help="Output file prefix (default: bytepair)."
    )
    parser.add_argument("--verbose", action="store_true", help="Log every learned merge.")
    args = parser.parse_args()

    # Configure logging to show INFO level and above.
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    text = load_corpus(args)
    text_size = len(text.encode("utf-8"))
    log.info(f"training text: {format_bytes(text_size)} ({len(text):,} chars)")

    tokenizer = ByteTokenizer()
    start = time.perf_counter()
    tokenizer.train(text, vocab_size=args.vocab_size, verbose=args.verbose)
    log.info(
        f"learned {len(tokenizer.merges):,} merges in {time.perf_counter() - start:.2f}s"
    )

    tokenizer.save(args.output)

    encoded = tokenizer.encode(text)
    if encoded:
        ratio = text_size / len(encoded)
        print(f"Compression ratio: {ratio:.2f}x ({text_size:,} bytes -> {len(encoded):,} tokens)")


if __name__ == "__main__":
    main()
