"""Unit tests for vocabulary building, encoding and decoding."""

import pytest

from bytepair import (
    MergeTable,
    MergeTableError,
    VocabularyError,
    apply_merges,
    build_vocabulary,
    decode,
    decode_text,
    encode,
    learn_merges,
)

A, B, C, D = 97, 98, 99, 100

CORPUS = (
    "hello world, While I'm glad to hear about your job opportunity, I must admit "
    "that I'm a bit skeptical about the salary you mentioned. The quick brown fox "
    "jumps over the lazy dog, and the lazy dog sleeps while the fox runs away. "
    "ＵＮＩＣＯＤＥ! café naïve 日本語 🎉🎉 Ελληνικά"
)


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def merges():
    """Return a merge table trained on CORPUS."""
    return learn_merges(CORPUS, n_merges=40, show_progress=False)


@pytest.fixture(scope="module")
def vocab(merges):
    return build_vocabulary(merges)


# Vocabulary
# ---------------------------------------------------------------------------


def test_vocabulary_literals_and_merges(merges, vocab):
    """Literals map to themselves and merges to the concatenation of children."""
    assert len(vocab) == 256 + len(merges)
    for tok in range(256):
        assert vocab[tok] == bytes([tok])
    for (tok0, tok1), mtok in merges.items():
        assert vocab[mtok] == vocab[tok0] + vocab[tok1]


def test_vocabulary_chained_merges():
    table = learn_merges(b"aaabdaaabac", n_merges=3, show_progress=False)
    vocab = build_vocabulary(table)
    assert vocab[256] == b"aa"
    assert vocab[257] == b"ab"
    assert vocab[258] == b"aaab"


def test_vocabulary_rejects_unknown_child():
    with pytest.raises(MergeTableError) as exc_info:
        build_vocabulary(MergeTable([((A, 300), 256)]))
    assert exc_info.value.invalid_tok == 300


def test_vocabulary_rejects_forward_reference():
    """A merge may only use tokens defined by earlier merges."""
    with pytest.raises(MergeTableError) as exc_info:
        build_vocabulary(MergeTable([((257, A), 256), ((A, A), 257)]))
    assert exc_info.value.invalid_tok == 257


# Encoding
# ---------------------------------------------------------------------------


def test_encode_leaves_unpaired_run_tail():
    table = MergeTable([((A, A), 256)])
    assert encode(bytes([A, A, A, B]), table) == [256, A, B]


def test_encode_aaabdaaabac():
    table = learn_merges(b"aaabdaaabac", n_merges=3, show_progress=False)
    assert encode("aaabdaaabac", table) == [258, D, 258, A, C]


def test_encode_applies_lowest_rank_first_not_leftmost():
    """(b, c) was learned first, so it wins even though (a, b) is further left."""
    table = MergeTable([((B, C), 256), ((A, B), 257)])
    assert encode(b"abc", table) == [A, 256]


def test_encode_follows_merge_chains():
    table = MergeTable([((A, A), 256), ((256, A), 257)])
    assert encode(b"aaa", table) == [257]
    assert encode(b"aaaa", table) == [256, 256]


def test_encode_empty_input(merges):
    assert encode("", merges) == []
    assert encode(b"", merges) == []


def test_encode_with_empty_table():
    assert encode(b"hello", MergeTable()) == list(b"hello")


def test_unseen_bytes_pass_through(merges, vocab):
    """Bytes never seen in training stay literal tokens and decode unchanged."""
    data = b"\x00\xff\x01zzqq\x7f"
    tokens = encode(data, merges)
    assert tokens == list(data)
    assert decode(tokens, vocab) == data


def test_encode_compresses_training_text(merges):
    assert len(encode(CORPUS, merges)) < len(CORPUS.encode("utf-8"))


def test_apply_merges_is_idempotent(merges):
    tokens = encode(CORPUS, merges)
    assert apply_merges(tokens, merges) == tokens


def test_apply_merges_does_not_mutate_input():
    tokens = [A, A, B]
    apply_merges(tokens, MergeTable([((A, A), 256)]))
    assert tokens == [A, A, B]


def test_encode_is_deterministic(merges):
    assert encode(CORPUS, merges) == encode(CORPUS, merges)


# Decoding
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "text",
    [
        CORPUS,
        "the lazy dog",
        "never seen: ЖЖЖ \t\n ☃",
        "x",
        "🎉",
    ],
)
def test_roundtrip_text(text, merges, vocab):
    data = text.encode("utf-8")
    assert decode(encode(text, merges), vocab) == data
    assert decode_text(encode(text, merges), vocab) == text


def test_roundtrip_arbitrary_bytes(merges, vocab):
    """Bytes that are not valid UTF-8 survive a round trip exactly."""
    data = bytes(range(256)) + b"\xe2\x82" + "the fox".encode("utf-8")
    assert decode(encode(data, merges), vocab) == data


def test_decode_empty(vocab):
    assert decode([], vocab) == b""
    assert decode_text([], vocab) == ""


def test_decode_unknown_token(vocab):
    bad = max(vocab) + 1
    with pytest.raises(VocabularyError) as exc_info:
        decode([A, bad], vocab)
    assert exc_info.value.invalid_tok == bad


def test_decode_text_partial_utf8():
    vocab = build_vocabulary(MergeTable())
    assert decode_text([0xE2], vocab) == "�"
    with pytest.raises(UnicodeDecodeError):
        decode_text([0xE2], vocab, errors="strict")
