"""Unit tests for the ordered merge table."""

import pytest

from bytepair import MergeTable, MergeTableError


@pytest.fixture
def table():
    """Return a small table whose priority order differs from pair order."""
    return MergeTable([((98, 99), 256), ((97, 98), 257), ((256, 257), 258)])


def test_lookup_and_rank(table):
    assert table[(97, 98)] == 257
    assert table.rank((98, 99)) == 0
    assert table.rank((97, 98)) == 1
    assert table.rank((1, 2)) is None
    assert table.get((1, 2)) is None
    assert table.get((1, 2), -1) == -1
    assert (256, 257) in table
    assert (257, 256) not in table


def test_iteration_follows_insertion_order(table):
    assert list(table) == [(98, 99), (97, 98), (256, 257)]
    assert [mtok for _, mtok in table.items()] == [256, 257, 258]


def test_pair_of(table):
    assert table.pair_of(258) == (256, 257)
    assert table.pair_of(97) is None


def test_equality_depends_on_order():
    first = MergeTable([((1, 2), 256), ((3, 4), 257)])
    same = MergeTable([((1, 2), 256), ((3, 4), 257)])
    swapped = MergeTable([((3, 4), 256), ((1, 2), 257)])
    assert first == same
    assert first != swapped
    assert hash(first) == hash(same)


def test_empty_table_is_falsy():
    assert not MergeTable()
    assert len(MergeTable()) == 0


def test_rejects_duplicate_pair():
    with pytest.raises(MergeTableError):
        MergeTable([((1, 2), 256), ((1, 2), 257)])


def test_rejects_literal_merge_token():
    with pytest.raises(MergeTableError) as exc_info:
        MergeTable([((1, 2), 255)])
    assert exc_info.value.invalid_tok == 255


def test_rejects_non_increasing_tokens():
    with pytest.raises(MergeTableError):
        MergeTable([((1, 2), 257), ((3, 4), 256)])
    with pytest.raises(MergeTableError):
        MergeTable([((1, 2), 256), ((3, 4), 256)])


@pytest.mark.parametrize(
    "entry",
    [
        ((97, 98, 99), 256),  # three tokens
        ((97,), 256),  # one token
        (97, 256),  # not a pair at all
        ((97, "b"), 256),  # non-numeric token
    ],
)
def test_rejects_malformed_entry(entry):
    with pytest.raises(MergeTableError):
        MergeTable([entry])
