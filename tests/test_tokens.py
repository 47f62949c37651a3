import pytest

from gospeak.bigram import compress_numbers_into_tokens
from gospeak.tokens import parse_raw_tokens, unpack_tokens, unpad_centroids


def test_unpack_then_unpad_restores_even_sequence():
    original = [10, 0, 32000, 5]
    packed = [int(t) for t in compress_numbers_into_tokens([str(n) for n in original])]
    assert unpad_centroids(unpack_tokens(packed)) == original


def test_unpack_then_unpad_restores_odd_sequence():
    original = [3, 4, 5]
    packed = [int(t) for t in compress_numbers_into_tokens([str(n) for n in original])]
    assert unpad_centroids(unpack_tokens(packed)) == original


def test_unpack_doubles_length():
    assert len(unpack_tokens([1, 2, 3])) == 6
    assert unpack_tokens([]) == []


def test_unpad_removes_at_most_two_zeros():
    assert unpad_centroids([3, 0, 0, 0]) == [2, 2**32 - 1]


def test_unpad_does_not_mutate_input():
    values = [5, 6, 0]
    assert unpad_centroids(values) == [4, 5]
    assert values == [5, 6, 0]


def test_unpad_all_zeros():
    assert unpad_centroids([0, 0]) == []


@pytest.mark.parametrize(
    "text",
    ["[1 2,,3]", "1,2,3", "1  2   3", " [1,2,3] "],
)
def test_parse_raw_tokens_forms(text):
    assert parse_raw_tokens(text) == [1, 2, 3]


def test_parse_raw_tokens_empty():
    assert parse_raw_tokens("[]") == []


@pytest.mark.parametrize("text", ["-1", "1.5", "a", "1,", "1e2", '"1"'])
def test_parse_raw_tokens_rejects_invalid(text):
    with pytest.raises(ValueError):
        parse_raw_tokens(text)


def test_parse_raw_tokens_rejects_overflow():
    with pytest.raises(ValueError):
        parse_raw_tokens(str(2**64))