import json

import pytest

from gospeak.bigram import (
    build_bigrams,
    compress_numbers_into_tokens,
    main,
    next_tokens,
)

MASK = (1 << 15) - 1


def test_compress_pairs_fields():
    (token,) = compress_numbers_into_tokens(["4", "9"])
    value = int(token)
    assert (value >> 15) - 1 == 4
    assert (value & MASK) - 1 == 9


def test_compress_length_is_half_rounded_up():
    assert len(compress_numbers_into_tokens(["1", "2", "3"])) == 2
    assert len(compress_numbers_into_tokens([])) == 0


def test_compress_odd_tail_has_empty_low_field():
    tokens = compress_numbers_into_tokens(["1", "2", "7"])
    assert int(tokens[-1]) & MASK == 0
    assert (int(tokens[-1]) >> 15) - 1 == 7


def test_compress_unparsable_counts_as_zero():
    assert compress_numbers_into_tokens(["x", "1.5"]) == compress_numbers_into_tokens(["0", "0"])


def test_build_bigrams_chains_tokens():
    tokens = compress_numbers_into_tokens("1 2 3 4 5 6".split())
    bigrams = build_bigrams(["abc\t1 2 3 4 5 6", ""])
    assert bigrams["a"] == {tokens[0]: 1}
    assert bigrams[tokens[0]] == {tokens[1]: 1}
    assert bigrams[tokens[1]] == {tokens[2]: 1}
    assert tokens[2] not in bigrams


def test_build_bigrams_accumulates_counts():
    tokens = compress_numbers_into_tokens(["7", "8"])
    bigrams = build_bigrams(["xy\t7 8", "xz\t7 8"])
    assert bigrams["x"][tokens[0]] == 2


def test_build_bigrams_skips_lines_without_tab():
    assert build_bigrams(["no tab here", "", "single"]) == {}


def test_build_bigrams_empty_word_raises():
    with pytest.raises(ValueError):
        build_bigrams(["\t1 2"])


def test_build_bigrams_empty_numbers_raises():
    with pytest.raises(ValueError):
        build_bigrams(["word\t   "])


def test_next_tokens_known_and_unknown():
    tokens = compress_numbers_into_tokens("1 2 3 4".split())
    bigrams = build_bigrams(["a\t1 2 3 4", "b\t5 6"])
    assert next_tokens(bigrams, tokens[0]) == [int(tokens[1])]
    assert next_tokens(bigrams, "missing") == []


def test_main_writes_json(tmp_path, capsys):
    lines = ["hello\t1 2 3 4", "help\t1 2 9 9"]
    source = tmp_path / "in.tsv"
    source.write_text("\n".join(lines) + "\n", encoding="utf-8")
    target = tmp_path / "out.json"
    assert main([str(source), str(target)]) == 0
    assert json.loads(target.read_text(encoding="utf-8")) == build_bigrams(lines)
    assert "Bigrams saved to" in capsys.readouterr().out


def test_main_usage_without_arguments(tmp_path, capsys):
    assert main([]) == 0
    assert "Usage" in capsys.readouterr().out
    assert list(tmp_path.iterdir()) == []