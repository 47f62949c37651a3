"""Bigram model over packed acoustic tokens, built from a TSV alignment file."""

from __future__ import annotations

import json
import re
import sys
from collections.abc import Iterable, Mapping, Sequence

_UINT32 = 0xFFFFFFFF
_INT64_MAX = 2**63 - 1
_INT64_MIN = -(2**63)
_INTEGER = re.compile(r"[+-]?[0-9]+")

Bigrams = dict[str, dict[str, int]]


def _atoi(text: str) -> int:
    """Parse a decimal integer leniently: malformed input gives 0, overflow clamps."""
    if not _INTEGER.fullmatch(text):
        return 0
    return max(_INT64_MIN, min(_INT64_MAX, int(text)))


def compress_numbers_into_tokens(numbers: Sequence[str]) -> list[str]:
    """Pack pairs of centroid numbers into single tokens.

    Each number is stored plus one; the first of a pair occupies the high
    15-bit field and the second the low field of a 32-bit token.
    """
    packed = [0] * ((len(numbers) + 1) // 2)
    for position, text in enumerate(numbers):
        value = (_atoi(text) + 1) & _UINT32
        shift = 15 if position % 2 == 0 else 0
        packed[position // 2] |= (value << shift) & _UINT32
    return [str(token) for token in packed]


def build_bigrams(lines: Iterable[str]) -> Bigrams:
    """Count token bigrams from TSV lines of the form ``word<TAB>numbers``.

    The first letter of the word is counted as the predecessor of the first
    token. Empty lines and lines without a second column are skipped.
    """
    bigrams: Bigrams = {}
    for line in lines:
        if not line:
            continue
        columns = line.split("\t")
        if len(columns) < 2:
            continue
        tokens = compress_numbers_into_tokens(columns[1].split())
        if not columns[0]:
            raise ValueError(f"line has an empty first column: {line!r}")
        if not tokens:
            raise ValueError(f"line has no numbers: {line!r}")
        initial = columns[0][0]
        following = bigrams.setdefault(initial, {})
        following[tokens[0]] = following.get(tokens[0], 0) + 1
        for current, nxt in zip(tokens, tokens[1:]):
            following = bigrams.setdefault(current, {})
            following[nxt] = following.get(nxt, 0) + 1
    return bigrams


def next_tokens(bigrams: Mapping[str, Mapping[str, int]], current: str) -> list[int]:
    """Return every token seen after ``current``; empty if it is unknown."""
    options = bigrams.get(current)
    if options is None:
        return []
    return [_atoi(key) & _UINT32 for key in options]


def _go_style_json(obj: object) -> str:
    text = json.dumps(obj, indent=2, sort_keys=True, ensure_ascii=False)
    for char, escape in (
        ("&", "\\u0026"),
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        text = text.replace(char, escape)
    return text


def main(argv: Sequence[str] | None = None) -> int:
    """Build ``bigram.json`` from a TSV file: ``<input.tsv> <output.json>``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        print("Usage: bigram <input.tsv> <output.json>")
        return 0
    input_file, output_file = args
    with open(input_file, "rb") as handle:
        content = handle.read().decode("utf-8", errors="replace")
    bigrams = build_bigrams(content.split("\n"))
    with open(output_file, "w", encoding="utf-8") as handle:
        handle.write(_go_style_json(bigrams))
    print(f"Bigrams saved to {output_file}")
    return 0