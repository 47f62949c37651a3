"""Conversions between packed acoustic tokens and centroid indices."""

from __future__ import annotations

import json
from collections.abc import Iterable

_UINT32 = 0xFFFFFFFF
_UINT64_LIMIT = 2**64
_FIELD_MASK = (1 << 15) - 1


def unpack_tokens(tokens: Iterable[int]) -> list[int]:
    """Split each 32-bit token into its high and low 15-bit fields."""
    result: list[int] = []
    for token in tokens:
        result.extend(((token >> 15) & _FIELD_MASK, token & _FIELD_MASK))
    return result


def unpad_centroids(centroids: Iterable[int]) -> list[int]:
    """Drop up to two trailing zero pads and undo the plus-one offset."""
    values = list(centroids)
    for _ in range(2):
        if values and values[-1] == 0:
            values.pop()
    return [(value - 1) & _UINT32 for value in values]


def _tokens_from_json(text: str) -> list[int]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"error parsing JSON: {exc}") from exc
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError("expected a JSON array of unsigned integers")
    tokens: list[int] = []
    for item in data:
        if item is None:
            tokens.append(0)
            continue
        if isinstance(item, bool) or not isinstance(item, int):
            raise ValueError(f"not an unsigned integer: {item!r}")
        if not 0 <= item < _UINT64_LIMIT:
            raise ValueError(f"integer out of range: {item}")
        tokens.append(item)
    return tokens


def parse_raw_tokens(text: str) -> list[int]:
    """Parse a JSON array or a comma or space separated list of integers."""
    vector = text.strip("[] ").replace(" ", ",")
    while ",," in vector:
        vector = vector.replace(",,", ",")
    return _tokens_from_json(f"[{vector}]")