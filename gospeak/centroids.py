"""Codebook of spectral centroids: lookup, nearest-centroid encoding, expansion."""

from __future__ import annotations

import json
import math
from collections.abc import Sequence

Frame = tuple[float, float, float]

_FREQS_TO_RATE = {384 * 2: 48000, 418 * 2: 44100}
_RATE_TO_FREQS = {rate: freqs for freqs, rate in _FREQS_TO_RATE.items()}


def sample_rate_for_freqs(freqs: int) -> int:
    """Return the sample rate that a codebook with ``freqs`` bins belongs to."""
    try:
        return _FREQS_TO_RATE[freqs]
    except KeyError:
        raise ValueError(f"unsupported sample rate (freqs: {freqs})") from None


def num_freqs_for_sample_rate(sample_rate: int) -> int:
    """Return the number of frequency bins used at ``sample_rate``."""
    try:
        return _RATE_TO_FREQS[sample_rate]
    except KeyError:
        raise ValueError(f"unsupported sample rate: {sample_rate}") from None


def _exp2(value: float) -> float:
    try:
        return 2.0**value
    except OverflowError:
        return math.inf


def _key_pair(c0: float, c1: float, c2: float) -> tuple[float, float]:
    e0, e1, e2 = _exp2(c0), _exp2(c1), _exp2(c2)
    return math.sqrt(e1 * e1 + e2 * e2), math.sqrt(e0 * e0 + e1 * e1)


def key_coordinates(frames: Sequence[Sequence[float]]) -> list[float]:
    """Map phase frames to the two-values-per-bin coordinates used for matching."""
    coords: list[float] = []
    for c0, c1, c2 in frames:
        coords.extend(_key_pair(c0, c1, c2))
    return coords


def centroid_key_coordinates(centroid: Sequence[float], frame_size: int) -> list[float]:
    """Key coordinates of a flat centroid, reading at most ``frame_size`` triples."""
    complete = min(frame_size, len(centroid) // 3)
    triples = zip(centroid[0 : 3 * complete : 3], centroid[1 : 3 * complete : 3], centroid[2 : 3 * complete : 3])
    return key_coordinates(list(triples))


def _squared_distance(a: Sequence[float], b: Sequence[float]) -> float:
    return sum((x - y) * (x - y) for x, y in zip(a, b))


def _nearest_by_keys(key: Sequence[float], centroid_keys: Sequence[Sequence[float]]) -> int:
    best_distance = math.inf
    best_index = 0
    for index, candidate in enumerate(centroid_keys):
        if len(candidate) != len(key):
            continue
        distance = _squared_distance(key, candidate)
        if distance < best_distance:
            best_distance = distance
            best_index = index
    return best_index


def nearest_centroid(
    key: Sequence[float], centroids: Sequence[Sequence[float]], frame_size: int
) -> int:
    """Index of the centroid closest to ``key``; 0 if no centroid is comparable."""
    return _nearest_by_keys(key, [centroid_key_coordinates(c, frame_size) for c in centroids])


def encode_frames(
    frames: Sequence[Sequence[float]], centroids: Sequence[Sequence[float]], num_freqs: int
) -> list[int]:
    """Encode consecutive groups of ``num_freqs`` frames as centroid indices.

    A trailing group shorter than ``num_freqs`` is dropped.
    """
    centroid_keys = [centroid_key_coordinates(c, num_freqs) for c in centroids]
    return [
        _nearest_by_keys(key_coordinates(frames[start : start + num_freqs]), centroid_keys)
        for start in range(0, len(frames) - num_freqs + 1, num_freqs)
    ]


def centroid_frames(indices: Sequence[int], all_centroids: Sequence[Sequence[float]]) -> list[Frame]:
    """Expand centroid indices into the phase frames they stand for."""
    frames: list[Frame] = []
    for index in indices:
        centroid = all_centroids[index]
        complete = len(centroid) // 3
        frames.extend(
            zip(
                centroid[0 : 3 * complete : 3],
                centroid[1 : 3 * complete : 3],
                centroid[2 : 3 * complete : 3],
            )
        )
    return frames


def load_centroids(path: str) -> list[list[float]]:
    """Read the ``Centroids`` array from a codebook JSON file."""
    with open(path, encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"error parsing centroids JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("centroids JSON must be an object")
    if "Centroids" in data:
        value = data["Centroids"]
    else:
        value = next((v for k, v in data.items() if k.lower() == "centroids"), None)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError("Centroids must be an array of arrays of numbers")
    result: list[list[float]] = []
    for row in value:
        if row is None:
            result.append([])
            continue
        if not isinstance(row, list) or any(
            isinstance(x, bool) or not isinstance(x, (int, float)) for x in row
        ):
            raise ValueError("Centroids must be an array of arrays of numbers")
        result.append([float(x) for x in row])
    return result