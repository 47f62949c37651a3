"""Helpers for training the spectral codebook from a directory of recordings."""

from __future__ import annotations

import os
import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

_NATIVE_48000 = (8000, 16000, 48000)
_NATIVE_44100 = (11025, 22050, 44100)
_STUFFING = {8000: 5, 11025: 3, 16000: 2, 22050: 1}
_FREQS_48000 = 384 * 2
_FREQS_44100 = 418 * 2


def which(n: int, possibilities: Sequence[int]) -> tuple[int, int]:
    """Locate a global index in consecutive groups of the given sizes.

    Returns the group number and the position inside it, or ``(-1, -1)``.
    """
    for group, size in enumerate(possibilities):
        if n < size:
            return group, n
        n -= size
    return -1, -1


def stuff_count(num_freqs: int, sample_rate: int) -> int:
    """Number of zeros to insert after each sample to reach the codebook rate.

    Raises ``ValueError`` if the rate belongs to the other codebook family.
    """
    if sample_rate in _NATIVE_48000 and num_freqs != _FREQS_48000:
        raise ValueError(f"sample rate {sample_rate} does not match {num_freqs} frequencies")
    if sample_rate in _NATIVE_44100 and num_freqs != _FREQS_44100:
        raise ValueError(f"sample rate {sample_rate} does not match {num_freqs} frequencies")
    return _STUFFING.get(sample_rate, 0)


def zero_stuffing(audio: Sequence[float], zeros_count: int) -> list[float]:
    """Insert ``zeros_count`` zeros after every sample."""
    if zeros_count == 0:
        return list(audio)
    padding = [0.0] * zeros_count
    result: list[float] = []
    for sample in audio:
        result.append(sample)
        result.extend(padding)
    return result


def chunk_plan(files_count: int) -> tuple[int, int, int]:
    """Choose ``(chunks, clusters per chunk, master clusters)`` for a file count."""
    if files_count <= 0:
        raise ValueError("at least one audio file is needed")
    chunks = 64
    kmeans = 4096
    master = 32767
    while files_count > 16384:
        chunks *= 2
        files_count //= 2
    while files_count < 8192 and kmeans > 512:
        kmeans //= 2
        files_count *= 2
    while files_count < 8192:
        master //= 2
        if chunks > 1:
            chunks //= 2
        files_count *= 2
    return chunks, kmeans, master


def is_silence(frame: Sequence[float], threshold: float) -> bool:
    """True if the frame's energy (sum of squares) is below ``threshold``."""
    return sum(value * value for value in frame) < threshold


def pad_dataset(dataset: Sequence[T], size: int) -> list[T]:
    """Return a shuffled copy, repeating observations until it holds ``size``."""
    result = list(dataset)
    if len(result) < size:
        if not result:
            raise ValueError("cannot pad an empty dataset")
        random.shuffle(result)
        original = len(result)
        result.extend(result[i % original] for i in range(size - original))
    random.shuffle(result)
    return result


def _walk(path: str):
    yield path
    if not os.path.isdir(path) or os.path.islink(path):
        return
    try:
        names = sorted(os.listdir(path))
    except OSError:
        return
    for name in names:
        yield from _walk(os.path.join(path, name))


def find_audio_files(src_dir: str) -> tuple[list[str], list[str]]:
    """Collect FLAC and WAV files under ``src_dir`` in lexical walk order."""
    flac_files: list[str] = []
    wav_files: list[str] = []
    if not os.path.lexists(src_dir):
        return flac_files, wav_files
    for path in _walk(src_dir):
        if not os.path.isfile(path):
            continue
        if path.endswith(".flac"):
            flac_files.append(path)
        elif path.endswith(".wav"):
            wav_files.append(path)
    return flac_files, wav_files