"""Limited-precision floats for compact codebook JSON."""

from __future__ import annotations

import math
import sys
import threading
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class LPFloat:
    """A float written to JSON with a fixed number of decimal digits."""

    value: float
    digits: int

    def to_json(self) -> str:
        """Return the JSON number text for this value."""
        if not math.isfinite(self.value):
            raise ValueError(f"unsupported value: {self.value!r}")
        return f"{self.value:.{self.digits}f}"


class _FloatVerifier:
    """Reports a non-finite value only if it is the very first one checked."""

    def __init__(self) -> None:
        self._checked = False
        self._lock = threading.Lock()

    def __call__(self, value: float) -> float:
        with self._lock:
            if self._checked:
                return value
            self._checked = True
        if math.isnan(value):
            print("\nbadFloatDetected: NaN", file=sys.stderr)
        elif value == math.inf:
            print("\nbadFloatDetected: +Inf", file=sys.stderr)
        elif value == -math.inf:
            print("\nbadFloatDetected: -Inf", file=sys.stderr)
        return value


_verifier = _FloatVerifier()


def verify_float(value: float) -> float:
    """Return ``value`` unchanged, warning once on the first check if it is not finite."""
    return _verifier(value)


def dump_centroids_json(centroids: Sequence[Sequence[LPFloat]]) -> str:
    """Serialise a codebook as ``{"Centroids": [...]}``, one centroid per line."""
    if not centroids:
        body = "null"
    else:
        rows = ("[" + ",".join(number.to_json() for number in row) + "]" for row in centroids)
        body = "[" + ",".join(rows) + "]"
    return ('{"Centroids":' + body + "}").replace("],", "],\n")