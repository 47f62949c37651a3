"""Console progress bars and the external progress command for codebook training."""

from __future__ import annotations

import math
import subprocess
import sys
from dataclasses import dataclass, field

BAR_WIDTH = 40
_PLACEHOLDER_PREFIXES = ("%", "")


def progress_bar(stage: int, stages: int, pos: int, maximum: int) -> str:
    """Render one progress line; empty when ``maximum`` is not positive."""
    if maximum <= 0:
        return ""
    filled = pos * BAR_WIDTH // maximum
    percent = pos * 100 // maximum
    bar = "=" * filled + " " * max(0, BAR_WIDTH - filled)
    return f"{stage}/{stages} [{bar}] {percent}% "


def print_progress(stage: int, stages: int, pos: int, maximum: int) -> None:
    """Redraw the progress line in place on standard output."""
    line = progress_bar(stage, stages, pos, maximum)
    if line:
        print("\r" + line, end="", flush=True)


def expand_command(exec_string: str, stage: int, stages: int, percentage: int) -> list[str]:
    """Fill in the progress placeholders of a command and split it into arguments.

    ``percentage`` is on the 0..96 scale used by the trainer and is rescaled
    to 0..100 for ``PERCENTAGE``.
    """
    rescaled = min(100, max(0, ((percentage & 0xFF) * 100) // 96))
    for prefix in _PLACEHOLDER_PREFIXES:
        exec_string = exec_string.replace(prefix + "PERCENTAGE", str(rescaled))
        exec_string = exec_string.replace(prefix + "STAGE_NUMBER", str(stage))
        exec_string = exec_string.replace(prefix + "TOTAL_STAGES", str(stages))
    return exec_string.split()


def run_command(
    exec_string: str, stage: int, stages: int, wait: bool, debug: bool, percentage: int
) -> subprocess.Popen | subprocess.CompletedProcess | None:
    """Start the progress command; wait for it only when ``wait`` is true.

    Its output is shown only when ``debug`` is true. Failures to start the
    command are ignored.
    """
    args = expand_command(exec_string, stage, stages, percentage)
    print("\nRunning:", "[" + " ".join(args) + "]")
    if not args:
        return None
    streams = {} if debug else {"stdout": subprocess.DEVNULL, "stderr": subprocess.DEVNULL}
    try:
        if wait:
            return subprocess.run(args, check=False, **streams)
        return subprocess.Popen(args, **streams)
    except OSError:
        return None


def _log2(value: float) -> float:
    if value > 0:
        return math.log2(value)
    if value == 0:
        return -math.inf
    return math.nan


@dataclass
class Plotter:
    """Progress reporter for a k-means run.

    Negative iterations carry the number of points that still moved; the
    progress is estimated on a log scale from how far that number has fallen
    towards the convergence target.
    """

    stage: int
    stages: int
    delta: float = 0.0
    exec_string: str = ""
    exec_debug: bool = False
    exec_detailed: bool = False
    _base: float = field(default=0.0, init=False, repr=False)
    _iterations: int = field(default=0, init=False, repr=False)
    _first: int = field(default=0, init=False, repr=False)
    _current: int = field(default=0, init=False, repr=False)

    def _estimate(self, cluster_count: int, moved: int) -> int:
        if self._iterations == 0:
            self._first = moved
            self._current = moved
            self._base = 2.0
        elif self._iterations == 1:
            self._current = moved
            if self._current != 0:
                self._base = self._first / self._current
        else:
            self._current = moved

        target = cluster_count * int(65536 * self.delta) // 65536
        numerator = self._base * _log2(1 + float(self._current - target)) * 96
        denominator = self._base * _log2(1 + float(self._first - target))
        try:
            ratio = numerator / denominator
        except ZeroDivisionError:
            ratio = math.nan
        percent = 96 - int(ratio) if math.isfinite(ratio) else 0
        return max(percent, 0, self._iterations)

    def plot(self, cluster_count: int, iteration: int) -> int:
        """Report one iteration and return the shown progress on a 0..96 scale."""
        if iteration < 0 and self.delta != 0:
            percent = self._estimate(cluster_count, -iteration)
        else:
            percent = self._iterations
        print_progress(self.stage, self.stages, percent, 96)
        if self.exec_detailed:
            run_command(self.exec_string, self.stage, self.stages, False, self.exec_debug, percent)
        self._iterations += 1
        return percent