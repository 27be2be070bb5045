"""Histogram of run lengths.

The LengthHistogram accumulates counts over integer length buckets. It is
filled once per measurement from a run table, then queried by the peak
finder for values, area and discrete derivatives.
"""

import logging
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from stem_scale.runs import RunTable

logger = logging.getLogger(__name__)


class LengthHistogram:
    """Counts of runs per length, over buckets 0 to ``max_bucket``.

    Attributes:
        name: Short name used in logs and plot titles.
        max_bucket: Highest bucket of the histogram.
    """

    def __init__(self, max_bucket: int, name: str = "stem"):
        if max_bucket < 0:
            raise ValueError(f"max_bucket must be non-negative, got {max_bucket}")
        self.name = name
        self.max_bucket = max_bucket
        self._counts = np.zeros(max_bucket + 1, dtype=np.int64)

    def add(self, length: int, count: int = 1) -> None:
        """Accumulate ``count`` at bucket ``length``."""
        if not 0 <= length <= self.max_bucket:
            raise ValueError(f"length {length} outside [0, {self.max_bucket}]")
        if count < 0:
            raise ValueError("histogram counts can only grow")
        self._counts[length] += count

    def count(self, length: int) -> int:
        """Return the count at ``length``, 0 outside the histogram domain."""
        if 0 <= length <= self.max_bucket:
            return int(self._counts[length])
        return 0

    def __getitem__(self, length: int) -> int:
        return self.count(length)

    def __len__(self) -> int:
        return self.max_bucket + 1

    @property
    def area(self) -> int:
        """Sum of all counts."""
        return int(self._counts.sum())

    @property
    def counts(self) -> np.ndarray:
        """Copy of the counts, indexed by length."""
        return self._counts.copy()

    def derivative(self, length: int) -> int:
        """Discrete derivative between ``length - 1`` and ``length``."""
        return self.count(length) - self.count(length - 1)

    def format_table(self) -> str:
        """Render the non-empty buckets as a text table."""
        lines = [f"{self.name} histogram (area {self.area})", "length  count  deriv"]
        for length in np.flatnonzero(self._counts):
            length = int(length)
            lines.append(
                f"{length:6d} {self.count(length):6d} {self.derivative(length):6d}"
            )
        return "\n".join(lines)


def build_histogram(run_table: "RunTable", max_length: int) -> LengthHistogram:
    """Build the histogram of run lengths, ignoring runs longer than a cutoff.

    Runs longer than ``max_length`` are assumed to belong to non-stem
    structures and do not contribute to the distribution.

    Args:
        run_table: Runs to account for.
        max_length: Longest run length counted, in pixels.

    Returns:
        LengthHistogram over buckets 0 to ``max_length``.
    """
    histogram = LengthHistogram(max_length)

    lengths = run_table.lengths()
    countable = lengths[lengths <= max_length]
    for length, count in zip(*np.unique(countable, return_counts=True)):
        histogram.add(int(length), int(count))

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("\n%s", histogram.format_table())

    return histogram
