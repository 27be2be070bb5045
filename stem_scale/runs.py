"""Extraction of foreground runs from a binary image.

A run is a maximal sequence of contiguous foreground pixels along a
scanline. Runs are found for all scanlines at once with NumPy: the
foreground mask is padded with background on both ends of every scanline,
so that the discrete difference marks each run start with +1 and each run
end with -1.
"""

from collections.abc import Iterator

import numpy as np

from stem_scale.models.core_models import Orientation, Run


class RunTable:
    """Runs of a binary image, grouped by scanline.

    Runs are stored column-wise: ``starts[i]`` and ``lengths[i]`` describe
    run ``i``, and the runs of scanline ``k`` are those with index in
    ``offsets[k]:offsets[k + 1]``.

    Attributes:
        orientation: Direction of the scanlines.
        size: Number of scanlines.
        length: Number of pixels per scanline.
    """

    def __init__(
        self,
        orientation: Orientation,
        length: int,
        offsets: np.ndarray,
        starts: np.ndarray,
        lengths: np.ndarray,
    ):
        self.orientation = orientation
        self.length = length
        self.size = offsets.size - 1
        self._offsets = offsets
        self._starts = starts
        self._lengths = lengths

    @property
    def run_count(self) -> int:
        return int(self._lengths.size)

    def row(self, index: int) -> list[Run]:
        """Return the runs of scanline ``index``, in increasing offset order."""
        if not 0 <= index < self.size:
            raise IndexError(f"scanline {index} outside [0, {self.size})")
        lo, hi = self._offsets[index], self._offsets[index + 1]
        return [
            Run(start=int(s), length=int(n))
            for s, n in zip(self._starts[lo:hi], self._lengths[lo:hi])
        ]

    def iter_runs(self) -> Iterator[tuple[int, Run]]:
        """Yield (scanline index, run) pairs, scanline by scanline."""
        for index in range(self.size):
            for run in self.row(index):
                yield index, run

    def lengths(self) -> np.ndarray:
        """Lengths of all runs, scanline by scanline."""
        return self._lengths.copy()


def extract_runs(
    buffer: np.ndarray, orientation: Orientation = Orientation.HORIZONTAL
) -> RunTable:
    """Build the table of foreground runs of a binary image.

    Args:
        buffer: 2D binary image, foreground pixels being non-zero.
        orientation: HORIZONTAL scans rows, VERTICAL scans columns.

    Returns:
        RunTable with one run per maximal foreground segment per scanline.
    """
    foreground = buffer > 0
    if orientation == Orientation.VERTICAL:
        foreground = foreground.T

    size, length = foreground.shape
    padded = np.pad(foreground.astype(np.int8), ((0, 0), (1, 1)))
    edges = np.diff(padded, axis=1)

    # nonzero() walks in row-major order, so starts and stops pair up
    start_rows, start_cols = np.nonzero(edges == 1)
    _, stop_cols = np.nonzero(edges == -1)

    offsets = np.searchsorted(start_rows, np.arange(size + 1))
    return RunTable(
        orientation,
        length,
        offsets,
        start_cols.astype(np.int64),
        (stop_cols - start_cols).astype(np.int64),
    )
