"""Peak detection in a run length histogram.

Peaks are found with a hi/lo expansion rule. A *seed* is a local maximum
whose count exceeds the value floor. From each seed the peak is extended
bucket by bucket, first towards shorter lengths then towards longer ones.
A neighbor bucket joins the peak when it is non-empty, holds at least
``min_gain_ratio`` of the seed count, and is either still above the value
floor (the "hi" part) or separated from the current edge by a slope gentler
than the derivative floor (the "lo" part). Extension stops at the first
bucket that fails.

A candidate is accepted when the mass it captured is at least
``min_gain_ratio`` of the histogram area. Overlapping candidates keep only
the stronger one. The representative value of a peak is its seed bucket,
which is the mode of the accepted range.
"""

import logging

from stem_scale.histogram import LengthHistogram
from stem_scale.models.core_models import PeakRange
from stem_scale.models.settings_models import StemScaleParams

logger = logging.getLogger(__name__)


def _find_seeds(histogram: LengthHistogram, min_value: int) -> list[int]:
    """Return the local maxima above ``min_value``, in ascending order.

    On a plateau only the leftmost bucket is a seed.
    """
    seeds = []
    for x in range(len(histogram)):
        value = histogram.count(x)
        if (
            value > min_value
            and value > histogram.count(x - 1)
            and value >= histogram.count(x + 1)
        ):
            seeds.append(x)
    return seeds


def _extend(
    histogram: LengthHistogram,
    edge: int,
    step: int,
    min_extension: float,
    min_value: int,
    min_derivative: int,
) -> int:
    """Move ``edge`` by ``step`` while neighbor buckets belong to the peak."""
    while True:
        neighbor = edge + step
        if not 0 <= neighbor < len(histogram):
            return edge

        value = histogram.count(neighbor)
        if value == 0 or value < min_extension:
            return edge

        slope = abs(histogram.derivative(max(edge, neighbor)))
        if value <= min_value and slope >= min_derivative:
            return edge

        edge = neighbor


def _expand_seed(
    histogram: LengthHistogram,
    seed: int,
    min_gain_ratio: float,
    min_value: int,
    min_derivative: int,
) -> PeakRange:
    min_extension = min_gain_ratio * histogram.count(seed)
    low = _extend(histogram, seed, -1, min_extension, min_value, min_derivative)
    high = _extend(histogram, seed, +1, min_extension, min_value, min_derivative)
    mass = int(histogram.counts[low : high + 1].sum())
    return PeakRange(low=low, main=seed, high=high, mass=mass)


def _strength(histogram: LengthHistogram, peak: PeakRange) -> tuple[int, int, int]:
    # Higher seed count first, then higher mass, then shorter length
    return (histogram.count(int(peak.main)), peak.mass, -int(peak.main))


def find_peaks(
    histogram: LengthHistogram,
    min_gain_ratio: float,
    min_value: int,
    min_derivative: int,
) -> list[PeakRange]:
    """Find the significant peaks of a histogram.

    Args:
        histogram: Histogram to analyze.
        min_gain_ratio: Minimum ratio, relative to the seed count, for a
            bucket to extend a peak, and relative to the area, for the
            captured mass to accept it.
        min_value: Counts above this value are part of a peak core.
        min_derivative: Slopes below this value are considered flat.

    Returns:
        Non-overlapping peaks, strongest first. Empty if the histogram area
        is zero or nothing significant was found.
    """
    area = histogram.area
    if area == 0:
        return []

    candidates = []
    for seed in _find_seeds(histogram, min_value):
        peak = _expand_seed(histogram, seed, min_gain_ratio, min_value, min_derivative)
        if peak.mass / area >= min_gain_ratio:
            candidates.append(peak)
        else:
            logger.debug(f"Discarding weak peak {peak} of {histogram.name}")

    candidates.sort(key=lambda p: _strength(histogram, p), reverse=True)

    peaks: list[PeakRange] = []
    for candidate in candidates:
        if not any(candidate.overlaps(kept) for kept in peaks):
            peaks.append(candidate)

    return peaks


def find_stem_peaks(
    histogram: LengthHistogram, params: StemScaleParams
) -> list[PeakRange]:
    """Find stem peaks, with floors derived from the histogram area.

    Args:
        histogram: Histogram of horizontal run lengths.
        params: Measurement parameters holding the three peak ratios.

    Returns:
        Peaks found, strongest first.
    """
    area = histogram.area
    return find_peaks(
        histogram,
        params.min_gain_ratio,
        round(area * params.min_value_ratio),
        round(area * params.min_derivative_ratio),
    )
