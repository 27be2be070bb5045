"""
Stem thickness measurement pipeline.

The typical thickness of stems is retrieved from the histogram of lengths of
horizontal foreground runs. For precise results, barlines and connectors are
erased first, otherwise their horizontal runs would impact the measurement.

Stages:
1. Erase selected shapes and system headers from the no-staff image
2. Extract horizontal runs of the erased image
3. Build the histogram of run lengths, up to a maximum countable length
4. Find the dominant peak of the histogram
5. Derive the stem scale from the peak, or from the page scale if none
"""

import logging

import numpy as np

from stem_scale.eraser import erase_shapes
from stem_scale.file_manager import DebugImageWriter
from stem_scale.histogram import LengthHistogram, build_histogram
from stem_scale.image_processing import to_binary
from stem_scale.models.core_models import (
    Orientation,
    PeakRange,
    ScaleStats,
    StemScaleResult,
)
from stem_scale.models.page_models import Page, SourceKey
from stem_scale.models.pipeline_models import MeasurementSnapshot
from stem_scale.models.settings_models import StemScaleParams
from stem_scale.models.visualization_models import VisualizationSet
from stem_scale.peaks import find_stem_peaks
from stem_scale.runs import extract_runs
from stem_scale.timing import StopWatch
from stem_scale.visualization import create_all_visualizations


logger = logging.getLogger(__name__)


# Custom exceptions
class StemScaleError(Exception):
    """Base exception for stem measurement errors."""

    pass


class InputError(StemScaleError):
    """Exception raised when input data is invalid."""

    pass


def get_source_buffer(page: Page, key: SourceKey = SourceKey.NO_STAFF) -> np.ndarray:
    """Fetch an image variant of the page as a uint8 0/255 binary image.

    Args:
        page: Page to read from.
        key: Image variant to use (default the image without staff lines).

    Returns:
        New binary image, foreground 255.

    Raises:
        InputError: If the variant is missing, not 2D or empty.
    """
    image = page.get_source(key)
    if image is None:
        raise InputError(f"Page {page.id} has no {key.value} image")
    if image.ndim != 2:
        raise InputError(f"Page {page.id} {key.value} image is not 2D: {image.shape}")
    if image.size == 0:
        raise InputError(f"Page {page.id} {key.value} image is empty")
    return to_binary(image)


def compute_stem_scale(
    histogram: LengthHistogram, scale: ScaleStats, params: StemScaleParams
) -> tuple[StemScaleResult, PeakRange | None]:
    """Derive the stem scale from the histogram, or from the page scale.

    Args:
        histogram: Histogram of horizontal run lengths.
        scale: Page scale, used when no peak is found.
        params: Measurement parameters.

    Returns:
        Tuple of (stem scale, peak used or None when the fallback was used).
    """
    peaks = find_stem_peaks(histogram, params)
    peak = peaks[0] if peaks else None

    if peak is not None:
        return StemScaleResult(main=round(peak.main), max=peak.high), peak

    ratio = params.stem_as_fore_ratio
    main_stem = max(1, round(ratio * scale.main_fore))
    max_stem = max(main_stem, round(ratio * scale.max_fore))
    logger.info("No stem peak found, computing defaults")
    return StemScaleResult(main=main_stem, max=max_stem, from_peak=False), None


class StemScaler:
    """Retrieves the typical thickness of stems in a page.

    The scaler keeps no state between measurements except the snapshot of
    the last one, retained for diagnostic display.

    Attributes:
        params: Measurement parameters.
        snapshot: Data built by the last measurement, or None.
    """

    def __init__(self, params: StemScaleParams | None = None):
        self.params = params or StemScaleParams()
        self.snapshot: MeasurementSnapshot | None = None
        self._page: Page | None = None
        self._writer: DebugImageWriter | None = None

    def measure(self, page: Page) -> StemScaleResult:
        """Retrieve the global stem thickness for the page.

        Args:
            page: Page to measure.

        Returns:
            StemScaleResult, from the histogram peak or from the page scale.

        Raises:
            InputError: If the page image is missing or malformed.
        """
        params = self.params
        watch = StopWatch(f"Stem scaler for {page.id}")

        try:
            # Use a buffer with bar lines and connections removed
            watch.start("getBuffer")
            buffer = self._get_buffer(page)

            # Look at histogram for stem thickness
            watch.start("stem retrieval")
            run_table = extract_runs(buffer, Orientation.HORIZONTAL)
            histogram = build_histogram(run_table, params.max_countable_run_length)
            result, peak = compute_stem_scale(histogram, page.scale, params)
        finally:
            if params.print_timing:
                watch.print()

        logger.debug(f"Page {page.id}: {result}")
        self._page = page
        self.snapshot = MeasurementSnapshot(
            page_id=page.id,
            buffer=buffer,
            histogram=histogram,
            peak=peak,
            result=result,
        )
        return result

    def visualize(self, page: Page) -> VisualizationSet:
        """Render the histogram and erased image of the page measurement.

        The page is measured first if the last measurement was not for this
        very page object. Pages are compared by identity, not by id, since
        two pages may share an id while holding different images.

        Args:
            page: Page to display.

        Returns:
            VisualizationSet for the page.
        """
        if self.snapshot is None or self._page is not page:
            self.measure(page)

        return create_all_visualizations(
            self.snapshot, self.params.max_countable_run_length
        )

    def close(self) -> None:
        """Remove the debug images written so far.

        A temporary directory created for them, when no ``debug_dir`` was
        configured, is removed too. Callers keeping debug images in a
        temporary directory own this cleanup.
        """
        if self._writer is not None:
            self._writer.cleanup_all()
            self._writer = None

    def _get_buffer(self, page: Page) -> np.ndarray:
        params = self.params
        source = get_source_buffer(page, SourceKey.NO_STAFF)
        erasure = erase_shapes(source, page, params.erased_shapes, params)

        # Keep a copy on disk?
        if params.keep_debug_image:
            self._store(page.id, erasure.buffer)

        return erasure.buffer

    def _store(self, page_id: str, buffer: np.ndarray) -> None:
        try:
            if self._writer is None:
                self._writer = DebugImageWriter(self.params.debug_dir)
            self._writer.write_image(page_id, buffer)
        except OSError as e:
            logger.warning(f"Could not store stem image of {page_id}: {e}")


def measure_stem_scale(
    page: Page, params: StemScaleParams | None = None
) -> StemScaleResult:
    """Measure the stem scale of a page with a one-shot StemScaler.

    Args:
        page: Page to measure.
        params: Measurement parameters, defaults if None.

    Returns:
        StemScaleResult of the page.
    """
    return StemScaler(params).measure(page)
