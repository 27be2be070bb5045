"""
Visualization functions for the stem measurement pipeline.

These renderings are purely diagnostic: they read the histogram, peak and
erased image retained from a measurement and never influence its results.
"""

import cv2
import numpy as np
from matplotlib.figure import Figure

from stem_scale.histogram import LengthHistogram
from stem_scale.models.core_models import PeakRange
from stem_scale.models.pipeline_models import MeasurementSnapshot
from stem_scale.models.visualization_models import VisualizationSet


def create_histogram_visualization(
    histogram: LengthHistogram,
    peak: PeakRange | None = None,
    *,
    title: str = "",
    max_length: int | None = None,
    width_in: float = 8.0,
    height_in: float = 4.0,
    dpi: int = 100,
) -> Figure:
    """Plot the run length histogram, highlighting the detected peak.

    Args:
        histogram: Histogram of run lengths.
        peak: Detected peak to highlight, or None.
        title: Figure title (default: the histogram name).
        max_length: Largest length displayed (default: whole histogram).
        width_in: Figure width in inches (default 8.0).
        height_in: Figure height in inches (default 4.0).
        dpi: Raster resolution for output (default 100).

    Returns:
        Matplotlib Figure with one bar per length. Shows a "No runs" message
        if the histogram is empty.
    """
    fig = Figure(figsize=(width_in, height_in), dpi=dpi)
    ax = fig.add_subplot()
    ax.set_title(title or f"{histogram.name} (area {histogram.area})")

    # ---------- empty case ----------
    if histogram.area == 0:
        ax.text(0.5, 0.5, "No runs", ha="center", va="center", transform=ax.transAxes)
        ax.axis("off")
        return fig

    last = histogram.max_bucket if max_length is None else max_length
    lengths = np.arange(last + 1)
    counts = [histogram.count(int(x)) for x in lengths]

    ax.bar(lengths, counts, width=0.8, color="steelblue", edgecolor="black")

    # ---------- peak range and main value ----------
    if peak is not None:
        ax.axvspan(peak.low - 0.5, peak.high + 0.5, color="orange", alpha=0.3)
        ax.axvline(peak.main, color="red", linewidth=1.5, label=f"main {peak.main:g}")
        ax.legend(loc="upper right")

    ax.set_xlim(-0.5, last + 0.5)
    ax.set_xlabel("Run length (px)")
    ax.set_ylabel("Runs")
    fig.tight_layout()
    return fig


def create_buffer_visualization(buffer: np.ndarray | None) -> np.ndarray | None:
    """Convert a binary image to RGB format for display.

    Args:
        buffer: 2D binary image array, or None.

    Returns:
        3-channel RGB version of the image, or None if input is None.
    """
    if buffer is None:
        return None
    return cv2.cvtColor(buffer, cv2.COLOR_GRAY2RGB)


def create_all_visualizations(
    snapshot: MeasurementSnapshot | None, max_length: int | None = None
) -> VisualizationSet:
    """Create the diagnostic views of a measurement.

    Args:
        snapshot: Data retained from the measurement, or None.
        max_length: Largest run length displayed in the histogram.

    Returns:
        VisualizationSet with the erased image and histogram plot, empty
        if no snapshot is available.
    """
    if snapshot is None:
        return VisualizationSet()

    return VisualizationSet(
        erased_image=create_buffer_visualization(snapshot.buffer),
        histogram=create_histogram_visualization(
            snapshot.histogram,
            snapshot.peak,
            title=f"{snapshot.page_id} {snapshot.histogram.name}",
            max_length=max_length,
        ),
    )
