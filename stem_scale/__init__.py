"""Stem thickness measurement for music sheet images.

This package estimates the typical thickness of stems on a binarized music
page, a calibration value used by symbol recognizers to classify and fit
stem-like strokes.

The measurement pipeline consists of:
1. Erasure of barlines, connectors and system headers
2. Extraction of horizontal foreground runs
3. Histogram of run lengths, up to a maximum countable length
4. Hi/lo peak detection in the histogram
5. Fallback on the page scale when no peak is found

Example:
    Basic usage through the pipeline API:

    >>> from stem_scale.pipeline import StemScaler
    >>> from stem_scale.models import Page, ScaleStats, SourceKey, StemScaleParams
    >>>
    >>> page = Page(
    ...     id="page-1",
    ...     sources={SourceKey.NO_STAFF: binary},
    ...     scale=ScaleStats(main_fore=3, max_fore=5, interline=20),
    ... )
    >>> result = StemScaler(StemScaleParams()).measure(page)
"""
