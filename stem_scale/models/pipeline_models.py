"""Models for representing stem measurement stages.

This module contains Pydantic models that encapsulate the results of the
stages of the stem measurement pipeline that are worth keeping around: the
erased image produced before run extraction, and the snapshot of the last
measurement retained for diagnostic display.
"""

import numpy as np
from pydantic import BaseModel, Field

from stem_scale.histogram import LengthHistogram
from stem_scale.models.core_models import PeakRange, StemScaleResult


class ErasureResult(BaseModel):
    """Result of the erasure stage.

    Attributes:
        buffer: Binary image with selected shapes and headers erased.
        erased_count: Number of symbol instances painted over.
        header_count: Number of system headers painted over.
    """

    buffer: np.ndarray = Field(..., description="Erased binary image")
    erased_count: int = Field(0, ge=0, description="Symbol instances erased")
    header_count: int = Field(0, ge=0, description="System headers erased")

    class Config:
        arbitrary_types_allowed = True


class MeasurementSnapshot(BaseModel):
    """Everything built by the last measurement of a page.

    Attributes:
        page_id: Identifier of the measured page.
        buffer: Erased binary image the runs were extracted from.
        histogram: Histogram of horizontal run lengths.
        peak: Detected stem peak, or None when the fallback was used.
        result: Resulting stem scale.
    """

    page_id: str = Field(..., description="Identifier of the measured page")
    buffer: np.ndarray = Field(..., description="Erased binary image")
    histogram: LengthHistogram = Field(..., description="Run length histogram")
    peak: PeakRange | None = Field(None, description="Detected stem peak")
    result: StemScaleResult = Field(..., description="Resulting stem scale")

    class Config:
        arbitrary_types_allowed = True
