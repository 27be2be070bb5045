"""Models for visualization outputs.

The VisualizationSet gathers the diagnostic views of one stem measurement,
so that a caller can display or save them together.
"""

import numpy as np
from matplotlib.figure import Figure
from pydantic import BaseModel, Field


class VisualizationSet(BaseModel):
    """Diagnostic views of a stem measurement.

    Attributes:
        erased_image: RGB rendering of the erased binary image, or None.
        histogram: Plot of the run length histogram with its peak, or None.
    """

    erased_image: np.ndarray | None = Field(
        None, description="RGB rendering of the erased image"
    )
    histogram: Figure | None = Field(
        None, description="Run length histogram with detected peak"
    )

    class Config:
        arbitrary_types_allowed = True
