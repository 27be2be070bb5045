"""Parameter models for stem measurement configuration.

This module defines the Pydantic model that gathers every tunable value of
the stem measurement pipeline: erasure of non-stem structures, histogram
cutoff, peak detection ratios and fallback ratio. An instance is handed to
the StemScaler at construction time.
"""

from pydantic import BaseModel, Field

from stem_scale.models.page_models import Shape


DEFAULT_ERASED_SHAPES = frozenset(
    {
        Shape.THICK_BARLINE,
        Shape.THICK_CONNECTOR,
        Shape.THIN_BARLINE,
        Shape.THIN_CONNECTOR,
    }
)


class StemScaleParams(BaseModel):
    """Complete configuration for stem thickness measurement.

    Attributes:
        print_timing: Log the stop watch summary after each measurement.
        keep_debug_image: Write the erased image to disk.
        debug_dir: Directory for debug images, a temporary one when None.
        erase_header: Erase the header band at the start of each system.
        header_vertical_margin: Margin erased above and below each system
            header, in interline units (default 2.0).
        min_value_ratio: Ratio of histogram area for peak acceptance.
        min_derivative_ratio: Ratio of histogram area for strong derivative.
        min_gain_ratio: Minimum ratio for stem peak extension.
        stem_as_fore_ratio: Default stem thickness as ratio of foreground peak.
        max_countable_run_length: Horizontal runs longer than this are ignored.
        erased_shapes: Shapes erased before measurement.
        min_hide_grade: Grade needed to erase a non-structural symbol.
        binarize_threshold: Threshold applied after erasure (0-255).
    """

    print_timing: bool = Field(
        False, description="Print the stop watch on stem computation"
    )
    keep_debug_image: bool = Field(False, description="Store stem images on disk")
    debug_dir: str | None = Field(None, description="Directory for stem images")

    erase_header: bool = Field(True, description="Erase the header at system start")
    header_vertical_margin: float = Field(
        2.0, ge=0.0, description="Margin erased above & below system header area"
    )

    min_value_ratio: float = Field(
        0.1, ge=0.0, le=1.0, description="Ratio of total runs for peak acceptance"
    )
    min_derivative_ratio: float = Field(
        0.05, ge=0.0, le=1.0, description="Ratio of total runs for strong derivative"
    )
    min_gain_ratio: float = Field(
        0.1, ge=0.0, le=1.0, description="Minimum ratio for stem peak extension"
    )
    stem_as_fore_ratio: float = Field(
        1.0, gt=0.0, description="Default stem thickness as ratio of foreground"
    )
    max_countable_run_length: int = Field(
        20, ge=1, description="Longer horizontal runs are not counted"
    )

    erased_shapes: frozenset[Shape] = Field(
        default=DEFAULT_ERASED_SHAPES, description="Shapes erased before measure"
    )
    min_hide_grade: float = Field(
        0.5, ge=0.0, le=1.0, description="Grade to erase non-structural shapes"
    )
    binarize_threshold: int = Field(
        127, ge=0, le=254, description="Threshold applied after erasure"
    )
