"""Core domain models for stem thickness measurement."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class Orientation(str, Enum):
    """Direction of the scanlines a run table is built along."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Run(BaseModel):
    """One maximal foreground segment along a scanline.

    Attributes:
        start: Offset of the first foreground pixel within the scanline.
        length: Number of contiguous foreground pixels (positive).
    """

    start: int = Field(..., ge=0, description="Offset of first foreground pixel")
    length: int = Field(..., ge=1, description="Number of foreground pixels")

    @property
    def stop(self) -> int:
        """Offset of the last foreground pixel of the run."""
        return self.start + self.length - 1

    class Config:
        frozen = True


class PeakRange(BaseModel):
    """A peak detected in the run length histogram.

    The range spans buckets ``low`` to ``high`` inclusive, with ``main`` the
    representative length of the peak.

    Attributes:
        low: Lowest bucket of the peak.
        main: Representative bucket of the peak.
        high: Highest bucket of the peak.
        mass: Total count captured by the buckets of the range.
    """

    low: int = Field(..., ge=0, description="Lowest bucket of the peak")
    main: float = Field(..., ge=0, description="Representative bucket")
    high: int = Field(..., ge=0, description="Highest bucket of the peak")
    mass: int = Field(0, ge=0, description="Count captured by the range")

    @model_validator(mode="after")
    def _check_bounds(self):
        if not self.low <= self.main <= self.high:
            raise ValueError(
                f"main {self.main} is not within [{self.low}, {self.high}]"
            )
        return self

    @property
    def width(self) -> int:
        return self.high - self.low + 1

    def overlaps(self, other: "PeakRange") -> bool:
        return self.low <= other.high and other.low <= self.high

    class Config:
        frozen = True


class ScaleStats(BaseModel):
    """Baseline page scale, computed upstream from generic foreground runs.

    Attributes:
        main_fore: Most frequent foreground run width, in pixels.
        max_fore: Maximum meaningful foreground run width, in pixels.
        interline: Distance between two staff lines, in pixels.
    """

    main_fore: int = Field(..., ge=1, description="Main foreground run width")
    max_fore: int = Field(..., ge=1, description="Max foreground run width")
    interline: int = Field(..., ge=1, description="Staff interline in pixels")

    def to_pixels(self, fraction: float) -> int:
        """Convert a length expressed in interline units to pixels."""
        return int(round(fraction * self.interline))


class StemScaleResult(BaseModel):
    """Measured stem thickness of a page.

    Attributes:
        main: Typical stem width in pixels.
        max: Maximum stem width in pixels.
        from_peak: True when derived from a histogram peak, False when the
            page scale fallback was used.
    """

    main: int = Field(..., ge=1, description="Typical stem width")
    max: int = Field(..., ge=1, description="Maximum stem width")
    from_peak: bool = Field(True, description="Derived from a histogram peak")

    @model_validator(mode="after")
    def _check_order(self):
        if self.main > self.max:
            raise ValueError(f"main width {self.main} exceeds max width {self.max}")
        return self

    class Config:
        frozen = True
