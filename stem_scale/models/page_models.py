"""Models describing a processed page: its images, systems and symbols.

These structures are produced upstream (page decomposition, symbol
classification) and are read-only for stem measurement. Symbol footprints are
described by a small set of geometry variants, discriminated by their
``kind`` field, so that a single painter can erase any of them.
"""

from enum import Enum
from typing import Annotated, Literal, Union

import numpy as np
from pydantic import BaseModel, Field, field_validator, model_validator

from stem_scale.models.core_models import ScaleStats


class Shape(str, Enum):
    """Shape tags assigned by symbol classification."""

    THICK_BARLINE = "THICK_BARLINE"
    THIN_BARLINE = "THIN_BARLINE"
    THICK_CONNECTOR = "THICK_CONNECTOR"
    THIN_CONNECTOR = "THIN_CONNECTOR"
    BRACE = "BRACE"
    BRACKET = "BRACKET"
    STEM = "STEM"
    LEDGER = "LEDGER"
    BEAM = "BEAM"
    NOTEHEAD_BLACK = "NOTEHEAD_BLACK"
    NOTEHEAD_VOID = "NOTEHEAD_VOID"
    CLEF = "CLEF"
    KEY_SIGNATURE = "KEY_SIGNATURE"
    TIME_SIGNATURE = "TIME_SIGNATURE"


# Large structural symbols, always eligible for erasure
STRUCTURAL_SHAPES = frozenset(
    {
        Shape.THICK_BARLINE,
        Shape.THIN_BARLINE,
        Shape.THICK_CONNECTOR,
        Shape.THIN_CONNECTOR,
        Shape.BRACE,
        Shape.BRACKET,
    }
)


class BoxGeometry(BaseModel):
    """Axis-aligned rectangle, (x, y) being the top-left pixel."""

    kind: Literal["box"] = "box"
    x: int
    y: int
    w: int = Field(..., ge=1)
    h: int = Field(..., ge=1)


class LineGeometry(BaseModel):
    """Straight segment painted with a given thickness.

    Barlines and connectors are typically described by their median line.
    """

    kind: Literal["line"] = "line"
    x1: int
    y1: int
    x2: int
    y2: int
    thickness: int = Field(1, ge=1)


class PolygonGeometry(BaseModel):
    """Closed polygon given by its vertices, (x, y) pixel pairs."""

    kind: Literal["polygon"] = "polygon"
    points: list[tuple[int, int]] = Field(..., min_length=3)


class MaskGeometry(BaseModel):
    """Bitmap footprint, non-zero pixels belonging to the symbol.

    The mask top-left corner is located at (x, y) in page coordinates.
    """

    kind: Literal["mask"] = "mask"
    x: int
    y: int
    mask: np.ndarray

    @field_validator("mask")
    @classmethod
    def _check_mask(cls, value: np.ndarray) -> np.ndarray:
        if value.ndim != 2:
            raise ValueError("mask must be a 2D array")
        return value

    class Config:
        arbitrary_types_allowed = True


Geometry = Annotated[
    Union[BoxGeometry, LineGeometry, PolygonGeometry, MaskGeometry],
    Field(discriminator="kind"),
]


class SymbolInstance(BaseModel):
    """An already classified shape occurrence on the page.

    Attributes:
        id: Identifier of the instance within its page.
        shape: Shape tag assigned by classification.
        geometry: Footprint of the instance.
        deleted: True if the instance was discarded by later processing.
        grade: Contextual grade of the instance, in [0, 1].
    """

    id: int = Field(..., ge=0, description="Instance identifier")
    shape: Shape = Field(..., description="Assigned shape tag")
    geometry: Geometry = Field(..., description="Footprint of the instance")
    deleted: bool = Field(False, description="Discarded by later processing")
    grade: float = Field(1.0, ge=0.0, le=1.0, description="Contextual grade")


class HeaderArea(BaseModel):
    """Area at the start of a system holding clef, key and time signatures.

    Coordinates are inclusive pixel bounds.
    """

    left: int = Field(..., ge=0)
    right: int = Field(..., ge=0)
    top: int = Field(..., ge=0)
    bottom: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _check_bounds(self):
        if self.right < self.left or self.bottom < self.top:
            raise ValueError("header area bounds are inverted")
        return self


class SystemRegion(BaseModel):
    """One musical system of the page, with the symbols found in it."""

    index: int = Field(..., ge=0, description="Rank of the system in page")
    header: HeaderArea | None = Field(None, description="System header area")
    instances: list[SymbolInstance] = Field(
        default_factory=list, description="Classified symbols of the system"
    )


class SourceKey(str, Enum):
    """Named variants of the page image."""

    BINARY = "binary"
    NO_STAFF = "no_staff"


class Page(BaseModel):
    """A page ready for stem measurement.

    Attributes:
        id: Page identifier, used in logs and debug file names.
        sources: Binary image variants, keyed by SourceKey. Foreground
            pixels are non-zero.
        systems: Systems of the page, in page order.
        scale: Page scale statistics.
    """

    id: str = Field(..., min_length=1, description="Page identifier")
    sources: dict[SourceKey, np.ndarray] = Field(
        default_factory=dict, description="Image variants of the page"
    )
    systems: list[SystemRegion] = Field(
        default_factory=list, description="Systems in page order"
    )
    scale: ScaleStats = Field(..., description="Page scale statistics")

    def get_source(self, key: SourceKey) -> np.ndarray | None:
        """Return the image variant for ``key``, or None if not available."""
        return self.sources.get(key)

    class Config:
        arbitrary_types_allowed = True

