"""Erasure of known non-stem structures before stem measurement.

Barlines and connectors produce horizontal runs whose lengths are close to
stem widths, and system headers (clefs, key and time signatures) are dense
areas full of short runs. Both would bias the run length histogram, so they
are painted with the background color before runs are extracted.

All symbol footprints go through ``paint_footprint``, which dispatches on the
geometry ``kind`` of the tagged geometry models.
"""

import logging
from collections.abc import Collection

import cv2
import numpy as np

from stem_scale.image_processing import BACKGROUND, binarize, to_binary
from stem_scale.models.page_models import (
    STRUCTURAL_SHAPES,
    Geometry,
    HeaderArea,
    Page,
    Shape,
    SymbolInstance,
    SystemRegion,
)
from stem_scale.models.pipeline_models import ErasureResult
from stem_scale.models.settings_models import StemScaleParams

logger = logging.getLogger(__name__)


def can_hide(instance: SymbolInstance, params: StemScaleParams) -> bool:
    """Tell whether a symbol instance may be erased from the image.

    Large structural symbols are always eligible. Other symbols must have
    a contextual grade of at least ``params.min_hide_grade``.
    """
    if instance.shape in STRUCTURAL_SHAPES:
        return True
    return instance.grade >= params.min_hide_grade


def select_erasable(
    system: SystemRegion, shapes: Collection[Shape], params: StemScaleParams
) -> list[SymbolInstance]:
    """Return the live instances of ``system`` with a shape in ``shapes``."""
    return [
        instance
        for instance in system.instances
        if not instance.deleted
        and instance.shape in shapes
        and can_hide(instance, params)
    ]


def paint_footprint(
    buffer: np.ndarray, geometry: Geometry, color: int = BACKGROUND
) -> None:
    """Paint the footprint of a geometry onto ``buffer``, in place.

    Parts of the footprint lying outside the buffer are clipped.

    Args:
        buffer: 2D uint8 image, modified in place.
        geometry: Footprint to paint.
        color: Gray level to paint with (default background).
    """
    if geometry.kind == "box":
        cv2.rectangle(
            buffer,
            (geometry.x, geometry.y),
            (geometry.x + geometry.w - 1, geometry.y + geometry.h - 1),
            color,
            -1,
        )
    elif geometry.kind == "line":
        cv2.line(
            buffer,
            (geometry.x1, geometry.y1),
            (geometry.x2, geometry.y2),
            color,
            geometry.thickness,
        )
    elif geometry.kind == "polygon":
        points = np.array(geometry.points, dtype=np.int32)
        cv2.fillPoly(buffer, [points], color)
    elif geometry.kind == "mask":
        _paint_mask(buffer, geometry.x, geometry.y, geometry.mask, color)
    else:
        raise ValueError(f"Unsupported geometry kind: {geometry.kind}")


def _paint_mask(
    buffer: np.ndarray, x: int, y: int, mask: np.ndarray, color: int
) -> None:
    height, width = buffer.shape
    mh, mw = mask.shape

    # Intersection of the mask with the buffer, in buffer coordinates
    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + mw, width), min(y + mh, height)
    if x0 >= x1 or y0 >= y1:
        return

    window = mask[y0 - y : y1 - y, x0 - x : x1 - x] != 0
    buffer[y0:y1, x0:x1][window] = color


def erase_system_header(
    buffer: np.ndarray, header: HeaderArea, margin: int, color: int = BACKGROUND
) -> None:
    """Paint a system header area, extended vertically by ``margin`` pixels."""
    cv2.rectangle(
        buffer,
        (header.left, header.top - margin),
        (header.right, header.bottom + margin),
        color,
        -1,
    )


def erase_shapes(
    buffer: np.ndarray,
    page: Page,
    shapes: Collection[Shape],
    params: StemScaleParams,
) -> ErasureResult:
    """Erase all instances of the provided shapes, and system headers.

    The input buffer is left untouched: erasure works on a 0/255 copy,
    which is binarized again once all painting is done.

    Args:
        buffer: 2D binary image of the page, any non-zero pixel being
            foreground (0/255, 0/1 or boolean).
        page: Page providing systems, symbols and scale.
        shapes: Shapes to look for.
        params: Measurement parameters (header erasure, margin, threshold).

    Returns:
        ErasureResult holding the cleaned buffer and erasure counts.
    """
    erased = to_binary(buffer)
    margin = page.scale.to_pixels(params.header_vertical_margin)
    erased_count = 0
    header_count = 0

    for system in page.systems:
        instances = select_erasable(system, shapes, params)
        for instance in instances:
            paint_footprint(erased, instance.geometry)
        erased_count += len(instances)

        if params.erase_header and system.header is not None:
            erase_system_header(erased, system.header, margin)
            header_count += 1

    logger.debug(
        f"Page {page.id}: erased {erased_count} symbols and {header_count} headers"
    )

    return ErasureResult(
        buffer=binarize(erased, params.binarize_threshold),
        erased_count=erased_count,
        header_count=header_count,
    )
