import numpy as np
import cv2
import pytest

from stem_scale.models import (
    BoxGeometry,
    HeaderArea,
    LineGeometry,
    Page,
    ScaleStats,
    Shape,
    SourceKey,
    SymbolInstance,
    SystemRegion,
)


@pytest.fixture
def make_page():
    # Factory building a page around a no-staff image
    def _make(image, systems=(), scale=None, page_id="page-1"):
        return Page(
            id=page_id,
            sources={SourceKey.NO_STAFF: image},
            systems=list(systems),
            scale=scale or ScaleStats(main_fore=3, max_fore=6, interline=10),
        )

    return _make


@pytest.fixture
def empty_image():
    # 100×50 image without any foreground pixel
    return np.zeros((50, 100), dtype=np.uint8)


@pytest.fixture
def stems_image():
    # 200×100 image with six vertical strokes, 3 pixels wide
    img = np.zeros((100, 200), dtype=np.uint8)
    for x in range(20, 200, 30):
        cv2.rectangle(img, (x, 10), (x + 2, 89), 255, -1)
    return img


@pytest.fixture
def barline_image(stems_image):
    # Stems plus one 4-pixel barline spanning the whole height at x=150..153
    img = stems_image.copy()
    cv2.rectangle(img, (150, 0), (153, 99), 255, -1)
    return img


@pytest.fixture
def barline_system():
    return SystemRegion(
        index=0,
        header=HeaderArea(left=0, right=10, top=20, bottom=70),
        instances=[
            SymbolInstance(
                id=1,
                shape=Shape.THIN_BARLINE,
                geometry=BoxGeometry(x=150, y=0, w=4, h=100),
            ),
            SymbolInstance(
                id=2,
                shape=Shape.STEM,
                geometry=LineGeometry(x1=21, y1=10, x2=21, y2=89, thickness=3),
            ),
        ],
    )


@pytest.fixture
def scale():
    return ScaleStats(main_fore=3, max_fore=6, interline=10)
