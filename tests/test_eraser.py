import numpy as np
import pytest

from stem_scale.eraser import (
    can_hide,
    erase_shapes,
    erase_system_header,
    paint_footprint,
    select_erasable,
)
from stem_scale.histogram import build_histogram
from stem_scale.image_processing import to_binary
from stem_scale.models import (
    BoxGeometry,
    HeaderArea,
    LineGeometry,
    MaskGeometry,
    PolygonGeometry,
    Shape,
    StemScaleParams,
    SymbolInstance,
    SystemRegion,
)
from stem_scale.runs import extract_runs


def full_image(h=20, w=20):
    return np.full((h, w), 255, dtype=np.uint8)


def make_instance(shape, grade=1.0, deleted=False):
    return SymbolInstance(
        id=0,
        shape=shape,
        geometry=BoxGeometry(x=0, y=0, w=1, h=1),
        grade=grade,
        deleted=deleted,
    )


@pytest.mark.parametrize(
    "shape, grade, expected",
    [
        (Shape.THICK_BARLINE, 0.0, True),
        (Shape.BRACE, 0.1, True),
        (Shape.STEM, 0.3, False),
        (Shape.STEM, 0.5, True),
    ],
)
def test_can_hide(shape, grade, expected):
    assert can_hide(make_instance(shape, grade), StemScaleParams()) is expected


def test_select_erasable_filters():
    system = SystemRegion(
        index=0,
        instances=[
            make_instance(Shape.THIN_BARLINE),
            make_instance(Shape.THIN_BARLINE, deleted=True),
            make_instance(Shape.STEM),
            make_instance(Shape.CLEF, grade=0.2),
        ],
    )
    params = StemScaleParams()
    selected = select_erasable(system, {Shape.THIN_BARLINE, Shape.CLEF}, params)
    assert selected == [system.instances[0]]


def test_paint_box_clipped():
    img = full_image()
    paint_footprint(img, BoxGeometry(x=-2, y=-2, w=4, h=4))
    assert np.all(img[0:2, 0:2] == 0)
    assert img[2, 2] == 255
    assert (img == 0).sum() == 4


def test_paint_line():
    img = full_image()
    paint_footprint(img, LineGeometry(x1=10, y1=0, x2=10, y2=19, thickness=1))
    assert np.all(img[:, 10] == 0)
    assert (img == 0).sum() == 20


def test_paint_polygon():
    img = full_image()
    paint_footprint(img, PolygonGeometry(points=[(0, 0), (19, 0), (0, 19)]))
    assert img[2, 2] == 0
    assert img[19, 19] == 255


def test_paint_mask_clipped():
    img = full_image(5, 5)
    mask = np.array([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=np.uint8)
    paint_footprint(img, MaskGeometry(x=3, y=3, mask=mask))
    assert img[3, 3] == 0
    assert img[3, 4] == 0
    assert img[4, 3] == 0
    assert img[4, 4] == 255  # hole of the mask
    assert (img == 0).sum() == 3


def test_paint_mask_outside_buffer():
    img = full_image(5, 5)
    paint_footprint(img, MaskGeometry(x=10, y=10, mask=np.ones((2, 2))))
    assert np.all(img == 255)


def test_erase_system_header_margin():
    img = full_image(30, 30)
    erase_system_header(img, HeaderArea(left=2, right=5, top=10, bottom=15), margin=3)
    assert np.all(img[7:19, 2:6] == 0)
    assert img[6, 3] == 255
    assert img[19, 3] == 255
    assert img[10, 6] == 255


def test_erase_shapes_barline_and_header(
    barline_image, stems_image, barline_system, make_page
):
    page = make_page(barline_image, [barline_system])
    params = StemScaleParams()
    result = erase_shapes(barline_image, page, params.erased_shapes, params)
    assert result.erased_count == 1
    assert result.header_count == 1
    # Only the barline is gone, stems are not among the erased shapes
    assert np.array_equal(result.buffer, stems_image)


def test_erase_shapes_leaves_input_untouched(barline_image, barline_system, make_page):
    original = barline_image.copy()
    page = make_page(barline_image, [barline_system])
    erase_shapes(barline_image, page, {Shape.THIN_BARLINE}, StemScaleParams())
    assert np.array_equal(barline_image, original)


def test_erase_shapes_without_catalog_is_noop(barline_image, make_page):
    page = make_page(barline_image)
    params = StemScaleParams(erase_header=False)
    result = erase_shapes(barline_image, page, params.erased_shapes, params)
    assert result.erased_count == 0
    assert result.header_count == 0
    assert np.array_equal(result.buffer, barline_image)


@pytest.mark.parametrize("dtype", [np.uint8, bool])
def test_erase_shapes_keeps_low_valued_foreground(dtype, make_page):
    # 0/1 and boolean images hold foreground below the 127 threshold
    img = np.zeros((10, 10), dtype=dtype)
    img[:, 3:6] = 1
    page = make_page(img)
    params = StemScaleParams(erase_header=False)
    result = erase_shapes(img, page, params.erased_shapes, params)
    assert np.count_nonzero(result.buffer) == 30
    assert np.array_equal(result.buffer, to_binary(img))


def test_header_erasure_disabled(make_page):
    img = full_image(40, 40)
    system = SystemRegion(index=0, header=HeaderArea(left=0, right=5, top=10, bottom=20))
    page = make_page(img, [system])
    params = StemScaleParams(erase_header=False)
    result = erase_shapes(img, page, params.erased_shapes, params)
    assert np.array_equal(result.buffer, img)


def test_erasure_never_increases_buckets(barline_image, barline_system, make_page):
    page = make_page(barline_image, [barline_system])
    params = StemScaleParams()
    erased = erase_shapes(barline_image, page, params.erased_shapes, params).buffer

    before = build_histogram(extract_runs(barline_image), 20).counts
    after = build_histogram(extract_runs(erased), 20).counts
    assert np.all(after <= before)
    assert before[4] == 100
    assert after[4] == 0
