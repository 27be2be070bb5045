import numpy as np
import pytest
from pydantic import ValidationError
from stem_scale.models import (
    HeaderArea,
    MaskGeometry,
    Page,
    PolygonGeometry,
    SourceKey,
    SymbolInstance,
    SystemRegion,
)


def test_symbol_geometry_discriminated():
    inst = SymbolInstance(
        id=1,
        shape="THIN_CONNECTOR",
        geometry={"kind": "line", "x1": 0, "y1": 0, "x2": 0, "y2": 10, "thickness": 2},
    )
    assert inst.geometry.kind == "line"
    assert inst.geometry.thickness == 2
    assert not inst.deleted


def test_symbol_geometry_unknown_kind():
    with pytest.raises(ValidationError):
        SymbolInstance(id=1, shape="STEM", geometry={"kind": "circle", "r": 3})


def test_polygon_needs_three_points():
    with pytest.raises(ValidationError):
        PolygonGeometry(points=[(0, 0), (1, 1)])


def test_mask_geometry_must_be_2d():
    with pytest.raises(ValidationError):
        MaskGeometry(x=0, y=0, mask=np.zeros(5, dtype=np.uint8))


def test_header_area_inverted():
    with pytest.raises(ValidationError):
        HeaderArea(left=10, right=5, top=0, bottom=10)


def test_page_get_source(barline_instance, valid_scale):
    image = np.zeros((4, 4), dtype=np.uint8)
    page = Page(
        id="p",
        sources={SourceKey.NO_STAFF: image},
        systems=[SystemRegion(index=0, instances=[barline_instance])],
        scale=valid_scale,
    )
    assert page.get_source(SourceKey.NO_STAFF) is image
    assert page.get_source(SourceKey.BINARY) is None
    assert page.systems[0].header is None
