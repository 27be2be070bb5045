import pytest
from stem_scale.models import ScaleStats, BoxGeometry, SymbolInstance, Shape


@pytest.fixture
def valid_scale():
    return ScaleStats(main_fore=3, max_fore=5, interline=20)


@pytest.fixture
def barline_instance():
    return SymbolInstance(
        id=7, shape=Shape.THICK_BARLINE, geometry=BoxGeometry(x=10, y=0, w=5, h=40)
    )
