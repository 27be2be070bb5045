import pytest
from pydantic import ValidationError
from stem_scale.models import StemScaleParams, Shape, DEFAULT_ERASED_SHAPES


def test_stemscaleparams_default():
    p = StemScaleParams()
    assert not p.print_timing
    assert not p.keep_debug_image
    assert p.erase_header
    assert p.header_vertical_margin == 2.0
    assert p.min_value_ratio == 0.1
    assert p.min_derivative_ratio == 0.05
    assert p.min_gain_ratio == 0.1
    assert p.stem_as_fore_ratio == 1.0
    assert p.max_countable_run_length == 20


def test_default_erased_shapes():
    p = StemScaleParams()
    assert p.erased_shapes == DEFAULT_ERASED_SHAPES
    assert Shape.THIN_BARLINE in p.erased_shapes
    assert Shape.STEM not in p.erased_shapes


@pytest.mark.parametrize(
    "kwargs",
    [
        {"min_value_ratio": -0.1},
        {"min_gain_ratio": 1.5},
        {"stem_as_fore_ratio": 0.0},
        {"max_countable_run_length": 0},
        {"binarize_threshold": 255},
        {"header_vertical_margin": -1.0},
    ],
)
def test_stemscaleparams_invalid(kwargs):
    with pytest.raises(ValidationError):
        StemScaleParams(**kwargs)


def test_erased_shapes_from_strings():
    p = StemScaleParams(erased_shapes=["THICK_BARLINE"])
    assert p.erased_shapes == frozenset({Shape.THICK_BARLINE})
