import pytest
from pydantic import ValidationError
from stem_scale.models import Run, PeakRange, ScaleStats, StemScaleResult


def test_run_stop():
    run = Run(start=4, length=3)
    assert run.stop == 6


@pytest.mark.parametrize(
    "kwargs",
    [
        {"start": -1, "length": 1},
        {"start": 0, "length": 0},
    ],
)
def test_run_validation_raises(kwargs):
    with pytest.raises(ValidationError):
        Run(**kwargs)


def test_run_is_frozen():
    run = Run(start=0, length=2)
    with pytest.raises(ValidationError):
        run.length = 5


def test_peakrange_width_and_overlap():
    a = PeakRange(low=2, main=3, high=4, mass=10)
    b = PeakRange(low=4, main=5, high=6, mass=3)
    c = PeakRange(low=7, main=7, high=7, mass=1)
    assert a.width == 3
    assert a.overlaps(b) and b.overlaps(a)
    assert not a.overlaps(c)


def test_peakrange_main_outside_bounds():
    with pytest.raises(ValidationError):
        PeakRange(low=3, main=2, high=4)


def test_scale_to_pixels(valid_scale):
    assert valid_scale.to_pixels(2.0) == 40
    assert valid_scale.to_pixels(0.0) == 0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"main_fore": 0, "max_fore": 1, "interline": 1},
        {"main_fore": 1, "max_fore": 0, "interline": 1},
        {"main_fore": 1, "max_fore": 1, "interline": 0},
    ],
)
def test_scale_validation_raises(kwargs):
    with pytest.raises(ValidationError):
        ScaleStats(**kwargs)


def test_stemscaleresult_valid():
    result = StemScaleResult(main=3, max=4)
    assert result.main == 3
    assert result.max == 4
    assert result.from_peak


@pytest.mark.parametrize(
    "kwargs",
    [
        {"main": 0, "max": 1},
        {"main": 5, "max": 4},
    ],
)
def test_stemscaleresult_validation_raises(kwargs):
    with pytest.raises(ValidationError):
        StemScaleResult(**kwargs)
