import numpy as np
from stem_scale.image_processing import binarize, to_binary


def test_to_binary_from_bool_and_ones():
    mask = np.array([[True, False], [False, True]])
    expected = np.array([[255, 0], [0, 255]], dtype=np.uint8)
    assert np.array_equal(to_binary(mask), expected)
    assert np.array_equal(to_binary(mask.astype(np.uint8)), expected)


def test_binarize_threshold():
    # 127 and below become background, above become foreground
    gray = np.array([[0, 127], [128, 255]], dtype=np.uint8)
    out = binarize(gray, threshold_value=127)
    expected = np.array([[0, 0], [255, 255]], dtype=np.uint8)
    assert np.array_equal(out, expected)


def test_binarize_keeps_binary_image(stems_image):
    out = binarize(stems_image)
    assert out.dtype == np.uint8
    assert np.array_equal(out, stems_image)
