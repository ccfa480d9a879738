import itertools

import numpy as np
import pytest

from gamut_matrix import transform, vector
from gamut_ycbcr import (
    BT709,
    BT2020,
    COLOR_ENCODINGS,
    lookup_color_encoding,
    rgb_to_ycbcr_coefficients,
    rgb_to_ycbcr_matrix,
    ycbcr_to_rgb_matrix,
)

BPC_MULS = [1.0, 65535.0 / 1023.0, 255.0 / 1023.0]


def test_lookup():
    assert lookup_color_encoding("BT.2020") is BT2020
    assert lookup_color_encoding(None) is None
    with pytest.warns(UserWarning):
        assert lookup_color_encoding("BT.999") is None


def test_kg():
    assert BT709.kg == pytest.approx(0.7152)
    for e in COLOR_ENCODINGS.values():
        assert e.kr + e.kg + e.kb == pytest.approx(1.0)


def test_bt709_coefficients():
    m = rgb_to_ycbcr_coefficients(BT709)
    np.testing.assert_allclose(m[0, :3], [0.2126, 0.7152, 0.0722])
    # Cb and Cr rows reach +-0.5 on their own primary.
    assert m[1, 2] == 0.5
    assert m[2, 0] == 0.5
    # Grey has no chroma.
    np.testing.assert_allclose(m[1:3, :3].sum(axis=1), [0.0, 0.0], atol=1e-15)


@pytest.mark.parametrize(
    "name, bpc_mul, full_range",
    list(itertools.product(COLOR_ENCODINGS, BPC_MULS, [False, True])),
)
def test_decode_inverts_encode(name, bpc_mul, full_range):
    e = COLOR_ENCODINGS[name]
    fwd = rgb_to_ycbcr_matrix(e, bpc_mul, full_range)
    inv = ycbcr_to_rgb_matrix(e, bpc_mul, full_range)
    np.testing.assert_allclose(inv @ fwd, np.eye(4), atol=1e-9)


def test_limited_range_code_values():
    m = rgb_to_ycbcr_matrix(BT709, 1.0, False)
    np.testing.assert_allclose(transform(m, vector(0, 0, 0)),
                               [16 / 255, 0.5, 0.5, 1.0])
    np.testing.assert_allclose(transform(m, vector(1, 1, 1)),
                               [235 / 255, 0.5, 0.5, 1.0])


def test_full_range_code_values():
    m = rgb_to_ycbcr_matrix(BT709, 1.0, True)
    np.testing.assert_allclose(transform(m, vector(1, 1, 1)), [1.0, 0.5, 0.5, 1.0])
    np.testing.assert_allclose(transform(m, vector(0, 0, 1)),
                               [0.0722, 1.0, 0.5 - 0.5 * 0.0722 / (1 - 0.2126), 1.0])


def test_bpc_mul_scales_decode_input():
    # 10-bit black sampled from a 16-bit texture.
    bpc_mul = 65535.0 / 1023.0
    m = ycbcr_to_rgb_matrix(BT2020, bpc_mul, False)
    sample = vector(16 / 255 / bpc_mul, 0.5 / bpc_mul, 0.5 / bpc_mul)
    np.testing.assert_allclose(transform(m, sample)[:3], [0, 0, 0], atol=1e-12)


def test_bpc_mul_must_be_positive():
    with pytest.raises(ValueError):
        rgb_to_ycbcr_matrix(BT709, 0.0)
    with pytest.raises(ValueError):
        ycbcr_to_rgb_matrix(BT709, -1.0)
