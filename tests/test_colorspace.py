import pytest

from gamut_colorspace import (
    BT709,
    CIEXYZ,
    COLORSPACES,
    SRGB,
    WHITE_D65,
    lookup_colorspace,
    xy_to_xyz,
)


def test_builtin_names():
    assert set(COLORSPACES) >= {
        "BT.470 M", "BT.470 B/G", "SMPTE 170M", "BT.709", "BT.2020",
        "AdobeRGB", "DCI-P3", "ProPhotoRGB", "CIE RGB", "CIE XYZ",
        "ACES primaries #0", "ACES primaries #1",
    }


def test_names_are_unique_keys():
    for name, cs in COLORSPACES.items():
        assert cs.name == name


def test_srgb_shares_bt709_primaries():
    assert (SRGB.r, SRGB.g, SRGB.b) == (BT709.r, BT709.g, BT709.b)
    assert SRGB.whitepoint == BT709.whitepoint == WHITE_D65


def test_identity_primaries():
    assert CIEXYZ.has_identity_primaries
    assert not BT709.has_identity_primaries


def test_lookup():
    assert lookup_colorspace("BT.709") is BT709
    assert lookup_colorspace(None) is None
    with pytest.warns(UserWarning, match="bt709"):
        assert lookup_colorspace("bt709") is None


def test_xy_to_xyz_d65():
    x, y, z, w = xy_to_xyz(WHITE_D65, 1.0)
    assert (x, y, z, w) == pytest.approx((0.95046, 1.0, 1.08906, 1.0), abs=1e-5)


def test_xy_to_xyz_scales_with_luminance():
    assert xy_to_xyz((0.3, 0.6), 0.5)[:3] == pytest.approx((0.25, 0.5, 1.0 / 12.0))
