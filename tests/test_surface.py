import numpy as np
import pytest

import gamut_surface
from gamut_colorspace import BT709, BT2020, COLORSPACES
from gamut_csc import csc_matrix
from gamut_surface import (
    CHROMATICITY_NAMES,
    TRANSFER_FUNCTION_NAMES,
    YCBCR_ENCODING_NAMES,
    Chromaticities,
    Quantization,
    SurfaceColorState,
    TransferFunction,
    YcbcrEncoding,
    chromaticities_from_codec,
    quantization_from_codec,
    transfer_function_from_codec,
    ycbcr_encoding_from_codec,
)
from gamut_transfer import GAMMA_COEFFS, CurveKind
from gamut_ycbcr import COLOR_ENCODINGS, ycbcr_to_rgb_matrix


def test_every_enumerator_resolves_to_a_table_entry():
    for c in Chromaticities:
        name = CHROMATICITY_NAMES[c]
        assert name is None or name in COLORSPACES
    for t in TransferFunction:
        assert TRANSFER_FUNCTION_NAMES[t] in GAMMA_COEFFS
    for e in YcbcrEncoding:
        assert YCBCR_ENCODING_NAMES[e] in COLOR_ENCODINGS


def test_fresh_state_has_nothing_to_resolve():
    state = SurfaceColorState()
    assert state.colorspace is None
    assert state.gamma_coeff() is None
    assert state.degamma_coeff() is None
    assert state.csc_matrix(BT709) is None
    assert state.ycbcr_to_rgb_matrix() is None


def test_set_colorspace_hdr10():
    state = SurfaceColorState()
    state.set_colorspace(Chromaticities.BT2020, TransferFunction.ST2084)
    assert state.colorspace is BT2020
    assert state.degamma_coeff().kind is CurveKind.PQ
    np.testing.assert_allclose(state.csc_matrix(BT709, 2.0),
                               csc_matrix(BT709, BT2020, 2.0))


def test_undefined_chromaticities_clear_colorspace():
    state = SurfaceColorState()
    state.set_colorspace(Chromaticities.BT709, TransferFunction.SRGB)
    state.set_colorspace(Chromaticities.UNDEFINED, TransferFunction.LINEAR)
    assert state.colorspace is None
    assert state.gamma_coeff().name == "Linear"


def test_set_ycbcr_encoding():
    state = SurfaceColorState()
    state.set_ycbcr_encoding(YcbcrEncoding.BT2020, Quantization.FULL)
    assert state.ycbcr_encoding is COLOR_ENCODINGS["BT.2020"]
    assert state.ycbcr_full_range
    np.testing.assert_allclose(
        state.ycbcr_to_rgb_matrix(4.0),
        ycbcr_to_rgb_matrix(COLOR_ENCODINGS["BT.2020"], 4.0, True))


def test_undefined_encoding_falls_back_to_bt601():
    state = SurfaceColorState()
    state.set_ycbcr_encoding(YcbcrEncoding.UNDEFINED, Quantization.LIMITED)
    assert state.ycbcr_encoding.name == "BT.601"
    assert not state.ycbcr_full_range


def test_out_of_range_enumerator_is_rejected():
    with pytest.raises(ValueError):
        SurfaceColorState().set_colorspace(42, TransferFunction.LINEAR)


@pytest.mark.parametrize("name, expected", [
    ("bt709", Chromaticities.BT709),
    ("BT2020", Chromaticities.BT2020),
    ("smpte240m", Chromaticities.SMPTE170M),
    ("smpte432", Chromaticities.DCI_P3),
    ("smpte428", Chromaticities.CIEXYZ),
    ("film", Chromaticities.UNDEFINED),
    (None, Chromaticities.UNDEFINED),
])
def test_chromaticities_from_codec(name, expected):
    assert chromaticities_from_codec(name) is expected


@pytest.mark.parametrize("name, expected", [
    ("smpte2084", TransferFunction.ST2084),
    ("arib-std-b67", TransferFunction.HLG),
    ("bt2020-10", TransferFunction.BT709),
    ("gamma22", TransferFunction.BT709),
    ("smpte240m", TransferFunction.SMPTE240M),
    ("iec61966-2-1", TransferFunction.LINEAR),
    (None, TransferFunction.LINEAR),
])
def test_transfer_function_from_codec(name, expected):
    assert transfer_function_from_codec(name) is expected


def test_ycbcr_encoding_from_codec():
    assert ycbcr_encoding_from_codec("bt2020nc") is YcbcrEncoding.BT2020
    assert ycbcr_encoding_from_codec("bt709") is YcbcrEncoding.BT709
    assert ycbcr_encoding_from_codec("unknown") is YcbcrEncoding.BT601


def test_quantization_from_codec():
    assert quantization_from_codec("pc") is Quantization.FULL
    assert quantization_from_codec("JPEG") is Quantization.FULL
    assert quantization_from_codec("tv") is Quantization.LIMITED
    assert quantization_from_codec(None) is Quantization.LIMITED


def test_unresolvable_encoding_keeps_previous_state(monkeypatch):
    state = SurfaceColorState()
    state.set_ycbcr_encoding(YcbcrEncoding.BT2020, Quantization.FULL)
    monkeypatch.setitem(gamut_surface.YCBCR_ENCODING_NAMES,
                        YcbcrEncoding.BT709, "BT.709 (unlisted)")
    with pytest.warns(UserWarning, match="unlisted"):
        state.set_ycbcr_encoding(YcbcrEncoding.BT709, Quantization.LIMITED)
    assert state.ycbcr_encoding is COLOR_ENCODINGS["BT.2020"]
    assert state.ycbcr_full_range
