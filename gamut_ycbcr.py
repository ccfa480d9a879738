# -*- coding: utf-8 -*-
"""
Gamut: Colour transforms for mixed-gamut surface compositing
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: YCbCr Encoding Table

Encoding (non-constant luminance, R'G'B' in [0, 1]):
    Y' = kr·R' + kg·G' + kb·B'                  kg = 1 - kr - kb
    Cb = (B' - Y') / (2·(1 - kb))
    Cr = (R' - Y') / (2·(1 - kr))

Quantization:
    full range     Y' in [0, 1],           Cb/Cr offset by 0.5
    limited range  Y' scaled by 219/255 and offset by 16/255,
                   Cb/Cr scaled by 112/128 and offset by 0.5

Bit-depth multiplier:
    ``bpc_mul`` maps a sampled texture value to its normalised code value,
    e.g. 65535/1023 for 10-bit data stored in 16-bit texels.  The decode
    matrix therefore folds ``bpc_mul`` in, and the encode matrix folds in
    ``1/bpc_mul``; with identical arguments they are exact inverses.
"""

import warnings
from dataclasses import dataclass
from typing import Dict, Final, Optional

from gamut_matrix import (
    Matrix4,
    from_rows3,
    require_inverse,
    scale,
    translate,
)

__all__ = [
    "ColorEncoding",
    "BT601",
    "BT709",
    "SMPTE240M",
    "BT2020",
    "COLOR_ENCODINGS",
    "lookup_color_encoding",
    "rgb_to_ycbcr_coefficients",
    "rgb_to_ycbcr_matrix",
    "ycbcr_to_rgb_matrix",
]

_LUMA_RANGE: Final[float] = 219.0 / 255.0
_CHROMA_RANGE: Final[float] = 112.0 / 128.0
_LUMA_FOOTROOM: Final[float] = 16.0 / 255.0
_CHROMA_OFFSET: Final[float] = 0.5


@dataclass(frozen=True, slots=True)
class ColorEncoding:
    """Luma coefficients of one YCbCr standard."""
    name: str
    kr: float
    kb: float

    @property
    def kg(self) -> float:
        return 1.0 - self.kr - self.kb


BT601: Final = ColorEncoding("BT.601", kr=0.299, kb=0.114)
BT709: Final = ColorEncoding("BT.709", kr=0.2126, kb=0.0722)
SMPTE240M: Final = ColorEncoding("SMPTE 240M", kr=0.212, kb=0.087)
BT2020: Final = ColorEncoding("BT.2020", kr=0.2627, kb=0.0593)

COLOR_ENCODINGS: Final[Dict[str, ColorEncoding]] = {
    e.name: e for e in (BT601, BT709, SMPTE240M, BT2020)
}


def lookup_color_encoding(name: Optional[str]) -> Optional[ColorEncoding]:
    """
    Resolves ``name`` (exact match) to a built-in encoding.

    Returns:
        The encoding, or ``None`` for ``None`` or an unknown name.
    """
    if name is None:
        return None
    e = COLOR_ENCODINGS.get(name)
    if e is None:
        warnings.warn(f"lookup_color_encoding: unknown YCbCr encoding {name!r}.",
                      stacklevel=2)
    return e


def rgb_to_ycbcr_coefficients(e: ColorEncoding) -> Matrix4:
    """Unscaled, unbiased R'G'B' -> Y'CbCr matrix (rows Y', Cb, Cr)."""
    kr, kg, kb = e.kr, e.kg, e.kb
    return from_rows3([
        [kr, kg, kb],
        [-0.5 * kr / (1.0 - kb), -0.5 * kg / (1.0 - kb), 0.5],
        [0.5, -0.5 * kg / (1.0 - kr), -0.5 * kb / (1.0 - kr)],
    ])


def _quantized_rgb_to_ycbcr(e: ColorEncoding, bpc_mul: float,
                            full_range: bool) -> Matrix4:
    m = rgb_to_ycbcr_coefficients(e)
    if not full_range:
        m = scale(m, _LUMA_RANGE, _CHROMA_RANGE, _CHROMA_RANGE)
    m = translate(m, 0.0 if full_range else _LUMA_FOOTROOM,
                  _CHROMA_OFFSET, _CHROMA_OFFSET)
    return scale(m, bpc_mul, bpc_mul, bpc_mul)


def _check_bpc_mul(bpc_mul: float) -> None:
    if not bpc_mul > 0.0:
        raise ValueError(f"bpc_mul must be positive, got {bpc_mul}.")


def rgb_to_ycbcr_matrix(e: ColorEncoding, bpc_mul: float = 1.0,
                        full_range: bool = False) -> Matrix4:
    """
    Builds the R'G'B' -> sampled Y'CbCr matrix.

    Args:
        e: Encoding standard.
        bpc_mul: Sampled-value to code-value multiplier (see module notes).
        full_range: True for full, False for limited (studio) quantization.

    Raises:
        ValueError: ``bpc_mul`` is not positive.
    """
    _check_bpc_mul(bpc_mul)
    return _quantized_rgb_to_ycbcr(e, 1.0 / bpc_mul, full_range)


def ycbcr_to_rgb_matrix(e: ColorEncoding, bpc_mul: float = 1.0,
                        full_range: bool = False) -> Matrix4:
    """
    Builds the sampled Y'CbCr -> R'G'B' matrix, the inverse of
    ``rgb_to_ycbcr_matrix`` with the same arguments.

    Raises:
        ValueError: ``bpc_mul`` is not positive.
        SingularMatrixError: the encoding coefficients are corrupt.
    """
    _check_bpc_mul(bpc_mul)
    forward = _quantized_rgb_to_ycbcr(e, 1.0 / bpc_mul, full_range)
    return require_inverse(forward, f"{e.name} RGB to YCbCr")
