# -*- coding: utf-8 -*-
"""
Gamut: Colour transforms for mixed-gamut surface compositing
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: Surface Colour State

Clients describe a surface with two name pairs:

  * colorspace      (chromaticities, transfer function)
  * YCbCr encoding  (encoding standard, quantization range)

Both arrive as closed enumerations.  This module maps each enumerator to
a table name (or to an explicit "no colorspace" for UNDEFINED), stores the
result on a ``SurfaceColorState`` and resolves that state into the
matrices and coefficient records a renderer needs.

It also carries the mapping from codec colour metadata (FFmpeg's
``color_primaries`` / ``color_trc`` / ``colorspace`` / ``color_range``
names) to those enumerations, with the same fallbacks a video client
applies for values it does not know.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Final, Optional

from gamut_colorspace import Colorspace, lookup_colorspace
from gamut_csc import csc_matrix
from gamut_matrix import Matrix4
from gamut_transfer import GammaCoeff, lookup_degamma, lookup_gamma
from gamut_ycbcr import ColorEncoding, lookup_color_encoding, ycbcr_to_rgb_matrix

__all__ = [
    "Chromaticities",
    "TransferFunction",
    "YcbcrEncoding",
    "Quantization",
    "CHROMATICITY_NAMES",
    "TRANSFER_FUNCTION_NAMES",
    "YCBCR_ENCODING_NAMES",
    "SurfaceColorState",
    "chromaticities_from_codec",
    "transfer_function_from_codec",
    "ycbcr_encoding_from_codec",
    "quantization_from_codec",
]


# ---------------------------------------------------------------------------
# 1.  Closed enumerations
# ---------------------------------------------------------------------------
class Chromaticities(enum.IntEnum):
    UNDEFINED = 0
    BT470M = 1
    BT470BG = 2
    SMPTE170M = 3
    BT709 = 4
    BT2020 = 5
    ADOBERGB = 6
    DCI_P3 = 7
    PROPHOTORGB = 8
    CIERGB = 9
    CIEXYZ = 10
    AP0 = 11
    AP1 = 12


class TransferFunction(enum.IntEnum):
    LINEAR = 0
    BT709 = 1
    SMPTE240M = 2
    SRGB = 3
    ADOBERGB = 4
    DCI_P3 = 5
    PROPHOTORGB = 6
    ST2084 = 7
    HLG = 8


class YcbcrEncoding(enum.IntEnum):
    UNDEFINED = 0
    BT601 = 1
    BT709 = 2
    SMPTE240M = 3
    BT2020 = 4


class Quantization(enum.IntEnum):
    LIMITED = 0
    FULL = 1


# UNDEFINED maps to no colorspace: the surface is composited untouched.
CHROMATICITY_NAMES: Final[Dict[Chromaticities, Optional[str]]] = {
    Chromaticities.UNDEFINED: None,
    Chromaticities.BT470M: "BT.470 M",
    Chromaticities.BT470BG: "BT.470 B/G",
    Chromaticities.SMPTE170M: "SMPTE 170M",
    Chromaticities.BT709: "BT.709",
    Chromaticities.BT2020: "BT.2020",
    Chromaticities.ADOBERGB: "AdobeRGB",
    Chromaticities.DCI_P3: "DCI-P3",
    Chromaticities.PROPHOTORGB: "ProPhotoRGB",
    Chromaticities.CIERGB: "CIE RGB",
    Chromaticities.CIEXYZ: "CIE XYZ",
    Chromaticities.AP0: "ACES primaries #0",
    Chromaticities.AP1: "ACES primaries #1",
}

TRANSFER_FUNCTION_NAMES: Final[Dict[TransferFunction, str]] = {
    TransferFunction.LINEAR: "Linear",
    TransferFunction.BT709: "BT.709",
    TransferFunction.SMPTE240M: "SMPTE 240M",
    TransferFunction.SRGB: "sRGB",
    TransferFunction.ADOBERGB: "AdobeRGB",
    TransferFunction.DCI_P3: "DCI-P3",
    TransferFunction.PROPHOTORGB: "ProPhotoRGB",
    TransferFunction.ST2084: "ST2084",
    TransferFunction.HLG: "HLG",
}

# Untagged YCbCr content is treated as BT.601.
YCBCR_ENCODING_NAMES: Final[Dict[YcbcrEncoding, str]] = {
    YcbcrEncoding.UNDEFINED: "BT.601",
    YcbcrEncoding.BT601: "BT.601",
    YcbcrEncoding.BT709: "BT.709",
    YcbcrEncoding.SMPTE240M: "SMPTE 240M",
    YcbcrEncoding.BT2020: "BT.2020",
}


# ---------------------------------------------------------------------------
# 2.  Surface state
# ---------------------------------------------------------------------------
@dataclass(slots=True)
class SurfaceColorState:
    """
    Colour description attached to one surface.

    ``colorspace_name`` and ``gamma_name`` stay ``None`` until a colorspace
    is set; ``ycbcr_encoding`` stays ``None`` until an encoding is set.
    """
    colorspace_name: Optional[str] = None
    gamma_name: Optional[str] = None
    ycbcr_encoding: Optional[ColorEncoding] = None
    ycbcr_full_range: bool = False

    def set_colorspace(self, chromaticities: Chromaticities,
                       transfer_func: TransferFunction) -> None:
        self.colorspace_name = CHROMATICITY_NAMES[Chromaticities(chromaticities)]
        self.gamma_name = TRANSFER_FUNCTION_NAMES[TransferFunction(transfer_func)]

    def set_ycbcr_encoding(self, encoding: YcbcrEncoding,
                           quantization: Quantization) -> None:
        """
        Stores the encoding and range.  An encoding name missing from the
        table leaves the previous state untouched.
        """
        e = lookup_color_encoding(YCBCR_ENCODING_NAMES[YcbcrEncoding(encoding)])
        if e is None:
            return
        self.ycbcr_encoding = e
        self.ycbcr_full_range = Quantization(quantization) is Quantization.FULL

    @property
    def colorspace(self) -> Optional[Colorspace]:
        return lookup_colorspace(self.colorspace_name)

    def gamma_coeff(self) -> Optional[GammaCoeff]:
        """Encode record of the surface's transfer function, if set."""
        if self.gamma_name is None:
            return None
        return lookup_gamma(self.gamma_name)

    def degamma_coeff(self) -> Optional[GammaCoeff]:
        """Decode record of the surface's transfer function, if set."""
        if self.gamma_name is None:
            return None
        return lookup_degamma(self.gamma_name)

    def csc_matrix(self, dst: Colorspace,
                   luminance_scale: float = 1.0) -> Optional[Matrix4]:
        """Surface RGB -> ``dst`` RGB, or ``None`` without a colorspace."""
        src = self.colorspace
        if src is None:
            return None
        return csc_matrix(dst, src, luminance_scale)

    def ycbcr_to_rgb_matrix(self, bpc_mul: float = 1.0) -> Optional[Matrix4]:
        """Sampled YCbCr -> R'G'B', or ``None`` without an encoding."""
        if self.ycbcr_encoding is None:
            return None
        return ycbcr_to_rgb_matrix(self.ycbcr_encoding, bpc_mul,
                                   self.ycbcr_full_range)


# ---------------------------------------------------------------------------
# 3.  Codec metadata mapping
# ---------------------------------------------------------------------------
_CODEC_PRIMARIES: Final[Dict[str, Chromaticities]] = {
    "bt709": Chromaticities.BT709,
    "bt470m": Chromaticities.BT470M,
    "bt470bg": Chromaticities.BT470BG,
    "smpte170m": Chromaticities.SMPTE170M,
    "smpte240m": Chromaticities.SMPTE170M,
    "smpte431": Chromaticities.DCI_P3,
    "smpte432": Chromaticities.DCI_P3,
    "smpte428": Chromaticities.CIEXYZ,
    "bt2020": Chromaticities.BT2020,
}

_CODEC_TRANSFERS: Final[Dict[str, TransferFunction]] = {
    "bt709": TransferFunction.BT709,
    "gamma22": TransferFunction.BT709,
    "gamma28": TransferFunction.BT709,
    "smpte170m": TransferFunction.BT709,
    "smpte240m": TransferFunction.SMPTE240M,
    "bt2020-10": TransferFunction.BT709,
    "bt2020-12": TransferFunction.BT709,
    "smpte2084": TransferFunction.ST2084,
    "arib-std-b67": TransferFunction.HLG,
}

_CODEC_SPACES: Final[Dict[str, YcbcrEncoding]] = {
    "bt709": YcbcrEncoding.BT709,
    "bt470bg": YcbcrEncoding.BT601,
    "smpte170m": YcbcrEncoding.BT601,
    "smpte240m": YcbcrEncoding.SMPTE240M,
    "bt2020c": YcbcrEncoding.BT2020,
    "bt2020nc": YcbcrEncoding.BT2020,
}


def chromaticities_from_codec(name: Optional[str]) -> Chromaticities:
    """Codec ``color_primaries`` name -> enumerator (UNDEFINED if unknown)."""
    return _CODEC_PRIMARIES.get((name or "").lower(), Chromaticities.UNDEFINED)


def transfer_function_from_codec(name: Optional[str]) -> TransferFunction:
    """Codec ``color_trc`` name -> enumerator (LINEAR if unknown)."""
    return _CODEC_TRANSFERS.get((name or "").lower(), TransferFunction.LINEAR)


def ycbcr_encoding_from_codec(name: Optional[str]) -> YcbcrEncoding:
    """Codec ``colorspace`` name -> enumerator (BT601 if unknown)."""
    return _CODEC_SPACES.get((name or "").lower(), YcbcrEncoding.BT601)


def quantization_from_codec(name: Optional[str]) -> Quantization:
    """Codec ``color_range`` name -> enumerator; only "pc"/"jpeg" are full."""
    if (name or "").lower() in ("pc", "jpeg"):
        return Quantization.FULL
    return Quantization.LIMITED
