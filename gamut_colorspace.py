# -*- coding: utf-8 -*-
"""
Gamut: Colour transforms for mixed-gamut surface compositing
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: Colorspace Model

An RGB colorspace is fully described by the CIE 1931 xy chromaticities of
its three primaries and of its reference white.  Every ``y`` is used as a
divisor when lifting xy to XYZ, so none of the tables below may contain
``y == 0`` for a white point or a regular primary.

The ``CIE XYZ`` entry uses the identity chromaticities R=(1,0) G=(0,1)
B=(0,0).  These do not describe physical primaries; the CSC builder
recognises them and passes XYZ through unchanged.
"""

import warnings
from dataclasses import dataclass
from typing import Dict, Final, Optional, Tuple, TypeAlias

from gamut_matrix import Vector4, vector

__all__ = [
    "Chromaticity",
    "Colorspace",
    "WHITE_C",
    "WHITE_D50",
    "WHITE_D65",
    "WHITE_E",
    "WHITE_DCI",
    "WHITE_ACES",
    "BT470M",
    "BT470BG",
    "SMPTE170M",
    "BT709",
    "SRGB",
    "BT2020",
    "ADOBERGB",
    "DCI_P3",
    "PROPHOTORGB",
    "CIERGB",
    "CIEXYZ",
    "ACES_AP0",
    "ACES_AP1",
    "COLORSPACES",
    "lookup_colorspace",
    "xy_to_xyz",
]

Chromaticity: TypeAlias = Tuple[float, float]


@dataclass(frozen=True, slots=True)
class Colorspace:
    """Primaries and white point of an RGB space, as xy chromaticities."""
    name: str
    whitepoint: Chromaticity
    r: Chromaticity
    g: Chromaticity
    b: Chromaticity
    whitepoint_name: str = ""

    @property
    def has_identity_primaries(self) -> bool:
        """True for the XYZ pass-through primaries R=(1,0) G=(0,1) B=(0,0)."""
        return (self.r == (1.0, 0.0)
                and self.g == (0.0, 1.0)
                and self.b == (0.0, 0.0))


# --- Reference Whites ---
WHITE_C: Final[Chromaticity] = (0.3101, 0.3162)
WHITE_D50: Final[Chromaticity] = (0.3457, 0.3585)
WHITE_D65: Final[Chromaticity] = (0.3127, 0.3290)
WHITE_E: Final[Chromaticity] = (1.0 / 3.0, 1.0 / 3.0)
WHITE_DCI: Final[Chromaticity] = (0.314, 0.351)
WHITE_ACES: Final[Chromaticity] = (0.32168, 0.33767)

# --- Built-in Colorspaces ---
# ITU-R BT.470-6 System M (NTSC 1953)
BT470M: Final = Colorspace("BT.470 M", WHITE_C,
                           (0.670, 0.330), (0.210, 0.710), (0.140, 0.080), "C")
# ITU-R BT.470-6 System B, G (PAL/SECAM)
BT470BG: Final = Colorspace("BT.470 B/G", WHITE_D65,
                            (0.640, 0.330), (0.290, 0.600), (0.150, 0.060), "D65")
SMPTE170M: Final = Colorspace("SMPTE 170M", WHITE_D65,
                              (0.630, 0.340), (0.310, 0.595), (0.155, 0.070), "D65")
BT709: Final = Colorspace("BT.709", WHITE_D65,
                          (0.640, 0.330), (0.300, 0.600), (0.150, 0.060), "D65")
# IEC 61966-2-1 shares the BT.709 primaries.
SRGB: Final = Colorspace("sRGB", WHITE_D65,
                         (0.640, 0.330), (0.300, 0.600), (0.150, 0.060), "D65")
BT2020: Final = Colorspace("BT.2020", WHITE_D65,
                           (0.708, 0.292), (0.170, 0.797), (0.131, 0.046), "D65")
ADOBERGB: Final = Colorspace("AdobeRGB", WHITE_D65,
                             (0.640, 0.330), (0.210, 0.710), (0.150, 0.060), "D65")
# SMPTE RP 431-2 theatrical white.
DCI_P3: Final = Colorspace("DCI-P3", WHITE_DCI,
                           (0.680, 0.320), (0.265, 0.690), (0.150, 0.060), "DCI")
PROPHOTORGB: Final = Colorspace("ProPhotoRGB", WHITE_D50,
                                (0.7347, 0.2653), (0.1596, 0.8404),
                                (0.0366, 0.0001), "D50")
CIERGB: Final = Colorspace("CIE RGB", WHITE_E,
                           (0.7347, 0.2653), (0.2738, 0.7174),
                           (0.1666, 0.0089), "E")
CIEXYZ: Final = Colorspace("CIE XYZ", WHITE_E,
                           (1.0, 0.0), (0.0, 1.0), (0.0, 0.0), "E")
# SMPTE ST 2065-1; AP0 blue lies outside the spectral locus (negative y).
ACES_AP0: Final = Colorspace("ACES primaries #0", WHITE_ACES,
                             (0.7347, 0.2653), (0.0, 1.0),
                             (0.0001, -0.0770), "ACES")
ACES_AP1: Final = Colorspace("ACES primaries #1", WHITE_ACES,
                             (0.713, 0.293), (0.165, 0.830),
                             (0.128, 0.044), "ACES")

COLORSPACES: Final[Dict[str, Colorspace]] = {
    cs.name: cs for cs in (
        BT470M, BT470BG, SMPTE170M, BT709, SRGB, BT2020, ADOBERGB,
        DCI_P3, PROPHOTORGB, CIERGB, CIEXYZ, ACES_AP0, ACES_AP1,
    )
}


def lookup_colorspace(name: Optional[str]) -> Optional[Colorspace]:
    """
    Resolves ``name`` (exact match) to a built-in colorspace.

    Returns:
        The colorspace, or ``None`` for ``None`` or an unknown name.
    """
    if name is None:
        return None
    cs = COLORSPACES.get(name)
    if cs is None:
        warnings.warn(f"lookup_colorspace: unknown colorspace {name!r}.",
                      stacklevel=2)
    return cs


def xy_to_xyz(xy: Chromaticity, luminance: float) -> Vector4:
    """
    Lifts an xy chromaticity to an XYZ point with the given luminance (Y).

        X = Y * x / y
        Z = Y * (1 - x - y) / y
    """
    x, y = xy
    y_inv = 1.0 / y
    return vector(luminance * x * y_inv,
                  luminance,
                  luminance * (1.0 - x - y) * y_inv)
