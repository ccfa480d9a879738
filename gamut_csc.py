# -*- coding: utf-8 -*-
"""
Gamut: Colour transforms for mixed-gamut surface compositing
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: Colour-Space Conversion (CSC) Matrix Builder

Pipeline (column vectors, stages in application order):
────────────────────────────────────────────────────────
    rgb_src ──► XYZ ──► LMS ──► LMS' ──► XYZ' ──► rgb_dst
           P_src    M_cr    D      M_cr⁻¹   P_dst⁻¹

    P      RGB -> XYZ from primaries and white point (Lindbloom derivation)
    M_cr   cone-response matrix (Bradford; von Kries available)
    D      diag(LMS(white_dst) / LMS(white_src)), von Kries-style gains

The composite is finally scaled by a uniform luminance factor.

References:
    - B. Lindbloom, "RGB/XYZ Matrices", brucelindbloom.com
    - K. M. Lam, "Metamerism and Colour Constancy", PhD thesis (1985)
"""

import enum
from typing import Dict, Final

from gamut_colorspace import Colorspace, xy_to_xyz
from gamut_matrix import (
    Matrix4,
    compose,
    diag,
    from_rows3,
    identity,
    require_inverse,
    scale,
    transform,
)

__all__ = [
    "ConeResponse",
    "M_BRADFORD",
    "M_VON_KRIES",
    "rgb_to_xyz_matrix",
    "xyz_to_lms_matrix",
    "cat_matrix",
    "csc_matrix",
]


class ConeResponse(enum.Enum):
    """XYZ -> LMS matrix used for chromatic adaptation."""
    BRADFORD = "bradford"
    VON_KRIES = "von_kries"


# Bradford: "sharpened" cone responses, the usual choice for CATs.
M_BRADFORD: Final[Matrix4] = from_rows3([
    [ 0.8951,  0.2664, -0.1614],
    [-0.7502,  1.7135,  0.0367],
    [ 0.0389, -0.0685,  1.0296],
])
M_BRADFORD.setflags(write=False)

# Hunt-Pointer-Estevez physiological cone fundamentals.
M_VON_KRIES: Final[Matrix4] = from_rows3([
    [ 0.4002,  0.7076, -0.0808],
    [-0.2263,  1.1653,  0.0457],
    [ 0.0000,  0.0000,  0.9182],
])
M_VON_KRIES.setflags(write=False)

_CONE_RESPONSES: Final[Dict[ConeResponse, Matrix4]] = {
    ConeResponse.BRADFORD: M_BRADFORD,
    ConeResponse.VON_KRIES: M_VON_KRIES,
}


def rgb_to_xyz_matrix(cs: Colorspace) -> Matrix4:
    """
    Builds the RGB -> XYZ matrix of ``cs``.

    Derivation:
        Columns of P are the primaries lifted to XYZ at luminance y, which
        makes each column the (x, y, 1-x-y) chromaticity triple.  The
        per-primary gains S = P⁻¹·W bring RGB (1, 1, 1) onto the white
        point W (Y = 1), and the result is P·diag(S).

    Raises:
        SingularMatrixError: the primaries are collinear.
    """
    w = xy_to_xyz(cs.whitepoint, 1.0)

    if cs.has_identity_primaries:
        p = identity()
    else:
        p = identity()
        for col, xy in enumerate((cs.r, cs.g, cs.b)):
            p[:3, col] = xy_to_xyz(xy, xy[1])[:3]

    p_inv = require_inverse(p, f"{cs.name} primaries")
    gains = transform(p_inv, w)

    return compose(diag(gains), p)


def xyz_to_lms_matrix(cone_response: ConeResponse = ConeResponse.BRADFORD) -> Matrix4:
    """Returns a writable copy of the XYZ -> LMS matrix."""
    return _CONE_RESPONSES[cone_response].copy()


def cat_matrix(dst: Colorspace, src: Colorspace,
               cone_response: ConeResponse = ConeResponse.BRADFORD) -> Matrix4:
    """
    Builds the LMS-domain adaptation gains from ``src`` white to ``dst`` white.

    Returns:
        diag(LMS_dst[i] / LMS_src[i]); identity when the whites match.
    """
    m = _CONE_RESPONSES[cone_response]
    lms_dst = transform(m, xy_to_xyz(dst.whitepoint, 1.0))
    lms_src = transform(m, xy_to_xyz(src.whitepoint, 1.0))
    return diag(lms_dst[:3] / lms_src[:3])


def csc_matrix(dst: Colorspace, src: Colorspace, luminance_scale: float = 1.0,
               cone_response: ConeResponse = ConeResponse.BRADFORD) -> Matrix4:
    """
    Builds the linear-light RGB(src) -> RGB(dst) conversion matrix.

    Args:
        dst: Destination colorspace.
        src: Source colorspace.
        luminance_scale: Uniform gain applied after the conversion.
        cone_response: Cone-response matrix of the chromatic adaptation.

    Returns:
        4x4 matrix for column vectors; the w row/column is untouched.

    Raises:
        SingularMatrixError: a colorspace or cone-response table is corrupt.
    """
    rgb_to_xyz_src = rgb_to_xyz_matrix(src)
    xyz_to_rgb_dst = require_inverse(rgb_to_xyz_matrix(dst),
                                     f"{dst.name} RGB to XYZ")

    xyz_to_lms = _CONE_RESPONSES[cone_response]
    lms_to_xyz = require_inverse(xyz_to_lms, f"{cone_response.value} cone response")

    m = compose(
        rgb_to_xyz_src,
        xyz_to_lms,
        cat_matrix(dst, src, cone_response),
        lms_to_xyz,
        xyz_to_rgb_dst,
    )
    return scale(m, luminance_scale, luminance_scale, luminance_scale)
