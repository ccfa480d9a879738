# -*- coding: utf-8 -*-
"""
Gamut: Colour transforms for mixed-gamut surface compositing
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: Homogeneous 4x4 Matrix Helpers

Conventions:
────────────
  All matrices are float64 arrays of shape (4, 4) acting on COLUMN vectors:
        out = M @ v
  Transform chains are built by appending stages.  ``multiply(acc, m)``
  returns ``m @ acc``, i.e. ``m`` is applied after everything already in
  ``acc``.  ``scale`` and ``translate`` follow the same rule, so a chain
  reads top-to-bottom in application order:

        m = identity()
        m = multiply(m, rgb_to_xyz)     # applied first
        m = multiply(m, xyz_to_lms)     # applied second
        m = scale(m, 2.0, 2.0, 2.0)     # applied last

  The fourth row/column carries the affine part (translation) and is
  left as [0, 0, 0, 1] by every linear stage.
"""

from functools import reduce
from typing import Final, Optional, Sequence, TypeAlias

import numpy as np
import numpy.typing as npt
import scipy.linalg

__all__ = [
    "Matrix4",
    "Vector4",
    "SingularMatrixError",
    "identity",
    "from_rows3",
    "multiply",
    "compose",
    "scale",
    "translate",
    "diag",
    "invert",
    "require_inverse",
    "transform",
    "vector",
]

Matrix4: TypeAlias = npt.NDArray[np.float64]
Vector4: TypeAlias = npt.NDArray[np.float64]

_IDENTITY: Final[Matrix4] = np.eye(4, dtype=np.float64)
_IDENTITY.setflags(write=False)


class SingularMatrixError(ArithmeticError):
    """A matrix built from the constant tables could not be inverted."""


def identity() -> Matrix4:
    """Returns a fresh 4x4 identity matrix."""
    return _IDENTITY.copy()


def from_rows3(rows: Sequence[Sequence[float]]) -> Matrix4:
    """Embeds a row-major 3x3 matrix into the upper-left of a 4x4 identity."""
    m = identity()
    m[:3, :3] = np.asarray(rows, dtype=np.float64)
    return m


def multiply(acc: Matrix4, m: Matrix4) -> Matrix4:
    """Appends ``m`` to the transform chain ``acc`` (``m`` applied after)."""
    return m @ acc


def compose(*stages: Matrix4) -> Matrix4:
    """Chains ``stages`` in application order, first stage first."""
    return reduce(multiply, stages, identity())


def scale(m: Matrix4, sx: float, sy: float, sz: float) -> Matrix4:
    """Appends a per-axis scale to ``m``."""
    s = identity()
    s[0, 0], s[1, 1], s[2, 2] = sx, sy, sz
    return s @ m


def translate(m: Matrix4, tx: float, ty: float, tz: float) -> Matrix4:
    """Appends a translation to ``m``."""
    t = identity()
    t[0, 3], t[1, 3], t[2, 3] = tx, ty, tz
    return t @ m


def diag(v: Sequence[float]) -> Matrix4:
    """Builds a diagonal matrix from the first three components of ``v``."""
    m = identity()
    m[0, 0], m[1, 1], m[2, 2] = v[0], v[1], v[2]
    return m


def invert(m: Matrix4) -> Optional[Matrix4]:
    """
    Inverts ``m``.

    Returns:
        The inverse, or ``None`` if ``m`` is singular or not finite.
    """
    try:
        return scipy.linalg.inv(m, check_finite=True)
    except (scipy.linalg.LinAlgError, ValueError):
        return None


def require_inverse(m: Matrix4, what: str) -> Matrix4:
    """
    Inverts a matrix that is singular only if a constant table is corrupt.

    Raises:
        SingularMatrixError: ``m`` has no inverse.
    """
    inv = invert(m)
    if inv is None:
        raise SingularMatrixError(f"{what} matrix is singular:\n{m}")
    return inv


def transform(m: Matrix4, v: Vector4) -> Vector4:
    """Applies ``m`` to the homogeneous vector ``v``."""
    return m @ v


def vector(x: float, y: float, z: float, w: float = 1.0) -> Vector4:
    """Builds a homogeneous vector (w=1 for points)."""
    return np.array([x, y, z, w], dtype=np.float64)
