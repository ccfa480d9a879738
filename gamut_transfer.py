# -*- coding: utf-8 -*-
"""
Gamut: Colour transforms for mixed-gamut surface compositing
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Transfer-Function Codec
=======================
Moves sample values between linear light and an encoded representation.

Directions:
    gamma    linear -> encoded   (OETF / inverse EOTF)
    degamma  encoded -> linear   (EOTF)

Curve families:
    PIECEWISE  A linear toe below ``knee`` and a power law above it:
                   gamma(l)   = l * linear                 for l < knee
                              = (1 + a) * l**p - a         otherwise
                   degamma(v) = v / linear                 for v < knee
                              = ((v + a) / (1 + a))**p     otherwise
               A degamma record is derived from the gamma record by
               p -> 1/p and knee -> knee * linear.
    PQ         SMPTE ST 2084 closed form (no coefficients).
    HLG        ARIB STD-B67 / BT.2100 Hybrid Log-Gamma closed form.

Domain:
    No input is clamped or validated.  Values outside a curve's domain
    (e.g. negative PQ input) produce NaN; callers clamp first.

References:
    - ITU-R BT.709-6, SMPTE 240M-1999, IEC 61966-2-1:1999
    - SMPTE ST 2084:2014
    - ITU-R BT.2100-2 (HLG)
"""

import enum
import warnings
from dataclasses import dataclass, replace
from typing import Dict, Final, Tuple, TypeAlias

import numpy as np
import numpy.typing as npt
from numba import njit

__all__ = [
    # --- Types ---
    "ArrayFloat",
    "CurveKind",
    "GammaCoeff",

    # --- Constants ---
    "PQ_M1",
    "PQ_M2",
    "PQ_C1",
    "PQ_C2",
    "PQ_C3",
    "HLG_A",
    "HLG_B",
    "HLG_C",
    "GAMMA_COEFFS",

    # --- Configuration ---
    "set_strict_ieee",

    # --- Lookup ---
    "curve_names",
    "lookup_gamma",
    "lookup_degamma",

    # --- Scalar codec ---
    "gamma",
    "degamma",
    "st2084_eotf",
    "st2084_inverse_eotf",
    "hlg_oetf",
    "hlg_eotf",

    # --- Array codec ---
    "gamma_array",
    "degamma_array",
]

ArrayFloat: TypeAlias = npt.NDArray[np.floating]


# --- Exact Rational Constants ---
# ST 2084 defines every constant as a ratio over 4096.
PQ_M1: Final[float] = 0.25 * 2610.0 / 4096.0             # 0.1593017578125
PQ_M2: Final[float] = 128.0 * 2523.0 / 4096.0            # 78.84375
PQ_C3: Final[float] = 32.0 * 2392.0 / 4096.0             # 18.6875
PQ_C2: Final[float] = 32.0 * 2413.0 / 4096.0             # 18.8515625
PQ_C1: Final[float] = PQ_C3 - PQ_C2 + 1.0                # 0.8359375

HLG_A: Final[float] = 0.17883277
HLG_B: Final[float] = 1.0 - 4.0 * HLG_A
HLG_C: Final[float] = 0.5 - HLG_A * float(np.log(4.0 * HLG_A))


class CurveKind(enum.IntEnum):
    """Evaluation strategy of a transfer curve."""
    PIECEWISE = 0
    PQ = 1
    HLG = 2
    UNSUPPORTED = -1


@dataclass(frozen=True, slots=True)
class GammaCoeff:
    """
    Parameters of one transfer curve in one direction.

    ``p`` is the exponent of the power segment, ``a`` its offset, ``knee``
    the switch point in the input domain and ``linear`` the slope of the
    toe.  PQ and HLG records carry zeros; their math is closed form.
    """
    name: str
    p: float = 0.0
    a: float = 0.0
    knee: float = 0.0
    linear: float = 0.0
    kind: CurveKind = CurveKind.PIECEWISE

    @property
    def is_supported(self) -> bool:
        return self.kind is not CurveKind.UNSUPPORTED

    def describe(self) -> str:
        """One-line dump: ``name p a knee linear``."""
        return (f"{self.name} {self.p:.6f} {self.a:.6f} "
                f"{self.knee:.6f} {self.linear:.6f}")


# Built-in curves, gamma (linear -> encoded) direction.
GAMMA_COEFFS: Final[Dict[str, GammaCoeff]] = {
    c.name: c for c in (
        GammaCoeff("BT.709", p=0.45, a=0.099, knee=0.018, linear=4.5),
        GammaCoeff("SMPTE 240M", p=0.45, a=0.1115, knee=0.0228, linear=4.0),
        GammaCoeff("sRGB", p=1.0 / 2.4, a=0.055,
                   knee=0.04045 / 12.92, linear=12.92),
        GammaCoeff("AdobeRGB", p=1.0 / 2.19921875, linear=1.0),
        GammaCoeff("DCI-P3", p=1.0 / 2.6, linear=1.0),
        GammaCoeff("ProPhotoRGB", p=1.0 / 1.8, knee=0.001953, linear=16.0),
        GammaCoeff("ST2084", kind=CurveKind.PQ),
        GammaCoeff("Linear", p=1.0, linear=1.0),
        GammaCoeff("HLG", kind=CurveKind.HLG),
    )
}


# --- Runtime Configuration ---
# Array kernels come in a fast-math and a strict IEEE 754 flavour.  Strict
# is the default so that array results match the scalar path bit for bit.
# Set once at start-up, before any thread evaluates curves.
_STRICT_IEEE: bool = True

def set_strict_ieee(enabled: bool = True) -> None:
    """
    Toggle between strict IEEE 754 (default) and fast-math array kernels.

    Fast-math lets LLVM reassociate and assume finite values; results may
    differ from the scalar codec in the last few ULPs and NaN propagation
    for out-of-domain input is no longer guaranteed.

    Args:
        enabled: If True, use strict IEEE mode.
    """
    global _STRICT_IEEE
    _STRICT_IEEE = bool(enabled)


# =============================================================================
# 1. LOOKUP
# =============================================================================

def curve_names() -> Tuple[str, ...]:
    """Names of every built-in curve, in table order."""
    return tuple(GAMMA_COEFFS)


def _unsupported(name: str, caller: str) -> GammaCoeff:
    warnings.warn(
        f"{caller}: unknown transfer curve {name!r}; "
        "returning an unsupported (all-zero) record.",
        stacklevel=3,
    )
    return GammaCoeff(name, kind=CurveKind.UNSUPPORTED)


def lookup_gamma(name: str) -> GammaCoeff:
    """
    Resolves ``name`` (exact, case-sensitive) to its encode record.

    Unknown names never raise: the result has every coefficient zeroed,
    keeps ``name`` and is tagged ``CurveKind.UNSUPPORTED``.
    """
    coeff = GAMMA_COEFFS.get(name)
    if coeff is None:
        return _unsupported(name, "lookup_gamma")
    return coeff


def lookup_degamma(name: str) -> GammaCoeff:
    """
    Resolves ``name`` to its decode record.

    Derivation from the encode record: ``p`` is inverted, ``a`` kept, and
    ``knee`` moved into the encoded domain by multiplying with ``linear``.
    """
    coeff = GAMMA_COEFFS.get(name)
    if coeff is None:
        return _unsupported(name, "lookup_degamma")
    if coeff.kind is not CurveKind.PIECEWISE:
        return coeff
    return replace(coeff, p=1.0 / coeff.p, knee=coeff.knee * coeff.linear)


# =============================================================================
# 2. SCALAR KERNELS (Numba, inlined into the array loops)
# =============================================================================

@njit(cache=True, inline='always', error_model='numpy')
def _pq_eotf(v):
    n = v ** (1.0 / PQ_M2)
    num = n - PQ_C1
    if num < 0.0:  # NaN falls through
        num = 0.0
    return (num / (PQ_C2 - PQ_C3 * n)) ** (1.0 / PQ_M1)

@njit(cache=True, inline='always', error_model='numpy')
def _pq_inverse_eotf(l):
    n = l ** PQ_M1
    return ((PQ_C1 + PQ_C2 * n) / (1.0 + PQ_C3 * n)) ** PQ_M2

@njit(cache=True, inline='always', error_model='numpy')
def _hlg_oetf(l):
    if l < 1.0 / 12.0:
        return np.sqrt(3.0 * l)
    return HLG_A * np.log(12.0 * l - HLG_B) + HLG_C

@njit(cache=True, inline='always', error_model='numpy')
def _hlg_eotf(v):
    if v < 0.5:
        return v * v / 3.0
    return (np.exp((v - HLG_C) / HLG_A) + HLG_B) / 12.0

@njit(cache=True, inline='always', error_model='numpy')
def _encode_one(x, kind, p, a, knee, linear):
    """Linear -> encoded for one sample."""
    if kind == 1:
        return _pq_inverse_eotf(x)
    if kind == 2:
        return _hlg_oetf(x)
    if x < knee:
        return x * linear
    return (1.0 + a) * x ** p - a

@njit(cache=True, inline='always', error_model='numpy')
def _decode_one(x, kind, p, a, knee, linear):
    """Encoded -> linear for one sample."""
    if kind == 1:
        return _pq_eotf(x)
    if kind == 2:
        return _hlg_eotf(x)
    if x < knee:
        return x / linear
    return ((x + a) / (1.0 + a)) ** p


# =============================================================================
# 3. ARRAY KERNELS
# =============================================================================
# Explicit loops over ravel() views avoid the boolean masks and temporaries
# np.where would allocate for every branch.

@njit(cache=True, fastmath=True, error_model='numpy')
def _fast_encode(values, kind, p, a, knee, linear):
    out = np.empty_like(values)
    src = values.ravel()
    dst = out.ravel()
    for i in range(values.size):
        dst[i] = _encode_one(src[i], kind, p, a, knee, linear)
    return out

@njit(cache=True, fastmath=True, error_model='numpy')
def _fast_decode(values, kind, p, a, knee, linear):
    out = np.empty_like(values)
    src = values.ravel()
    dst = out.ravel()
    for i in range(values.size):
        dst[i] = _decode_one(src[i], kind, p, a, knee, linear)
    return out

@njit(cache=True, fastmath=False, error_model='numpy')
def _strict_encode(values, kind, p, a, knee, linear):
    out = np.empty_like(values)
    src = values.ravel()
    dst = out.ravel()
    for i in range(values.size):
        dst[i] = _encode_one(src[i], kind, p, a, knee, linear)
    return out

@njit(cache=True, fastmath=False, error_model='numpy')
def _strict_decode(values, kind, p, a, knee, linear):
    out = np.empty_like(values)
    src = values.ravel()
    dst = out.ravel()
    for i in range(values.size):
        dst[i] = _decode_one(src[i], kind, p, a, knee, linear)
    return out


# =============================================================================
# 4. PUBLIC CODEC
# =============================================================================

def _unpack(c: GammaCoeff) -> Tuple[int, float, float, float, float]:
    if not c.is_supported:
        raise ValueError(f"Cannot evaluate unsupported transfer curve {c.name!r}.")
    return int(c.kind), float(c.p), float(c.a), float(c.knee), float(c.linear)


def gamma(c: GammaCoeff, l: float) -> float:
    """
    Encodes one linear sample with an encode record (``lookup_gamma``).

    Raises:
        ValueError: ``c`` is an unsupported record.
    """
    return _encode_one(float(l), *_unpack(c))


def degamma(c: GammaCoeff, v: float) -> float:
    """
    Decodes one encoded sample with a decode record (``lookup_degamma``).

    Raises:
        ValueError: ``c`` is an unsupported record.
    """
    return _decode_one(float(v), *_unpack(c))


def st2084_eotf(v: float) -> float:
    """PQ code value [0, 1] -> linear light, 1.0 = 10000 cd/m²."""
    return _pq_eotf(float(v))


def st2084_inverse_eotf(l: float) -> float:
    """Linear light, 1.0 = 10000 cd/m² -> PQ code value."""
    return _pq_inverse_eotf(float(l))


def hlg_oetf(l: float) -> float:
    """Scene-linear [0, 1] -> HLG signal."""
    return _hlg_oetf(float(l))


def hlg_eotf(v: float) -> float:
    """HLG signal -> scene-linear (inverse of ``hlg_oetf``)."""
    return _hlg_eotf(float(v))


def _as_flat_array(values: ArrayFloat) -> Tuple[ArrayFloat, Tuple[int, ...]]:
    """Contiguous 1-D float64 view of ``values`` plus its original shape."""
    shape = np.shape(values)
    return np.ascontiguousarray(values, dtype=np.float64).reshape(-1), shape


def gamma_array(c: GammaCoeff, values: ArrayFloat) -> ArrayFloat:
    """
    Vectorised ``gamma`` over an array of any shape, 0-d included.

    Returns:
        float64 array with the shape of ``values``.
    """
    params = _unpack(c)
    flat, shape = _as_flat_array(values)
    if _STRICT_IEEE:
        return _strict_encode(flat, *params).reshape(shape)
    return _fast_encode(flat, *params).reshape(shape)


def degamma_array(c: GammaCoeff, values: ArrayFloat) -> ArrayFloat:
    """Vectorised ``degamma`` over an array of any shape."""
    params = _unpack(c)
    flat, shape = _as_flat_array(values)
    if _STRICT_IEEE:
        return _strict_decode(flat, *params).reshape(shape)
    return _fast_decode(flat, *params).reshape(shape)
