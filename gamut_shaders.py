# -*- coding: utf-8 -*-
"""
Gamut: Colour transforms for mixed-gamut surface compositing
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: GLSL Transfer-Function Snippets

GPU-side twins of the scalar codec in ``gamut_transfer``.  Each constant
is a self-contained GLSL function; ``gamma``/``degamma`` and the ST 2084
pair call ``pow3``, so it must precede them in the program text
(``transfer_function_source`` takes care of that).

The formulas must stay identical to the scalar codec, including which
branch ``step``/``mix`` selects on each side of a knee.
"""

from typing import Dict, Final, Tuple

from gamut_transfer import GammaCoeff

__all__ = [
    "POW3",
    "DEGAMMA",
    "GAMMA",
    "ST2084_EOTF",
    "ST2084_INVERSE_EOTF",
    "HLG_OETF",
    "HLG_EOTF",
    "SNIPPETS",
    "transfer_function_source",
    "shader_uniforms",
]

POW3: Final[str] = (
    "vec3 pow3(vec3 v, float p) {\n"
    "    return pow(v, vec3(p, p, p));\n"
    "}\n"
)

DEGAMMA: Final[str] = (
    "vec3 degamma(vec3 v, float p, float a, float knee, float linear) {\n"
    "    vec3 ls = v / linear;\n"
    "    vec3 ps = pow3((v + a) / (1.0 + a), p);\n"
    "    return mix(ls, ps, step(knee, v));\n"
    "}\n"
)

GAMMA: Final[str] = (
    "vec3 gamma(vec3 l, float p, float a, float knee, float linear) {\n"
    "    vec3 ls = l * linear;\n"
    "    vec3 ps = (1.0 + a) * pow3(l, p) - a;\n"
    "    return mix(ls, ps, step(knee, l));\n"
    "}\n"
)

ST2084_EOTF: Final[str] = (
    "vec3 st2084_eotf(vec3 v) {\n"
    "    float m1 = 0.25 * 2610.0 / 4096.0;\n"
    "    float m2 = 128.0 * 2523.0 / 4096.0;\n"
    "    float c3 = 32.0 * 2392.0 / 4096.0;\n"
    "    float c2 = 32.0 * 2413.0 / 4096.0;\n"
    "    float c1 = c3 - c2 + 1.0;\n"
    "    vec3 n = pow3(v, 1.0 / m2);\n"
    "    return pow3(max(n - c1, 0.0) / (c2 - c3 * n), 1.0 / m1);\n"
    "}\n"
)

ST2084_INVERSE_EOTF: Final[str] = (
    "vec3 st2084_inverse_eotf(vec3 l) {\n"
    "    float m1 = 0.25 * 2610.0 / 4096.0;\n"
    "    float m2 = 128.0 * 2523.0 / 4096.0;\n"
    "    float c3 = 32.0 * 2392.0 / 4096.0;\n"
    "    float c2 = 32.0 * 2413.0 / 4096.0;\n"
    "    float c1 = c3 - c2 + 1.0;\n"
    "    vec3 n = pow3(l, m1);\n"
    "    return pow3((c1 + c2 * n) / (1.0 + c3 * n), m2);\n"
    "}\n"
)

# sqrt() below 1/12, log() from 1/12 up.
HLG_OETF: Final[str] = (
    "vec3 hlg_oetf(vec3 l) {\n"
    "    float a = 0.17883277;\n"
    "    float b = 1.0 - 4.0 * a;\n"
    "    float c = 0.5 - a * log(4.0 * a);\n"
    "    vec3 x = step(1.0 / 12.0, l);\n"
    "    vec3 v0 = sqrt(3.0 * l);\n"
    "    vec3 v1 = a * log(12.0 * l - b) + c;\n"
    "    return mix(v0, v1, x);\n"
    "}\n"
)

HLG_EOTF: Final[str] = (
    "vec3 hlg_eotf(vec3 l) {\n"
    "    float a = 0.17883277;\n"
    "    float b = 1.0 - 4.0 * a;\n"
    "    float c = 0.5 - a * log(4.0 * a);\n"
    "    vec3 x = step(1.0 / 2.0, l);\n"
    "    vec3 v0 = pow(l, vec3(2.0)) / 3.0;\n"
    "    vec3 v1 = (exp((l - c) / a) + b) / 12.0;\n"
    "    return mix(v0, v1, x);\n"
    "}\n"
)

SNIPPETS: Final[Dict[str, str]] = {
    "pow3": POW3,
    "degamma": DEGAMMA,
    "gamma": GAMMA,
    "st2084_eotf": ST2084_EOTF,
    "st2084_inverse_eotf": ST2084_INVERSE_EOTF,
    "hlg_oetf": HLG_OETF,
    "hlg_eotf": HLG_EOTF,
}

_NEEDS_POW3: Final = frozenset(
    {"degamma", "gamma", "st2084_eotf", "st2084_inverse_eotf"})


def transfer_function_source(*names: str) -> str:
    """
    Concatenates the named snippets into one GLSL source block.

    With no names, every snippet is emitted.  ``pow3`` is prepended once
    whenever a requested function depends on it.

    Raises:
        KeyError: a name is not in ``SNIPPETS``.
    """
    wanted = list(names) if names else [n for n in SNIPPETS if n != "pow3"]
    unknown = [n for n in wanted if n not in SNIPPETS]
    if unknown:
        raise KeyError(f"Unknown shader snippet(s): {', '.join(unknown)}")

    ordered = [n for n in dict.fromkeys(wanted) if n != "pow3"]
    if "pow3" in wanted or _NEEDS_POW3.intersection(ordered):
        ordered.insert(0, "pow3")
    return "".join(SNIPPETS[n] for n in ordered)


def shader_uniforms(c: GammaCoeff) -> Tuple[float, float, float, float]:
    """``(p, a, knee, linear)`` arguments for the ``gamma``/``degamma`` snippets."""
    return (c.p, c.a, c.knee, c.linear)
