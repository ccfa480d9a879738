import pytest

from gamut_shaders import (
    HLG_OETF,
    POW3,
    SNIPPETS,
    ST2084_EOTF,
    shader_uniforms,
    transfer_function_source,
)
from gamut_transfer import lookup_degamma


def test_every_function_is_exported():
    assert set(SNIPPETS) == {
        "pow3", "degamma", "gamma", "st2084_eotf", "st2084_inverse_eotf",
        "hlg_oetf", "hlg_eotf",
    }
    for name, src in SNIPPETS.items():
        assert f" {name}(" in src


def test_pq_constants_match_codec():
    for token in ("2610.0 / 4096.0", "2523.0 / 4096.0", "2392.0 / 4096.0",
                  "2413.0 / 4096.0"):
        assert token in ST2084_EOTF


def test_hlg_oetf_uses_sqrt_below_threshold():
    assert "0.17883277" in HLG_OETF
    assert "v0 = sqrt(3.0 * l)" in HLG_OETF
    assert "return mix(v0, v1, x)" in HLG_OETF


def test_pow3_precedes_dependents():
    src = transfer_function_source("gamma", "degamma")
    assert src.startswith(POW3)
    assert src.count("vec3 pow3(") == 1
    assert src.index("vec3 gamma(") < src.index("vec3 degamma(")


def test_no_pow3_for_hlg_only():
    src = transfer_function_source("hlg_oetf", "hlg_eotf", "hlg_oetf")
    assert "pow3" not in src
    assert src.count("vec3 hlg_oetf(") == 1


def test_default_emits_everything():
    src = transfer_function_source()
    for snippet in SNIPPETS.values():
        assert snippet in src


def test_unknown_snippet():
    with pytest.raises(KeyError, match="pq_eotf"):
        transfer_function_source("pq_eotf")


def test_shader_uniforms():
    c = lookup_degamma("sRGB")
    assert shader_uniforms(c) == (c.p, c.a, c.knee, c.linear)
