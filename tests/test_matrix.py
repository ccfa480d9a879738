import numpy as np
import pytest

from gamut_matrix import (
    SingularMatrixError,
    compose,
    diag,
    from_rows3,
    identity,
    invert,
    multiply,
    require_inverse,
    scale,
    transform,
    translate,
    vector,
)


def test_identity_is_fresh_copy():
    a = identity()
    a[0, 0] = 5.0
    assert identity()[0, 0] == 1.0


def test_multiply_applies_new_stage_last():
    first = scale(identity(), 2.0, 2.0, 2.0)
    second = translate(identity(), 1.0, 0.0, 0.0)
    m = multiply(first, second)
    # scale then translate: x -> 2x + 1
    assert transform(m, vector(3.0, 0.0, 0.0))[0] == pytest.approx(7.0)


def test_compose_matches_chained_multiply():
    a = from_rows3([[1, 2, 0], [0, 1, 0], [0, 0, 1]])
    b = diag([2.0, 3.0, 4.0])
    c = translate(identity(), 0.1, 0.2, 0.3)
    np.testing.assert_allclose(compose(a, b, c), multiply(multiply(a, b), c))
    np.testing.assert_allclose(compose(a, b, c), c @ b @ a)


def test_translate_is_ignored_by_directions():
    m = translate(identity(), 1.0, 2.0, 3.0)
    np.testing.assert_allclose(transform(m, vector(0, 0, 0, 0.0)), [0, 0, 0, 0])
    np.testing.assert_allclose(transform(m, vector(0, 0, 0)), [1, 2, 3, 1])


def test_invert_round_trip():
    m = translate(from_rows3([[2, 1, 0], [0, 1, 0], [1, 0, 3]]), 0.5, 0.5, 0.5)
    np.testing.assert_allclose(invert(m) @ m, np.eye(4), atol=1e-12)


def test_invert_singular_returns_none():
    assert invert(diag([1.0, 0.0, 1.0])) is None


def test_require_inverse_raises_on_singular():
    with pytest.raises(SingularMatrixError, match="broken"):
        require_inverse(diag([0.0, 1.0, 1.0]), "broken")
