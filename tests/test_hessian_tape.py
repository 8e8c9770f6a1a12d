"""
Second derivatives from edge-pushing against known values.
"""

import numpy as np
import pytest

from aad_tape import HessianTape, TapeConfig, NoRootNodesError

UNARY_HESSIANS = [
    ("acos", 0.123, -0.125845035324435),
    ("acosh", 1.23, -3.348544407755665),
    ("asin", 0.123, 0.125845035324435),
    ("asinh", 1.23, -0.3087751219667227),
    ("atan", 1.23, -0.3895692725912341),
    ("atanh", 1.23, 9.35125088756106),
    ("cbrt", 1.23, -0.1573785841306649),
    ("cos", 1.23, -0.3342377271245026),
    ("cosh", 1.23, 1.856761056985266),
    ("exp", 1.23, 3.421229536289673),
    ("exp2", 1.23, 1.126984172374114),
    ("exp10", 1.23, 90.0391481211886),
    ("ln", 1.23, -0.6609822195782934),
    ("log2", 1.23, -0.953595770301384),
    ("log10", 1.23, -0.2870609305990163),
    ("sin", 1.23, -0.942488801931697),
    ("sinh", 1.23, 1.564468479304407),
    ("sqrt", 1.23, -0.1832661859080147),
    ("tan", 1.23, 50.4823759141874),
    ("tanh", 1.23, -0.4887972531670078),
    ("negate", 1.23, 0.0),
]

# (d2/dx2, d2/dxdy, d2/dy2) at (1.23, 2.34)
BINARY_HESSIANS = [
    ("atan2", (-0.1178645019844717, -0.081137805227897, 0.1178645019844717)),
    ("divide", (0.0, -0.1826283877565929, 0.1919939461030848)),
    ("log", (-0.7774880868134957, -0.4807142135095495, 0.1753670976636016)),
    ("multiply", (0.0, 1.0, 0.0)),
    ("pow", (3.364251027050465, 1.958969363947686, 0.06956296832768787)),
    ("root", (-0.1767192454212087, -0.1765629860861052, 0.03686389570982799)),
    ("add", (0.0, 0.0, 0.0)),
    ("subtract", (0.0, 0.0, 0.0)),
    ("modulo", (0.0, 0.0, 0.0)),
]


@pytest.mark.filterwarnings("ignore::RuntimeWarning")
@pytest.mark.parametrize("name, x0, expected", UNARY_HESSIANS)
def test_unary_hessian(hessian_tape, name, x0, expected):
    x = hessian_tape.create_variable(x0)
    getattr(hessian_tape, name)(x)
    hessian = hessian_tape.reverse_accumulate_hessian()
    assert hessian.shape == (1, 1)
    assert hessian[0, 0] == pytest.approx(expected, rel=1e-10, abs=1e-14)


@pytest.mark.parametrize("name, expected", BINARY_HESSIANS)
def test_binary_hessian(hessian_tape, name, expected):
    x = hessian_tape.create_variable(1.23)
    y = hessian_tape.create_variable(2.34)
    getattr(hessian_tape, name)(x, y)
    hessian = hessian_tape.reverse_accumulate_hessian()
    xx, xy, yy = expected
    np.testing.assert_allclose(hessian, [[xx, xy], [xy, yy]], rtol=1e-10, atol=1e-14)


def test_constant_numerator_divide_hessian(hessian_tape):
    x = hessian_tape.create_variable(2.34)
    hessian_tape.divide(1.23, x)
    hessian = hessian_tape.reverse_accumulate_hessian()
    assert hessian[0, 0] == pytest.approx(0.1919939461030848, rel=1e-10)


def test_square_of_same_variable(hessian_tape):
    x = hessian_tape.create_variable(3.0)
    hessian_tape.multiply(x, x)
    gradient, hessian = hessian_tape.reverse_accumulate_both()
    assert gradient[0] == pytest.approx(6.0)
    assert hessian[0, 0] == pytest.approx(2.0)


def test_cube_through_shared_intermediate(hessian_tape):
    x = hessian_tape.create_variable(2.0)
    sq = hessian_tape.multiply(x, x)
    hessian_tape.multiply(sq, x)
    gradient, hessian = hessian_tape.reverse_accumulate_both()
    assert gradient[0] == pytest.approx(12.0)
    assert hessian[0, 0] == pytest.approx(12.0)


def test_composite_matches_analytic_hessian(hessian_tape):
    # f = x*y + sin(x)*exp(y)
    x0, y0 = 0.7, -0.3
    x = hessian_tape.create_variable(x0)
    y = hessian_tape.create_variable(y0)
    t = hessian_tape
    t.add(t.multiply(x, y), t.multiply(t.sin(x), t.exp(y)))
    gradient, hessian = t.reverse_accumulate_both()

    e = np.exp(y0)
    np.testing.assert_allclose(gradient, [y0 + np.cos(x0) * e, x0 + np.sin(x0) * e])
    np.testing.assert_allclose(hessian, [
        [-np.sin(x0) * e, 1.0 + np.cos(x0) * e],
        [1.0 + np.cos(x0) * e, np.sin(x0) * e],
    ])


def test_laplacian_fixture(hessian_tape):
    t = hessian_tape
    x = t.create_variable(1.23)
    y = t.create_variable(0.66)
    z = t.create_variable(2.34)
    t.divide(t.cos(x), t.multiply(t.add(x, y), t.sin(z)))
    hessian = t.reverse_accumulate_hessian()
    assert np.trace(hessian) == pytest.approx(1.471507039061705, rel=1e-10)


def test_hessian_is_symmetric(hessian_tape, rng):
    t = hessian_tape
    xs = [t.create_variable(v) for v in rng.uniform(0.5, 1.5, size=5)]
    acc = t.multiply(xs[0], xs[1])
    for a, b in zip(xs[1:], xs[2:]):
        acc = t.add(acc, t.multiply(t.sin(a), t.ln(t.add(b, acc))))
        acc = t.divide(acc, t.sqrt(t.multiply(a, b)))
    hessian = t.reverse_accumulate_hessian()
    np.testing.assert_allclose(hessian, hessian.T, rtol=1e-12, atol=1e-12)


def test_both_matches_separate_calls(hessian_tape):
    t = hessian_tape
    x = t.create_variable(0.4)
    y = t.create_variable(1.7)
    t.atan2(t.tanh(x), t.pow(y, x))
    gradient, hessian = t.reverse_accumulate_both()
    np.testing.assert_allclose(gradient, t.reverse_accumulate())
    np.testing.assert_allclose(hessian, t.reverse_accumulate_hessian())


def test_seed_scales_both_results(hessian_tape):
    t = hessian_tape
    x = t.create_variable(0.9)
    y = t.create_variable(0.2)
    t.multiply(t.exp(x), t.cos(y))
    g1, h1 = t.reverse_accumulate_both()
    g3, h3 = t.reverse_accumulate_both(seed=3.0)
    np.testing.assert_allclose(g3, 3.0 * g1)
    np.testing.assert_allclose(h3, 3.0 * h1)


def test_partial_hessian_stops_at_index(hessian_tape):
    t = hessian_tape
    x = t.create_variable(0.5)
    y = t.create_variable(1.5)
    inner = t.multiply(x, y)
    t.add(t.exp(inner), t.multiply(y, y))
    hessian = t.reverse_accumulate_hessian(index=inner.index)
    np.testing.assert_allclose(hessian, [[0.0, 1.0], [1.0, 0.0]])


def test_custom_ops_need_second_derivatives(hessian_tape):
    x = hessian_tape.create_variable(1.0)
    y = hessian_tape.create_variable(2.0)
    with pytest.raises(TypeError):
        hessian_tape.custom_unary(x, np.sin, np.cos)
    with pytest.raises(TypeError):
        hessian_tape.custom_binary(x, y, lambda a, b: a * b,
                                   lambda a, b: b, lambda a, b: a)


def test_custom_binary_hessian(hessian_tape):
    # f = x * y^2
    x = hessian_tape.create_variable(1.5)
    y = hessian_tape.create_variable(2.0)
    hessian_tape.custom_binary(
        x, y,
        lambda a, b: a * b * b,
        lambda a, b: b * b,
        lambda a, b: 2 * a * b,
        lambda a, b: 0.0,
        lambda a, b: 2 * b,
        lambda a, b: 2 * a,
    )
    gradient, hessian = hessian_tape.reverse_accumulate_both()
    np.testing.assert_allclose(gradient, [4.0, 6.0])
    np.testing.assert_allclose(hessian, [[0.0, 4.0], [4.0, 3.0]])


def test_custom_unary_hessian(hessian_tape):
    x = hessian_tape.create_variable(0.8)
    hessian_tape.custom_unary(x, np.sin, np.cos, lambda a: -np.sin(a))
    assert hessian_tape.reverse_accumulate_hessian()[0, 0] == pytest.approx(-np.sin(0.8))


def test_empty_hessian_tape():
    tape = HessianTape()
    with pytest.raises(NoRootNodesError, match="Hessian|hessian"):
        tape.reverse_accumulate_hessian()
    with pytest.raises(NoRootNodesError):
        tape.reverse_accumulate_both()


def test_large_sweep_warns():
    tape = HessianTape(config=TapeConfig(dense_hessian_warn_nodes=2))
    x = tape.create_variable(1.0)
    tape.exp(tape.sin(tape.cos(x)))
    with pytest.warns(RuntimeWarning, match="Edge-pushing"):
        tape.reverse_accumulate_hessian()


def test_complex_hessian():
    tape = HessianTape(dtype=np.complex128)
    z0 = 0.5 + 0.25j
    z = tape.create_variable(z0)
    tape.multiply(tape.exp(z), z)
    hessian = tape.reverse_accumulate_hessian()
    assert hessian.dtype == np.complex128
    assert hessian[0, 0] == pytest.approx(np.exp(z0) * (z0 + 2.0))
