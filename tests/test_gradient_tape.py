"""
Per-primitive first derivatives against known values.
"""

import numpy as np
import pytest

from aad_tape import GradientTape, HessianTape, use_tape

UNARY_GRADIENTS = [
    ("acos", 0.123, -1.007651429146436),
    ("acosh", 1.23, 1.396315794095838),
    ("asin", 0.123, 1.007651429146436),
    ("asinh", 1.23, 0.6308300845448597),
    ("atan", 1.23, 0.3979465955668749),
    ("atanh", 1.23, -1.94969779684149),
    ("cbrt", 1.23, 0.2903634877210767),
    ("cos", 1.23, -0.942488801931697),
    ("cosh", 1.23, 1.564468479304407),
    ("exp", 1.23, 3.421229536289673),
    ("exp2", 1.23, 1.625894476644487),
    ("exp10", 1.23, 39.10350518430174),
    ("ln", 1.23, 0.813008130081301),
    ("log2", 1.23, 1.172922797470702),
    ("log10", 1.23, 0.35308494463679),
    ("sin", 1.23, 0.3342377271245026),
    ("sinh", 1.23, 1.856761056985266),
    ("sqrt", 1.23, 0.4508348173337161),
    ("tan", 1.23, 8.95136077522624),
    ("tanh", 1.23, 0.2900600799721436),
    ("negate", 1.23, -1.0),
]

BINARY_GRADIENTS = [
    ("atan2", (0.334835801674179, -0.1760034342133505)),
    ("divide", (0.4273504273504274, -0.2246329169406093)),
    ("log", (0.9563103467806, -0.1224030239537303)),
    ("modulo", (1.0, 0.0)),
    ("multiply", (2.34, 1.23)),
    ("pow", (3.088081166620949, 0.3360299854573856)),
    ("root", (0.3795771135606888, -0.04130373687338086)),
    ("subtract", (1.0, -1.0)),
    ("add", (1.0, 1.0)),
]


@pytest.mark.filterwarnings("ignore::RuntimeWarning")
@pytest.mark.parametrize("name, x0, expected", UNARY_GRADIENTS)
def test_unary_gradient(any_tape, name, x0, expected):
    x = any_tape.create_variable(x0)
    getattr(any_tape, name)(x)
    gradient = any_tape.reverse_accumulate()
    assert gradient.shape == (1,)
    assert gradient[0] == pytest.approx(expected, rel=1e-10)


@pytest.mark.parametrize("name, expected", BINARY_GRADIENTS)
def test_binary_gradient(any_tape, name, expected):
    x = any_tape.create_variable(1.23)
    y = any_tape.create_variable(2.34)
    getattr(any_tape, name)(x, y)
    gradient = any_tape.reverse_accumulate()
    np.testing.assert_allclose(gradient, expected, rtol=1e-10, atol=1e-14)


def test_constant_numerator_divide(gradient_tape):
    x = gradient_tape.create_variable(2.34)
    gradient_tape.divide(1.23, x)
    assert gradient_tape.reverse_accumulate()[0] == pytest.approx(-0.2246329169406093, rel=1e-10)


def test_constant_denominator_divide(gradient_tape):
    x = gradient_tape.create_variable(1.23)
    gradient_tape.divide(x, 2.34)
    assert gradient_tape.reverse_accumulate()[0] == pytest.approx(0.4273504273504274, rel=1e-10)


def test_modulo_with_constants(gradient_tape):
    x = gradient_tape.create_variable(1.23)
    y = gradient_tape.create_variable(2.34)
    gradient_tape.modulo(1.23, y)
    gradient_tape.modulo(x, 2.34)
    # seed each node in turn
    assert gradient_tape.reverse_accumulate(index=2)[1] == 0.0
    assert gradient_tape.reverse_accumulate(index=3)[0] == 1.0


def test_modulo_uses_truncated_remainder(gradient_tape):
    x = gradient_tape.create_variable(-7.0)
    y = gradient_tape.create_variable(-3.0)
    # sign follows the dividend
    assert gradient_tape.modulo(x, 3.0).value == pytest.approx(-1.0)
    assert gradient_tape.modulo(7.0, y).value == pytest.approx(1.0)
    with use_tape(gradient_tape):
        assert (x % 3.0).value == pytest.approx(-1.0)


def test_modulo_divisor_partial_convention(gradient_tape):
    x = gradient_tape.create_variable(7.5)
    y = gradient_tape.create_variable(2.0)
    gradient_tape.modulo(x, y)
    dx, dy = gradient_tape.reverse_accumulate()
    assert dx == 1.0
    assert dy == pytest.approx(7.5 * np.floor(7.5 / 2.0))


def test_integer_power_with_constant_exponent(gradient_tape):
    x = gradient_tape.create_variable(-2.0)
    y = gradient_tape.pow(x, 3)
    assert y.value == pytest.approx(-8.0)
    assert gradient_tape.reverse_accumulate()[0] == pytest.approx(12.0)


def test_constant_base_power(gradient_tape):
    x = gradient_tape.create_variable(1.5)
    gradient_tape.pow(2.0, x)
    assert gradient_tape.reverse_accumulate()[0] == pytest.approx(np.log(2.0) * 2.0 ** 1.5)


def test_two_constants_rejected(gradient_tape):
    gradient_tape.create_variable(1.0)
    with pytest.raises(TypeError):
        gradient_tape.add(1.0, 2.0)


def test_unary_on_constant_rejected(gradient_tape):
    gradient_tape.create_variable(1.0)
    with pytest.raises(TypeError):
        gradient_tape.sin(1.0)


def test_same_operand_twice(gradient_tape):
    x = gradient_tape.create_variable(3.0)
    gradient_tape.multiply(x, x)
    assert gradient_tape.reverse_accumulate()[0] == pytest.approx(6.0)


def test_special_functions(gradient_tape):
    x = gradient_tape.create_variable(0.3)
    y = gradient_tape.create_variable(-0.4)
    gradient_tape.add(gradient_tape.erf(x), gradient_tape.norm_cdf(y))
    dx, dy = gradient_tape.reverse_accumulate()
    assert dx == pytest.approx(2.0 / np.sqrt(np.pi) * np.exp(-0.09))
    assert dy == pytest.approx(np.exp(-0.08) / np.sqrt(2.0 * np.pi))


def test_custom_unary(gradient_tape):
    x = gradient_tape.create_variable(0.7)
    y = gradient_tape.custom_unary(x, lambda a: a ** 3, lambda a: 3 * a ** 2)
    assert y.value == pytest.approx(0.343)
    assert gradient_tape.reverse_accumulate()[0] == pytest.approx(3 * 0.49)


def test_custom_binary(gradient_tape):
    x = gradient_tape.create_variable(1.5)
    y = gradient_tape.create_variable(2.0)
    gradient_tape.custom_binary(
        x, y,
        lambda a, b: a * b * b,
        lambda a, b: b * b,
        lambda a, b: 2 * a * b,
    )
    np.testing.assert_allclose(gradient_tape.reverse_accumulate(), [4.0, 6.0])


def test_custom_binary_with_constant_operand(gradient_tape):
    y = gradient_tape.create_variable(2.0)
    gradient_tape.custom_binary(
        1.5, y,
        lambda a, b: a * b * b,
        lambda a, b: b * b,
        lambda a, b: 2 * a * b,
    )
    np.testing.assert_allclose(gradient_tape.reverse_accumulate(), [6.0])


def test_complex_tape():
    tape = GradientTape(dtype=np.complex128)
    x = tape.create_variable(1.0 + 2.0j)
    tape.add(tape.multiply(x, x), tape.sin(x))
    gradient = tape.reverse_accumulate()
    assert gradient.dtype == np.complex128
    assert gradient[0] == pytest.approx(2.0 * (1.0 + 2.0j) + np.cos(1.0 + 2.0j))


@pytest.mark.parametrize("name", ["modulo", "atan2"])
def test_real_only_primitives_reject_complex(name):
    tape = HessianTape(dtype=np.complex128)
    x = tape.create_variable(1.0 + 1.0j)
    y = tape.create_variable(2.0)
    with pytest.raises(TypeError):
        getattr(tape, name)(x, y)


def test_create_variable_casts_to_tape_dtype(gradient_tape):
    x = gradient_tape.create_variable(3)
    assert isinstance(x.value, np.float64)
    assert x.index == 0
    assert gradient_tape.variable_count == 1
