import mpmath
import numpy as np
import pytest

from ezdiff import function as ezf
from ezdiff.autodiff import deriv, grad, jacobian, value_and_deriv
from ezdiff.dual import dual


def test_deriv():
    df = deriv(lambda x: ezf.sin(x**2) * ezf.exp(-x) + 3 * x)
    expected = mpmath.diff(lambda t: mpmath.sin(t**2) * mpmath.exp(-t) + 3 * t, 1.4)
    assert pytest.approx(df(1.4), rel=1e-10) == float(expected)

    df = deriv(lambda x, a: ezf.atan(a * x) + ezf.ln(x))
    assert pytest.approx(df(0.5, 2.0), rel=1e-12) == 2 / (1 + 1.0) + 1 / 0.5

    assert deriv(lambda x: 5.0)(1.0) == 0.0


def test_value_and_deriv():
    value, derivative = value_and_deriv(lambda x: ezf.cos(x**2) + 3 * x)(2.0)
    assert pytest.approx(value, rel=1e-12) == float(mpmath.cos(4) + 6)
    assert pytest.approx(derivative, rel=1e-12) == float(-4 * mpmath.sin(4) + 3)

    value, derivative = value_and_deriv(lambda x: x.sqrt(), dtype=np.float32)(4.0)
    assert value.dtype == np.float32
    assert (value, derivative) == (2.0, 0.25)


def test_grad():
    df = grad(ezf.pow)
    assert pytest.approx(df(4.5, -2.2), 1e-5) == (-0.0178707, 0.0549797)

    f = lambda x, y, z: ezf.exp(x * y) * ezf.sin(z) - ezf.sqrt(x + z)
    g = lambda x, y, z: mpmath.exp(x * y) * mpmath.sin(z) - mpmath.sqrt(x + z)
    point = (0.3, -1.2, 0.8)
    expected = [
        float(mpmath.diff(g, point, order)) for order in ((1, 0, 0), (0, 1, 0), (0, 0, 1))
    ]
    assert pytest.approx(grad(f)(*point), rel=1e-10) == expected

    df = grad(lambda x, y: 2.0 * x, dtype=np.float32)(1.0, 2.0)
    assert df.dtype == np.float32
    assert df.tolist() == [2.0, 0.0]

    assert grad(lambda x, y: 1.0)(1.0, 2.0).tolist() == [0.0, 0.0]


def test_jacobian():
    df = jacobian(lambda x, y: (ezf.sin(x * y), x**2 - ezf.cos(y)))
    matrix = df(2, 3)
    assert matrix.shape == (2, 2)
    assert pytest.approx(matrix[0], 1e-5) == (2.88051, 1.92034)
    assert pytest.approx(matrix[1], 1e-5) == (4.00000, 0.14112)


def test_representation_mismatch():
    with pytest.raises(TypeError):
        value_and_deriv(lambda x: dual(1.0, width=2))(1.0)

    with pytest.raises(TypeError):
        grad(lambda x: dual(1.0))(1.0)
