import math

import numpy as np
import pytest

from ezdiff import function as ezf
from ezdiff.context import localcontext
from ezdiff.dual import dual


def test_plain_numbers():
    assert pytest.approx(ezf.sin(1.0)) == math.sin(1.0)
    assert pytest.approx(ezf.exp(2)) == math.exp(2)
    assert pytest.approx(ezf.log(100, 10)) == 2.0
    assert pytest.approx(ezf.pow(3.25, 1.25)) == 3.25**1.25
    assert math.isnan(ezf.asin(2.0))
    assert math.isnan(ezf.sqrt(-1.0))
    assert ezf.ln(0.0) == -math.inf

    with localcontext(dtype=np.float32):
        assert ezf.exp(1).dtype == np.float32

    assert ezf.cos(np.float32(1.0)).dtype == np.float32


def test_dispatch():
    x = dual(0.4)
    assert ezf.sin(x) == x.sin()
    assert ezf.cos(x) == x.cos()
    assert ezf.tan(x) == x.tan()
    assert ezf.asin(x) == x.asin()
    assert ezf.acos(x) == x.acos()
    assert ezf.atan(x) == x.atan()
    assert ezf.exp(x) == x.exp()
    assert ezf.ln(x) == x.ln()
    assert ezf.log(x, 3) == x.log(3)
    assert ezf.sqrt(x) == x.sqrt()
    assert ezf.pow(x, 2.5) == x**2.5
    assert ezf.pow(x, x) == x**x
    assert ezf.pow(2.5, x) == 2.5**x
    assert ezf.constpow(2.5, x) == 2.5**x


def test_composition():
    # f(x) = cos(x^2) + 3x
    f = lambda x: ezf.cos(ezf.pow(x, 2)) + 3 * x
    y = f(dual(2.0, dtype=np.float32))
    assert pytest.approx(y.value(), rel=1e-6) == math.cos(4) + 6
    assert pytest.approx(y.derivative(), rel=1e-5) == -4 * math.sin(4) + 3


def test_invalid_arguments():
    with pytest.raises(TypeError):
        ezf.sin("1.0")

    with pytest.raises(TypeError):
        ezf.constpow(2, 3)

    with pytest.raises(TypeError):
        ezf.pow(dual(1.0), "2")
