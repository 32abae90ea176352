import logging

import numpy as np
import pytest

from ezdiff.__main__ import main
from ezdiff.context import Context, getcontext, localcontext, setcontext
from ezdiff.dual import dual


def test_context():
    ctx = Context()
    assert ctx.dtype == np.float64
    assert ctx.floating == "ignore"
    assert ctx.copy().dtype == ctx.dtype

    with pytest.raises(TypeError):
        Context(np.int64)

    with pytest.raises(ValueError):
        Context(floating="print")


def test_localcontext():
    assert getcontext().dtype == np.float64

    with localcontext(dtype=np.float32) as ctx:
        assert getcontext() is ctx
        assert dual(1.0).dtype == np.float32
        assert dual(np.float64(1.0)).dtype == np.float64

    assert dual(1.0).dtype == np.float64


def test_floating_policy():
    with localcontext(floating="raise"):
        with pytest.raises(FloatingPointError):
            dual(1.0) / 0

    with localcontext(floating="warn"):
        with pytest.warns(RuntimeWarning):
            dual(0.0).ln()

    y = dual(1.0) / 0
    assert y.value() == np.inf


def test_setcontext(caplog):
    previous = getcontext()

    try:
        with caplog.at_level(logging.DEBUG, logger="ezdiff"):
            setcontext(Context(np.float32))

        assert "context set" in caplog.text
        assert dual(2.0).dtype == np.float32
    finally:
        setcontext(previous)

    with pytest.raises(TypeError):
        setcontext(np.float32)


def test_demo(caplog):
    with caplog.at_level(logging.INFO, logger="ezdiff"):
        main()

    assert "cos(x^2) + 3x at x = 2" in caplog.text
    assert "nan" in caplog.text
