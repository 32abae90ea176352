"""
###############################################
Mathematical functions (:mod:`ezdiff.function`)
###############################################

.. currentmodule:: ezdiff.function

This module provides mathematical functions accepting both dual numbers and plain
numbers. Plain numbers are evaluated with numpy under the floating-point policy of the
current :class:`~ezdiff.context.Context`, so out-of-domain arguments give NaN instead
of raising.

Power, exponents, and logarithmic functions
===========================================

.. autosummary::
    :toctree: generated/

    constpow
    exp
    ln
    log
    pow
    sqrt

Trigonometric functions
=======================

.. autosummary::
    :toctree: generated/

    acos
    asin
    atan
    cos
    sin
    tan

"""

from collections.abc import Callable
from typing import Any, overload

import numpy as np

from ezdiff.context import getcontext
from ezdiff.dual import Dual


def _evaluate(fun: Callable[..., Any], *args: Any) -> Any:
    ctx = getcontext()
    converted: list[Any] = []

    for arg in args:
        match arg:
            case np.floating():
                converted.append(arg)

            case int() | float() | np.integer():
                converted.append(ctx.dtype.type(arg))

            case _:
                raise TypeError(f"unsupported operand: {type(arg).__name__}")

    with ctx.errstate():
        return fun(*converted)


@overload
def exp[T: Dual](x: T, /) -> T: ...


@overload
def exp(x: float | int | np.floating, /) -> np.floating: ...


def exp(x, /):
    """Exponential.

    Examples
    --------
    >>> from ezdiff import dual
    >>> print(f"{exp(2):.6f}")
    7.389056
    >>> y = exp(dual(1.0))
    >>> print(f"{y.value():.6f} {y.derivative():.6f}")
    2.718282 2.718282
    """
    if isinstance(x, Dual):
        return x.exp()

    return _evaluate(np.exp, x)


@overload
def ln[T: Dual](x: T, /) -> T: ...


@overload
def ln(x: float | int | np.floating, /) -> np.floating: ...


def ln(x, /):
    """Natural logarithm.

    Examples
    --------
    >>> print(f"{ln(5):.6f}")
    1.609438
    >>> print(ln(-1.0))
    nan
    """
    if isinstance(x, Dual):
        return x.ln()

    return _evaluate(np.log, x)


@overload
def log[T: Dual](x: T, base: float | int | np.floating, /) -> T: ...


@overload
def log(x: float | int | np.floating, base: float | int | np.floating, /) -> np.floating: ...


def log(x, base, /):
    """Logarithm of `x` to the given `base`.

    Examples
    --------
    >>> print(f"{log(100, 10):.6f}")
    2.000000
    """
    if isinstance(x, Dual):
        return x.log(base)

    return _evaluate(lambda x, base: np.log(x) / np.log(base), x, base)


@overload
def pow[T: Dual](x: T, y: T | float | int | np.floating, /) -> T: ...


@overload
def pow[T: Dual](x: float | int | np.floating, y: T, /) -> T: ...


@overload
def pow(x: float | int | np.floating, y: float | int | np.floating, /) -> np.floating: ...


def pow(x, y, /):
    """`x` raised to the power `y`.

    If `x` is a dual number, `y` may be a dual number or a constant exponent. If only
    `y` is a dual number, this is the same as :func:`constpow`.

    Examples
    --------
    >>> print(f"{pow(3.25, 1.25):.6f}")
    4.363693
    """
    if isinstance(x, Dual):
        return x.pow(y)

    if isinstance(y, Dual):
        return constpow(x, y)

    return _evaluate(np.power, x, y)


def constpow[T: Dual](base: float | int | np.floating, x: T, /) -> T:
    """Constant `base` raised to the dual exponent `x`.

    Examples
    --------
    >>> from ezdiff import dual
    >>> y = constpow(2, dual(3.0))
    >>> print(f"{y.value():.6f} {y.derivative():.6f}")
    8.000000 5.545177
    """
    if not isinstance(x, Dual):
        raise TypeError("exponent must be a dual number")

    return base**x


@overload
def sqrt[T: Dual](x: T, /) -> T: ...


@overload
def sqrt(x: float | int | np.floating, /) -> np.floating: ...


def sqrt(x, /):
    """Square root.

    Examples
    --------
    >>> print(f"{sqrt(2.0):.6f}")
    1.414214
    """
    if isinstance(x, Dual):
        return x.sqrt()

    return _evaluate(np.sqrt, x)


def sin(x, /):
    """Sine."""
    if isinstance(x, Dual):
        return x.sin()

    return _evaluate(np.sin, x)


def cos(x, /):
    """Cosine."""
    if isinstance(x, Dual):
        return x.cos()

    return _evaluate(np.cos, x)


def tan(x, /):
    """Tangent."""
    if isinstance(x, Dual):
        return x.tan()

    return _evaluate(np.tan, x)


def asin(x, /):
    """Inverse sine.

    Examples
    --------
    >>> print(asin(2.0))
    nan
    """
    if isinstance(x, Dual):
        return x.asin()

    return _evaluate(np.arcsin, x)


def acos(x, /):
    """Inverse cosine."""
    if isinstance(x, Dual):
        return x.acos()

    return _evaluate(np.arccos, x)


def atan(x, /):
    """Inverse tangent."""
    if isinstance(x, Dual):
        return x.atan()

    return _evaluate(np.arctan, x)
