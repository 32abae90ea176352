"""
###############################################
Differential operators (:mod:`ezdiff.autodiff`)
###############################################

.. currentmodule:: ezdiff.autodiff

.. autosummary::
    :toctree: generated/

    deriv
    value_and_deriv
    grad
    jacobian

"""

from collections.abc import Callable, Sequence
from typing import Any

import numpy as np
import numpy.typing as npt

from ezdiff.dual import Dual, DualScalar, DualVector


def deriv(fun: Callable[..., Any], *, dtype: npt.DTypeLike = None) -> Callable[..., Any]:
    """Return a function that evaluates the derivative of the univariate scalar-valued
    function.

    Parameters
    ----------
    fun : Callable
        Differentiated function. It must be built from the operations of
        :class:`~ezdiff.dual.Dual` and :mod:`ezdiff.function`.
    dtype : DTypeLike, optional
        Element type used for the computation.

    Returns
    -------
    Callable
        Derivative of `fun`. Extra positional and keyword arguments are passed to
        `fun` unchanged and are treated as constants.

    Examples
    --------
    >>> from ezdiff import function as ezf
    >>> df = deriv(lambda x: x**2 + ezf.sqrt(x + 3))
    >>> print(f"{df(1.2):.6f}")
    2.643975
    """

    def result(x, *args, **kwargs):
        return value_and_deriv(fun, dtype=dtype)(x, *args, **kwargs)[1]

    return result


def value_and_deriv(
    fun: Callable[..., Any], *, dtype: npt.DTypeLike = None
) -> Callable[..., tuple[np.floating, np.floating]]:
    """Return a function that evaluates both the univariate scalar-valued function and
    its derivative.

    If `fun` does not depend on its argument and returns a plain number, the derivative
    is zero.

    Examples
    --------
    >>> from ezdiff import function as ezf
    >>> f = value_and_deriv(lambda x: ezf.cos(x**2) + 3 * x)
    >>> value, derivative = f(2.0)
    >>> print(f"{value:.6f} {derivative:.6f}")
    5.346356 6.027210
    """

    def result(x, *args, **kwargs):
        y = fun(DualScalar.from_value(x, dtype), *args, **kwargs)

        if isinstance(y, DualScalar):
            return y.value(), y.derivative()

        if isinstance(y, Dual):
            raise TypeError("fun must return a scalar")

        y = DualScalar(y, 0, dtype=dtype)
        return y.value(), y.derivative()

    return result


def grad(fun: Callable[..., Any], *, dtype: npt.DTypeLike = None) -> Callable[..., Any]:
    """Return a function that evaluates the gradient of the multivariate scalar-valued
    function.

    All the partial derivatives are obtained by a single evaluation of `fun` on
    :class:`~ezdiff.dual.DualVector`.

    Parameters
    ----------
    fun : Callable
        Differentiated function.
    dtype : DTypeLike, optional
        Element type used for the computation.

    Returns
    -------
    Callable
        Gradient of `fun` as a one-dimensional array.

    Examples
    --------
    >>> from ezdiff import function as ezf
    >>> df = grad(lambda x, y: ezf.sqrt(x * y + 3))
    >>> print(" ".join(f"{c:.6f}" for c in df(0.5, 1.0)))
    0.267261 0.133631
    """

    def result(*args):
        y = fun(*DualVector.variables(*args, dtype=dtype))
        return _partials(y, len(args), dtype)

    return result


def jacobian(
    fun: Callable[..., Sequence[Any]], *, dtype: npt.DTypeLike = None
) -> Callable[..., Any]:
    """Return a function that evaluates the Jacobian matrix of the multivariate
    vector-valued function.

    Parameters
    ----------
    fun : Callable
        Differentiated function returning a sequence.
    dtype : DTypeLike, optional
        Element type used for the computation.

    Returns
    -------
    Callable
        Jacobian matrix of `fun` as a two-dimensional array whose `i`-th row is the
        gradient of the `i`-th output.
    """

    def result(*args):
        y = fun(*DualVector.variables(*args, dtype=dtype))
        return np.stack([_partials(z, len(args), dtype) for z in y])

    return result


def _partials(y: Any, n: int, dtype: npt.DTypeLike) -> npt.NDArray[np.floating]:
    if isinstance(y, DualVector):
        return y.derivative()

    if isinstance(y, Dual):
        raise TypeError("fun must be evaluated on DualVector")

    return DualVector(y, 0, width=n, dtype=dtype).derivative()
