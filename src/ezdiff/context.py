"""
###############################
Context (:mod:`ezdiff.context`)
###############################

.. currentmodule:: ezdiff.context

This module provides the configuration shared by dual-number operations.

.. autosummary::
    :toctree: generated/

    Context
    getcontext
    localcontext
    setcontext

"""

import contextlib
import contextvars
from typing import Self, get_args

import numpy as np
import numpy.typing as npt

from ezdiff.logger import ezdiff_logger
from ezdiff.typing import SUPPORTED_DTYPES, FloatingPolicy


class Context:
    """Create a new context.

    Parameters
    ----------
    dtype : DTypeLike, default=numpy.float64
        Element type given to dual numbers built from Python numbers, and to Python
        numbers passed to :mod:`ezdiff.function`.
    floating : Literal["ignore", "warn", "raise"], default="ignore"
        Treatment of floating-point exceptions such as division by zero or arguments
        outside the domain of a function. With ``"ignore"``, NaN and infinity
        propagate silently as IEEE 754 prescribes.

    Raises
    ------
    TypeError
        If `dtype` is neither ``float32`` nor ``float64``.
    ValueError
        If `floating` is not a valid policy.
    """

    __slots__ = ("_dtype", "_floating")
    _dtype: np.dtype
    _floating: FloatingPolicy

    def __init__(
        self, dtype: npt.DTypeLike = np.float64, floating: FloatingPolicy = "ignore"
    ):
        self._dtype = np.dtype(dtype)

        if self._dtype not in SUPPORTED_DTYPES:
            raise TypeError(f"unsupported element type: {self._dtype}")

        if floating not in get_args(FloatingPolicy.__value__):
            raise ValueError(f"invalid floating-point policy: {floating!r}")

        self._floating = floating

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def floating(self) -> FloatingPolicy:
        return self._floating

    def errstate(self) -> np.errstate:
        """Return :class:`numpy.errstate` implementing the floating-point policy."""
        return np.errstate(all=self._floating)

    def copy(self) -> Self:
        return self.__class__(self._dtype, self._floating)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dtype={self._dtype.name}, floating={self._floating!r})"

    def __copy__(self) -> Self:
        return self.copy()


_var: contextvars.ContextVar[Context] = contextvars.ContextVar("ezdiff")


def getcontext() -> Context:
    """Return the current context for the active thread."""
    if context := _var.get(None):
        return context

    context = Context()
    _var.set(context)
    return context


def setcontext(ctx: Context) -> None:
    """Set the current context for the active thread to `ctx`."""
    if not isinstance(ctx, Context):
        raise TypeError

    ezdiff_logger.debug("context set to %r", ctx)
    _var.set(ctx)


@contextlib.contextmanager
def localcontext(
    ctx: Context | None = None,
    *,
    dtype: npt.DTypeLike | None = None,
    floating: FloatingPolicy | None = None,
):
    """Return a context manager that will set the current context for the active thread
    to a copy of `ctx` on entry to the with-statement and restore the previous context
    when exiting the with-statement.

    Examples
    --------
    >>> import numpy as np
    >>> from ezdiff import dual
    >>> with localcontext(dtype=np.float32):
    ...     x = dual(2.0)
    >>> x.dtype
    dtype('float32')
    """
    if ctx is None:
        ctx = getcontext()

    if dtype is None:
        dtype = ctx._dtype

    if floating is None:
        floating = ctx._floating

    ctx = Context(dtype, floating)
    ezdiff_logger.debug("entering local context %r", ctx)
    token = _var.set(ctx)

    try:
        yield ctx
    finally:
        _var.reset(token)
