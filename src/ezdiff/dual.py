"""
#################################
Dual numbers (:mod:`ezdiff.dual`)
#################################

.. currentmodule:: ezdiff.dual

This module provides dual numbers for forward-mode automatic differentiation.

.. autosummary::
    :toctree: generated/

    Dual
    DualScalar
    DualVector
    dual

"""

import functools
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Final, Self, final

import numpy as np
import numpy.typing as npt

from ezdiff.context import getcontext
from ezdiff.typing import SUPPORTED_DTYPES, Constant


def _resolve_dtype(dtype: npt.DTypeLike, value: Any) -> np.dtype:
    if dtype is None:
        match value:
            case np.floating() | np.ndarray() if value.dtype.kind == "f":
                dtype = value.dtype

            case _:
                dtype = getcontext().dtype

    result = np.dtype(dtype)

    if result not in SUPPORTED_DTYPES:
        raise TypeError(f"unsupported element type: {result}")

    return result


def _ieee[T, **P](fun: Callable[P, T]) -> Callable[P, T]:
    @functools.wraps(fun)
    def wrapper(*args, **kwargs):
        with getcontext().errstate():
            return fun(*args, **kwargs)

    return wrapper


class Dual[F: np.floating](ABC):
    r"""Abstract base class for dual numbers.

    A dual number carries a value :math:`f(x)` together with its derivative
    :math:`f'(x)`. Every operation returns a new dual number whose derivative is
    obtained from the operands by the chain rule.

    Warnings
    --------
    Users cannot define classes derived from this.

    Building a dual number from a plain value marks the value as an independent
    variable, so its derivative is seeded with 1. A value that must be held fixed has
    to enter the computation as a plain number through an arithmetic operator, such
    as ``x * 3.0`` or ``2.0 + x``; wrapping it in a dual number silently yields a wrong
    derivative.

    See Also
    --------
    DualScalar, DualVector

    Notes
    -----
    Floating-point exceptions are not errors. Division by zero or an argument outside
    the domain of a function produces infinity or NaN according to IEEE 754, unless
    the current :class:`~ezdiff.context.Context` says otherwise.
    """

    __slots__ = ("_x", "_dx")
    __IS_SEALED: Final = True
    __array_ufunc__ = None
    _x: Any
    _dx: Any

    @classmethod
    @abstractmethod
    def _new(cls, x: Any, dx: Any) -> Self:
        raise NotImplementedError

    @property
    def dtype(self) -> np.dtype:
        """Element type."""
        return self._x.dtype

    def _check(self, rhs: "Dual") -> bool:
        if type(rhs) is not type(self):
            return False

        if rhs.dtype != self.dtype:
            raise TypeError(f"element types differ: {self.dtype} and {rhs.dtype}")

        return True

    def _constant(self, value: object) -> Any:
        match value:
            case np.floating():
                if value.dtype != self.dtype:
                    raise TypeError(f"element types differ: {self.dtype} and {value.dtype}")

                return value

            case int() | float() | np.integer():
                return self.dtype.type(value)

            case _:
                return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(value={self._x!r}, derivative={self._dx!r})"

    def __str__(self) -> str:
        return f"{type(self).__name__}(value={self._x}, derivative={self._dx})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self) or other.dtype != self.dtype:  # type: ignore
            return NotImplemented

        return bool(
            np.array_equal(self._x, other._x) and np.array_equal(self._dx, other._dx)  # type: ignore
        )

    @_ieee
    def __add__(self, rhs: Self | Constant) -> Self:
        if isinstance(rhs, Dual):
            if not self._check(rhs):
                return NotImplemented

            return self._new(self._x + rhs._x, self._dx + rhs._dx)

        if (c := self._constant(rhs)) is None:
            return NotImplemented

        return self._new(self._x + c, self._dx)

    @_ieee
    def __sub__(self, rhs: Self | Constant) -> Self:
        if isinstance(rhs, Dual):
            if not self._check(rhs):
                return NotImplemented

            return self._new(self._x - rhs._x, self._dx - rhs._dx)

        if (c := self._constant(rhs)) is None:
            return NotImplemented

        return self._new(self._x - c, self._dx)

    @_ieee
    def __mul__(self, rhs: Self | Constant) -> Self:
        if isinstance(rhs, Dual):
            if not self._check(rhs):
                return NotImplemented

            dx = self._x * rhs._dx + rhs._x * self._dx
            return self._new(self._x * rhs._x, dx)

        if (c := self._constant(rhs)) is None:
            return NotImplemented

        return self._new(self._x * c, self._dx * c)

    @_ieee
    def __truediv__(self, rhs: Self | Constant) -> Self:
        if isinstance(rhs, Dual):
            if not self._check(rhs):
                return NotImplemented

            # NOTE: numerator is a sum, not the difference of the textbook quotient rule
            dx = (self._x * rhs._dx + rhs._x * self._dx) / (rhs._x * rhs._x)
            return self._new(self._x / rhs._x, dx)

        if (c := self._constant(rhs)) is None:
            return NotImplemented

        return self._new(self._x / c, self._dx / c)

    @_ieee
    def __pow__(self, rhs: Self | Constant) -> Self:
        if isinstance(rhs, Dual):
            if not self._check(rhs):
                return NotImplemented

            x = np.power(self._x, rhs._x)
            dx = (
                rhs._x * np.power(self._x, rhs._x - 1) * self._dx
                + np.log(self._x) * x * rhs._dx
            )
            return self._new(x, dx)

        if (c := self._constant(rhs)) is None:
            return NotImplemented

        dx = c * np.power(self._x, c - 1) * self._dx
        return self._new(np.power(self._x, c), dx)

    def __neg__(self) -> Self:
        return self._new(-self._x, -self._dx)

    def __pos__(self) -> Self:
        return self._new(+self._x, +self._dx)

    @_ieee
    def __radd__(self, lhs: Constant) -> Self:
        if (c := self._constant(lhs)) is None:
            return NotImplemented

        return self._new(c + self._x, self._dx)

    @_ieee
    def __rsub__(self, lhs: Constant) -> Self:
        if (c := self._constant(lhs)) is None:
            return NotImplemented

        return self._new(c - self._x, -self._dx)

    @_ieee
    def __rmul__(self, lhs: Constant) -> Self:
        if (c := self._constant(lhs)) is None:
            return NotImplemented

        return self._new(c * self._x, c * self._dx)

    @_ieee
    def __rtruediv__(self, lhs: Constant) -> Self:
        if (c := self._constant(lhs)) is None:
            return NotImplemented

        return self._new(c / self._x, c * self._dx / (self._x * self._x))

    @_ieee
    def __rpow__(self, lhs: Constant) -> Self:
        if (c := self._constant(lhs)) is None:
            return NotImplemented

        x = np.power(c, self._x)
        return self._new(x, np.log(c) * x * self._dx)

    def add(self, rhs: Self | Constant) -> Self:
        """Sum rule. Equivalent to ``self + rhs``."""
        return self + rhs

    def sub(self, rhs: Self | Constant) -> Self:
        """Difference rule. Equivalent to ``self - rhs``."""
        return self - rhs

    def mul(self, rhs: Self | Constant) -> Self:
        """Product rule. Equivalent to ``self * rhs``."""
        return self * rhs

    def div(self, rhs: Self | Constant) -> Self:
        """Quotient. Equivalent to ``self / rhs``.

        Warnings
        --------
        For two dual numbers `a` and `b`, the derivative is computed as
        ``(a.value*b.derivative + b.value*a.derivative) / b.value**2``, which differs
        in sign from the usual quotient rule.
        """
        return self / rhs

    def neg(self) -> Self:
        """Negation. Equivalent to ``-self``."""
        return -self

    def pow(self, rhs: Self | Constant) -> Self:
        """Power rule. Equivalent to ``self ** rhs``.

        Examples
        --------
        >>> x = DualScalar.from_value(3.0)
        >>> y = x.pow(2)
        >>> float(y.value()), float(y.derivative())
        (9.0, 6.0)
        """
        return self**rhs

    def sqrt(self) -> Self:
        """Square root, defined as ``self.pow(0.5)``."""
        return self.pow(0.5)

    @_ieee
    def exp(self) -> Self:
        return self._new(np.exp(self._x), np.exp(self._x) * self._dx)

    @_ieee
    def ln(self) -> Self:
        """Natural logarithm."""
        return self._new(np.log(self._x), self._dx / self._x)

    @_ieee
    def log(self, base: Constant) -> Self:
        """Logarithm to the given `base`.

        Raises
        ------
        TypeError
            If `base` is not a number of the same element type.
        """
        if (c := self._constant(base)) is None:
            raise TypeError("base must be a number")

        lnbase = np.log(c)
        return self._new(np.log(self._x) / lnbase, self._dx / (self._x * lnbase))

    @_ieee
    def sin(self) -> Self:
        return self._new(np.sin(self._x), np.cos(self._x) * self._dx)

    @_ieee
    def cos(self) -> Self:
        return self._new(np.cos(self._x), -np.sin(self._x) * self._dx)

    @_ieee
    def tan(self) -> Self:
        return self._new(np.tan(self._x), self._dx / np.cos(self._x) ** 2)

    @_ieee
    def asin(self) -> Self:
        dx = self._dx / np.sqrt(1 - self._x * self._x)
        return self._new(np.arcsin(self._x), dx)

    @_ieee
    def acos(self) -> Self:
        dx = -self._dx / np.sqrt(1 - self._x * self._x)
        return self._new(np.arccos(self._x), dx)

    @_ieee
    def atan(self) -> Self:
        return self._new(np.arctan(self._x), self._dx / (1 + self._x * self._x))

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        if cls.__IS_SEALED:
            raise RuntimeError("subclassing is forbidden")


Dual._Dual__IS_SEALED = False  # type: ignore


def _as_element(value: object, dtype: np.dtype) -> Any:
    match value:
        case np.floating() | np.integer() | int() | float():
            return dtype.type(value)

        case _:
            raise TypeError(f"expected a real number, got {type(value).__name__}")


@final
class DualScalar[F: np.floating](Dual[F]):
    """Dual number with a single derivative.

    Parameters
    ----------
    value : int | float | numpy.floating
        Function value.
    derivative : int | float | numpy.floating, optional
        Derivative. If omitted, it is seeded with 1 and `value` becomes the independent
        variable.
    dtype : DTypeLike, optional
        Element type, either ``float32`` or ``float64``. Defaults to the dtype of
        `value` if it is a numpy scalar, otherwise to the dtype of the current context.

    Examples
    --------
    >>> x = DualScalar(3.0)
    >>> y = x * x + 2
    >>> float(y.value()), float(y.derivative())
    (11.0, 6.0)
    """

    __slots__ = ()

    def __init__(
        self,
        value: Constant,
        derivative: Constant | None = None,
        *,
        dtype: npt.DTypeLike = None,
    ):
        dtype = _resolve_dtype(dtype, value)
        self._x = _as_element(value, dtype)
        self._dx = dtype.type(1) if derivative is None else _as_element(derivative, dtype)

    @classmethod
    def _new(cls, x: Any, dx: Any) -> Self:
        result = object.__new__(cls)
        result._x = x
        result._dx = dx
        return result

    @classmethod
    def from_value(cls, value: Constant, dtype: npt.DTypeLike = None) -> Self:
        """Return the independent variable taking `value`."""
        return cls(value, dtype=dtype)

    def value(self) -> F:
        return self._x

    def derivative(self) -> F:
        return self._dx


@final
class DualVector[F: np.floating](Dual[F]):
    """Dual number with a fixed number of derivatives.

    Each of the `width` slots holds a copy of the value and the partial derivative with
    respect to a distinct independent variable. Slots never interact, so every slot
    behaves exactly like a :class:`DualScalar` put through the same operations.

    Parameters
    ----------
    value : int | float | numpy.floating | ArrayLike
        Function value, either a number broadcast to all slots or a sequence of
        length `width`.
    derivative : int | float | numpy.floating | ArrayLike, optional
        Derivatives. If omitted, every slot is seeded with 1.
    width : int, optional
        Number of slots. Required if `value` is a number.
    dtype : DTypeLike, optional
        Element type, either ``float32`` or ``float64``.

    Raises
    ------
    ValueError
        If `width` is not positive or the shapes of `value` and `derivative` do not
        agree with it.

    Examples
    --------
    >>> x, y = DualVector.variables(2.0, 3.0)
    >>> z = x * y + x
    >>> z.derivative().tolist()
    [4.0, 2.0]
    """

    __slots__ = ()

    def __init__(
        self,
        value: Constant | npt.ArrayLike,
        derivative: Constant | npt.ArrayLike | None = None,
        *,
        width: int | None = None,
        dtype: npt.DTypeLike = None,
    ):
        if width is not None and (not isinstance(width, int | np.integer) or width < 1):
            raise ValueError(f"width must be a positive integer, got {width!r}")

        dtype = _resolve_dtype(dtype, value)
        x = np.array(value, dtype=dtype)

        if x.ndim == 0:
            if width is None:
                raise ValueError("width is required to broadcast a scalar value")

            x = np.full(width, x, dtype=dtype)

        if x.ndim != 1 or x.size == 0 or (width is not None and x.size != width):
            raise ValueError(f"value of shape {x.shape} does not fit width {width}")

        if derivative is None:
            dx = np.ones_like(x)
        else:
            dx = np.array(np.broadcast_to(np.asarray(derivative, dtype=dtype), x.shape))

        self._x, self._dx = _freeze(x), _freeze(dx)

    @classmethod
    def _new(cls, x: Any, dx: Any) -> Self:
        result = object.__new__(cls)
        result._x = _freeze(x)
        result._dx = _freeze(dx)
        return result

    @classmethod
    def from_value(cls, value: Constant, width: int, dtype: npt.DTypeLike = None) -> Self:
        """Return the independent variable taking `value` in all `width` slots."""
        if np.ndim(value) != 0:
            raise ValueError("value must be a number")

        return cls(value, width=width, dtype=dtype)

    @classmethod
    def variables(cls, *values: Constant, dtype: npt.DTypeLike = None) -> tuple[Self, ...]:
        """Return independent variables for a gradient.

        The `i`-th result has width ``len(values)``, takes ``values[i]``, and is seeded
        with 1 in slot `i` and 0 elsewhere.
        """
        if len(values) == 0:
            raise ValueError("at least one value is required")

        dtype = _resolve_dtype(dtype, values[0])
        seeds = np.eye(len(values), dtype=dtype)
        return tuple(
            cls(value, seeds[i], width=len(values), dtype=dtype)
            for i, value in enumerate(values)
        )

    @property
    def width(self) -> int:
        """Number of slots."""
        return self._x.shape[0]

    def _check(self, rhs: Dual) -> bool:
        if not super()._check(rhs):
            return False

        if rhs.width != self.width:  # type: ignore
            raise TypeError(f"widths differ: {self.width} and {rhs.width}")  # type: ignore

        return True

    def value(self) -> npt.NDArray[F]:
        return self._x.copy()

    def derivative(self) -> npt.NDArray[F]:
        return self._dx.copy()


Dual._Dual__IS_SEALED = True  # type: ignore


def _freeze(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


def dual(
    value: Constant, width: int | None = None, dtype: npt.DTypeLike = None
) -> DualScalar | DualVector:
    """Wrap `value` as an independent variable.

    Returns a :class:`DualScalar` if `width` is omitted and a :class:`DualVector` of
    the given width otherwise.

    Examples
    --------
    >>> x = dual(2.0)
    >>> y = x.sin() * x.cos()
    >>> print(f"{y.value():.6f} {y.derivative():.6f}")
    -0.378401 -0.653644
    """
    if width is None:
        return DualScalar.from_value(value, dtype)

    return DualVector.from_value(value, width, dtype)
