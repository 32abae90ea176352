from .autodiff import deriv, grad, jacobian, value_and_deriv
from .context import Context, getcontext, localcontext, setcontext
from .dual import Dual, DualScalar, DualVector, dual

__all__ = [
    "deriv",
    "grad",
    "jacobian",
    "value_and_deriv",
    "Context",
    "getcontext",
    "localcontext",
    "setcontext",
    "Dual",
    "DualScalar",
    "DualVector",
    "dual",
]
