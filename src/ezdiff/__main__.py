"""Evaluate a few functions together with their derivatives.

Run with ``python -m ezdiff``.
"""

import logging

import numpy as np

from ezdiff.dual import DualScalar, dual
from ezdiff.logger import ezdiff_logger


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

    x = dual(5.0)
    y = (x**2).cos()
    ezdiff_logger.info("cos(x^2) at x = 5: %r", y)

    # f(x) = cos(x^2) + 3x
    def f(x: DualScalar) -> DualScalar:
        return (x**2).cos() + 3 * x

    ezdiff_logger.info("cos(x^2) + 3x at x = 2: %r", f(dual(2.0, dtype=np.float32)))

    # chain rule meets inf * 0 at x = 0, so the derivative is NaN
    def g(x: DualScalar) -> DualScalar:
        return (x**3).pow(1 / 3)

    ezdiff_logger.info("(x^3)^(1/3) at x = 0: %r", g(dual(0.0, dtype=np.float32)))


if __name__ == "__main__":
    main()
