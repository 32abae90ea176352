"""
#############################
Typing (:mod:`ezdiff.typing`)
#############################

This module provides type definitions commonly used between modules.

.. autodata:: ElementType

.. autodata:: Constant

.. autodata:: FloatingPolicy

"""

from typing import Literal

import numpy as np

type ElementType = type[np.float32] | type[np.float64]
"""Floating-point element types supported by dual numbers."""

type Constant = int | float | np.floating
"""Plain numbers that may interact with dual numbers as constants."""

type FloatingPolicy = Literal["ignore", "warn", "raise"]
"""Treatment of floating-point exceptions (see :func:`numpy.errstate`)."""

SUPPORTED_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))
