# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numbers

import numpy as np

DEFAULT_VALUE_TYPE = np.float64
DEFAULT_ULP: int = 0


def as_value_type(value_type) -> type:
    """Return the numpy floating scalar type named by ``value_type``."""
    dtype = np.dtype(value_type)
    if dtype.kind != "f":
        raise ValueError(f"value_type must be a floating type, got {dtype}")
    return dtype.type


def machine_epsilon(value_type):
    """Distance from 1.0 to the next representable number of ``value_type``."""
    return np.finfo(as_value_type(value_type)).eps


def mantissa_digits(value_type) -> int:
    """Number of binary digits in the mantissa, implicit bit included."""
    return int(np.finfo(as_value_type(value_type)).nmant) + 1


def validate_ulp(value_type, ulp: int) -> int:
    """
    Check that ``ulp`` is a usable tolerance for ``value_type``.

    The tolerance band is ``eps * 2**ulp``; it cannot be wider than the
    mantissa, otherwise the band swallows every representable digit.
    """
    if isinstance(ulp, bool) or not isinstance(ulp, numbers.Integral):
        raise ValueError(f"ulp must be an integer, got {ulp!r}")
    digits = mantissa_digits(value_type)
    if not 0 <= ulp <= digits:
        raise ValueError(
            "Units in the last place cannot be bigger than the maximum "
            f"number of digits in the mantissa ({ulp} > {digits})"
        )
    return int(ulp)


def tolerance_limit(value_type, ulp: int = DEFAULT_ULP):
    """
    Largest log-value accepted for a probability of ``value_type``.

    Returns
    -------
    limit : value_type scalar
        ``eps * 2**ulp``, i.e. how far above ``log(1) = 0`` rounding drift
        may go before the value stops being a probability.
    """
    ulp = validate_ulp(value_type, ulp)
    return machine_epsilon(value_type) * (1 << ulp)


def is_raw_scalar(obj) -> bool:
    """True for plain numbers and anything that converts with ``float()``."""
    if isinstance(obj, (str, bytes)):
        return False
    return isinstance(obj, numbers.Real) or hasattr(type(obj), "__float__")


def as_raw(obj):
    """
    Normalise a raw scalar; numpy scalars keep their own precision.

    Integers and fractions too large for a float saturate to ``+-inf``.
    """
    if isinstance(obj, np.generic):
        return obj
    try:
        return float(obj)
    except OverflowError:
        return np.inf if obj > 0 else -np.inf


def cast(value, value_type):
    """``value`` in ``value_type``; out-of-range values become ``+-inf`` silently."""
    with np.errstate(over="ignore"):
        return value_type(value)


def log(value, value_type):
    """Natural logarithm in ``value_type``; ``log(0)`` is ``-inf`` without a warning."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.log(value_type(value))


def exp(log_value):
    with np.errstate(over="ignore"):
        return np.exp(log_value)
