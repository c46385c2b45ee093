# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Floating point numbers stored by their natural logarithm.

A value ``v >= 0`` is kept as ``log(v)``, so long products of small
numbers (likelihoods, path probabilities) never underflow to zero:

    x * y  ->  lx + ly
    x / y  ->  lx - ly
    x + y  ->  max + log1p(exp(min - max))
    x - y  ->  lx + log1p(-exp(ly - lx))          (x >= y)

Zero is ``-inf``. Every concrete type binds a precision (``value_type``),
a tolerance (``ULP``) and a range checker; `log_floating_point` builds
and caches one class per combination.
"""

import logging
from typing import Dict, Optional, Protocol, Tuple, runtime_checkable

import numpy as np

from .checkers import Checker, EmptyChecker, ProbabilityChecker
from .errors import DomainError, RangeError, UndefinedOperationError
from .utils import (
    DEFAULT_ULP,
    DEFAULT_VALUE_TYPE,
    as_raw,
    as_value_type,
    cast,
    exp,
    is_raw_scalar,
    log,
    validate_ulp,
)

logger = logging.getLogger(__name__)

_TYPES: Dict[Tuple, type] = {}


@runtime_checkable
class ConvertibleToLogFloat(Protocol):
    """
    Anything that can hand out a `LogFloatingPoint`.

    Containers, proxies and records holding a log-space value implement
    ``__log_float__`` to take part in arithmetic and comparisons exactly
    like the value they hold.
    """

    def __log_float__(self) -> "LogFloatingPoint": ...


def _unwrap(obj) -> Optional["LogFloatingPoint"]:
    if isinstance(obj, LogFloatingPoint):
        return obj
    if isinstance(obj, ConvertibleToLogFloat):
        inner = obj.__log_float__()
        if not isinstance(inner, LogFloatingPoint):
            raise TypeError(
                f"{type(obj).__name__}.__log_float__ returned "
                f"{type(inner).__name__}, expected a LogFloatingPoint"
            )
        return inner
    return None


# ---------------------------------------------------------------------
# Log-space kernels. Operands share a precision; results are unchecked.
# ---------------------------------------------------------------------
def _log_add(lhs, rhs):
    if rhs == -np.inf:
        return lhs
    if lhs == -np.inf:
        return rhs
    if lhs >= rhs:
        return lhs + np.log1p(np.exp(rhs - lhs))
    return rhs + np.log1p(np.exp(lhs - rhs))


def _log_subtract(lhs, rhs):
    if rhs == -np.inf:
        return lhs
    if lhs == -np.inf:
        raise UndefinedOperationError("cannot subtract a positive value from zero")
    if lhs < rhs:
        raise UndefinedOperationError(
            f"cannot subtract a bigger value (log {rhs!r}) from a smaller one (log {lhs!r})"
        )
    # x - x lands on log1p(-1) = -inf
    with np.errstate(divide="ignore"):
        return lhs + np.log1p(-np.exp(rhs - lhs))


def _log_multiply(lhs, rhs):
    return lhs + rhs


def _log_divide(lhs, rhs):
    if rhs == -np.inf:
        raise UndefinedOperationError("division by zero")
    return lhs - rhs


class LogFloatingPoint:
    """
    Non-negative real number stored as its natural logarithm.

    Instances are immutable; every operator returns a new value, so
    ``p *= q`` rebinds ``p`` and never touches another reference.

    Parameters
    ----------
    value : real, LogFloatingPoint, ConvertibleToLogFloat or None
        Raw value (must be >= 0 and accepted by the checker), another
        log-space value to convert, or None for zero.

    Class attributes
    ----------------
    value_type : numpy floating type
        Precision of the stored log-value.
    ULP : int
        Tolerance in units in the last place.
    checker : Checker
        Range policy consulted after construction and every operation.
    """

    __slots__ = ("_value",)
    # numpy scalars and arrays defer to the reflected operators below
    __array_ufunc__ = None

    value_type = DEFAULT_VALUE_TYPE
    ULP: int = DEFAULT_ULP
    checker: Checker = EmptyChecker()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.value_type = as_value_type(cls.value_type)
        validate_ulp(cls.value_type, cls.ULP)
        if getattr(cls.checker, "ulp", cls.ULP) != cls.ULP:
            raise ValueError(
                f"{cls.__name__}: checker tolerance {cls.checker.ulp} does not match ULP={cls.ULP}"
            )
        _TYPES.setdefault((cls.value_type, cls.ULP, cls.checker), cls)

    def __init__(self, value=None):
        if value is None:
            self._value = self.value_type(-np.inf)
            return
        source = _unwrap(value)
        if source is not None:
            self._value = self._checked(self.value_type(source.data))
            return
        if not is_raw_scalar(value):
            raise TypeError(
                f"{type(self).__name__} cannot be built from {type(value).__name__}"
            )
        raw = cast(as_raw(value), self.value_type)
        if not raw >= 0:
            logger.debug(f"rejecting initial value {raw!r}: not non-negative")
            raise DomainError(
                f"{type(self).__name__} requires a non-negative value, got {raw!r}"
            )
        self.checker.check_initial_value(raw)
        self._value = log(raw, self.value_type)

    # -----------------------------------------------------------------
    # Construction helpers
    # -----------------------------------------------------------------
    @classmethod
    def from_log(cls, log_value):
        """Build a value straight from its logarithm, range checks included."""
        return cls._new(cls._checked(cls.value_type(log_value)))

    @classmethod
    def convert(cls, other):
        """Convert a log-space value of another precision or policy into ``cls``."""
        source = _unwrap(other)
        if source is None:
            raise TypeError(f"cannot convert {type(other).__name__} to {cls.__name__}")
        if type(source) is cls:
            return source
        return cls.from_log(source.data)

    @classmethod
    def _new(cls, log_value):
        obj = cls.__new__(cls)
        obj._value = log_value
        return obj

    @classmethod
    def _checked(cls, log_value):
        if np.isnan(log_value):
            raise UndefinedOperationError(f"{cls.__name__}: result is not a number")
        if log_value == np.inf:
            raise RangeError(f"{cls.__name__}: result is infinite")
        cls.checker.check_range(log_value)
        return log_value

    @classmethod
    def _coerce(cls, other):
        if type(other) is cls:
            return other
        source = _unwrap(other)
        if source is not None:
            return cls.convert(source)
        if is_raw_scalar(other):
            return cls(other)
        return NotImplemented

    def _comparable(self, other):
        """Log-value of ``other`` in this precision, without range checks."""
        source = _unwrap(other)
        if source is not None:
            return self.value_type(source.data)
        if is_raw_scalar(other):
            return log(as_raw(other), self.value_type)
        return NotImplemented

    # -----------------------------------------------------------------
    # Accessors and conversions
    # -----------------------------------------------------------------
    @property
    def data(self):
        """The stored log-value."""
        return self._value

    def to_raw(self):
        """``exp(log_value)`` in ``value_type``; never negative."""
        return exp(self._value)

    def __float__(self) -> float:
        return float(self.to_raw())

    def __bool__(self) -> bool:
        return bool(self._value != -np.inf)

    def __log_float__(self):
        return self

    # Equality reaches raw scalars and other precisions, which no hash of
    # the log-value can agree with.
    __hash__ = None

    def __reduce__(self):
        cls = type(self)
        key = (cls.value_type, cls.ULP, cls.checker)
        if _TYPES.get(key) is cls:
            return _rebuild, key + (self._value,)
        return _restore, (cls, self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_raw()})"

    def __str__(self) -> str:
        return str(self.to_raw())

    # -----------------------------------------------------------------
    # Arithmetic
    # -----------------------------------------------------------------
    def _binary(self, other, kernel):
        rhs = self._coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self._new(self._checked(kernel(self._value, rhs._value)))

    def _reflected(self, other, kernel):
        # A wrapped or foreign log-space left operand keeps its own type.
        lead = _unwrap(other)
        if lead is not None:
            return lead._binary(self, kernel)
        if not is_raw_scalar(other):
            return NotImplemented
        return type(self)(other)._binary(self, kernel)

    def __add__(self, other):
        return self._binary(other, _log_add)

    def __radd__(self, other):
        return self._reflected(other, _log_add)

    def __sub__(self, other):
        return self._binary(other, _log_subtract)

    def __rsub__(self, other):
        return self._reflected(other, _log_subtract)

    def __mul__(self, other):
        return self._binary(other, _log_multiply)

    def __rmul__(self, other):
        return self._reflected(other, _log_multiply)

    def __truediv__(self, other):
        return self._binary(other, _log_divide)

    def __rtruediv__(self, other):
        return self._reflected(other, _log_divide)

    # -----------------------------------------------------------------
    # Ordering: exact comparison of the stored logarithms
    # -----------------------------------------------------------------
    def __eq__(self, other):
        rhs = self._comparable(other)
        if rhs is NotImplemented:
            return NotImplemented
        return bool(self._value == rhs)

    def __ne__(self, other):
        rhs = self._comparable(other)
        if rhs is NotImplemented:
            return NotImplemented
        return bool(self._value != rhs)

    def __lt__(self, other):
        rhs = self._comparable(other)
        if rhs is NotImplemented:
            return NotImplemented
        return bool(self._value < rhs)

    def __le__(self, other):
        rhs = self._comparable(other)
        if rhs is NotImplemented:
            return NotImplemented
        return bool(self._value <= rhs)

    def __gt__(self, other):
        rhs = self._comparable(other)
        if rhs is NotImplemented:
            return NotImplemented
        return bool(self._value > rhs)

    def __ge__(self, other):
        rhs = self._comparable(other)
        if rhs is NotImplemented:
            return NotImplemented
        return bool(self._value >= rhs)


def _rebuild(value_type, ulp, checker, log_value):
    # factory-made classes are not importable by name
    return log_floating_point(value_type, ulp, checker)._new(log_value)


def _restore(cls, log_value):
    return cls._new(log_value)


def log_floating_point(
    value_type=DEFAULT_VALUE_TYPE,
    ulp: int = DEFAULT_ULP,
    checker: Optional[Checker] = None,
    name: Optional[str] = None,
) -> type:
    """
    Return the log floating point type for a precision, tolerance and checker.

    Types are cached: asking twice for the same combination gives back the
    same class, so values of "the same type" always share one class.

    Parameters
    ----------
    value_type : numpy floating type
        ``np.float32``, ``np.float64`` or ``np.longdouble``.
    ulp : int
        Tolerance in units in the last place, ``0 <= ulp <= mantissa digits``.
    checker : Checker | None
        Range policy; None means unconstrained.
    name : str | None
        Class name for a newly created type.
    """
    value_type = as_value_type(value_type)
    ulp = validate_ulp(value_type, ulp)
    if checker is None:
        checker = EmptyChecker()
    elif not isinstance(checker, Checker):
        raise TypeError(f"{type(checker).__name__} does not implement the Checker protocol")
    key = (value_type, ulp, checker)
    if key in _TYPES:
        return _TYPES[key]

    if name is None:
        name = f"LogFloatingPoint_{np.dtype(value_type).name}_ulp{ulp}_{type(checker).__name__}"
    cls = type(
        name,
        (LogFloatingPoint,),
        {"__slots__": (), "value_type": value_type, "ULP": ulp, "checker": checker},
    )
    logger.debug(f"created log floating point type {name}")
    return cls


def make_probability(value_type=DEFAULT_VALUE_TYPE, ulp: int = DEFAULT_ULP) -> type:
    """Log floating point type restricted to probabilities, within ``eps * 2**ulp``."""
    value_type = as_value_type(value_type)
    return log_floating_point(value_type, ulp, ProbabilityChecker(value_type, ulp))
