# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
logfloat
========

Probabilities and other non-negative numbers stored as natural
logarithms, so that long products of small values do not underflow.

Public API
~~~~~~~~~~
- Types
    - `LogFloat`, `LogDouble`, `LogLongDouble` (unconstrained)
    - `Probability`, `ProbabilityFloat`, `ProbabilityDouble`,
      `ProbabilityLongDouble` (values in [0, 1])
- Type factories
    - `log_floating_point`, `make_probability`
- Range checkers
    - `Checker`, `EmptyChecker`, `ProbabilityChecker`
- Errors
    - `InvariantViolation`, `DomainError`, `RangeError`,
      `UndefinedOperationError`
- Precision helpers
    - `machine_epsilon`, `mantissa_digits`, `tolerance_limit`

Example
-------
>>> from logfloat import Probability
>>> half, quarter = Probability(0.5), Probability(0.25)
>>> round(float(half * quarter), 12)
0.125
>>> half - quarter > quarter - quarter
True
"""

from importlib.metadata import version as _pkg_version

from .aliases import (
    LogDouble,
    LogFloat,
    LogLongDouble,
    Probability,
    ProbabilityDouble,
    ProbabilityFloat,
    ProbabilityLongDouble,
)
from .checkers import Checker, EmptyChecker, ProbabilityChecker
from .errors import (
    DomainError,
    InvariantViolation,
    RangeError,
    UndefinedOperationError,
)
from .log_floating_point import (
    ConvertibleToLogFloat,
    LogFloatingPoint,
    log_floating_point,
    make_probability,
)
from .utils import machine_epsilon, mantissa_digits, tolerance_limit

__all__ = [
    "LogFloatingPoint",
    "ConvertibleToLogFloat",
    "log_floating_point",
    "make_probability",
    "LogFloat",
    "LogDouble",
    "LogLongDouble",
    "Probability",
    "ProbabilityFloat",
    "ProbabilityDouble",
    "ProbabilityLongDouble",
    "Checker",
    "EmptyChecker",
    "ProbabilityChecker",
    "InvariantViolation",
    "DomainError",
    "RangeError",
    "UndefinedOperationError",
    "machine_epsilon",
    "mantissa_digits",
    "tolerance_limit",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show logfloat”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Library logging stays silent unless the application configures it.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
