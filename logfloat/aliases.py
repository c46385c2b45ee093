# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Named log floating point types.

These are the canonical classes for their combination of precision,
tolerance and checker: `log_floating_point` and `make_probability`
return them instead of building new ones.
"""

import numpy as np

from .checkers import ProbabilityChecker
from .log_floating_point import LogFloatingPoint

# ---------------------------------------------------------------------
# Unconstrained: any non-negative value
# ---------------------------------------------------------------------


class LogFloat(LogFloatingPoint):
    __slots__ = ()
    value_type = np.float32


class LogDouble(LogFloatingPoint):
    __slots__ = ()
    value_type = np.float64


class LogLongDouble(LogFloatingPoint):
    __slots__ = ()
    value_type = np.longdouble


# ---------------------------------------------------------------------
# Probabilities: values in [0, 1], exact up to machine epsilon
# ---------------------------------------------------------------------


class ProbabilityFloat(LogFloatingPoint):
    __slots__ = ()
    value_type = np.float32
    checker = ProbabilityChecker(np.float32)


class ProbabilityDouble(LogFloatingPoint):
    __slots__ = ()
    value_type = np.float64
    checker = ProbabilityChecker(np.float64)


class ProbabilityLongDouble(LogFloatingPoint):
    __slots__ = ()
    value_type = np.longdouble
    checker = ProbabilityChecker(np.longdouble)


Probability = ProbabilityDouble
