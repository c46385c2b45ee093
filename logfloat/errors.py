# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exceptions raised when a log-space value would leave its domain.

Every failure is a broken contract on the caller's side (summing
probabilities past 1, subtracting out of order, ...), so all of them
derive from ``ValueError`` and none of them is clamped away.
"""


class InvariantViolation(ValueError):
    """Base class for every log-space contract failure."""


class DomainError(InvariantViolation):
    """A raw value cannot be represented (negative, NaN, or above the bound)."""


class RangeError(InvariantViolation):
    """The result of an operation lies above the bound of its type."""


class UndefinedOperationError(InvariantViolation):
    """
    The operation has no non-negative result: subtracting a larger value
    from a smaller one, subtracting from zero, or dividing by zero.
    """
