# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Range checkers
==============

A checker is injected into a log floating point type and consulted on
every construction and every arithmetic result. It either accepts the
value silently or raises; it never adjusts the value.

- `Checker`: the protocol both implement.
- `EmptyChecker`: accepts anything representable.
- `ProbabilityChecker`: raw values in [0, 1], log-values at or below
  ``eps * 2**ulp``.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from .errors import DomainError, RangeError
from .utils import DEFAULT_ULP, as_value_type, tolerance_limit

logger = logging.getLogger(__name__)


@runtime_checkable
class Checker(Protocol):
    """What a log floating point type asks of its range policy."""

    def check_initial_value(self, raw) -> None: ...

    def check_range(self, log_value) -> None: ...


@dataclass(frozen=True)
class EmptyChecker:
    """Accepts every non-negative value."""

    def check_initial_value(self, raw) -> None:
        pass

    def check_range(self, log_value) -> None:
        pass


@dataclass(frozen=True)
class ProbabilityChecker:
    """
    Requires values to be probabilities.

    Parameters
    ----------
    value_type : numpy floating type
        Precision of the log-values being checked.
    ulp : int
        Units in the last place. Repeated sums may drift slightly above
        ``log(1) = 0``; drift up to ``eps * 2**ulp`` is accepted.
    """

    value_type: Any
    ulp: int = DEFAULT_ULP
    limit: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "value_type", as_value_type(self.value_type))
        object.__setattr__(self, "limit", tolerance_limit(self.value_type, self.ulp))

    def check_initial_value(self, raw) -> None:
        if not raw <= 1.0:
            logger.debug(f"rejecting initial value {raw!r}: above 1.0")
            raise DomainError(f"a probability cannot be bigger than 1, got {raw!r}")

    def check_range(self, log_value) -> None:
        if not log_value <= self.limit:
            logger.debug(
                f"log-value {log_value!r} exceeds limit {self.limit!r} (ulp={self.ulp})"
            )
            raise RangeError(
                f"log-value {log_value!r} is not a probability "
                f"(limit {self.limit!r}, ulp={self.ulp})"
            )
