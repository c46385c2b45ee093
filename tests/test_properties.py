# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np
import pytest

from logfloat import LogDouble, Probability, RangeError

TEST_ITERATIONS = 500
logger = logging.getLogger(__name__)


def test_round_trip_on_unit_interval():
    rng = np.random.default_rng(0)
    values = np.concatenate([[0.0, 1.0, 1e-300], rng.uniform(0.0, 1.0, TEST_ITERATIONS)])
    back = np.array([float(Probability(v)) for v in values])
    np.testing.assert_allclose(back, values, rtol=1e-12, atol=0.0)


def test_identities():
    rng = np.random.default_rng(1)
    one, zero = Probability(1.0), Probability(0.0)
    for v in rng.uniform(0.0, 1.0, TEST_ITERATIONS):
        a = Probability(v)
        assert a * one == a
        assert a + zero == a
        assert a - zero == a
        assert a / one == a


def test_add_and_multiply_commute():
    rng = np.random.default_rng(2)
    for x, y in rng.uniform(0.0, 0.5, size=(TEST_ITERATIONS, 2)):
        a, b = Probability(x), Probability(y)
        assert a + b == b + a
        assert a * b == b * a
    for x, y in rng.uniform(0.0, 1e6, size=(TEST_ITERATIONS, 2)):
        a, b = LogDouble(x), LogDouble(y)
        assert a + b == b + a
        assert a * b == b * a


def test_add_matches_raw_sum():
    rng = np.random.default_rng(3)
    for x, y in rng.uniform(0.0, 0.5, size=(TEST_ITERATIONS, 2)):
        assert float(Probability(x) + Probability(y)) == pytest.approx(x + y, rel=1e-12)
        if x >= y:
            assert float(Probability(x) - Probability(y)) == pytest.approx(
                x - y, rel=1e-9, abs=1e-15
            )


def test_probability_sum_above_one_is_rejected():
    rng = np.random.default_rng(4)
    for x, y in rng.uniform(0.51, 1.0, size=(TEST_ITERATIONS, 2)):
        logger.debug(f"{x} + {y}")
        with pytest.raises(RangeError):
            Probability(x) + Probability(y)


def test_ordering_matches_raw_ordering():
    rng = np.random.default_rng(5)
    for x, y in rng.uniform(0.0, 1.0, size=(TEST_ITERATIONS, 2)):
        if x == y:
            continue
        lo, hi = min(x, y), max(x, y)
        assert Probability(lo) < Probability(hi)
        assert Probability(hi) > Probability(lo)
        assert Probability(0.0) < Probability(lo)


def test_long_products_do_not_underflow():
    n = 1000
    p = Probability(1.0)
    raw = 1.0
    for _ in range(n):
        p *= Probability(1e-5)
        raw *= 1e-5
    assert raw == 0.0
    assert p > Probability(0.0)
    assert np.isclose(p.data, n * np.log(1e-5), rtol=1e-10)
