#!/usr/bin/python3
# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Timing of log-space arithmetic against plain floats.

Each kernel folds a chain of random probabilities. Plain float products
underflow to 0.0 once the chain is long enough; the log-space product
keeps a finite logarithm.
"""

import time
from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from .aliases import LogDouble, Probability

REPEATS = 5  # best of 5 runs
SIZES = [1_000, 10_000, 100_000]


def wall(f, *args, **kwargs):
    t0 = time.perf_counter()
    f(*args, **kwargs)
    return time.perf_counter() - t0


def float_product(values: Sequence[float]) -> float:
    acc = 1.0
    for v in values:
        acc *= v
    return acc


def log_product(values: Sequence, one):
    acc = one
    for v in values:
        acc *= v
    return acc


def log_sum(values: Sequence, zero):
    acc = zero
    for v in values:
        acc += v
    return acc


def run_benchmark(
    sizes: Iterable[int] = SIZES, repeats: int = REPEATS, seed=0
) -> pd.DataFrame:
    """
    Returns
    -------
    DataFrame with one row per (kernel, size): best wall time, time
    relative to the float kernel and the log of the result.
    """
    rng = np.random.default_rng(seed)
    records = []
    for n in sizes:
        raw = rng.uniform(0.01, 1.0, size=n).tolist()
        probs = [Probability(v) for v in raw]
        weights = [LogDouble(v) for v in raw]

        t_float = min(wall(float_product, raw) for _ in range(repeats))
        prod = float_product(raw)
        records.append(
            ("float *", n, t_float, 1.0, float(np.log(prod)) if prod > 0 else -np.inf)
        )

        t_prod = min(wall(log_product, probs, Probability(1.0)) for _ in range(repeats))
        records.append(
            ("Probability *", n, t_prod, t_prod / t_float,
             float(log_product(probs, Probability(1.0)).data))
        )

        t_sum = min(wall(log_sum, weights, LogDouble()) for _ in range(repeats))
        records.append(
            ("LogDouble +", n, t_sum, t_sum / t_float,
             float(log_sum(weights, LogDouble()).data))
        )

    return pd.DataFrame(
        records, columns=["kernel", "size", "sec", "sec/float", "log(result)"]
    )


if __name__ == "__main__":
    df = run_benchmark()
    print(df.to_string(index=False))
    df.to_csv("bench_results.csv", index=False)
