# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np
import pytest

pytest.importorskip("pandas")

from logfloat.benchmark_ops import run_benchmark  # noqa: E402


def test_benchmark_table():
    df = run_benchmark(sizes=[50, 2000], repeats=1)
    assert list(df.columns) == ["kernel", "size", "sec", "sec/float", "log(result)"]
    assert len(df) == 6

    long_chain = df[df["size"] == 2000].set_index("kernel")["log(result)"]
    # plain floats underflow, log-space values do not
    assert long_chain["float *"] == -np.inf
    assert np.isfinite(long_chain["Probability *"])
    assert np.isfinite(long_chain["LogDouble +"])
    assert long_chain["Probability *"] < -1000
