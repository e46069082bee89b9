# Copyright 2025 Edward Clewer
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""
Time the histogram strategies against each other across bucket counts.

Usage:
    python -m note_density.scripts.benchmark_distribution \
        --events 5000 --buckets 5 10 20 50 100 200 500
"""

from __future__ import annotations

import argparse
import logging
import timeit
from typing import Callable, Dict, List

import numpy as np
import pandas as pd

from note_density.histogram.scan import scan_histogram
from note_density.histogram.search_partition import search_partition_histogram
from note_density.histogram.selector import histogram, select_strategy
from note_density.logging_utils import configure_logging, generate_run_id
from note_density.timeline.time_index import TimeIndex

logger = logging.getLogger(__name__)

CANDIDATES: Dict[str, Callable] = {
    "scan": scan_histogram,
    "search_partition": search_partition_histogram,
    "selector": histogram,
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Benchmark histogram strategies.")
    parser.add_argument(
        "--events",
        type=int,
        default=5000,
        help="Number of synthetic events to generate.",
    )
    parser.add_argument(
        "--buckets",
        type=int,
        nargs="+",
        default=[5, 10, 20, 50, 100, 200, 500],
        help="Bucket counts to time.",
    )
    parser.add_argument(
        "--repeat",
        type=int,
        default=200,
        help="Calls per measurement.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=7,
        help="Seed for the synthetic event gaps.",
    )
    return parser.parse_args(argv)


def synthetic_index(event_count: int, seed: int) -> TimeIndex:
    """Sorted timestamps with exponential gaps averaging ~60 ms."""
    rng = np.random.default_rng(seed)
    gaps = rng.exponential(60.0, size=event_count)
    return TimeIndex(np.round(np.cumsum(gaps)))


def run_benchmark(index: TimeIndex, bucket_counts: List[int], repeat: int) -> pd.DataFrame:
    rows = []
    for bucket_count in bucket_counts:
        for name, func in CANDIDATES.items():
            elapsed = timeit.timeit(lambda: func(index, bucket_count), number=repeat)
            rows.append(
                {
                    "bucket_count": bucket_count,
                    "candidate": name,
                    "usec_per_call": elapsed / repeat * 1e6,
                }
            )
    table = pd.DataFrame(rows).pivot(index="bucket_count", columns="candidate", values="usec_per_call")
    table["selected"] = [select_strategy(len(index), b) for b in table.index]
    return table


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging(run_id=generate_run_id(), level=logging.INFO)

    index = synthetic_index(args.events, args.seed)
    logger.info("benchmarking histogram strategies", extra={"events": len(index), "buckets": args.buckets})
    table = run_benchmark(index, args.buckets, args.repeat)
    print(table.to_string(float_format=lambda v: f"{v:10.2f}"))


if __name__ == "__main__":
    main()
