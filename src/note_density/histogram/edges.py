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

"""Bucket geometry shared by every histogram strategy.

Bucket ``i`` covers ``[edges[i], edges[i + 1])`` and the final bucket is
closed, its upper edge pinned to the last timestamp. An event sitting exactly
on a seam therefore belongs to the bucket that starts there, and the last
event of the map is always counted.
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

from note_density.density.policy import DegeneratePolicy, degenerate_value
from note_density.density.range_density import to_seconds
from note_density.exceptions import EmptyInputError, InvalidArgumentError
from note_density.timeline.time_index import TimeIndex

__all__ = [
    "bucket_edges",
    "counts_to_nps",
    "degenerate_distribution",
    "validate_request",
]


def validate_request(index: TimeIndex, bucket_count: int) -> int:
    """Check histogram preconditions and return the bucket count as ``int``."""
    if isinstance(bucket_count, (bool, np.bool_)) or not isinstance(bucket_count, (int, np.integer)):
        raise InvalidArgumentError(
            f"bucket_count must be an integer, got {type(bucket_count).__name__}"
        )
    if bucket_count <= 0:
        raise InvalidArgumentError(f"bucket_count must be positive, got {bucket_count}")
    if len(index) == 0:
        raise EmptyInputError("cannot build a distribution from an empty event sequence")
    return int(bucket_count)


def bucket_edges(first: float, last: float, bucket_count: int) -> np.ndarray:
    width = (last - first) / bucket_count
    edges = first + np.arange(bucket_count + 1, dtype=np.float64) * width
    edges[-1] = last
    return edges


def counts_to_nps(counts: np.ndarray, width_ms: float) -> np.ndarray:
    return counts.astype(np.float64) / to_seconds(width_ms)


def degenerate_distribution(
    event_count: int,
    bucket_count: int,
    policy: Optional[Union[DegeneratePolicy, str]] = None,
) -> np.ndarray:
    return np.full(bucket_count, degenerate_value(event_count, policy), dtype=np.float64)
