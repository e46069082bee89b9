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

"""Single-pass bucketing of every event by its computed bucket index."""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

from note_density.density.policy import DegeneratePolicy
from note_density.histogram.edges import (
    bucket_edges,
    counts_to_nps,
    degenerate_distribution,
    validate_request,
)
from note_density.timeline.time_index import TimeIndex

__all__ = ["scan_histogram"]


def scan_histogram(
    index: TimeIndex,
    bucket_count: int,
    *,
    policy: Optional[Union[DegeneratePolicy, str]] = None,
) -> np.ndarray:
    """NPS per bucket computed in one O(n) pass over the events.

    Each event's bucket is estimated as ``floor((t - first) / width)``,
    clamped to the last bucket, then nudged by at most one bucket so that it
    agrees with the shared edge array. Rounding in ``1 / width`` can otherwise
    put a seam event on the wrong side of its edge.
    """
    bucket_count = validate_request(index, bucket_count)
    duration = index.duration
    if duration <= 0:
        return degenerate_distribution(len(index), bucket_count, policy)

    times = index.timestamps
    first = times[0]
    width = duration / bucket_count
    inv_width = 1.0 / width

    idx = ((times - first) * inv_width).astype(np.int64)
    np.clip(idx, 0, bucket_count - 1, out=idx)

    edges = bucket_edges(index.first, index.last, bucket_count)
    idx -= (times < edges[idx]).astype(np.int64)
    idx += ((idx < bucket_count - 1) & (times >= edges[idx + 1])).astype(np.int64)

    counts = np.bincount(idx, minlength=bucket_count)
    return counts_to_nps(counts, width)
