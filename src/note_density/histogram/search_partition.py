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

"""Bucketing by binary search of each bucket boundary."""

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

__all__ = ["search_partition_histogram"]


def search_partition_histogram(
    index: TimeIndex,
    bucket_count: int,
    *,
    policy: Optional[Union[DegeneratePolicy, str]] = None,
) -> np.ndarray:
    """NPS per bucket from ``bucket_count - 1`` lower-bound searches.

    Cost is O(B log n), independent of how many events fall in each bucket.
    """
    bucket_count = validate_request(index, bucket_count)
    duration = index.duration
    if duration <= 0:
        return degenerate_distribution(len(index), bucket_count, policy)

    edges = bucket_edges(index.first, index.last, bucket_count)

    cuts = np.empty(bucket_count + 1, dtype=np.int64)
    cuts[0] = 0
    cuts[1:bucket_count] = index.lower_bounds(edges[1:bucket_count])
    # closed final bucket: everything up to and including the last timestamp
    cuts[bucket_count] = index.upper_bound(index.last)

    counts = np.diff(cuts)
    return counts_to_nps(counts, duration / bucket_count)
