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

"""Pick the cheaper histogram strategy for a given input shape.

A scan touches every event once; a search partition pays ``log n`` per
bucket. With ``threshold = floor(sqrt(n))`` the scan wins once the bucket count
exceeds the threshold. The threshold is a tuning knob and can be overridden per
call; both strategies return identical distributions.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Dict, Optional, Union

import numpy as np

from note_density.density.policy import DegeneratePolicy
from note_density.exceptions import InvalidArgumentError
from note_density.histogram.edges import validate_request
from note_density.histogram.scan import scan_histogram
from note_density.histogram.search_partition import search_partition_histogram
from note_density.timeline.time_index import TimeIndex

logger = logging.getLogger(__name__)

__all__ = [
    "STRATEGIES",
    "default_threshold",
    "histogram",
    "select_strategy",
]

SCAN = "scan"
SEARCH_PARTITION = "search_partition"

STRATEGIES: Dict[str, Callable[..., np.ndarray]] = {
    SCAN: scan_histogram,
    SEARCH_PARTITION: search_partition_histogram,
}


def default_threshold(event_count: int) -> int:
    return math.isqrt(max(0, int(event_count)))


def _validate_threshold(threshold) -> int:
    if isinstance(threshold, (bool, np.bool_)) or not isinstance(threshold, (int, np.integer)):
        raise InvalidArgumentError(
            f"selector threshold must be an integer, got {type(threshold).__name__}"
        )
    if threshold < 0:
        raise InvalidArgumentError(f"selector threshold must be non-negative, got {threshold}")
    return int(threshold)


def select_strategy(
    event_count: int,
    bucket_count: int,
    threshold: Optional[int] = None,
) -> str:
    """Return ``"scan"`` or ``"search_partition"`` for the given shape."""
    cutoff = default_threshold(event_count) if threshold is None else _validate_threshold(threshold)
    strategy = SCAN if bucket_count > cutoff else SEARCH_PARTITION
    logger.debug(
        "selected histogram strategy",
        extra={
            "strategy": strategy,
            "event_count": event_count,
            "bucket_count": bucket_count,
            "threshold": cutoff,
        },
    )
    return strategy


def histogram(
    index: TimeIndex,
    bucket_count: int,
    *,
    threshold: Optional[int] = None,
    policy: Optional[Union[DegeneratePolicy, str]] = None,
) -> np.ndarray:
    """Density distribution over ``bucket_count`` equal-width buckets."""
    bucket_count = validate_request(index, bucket_count)
    strategy = select_strategy(len(index), bucket_count, threshold)
    return STRATEGIES[strategy](index, bucket_count, policy=policy)
