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

from __future__ import annotations

import math
from typing import Optional, Union

import numpy as np

from note_density.density.policy import DegeneratePolicy
from note_density.exceptions import InvalidArgumentError
from note_density.histogram.selector import histogram
from note_density.timeline.time_index import TimeIndex

__all__ = ["frequency_to_bucket_count", "histogram_by_frequency"]


def frequency_to_bucket_count(frequency_hz: float) -> int:
    """Bucket count equivalent to ``frequency_hz``: ``1 / f`` rounded half away from zero.

    Frequencies that round to the same count are interchangeable.
    """
    if isinstance(frequency_hz, bool):
        raise InvalidArgumentError("frequency must be numeric, not bool")
    try:
        f = float(frequency_hz)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"frequency must be numeric, got {frequency_hz!r}") from exc
    if not math.isfinite(f) or f <= 0:
        raise InvalidArgumentError(f"frequency must be finite and positive, got {frequency_hz}")

    period = 1.0 / f
    if not math.isfinite(period):
        raise InvalidArgumentError(f"frequency {frequency_hz} Hz is too small to bucket")
    bucket_count = math.floor(period + 0.5)
    if bucket_count <= 0:
        raise InvalidArgumentError(f"frequency {frequency_hz} Hz rounds to zero buckets")
    return bucket_count


def histogram_by_frequency(
    index: TimeIndex,
    frequency_hz: float,
    *,
    threshold: Optional[int] = None,
    policy: Optional[Union[DegeneratePolicy, str]] = None,
) -> np.ndarray:
    bucket_count = frequency_to_bucket_count(frequency_hz)
    return histogram(index, bucket_count, threshold=threshold, policy=policy)
