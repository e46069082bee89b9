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

"""Tabular and key/value views of a computed distribution."""

from __future__ import annotations

from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from note_density.exceptions import EmptyInputError, InvalidArgumentError
from note_density.histogram.edges import bucket_edges
from note_density.timeline.time_index import TimeIndex

__all__ = ["distribution_frame", "distribution_records"]


def distribution_frame(index: TimeIndex, distribution: Sequence[float]) -> pd.DataFrame:
    """Pair each bucket's NPS with the time span it covers.

    Columns: ``bucket_start_ms`` (floored to whole milliseconds),
    ``bucket_end_ms`` and ``nps``.
    """
    values = np.asarray(distribution, dtype=np.float64)
    if values.ndim != 1 or values.size == 0:
        raise InvalidArgumentError("distribution must be a non-empty one-dimensional sequence")
    if len(index) == 0:
        raise EmptyInputError("cannot label buckets of an empty event sequence")

    edges = bucket_edges(index.first, index.last, values.size)
    return pd.DataFrame(
        {
            "bucket_start_ms": np.floor(edges[:-1]).astype(np.int64),
            "bucket_end_ms": edges[1:],
            "nps": values,
        }
    )


def distribution_records(index: TimeIndex, distribution: Sequence[float]) -> List[Dict[str, object]]:
    """``[{"key": bucket_start_ms, "value": nps}, ...]`` ready for ``json.dumps``."""
    frame = distribution_frame(index, distribution)
    return [
        {"key": int(start), "value": float(nps)}
        for start, nps in zip(frame["bucket_start_ms"], frame["nps"])
    ]
