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

from typing import Optional, Union

from note_density.density.policy import DegeneratePolicy, degenerate_value
from note_density.density.range_density import to_seconds
from note_density.exceptions import EmptyInputError
from note_density.timeline.time_index import TimeIndex

__all__ = ["average_nps"]


def average_nps(
    index: TimeIndex,
    *,
    policy: Optional[Union[DegeneratePolicy, str]] = None,
) -> float:
    """Whole-map notes per second: event count over first-to-last duration."""
    count = len(index)
    if count == 0:
        raise EmptyInputError("cannot compute average NPS of an empty event sequence")

    duration = index.duration
    if duration <= 0:
        return degenerate_value(count, policy)
    return count / to_seconds(duration)
