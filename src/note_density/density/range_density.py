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

"""Notes-per-second over an explicit time window."""

from __future__ import annotations

from typing import Union

from note_density.exceptions import EmptyInputError
from note_density.timeline.time_index import EventRef, TimeIndex

__all__ = [
    "play_length",
    "range_density",
    "range_density_between_events",
    "to_seconds",
]

EventLike = Union[EventRef, int]


def to_seconds(ms: float) -> float:
    return ms / 1000.0


def play_length(index: TimeIndex) -> float:
    """Milliseconds between the first and last event."""
    if len(index) == 0:
        raise EmptyInputError("cannot measure play length of an empty event sequence")
    return index.duration


def _window_nps(count: int, start: float, end: float) -> float:
    span = end - start
    if span <= 0:
        return 0.0
    return count / to_seconds(span)


def range_density(index: TimeIndex, start: float, end: float) -> float:
    """NPS of the events in the closed window ``[start, end]``.

    Events exactly at ``start`` or ``end`` are counted. A window with
    ``end - start <= 0`` has zero density.
    """
    if end - start <= 0:
        return 0.0
    count = index.upper_bound(end) - index.lower_bound(start)
    return _window_nps(count, start, end)


def range_density_between_events(
    index: TimeIndex,
    start_event: EventLike,
    end_event: EventLike,
) -> float:
    """NPS between two events of ``index`` identified by position.

    The pair may be supplied in either order. The count is read from the
    positions directly and widened over events sharing the boundary
    timestamps, so the result equals ``range_density`` over the same times.
    """
    lo = index.position_of(start_event)
    hi = index.position_of(end_event)
    if lo > hi:
        lo, hi = hi, lo

    times = index.timestamps
    start, end = float(times[lo]), float(times[hi])
    if end - start <= 0:
        return 0.0

    while lo > 0 and times[lo - 1] == start:
        lo -= 1
    last = len(index) - 1
    while hi < last and times[hi + 1] == end:
        hi += 1

    return _window_nps(hi - lo + 1, start, end)
