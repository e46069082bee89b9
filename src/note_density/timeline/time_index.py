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

"""Sorted, read-only event timeline with binary-search primitives.

Timestamps are milliseconds. The index trusts its caller for ordering: a
sequence that is not non-decreasing yields meaningless search results but is
never rejected here (see ``note_density.loaders`` for input validation).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

import numpy as np

from note_density.exceptions import OutOfRangeError

__all__ = ["EventRef", "TimeIndex"]


@dataclass(frozen=True)
class EventRef:
    """Handle on one event of a specific ``TimeIndex``."""

    position: int
    time: float


class TimeIndex:
    """Immutable non-decreasing sequence of event timestamps."""

    __slots__ = ("_times",)

    def __init__(self, timestamps: Iterable[float]):
        if isinstance(timestamps, TimeIndex):
            times = timestamps._times
        else:
            times = np.array(timestamps, dtype=np.float64, copy=True)
        if times.ndim != 1:
            raise ValueError(f"timestamps must be one-dimensional, got shape {times.shape}")
        times.flags.writeable = False
        self._times = times

    def __len__(self) -> int:
        return int(self._times.size)

    def __getitem__(self, position: int) -> float:
        return float(self._times[position])

    def __iter__(self):
        return iter(self._times.tolist())

    def __repr__(self) -> str:
        if not self:
            return "TimeIndex([])"
        return f"TimeIndex(n={len(self)}, first={self.first}, last={self.last})"

    @property
    def timestamps(self) -> np.ndarray:
        """Read-only view of the underlying float64 array."""
        return self._times

    @property
    def first(self) -> float:
        return float(self._times[0])

    @property
    def last(self) -> float:
        return float(self._times[-1])

    @property
    def duration(self) -> float:
        """Elapsed time between the first and last event (ms)."""
        return float(self._times[-1] - self._times[0])

    # ------------------------------------------------------------------
    def lower_bound(self, t: float) -> int:
        """Number of events with timestamp strictly less than ``t``."""
        return int(np.searchsorted(self._times, t, side="left"))

    def upper_bound(self, t: float) -> int:
        """Number of events with timestamp less than or equal to ``t``."""
        return int(np.searchsorted(self._times, t, side="right"))

    def lower_bounds(self, thresholds: np.ndarray) -> np.ndarray:
        """Vectorised ``lower_bound`` over an array of thresholds."""
        return np.searchsorted(self._times, thresholds, side="left")

    def upper_bounds(self, thresholds: np.ndarray) -> np.ndarray:
        """Vectorised ``upper_bound`` over an array of thresholds."""
        return np.searchsorted(self._times, thresholds, side="right")

    # ------------------------------------------------------------------
    def ref(self, position: int) -> EventRef:
        """Return a reference to the event stored at ``position``."""
        self._check_position(position)
        return EventRef(position=int(position), time=float(self._times[position]))

    def position_of(self, event: Union[EventRef, int]) -> int:
        """Resolve an ``EventRef`` or raw position to a checked position.

        Raises ``OutOfRangeError`` when the position falls outside the
        sequence or when the reference's time disagrees with the event
        stored at that position.
        """
        if isinstance(event, EventRef):
            self._check_position(event.position)
            if self._times[event.position] != event.time:
                raise OutOfRangeError(
                    f"event at position {event.position} has time "
                    f"{float(self._times[event.position])}, reference says {event.time}"
                )
            return event.position

        if isinstance(event, (bool, np.bool_)) or not isinstance(event, (int, np.integer)):
            raise OutOfRangeError(f"cannot locate event reference {event!r}")
        self._check_position(event)
        return int(event)

    def _check_position(self, position: int) -> None:
        if not 0 <= position < self._times.size:
            raise OutOfRangeError(
                f"event position {position} outside sequence of length {self._times.size}"
            )
