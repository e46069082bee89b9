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

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from note_density.exceptions import EventLoadError
from note_density.timeline.time_index import TimeIndex

logger = logging.getLogger(__name__)

__all__ = [
    "EventValidationStats",
    "EventValidator",
    "load_events",
    "read_timestamp_column",
]


@dataclass
class EventValidationStats:
    """Accumulates counts for event validation outcomes."""

    total_events: int = 0
    accepted_events: int = 0
    skipped_events: int = 0
    issues: Counter = field(default_factory=Counter)

    def record_issue(self, issue: str) -> None:
        self.skipped_events += 1
        self.issues[issue] += 1

    def as_dict(self) -> Dict[str, Any]:
        return {
            "total_events": self.total_events,
            "accepted_events": self.accepted_events,
            "skipped_events": self.skipped_events,
            "issues": dict(self.issues),
        }


class EventValidator:
    """Filters raw timestamps down to a finite, non-decreasing sequence."""

    def __init__(self) -> None:
        self.stats = EventValidationStats()
        self._last_timestamp: Optional[float] = None

    def validate(self, raw: Any) -> bool:
        """Return True if the timestamp is usable, otherwise record an issue and return False."""
        self.stats.total_events += 1

        try:
            timestamp = float(raw)
        except (TypeError, ValueError):
            self.stats.record_issue("non_numeric")
            return False

        if not math.isfinite(timestamp):
            self.stats.record_issue("non_finite")
            return False

        if self._last_timestamp is not None and timestamp < self._last_timestamp:
            self.stats.record_issue("timestamp_regression")
            return False

        self._last_timestamp = timestamp
        self.stats.accepted_events += 1
        return True


def _looks_numeric(label: Any) -> bool:
    try:
        float(label)
    except (TypeError, ValueError):
        return False
    return True


def read_timestamp_column(path: Path, column: str = "time") -> pd.Series:
    """Read one timestamp column from a CSV, or the only column of a headerless file."""
    path = Path(path)
    if not path.is_file():
        raise EventLoadError(f"events file not found: {path}")

    try:
        frame = pd.read_csv(path)
        if column not in frame.columns:
            if frame.shape[1] != 1 or not _looks_numeric(frame.columns[0]):
                raise EventLoadError(
                    f"column '{column}' not found in {path} (columns: {list(frame.columns)})"
                )
            # headerless single-column file: the first value was taken as a header
            frame = pd.read_csv(path, header=None, names=[column])
    except pd.errors.EmptyDataError:
        return pd.Series([], dtype="float64", name=column)
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as exc:
        raise EventLoadError(f"failed to read events from {path}: {exc}") from exc

    return frame[column]


def load_events(
    path: Path,
    *,
    column: str = "time",
    validate: bool = True,
) -> Tuple[TimeIndex, EventValidationStats]:
    """Load event timestamps (ms) from ``path`` into a ``TimeIndex``.

    With ``validate`` enabled, non-numeric, non-finite and out-of-order
    values are skipped and tallied; otherwise every value must be numeric.
    """
    series = read_timestamp_column(path, column)

    if validate:
        validator = EventValidator()
        accepted: List[float] = [float(v) for v in series.tolist() if validator.validate(v)]
        stats = validator.stats
    else:
        try:
            accepted = series.astype("float64").tolist()
        except (TypeError, ValueError) as exc:
            raise EventLoadError(f"non-numeric timestamp in {path}: {exc}") from exc
        stats = EventValidationStats(total_events=len(accepted), accepted_events=len(accepted))

    if stats.skipped_events:
        logger.warning(
            "skipped invalid event timestamps",
            extra={"path": str(path), "validation": stats.as_dict()},
        )
    logger.info(
        "loaded event timestamps",
        extra={"path": str(path), "column": column, "events": stats.accepted_events},
    )
    return TimeIndex(accepted), stats
