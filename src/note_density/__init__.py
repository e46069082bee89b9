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

"""Top-level exports for the note_density package."""

from note_density.density import (
    DegeneratePolicy,
    average_nps,
    play_length,
    range_density,
    range_density_between_events,
)
from note_density.histogram import (
    histogram,
    histogram_by_frequency,
    scan_histogram,
    search_partition_histogram,
    select_strategy,
)
from note_density.timeline.time_index import EventRef, TimeIndex

__all__ = [
    "DegeneratePolicy",
    "EventRef",
    "TimeIndex",
    "average_nps",
    "histogram",
    "histogram_by_frequency",
    "play_length",
    "range_density",
    "range_density_between_events",
    "run_density_analysis",
    "scan_histogram",
    "search_partition_histogram",
    "select_strategy",
]


def __getattr__(name):
    """Lazily import the file-based workflow (pandas, PyYAML) on first access."""
    if name == "run_density_analysis":
        from note_density.analysis.workflow import run_density_analysis
        globals()["run_density_analysis"] = run_density_analysis
        return run_density_analysis

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
