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

"""Tests for windowed and whole-map density."""

from __future__ import annotations

import pytest

from note_density.density.average import average_nps
from note_density.density.policy import DegeneratePolicy
from note_density.density.range_density import (
    play_length,
    range_density,
    range_density_between_events,
    to_seconds,
)
from note_density.exceptions import EmptyInputError, InvalidArgumentError, OutOfRangeError
from note_density.timeline.time_index import TimeIndex


def test_to_seconds_conversion():
    assert to_seconds(1000.0) == 1.0
    assert to_seconds(500.0) == 0.5
    assert to_seconds(0.0) == 0.0


def test_play_length_matches_reference_map(map_index):
    assert play_length(map_index) == 293177.0


def test_play_length_rejects_empty_sequence():
    with pytest.raises(EmptyInputError):
        play_length(TimeIndex([]))


def test_range_density_includes_both_window_ends(index_factory):
    index = index_factory([0.0, 500.0, 1000.0, 1500.0, 2000.0])

    # 0, 500 and 1000 fall inside [0, 1000]
    assert range_density(index, 0.0, 1000.0) == pytest.approx(3.0)
    assert range_density(index, 250.0, 1250.0) == pytest.approx(2.0)


@pytest.mark.parametrize("start, end", [(500.0, 500.0), (1500.0, 500.0)])
def test_range_density_is_zero_for_empty_windows(index_factory, start, end):
    index = index_factory([0.0, 500.0, 1000.0])

    assert range_density(index, start, end) == 0.0


def test_full_span_range_matches_average(map_index):
    full = range_density(map_index, map_index.first, map_index.last)

    assert full == pytest.approx(average_nps(map_index))


def test_between_events_matches_time_window(index_factory):
    index = index_factory([0.0, 500.0, 1000.0, 1500.0, 2000.0])

    by_position = range_density_between_events(index, 0, 2)
    by_ref = range_density_between_events(index, index.ref(0), index.ref(2))

    assert by_position == range_density(index, 0.0, 1000.0)
    assert by_ref == by_position


def test_between_events_swaps_reversed_pair(map_index):
    forward = range_density_between_events(map_index, 10, 400)
    backward = range_density_between_events(map_index, 400, 10)

    assert forward == backward
    assert forward == range_density(map_index, map_index[10], map_index[400])


def test_between_events_widens_over_duplicate_timestamps(index_factory):
    index = index_factory([0.0, 100.0, 100.0, 200.0, 300.0, 300.0])

    # times 100..300 inclusive hold five events over 0.2 s
    assert range_density(index, 100.0, 300.0) == pytest.approx(25.0)
    assert range_density_between_events(index, 2, 4) == range_density(index, 100.0, 300.0)


def test_between_simultaneous_events_is_zero(index_factory):
    index = index_factory([0.0, 100.0, 100.0, 200.0])

    assert range_density_between_events(index, 1, 2) == 0.0


def test_between_events_rejects_unknown_references(index_factory):
    index = index_factory([0.0, 100.0, 200.0])
    other = index_factory([0.0, 50.0, 200.0])

    with pytest.raises(OutOfRangeError):
        range_density_between_events(index, 0, 3)
    with pytest.raises(OutOfRangeError):
        range_density_between_events(index, other.ref(1), 2)


def test_average_nps_reference_map(map_index):
    assert average_nps(map_index) == pytest.approx(1000 / 293.177)
    assert average_nps(map_index) == pytest.approx(3.41, abs=0.01)


def test_average_nps_rejects_empty_sequence():
    with pytest.raises(EmptyInputError):
        average_nps(TimeIndex([]))


@pytest.mark.parametrize(
    "times, policy, expected",
    [
        ([1500.0], None, 1.0),
        ([1500.0, 1500.0, 1500.0], None, 3.0),
        ([1500.0, 1500.0, 1500.0], DegeneratePolicy.COUNT, 3.0),
        ([1500.0, 1500.0, 1500.0], DegeneratePolicy.ZERO, 0.0),
        ([1500.0, 1500.0], "zero", 0.0),
    ],
)
def test_average_nps_zero_duration_follows_policy(index_factory, times, policy, expected):
    assert average_nps(index_factory(times), policy=policy) == expected


def test_unknown_policy_is_rejected(index_factory):
    with pytest.raises(InvalidArgumentError):
        average_nps(index_factory([1.0]), policy="infinite")
