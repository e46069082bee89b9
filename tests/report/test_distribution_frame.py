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

"""Tests for the tabular distribution views."""

from __future__ import annotations

import json

import numpy as np
import pytest

from note_density.exceptions import EmptyInputError, InvalidArgumentError
from note_density.histogram.selector import histogram
from note_density.report.distribution_frame import distribution_frame, distribution_records
from note_density.timeline.time_index import TimeIndex


def test_frame_labels_each_bucket_with_its_span(index_factory):
    index = index_factory([0.0, 250.0, 500.0, 750.0, 1000.0])
    distribution = histogram(index, 4)

    frame = distribution_frame(index, distribution)

    assert list(frame.columns) == ["bucket_start_ms", "bucket_end_ms", "nps"]
    assert frame["bucket_start_ms"].tolist() == [0, 250, 500, 750]
    assert frame["bucket_end_ms"].tolist() == pytest.approx([250.0, 500.0, 750.0, 1000.0])
    assert frame["nps"].tolist() == pytest.approx([4.0, 4.0, 4.0, 8.0])


def test_frame_floors_fractional_bucket_starts(index_factory):
    index = index_factory([100.0, 200.0, 400.0])

    frame = distribution_frame(index, histogram(index, 3))

    assert frame["bucket_start_ms"].tolist() == [100, 200, 300]


def test_records_are_json_key_value_pairs(map_index):
    distribution = histogram(map_index, 4)

    records = distribution_records(map_index, distribution)

    assert [r["key"] for r in records] == [
        int(np.floor(map_index.first + i * (map_index.duration / 4))) for i in range(4)
    ]
    assert [r["value"] for r in records] == distribution.tolist()
    decoded = json.loads(json.dumps(records))
    assert decoded[0] == {"key": int(map_index.first), "value": records[0]["value"]}


def test_frame_rejects_empty_inputs(index_factory):
    with pytest.raises(InvalidArgumentError):
        distribution_frame(index_factory([0.0, 10.0]), [])
    with pytest.raises(EmptyInputError):
        distribution_frame(TimeIndex([]), [1.0])
