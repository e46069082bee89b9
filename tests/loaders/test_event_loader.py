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

"""Tests for loading and validating event timestamp files."""

from __future__ import annotations

from pathlib import Path

import pytest

from note_density.exceptions import EventLoadError
from note_density.loaders.event_loader import EventValidator, load_events


def _write(tmp_path: Path, text: str, name: str = "events.csv") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_load_events_reads_named_column(tmp_path: Path):
    path = _write(tmp_path, "x,time\n1,0\n2,250\n3,1000\n")

    index, stats = load_events(path)

    assert list(index) == [0.0, 250.0, 1000.0]
    assert stats.as_dict() == {
        "total_events": 3,
        "accepted_events": 3,
        "skipped_events": 0,
        "issues": {},
    }


def test_load_events_accepts_headerless_single_column(tmp_path: Path):
    path = _write(tmp_path, "1500\n1800\n2100\n", name="events.txt")

    index, _ = load_events(path)

    assert list(index) == [1500.0, 1800.0, 2100.0]


def test_load_events_uses_custom_column(tmp_path: Path):
    path = _write(tmp_path, "offset_ms\n10\n20\n")

    index, _ = load_events(path, column="offset_ms")

    assert list(index) == [10.0, 20.0]


def test_load_events_skips_invalid_values(tmp_path: Path):
    path = _write(tmp_path, "time\n0\n100\nabc\n50\n\n200\n")

    index, stats = load_events(path)

    assert list(index) == [0.0, 100.0, 200.0]
    assert stats.accepted_events == 3
    assert stats.issues["non_numeric"] == 1
    assert stats.issues["timestamp_regression"] == 1


def test_load_events_without_validation_requires_numbers(tmp_path: Path):
    path = _write(tmp_path, "time\n0\nabc\n")

    with pytest.raises(EventLoadError):
        load_events(path, validate=False)


def test_load_events_without_validation_keeps_order(tmp_path: Path):
    path = _write(tmp_path, "time\n300\n100\n")

    index, stats = load_events(path, validate=False)

    assert list(index) == [300.0, 100.0]
    assert stats.skipped_events == 0


def test_load_events_missing_file(tmp_path: Path):
    with pytest.raises(EventLoadError):
        load_events(tmp_path / "missing.csv")


def test_load_events_missing_column(tmp_path: Path):
    path = _write(tmp_path, "a,b\n1,2\n")

    with pytest.raises(EventLoadError) as excinfo:
        load_events(path)

    assert "time" in str(excinfo.value)


def test_load_events_named_single_column_is_not_headerless(tmp_path: Path):
    path = _write(tmp_path, "timestamp\n1\n2\n")

    with pytest.raises(EventLoadError):
        load_events(path)


def test_load_events_empty_file(tmp_path: Path):
    path = _write(tmp_path, "")

    index, stats = load_events(path)

    assert len(index) == 0
    assert stats.total_events == 0


def test_validator_flags_non_finite_values():
    validator = EventValidator()

    assert validator.validate(0.0)
    assert not validator.validate(float("nan"))
    assert not validator.validate(float("inf"))
    assert validator.validate(5.0)
    assert validator.stats.issues["non_finite"] == 2
