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

"""End-to-end tests for the density analysis workflow."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from note_density.analysis.workflow import analyze_events, run_density_analysis
from note_density.config_parsers.analysis.config_dataclass import AnalysisConfigData
from note_density.density.average import average_nps
from note_density.density.range_density import range_density
from note_density.exceptions import ConfigError, EmptyInputError
from note_density.histogram.selector import histogram


def _write_events(path: Path, times) -> Path:
    pd.DataFrame({"time": times}).to_csv(path, index=False)
    return path


def test_run_density_analysis_reports_reference_map(tmp_path: Path, map_times, map_index, config_writer):
    events_path = _write_events(tmp_path / "events.csv", map_times)
    start, end = float(map_times[0]), float(map_times[0]) + 30000.0
    config_path = config_writer(
        f"""
schema_version: "1.0"
bucket_count: 4
ranges:
  - [{start}, {end}]
        """
    )

    report = run_density_analysis(config_path, events_path, run_id="test-run")

    assert report["run_id"] == "test-run"
    assert report["event_count"] == 1000
    assert report["play_length_ms"] == 293177.0
    assert report["average_nps"] == pytest.approx(1000 / 293.177)
    assert report["strategy"] == "search_partition"
    assert report["bucket_count"] == 4
    assert [row["value"] for row in report["distribution"]] == histogram(map_index, 4).tolist()
    assert report["ranges"] == [
        {"start_ms": start, "end_ms": end, "nps": range_density(map_index, start, end)}
    ]
    assert report["validation"]["accepted_events"] == 1000
    assert report["validation"]["skipped_events"] == 0


def test_run_density_analysis_missing_events(tmp_path: Path, config_writer):
    config_path = config_writer('schema_version: "1.0"\nbucket_count: 4\n')

    with pytest.raises(ConfigError):
        run_density_analysis(config_path, tmp_path / "missing.csv")


def test_run_density_analysis_empty_events(tmp_path: Path, config_writer):
    events_path = _write_events(tmp_path / "events.csv", [])
    config_path = config_writer('schema_version: "1.0"\nbucket_count: 4\n')

    with pytest.raises(EmptyInputError):
        run_density_analysis(config_path, events_path)


def test_analyze_events_with_frequency_and_threshold(map_index):
    config = AnalysisConfigData(
        schema_version="1.0",
        frequency_hz=0.1,
        selector_threshold=2,
    )

    report = analyze_events(map_index, config)

    assert report["bucket_count"] == 10
    assert report["strategy"] == "scan"
    assert len(report["distribution"]) == 10
    values = np.array([row["value"] for row in report["distribution"]])
    assert abs(values.mean() - average_nps(map_index)) < 0.1
    assert report["ranges"] == []


def test_analyze_events_zero_duration_policy(index_factory):
    index = index_factory([500.0, 500.0])
    config = AnalysisConfigData(schema_version="1.0", bucket_count=3, degenerate_policy="zero")

    report = analyze_events(index, config)

    assert report["average_nps"] == 0.0
    assert [row["value"] for row in report["distribution"]] == [0.0, 0.0, 0.0]
    assert [row["key"] for row in report["distribution"]] == [500, 500, 500]
