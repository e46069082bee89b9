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

"""Shared pytest fixtures for the note density test suite."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

import numpy as np
import pytest

from note_density.timeline.time_index import TimeIndex

# 1000 events spanning 293177 ms, the reference map used across the suite
MAP_START_MS = 1234.0
MAP_LENGTH_MS = 293177.0
MAP_EVENTS = 1000


@pytest.fixture
def map_times() -> np.ndarray:
    """Sorted whole-millisecond timestamps with clustered density."""

    rng = np.random.default_rng(2024)
    dense = rng.uniform(60000.0, 120000.0, size=500)
    sparse = rng.uniform(0.0, MAP_LENGTH_MS, size=MAP_EVENTS - 2 - dense.size)
    inner = np.round(np.concatenate((dense, sparse)))
    inner = np.clip(inner, 1.0, MAP_LENGTH_MS - 1.0)
    times = np.concatenate(([0.0], np.sort(inner), [MAP_LENGTH_MS]))
    return times + MAP_START_MS


@pytest.fixture
def map_index(map_times: np.ndarray) -> TimeIndex:
    return TimeIndex(map_times)


@pytest.fixture
def index_factory() -> Callable[[Iterable[float]], TimeIndex]:
    """Return a factory that builds a `TimeIndex` from plain numbers."""

    def _factory(times: Iterable[float]) -> TimeIndex:
        return TimeIndex(list(times))

    return _factory


@pytest.fixture
def restore_root_logging():
    """Undo handler changes made by `configure_logging` inside a test."""

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def config_writer(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper that writes YAML text to a temporary config file."""

    def _write(yaml_text: str, name: str = "analysis.yaml") -> Path:
        path = tmp_path / name
        path.write_text(yaml_text, encoding="utf-8")
        return path

    return _write
