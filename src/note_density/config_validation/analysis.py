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

import math

from note_density.exceptions import ConfigError
from note_density.config_validation.schema_registry import validate_schema_version


def validate_analysis_config(raw: dict) -> dict:
    """Validate a raw analysis configuration mapping."""
    if not isinstance(raw, dict):
        raise ValueError("Invalid analysis configuration: root must be a mapping")

    try:
        schema_spec = validate_schema_version("analysis", raw.get("schema_version"))
    except ConfigError as exc:
        raise ValueError(str(exc)) from exc

    working = dict(raw)
    if schema_spec.migration is not None:
        migrated = schema_spec.migration(working)
        working = dict(migrated)

    working["schema_version"] = schema_spec.canonical

    allowed_keys = {
        "schema_version",
        "timestamp_column",
        "bucket_count",
        "frequency_hz",
        "selector_threshold",
        "degenerate_policy",
        "validate_sorted",
        "ranges",
    }

    extra = sorted(set(working.keys()) - allowed_keys)
    if extra:
        raise ValueError(f"Invalid analysis configuration: unexpected keys {extra}")

    bucket_count = working.get("bucket_count")
    frequency_hz = working.get("frequency_hz")
    if (bucket_count is None) == (frequency_hz is None):
        raise ValueError(
            "Invalid analysis configuration: exactly one of 'bucket_count' or 'frequency_hz' is required"
        )

    if bucket_count is not None:
        if isinstance(bucket_count, bool) or not isinstance(bucket_count, int):
            raise ValueError("Invalid analysis configuration: 'bucket_count' must be an integer")
        if bucket_count <= 0:
            raise ValueError("Invalid analysis configuration: 'bucket_count' must be positive")

    if frequency_hz is not None:
        if isinstance(frequency_hz, bool):
            raise ValueError("Invalid analysis configuration: 'frequency_hz' must be numeric")
        try:
            frequency_hz = float(frequency_hz)
        except Exception as exc:
            raise ValueError("Invalid analysis configuration: 'frequency_hz' must be numeric") from exc
        if not math.isfinite(frequency_hz) or frequency_hz <= 0:
            raise ValueError("Invalid analysis configuration: 'frequency_hz' must be finite and positive")

    threshold = working.get("selector_threshold")
    if threshold is not None:
        if isinstance(threshold, bool) or not isinstance(threshold, int):
            raise ValueError("Invalid analysis configuration: 'selector_threshold' must be an integer")
        if threshold < 0:
            raise ValueError("Invalid analysis configuration: 'selector_threshold' must be non-negative")

    column = working.get("timestamp_column", "time")
    if not isinstance(column, str) or not column.strip():
        raise ValueError("Invalid analysis configuration: 'timestamp_column' must be a non-empty string")

    policy = working.get("degenerate_policy", "count")
    if not isinstance(policy, str):
        raise ValueError("Invalid analysis configuration: 'degenerate_policy' must be a string")

    validate_sorted = working.get("validate_sorted", True)
    if not isinstance(validate_sorted, bool):
        raise ValueError("Invalid analysis configuration: 'validate_sorted' must be a bool")

    ranges = working.get("ranges") or []
    if not isinstance(ranges, list):
        raise ValueError("Invalid analysis configuration: 'ranges' must be a list of [start, end] pairs")
    normalized_ranges = []
    for entry in ranges:
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise ValueError("Invalid analysis configuration: each range must be a [start, end] pair")
        try:
            start, end = float(entry[0]), float(entry[1])
        except Exception as exc:
            raise ValueError("Invalid analysis configuration: range bounds must be numeric") from exc
        if not (math.isfinite(start) and math.isfinite(end)):
            raise ValueError("Invalid analysis configuration: range bounds must be finite")
        normalized_ranges.append((start, end))

    return {
        "schema_version": working["schema_version"],
        "timestamp_column": column.strip(),
        "bucket_count": bucket_count,
        "frequency_hz": frequency_hz,
        "selector_threshold": threshold,
        "degenerate_policy": policy.strip().lower(),
        "validate_sorted": validate_sorted,
        "ranges": normalized_ranges,
    }
