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
from pathlib import Path
from typing import Any, Dict, Optional

from note_density.config_parsers.analysis.config_dataclass import AnalysisConfigData
from note_density.config_parsers.analysis.config_parser import AnalysisConfigParser
from note_density.config_parsers.utils.utils import validate_path
from note_density.density.average import average_nps
from note_density.density.range_density import play_length, range_density
from note_density.histogram.frequency import frequency_to_bucket_count
from note_density.histogram.selector import histogram, select_strategy
from note_density.loaders.event_loader import load_events
from note_density.logging_utils import (
    generate_run_id,
    get_git_hash,
    log_run_metadata,
    run_context,
)
from note_density.report.distribution_frame import distribution_records
from note_density.timeline.time_index import TimeIndex

logger = logging.getLogger(__name__)

__all__ = [
    "analyze_events",
    "load_config",
    "run_density_analysis",
]


def load_config(config_path: Path | str) -> AnalysisConfigData:
    """Parse an analysis configuration file."""
    parser = AnalysisConfigParser()
    return parser.parse_config(Path(config_path))


def analyze_events(index: TimeIndex, config: AnalysisConfigData) -> Dict[str, Any]:
    """Compute every statistic requested by ``config`` for an in-memory index."""
    if config.bucket_count is not None:
        bucket_count = config.bucket_count
    else:
        bucket_count = frequency_to_bucket_count(config.frequency_hz)

    policy = config.degenerate_policy
    strategy = select_strategy(len(index), bucket_count, config.selector_threshold)
    distribution = histogram(
        index,
        bucket_count,
        threshold=config.selector_threshold,
        policy=policy,
    )

    ranges = [
        {"start_ms": start, "end_ms": end, "nps": range_density(index, start, end)}
        for start, end in config.ranges
    ]

    return {
        "event_count": len(index),
        "play_length_ms": play_length(index),
        "average_nps": average_nps(index, policy=policy),
        "strategy": strategy,
        "bucket_count": bucket_count,
        "distribution": distribution_records(index, distribution),
        "ranges": ranges,
    }


def run_density_analysis(
    config_path: Path | str,
    events_path: Path | str,
    *,
    run_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Load configuration and events from disk and return the density report."""
    run_id = run_id or generate_run_id()
    config_path = Path(config_path)
    events_path = validate_path(events_path, must_exist=True, expect_dir=False, label="events_path")

    with run_context(run_id=run_id, source=str(events_path)):
        config = load_config(config_path)
        log_run_metadata(
            logger,
            analysis_config=config,
            config_path=config_path,
            events_path=events_path,
            git_hash=get_git_hash(),
        )

        index, stats = load_events(
            events_path,
            column=config.timestamp_column,
            validate=config.validate_sorted,
        )
        report = analyze_events(index, config)
        logger.info(
            "density analysis complete",
            extra={
                "events": report["event_count"],
                "strategy": report["strategy"],
                "bucket_count": report["bucket_count"],
            },
        )

    report["run_id"] = run_id
    report["validation"] = stats.as_dict()
    return report
