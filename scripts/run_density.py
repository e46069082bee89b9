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

import argparse
import json
import logging
import sys
from pathlib import Path

from note_density.analysis.workflow import run_density_analysis
from note_density.exceptions import NoteDensityError
from note_density.logging_utils import configure_logging, generate_run_id

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute note density statistics for a timestamp file.")
    parser.add_argument(
        "--config",
        required=True,
        type=Path,
        help="Path to the analysis YAML configuration file.",
    )
    parser.add_argument(
        "--events",
        required=True,
        type=Path,
        help="CSV (or single-column text) file of event timestamps in milliseconds.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level for the run (default: INFO).",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Optional directory for a structured JSON log file.",
    )
    parser.add_argument(
        "--run-id",
        default=None,
        help="Optional run identifier; generated when omitted.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    run_id = args.run_id or generate_run_id()

    level = getattr(logging, str(args.log_level).upper(), None)
    if not isinstance(level, int):
        level = logging.INFO
    configure_logging(run_id=run_id, log_dir=args.log_dir, level=level)

    try:
        report = run_density_analysis(args.config, args.events, run_id=run_id)
    except NoteDensityError:
        logger.exception(
            "density analysis failed",
            extra={"config": str(args.config), "events": str(args.events)},
        )
        return 1

    json.dump(report, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
