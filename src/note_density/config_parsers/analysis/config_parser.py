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

from pathlib import Path

import yaml

from note_density.config_parsers.analysis.config_dataclass import AnalysisConfigData
from note_density.config_parsers.utils.utils import validate_path
from note_density.config_validation import validate_analysis_config
from note_density.density.policy import resolve_policy
from note_density.exceptions import ConfigError, InvalidArgumentError

class AnalysisConfigParser:
    """
    Parses and validates the analysis YAML configuration file.

    Produces an AnalysisConfigData describing how an event
    sequence should be bucketed and which ranges to measure.
    """

    def parse_config(
        self,
        analysis_config_path: Path
        ) -> AnalysisConfigData:
        path = validate_path(
            analysis_config_path,
            must_exist=True,
            expect_dir=False,
            label="analysis_config_path"
        )
        cfg = self._validate_yaml(path)
        try:
            cfg = validate_analysis_config(cfg)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
        return self._build_analysis_config(cfg)

    def _validate_yaml(
        self,
        path: Path
        ):
        try:
            with path.open("r", encoding="utf-8") as f:
                cfg = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"error parsing YAML: {e}") from e

        if not isinstance(cfg, dict):
            raise ConfigError("config root must be a mapping (YAML dict)")

        return cfg

    def _build_analysis_config(
        self,
        cfg
        ) -> AnalysisConfigData:
        try:
            policy = resolve_policy(cfg["degenerate_policy"])
        except InvalidArgumentError as exc:
            raise ConfigError(f"invalid 'degenerate_policy': {exc}") from exc

        return AnalysisConfigData(
            schema_version=cfg["schema_version"],
            timestamp_column=cfg["timestamp_column"],
            bucket_count=cfg["bucket_count"],
            frequency_hz=cfg["frequency_hz"],
            selector_threshold=cfg["selector_threshold"],
            degenerate_policy=policy,
            validate_sorted=cfg["validate_sorted"],
            ranges=list(cfg["ranges"]),
            )
