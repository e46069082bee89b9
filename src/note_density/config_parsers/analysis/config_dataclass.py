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

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from note_density.density.policy import DegeneratePolicy


@dataclass
class AnalysisConfigData:
    schema_version: str
    timestamp_column: str = "time"
    bucket_count: Optional[int] = None
    frequency_hz: Optional[float] = None
    selector_threshold: Optional[int] = None
    degenerate_policy: DegeneratePolicy = DegeneratePolicy.COUNT
    validate_sorted: bool = True
    ranges: List[Tuple[float, float]] = field(default_factory=list)
