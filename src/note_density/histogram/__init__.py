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

from .frequency import frequency_to_bucket_count, histogram_by_frequency
from .scan import scan_histogram
from .search_partition import search_partition_histogram
from .selector import histogram, select_strategy

__all__ = [
    "frequency_to_bucket_count",
    "histogram",
    "histogram_by_frequency",
    "scan_histogram",
    "search_partition_histogram",
    "select_strategy",
]
