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

"""Zero-duration handling shared by the average and histogram paths."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Union

from note_density.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

__all__ = ["DegeneratePolicy", "resolve_policy", "degenerate_value"]


class DegeneratePolicy(str, Enum):
    """What a density is worth when the map has no measurable duration.

    ``COUNT`` reports the raw event count with no time normalisation,
    ``ZERO`` reports 0.0.
    """

    COUNT = "count"
    ZERO = "zero"


DEFAULT_POLICY = DegeneratePolicy.COUNT


def resolve_policy(policy: Union[DegeneratePolicy, str, None]) -> DegeneratePolicy:
    if policy is None:
        return DEFAULT_POLICY
    if isinstance(policy, DegeneratePolicy):
        return policy
    try:
        return DegeneratePolicy(str(policy).strip().lower())
    except ValueError as exc:
        known = ", ".join(p.value for p in DegeneratePolicy)
        raise InvalidArgumentError(f"unknown degenerate policy '{policy}' (expected one of: {known})") from exc


def degenerate_value(event_count: int, policy: Union[DegeneratePolicy, str, None] = None) -> float:
    """Density assigned to a zero-duration sequence of ``event_count`` events."""
    resolved = resolve_policy(policy)
    logger.debug(
        "zero-duration input; applying degenerate policy",
        extra={"event_count": event_count, "policy": resolved.value},
    )
    if resolved is DegeneratePolicy.ZERO:
        return 0.0
    return float(event_count)
