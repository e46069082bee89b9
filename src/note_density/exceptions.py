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

"""Project-wide exception hierarchy."""

from __future__ import annotations


class NoteDensityError(Exception):
    """Base exception for the note density stack."""


class InvalidArgumentError(NoteDensityError, ValueError):
    """Raised when a bucket count, frequency or threshold is out of its domain."""


class EmptyInputError(NoteDensityError, ValueError):
    """Raised when an operation needs at least one event and receives none."""


class OutOfRangeError(NoteDensityError, IndexError):
    """Raised when an event reference does not belong to the supplied sequence."""


class ConfigError(NoteDensityError):
    """Raised when user-supplied configuration is invalid."""


class EventLoadError(NoteDensityError):
    """Raised when a timestamp file cannot be accessed or parsed."""
