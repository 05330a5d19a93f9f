# Copyright 2025 Google LLC.
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

from enum import Enum


class SearchStatus(str, Enum):
    """States of the search controller."""

    IDLE = "idle"
    PENDING = "pending"
    RESULTS = "results"
    EMPTY = "empty"
    ERROR = "error"

    @property
    def message(self) -> str:
        """Status line shown by the presentation layer."""
        return _STATUS_MESSAGES[self]


_STATUS_MESSAGES = {
    SearchStatus.IDLE: "",
    SearchStatus.PENDING: "Start Searching...",
    SearchStatus.RESULTS: "",
    SearchStatus.EMPTY: "No result found",
    SearchStatus.ERROR: "Error fetching data",
}
