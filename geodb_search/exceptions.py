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
"""
Exceptions raised by the geodb-search package.

Resolver misses and empty result pages are not errors: the controller turns
them into an EMPTY status. Only transport problems, API key problems and
misuse of a closed controller are modelled here.
"""


class GeoDBSearchError(Exception):
    """Base class for all geodb-search errors."""


class TransportError(GeoDBSearchError):
    """A remote fetch failed: network error, timeout, HTTP error or bad body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidAPIKeyError(GeoDBSearchError):
    """The API key was rejected by the service (4xx)."""


class APIKeyValidationError(GeoDBSearchError):
    """The API key could not be validated for another reason."""


class ControllerClosedError(GeoDBSearchError):
    """A gesture was sent to a controller that has been closed."""
