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
Pydantic models for configuring the GeoDB search client and controller.
"""

from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_API_URL = "https://wft-geo-db.p.rapidapi.com/v1/geo/cities"
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 10


class GeoDBConfig(BaseModel):
    """Configuration for the GeoDB Cities endpoint and the search controller."""

    api_key: str = Field(description="RapidAPI key for the GeoDB Cities API")
    api_url: str = Field(
        default=DEFAULT_API_URL,
        description="Endpoint listing cities, filtered by country code",
    )
    api_host: str | None = Field(
        default=None,
        description="Value of the x-rapidapi-host header (computed from api_url if not provided)",
    )
    timeout_seconds: float = Field(
        default=10.0, gt=0, description="Per-request timeout in seconds"
    )
    debounce_ms: int = Field(
        default=600, ge=0, description="Quiescence window for text-driven searches"
    )
    default_page_size: int = Field(
        default=5,
        ge=MIN_PAGE_SIZE,
        le=MAX_PAGE_SIZE,
        description="Initial number of places per page",
    )

    @field_validator("api_key")
    def validate_api_key_present(cls, v: str) -> str:  # noqa: N805
        v = v.strip()
        if not v:
            raise ValueError("api_key must not be blank")
        return v

    @model_validator(mode="after")
    def compute_api_host(self) -> "GeoDBConfig":
        """Compute api_host from api_url if not provided."""
        if self.api_host is None:
            self.api_host = urlparse(self.api_url).netloc
        return self
