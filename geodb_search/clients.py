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
Clients module for the GeoDB Cities API.

GeoDBClient wraps the HTTP endpoint and raises TransportError on any
failure. QueryExecutor adapts it to the controller: it never raises for
transport problems and returns a QueryOutcome instead.
"""

import logging

import httpx
from pydantic import BaseModel, Field

from geodb_search.data_models.config import GeoDBConfig
from geodb_search.data_models.search import (
    PlaceRecord,
    QueryOutcome,
    ResultPage,
    SearchQuery,
)
from geodb_search.exceptions import TransportError

logger = logging.getLogger(__name__)


class _ResponseMetadata(BaseModel):
    current_offset: int = Field(0, alias="currentOffset")
    total_count: int = Field(0, ge=0, alias="totalCount")


class GeoDBResponse(BaseModel):
    """Raw body of a GeoDB cities listing."""

    data: list[PlaceRecord] = Field(default_factory=list)
    metadata: _ResponseMetadata = Field(default_factory=_ResponseMetadata)

    def to_result_page(self) -> ResultPage:
        return ResultPage(rows=self.data, total_count=self.metadata.total_count)


class GeoDBClient:
    def __init__(
        self,
        config: GeoDBConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the GeoDBClient.

        Args:
            config: Endpoint, credentials and timeout.
            http_client: Optional pre-built client (e.g. with a mock transport).
                A client passed in is not closed by aclose().
        """
        self.config = config
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=config.timeout_seconds
        )

    @property
    def headers(self) -> dict[str, str]:
        return {
            "x-rapidapi-host": self.config.api_host,
            "x-rapidapi-key": self.config.api_key,
        }

    async def fetch_places(self, code: str, limit: int, offset: int) -> ResultPage:
        """
        Fetch one page of places located in the region identified by `code`.

        Raises:
            TransportError: On network errors, timeouts, non-2xx responses and
                bodies that do not match the expected shape.
        """
        params = {"countryIds": code, "limit": limit, "offset": offset}
        try:
            response = await self._http.get(
                self.config.api_url, params=params, headers=self.headers
            )
            response.raise_for_status()
            body = GeoDBResponse.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"GeoDB request failed with status {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise TransportError(f"GeoDB request failed: {e!r}") from e
        except ValueError as e:
            # Covers both JSON decoding and pydantic ValidationError.
            raise TransportError(f"Malformed GeoDB response: {e}") from e
        return body.to_result_page()

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    async def __aenter__(self) -> "GeoDBClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


class QueryExecutor:
    """Runs one SearchQuery against a GeoDBClient."""

    def __init__(self, client: GeoDBClient) -> None:
        self.client = client

    async def execute(self, query: SearchQuery) -> QueryOutcome:
        if not query.resolved_code:
            raise ValueError("SearchQuery has no resolved_code to fetch.")
        try:
            page = await self.client.fetch_places(
                query.resolved_code, limit=query.limit, offset=query.offset
            )
        except TransportError as e:
            logger.warning(
                "Fetch failed for code=%s page=%d: %s",
                query.resolved_code,
                query.page,
                e,
            )
            return QueryOutcome.failure(str(e))
        return QueryOutcome.success(page)


def create_executor(config: GeoDBConfig) -> QueryExecutor:
    """Factory building a QueryExecutor backed by a fresh GeoDBClient."""
    return QueryExecutor(GeoDBClient(config))
