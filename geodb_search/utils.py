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

import logging

import httpx

from geodb_search.data_models.config import GeoDBConfig
from geodb_search.exceptions import APIKeyValidationError, InvalidAPIKeyError

logger = logging.getLogger(__name__)


async def validate_api_key(
    config: GeoDBConfig, http_client: httpx.AsyncClient | None = None
) -> bool:
    """
    Validates the GeoDB API key by making a minimal listing call.

    Args:
        config: Configuration holding the endpoint and API key to validate.
        http_client: Optional client to use instead of a fresh one.

    Returns:
        True if the API key is valid.

    Raises:
        InvalidAPIKeyError: If the API key is invalid (4xx error).
        APIKeyValidationError: For other network-related validation errors.
    """
    if http_client is None:
        async with httpx.AsyncClient(timeout=config.timeout_seconds) as client:
            return await _check_api_key(client, config)
    return await _check_api_key(http_client, config)


async def _check_api_key(client: httpx.AsyncClient, config: GeoDBConfig) -> bool:
    headers = {
        "x-rapidapi-host": config.api_host,
        "x-rapidapi-key": config.api_key,
    }
    try:
        response = await client.get(config.api_url, params={"limit": 1}, headers=headers)
        if 400 <= response.status_code < 500:
            raise InvalidAPIKeyError(
                f"API key is invalid or has expired. Status: {response.status_code}"
            )
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise APIKeyValidationError(
            f"Failed to validate API key due to a server error: {e}"
        ) from e
    except httpx.RequestError as e:
        raise APIKeyValidationError(
            f"Failed to validate API key due to a network error: {e}"
        ) from e
    logger.info("GeoDB API key validation successful.")
    return True
