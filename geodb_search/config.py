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
Configuration module for the GeoDB search client.

The environment is only read here. Everything downstream receives a
GeoDBConfig instance.
"""

import os

from dotenv import load_dotenv

from .data_models.config import GeoDBConfig

# Environment variable names
GEODB_API_KEY_ENV = "GEODB_API_KEY"
GEODB_API_URL_ENV = "GEODB_API_URL"
GEODB_API_HOST_ENV = "GEODB_API_HOST"
GEODB_TIMEOUT_ENV = "GEODB_TIMEOUT"
GEODB_DEBOUNCE_MS_ENV = "GEODB_DEBOUNCE_MS"
GEODB_PAGE_SIZE_ENV = "GEODB_PAGE_SIZE"


def _load_env_file() -> None:
    """Load .env file if present in the current directory."""
    load_dotenv()


def get_geodb_config() -> GeoDBConfig:
    """
    Get GeoDB configuration from environment variables.

    Returns:
        GeoDBConfig object containing the configuration

    Raises:
        ValueError: If the API key is missing
        pydantic.ValidationError: If an optional value is invalid
    """
    _load_env_file()

    api_key = os.getenv(GEODB_API_KEY_ENV)
    if not api_key:
        raise ValueError(f"{GEODB_API_KEY_ENV} environment variable is required")

    # Build config data, only including fields that are provided
    config_data = {"api_key": api_key}

    optional_fields = {
        "api_url": GEODB_API_URL_ENV,
        "api_host": GEODB_API_HOST_ENV,
        "timeout_seconds": GEODB_TIMEOUT_ENV,
        "debounce_ms": GEODB_DEBOUNCE_MS_ENV,
        "default_page_size": GEODB_PAGE_SIZE_ENV,
    }
    for field_name, env_name in optional_fields.items():
        value = os.getenv(env_name)
        if value:
            config_data[field_name] = value

    return GeoDBConfig.model_validate(config_data)
