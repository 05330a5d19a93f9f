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
Global pytest configuration and fixtures.

Pytest automatically discovers and loads this file. Fixtures defined here are
available to all tests in this directory and its subdirectories without
needing to import them explicitly.
"""

import os
from unittest.mock import patch

import pytest
from geodb_search.data_models.config import GeoDBConfig
from geodb_search.data_models.search import PlaceRecord, ResultPage


@pytest.fixture(autouse=True)
def clean_env():
    """
    Automatically clear environment variables for all tests to ensure
    tests are hermetic and don't depend on the host environment.
    """
    with patch.dict(os.environ, {}, clear=True):
        yield


@pytest.fixture(autouse=True)
def mock_load_dotenv():
    """
    Automatically mock load_dotenv for all tests to prevent
    loading environment variables from local .env files.
    """
    with patch("geodb_search.config.load_dotenv"):
        yield


@pytest.fixture
def config():
    return GeoDBConfig(api_key="test_key")


def _make_place(place_id: int, name: str | None = None) -> PlaceRecord:
    return PlaceRecord(
        id=place_id,
        name=name or f"City {place_id}",
        region="Region",
        population=1000 * place_id,
        country="France",
        countryCode="FR",
    )


def _make_page(start: int, count: int, total_count: int) -> ResultPage:
    return ResultPage(
        rows=[_make_place(i) for i in range(start, start + count)],
        total_count=total_count,
    )


@pytest.fixture
def make_place():
    """Factory for PlaceRecords with predictable names."""
    return _make_place


@pytest.fixture
def make_page():
    """Factory for ResultPages: make_page(start_id, row_count, total_count)."""
    return _make_page
