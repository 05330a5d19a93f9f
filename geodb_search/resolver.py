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
Name to region code resolution.

The search controller only depends on the Resolver protocol. CountryResolver
is the default implementation, backed by a table of country names mapped to
ISO 3166-1 alpha-2 codes.
"""

import json
import logging
import unicodedata
from collections.abc import Mapping
from importlib import resources
from typing import Protocol

logger = logging.getLogger(__name__)

# Returned by a resolver when the name is unknown.
NOT_FOUND = None

_DEFAULT_TABLE = "countries.json"


class Resolver(Protocol):
    def resolve(self, name: str) -> str | None: ...


def normalize_name(name: str) -> str:
    """Case-fold, strip accents and collapse whitespace."""
    name = unicodedata.normalize("NFKD", name or "")
    name = "".join(ch for ch in name if not unicodedata.combining(ch))
    return " ".join(name.split()).casefold()


class CountryResolver:
    def __init__(self, table: Mapping[str, str]) -> None:
        self._codes = {normalize_name(name): code for name, code in table.items()}

    def resolve(self, name: str) -> str | None:
        key = normalize_name(name)
        if not key:
            return NOT_FOUND
        return self._codes.get(key, NOT_FOUND)

    def __len__(self) -> int:
        return len(self._codes)

    @classmethod
    def default(cls) -> "CountryResolver":
        """Build a resolver from the bundled country table."""
        return cls(read_country_table())


def read_country_table(name: str = _DEFAULT_TABLE) -> dict[str, str]:
    """Reads a name -> code table shipped in geodb_search/data."""
    text = resources.files("geodb_search.data").joinpath(name).read_text(
        encoding="utf-8"
    )
    table = json.loads(text)
    logger.debug("Loaded %d country names from %s", len(table), name)
    return table
