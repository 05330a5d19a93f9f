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
import math
from collections.abc import Callable
from typing import Any

from geodb_search.data_models.config import MAX_PAGE_SIZE, MIN_PAGE_SIZE

logger = logging.getLogger(__name__)


def compute_total_pages(total_count: int, page_size: int) -> int:
    if total_count <= 0:
        return 0
    return math.ceil(total_count / page_size)


def parse_page_size(value: Any) -> int | None:
    """
    Parses a page-size edit coming from the presentation layer.

    Accepts ints and integer strings in [MIN_PAGE_SIZE, MAX_PAGE_SIZE].
    Returns None for anything else.
    """
    # bool is an int subclass; a checkbox value is not a page size.
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return None
    if not isinstance(value, int):
        return None
    if not MIN_PAGE_SIZE <= value <= MAX_PAGE_SIZE:
        return None
    return value


class PaginationController:
    """
    Owns the current page, the page size and the total page count.

    Page and page-size changes call `on_change(page, page_size)` straight
    away; the owner uses it to issue an immediate fetch.
    """

    def __init__(
        self, on_change: Callable[[int, int], None], page_size: int = 5
    ) -> None:
        parsed = parse_page_size(page_size)
        if parsed is None:
            raise ValueError(
                f"page_size must be an integer in [{MIN_PAGE_SIZE}, {MAX_PAGE_SIZE}]"
            )
        self._on_change = on_change
        self.current_page = 1
        self.page_size = parsed
        self.total_pages = 0
        # total_count of the last applied page
        self._total_count = 0

    @property
    def max_page(self) -> int:
        return max(self.total_pages, 1)

    @property
    def is_first_page(self) -> bool:
        return self.current_page <= 1

    @property
    def is_last_page(self) -> bool:
        return self.current_page >= self.total_pages

    @property
    def has_pagination(self) -> bool:
        return self.total_pages > 1

    def set_page(self, page: int) -> bool:
        if isinstance(page, bool) or not isinstance(page, int):
            return False
        if page == self.current_page:
            return False
        if not 1 <= page <= self.max_page:
            logger.debug("Ignoring page %d outside [1, %d]", page, self.max_page)
            return False
        self.current_page = page
        self._on_change(self.current_page, self.page_size)
        return True

    def next_page(self) -> bool:
        if self.is_last_page:
            return False
        return self.set_page(self.current_page + 1)

    def previous_page(self) -> bool:
        if self.is_first_page:
            return False
        return self.set_page(self.current_page - 1)

    def set_page_size(self, value: Any) -> bool:
        page_size = parse_page_size(value)
        if page_size is None:
            logger.debug("Rejected page size %r", value)
            return False
        self.page_size = page_size
        self.current_page = 1
        self.total_pages = compute_total_pages(self._total_count, page_size)
        self._on_change(self.current_page, self.page_size)
        return True

    def reset(self) -> None:
        """Back to page 1 without triggering a fetch."""
        self.current_page = 1

    def update_totals(self, total_count: int) -> None:
        self._total_count = total_count
        self.total_pages = compute_total_pages(total_count, self.page_size)
        self.current_page = min(self.current_page, self.max_page)

    def clear(self) -> None:
        self._total_count = 0
        self.total_pages = 0
        self.current_page = 1
