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

from unittest.mock import Mock

import pytest

from geodb_search.pagination import (
    PaginationController,
    compute_total_pages,
    parse_page_size,
)


class TestComputeTotalPages:
    @pytest.mark.parametrize(
        ("total_count", "page_size", "expected"),
        [
            (0, 5, 0),
            (1, 5, 1),
            (5, 5, 1),
            (12, 5, 3),
            (12, 10, 2),
            (100, 1, 100),
        ],
    )
    def test_ceil_division(self, total_count, page_size, expected):
        assert compute_total_pages(total_count, page_size) == expected


class TestParsePageSize:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(1, 1), (10, 10), ("7", 7), (" 3 ", 3), (4.0, 4)],
    )
    def test_accepts(self, value, expected):
        assert parse_page_size(value) == expected

    @pytest.mark.parametrize(
        "value", [0, 11, -1, "0", "11", "abc", "", "2.5", 2.5, None, True, [5]]
    )
    def test_rejects(self, value):
        assert parse_page_size(value) is None


class TestPaginationController:
    @pytest.fixture
    def on_change(self):
        return Mock()

    @pytest.fixture
    def pagination(self, on_change):
        pagination = PaginationController(on_change, page_size=5)
        pagination.update_totals(12)
        return pagination

    def test_initial_state(self, on_change):
        pagination = PaginationController(on_change)
        assert pagination.current_page == 1
        assert pagination.page_size == 5
        assert pagination.total_pages == 0
        assert pagination.is_first_page
        assert pagination.is_last_page
        assert not pagination.has_pagination

    def test_invalid_initial_page_size(self, on_change):
        with pytest.raises(ValueError, match="page_size"):
            PaginationController(on_change, page_size=0)

    def test_set_page_triggers_fetch(self, pagination, on_change):
        assert pagination.set_page(2)
        assert pagination.current_page == 2
        on_change.assert_called_once_with(2, 5)

    def test_set_same_page_is_noop(self, pagination, on_change):
        assert not pagination.set_page(1)
        on_change.assert_not_called()

    @pytest.mark.parametrize("page", [0, -1, 4, 100, "2", 2.0, True])
    def test_set_page_out_of_range_is_rejected(self, pagination, on_change, page):
        assert not pagination.set_page(page)
        assert pagination.current_page == 1
        on_change.assert_not_called()

    def test_set_page_size_resets_page(self, pagination, on_change):
        pagination.set_page(2)
        on_change.reset_mock()

        assert pagination.set_page_size(10)

        assert pagination.page_size == 10
        assert pagination.current_page == 1
        on_change.assert_called_once_with(1, 10)

    @pytest.mark.parametrize("value", [0, 11, -1, "abc", None])
    def test_set_page_size_rejected(self, pagination, on_change, value):
        pagination.set_page(3)
        on_change.reset_mock()

        assert not pagination.set_page_size(value)

        assert pagination.page_size == 5
        assert pagination.current_page == 3
        on_change.assert_not_called()

    def test_first_and_last_page_flags(self, pagination):
        assert pagination.is_first_page
        assert not pagination.is_last_page

        pagination.set_page(2)
        assert not pagination.is_first_page
        assert not pagination.is_last_page

        pagination.set_page(3)
        assert not pagination.is_first_page
        assert pagination.is_last_page

    def test_flags_are_read_only(self, pagination):
        with pytest.raises(AttributeError):
            pagination.is_first_page = False

    def test_next_and_previous(self, pagination, on_change):
        assert not pagination.previous_page()
        assert pagination.next_page()
        assert pagination.next_page()
        assert not pagination.next_page()
        assert pagination.current_page == 3
        assert pagination.previous_page()
        assert pagination.current_page == 2
        assert on_change.call_count == 3

    def test_update_totals_clamps_current_page(self, pagination):
        pagination.set_page(3)
        pagination.update_totals(6)
        assert pagination.total_pages == 2
        assert pagination.current_page == 2

    def test_set_page_size_recomputes_total_pages(self, pagination):
        assert pagination.total_pages == 3

        pagination.set_page_size(10)
        assert pagination.total_pages == 2
        assert not pagination.set_page(3)

        pagination.set_page_size(1)
        assert pagination.total_pages == 12

    def test_clear(self, pagination):
        pagination.set_page(3)
        pagination.clear()
        assert pagination.total_pages == 0
        assert pagination.current_page == 1

        pagination.set_page_size(2)
        assert pagination.total_pages == 0

    def test_reset_does_not_fetch(self, pagination, on_change):
        pagination.set_page(2)
        on_change.reset_mock()
        pagination.reset()
        assert pagination.current_page == 1
        on_change.assert_not_called()

    @pytest.mark.parametrize("total_count", [0, 1, 5, 12, 47, 100])
    @pytest.mark.parametrize("page_size", range(1, 11))
    def test_page_stays_in_bounds(self, on_change, total_count, page_size):
        pagination = PaginationController(on_change, page_size=page_size)
        pagination.update_totals(total_count)
        upper = max(1, compute_total_pages(total_count, page_size))

        for page in [-1, 0, 1, 2, upper, upper + 1, 3, 1000, upper - 1]:
            pagination.set_page(page)
            assert 1 <= pagination.current_page <= upper
        for _ in range(upper + 2):
            pagination.next_page()
            assert 1 <= pagination.current_page <= upper
        for _ in range(upper + 2):
            pagination.previous_page()
            assert 1 <= pagination.current_page <= upper
