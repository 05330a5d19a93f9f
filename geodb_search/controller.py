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
Search controller: the state machine between user gestures and the
GeoDB query executor.

Text edits are debounced. Page and page-size changes fetch immediately.
Every dispatched request is stamped with the generation counter and its
reply is applied only if the stamp still matches, so a slow early reply
can never overwrite the state produced by a later one.

All methods must be called from the thread running the event loop.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Protocol

from geodb_search.data_models.config import GeoDBConfig
from geodb_search.data_models.enums import SearchStatus
from geodb_search.data_models.search import (
    ControllerSnapshot,
    PlaceRecord,
    QueryOutcome,
    SearchQuery,
)
from geodb_search.debounce import DEFAULT_DELAY_MS, DebounceGate
from geodb_search.exceptions import ControllerClosedError
from geodb_search.pagination import PaginationController
from geodb_search.resolver import NOT_FOUND, Resolver

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[ControllerSnapshot], None]

_SETTLE_POLL_SECONDS = 0.01


class Executor(Protocol):
    async def execute(self, query: SearchQuery) -> QueryOutcome: ...


class SearchController:
    def __init__(
        self,
        executor: Executor,
        resolver: Resolver,
        *,
        debounce_ms: int = DEFAULT_DELAY_MS,
        page_size: int = 5,
    ) -> None:
        self._executor = executor
        self._resolver = resolver
        self._gate = DebounceGate(debounce_ms)
        self.pagination = PaginationController(
            self._on_pagination_change, page_size=page_size
        )

        self._search_text = ""
        self._rows: list[PlaceRecord] = []
        self._status = SearchStatus.IDLE
        self._generation = 0
        # fetch task -> generation it was stamped with
        self._in_flight: dict[asyncio.Task, int] = {}
        self._listeners: list[SnapshotListener] = []
        self._closed = False

    @classmethod
    def from_config(
        cls, config: GeoDBConfig, executor: Executor, resolver: Resolver
    ) -> "SearchController":
        return cls(
            executor,
            resolver,
            debounce_ms=config.debounce_ms,
            page_size=config.default_page_size,
        )

    @property
    def status(self) -> SearchStatus:
        return self._status

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def search_text(self) -> str:
        return self._search_text

    @property
    def loading(self) -> bool:
        return any(gen == self._generation for gen in self._in_flight.values())

    @property
    def closed(self) -> bool:
        return self._closed

    # Inbound gestures

    def on_text_change(self, text: str) -> None:
        self._check_open()
        self._generation += 1
        self._search_text = text
        self.pagination.reset()
        self._status = SearchStatus.PENDING
        self._gate.schedule(self._fire_debounced)
        self._notify()

    def on_page_click(self, page: int) -> bool:
        self._check_open()
        return self.pagination.set_page(page)

    def on_page_size_change(self, value: Any) -> bool:
        self._check_open()
        return self.pagination.set_page_size(value)

    def next_page(self) -> bool:
        self._check_open()
        return self.pagination.next_page()

    def previous_page(self) -> bool:
        self._check_open()
        return self.pagination.previous_page()

    # Outbound view

    def snapshot(self) -> ControllerSnapshot:
        return ControllerSnapshot(
            search_text=self._search_text,
            rows=list(self._rows),
            current_page=self.pagination.current_page,
            page_size=self.pagination.page_size,
            total_pages=self.pagination.total_pages,
            status=self._status,
            is_first_page=self.pagination.is_first_page,
            is_last_page=self.pagination.is_last_page,
            loading=self.loading,
            generation=self._generation,
        )

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Registers a listener called with a snapshot on every state change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Dispatch and reconciliation

    def _fire_debounced(self) -> None:
        self._dispatch(
            self._search_text,
            self.pagination.current_page,
            self.pagination.page_size,
        )

    def _on_pagination_change(self, page: int, page_size: int) -> None:
        # The immediate fetch already carries the latest text.
        self._gate.cancel_all()
        self._dispatch(self._search_text, page, page_size)

    def _dispatch(self, text: str, page: int, page_size: int) -> None:
        self._generation += 1
        generation = self._generation

        code = self._resolver.resolve(text)
        if code is NOT_FOUND:
            logger.debug("No region code for %r, skipping fetch", text)
            self._apply_empty()
            self._notify()
            return

        query = SearchQuery(
            raw_text=text, resolved_code=code, page=page, page_size=page_size
        )
        logger.debug(
            "Dispatching code=%s page=%d page_size=%d (generation %d)",
            code,
            page,
            page_size,
            generation,
        )
        task = asyncio.get_running_loop().create_task(self._run(query, generation))
        self._in_flight[task] = generation
        task.add_done_callback(self._forget_task)
        self._notify()

    async def _run(self, query: SearchQuery, generation: int) -> None:
        try:
            outcome = await self._executor.execute(query)
        except Exception:
            logger.exception("Unexpected error while fetching %s", query)
            outcome = QueryOutcome.failure("Unexpected error while fetching")

        self._in_flight.pop(asyncio.current_task(), None)
        if generation != self._generation:
            logger.debug(
                "Dropping stale reply for generation %d (current %d)",
                generation,
                self._generation,
            )
            return
        self._reconcile(outcome)

    def _forget_task(self, task: asyncio.Task) -> None:
        self._in_flight.pop(task, None)

    def _reconcile(self, outcome: QueryOutcome) -> None:
        if not outcome.ok:
            self._rows = []
            self.pagination.clear()
            self._status = SearchStatus.ERROR
        elif outcome.page.total_count == 0 or not outcome.page.rows:
            self._apply_empty()
        else:
            self._rows = list(outcome.page.rows)
            self.pagination.update_totals(outcome.page.total_count)
            self._status = SearchStatus.RESULTS
        self._notify()

    def _apply_empty(self) -> None:
        self._rows = []
        self.pagination.clear()
        self._status = SearchStatus.EMPTY

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Snapshot listener %r failed", listener)

    # Lifecycle

    async def settle(self) -> None:
        """Waits until no search is debouncing and no fetch is in flight."""
        while self._gate.pending or self._in_flight:
            if self._in_flight:
                await asyncio.gather(*list(self._in_flight), return_exceptions=True)
            else:
                await asyncio.sleep(_SETTLE_POLL_SECONDS)

    def close(self) -> list[asyncio.Task]:
        """
        Cancels the pending debounced search and every in-flight fetch.

        Returns the cancelled tasks so async callers can await them.
        """
        if self._closed:
            return []
        self._closed = True
        self._gate.cancel_all()
        tasks = list(self._in_flight)
        for task in tasks:
            task.cancel()
        self._in_flight.clear()
        self._listeners.clear()
        return tasks

    async def aclose(self) -> None:
        tasks = self.close()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def __aenter__(self) -> "SearchController":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _check_open(self) -> None:
        if self._closed:
            raise ControllerClosedError("SearchController has been closed.")
