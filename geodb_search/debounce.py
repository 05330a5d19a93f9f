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
Trailing-edge debounce on top of the asyncio event loop.
"""

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_DELAY_MS = 600


class ScheduledTask:
    """A task armed on the event loop timer. Runs at most once."""

    def __init__(self, task: Callable[[], None]) -> None:
        self._task = task
        self._handle: asyncio.TimerHandle | None = None
        self.cancelled = False
        self.fired = False

    def arm(self, loop: asyncio.AbstractEventLoop, delay_seconds: float) -> None:
        self._handle = loop.call_later(delay_seconds, self._run)

    def _run(self) -> None:
        if self.cancelled:
            return
        self.fired = True
        self._task()

    def cancel(self) -> None:
        if self.fired or self.cancelled:
            return
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()

    @property
    def pending(self) -> bool:
        return not (self.fired or self.cancelled)


class DebounceGate:
    """
    Holds at most one pending task.

    Every schedule() call cancels the pending task and re-arms with the full
    delay, so only the last call of a burst runs, once the input has been
    quiet for the delay.
    """

    def __init__(self, delay_ms: int = DEFAULT_DELAY_MS) -> None:
        self.delay_ms = delay_ms
        self._pending: ScheduledTask | None = None

    def schedule(
        self, task: Callable[[], None], delay_ms: int | None = None
    ) -> ScheduledTask:
        """Must be called from a coroutine or callback running on the loop."""
        loop = asyncio.get_running_loop()
        self.cancel_all()
        delay = self.delay_ms if delay_ms is None else delay_ms

        scheduled = ScheduledTask(self._wrap(task))
        scheduled.arm(loop, delay / 1000)
        self._pending = scheduled
        return scheduled

    def _wrap(self, task: Callable[[], None]) -> Callable[[], None]:
        def run() -> None:
            self._pending = None
            task()

        return run

    def cancel_all(self) -> None:
        if self._pending is not None:
            logger.debug("Cancelling pending debounced task")
            self._pending.cancel()
            self._pending = None

    @property
    def pending(self) -> bool:
        return self._pending is not None and self._pending.pending
