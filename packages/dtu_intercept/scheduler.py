"""Deferred callback queue with "this turn" and "next turn" bands.

``next_tick`` work runs as soon as the current synchronous work finishes;
``set_immediate`` work runs on the following turn. Within a band callbacks run
in the order they were scheduled, and an immediate queued while a turn is
running waits for the next turn.

A scheduler created outside an event loop only runs when driven explicitly
(``run_ticks``, ``run_once``, ``run_until_idle``). Inside a running asyncio
loop it wakes itself with ``loop.call_soon`` so awaiting ``asyncio.sleep(0)``
is enough to let deferred events fire.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Any, Callable, Deque, Optional, Tuple

logger = logging.getLogger(__name__)

Task = Tuple[Callable[..., Any], Tuple[Any, ...]]


class Scheduler:
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._ticks: Deque[Task] = deque()
        self._immediates: Deque[Task] = deque()
        self._loop = loop
        self._wakeup_scheduled = False

    # Scheduling ------------------------------------------------------------

    def next_tick(self, callback: Callable[..., Any], *args: Any) -> None:
        self._ticks.append((callback, args))
        self._wakeup()

    def set_immediate(self, callback: Callable[..., Any], *args: Any) -> None:
        self._immediates.append((callback, args))
        self._wakeup()

    @property
    def pending(self) -> int:
        return len(self._ticks) + len(self._immediates)

    # Driving ---------------------------------------------------------------

    def run_ticks(self) -> int:
        ran = 0
        while self._ticks:
            callback, args = self._ticks.popleft()
            callback(*args)
            ran += 1
        return ran

    def run_once(self) -> int:
        """Run one turn and return the number of callbacks executed."""

        ran = self.run_ticks()
        for _ in range(len(self._immediates)):
            callback, args = self._immediates.popleft()
            callback(*args)
            ran += 1 + self.run_ticks()
        return ran

    def run_until_idle(self, max_turns: int = 1000) -> int:
        ran = 0
        for _ in range(max_turns):
            if not self.pending:
                return ran
            ran += self.run_once()
        if self.pending:
            raise RuntimeError(
                f"Scheduler still busy after {max_turns} turns ({self.pending} pending)"
            )
        return ran

    # Event loop integration ------------------------------------------------

    def _current_loop(self) -> Optional[asyncio.AbstractEventLoop]:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    def _wakeup(self) -> None:
        if self._wakeup_scheduled:
            return
        loop = self._current_loop()
        if loop is None or loop.is_closed():
            return
        self._wakeup_scheduled = True
        loop.call_soon(self._run_from_loop)

    def _run_from_loop(self) -> None:
        self._wakeup_scheduled = False
        try:
            self.run_once()
        finally:
            if self.pending:
                self._wakeup()


_default_scheduler = Scheduler()


def get_scheduler() -> Scheduler:
    return _default_scheduler


def set_scheduler(scheduler: Scheduler) -> Scheduler:
    """Replace the process default scheduler and return the previous one."""

    global _default_scheduler
    previous = _default_scheduler
    _default_scheduler = scheduler
    logger.debug("Default scheduler replaced")
    return previous
