"""Synthetic transport objects standing in for a live connection."""

from __future__ import annotations

import base64
import logging
import random
import time
from typing import Any, Callable, Optional

from .emitter import EventEmitter, SocketEvent

logger = logging.getLogger(__name__)


class Connection(EventEmitter):
    event_type = SocketEvent


class Socket(Connection):
    """Socket-shaped object without I/O.

    Timeouts are stored, never armed; a driver simulating elapsed time calls
    :meth:`check_timeout` to fire them.
    """

    def __init__(self) -> None:
        super().__init__()
        self.writable = True
        self.readable = True
        self.timeout: Optional[float] = None
        self.timeout_function: Optional[Callable[[], Any]] = None

    def set_timeout(self, timeout: float, callback: Optional[Callable[[], Any]] = None):
        self.timeout = timeout
        self.timeout_function = callback
        return self

    def check_timeout(self, delay: float) -> bool:
        if not self.timeout or delay <= self.timeout:
            return False
        logger.debug(f"Socket timeout after {delay} (limit {self.timeout})")
        if self.timeout_function is not None:
            self.timeout_function()
        else:
            self.emit(SocketEvent.TIMEOUT)
        return True

    def set_no_delay(self, no_delay: bool = True) -> None:
        return None

    def set_keep_alive(self, enable: bool = False, initial_delay: float = 0) -> None:
        return None

    def destroy(self, error: Optional[BaseException] = None) -> None:
        return None

    def resume(self) -> None:
        return None

    def get_peer_certificate(self) -> str:
        seed = random.random() * 10000 + time.time() * 1000
        return base64.b64encode(str(seed).encode("ascii")).decode("ascii")
