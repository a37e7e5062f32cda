"""Typed publish/subscribe primitives shared by requests, sockets and responses."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, List, Type, Union


# ---------------------------------------------------------------------------
# Event vocabularies
# ---------------------------------------------------------------------------


class RequestEvent(str, Enum):
    COMPLETE = "complete"
    FINISH = "finish"
    END = "end"
    DRAIN = "drain"
    CONTINUE = "continue"
    SOCKET = "socket"
    CLOSE = "close"
    ERROR = "error"
    RESPONSE = "response"


class SocketEvent(str, Enum):
    CONNECT = "connect"
    SECURE_CONNECT = "secureConnect"
    TIMEOUT = "timeout"
    DATA = "data"
    END = "end"
    CLOSE = "close"
    ERROR = "error"


class ResponseEvent(str, Enum):
    DATA = "data"
    END = "end"
    CLOSE = "close"
    ERROR = "error"


Listener = Callable[..., Any]


# ---------------------------------------------------------------------------
# Emitter
# ---------------------------------------------------------------------------


class EventEmitter:
    """Synchronous event bus over a closed set of event kinds.

    Subclasses set ``event_type`` to the enum naming the events they emit.
    Event names may be passed as enum members or their string values; anything
    outside the enum raises :class:`ValueError`.
    """

    event_type: Type[Enum] = RequestEvent

    def __init__(self) -> None:
        self._listeners: Dict[Enum, List[Listener]] = {}

    def _coerce(self, event: Union[Enum, str]) -> Enum:
        return self.event_type(event)

    def on(self, event, listener: Listener):
        self._listeners.setdefault(self._coerce(event), []).append(listener)
        return self

    add_listener = on

    def once(self, event, listener: Listener):
        kind = self._coerce(event)

        def _once(*args):
            self.off(kind, _once)
            return listener(*args)

        _once.listener = listener  # type: ignore[attr-defined]
        self._listeners.setdefault(kind, []).append(_once)
        return self

    def off(self, event, listener: Listener):
        registered = self._listeners.get(self._coerce(event), [])
        for index, candidate in enumerate(registered):
            if candidate is listener or getattr(candidate, "listener", None) is listener:
                del registered[index]
                break
        return self

    remove_listener = off

    def remove_all_listeners(self, event=None):
        if event is None:
            self._listeners.clear()
        else:
            self._listeners.pop(self._coerce(event), None)
        return self

    def listeners(self, event) -> List[Listener]:
        return [
            getattr(candidate, "listener", candidate)
            for candidate in self._listeners.get(self._coerce(event), [])
        ]

    def listener_count(self, event) -> int:
        return len(self._listeners.get(self._coerce(event), []))

    def emit(self, event, *args) -> bool:
        kind = self._coerce(event)
        registered = list(self._listeners.get(kind, []))
        if not registered:
            if kind.value == "error":
                error = args[0] if args else None
                if isinstance(error, BaseException):
                    raise error
                raise RuntimeError(f"Unhandled error event: {error!r}")
            return False
        for listener in registered:
            listener(*args)
        return True
