"""Lifecycle simulation for intercepted client requests.

:class:`RequestWrapper` takes over an existing request object in place: it
installs ``write``/``end``/``abort`` and subscription hooks on the request
itself, attaches a synthetic connection and socket, applies the request
options and pairs the request with one :class:`IncomingMessage`. The wrapper
delegates everything else to the request, so holders of either reference see
the same state.

Event order is fixed: ``end()`` emits ``complete(False)``, ``finish``, ``end``;
``abort()`` emits ``complete(True)`` on the request and then ``close`` with an
:class:`AbortError` on the response. ``drain`` and ``continue`` are deferred
with ``set_immediate``; errors for calls made after ``abort()`` (or writes
after ``end()``) are deferred with ``next_tick``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, List, Mapping, Optional, Union

from .common import is_binary_buffer, merge_chunks, to_bytes
from .emitter import EventEmitter, RequestEvent, ResponseEvent, SocketEvent
from .errors import AbortError, RequestAbortedError, RequestStateError, WriteAfterEndError
from .options import RequestOptions, apply_options
from .request import ClientRequest
from .response import IncomingMessage
from .scheduler import Scheduler, get_scheduler
from .socket import Connection, Socket

logger = logging.getLogger(__name__)


class RequestState(str, Enum):
    OPEN = "open"
    ENDED = "ended"
    ABORTED = "aborted"


class RequestWrapper:
    """Take over ``request`` and expose it with a simulated lifecycle.

    The ``path`` option replaces the request path whenever the key is given,
    even as ``None``; without it the request keeps its own path. An existing
    ``connection`` is kept, the socket is always replaced.
    """

    def __init__(
        self,
        request: Any,
        options: Union[None, Mapping[str, Any], RequestOptions] = None,
        *,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        options = RequestOptions.coerce(options)
        object.__setattr__(self, "_request", request)
        object.__setattr__(self, "_scheduler", scheduler or get_scheduler())
        object.__setattr__(self, "_state", RequestState.OPEN)
        object.__setattr__(self, "_buffers", [])

        if getattr(request, "connection", None) is None:
            request.connection = Connection()
        if options.has_path:
            request.path = options.path
        request.socket = Socket()

        object.__setattr__(self, "_response", None)
        self._capture_output()
        self._handle_events()
        apply_options(request, options, self._scheduler)

    # Delegation ------------------------------------------------------------

    def __getattr__(self, name: str) -> Any:
        if name == "_request":
            raise AttributeError(name)
        return getattr(self._request, name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            setattr(self._request, name, value)

    def __repr__(self) -> str:
        return f"<RequestWrapper {self._request!r} state={self._state.value}>"

    @property
    def wrapped(self) -> Any:
        return self._request

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def aborted(self) -> bool:
        return self._state is RequestState.ABORTED

    @property
    def ended(self) -> bool:
        return self._state is RequestState.ENDED

    # The request surface is spelled out so protocol checks see it statically;
    # each call goes to whatever the request currently holds.

    def write(self, data: Any, encoding: Optional[str] = None) -> bool:
        return self._request.write(data, encoding)

    def end(self, data: Any = None, encoding: Optional[str] = None) -> None:
        self._request.end(data, encoding)

    def abort(self) -> None:
        self._request.abort()

    def on(self, event: Any, listener: Any) -> Any:
        return self._request.on(event, listener)

    def once(self, event: Any, listener: Any) -> Any:
        return self._request.once(event, listener)

    def get_header(self, name: str) -> Any:
        return self._request.get_header(name)

    def set_header(self, name: str, value: Any) -> None:
        self._request.set_header(name, value)

    # Response pairing ------------------------------------------------------

    def response(self) -> IncomingMessage:
        if self._response is None:
            response = IncomingMessage(req=self._request, socket=self._request.socket)
            object.__setattr__(self, "_response", response)
        return self._response

    # Body ------------------------------------------------------------------

    def body(self) -> str:
        buffer = merge_chunks(self._buffers)
        if is_binary_buffer(buffer):
            return buffer.hex()
        return buffer.decode("utf-8")

    def request_error(self, error: BaseException) -> None:
        self._scheduler.next_tick(self._request.emit, RequestEvent.ERROR, error)

    # Lifecycle -------------------------------------------------------------

    def _capture_output(self) -> None:
        request = self._request

        def complete() -> None:
            aborted = self._state is RequestState.ABORTED
            request.emit(RequestEvent.COMPLETE, aborted)

        def rejection() -> RequestStateError:
            if self._state is RequestState.ABORTED:
                return RequestAbortedError()
            return WriteAfterEndError()

        def write(data: Any, encoding: Optional[str] = None) -> bool:
            if self._state is RequestState.OPEN:
                self._buffers.append(to_bytes(data, encoding))
            else:
                self.request_error(rejection())
            self._scheduler.set_immediate(request.emit, RequestEvent.DRAIN)
            return False

        def end(data: Any = None, encoding: Optional[str] = None) -> None:
            if self._state is RequestState.ABORTED:
                self.request_error(RequestAbortedError())
                return
            if self._state is RequestState.ENDED:
                return
            if data:
                write(data, encoding)
            object.__setattr__(self, "_state", RequestState.ENDED)
            logger.debug(f"Ended {request!r} with {len(self._buffers)} chunk(s)")
            complete()
            request.emit(RequestEvent.FINISH)
            request.emit(RequestEvent.END)

        def abort() -> None:
            if self._state is not RequestState.OPEN:
                return
            object.__setattr__(self, "_state", RequestState.ABORTED)
            logger.debug(f"Aborted {request!r}")
            complete()
            self.response().emit(ResponseEvent.CLOSE, AbortError())

        request.write = write
        request.end = end
        request.abort = abort

    # Event sequencing ------------------------------------------------------

    def _handle_events(self) -> None:
        request = self._request
        socket = request.socket

        handshaking = False

        def handshake() -> None:
            nonlocal handshaking
            # Listeners that subscribe from inside the handshake see its
            # remaining events instead of starting another one.
            if handshaking:
                return
            handshaking = True
            try:
                request.emit(RequestEvent.SOCKET, socket)
                socket.emit(SocketEvent.CONNECT, socket)
                socket.emit(SocketEvent.SECURE_CONNECT, socket)
            finally:
                handshaking = False

        def shim(emitter: EventEmitter, subscribe, triggers: List[Enum]):
            def subscribe_and_connect(event, listener):
                subscribe(event, listener)
                if emitter.event_type(event) in triggers:
                    handshake()
                return emitter

            return subscribe_and_connect

        request_triggers: List[Enum] = [RequestEvent.SOCKET]
        socket_triggers: List[Enum] = [SocketEvent.CONNECT, SocketEvent.SECURE_CONNECT]

        request.on = shim(request, request.on, request_triggers)
        request.once = shim(request, request.once, request_triggers)
        socket.on = shim(socket, socket.on, socket_triggers)
        socket.once = shim(socket, socket.once, socket_triggers)


def create_request(
    options: Union[None, Mapping[str, Any], RequestOptions] = None,
    *,
    scheduler: Optional[Scheduler] = None,
) -> RequestWrapper:
    """Build a :class:`ClientRequest` from ``options`` and wrap it."""

    options = RequestOptions.coerce(options)
    request = ClientRequest(options.method, options.path or "/", host=options.host)
    return RequestWrapper(request, options, scheduler=scheduler)
