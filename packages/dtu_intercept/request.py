"""Request-shaped objects handed to client code.

:class:`ClientRequest` carries the state a platform client request owns before
any transport is attached: method, path, host and a case-insensitive header
store. Its lifecycle methods are inert until :class:`RequestWrapper` takes the
request over.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

from requests.structures import CaseInsensitiveDict

from .emitter import EventEmitter, RequestEvent


@runtime_checkable
class RequestLike(Protocol):
    """Surface shared by a request and every wrapper around it."""

    def write(self, data: Any, encoding: Optional[str] = None) -> bool: ...

    def end(self, data: Any = None, encoding: Optional[str] = None) -> None: ...

    def abort(self) -> None: ...

    def on(self, event: Any, listener: Any) -> Any: ...

    def once(self, event: Any, listener: Any) -> Any: ...

    def get_header(self, name: str) -> Any: ...

    def set_header(self, name: str, value: Any) -> None: ...


class ClientRequest(EventEmitter):
    event_type = RequestEvent

    def __init__(
        self,
        method: str = "GET",
        path: Optional[str] = "/",
        *,
        host: Optional[str] = None,
        headers: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__()
        self.method = method.upper()
        self.path = path
        self.host = host
        self.connection: Any = None
        self.socket: Any = None
        self._headers: CaseInsensitiveDict = CaseInsensitiveDict(headers or {})

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.method} {self.path}>"

    # Headers ---------------------------------------------------------------

    def get_header(self, name: str) -> Any:
        return self._headers.get(name)

    def set_header(self, name: str, value: Any) -> None:
        self._headers[name] = value

    def has_header(self, name: str) -> bool:
        return name in self._headers

    def remove_header(self, name: str) -> None:
        self._headers.pop(name, None)

    def get_headers(self) -> Dict[str, Any]:
        return {name.lower(): value for name, value in self._headers.items()}

    # Lifecycle -------------------------------------------------------------

    def write(self, data: Any, encoding: Optional[str] = None) -> bool:
        raise NotImplementedError("request has no transport; wrap it first")

    def end(self, data: Any = None, encoding: Optional[str] = None) -> None:
        raise NotImplementedError("request has no transport; wrap it first")

    def abort(self) -> None:
        raise NotImplementedError("request has no transport; wrap it first")

    # Socket passthroughs ---------------------------------------------------

    def set_timeout(self, timeout: float, callback=None):
        if self.socket is not None:
            self.socket.set_timeout(timeout, callback)
        return self

    def set_no_delay(self, no_delay: bool = True) -> None:
        if self.socket is not None:
            self.socket.set_no_delay(no_delay)

    def set_socket_keep_alive(self, enable: bool = False, initial_delay: float = 0) -> None:
        if self.socket is not None:
            self.socket.set_keep_alive(enable, initial_delay)
