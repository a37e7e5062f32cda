"""Client-facing exports for dtu_intercept."""

from .common import is_binary_buffer, merge_chunks, to_bytes
from .emitter import EventEmitter, RequestEvent, ResponseEvent, SocketEvent
from .errors import (
    AbortError,
    RequestAbortedError,
    RequestStateError,
    WriteAfterEndError,
)
from .options import RequestOptions, apply_options
from .request import ClientRequest, RequestLike
from .request_wrapper import RequestState, RequestWrapper, create_request
from .response import IncomingMessage
from .scheduler import Scheduler, get_scheduler, set_scheduler
from .socket import Connection, Socket

__all__ = [
    "AbortError",
    "ClientRequest",
    "Connection",
    "EventEmitter",
    "IncomingMessage",
    "RequestAbortedError",
    "RequestEvent",
    "RequestLike",
    "RequestOptions",
    "RequestState",
    "RequestStateError",
    "RequestWrapper",
    "ResponseEvent",
    "Scheduler",
    "Socket",
    "SocketEvent",
    "WriteAfterEndError",
    "apply_options",
    "create_request",
    "get_scheduler",
    "is_binary_buffer",
    "merge_chunks",
    "set_scheduler",
    "to_bytes",
]
