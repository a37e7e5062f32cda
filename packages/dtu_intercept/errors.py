"""Errors delivered through request and response events."""

from __future__ import annotations

ABORTED_MESSAGE = "Request aborted."


class RequestStateError(Exception):
    """A lifecycle call arrived in a state that cannot accept it."""

    code = "ERR_REQUEST_STATE"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RequestAbortedError(RequestStateError):
    code = "ERR_REQUEST_ABORTED"

    def __init__(self, message: str = ABORTED_MESSAGE) -> None:
        super().__init__(message)


class WriteAfterEndError(RequestStateError):
    code = "ERR_STREAM_WRITE_AFTER_END"

    def __init__(self, message: str = "write after end") -> None:
        super().__init__(message)


class AbortError(Exception):
    """Payload of the response ``close`` event emitted by ``abort()``."""

    code = "aborted"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message
