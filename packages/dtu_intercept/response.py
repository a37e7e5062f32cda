"""Synthetic inbound message paired with a wrapped request."""

from __future__ import annotations

import codecs
from typing import Any, List, Optional, Union

from requests.structures import CaseInsensitiveDict

from .common import to_bytes
from .emitter import EventEmitter, ResponseEvent


class IncomingMessage(EventEmitter):
    """Readable-stream-shaped response.

    ``req`` points back at the request and ``socket`` is the request's socket
    instance, shared rather than copied.
    """

    event_type = ResponseEvent

    def __init__(self, req: Any = None, socket: Any = None) -> None:
        super().__init__()
        self.req = req
        self.socket = socket
        self.headers: CaseInsensitiveDict = CaseInsensitiveDict()
        self.status_code: Optional[int] = None
        self.http_version = "1.1"
        self.complete = False
        self._encoding: Optional[str] = None
        self._decoder: Optional[codecs.IncrementalDecoder] = None
        self._read_decoder: Optional[codecs.IncrementalDecoder] = None
        self._chunks: List[bytes] = []

    def set_encoding(self, encoding: str):
        """Decode data events and reads as text; characters may span chunks."""

        self._encoding = encoding
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._read_decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        return self

    def push(self, chunk: Union[str, bytes, None], encoding: Optional[str] = None) -> bool:
        if chunk is None:
            if self._decoder is not None:
                tail = self._decoder.decode(b"", final=True)
                if tail:
                    self.emit(ResponseEvent.DATA, tail)
            self.complete = True
            self.emit(ResponseEvent.END)
            return False
        data = to_bytes(chunk, encoding)
        self._chunks.append(data)
        if self._decoder is None:
            self.emit(ResponseEvent.DATA, data)
        else:
            text = self._decoder.decode(data)
            if text:
                self.emit(ResponseEvent.DATA, text)
        return True

    def read(self) -> Union[bytes, str]:
        data = b"".join(self._chunks)
        self._chunks.clear()
        if self._read_decoder is None:
            return data
        return self._read_decoder.decode(data, final=self.complete)
