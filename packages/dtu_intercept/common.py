"""Byte coercion and inspection helpers for captured request bodies."""

from __future__ import annotations

import base64
import binascii
import codecs
from typing import Iterable, Optional, Union

BytesLike = Union[bytes, bytearray, memoryview]

_ENCODING_ALIASES = {
    "utf8": "utf-8",
    "binary": "latin-1",
    "latin1": "latin-1",
    "ucs2": "utf-16-le",
    "ucs-2": "utf-16-le",
    "utf16le": "utf-16-le",
}


def to_bytes(data: Union[str, BytesLike], encoding: Optional[str] = None) -> bytes:
    """Return ``data`` as bytes, decoding text according to ``encoding``."""

    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    if not isinstance(data, str):
        raise TypeError(
            f"data must be str or a bytes-like object, not {type(data).__name__}"
        )

    name = (encoding or "utf-8").lower()
    if name == "hex":
        try:
            return bytes.fromhex(data)
        except ValueError:
            # Node keeps the leading valid pairs of a malformed hex string.
            valid = []
            for index in range(0, len(data) - 1, 2):
                pair = data[index : index + 2]
                try:
                    valid.append(int(pair, 16))
                except ValueError:
                    break
            return bytes(valid)
    if name == "base64":
        try:
            return base64.b64decode(data + "=" * (-len(data) % 4))
        except binascii.Error:
            return base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))

    codec = codecs.lookup(_ENCODING_ALIASES.get(name, name))
    return data.encode(codec.name)


def merge_chunks(chunks: Iterable[BytesLike]) -> bytes:
    return b"".join(bytes(chunk) for chunk in chunks)


def is_binary_buffer(buffer: BytesLike) -> bool:
    """A buffer is binary when it does not survive a utf-8 round trip."""

    raw = bytes(buffer)
    try:
        return raw.decode("utf-8").encode("utf-8") != raw
    except UnicodeDecodeError:
        return True


def basic_auth_header(credential: str) -> str:
    token = base64.b64encode(credential.encode("utf-8")).decode("ascii")
    return f"Basic {token}"
