"""Framed message exchange over a stream socket.

Every packet is the magic bytes, the payload length as a little-endian
unsigned 64-bit integer, and the pickled payload.
"""

from __future__ import annotations

import pickle
import socket
import struct
import sys
from typing import Any

from .errors import (
    DeserializationError,
    HeaderMismatchError,
    PacketTooLargeError,
    ReadFailedError,
    SerializationError,
    UnexpectedEofError,
    WriteFailedError,
)

DEFAULT_MAGIC = b"4242"

_LENGTH = struct.Struct("<Q")


def _as_bytes(magic: bytes | str) -> bytes:
    return magic.encode("utf-8") if isinstance(magic, str) else bytes(magic)


def header_length(magic: bytes | str) -> int:
    """Return the size in bytes of a packet header for these magic bytes."""
    return len(_as_bytes(magic)) + _LENGTH.size


def make_header(magic: bytes | str, data: bytes) -> bytes:
    """Build the header that precedes ``data`` on the wire."""
    return _as_bytes(magic) + _LENGTH.pack(len(data))


def parse_header(magic: bytes | str, header: bytes) -> int:
    """Validate a header and return the payload length it announces."""
    magic = _as_bytes(magic)
    if len(header) < header_length(magic):
        raise UnexpectedEofError()
    if header[: len(magic)] != magic:
        raise HeaderMismatchError()
    (length,) = _LENGTH.unpack_from(header, len(magic))
    if length > sys.maxsize:
        raise PacketTooLargeError()
    return length


class Connection:
    """A connection that sends and receives whole messages."""

    def __init__(self, sock: socket.socket, magic: bytes | str = DEFAULT_MAGIC) -> None:
        self._sock = sock
        self._reader = sock.makefile("rb")
        self.magic = _as_bytes(magic)

    def send(self, message: Any) -> None:
        """Send one message to the other end."""
        try:
            data = pickle.dumps(message)
        except (pickle.PicklingError, TypeError, AttributeError) as exc:
            raise SerializationError(exc) from exc
        try:
            self._sock.sendall(make_header(self.magic, data) + data)
        except OSError as exc:
            raise WriteFailedError(exc) from exc

    def receive(self) -> Any:
        """Block until one whole message has arrived and return it."""
        header = self._read_exact(header_length(self.magic))
        size = parse_header(self.magic, header)
        payload = self._read_exact(size)
        try:
            return pickle.loads(payload)
        except Exception as exc:
            raise DeserializationError(exc) from exc

    def _read_exact(self, size: int) -> bytes:
        try:
            chunk = self._reader.read(size)
        except OSError as exc:
            raise ReadFailedError(exc) from exc
        if chunk is None or len(chunk) != size:
            raise UnexpectedEofError()
        return chunk

    def close(self) -> None:
        """Close the underlying socket."""
        self._reader.close()
        self._sock.close()

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()