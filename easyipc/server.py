"""Server side of a client/server channel."""

from __future__ import annotations

import contextlib
import os
import socket
from collections.abc import Iterator
from pathlib import Path

from .connection import DEFAULT_MAGIC, Connection, _as_bytes
from .errors import AcceptFailedError


class Server:
    """A server listening on a socket and handing out client connections."""

    def __init__(
        self,
        listener: socket.socket,
        magic: bytes | str = DEFAULT_MAGIC,
        path: str | os.PathLike[str] | None = None,
    ) -> None:
        self._listener = listener
        self.magic = _as_bytes(magic)
        self.path = Path(path) if path is not None else None
        self._closed = False

    @property
    def closed(self) -> bool:
        """Whether the server has been closed."""
        return self._closed

    def connections(self) -> Iterator[Connection]:
        """Yield a connection for each incoming client until the server is closed."""
        while not self._closed:
            try:
                sock, _ = self._listener.accept()
            except OSError as exc:
                if self._closed:
                    return
                raise AcceptFailedError(exc) from exc
            yield Connection(sock, self.magic)

    def close(self) -> None:
        """Stop listening and remove the socket file, if there is one."""
        if self._closed:
            return
        self._closed = True
        self._listener.close()
        if self.path is not None:
            with contextlib.suppress(FileNotFoundError):
                self.path.unlink()

    def __enter__(self) -> Server:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()