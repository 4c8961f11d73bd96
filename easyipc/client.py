"""Client side of a client/server channel."""

from __future__ import annotations

import socket
from typing import Any

from .connection import DEFAULT_MAGIC, Connection


class Client:
    """A client connected to a server that sends and receives messages."""

    def __init__(self, sock: socket.socket, magic: bytes | str = DEFAULT_MAGIC) -> None:
        self._connection = Connection(sock, magic)

    def send(self, message: Any) -> None:
        """Send a message to the server."""
        self._connection.send(message)

    def receive(self) -> Any:
        """Receive a message from the server."""
        return self._connection.receive()

    def close(self) -> None:
        """Close the connection to the server."""
        self._connection.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()