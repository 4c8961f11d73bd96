"""Client/server models: which socket, which magic bytes and how servers start.

Define message types, then a subclass of :class:`IpcModel` whose ``model``
class method returns a :class:`ClientServerModel`::

    class MyModel(IpcModel):
        @classmethod
        def model(cls):
            return ClientServerOptions(namespace("my_app")).create()

    server = MyModel.server()   # must exist before clients connect
    client = MyModel.client()
"""

from __future__ import annotations

import abc
import contextlib
import dataclasses
import errno
import os
import socket
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .client import Client
from .connection import DEFAULT_MAGIC, _as_bytes
from .errors import (
    BadPathError,
    ServerAlreadyRunningError,
    SocketAlreadyExistsError,
    SocketConnectError,
)
from .handlers import setup_handlers
from .namespace import namespaced_supported
from .server import Server

_server_lock = threading.Lock()
_server_running = False


def _claim_server_slot() -> bool:
    """Mark a server as running in this process; return whether one already was."""
    global _server_running
    with _server_lock:
        was_running = _server_running
        _server_running = True
    return was_running


def socket_address(path: str | os.PathLike[str]) -> str:
    """Turn a socket name into an address for a Unix domain socket.

    A single-component name becomes an abstract namespace address where
    those are supported; anything else is used as a file system path.
    """
    path = Path(path)
    address = os.fspath(path)
    if "\0" in address:
        raise SocketConnectError(ValueError("embedded null byte in socket name"))
    if len(path.parts) == 1 and namespaced_supported():
        name = path.name
        if name in ("", ".", ".."):
            raise BadPathError()
        return "\0" + name
    return address


def _new_socket() -> socket.socket:
    family = getattr(socket, "AF_UNIX", None)
    if family is None:
        raise SocketConnectError(OSError("Unix domain sockets are not supported"))
    return socket.socket(family, socket.SOCK_STREAM)


@dataclass(frozen=True)
class ClientServerOptions:
    """Options from which a :class:`ClientServerModel` is created.

    The builder methods return a new set of options and leave this one unchanged.
    """

    socket_name: Path
    magic: bytes = DEFAULT_MAGIC
    check_single_server: bool = True
    handler: Callable[[ClientServerModel], None] = setup_handlers

    def __post_init__(self) -> None:
        object.__setattr__(self, "socket_name", Path(os.fspath(self.socket_name)))
        object.__setattr__(self, "magic", _as_bytes(self.magic))

    def magic_bytes(self, magic: bytes | str) -> ClientServerOptions:
        """Use other magic bytes in packet headers.

        Not recommended: client and server must agree on them, so changing
        them breaks compatibility with earlier versions of a program.
        """
        return dataclasses.replace(self, magic=_as_bytes(magic))

    def handlers(self, hook: Callable[[ClientServerModel], None]) -> ClientServerOptions:
        """Replace the hook run once when a server starts.

        Not recommended: the default removes the socket file when the
        process dies from an exception or a termination signal.
        """
        return dataclasses.replace(self, handler=hook)

    def disable_single_server_check(self) -> ClientServerOptions:
        """Allow more than one server in this process."""
        return dataclasses.replace(self, check_single_server=False)

    def create(self) -> ClientServerModel:
        """Create a model with these options."""
        return ClientServerModel(self)


@dataclass(frozen=True)
class ClientServerModel:
    """A client/server model from which clients and servers are made."""

    options: ClientServerOptions

    @property
    def socket_name(self) -> Path:
        """The socket name the model uses."""
        return self.options.socket_name

    @property
    def magic(self) -> bytes:
        """The magic bytes that start every packet."""
        return self.options.magic

    def client(self) -> Client:
        """Connect a new client to the server."""
        address = socket_address(self.socket_name)
        sock = _new_socket()
        try:
            sock.connect(address)
        except OSError as exc:
            sock.close()
            raise SocketConnectError(exc) from exc
        return Client(sock, self.magic)

    def server(self) -> Server:
        """Start a server listening on the model's socket.

        It must be created before any client connects.
        """
        address = socket_address(self.socket_name)
        listener = _new_socket()
        try:
            listener.bind(address)
        except OSError as exc:
            listener.close()
            if exc.errno == errno.EADDRINUSE:
                raise SocketAlreadyExistsError(exc) from exc
            raise SocketConnectError(exc) from exc

        path = None if address.startswith("\0") else Path(address)
        try:
            listener.listen()
        except OSError as exc:
            self._discard(listener, path)
            raise SocketConnectError(exc) from exc

        if _claim_server_slot() and self.options.check_single_server:
            self._discard(listener, path)
            raise ServerAlreadyRunningError()

        # Handlers come after the listener so that a running server's socket is never removed.
        self.options.handler(self)
        return Server(listener, self.magic, path)

    @staticmethod
    def _discard(listener: socket.socket, path: Path | None) -> None:
        listener.close()
        if path is not None:
            with contextlib.suppress(FileNotFoundError):
                path.unlink()


class IpcModel(abc.ABC):
    """A named client/server model; subclasses define :meth:`model`."""

    @classmethod
    @abc.abstractmethod
    def model(cls) -> ClientServerModel:
        """Return the model; it must be the same every time it is called."""

    @classmethod
    def client(cls) -> Client:
        """Connect a new client to the server of this model."""
        return cls.model().client()

    @classmethod
    def server(cls) -> Server:
        """Start the server of this model."""
        return cls.model().server()