"""Declaring IPC models with sensible defaults.

``ipc_model`` turns a plain class into an :class:`~easyipc.model.IpcModel`
whose socket is named after the top-level package that defines the class
and whose packet magic bytes are that package's installed version::

    @ipc_model(client_message=ClientMessage, server_message=ServerMessage)
    class MyModel:
        pass
"""

from __future__ import annotations

import abc
import enum
import importlib.metadata
import os
from collections.abc import Callable
from pathlib import Path

from .connection import DEFAULT_MAGIC
from .model import ClientServerModel, ClientServerOptions, IpcModel
from .namespace import namespace

_PACKAGE_NAME = "easyipc"
_SERVER_MESSAGE = "server_message"
_CLIENT_MESSAGE = "client_message"


class DeriveError(TypeError):
    """``ipc_model`` was used with missing or invalid arguments."""

    class Kind(enum.Enum):
        """What was wrong with the arguments."""

        MISSING_SERVER_MESSAGE = "missing_server_message"
        MISSING_CLIENT_MESSAGE = "missing_client_message"
        GENERIC = "generic"

    def __init__(self, kind: DeriveError.Kind) -> None:
        self.kind = kind
        super().__init__(self._describe(kind))

    @staticmethod
    def _describe(kind: DeriveError.Kind) -> str:
        if kind is DeriveError.Kind.MISSING_SERVER_MESSAGE:
            return f"missing {_SERVER_MESSAGE} = YourServerMessage"
        if kind is DeriveError.Kind.MISSING_CLIENT_MESSAGE:
            return f"missing {_CLIENT_MESSAGE} = YourClientMessage"
        usage = (
            f"@ipc_model({_CLIENT_MESSAGE}=YourClientMessage, "
            f"{_SERVER_MESSAGE}=YourServerMessage)"
        )
        return (
            f"invalid or missing arguments for `ipc_model` from {_PACKAGE_NAME}\n"
            f"usage: {usage}"
        )


def ipc_namespace(name: str | os.PathLike[str]) -> Path:
    """Return the default socket name for the package called ``name``."""
    return namespace(name)


def default_model(name: str | os.PathLike[str], version: bytes | str) -> ClientServerModel:
    """Create a model on the default socket of ``name`` with ``version`` as magic bytes."""
    return ClientServerOptions(ipc_namespace(name)).magic_bytes(version).create()


def _package_version(name: str) -> bytes | str:
    try:
        return importlib.metadata.version(name)
    except importlib.metadata.PackageNotFoundError:
        return DEFAULT_MAGIC


def ipc_model(
    client_message: type | None = None,
    server_message: type | None = None,
) -> Callable[[type], type]:
    """Class decorator that makes the decorated class an :class:`IpcModel`.

    The resulting class carries the message types as ``ClientMsg`` and
    ``ServerMsg``.
    """
    if server_message is None:
        raise DeriveError(DeriveError.Kind.MISSING_SERVER_MESSAGE)
    if client_message is None:
        raise DeriveError(DeriveError.Kind.MISSING_CLIENT_MESSAGE)
    if not isinstance(server_message, type) or not isinstance(client_message, type):
        raise DeriveError(DeriveError.Kind.GENERIC)

    def decorate(cls: type) -> type:
        if not isinstance(cls, type):
            raise DeriveError(DeriveError.Kind.GENERIC)
        root = cls.__module__.partition(".")[0]

        def model(klass: type) -> ClientServerModel:
            return default_model(root, _package_version(root))

        attributes = {
            "__module__": cls.__module__,
            "__qualname__": cls.__qualname__,
            "__doc__": cls.__doc__,
            "ClientMsg": client_message,
            "ServerMsg": server_message,
            "model": classmethod(model),
        }
        bases = (cls,) if issubclass(cls, IpcModel) else (cls, IpcModel)
        return abc.ABCMeta(cls.__name__, bases, attributes)

    return decorate