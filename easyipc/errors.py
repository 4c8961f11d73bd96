"""Exceptions raised while setting up or using an IPC channel."""

from __future__ import annotations


class IpcError(Exception):
    """Base class for every error raised by this package."""

    description = "inter-process communication failed"

    def __init__(self, cause: BaseException | None = None) -> None:
        self.cause = cause
        if cause is None:
            super().__init__(self.description)
        else:
            super().__init__(f"{self.description}: {cause}")


class ChannelError(IpcError):
    """An error that happened while using an established connection."""

    description = "connection error"


class HeaderMismatchError(ChannelError):
    """The packet header's magic bytes did not match."""

    description = "header didn't match, likely version incompatibility"


class PacketTooLargeError(ChannelError):
    """The packet announced a size that cannot be handled."""

    description = "packet too large, the header may be malformed"


class UnexpectedEofError(ChannelError):
    """The stream ended before a whole packet was read."""

    description = "unexpected end of stream"


class SerializationError(ChannelError):
    """A message could not be serialized."""

    description = "serialization failed"


class DeserializationError(ChannelError):
    """A received payload could not be deserialized."""

    description = "deserialization failed"


class WriteFailedError(ChannelError):
    """Writing to the connection failed."""

    description = "write failed"


class ReadFailedError(ChannelError):
    """Reading from the connection failed."""

    description = "read failed"


class AcceptFailedError(ChannelError):
    """Accepting an incoming connection failed."""

    description = "failed accepting connection"


class InitError(IpcError):
    """An error that happened while creating a server or client."""

    description = "initialization failed"


class NamespaceError(InitError):
    """No namespace or data directory could be determined."""

    description = "could not determine a namespace"


class BadPathError(InitError):
    """The socket path is not valid for the platform or socket type."""

    description = "bad socket path"


class ServerAlreadyRunningError(InitError):
    """A server already runs in this process."""

    description = "a server is already running in this process"


class SocketConnectError(InitError):
    """A generic I/O failure while preparing or connecting to a socket."""

    description = "failed connecting to socket"


class SocketAlreadyExistsError(InitError):
    """The socket a server wants to listen on already exists."""

    description = "socket already exists"