"""Messages and model shared by the calculator server and command line."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..model import ClientServerModel, ClientServerOptions, IpcModel


@dataclass(frozen=True)
class Add:
    """Ask for ``a + b``."""

    a: int
    b: int


@dataclass(frozen=True)
class Sub:
    """Ask for ``a - b``."""

    a: int
    b: int


@dataclass(frozen=True)
class Mul:
    """Ask for ``a * b``."""

    a: int
    b: int


@dataclass(frozen=True)
class Div:
    """Ask for ``a / b``."""

    a: int
    b: int


@dataclass(frozen=True)
class Stop:
    """Ask the server to stop."""


@dataclass(frozen=True)
class Ok:
    """The result of a calculation."""

    value: int


@dataclass(frozen=True)
class Stopping:
    """The server is stopping."""


@dataclass(frozen=True)
class DivByZero:
    """A division by zero was requested."""


ClientMessage = Union[Add, Sub, Mul, Div, Stop]
ServerMessage = Union[Ok, Stopping, DivByZero]


class CalculatorModel(IpcModel):
    """The calculator's client/server model."""

    ClientMsg = ClientMessage
    ServerMsg = ServerMessage

    @classmethod
    def model(cls) -> ClientServerModel:
        """Return the model on the ``calculator`` socket."""
        return ClientServerOptions("calculator").create()