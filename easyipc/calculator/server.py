"""Calculator server: answers arithmetic requests until told to stop."""

from __future__ import annotations

import argparse
import threading
from collections.abc import Sequence
from typing import Any

from ..connection import Connection
from ..errors import AcceptFailedError, IpcError
from .common import (
    Add,
    CalculatorModel,
    ClientMessage,
    Div,
    DivByZero,
    Mul,
    Ok,
    ServerMessage,
    Stop,
    Stopping,
    Sub,
)

_I32_SPAN = 1 << 32
_I32_MIN = -(1 << 31)


def _i32(value: int) -> int:
    return (value - _I32_MIN) % _I32_SPAN + _I32_MIN


def _div_toward_zero(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def respond(message: ClientMessage) -> ServerMessage:
    """Return the reply to ``message``, with 32-bit wrapping arithmetic."""
    if isinstance(message, Add):
        return Ok(_i32(message.a + message.b))
    if isinstance(message, Sub):
        return Ok(_i32(message.a - message.b))
    if isinstance(message, Mul):
        return Ok(_i32(message.a * message.b))
    if isinstance(message, Div):
        if message.b == 0:
            return DivByZero()
        return Ok(_i32(_div_toward_zero(message.a, message.b)))
    if isinstance(message, Stop):
        return Stopping()
    raise TypeError(f"unexpected message: {message!r}")


def handle_connection(conn: Connection, state: threading.Event) -> None:
    """Answer one request on ``conn``; a stop request sets ``state``."""
    with conn:
        message = conn.receive()
        print(f"Got: {message!r}")
        reply = respond(message)
        if isinstance(message, Stop):
            state.set()
        print(f"Sending: {reply!r}")
        conn.send(reply)


def serve(model: Any = CalculatorModel) -> int:
    """Serve requests until a client asks to stop; return how many were handled."""
    server = model.server()
    stopping = threading.Event()

    def wake_server() -> None:
        stopping.wait()
        # A dummy client moves the accept loop on so that it sees the stop flag.
        try:
            with model.client() as client:
                client.send(Stop())
        except IpcError:
            pass

    threading.Thread(target=wake_server, daemon=True).start()

    workers: list[threading.Thread] = []
    try:
        while not stopping.is_set():
            try:
                for conn in server.connections():
                    if stopping.is_set():
                        conn.close()
                        break
                    worker = threading.Thread(target=handle_connection, args=(conn, stopping))
                    worker.start()
                    workers.append(worker)
            except AcceptFailedError as exc:
                print(f"Couldn't connect: {exc}")
    finally:
        server.close()
    for worker in workers:
        worker.join()
    return len(workers)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the calculator server."""
    parser = argparse.ArgumentParser(description="Calculator server.")
    parser.parse_args(argv)
    serve(CalculatorModel)
    return 0