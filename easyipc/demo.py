"""A small end-to-end demonstration: one server, one client, one exchange."""

from __future__ import annotations

import argparse
import enum
import threading
from collections.abc import Sequence
from typing import Any

from .declare import ipc_model


class ServerMessage(enum.Enum):
    """Replies the demo server can send."""

    OK = "ok"
    FAIL = "fail"


class ClientMessage(enum.Enum):
    """Requests the demo client can send."""

    START = "start"
    STOP = "stop"


@ipc_model(client_message=ClientMessage, server_message=ServerMessage)
class DemoModel:
    """Model used by the demo command."""


def run_demo(model: Any) -> tuple[Any, Any]:
    """Exchange one message between a server and a client made from ``model``.

    ``model`` is anything with ``server()`` and ``client()``, such as an
    :class:`~easyipc.model.IpcModel` subclass or a model instance. Returns
    the message the server received and the reply the client received.
    """
    server = model.server()
    try:
        client = model.client()
    except BaseException:
        server.close()
        raise

    received: list[Any] = []

    def serve_one() -> None:
        try:
            for conn in server.connections():
                with conn:
                    received.append(conn.receive())
                    conn.send(ServerMessage.OK)
                break
        finally:
            # Closing the server removes its socket file.
            server.close()

    thread = threading.Thread(target=serve_one)
    thread.start()
    with client:
        client.send(ClientMessage.START)
        response = client.receive()
    thread.join()
    if not received:
        raise RuntimeError("the server did not receive a message")
    return received[0], response


def main(argv: Sequence[str] | None = None) -> int:
    """Run the demo and print both messages."""
    parser = argparse.ArgumentParser(description="Exchange one message between a server and a client.")
    parser.parse_args(argv)
    received, response = run_demo(DemoModel)
    print(received)
    print(response)
    return 0