import socket

import pytest

from easyipc.client import Client
from easyipc.connection import Connection
from easyipc.errors import HeaderMismatchError, UnexpectedEofError, WriteFailedError


@pytest.fixture
def pair():
    a, b = socket.socketpair(socket.AF_UNIX, socket.SOCK_STREAM)
    yield a, b
    a.close()
    b.close()


def test_ping_pong(pair):
    a, b = pair
    client, server_side = Client(a), Connection(b)
    client.send("Ping")
    assert server_side.receive() == "Ping"
    server_side.send("Pong")
    assert client.receive() == "Pong"


def test_custom_magic_must_match(pair):
    a, b = pair
    client, server_side = Client(a, b"1.2.3"), Connection(b, b"1.2.3")
    client.send(("Add", 2, 3))
    assert server_side.receive() == ("Add", 2, 3)

    other = Connection(b, b"9.9.9")
    client.send("Stop")
    with pytest.raises(HeaderMismatchError):
        other.receive()


def test_errors_after_server_closed(pair):
    a, b = pair
    client = Client(a)
    b.close()
    with pytest.raises(WriteFailedError):
        client.send("Ping")
    with pytest.raises(UnexpectedEofError):
        client.receive()


def test_context_manager_closes(pair):
    a, b = pair
    with Client(a) as client:
        client.send("Stop")
    server_side = Connection(b)
    assert server_side.receive() == "Stop"
    with pytest.raises(UnexpectedEofError):
        server_side.receive()