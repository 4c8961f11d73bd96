import os
import tempfile
import threading
import uuid
from enum import Enum
from pathlib import Path

import pytest

from easyipc.connection import DEFAULT_MAGIC
from easyipc.errors import (
    HeaderMismatchError,
    ServerAlreadyRunningError,
    SocketAlreadyExistsError,
    SocketConnectError,
    UnexpectedEofError,
    WriteFailedError,
)
from easyipc.handlers import setup_handlers
from easyipc.model import (
    ClientServerModel,
    ClientServerOptions,
    IpcModel,
    socket_address,
)
from easyipc.namespace import namespaced_supported


class ServerMessage(Enum):
    PONG = "pong"


class ClientMessage(Enum):
    PING = "ping"


def _no_handlers(_model):
    return None


def define_model(socket_name):
    class BasicModel(IpcModel):
        @classmethod
        def model(cls):
            return (
                ClientServerOptions(socket_name)
                .disable_single_server_check()
                .handlers(_no_handlers)
                .create()
            )

    return BasicModel


def quiet_options(socket_name):
    return ClientServerOptions(socket_name).disable_single_server_check().handlers(_no_handlers)


@pytest.fixture
def short_dir():
    base = "/tmp" if os.path.isdir("/tmp") else None
    with tempfile.TemporaryDirectory(prefix="eipc", dir=base) as directory:
        yield Path(directory)


@pytest.fixture(params=["single", "path"])
def socket_name(request, short_dir):
    if request.param == "single":
        return f"eipc-{uuid.uuid4().hex[:12]}.sock"
    return short_dir / "test.sock"


def test_basic_multi_client(socket_name):
    model = (
        ClientServerOptions(socket_name)
        .disable_single_server_check()
        .handlers(_no_handlers)
        .create()
    )
    server = model.server()
    num_conn = 10
    received = []

    def serve():
        with server:
            for count, conn in enumerate(server.connections(), start=1):
                with conn:
                    received.append(conn.receive())
                    conn.send(ServerMessage.PONG)
                if count >= num_conn:
                    break

    replies = []
    lock = threading.Lock()

    def talk(client):
        with client:
            client.send(ClientMessage.PING)
            reply = client.receive()
        with lock:
            replies.append(reply)

    threads = [threading.Thread(target=serve)]
    threads += [threading.Thread(target=talk, args=(model.client(),)) for _ in range(num_conn)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=20)

    assert not any(thread.is_alive() for thread in threads)
    assert received == [ClientMessage.PING] * num_conn
    assert replies == [ServerMessage.PONG] * num_conn


def test_basic_multi_server(socket_name):
    model_cls = define_model(socket_name)
    with model_cls.server():
        with pytest.raises(SocketAlreadyExistsError):
            model_cls.server()
        with pytest.raises(SocketAlreadyExistsError):
            (
                ClientServerOptions(socket_name)
                .disable_single_server_check()
                .handlers(_no_handlers)
                .create()
                .server()
            )


def test_basic_send_receive(socket_name):
    model = (
        ClientServerOptions(socket_name)
        .disable_single_server_check()
        .handlers(_no_handlers)
        .create()
    )
    server = model.server()
    received = []

    def serve():
        with server:
            for conn in server.connections():
                with conn:
                    received.append(conn.receive())
                    conn.send(ServerMessage.PONG)
                break

    handle = threading.Thread(target=serve)
    handle.start()

    client = model.client()
    client.send(ClientMessage.PING)
    assert client.receive() is ServerMessage.PONG

    handle.join(timeout=10)
    assert not handle.is_alive()
    assert received == [ClientMessage.PING]

    with pytest.raises(WriteFailedError):
        client.send(ClientMessage.PING)
    with pytest.raises(UnexpectedEofError):
        client.receive()
    client.close()


def test_socket_file_lifecycle(short_dir):
    path = short_dir / "life.sock"
    server = (
        ClientServerOptions(path)
        .disable_single_server_check()
        .handlers(_no_handlers)
        .create()
        .server()
    )
    assert path.exists()
    server.close()
    assert not path.exists()


def test_client_without_server_fails(short_dir):
    model = (
        ClientServerOptions(short_dir / "nobody.sock")
        .disable_single_server_check()
        .handlers(_no_handlers)
        .create()
    )
    with pytest.raises(SocketConnectError):
        model.client()


def test_server_in_missing_directory_fails(short_dir):
    model = (
        ClientServerOptions(short_dir / "missing" / "x.sock")
        .disable_single_server_check()
        .handlers(_no_handlers)
        .create()
    )
    with pytest.raises(SocketConnectError):
        model.server()


def test_single_threaded_round_trip(short_dir):
    model = quiet_options(short_dir / "rt.sock").create()
    with model.server() as server, model.client() as client:
        client.send({"numbers": [1, 2, 3]})
        with next(iter(server.connections())) as conn:
            assert conn.receive() == {"numbers": [1, 2, 3]}
            conn.send(("ok", 6))
            assert client.receive() == ("ok", 6)


def test_magic_mismatch_is_detected(short_dir):
    path = short_dir / "magic.sock"
    server_model = quiet_options(path).magic_bytes("1.0.0").create()
    client_model = quiet_options(path).magic_bytes("2.0.0").create()
    with server_model.server() as server, client_model.client() as client:
        client.send(ClientMessage.PING)
        with next(iter(server.connections())) as conn:
            with pytest.raises(HeaderMismatchError):
                conn.receive()


def test_handler_called_once_with_model(short_dir):
    calls = []
    model = (
        ClientServerOptions(short_dir / "hook.sock")
        .disable_single_server_check()
        .handlers(calls.append)
        .create()
    )
    with model.server():
        assert calls == [model]


def test_single_server_check(short_dir):
    first = quiet_options(short_dir / "first.sock").create().server()
    calls = []
    second_path = short_dir / "second.sock"
    model = ClientServerOptions(second_path).handlers(calls.append).create()
    with first:
        with pytest.raises(ServerAlreadyRunningError):
            model.server()
    assert calls == []
    assert not second_path.exists()


def test_default_options():
    options = ClientServerOptions("app")
    assert options.socket_name == Path("app")
    assert options.magic == DEFAULT_MAGIC == b"4242"
    assert options.check_single_server is True
    assert options.handler is setup_handlers


def test_builder_returns_new_options():
    options = ClientServerOptions("app")
    changed = options.magic_bytes("1.2.3").disable_single_server_check()
    assert changed.magic == b"1.2.3"
    assert changed.check_single_server is False
    assert options.magic == b"4242"
    assert options.check_single_server is True


def test_handlers_replaces_hook():
    def hook(_model):
        return None

    assert ClientServerOptions("app").handlers(hook).handler is hook


def test_create_wraps_options():
    options = ClientServerOptions("app").magic_bytes(b"xy")
    model = options.create()
    assert model == ClientServerModel(options)
    assert model.socket_name == Path("app")
    assert model.magic == b"xy"


def test_ipc_model_is_abstract():
    with pytest.raises(TypeError):
        IpcModel()


def test_subclass_model_is_used():
    model_cls = define_model("some.sock")
    expected = (
        ClientServerOptions("some.sock")
        .disable_single_server_check()
        .handlers(_no_handlers)
        .create()
    )
    model = model_cls.model()
    assert model == expected
    assert model.socket_name == Path("some.sock")


def test_socket_address_for_path():
    assert socket_address(Path("a") / "b.sock") == os.fspath(Path("a") / "b.sock")


def test_socket_address_for_single_name():
    expected = "\0app.sock" if namespaced_supported() else "app.sock"
    assert socket_address("app.sock") == expected


def test_socket_address_rejects_null_byte():
    with pytest.raises(SocketConnectError):
        socket_address("a/b\0c")