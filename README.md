# easyipc

Interprocess communication without the boilerplate. You describe a model
(where the socket lives and which options client and server share), and
`easyipc` gives you a server that accepts connections and clients that talk
to it over a Unix domain socket.

Every message travels as a packet: the magic bytes that both sides must
agree on (by default `b"4242"`), the payload length as an 8-byte
little-endian unsigned integer, and the message encoded with `pickle`. A
packet with the wrong magic bytes is rejected with `HeaderMismatchError`, so
a client and server from incompatible versions of your program fail loudly
instead of misreading each other.

Because messages are unpickled on arrival, only connect processes that trust
each other.

## Installing

```
pip install easyipc
```

Python 3.10 or later is required, on a platform with Unix domain sockets
(Linux, macOS and other POSIX systems).

## Defining a model

A model ties together the socket name and the options that client and server
share. Subclass `easyipc.model.IpcModel` and give it a `model` class method:

```python
from easyipc.model import ClientServerOptions, IpcModel
from easyipc.namespace import namespace


class MyModel(IpcModel):
    @classmethod
    def model(cls):
        return ClientServerOptions(namespace("my_app")).create()
```

`easyipc.namespace.namespace(name)` picks a socket name for the platform. On
Linux a single-component name is returned as is and used as an abstract
socket address, so no file is created. Elsewhere, or for names with more than
one component, it returns `filesystem_path(name)`:
`<user data dir>/<name>/<name>.sock`, creating the `<name>` directory if it is
missing. `namespaced_supported()` tells whether abstract names are used, and
`easyipc.model.socket_address(path)` shows the address a socket name turns
into.

`ClientServerOptions` is immutable; each builder method returns new options:

- `magic_bytes(magic)` changes the packet header (bytes, or a string encoded
  as UTF-8). Client and server must use the same value.
- `handlers(hook)` replaces the hook run once when a server starts. The
  default, `easyipc.handlers.setup_handlers`, removes the socket file when the
  process dies from an uncaught exception (in any thread) or, when the server
  is started from the main thread, from SIGTERM, SIGQUIT or SIGINT.
- `disable_single_server_check()` allows more than one server in one process,
  for example on different sockets.
- `create()` returns the `ClientServerModel`, whose `client()` and `server()`
  methods do the same as the `IpcModel` class methods.

### Declaring a model with defaults

`easyipc.declare.ipc_model` turns a plain class into an `IpcModel`:

```python
import enum

from easyipc.declare import ipc_model


class ClientMessage(enum.Enum):
    START = "start"


class ServerMessage(enum.Enum):
    OK = "ok"


@ipc_model(client_message=ClientMessage, server_message=ServerMessage)
class MyModel:
    pass
```

The socket is named after the top-level package that defines the class (via
`ipc_namespace`), and the magic bytes are that package's installed version,
or `b"4242"` if it is not installed. The message types are kept as
`MyModel.ClientMsg` and `MyModel.ServerMsg`. Leaving out either argument, or
passing something that is not a class, raises `DeriveError`.
`default_model(name, version)` builds the same kind of model by hand.

## Server and client

The server must exist before any client connects.

```python
import threading

server = MyModel.server()


def serve():
    for conn in server.connections():
        with conn:
            print(conn.receive())
            conn.send("ok")
        break


thread = threading.Thread(target=serve)
thread.start()

with MyModel.client() as client:
    client.send("start")
    print(client.receive())

thread.join()
server.close()
```

`Server.connections()` yields one `Connection` per client until the server is
closed; each has `send`, `receive` and `close`. A `Client` has the same three
methods. `Server`, `Client` and `Connection` are context managers that close
on exit. Closing a server stops listening and removes its socket file, if it
has one.

Sending and receiving block until the other side acts, so agree on who speaks
first: a client that calls `receive` before the server has sent anything
waits.

With the single-server check on, a process may start only one server in its
lifetime: a second call raises `ServerAlreadyRunningError`, even after the
first server was closed.

## Errors

Everything the package raises derives from `easyipc.errors.IpcError`; the
underlying exception, if any, is kept as `cause`.

Setting up a server or client raises an `InitError`:

- `SocketAlreadyExistsError`: another server is listening on the socket, or
  a previous one left its socket file behind.
- `ServerAlreadyRunningError`: this process already started a server and the
  single-server check is on.
- `SocketConnectError`: the socket could not be created, bound or reached.
- `NamespaceError`, `BadPathError`: no usable socket location.

Talking over a connection raises a `ChannelError`:
`HeaderMismatchError`, `PacketTooLargeError`, `UnexpectedEofError`,
`SerializationError`, `DeserializationError`, `WriteFailedError`,
`ReadFailedError` and `AcceptFailedError`.

## Commands

A one-shot demonstration of a server and a client in one process:

```
easyipc-demo
```

It prints the message the server received and the reply the client got
(`ClientMessage.START` and `ServerMessage.OK`). `easyipc.demo.run_demo(model)`
does the same exchange for any model and returns both messages.

A small calculator service. Start the server in one terminal:

```
easyipc-calculator-server
```

and ask it things from another:

```
easyipc-calculator add 1 2
easyipc-calculator sub 7 3
easyipc-calculator mul 4 5
easyipc-calculator div 9 0
easyipc-calculator stop
```

Each call prints the request and the server's answer, for example
`Add(a=1, b=2) => Ok(value=3)`. Operands must be 32-bit signed integers;
results wrap around like 32-bit arithmetic and division rounds toward zero.
Division by zero is answered with `DivByZero()`; `stop` is answered with
`Stopping()` and shuts the server down. The server prints each request and
reply and handles every connection in its own thread.

The calculator uses the socket name `calculator`: an abstract socket on
Linux, and a socket file named `calculator` in the current directory
elsewhere, so there both commands must be run from the same directory.

## Limitations

- Sending and receiving are blocking; there is no non-blocking or
  asynchronous mode.
- Only Unix domain sockets are used; there is no support for Windows named
  pipes.

## Development

```
pip install -e ".[test]"
pytest
```