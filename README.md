# dapwire

Building blocks for speaking the Debug Adapter Protocol (DAP) from Python.

- **Value kinds** (`dapwire.types`): `Kind`, `kind_of` and `is_kind` classify
  plain Python values as protocol values. `None` is null, and `bool`, `int`,
  `float`, `str`, `list`/`tuple`, `dict` and dataclass instances cover the
  other kinds.
- **Byte streams** (`dapwire.io`): the `Reader`, `Writer` and `ReaderWriter`
  interfaces. The module also has a blocking in-memory `Pipe`, a chunked
  `StringBuffer`, file wrappers (`wrap_file`, `open_file`), `combine` for
  pairing a reader with a writer, `spy_reader` / `spy_writer` for copying
  traffic to a log, and `writef` for %-formatted writes.
- **Message framing** (`dapwire.content_stream`): `ContentReader` and
  `ContentWriter` handle the `Content-Length: N\r\n\r\n` header that comes
  before every DAP message. `OnInvalidData` decides whether bad data is
  skipped (`IGNORE`) or closes the stream (`CLOSE`).
- **TCP transport** (`dapwire.network`): a threaded `Server` that calls you
  back once for each accepted connection, and `connect` for the client
  side. Both give you a `SocketStream`.
- **Serialization** (`dapwire.serialization`): `parse_json`, `dumps`,
  `encode`, the `to_*` decoders and typed structures (`StructType`, `Struct`,
  `Field`). Malformed input raises `DeserializeError`.
- **Protocol structures**: the DAP 1.65.0 shared types, events, requests and
  responses. Look them up with `find_type` (`dapwire.protocol_types`),
  `find_event` (`dapwire.protocol_events`), `find_request`
  (`dapwire.protocol_requests`), and `find_response` / `response_for`
  (`dapwire.protocol_responses`).

## Installation

```
pip install dapwire
```

## Framing messages

```python
from dapwire.io import StringBuffer
from dapwire.content_stream import ContentReader, ContentWriter

buffer = StringBuffer()
ContentWriter(buffer).write('{"seq":1,"type":"request","command":"threads"}')

reader = ContentReader(buffer)
print(reader.read())  # {"seq":1,"type":"request","command":"threads"}
print(reader.read())  # "" once no more messages are available
```

`ContentReader.read` returns an empty string when no complete message can
be read. By default it skips any bytes before the next `Content-Length:`
header. When the peer cannot be trusted, for example on a network socket,
pass `OnInvalidData.CLOSE`. Data that does not start with a valid header
then closes the underlying stream:

```python
from dapwire.content_stream import ContentReader, OnInvalidData

reader = ContentReader(stream, OnInvalidData.CLOSE)
```

A `Pipe` is useful between threads. Its `read` blocks until data arrives.
Once the pipe is closed, `read` returns what it has gathered so far, and
bytes still unread in the pipe are dropped.

## Serving over TCP

```python
from dapwire.network import Server, connect

def on_connect(stream):
    data = stream.read(5)
    stream.write(data.upper())

server = Server()
server.start(19021, on_connect, print)

client = connect("localhost", 19021)
client.write(b"hello")
print(client.read(5))  # b'HELLO'
client.close()
server.stop()
```

`Server.start` listens on `localhost` unless you pass `address`. It returns
`False` and calls the error callback if the port cannot be opened. Calling
it again stops the earlier run first. `on_connect` runs on the server
thread, so the server accepts no other connection until it returns.
`connect` raises `OSError` if the connection fails. Its `timeout` argument,
in seconds, bounds only the connection attempt. `Server` also works as a
context manager and stops on exit.

## Protocol structures

```python
from dapwire.protocol_requests import find_request
from dapwire.protocol_responses import response_for
from dapwire.serialization import dumps

request_type = find_request("threads")
response_type = response_for("threads")
response = response_type.create()
print(dumps(response_type.serialize(response)))  # {"threads":[]}
```

`StructType.create` fills unset fields with defaults: `None` for optional
fields, and an empty value of the right kind otherwise.
`StructType.serialize` returns plain JSON-ready values and leaves out
optional fields that are `None`. `StructType.deserialize` accepts a decoded
object or JSON text. It raises `DeserializeError` when a required field is
missing or has the wrong kind. Integers must fit in 64 signed bits.

## What this package does not do

dapwire stops at single messages. It has no session layer: it does not
build or check the `seq` / `type` / `command` envelope, match responses to
requests, or dispatch requests to handlers. It also ships no command-line
program and no ready-made debug adapter.

## Running the tests

```
pip install -e ".[test]"
pytest
```