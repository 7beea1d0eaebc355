import queue
import socket

import pytest

from dapwire.network import Server, SocketStream, connect


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("localhost", 0))
        return s.getsockname()[1]


def _write(w, text):
    return w.write(text.encode()) and w.write(b"\0")


def _read(r):
    out = bytearray()
    while True:
        c = r.read(1)
        if not c:
            break
        if c == b"\0":
            return out.decode()
        out += c
    return "<read failed>" if r.is_open() else "<stream closed>"


def _echo_handler(results):
    def on_connect(rw):
        received = _read(rw)
        sent = _write(rw, "server to client")
        results.put((received, sent))

    return on_connect


def test_client_server():
    port = _free_port()
    results = queue.Queue()
    errors = []
    server = Server()
    assert server.start(port, _echo_handler(results), errors.append)
    try:
        for _ in range(5):
            client = connect("localhost", port)
            assert _write(client, "client to server")
            assert _read(client) == "server to client"
            assert results.get(timeout=5) == ("client to server", True)
            client.close()
    finally:
        server.stop()
    assert errors == []


def test_server_repeat_stop_and_restart():
    port = _free_port()
    results = queue.Queue()
    errors = []
    server = Server()
    assert server.start(port, _echo_handler(results), errors.append)
    server.stop()
    server.stop()
    server.stop()
    assert not server.is_running()

    assert server.start(port, _echo_handler(results), errors.append)
    assert server.is_running()
    client = connect("localhost", port)
    assert _write(client, "client to server")
    assert _read(client) == "server to client"
    assert results.get(timeout=5) == ("client to server", True)
    client.close()

    server.stop()
    server.stop()
    server.stop()
    assert not server.is_running()
    assert errors == []


def test_start_on_busy_port_reports_error():
    port = _free_port()
    errors = []
    with Server() as first:
        assert first.start(port, lambda rw: None, errors.append)
        second = Server()
        assert second.start(port, lambda rw: None, errors.append) is False
        assert not second.is_running()
    assert errors == ["Failed to open socket"]


def test_connect_refused():
    port = _free_port()
    with pytest.raises(OSError):
        connect("localhost", port, timeout=2)


def test_socket_stream_closed():
    a, b = socket.socketpair()
    stream = SocketStream(a)
    stream.close()
    assert not stream.is_open()
    assert stream.write(b"x") is False
    assert stream.read(1) == b""
    b.close()


def test_socket_stream_peer_close_reads_empty():
    a, b = socket.socketpair()
    stream = SocketStream(a)
    peer = SocketStream(b)
    assert peer.write(b"hi")
    peer.close()
    assert stream.read(10) == b"hi"
    assert stream.read(10) == b""
    stream.close()