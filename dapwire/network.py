"""TCP server and client streams."""

from __future__ import annotations

import socket
import threading
from typing import Any, Callable

from dapwire.io import ReaderWriter

OnConnect = Callable[["SocketStream"], Any]
OnError = Callable[[str], Any]

_ACCEPT_POLL_SECONDS = 0.1


class SocketStream(ReaderWriter):
    """A stream over a connected TCP socket."""

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock
        self._lock = threading.Lock()
        self._closed = False

    def is_open(self) -> bool:
        with self._lock:
            return not self._closed

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self._sock.close()

    def read(self, size: int) -> bytes:
        if size <= 0 or not self.is_open():
            return b""
        try:
            return self._sock.recv(size)
        except OSError:
            return b""

    def write(self, data: bytes | str) -> bool:
        payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        if not self.is_open():
            return False
        if not payload:
            return True
        try:
            self._sock.sendall(payload)
        except OSError:
            return False
        return True


class Server:
    """Listens for TCP connections and hands each one to a callback."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listener: socket.socket | None = None
        self._thread: threading.Thread | None = None
        self._stopped = threading.Event()
        self._stopped.set()

    def start(
        self,
        port: int,
        on_connect: OnConnect,
        on_error: OnError,
        address: str = "localhost",
    ) -> bool:
        """Start listening, stopping any earlier run; return False on failure.

        ``on_connect`` is called on the server thread for each connection.
        """
        with self._lock:
            self._stop_locked()
            try:
                listener = socket.create_server((address, port))
            except OSError:
                on_error("Failed to open socket")
                return False
            listener.settimeout(_ACCEPT_POLL_SECONDS)
            self._listener = listener
            self._stopped.clear()
            self._thread = threading.Thread(
                target=self._serve,
                args=(listener, on_connect, on_error),
                daemon=True,
            )
            self._thread.start()
            return True

    def stop(self) -> None:
        """Stop listening and wait for the server thread to finish."""
        with self._lock:
            self._stop_locked()

    def is_running(self) -> bool:
        return not self._stopped.is_set()

    def _stop_locked(self) -> None:
        if self._stopped.is_set():
            return
        self._stopped.set()
        if self._listener is not None:
            self._listener.close()
            self._listener = None
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def _serve(self, listener: socket.socket, on_connect: OnConnect, on_error: OnError) -> None:
        while not self._stopped.is_set():
            try:
                conn, _ = listener.accept()
            except socket.timeout:
                continue
            except OSError:
                if not self._stopped.is_set():
                    on_error("Failed to accept connection")
                return
            conn.settimeout(None)
            on_connect(SocketStream(conn))

    def __enter__(self) -> "Server":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.stop()


def connect(address: str, port: int, timeout: float | None = None) -> SocketStream:
    """Connect to a server; ``timeout`` in seconds bounds the connection attempt.

    Raises OSError if the connection cannot be made.
    """
    sock = socket.create_connection((address, port), timeout=timeout)
    sock.settimeout(None)
    return SocketStream(sock)