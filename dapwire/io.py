"""Byte stream interfaces and implementations."""

from __future__ import annotations

import abc
import threading
from collections import deque
from typing import Any, BinaryIO

_WRITEF_BUFFER = 2048


def _as_bytes(data: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


class Reader(abc.ABC):
    """A source of bytes."""

    @abc.abstractmethod
    def is_open(self) -> bool:
        """Return True if the stream is still open."""

    @abc.abstractmethod
    def close(self) -> None:
        """Close the stream."""

    @abc.abstractmethod
    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes; an empty result means end of stream."""

    def __enter__(self):
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class Writer(abc.ABC):
    """A sink of bytes."""

    @abc.abstractmethod
    def is_open(self) -> bool:
        """Return True if the stream is still open."""

    @abc.abstractmethod
    def close(self) -> None:
        """Close the stream."""

    @abc.abstractmethod
    def write(self, data: bytes | str) -> bool:
        """Write all of ``data``; return False if the stream cannot take it."""

    def __enter__(self):
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class ReaderWriter(Reader, Writer):
    """A stream that can be both read and written."""


class Pipe(ReaderWriter):
    """An in-memory, thread-safe pipe; reads block until data arrives."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._data = bytearray()
        self._closed = False

    def is_open(self) -> bool:
        with self._cond:
            return not self._closed

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def read(self, size: int) -> bytes:
        out = bytearray()
        with self._cond:
            while True:
                self._cond.wait_for(lambda: self._closed or bool(self._data))
                if self._closed:
                    return bytes(out)
                take = size - len(out)
                out += self._data[:take]
                del self._data[:take]
                if len(out) == size:
                    return bytes(out)

    def write(self, data: bytes | str) -> bool:
        payload = _as_bytes(data)
        with self._cond:
            if self._closed:
                return False
            if not payload:
                return True
            notify = not self._data
            self._data += payload
            if notify:
                self._cond.notify_all()
            return True


class CombinedReaderWriter(ReaderWriter):
    """Joins a separate reader and writer into one stream."""

    def __init__(self, reader: Reader, writer: Writer) -> None:
        self._reader = reader
        self._writer = writer

    def is_open(self) -> bool:
        return self._reader.is_open() and self._writer.is_open()

    def close(self) -> None:
        self._reader.close()
        self._writer.close()

    def read(self, size: int) -> bytes:
        return self._reader.read(size)

    def write(self, data: bytes | str) -> bool:
        return self._writer.write(data)


class FileStream(ReaderWriter):
    """A stream over a binary file object."""

    def __init__(self, stream: BinaryIO, closable: bool = True) -> None:
        self._stream = stream
        self._closable = closable
        self._closed = False
        self._close_lock = threading.Lock()
        self._read_lock = threading.Lock()
        self._write_lock = threading.Lock()

    def is_open(self) -> bool:
        return not self._closed

    def close(self) -> None:
        if not self._closable:
            return
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        self._stream.close()

    def read(self, size: int) -> bytes:
        out = bytearray()
        with self._read_lock:
            while len(out) < size:
                try:
                    chunk = self._stream.read(size - len(out))
                except (OSError, ValueError):
                    break
                if not chunk:
                    break
                out += chunk
        return bytes(out)

    def write(self, data: bytes | str) -> bool:
        payload = _as_bytes(data)
        with self._write_lock:
            try:
                self._stream.write(payload)
                self._stream.flush()
            except (OSError, ValueError):
                return False
        return True

    def __del__(self) -> None:
        try:
            self.close()
        except Exception:
            pass


class ReaderSpy(Reader):
    """A reader that copies everything it reads to a sink."""

    def __init__(self, reader: Reader, sink: Writer, prefix: bytes | str = "\n<-") -> None:
        self._reader = reader
        self._sink = sink
        self._prefix = _as_bytes(prefix)

    def is_open(self) -> bool:
        return self._reader.is_open()

    def close(self) -> None:
        self._reader.close()

    def read(self, size: int) -> bytes:
        data = self._reader.read(size)
        if data:
            self._sink.write(self._prefix + data)
        return data


class WriterSpy(Writer):
    """A writer that copies everything it writes to a sink."""

    def __init__(self, writer: Writer, sink: Writer, prefix: bytes | str = "\n->") -> None:
        self._writer = writer
        self._sink = sink
        self._prefix = _as_bytes(prefix)

    def is_open(self) -> bool:
        return self._writer.is_open()

    def close(self) -> None:
        self._writer.close()

    def write(self, data: bytes | str) -> bool:
        payload = _as_bytes(data)
        if not self._writer.write(payload):
            return False
        self._sink.write(self._prefix + payload)
        return True


class StringBuffer(ReaderWriter):
    """An in-memory buffer that returns data in the chunks it was written in."""

    def __init__(self) -> None:
        self._data = bytearray()
        self._chunks: deque[int] = deque()
        self._closed = False

    def is_open(self) -> bool:
        return not self._closed

    def close(self) -> None:
        self._closed = True

    def read(self, size: int) -> bytes:
        if self._closed or size <= 0 or not self._data or not self._chunks:
            return b""
        chunk = self._chunks[0]
        count = min(size, chunk)
        out = bytes(self._data[:count])
        del self._data[:count]
        if size < chunk:
            self._chunks[0] = chunk - size
        else:
            self._chunks.popleft()
        return out

    def write(self, data: bytes | str) -> bool:
        if self._closed:
            return False
        payload = _as_bytes(data)
        if payload:
            self._data += payload
            self._chunks.append(len(payload))
        return True

    def contents(self) -> bytes:
        """Return all bytes not yet read."""
        return bytes(self._data)


def combine(reader: Reader, writer: Writer) -> CombinedReaderWriter:
    """Return a stream that reads from ``reader`` and writes to ``writer``."""
    return CombinedReaderWriter(reader, writer)


def pipe() -> Pipe:
    """Return a new in-memory pipe."""
    return Pipe()


def wrap_file(stream: BinaryIO, closable: bool = True) -> FileStream:
    """Wrap a binary file object; it is closed on close() only if closable."""
    return FileStream(stream, closable)


def open_file(path: str) -> FileStream:
    """Open ``path`` for binary writing; raise OSError on failure."""
    return FileStream(open(path, "wb"), True)


def spy_reader(reader: Reader, sink: Writer, prefix: bytes | str = "\n<-") -> ReaderSpy:
    """Return a reader that copies all reads from ``reader`` to ``sink``."""
    return ReaderSpy(reader, sink, prefix)


def spy_writer(writer: Writer, sink: Writer, prefix: bytes | str = "\n->") -> WriterSpy:
    """Return a writer that copies all writes to ``writer`` into ``sink``."""
    return WriterSpy(writer, sink, prefix)


def writef(writer: Writer, fmt: str, *args: Any) -> bool:
    """Write a %-formatted message, truncated to the formatting buffer size."""
    text = (fmt % args).encode("utf-8")
    return writer.write(text[: _WRITEF_BUFFER - 1])