"""Content-Length framed message streams."""

from __future__ import annotations

import enum

from dapwire.io import Reader, Writer

_HEADER = b"Content-Length:"
_SEPARATOR = b"\r\n\r\n"
_CHUNK_SIZE = 256


class OnInvalidData(enum.Enum):
    """What a ContentReader does when it meets data that is not a message."""

    IGNORE = "ignore"
    CLOSE = "close"


class ContentReader:
    """Reads Content-Length framed messages from a Reader."""

    def __init__(self, reader: Reader, on_invalid_data: OnInvalidData = OnInvalidData.IGNORE) -> None:
        self._reader = reader
        self._on_invalid_data = on_invalid_data
        self._buf = bytearray()

    def is_open(self) -> bool:
        return self._reader.is_open() if self._reader is not None else False

    def close(self) -> None:
        if self._reader is not None:
            self._reader.close()

    def read(self) -> str:
        """Return the next message body, or an empty string if there is none."""
        if self._on_invalid_data is OnInvalidData.CLOSE:
            if not self._match(_HEADER):
                return self._bad_header()
        elif not self._scan(_HEADER):
            return ""
        while self._match_any(b" \t") is not None:
            pass
        length = 0
        while (digit := self._match_any(b"0123456789")) is not None:
            length = length * 10 + (digit - ord("0"))
        if length == 0:
            return ""
        if not self._match(_SEPARATOR):
            return self._bad_header()
        if not self._buffer(length):
            return ""
        body = bytes(self._buf[:length])
        del self._buf[:length]
        return body.decode("utf-8", errors="replace")

    def _scan(self, seq: bytes) -> bool:
        while self._buffer(len(seq)):
            if self._match(seq):
                return True
            del self._buf[0]
        return False

    def _match(self, seq: bytes) -> bool:
        if not self._buffer(len(seq)):
            return False
        if self._buf[: len(seq)] != seq:
            return False
        del self._buf[: len(seq)]
        return True

    def _match_any(self, chars: bytes) -> int | None:
        if not self._buffer(1):
            return None
        c = self._buf[0]
        if c in chars:
            del self._buf[0]
            return c
        return None

    def _buffer(self, size: int) -> bool:
        need = size - len(self._buf)
        while need > 0:
            chunk = self._reader.read(min(_CHUNK_SIZE, need))
            if not chunk:
                return False
            self._buf += chunk
            need -= len(chunk)
        return True

    def _bad_header(self) -> str:
        if self._on_invalid_data is OnInvalidData.CLOSE:
            self.close()
        return ""


class ContentWriter:
    """Writes Content-Length framed messages to a Writer."""

    def __init__(self, writer: Writer) -> None:
        self._writer = writer

    def is_open(self) -> bool:
        return self._writer.is_open() if self._writer is not None else False

    def close(self) -> None:
        if self._writer is not None:
            self._writer.close()

    def write(self, message: str | bytes) -> bool:
        """Write one framed message; return False if the writer refused it."""
        body = message.encode("utf-8") if isinstance(message, str) else bytes(message)
        header = f"Content-Length: {len(body)}\r\n\r\n".encode("ascii")
        return self._writer.write(header) and self._writer.write(body)