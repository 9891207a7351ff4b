"""Writing HTTP/1.1 responses in the order the protocol requires."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum, IntEnum
from typing import Protocol


class StatusCode(IntEnum):
    OK = 200
    BAD_REQUEST = 400
    SERVER_ERROR = 500


_STATUS_LINES = {
    StatusCode.OK: b"HTTP/1.1 200 OK\r\n",
    StatusCode.BAD_REQUEST: b"HTTP/1.1 400 Bad Request\r\n",
    StatusCode.SERVER_ERROR: b"HTTP/1.1 500 Internal Server Error\r\n",
}


class WrongWriteOrderError(RuntimeError):
    """A part of the response was written out of order."""

    def __init__(self, message: str = "wrong write order") -> None:
        super().__init__(message)


class _WriteState(Enum):
    INIT = 0
    STATUS_LINE = 1
    HEADERS = 2
    BODY = 3


class _Sink(Protocol):
    def write(self, data: bytes) -> int | None: ...


class Writer:
    """Writes a status line, headers and a body to a byte sink."""

    def __init__(self, w: _Sink) -> None:
        self._w = w
        self._state = _WriteState.INIT

    def _write(self, data: bytes) -> int:
        written = self._w.write(data)
        return len(data) if written is None else written

    def _write_fields(self, headers: Mapping[str, object]) -> None:
        for key, value in headers.items():
            self._write(f"{key}: {value}\r\n".encode())
        self._write(b"\r\n")

    def write_status_line(self, status_code: int) -> None:
        """Write the status line for ``status_code``."""
        if self._state is not _WriteState.INIT:
            raise WrongWriteOrderError()
        try:
            line = _STATUS_LINES[StatusCode(status_code)]
        except ValueError:
            line = f"HTTP/1.1 {int(status_code)}\r\n".encode()
        self._write(line)
        self._state = _WriteState.STATUS_LINE

    def write_headers(self, headers: Mapping[str, object]) -> None:
        """Write the header block and the blank line that ends it."""
        if self._state is not _WriteState.STATUS_LINE:
            raise WrongWriteOrderError()
        self._write_fields(headers)
        self._state = _WriteState.HEADERS

    def write_trailers(self, headers: Mapping[str, object]) -> None:
        """Write trailer fields after a chunked body."""
        if self._state is not _WriteState.BODY:
            raise WrongWriteOrderError()
        self._write_fields(headers)

    def write_body(self, data: bytes) -> int:
        """Write the whole body; return the number of bytes written."""
        if self._state is not _WriteState.HEADERS:
            raise WrongWriteOrderError()
        self._state = _WriteState.BODY
        return self._write(bytes(data))

    def write_chunked_body(self, data: bytes) -> int:
        """Write one chunk of a chunked body."""
        if self._state is not _WriteState.HEADERS:
            raise WrongWriteOrderError()
        payload = bytes(data)
        return self._write(f"{len(payload):x}\r\n".encode() + payload + b"\r\n")

    def write_chunked_body_done(self, use_trailers: bool = False) -> int:
        """Write the final zero-length chunk."""
        self._state = _WriteState.BODY
        if use_trailers:
            return self._write(b"0\r\n")
        return self._write(b"0\r\n\r\n")