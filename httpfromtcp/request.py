"""Incremental parsing of HTTP/1.1 requests from a byte stream."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Protocol

from .headers import Headers

LINE_SEPARATOR = b"\r\n"
PARTS_SEPARATOR = " "
READ_SIZE = 1024

_METHOD_PATTERN = re.compile(r"[A-Z]+")
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class ParseState(IntEnum):
    INITIALIZED = 0
    PARSED_REQUEST_LINE = 1
    PARSED_HEADERS = 2
    DONE = 3


class RequestError(ValueError):
    """Base class for request parsing errors."""

    default_message = "request error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class EmptyRequestLineError(RequestError):
    default_message = "empty request line"


class WrongPartsCountError(RequestError):
    default_message = "wrong parts; should be 3"


class WrongVersionFormatError(RequestError):
    default_message = "wrong version format"


class WrongTargetFormatError(RequestError):
    default_message = "wrong target format"


class WrongMethodFormatError(RequestError):
    default_message = "wrong method format"


class WrongBodyLengthError(RequestError):
    default_message = "wrong body length"


class _Reader(Protocol):
    def read(self, size: int = ...) -> bytes | None: ...


@dataclass
class RequestLine:
    http_version: str = ""
    request_target: str = ""
    method: str = ""


@dataclass
class Request:
    request_line: RequestLine = field(default_factory=RequestLine)
    headers: Headers = field(default_factory=Headers)
    body: bytes = b""
    state: ParseState = ParseState.INITIALIZED

    def _parse(self, data: bytes, eof: bool) -> int:
        """Advance the parser over ``data``; return the bytes consumed."""
        if self.state is ParseState.DONE:
            return 0

        if self.state is ParseState.INITIALIZED:
            consumed, line = parse_request_line(data)
            if consumed == 0 or line is None:
                return 0
            self.request_line = line
            self.state = ParseState.PARSED_REQUEST_LINE
            return consumed

        if self.state is ParseState.PARSED_REQUEST_LINE:
            consumed, done = self.headers.parse(data)
            if done:
                self.state = ParseState.PARSED_HEADERS
            return consumed

        value = self.headers.get("content-length")
        if value is None:
            self.state = ParseState.DONE
            return 0

        if not _INTEGER_PATTERN.fullmatch(value):
            raise WrongBodyLengthError(f"invalid content-length: {value!r}")
        length = int(value)

        if not eof:
            return 0
        if length != len(data):
            raise WrongBodyLengthError()
        self.body = bytes(data)
        self.state = ParseState.DONE
        return len(data)


def parse_method(method: str) -> str:
    """Return ``method`` if it is made of upper-case letters only."""
    if _METHOD_PATTERN.fullmatch(method):
        return method
    raise WrongMethodFormatError()


def parse_version(version: str) -> str:
    """Return the version number of an ``HTTP/1.1`` version string."""
    if version != "HTTP/1.1":
        raise WrongVersionFormatError()
    return "1.1"


def parse_request_line(data: bytes) -> tuple[int, RequestLine | None]:
    """Parse the request line at the start of ``data``.

    Returns the bytes consumed and the line, or ``(0, None)`` when the line
    is not complete yet.
    """
    data = bytes(data)
    line_end = data.find(LINE_SEPARATOR)
    if line_end == -1:
        return 0, None

    text = data[:line_end].decode("utf-8", errors="replace")
    if not text:
        raise EmptyRequestLineError()

    parts = text.split(PARTS_SEPARATOR)
    if len(parts) != 3:
        raise WrongPartsCountError()

    method_part, target, version_part = parts
    method = parse_method(method_part)
    version = parse_version(version_part)

    line = RequestLine(http_version=version, request_target=target, method=method)
    return line_end + len(LINE_SEPARATOR), line


def request_from_reader(reader: _Reader) -> Request:
    """Read and parse a request from ``reader``.

    ``reader.read(size)`` must return up to ``size`` bytes and an empty result
    at end of stream. A read timeout is treated as the end of the stream.
    """
    request = Request()
    buffer = bytearray()
    eof = False

    while request.state is not ParseState.DONE and not eof:
        try:
            chunk = reader.read(READ_SIZE)
        except TimeoutError:
            chunk = b""

        if chunk:
            buffer += chunk
        else:
            eof = True

        while request.state is not ParseState.DONE:
            consumed = request._parse(bytes(buffer), eof)
            if consumed == 0:
                break
            del buffer[:consumed]

    return request