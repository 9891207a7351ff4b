"""HTTP header field parsing and construction."""

from __future__ import annotations

import re
from collections.abc import Mapping

_KEY_PATTERN = re.compile(r"[A-Za-z0-9!#$%&'*+,\-.^_`|]+")


class HeaderError(ValueError):
    """Base class for header parsing errors."""


class WrongFormatError(HeaderError):
    """A header line is not of the form ``key: value``."""


class WrongKeyFormatError(HeaderError):
    """A header name holds characters that are not allowed."""


class Headers(dict):
    """Header names mapped to values; repeated names have values comma-joined."""

    def parse(self, data: bytes) -> tuple[int, bool]:
        """Parse one header line; return bytes consumed and whether the block ended."""
        data = bytes(data)
        line_end = data.find(b"\r\n")
        if line_end == -1:
            return 0, False
        if line_end == 0:
            return 2, True

        name, colon, value = data[:line_end].decode("utf-8", "replace").partition(":")
        if not colon or name.endswith(" "):
            raise WrongFormatError("wrong format")
        name = name.strip(" ")
        if not _KEY_PATTERN.fullmatch(name):
            raise WrongKeyFormatError("wrong key format")

        key, value = name.lower(), value.strip(" ")
        self[key] = f"{self[key]},{value}" if key in self else value
        return line_end + 2, False

    def set_default(
        self, content_length: int, custom_headers: Mapping[str, str] | None = None
    ) -> None:
        """Set the standard response headers, then apply ``custom_headers``."""
        self["content-length"] = str(content_length)
        self["connection"] = "close"
        self["content-type"] = "text/plain"
        self.update(custom_headers or {})

    def set(self, custom_headers: Mapping[str, str]) -> None:
        """Copy every entry of ``custom_headers`` into these headers."""
        self.update(custom_headers)