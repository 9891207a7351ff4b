import pytest

from httpfromtcp.headers import (
    HeaderError,
    Headers,
    WrongFormatError,
    WrongKeyFormatError,
)


def test_no_new_line():
    headers = Headers()
    assert headers.parse(b"test") == (0, False)
    assert dict(headers) == {}


def test_valid_header():
    headers = Headers()
    n, done = headers.parse(b"Host: localhost:42069\r\n\r\n")
    assert n == 23
    assert done is False
    assert headers["host"] == "localhost:42069"


def test_wrong_key_symbols():
    headers = Headers()
    with pytest.raises(WrongKeyFormatError):
        headers.parse(b"Ho@st: localhost:42069\r\n\r\n")
    assert dict(headers) == {}


def test_invalid_spacing_header():
    headers = Headers()
    with pytest.raises(WrongFormatError):
        headers.parse(b"       Host : localhost:42069       \r\n\r\n")


def test_valid_done():
    headers = Headers()
    assert headers.parse(b"\r\n Body Message\r\n") == (2, True)


def test_invalid_header_format():
    headers = Headers()
    with pytest.raises(WrongFormatError):
        headers.parse(b"       Host  localhost 42069       \r\n\r\n")


def test_errors_share_base_class():
    with pytest.raises(HeaderError):
        Headers().parse(b"no colon here\r\n")


def test_existing_key_values_are_joined():
    headers = Headers()
    n, done = headers.parse(b"Set-Person: person1\r\n")
    assert (n, done) == (21, False)
    assert headers["set-person"] == "person1"

    n, done = headers.parse(b"Set-Person: person2\r\n")
    assert (n, done) == (21, False)
    assert headers["set-person"] == "person1,person2"


def test_leading_spaces_are_trimmed():
    headers = Headers()
    headers.parse(b"   Accept:   */*   \r\n")
    assert headers["accept"] == "*/*"


def test_set_default_without_custom():
    headers = Headers()
    headers.set_default(12, None)
    assert headers == {
        "content-length": "12",
        "connection": "close",
        "content-type": "text/plain",
    }


def test_set_default_custom_overrides():
    headers = Headers()
    headers.set_default(3, {"content-type": "text/html"})
    assert headers["content-type"] == "text/html"
    assert headers["content-length"] == "3"
    assert headers["connection"] == "close"


def test_set_copies_entries():
    headers = Headers({"a": "1"})
    headers.set({"Transfer-Encoding": "chunked", "a": "2"})
    assert headers == {"a": "2", "Transfer-Encoding": "chunked"}