import socket
import threading
import time

from httpfromtcp.headers import Headers
from httpfromtcp.request import Request, RequestLine
from httpfromtcp.tcplistener import format_request, main


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


def _connect(port, timeout=5.0):
    deadline = time.monotonic() + timeout
    while True:
        try:
            return socket.create_connection(("127.0.0.1", port), timeout=1)
        except OSError:
            if time.monotonic() > deadline:
                raise
            time.sleep(0.05)


def test_format_request_layout():
    req = Request(
        request_line=RequestLine(http_version="1.1", request_target="/coffee", method="GET"),
        headers=Headers({"host": "localhost:42069"}),
        body=b"hi",
    )
    assert format_request(req) == (
        "Request line:\n"
        "- Method: GET\n"
        "- Target: /coffee\n"
        "- Version: 1.1\n"
        "Headers:\n"
        "- host: localhost:42069\n"
        "Body:\n"
        "hi\n"
    )


def test_format_request_lists_headers_in_order():
    req = Request(
        request_line=RequestLine(http_version="1.1", request_target="/", method="GET"),
        headers=Headers({"host": "localhost:42069", "accept": "*/*"}),
    )
    lines = format_request(req).splitlines()
    start = lines.index("Headers:")
    assert lines[start + 1:start + 3] == ["- host: localhost:42069", "- accept: */*"]


def test_format_request_empty_body():
    req = Request(
        request_line=RequestLine(http_version="1.1", request_target="/", method="GET"),
    )
    text = format_request(req)
    assert text.endswith("Headers:\nBody:\n\n")


def test_main_prints_received_request(capsys):
    port = _free_port()
    results = []
    worker = threading.Thread(
        target=lambda: results.append(main(["--port", str(port), "--count", "1"])),
        daemon=True,
    )
    worker.start()
    with _connect(port) as sock:
        sock.sendall(
            b"GET /coffee HTTP/1.1\r\nHost: localhost:42069\r\nAccept: */*\r\n\r\n"
        )
        worker.join(timeout=5)
    assert results == [0]
    out = capsys.readouterr().out
    assert "Connection Accepted" in out
    assert "- Method: GET\n- Target: /coffee\n- Version: 1.1\n" in out
    assert "- host: localhost:42069\n" in out
    assert "- accept: */*\n" in out


def test_main_fails_when_port_is_taken():
    with socket.create_server(("127.0.0.1", 0)) as busy:
        port = busy.getsockname()[1]
        assert main(["--port", str(port), "--count", "1"]) == 1