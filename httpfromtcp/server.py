"""A small threaded HTTP/1.1 server built on TCP sockets."""

from __future__ import annotations

import socket
import threading
import time
from collections.abc import Callable

from .headers import Headers
from .request import Request, request_from_reader
from .response import StatusCode, Writer

READ_TIMEOUT = 1.0

Handler = Callable[[object, Request], None]


def write_error(w, err: BaseException) -> None:
    """Write a 500 response whose body is the text of ``err``."""
    data = str(err).encode()
    writer = Writer(w)
    writer.write_status_line(StatusCode.SERVER_ERROR)
    headers = Headers()
    headers.set_default(len(data))
    writer.write_headers(headers)
    writer.write_body(data)


class _Connection:
    """Socket stream whose reads share one deadline."""

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock
        self._deadline = time.monotonic() + READ_TIMEOUT

    def read(self, size: int = -1) -> bytes:
        remaining = self._deadline - time.monotonic()
        if remaining <= 0:
            raise TimeoutError("read deadline exceeded")
        self._sock.settimeout(remaining)
        return self._sock.recv(size if size > 0 else 65536)

    def write(self, data: bytes) -> int:
        self._sock.settimeout(None)
        self._sock.sendall(data)
        return len(data)


class Server:
    """Accepts connections and passes each parsed request to a handler."""

    def __init__(self, listener: socket.socket, handler: Handler) -> None:
        self.handler = handler
        self._listener = listener
        self._open = True
        self._thread = threading.Thread(target=self._listen, daemon=True)
        self._thread.start()

    @property
    def port(self) -> int:
        """The TCP port the server listens on."""
        return self._listener.getsockname()[1]

    def close(self) -> None:
        """Stop accepting connections and release the listening socket."""
        print("Server closed")
        self._open = False
        self._listener.close()
        self._thread.join(timeout=1.0)

    def __enter__(self) -> Server:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _listen(self) -> None:
        while self._open:
            try:
                conn, _ = self._listener.accept()
            except socket.timeout:
                continue
            except OSError as exc:
                if self._open:
                    print(f"Accept error: {exc}")
                return
            print("Connection Accepted")
            threading.Thread(target=self._handle, args=(conn,), daemon=True).start()

    def _handle(self, conn: socket.socket) -> None:
        stream = _Connection(conn)
        try:
            try:
                request = request_from_reader(stream)
            except (ValueError, OSError) as exc:
                try:
                    write_error(stream, exc)
                except OSError as write_exc:
                    print(f"Request error: {write_exc}")
                return
            self.handler(stream, request)
        finally:
            print("Connection closed")
            conn.close()


def serve(port: int, handler: Handler) -> Server:
    """Listen on ``127.0.0.1:port`` and serve requests in background threads."""
    listener = socket.create_server(("127.0.0.1", port))
    listener.settimeout(0.2)
    return Server(listener, handler)