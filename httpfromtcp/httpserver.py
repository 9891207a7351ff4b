"""Demo HTTP server: HTML status pages, a video file and a chunked proxy."""

from __future__ import annotations

import argparse
import hashlib
import logging
import signal
import threading
import urllib.error
import urllib.request
from pathlib import Path

from .headers import Headers
from .request import Request
from .response import StatusCode, Writer, WrongWriteOrderError
from .server import serve, write_error

PORT = 8888
PROXY_PREFIX = "/httpbin/"
UPSTREAM = "https://httpbin.org/"
VIDEO_PREFIX = "/video"
VIDEO_PATH = Path("assets") / "vim.mp4"
CHUNK_SIZE = 1024

TEMPLATE = """<html>
  <head>
    <title>{title}</title>
  </head>
  <body>
    <h1>{heading}</h1>
    <p>{message}</p>
  </body>
</html>
"""

_DEFAULT_PAGE = (
    StatusCode.OK,
    "200 OK",
    "Success!",
    "Your request was an absolute banger.",
)
_PAGES = {
    "/yourproblem": (
        StatusCode.BAD_REQUEST,
        "400 Bad Request",
        "Bad Request",
        "Your request honestly kinda sucked.",
    ),
    "/myproblem": (
        StatusCode.SERVER_ERROR,
        "500 Internal Server Error",
        "Internal Server Error",
        "Okay, you know what? This one is on me.",
    ),
}

logger = logging.getLogger(__name__)


def write_err(w, err: BaseException) -> None:
    """Write a 500 response for ``err``; report write failures on stdout."""
    try:
        write_error(w, err)
    except (OSError, WrongWriteOrderError) as exc:
        print(f"Write error: {exc}")


def _proxy(w, path: str) -> None:
    remote = UPSTREAM + path
    print(f"REMOTE: {remote}")
    try:
        upstream = urllib.request.urlopen(remote)
    except urllib.error.HTTPError as exc:
        upstream = exc
    except (OSError, ValueError) as exc:
        write_err(w, exc)
        return

    with upstream:
        writer = Writer(w)
        try:
            writer.write_status_line(StatusCode.OK)
            headers = Headers()
            headers.set(
                {
                    "content-type": "text/plain",
                    "Transfer-Encoding": "chunked",
                    "Trailer": "X-Content-Sha256, X-Content-Length",
                }
            )
            writer.write_headers(headers)

            digest = hashlib.sha256()
            total = 0
            while True:
                try:
                    chunk = upstream.read(CHUNK_SIZE)
                except OSError as exc:
                    print(f"Read error: {exc}")
                    return
                if not chunk:
                    break
                total += len(chunk)
                digest.update(chunk)
                writer.write_chunked_body(chunk)
            writer.write_chunked_body_done(True)

            trailers = Headers()
            trailers.set(
                {
                    "X-Content-Length": str(total),
                    "X-Content-Sha256": digest.hexdigest(),
                }
            )
            writer.write_trailers(trailers)
        except (OSError, WrongWriteOrderError) as exc:
            print(f"Write error: {exc}")


def _video(w) -> None:
    try:
        body = VIDEO_PATH.read_bytes()
    except OSError as exc:
        write_err(w, exc)
        return

    writer = Writer(w)
    try:
        writer.write_status_line(StatusCode.OK)
        headers = Headers()
        headers.set_default(len(body), {"content-type": "video/mp4"})
        writer.write_headers(headers)
        writer.write_body(body)
    except (OSError, WrongWriteOrderError) as exc:
        print(f"Write error: {exc}")


def _page(w, target: str) -> None:
    status, title, heading, message = _PAGES.get(target, _DEFAULT_PAGE)
    body = TEMPLATE.format(title=title, heading=heading, message=message).encode()
    writer = Writer(w)
    try:
        writer.write_status_line(status)
        headers = Headers()
        headers.set_default(len(body), {"content-type": "text/html"})
        writer.write_headers(headers)
        writer.write_body(body)
    except (OSError, WrongWriteOrderError) as exc:
        print(f"Write error: {exc}")


def handler(w, req: Request) -> None:
    """Answer one request according to its target."""
    target = req.request_line.request_target
    if target.startswith(PROXY_PREFIX):
        _proxy(w, target[len(PROXY_PREFIX):])
    elif target.startswith(VIDEO_PREFIX):
        _video(w)
    else:
        _page(w, target)


def main(argv=None) -> int:
    """Run the server until SIGINT or SIGTERM arrives."""
    parser = argparse.ArgumentParser(description="Serve HTTP from raw TCP.")
    parser.add_argument("--port", type=int, default=PORT)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    try:
        server = serve(args.port, handler)
    except OSError as exc:
        logger.error("Error starting server: %s", exc)
        return 1

    stop = threading.Event()
    signals = (signal.SIGINT, signal.SIGTERM)
    previous = {sig: signal.signal(sig, lambda *_: stop.set()) for sig in signals}
    try:
        logger.info("Server started on port %d", args.port)
        while not stop.wait(0.5):
            pass
        logger.info("Server gracefully stopped")
    finally:
        for sig, old in previous.items():
            signal.signal(sig, old)
        server.close()
    return 0