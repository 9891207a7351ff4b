"""Print every HTTP request received on a TCP port."""

from __future__ import annotations

import argparse
import socket
import sys

from .request import Request, request_from_reader


def format_request(req: Request) -> str:
    """Describe a parsed request as readable text."""
    line = req.request_line
    headers = "".join(f"- {k}: {v}\n" for k, v in req.headers.items())
    return (
        f"Request line:\n- Method: {line.method}\n- Target: {line.request_target}\n"
        f"- Version: {line.http_version}\nHeaders:\n{headers}"
        f"Body:\n{req.body.decode('utf-8', errors='replace')}\n"
    )


def main(argv=None) -> int:
    """Accept connections and print the request read from each."""
    parser = argparse.ArgumentParser(description="Print incoming HTTP requests.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=42069)
    parser.add_argument("--count", type=int, help="stop after this many requests")
    args = parser.parse_args(argv)

    handled = 0
    try:
        with socket.create_server((args.host, args.port)) as listener:
            while args.count is None or handled < args.count:
                conn, _ = listener.accept()
                print("Connection Accepted")
                with conn, conn.makefile("rb", buffering=0) as stream:
                    req = request_from_reader(stream)
                print(format_request(req), end="")
                handled += 1
    except (ValueError, OSError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0