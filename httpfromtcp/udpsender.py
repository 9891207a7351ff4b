"""Send lines typed on standard input as UDP datagrams."""

from __future__ import annotations

import argparse
import socket
import sys
from collections.abc import Iterable


def send_lines(lines: Iterable[str | bytes], host: str = "localhost", port: int = 42069) -> int:
    """Send each line as one datagram and return how many were sent."""
    sent = 0
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.connect((host, port))
        for line in lines:
            try:
                sock.send(line.encode() if isinstance(line, str) else bytes(line))
            except OSError as exc:
                print(f"Write error: {exc}")
                continue
            sent += 1
    return sent


def _prompted_lines():
    while True:
        print("> ", end="", flush=True)
        line = sys.stdin.readline()
        if not line:
            return
        yield line


def main(argv=None) -> int:
    """Read lines from stdin until end of input and send each one."""
    parser = argparse.ArgumentParser(description="Send stdin lines over UDP.")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=42069)
    args = parser.parse_args(argv)
    try:
        send_lines(_prompted_lines(), args.host, args.port)
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0