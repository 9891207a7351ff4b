"""A small HTTP/1.1 server on TCP sockets, with a request parser, response writer and demo commands."""

__version__ = "0.1.0"
__all__ = [
    "headers",
    "request",
    "response",
    "server",
    "httpserver",
    "tcplistener",
    "udpsender",
]