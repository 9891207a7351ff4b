# httpfromtcp

A small HTTP/1.1 server written on top of plain TCP sockets, with no
dependencies outside the standard library.

## Modules

- `httpfromtcp.headers`: `Headers`, a `dict` of lower-cased header names.
  `Headers.parse(data)` parses one `name: value` line from the start of `data`.
  It returns `(consumed, done)`, where `done` is true when a blank line ends
  the header block. A repeated name has its values joined with a comma.
  Malformed lines raise `WrongFormatError`. Names with characters that are not
  allowed raise `WrongKeyFormatError`. Both derive from `HeaderError`, which is
  a `ValueError`. `set_default(content_length, custom_headers)` sets
  `content-length`, `connection: close` and `content-type: text/plain`, then
  applies `custom_headers`. `set(custom_headers)` copies entries in.
- `httpfromtcp.request`: `request_from_reader(reader)` reads from any object
  with a `read(size)` method. It returns a `Request` with `request_line`
  (`method`, `request_target`, `http_version`), `headers` and `body`. Parse
  failures raise subclasses of `RequestError`: `EmptyRequestLineError`,
  `WrongPartsCountError`, `WrongMethodFormatError`, `WrongVersionFormatError`
  and `WrongBodyLengthError`. `parse_request_line`, `parse_method` and
  `parse_version` are also available.
- `httpfromtcp.response`: `Writer(w)` writes to any object with a
  `write(bytes)` method. It provides `write_status_line`, `write_headers`,
  `write_body`, `write_chunked_body`, `write_chunked_body_done` and
  `write_trailers`. Calling them out of order raises `WrongWriteOrderError`.
  `StatusCode` names `OK`, `BAD_REQUEST` and `SERVER_ERROR`. For other codes
  the status line carries only the number.
- `httpfromtcp.server`: `serve(port, handler)` listens on `127.0.0.1:port`.
  It handles each connection in a background thread, calling
  `handler(w, request)` with a writable stream and the parsed request. If
  parsing fails, the client receives a 500 response whose body is the error
  text, built by `write_error`. The returned `Server` has `port`, `close()`,
  and can be used as a context manager.

## Installation

```
pip install .
```

## Commands

Start the demo HTTP server (default port 8888, change it with `--port`):

```
httpfromtcp-server
```

The server answers these routes:

- `/`: a 200 HTML page.
- `/yourproblem`: a 400 HTML page.
- `/myproblem`: a 500 HTML page.
- `/video...`: serves `assets/vim.mp4`, read relative to the working
  directory.
- `/httpbin/<path>`: fetches `https://httpbin.org/<path>` and relays it as a
  chunked body. It then sends `X-Content-Length` and `X-Content-Sha256`
  trailers.

Stop the server with Ctrl-C or SIGTERM.

Print the requests that arrive on a TCP port (defaults `--host 127.0.0.1`,
`--port 42069`; `--count N` stops after N requests):

```
httpfromtcp-tcplistener
```

Send each line typed on standard input as one UDP datagram (defaults
`--host localhost`, `--port 42069`), until end of input:

```
httpfromtcp-udpsender
```

## Library use

```python
from httpfromtcp.headers import Headers
from httpfromtcp.response import StatusCode, Writer
from httpfromtcp.server import serve

def handler(w, req):
    body = f"you asked for {req.request_line.request_target}".encode()
    writer = Writer(w)
    writer.write_status_line(StatusCode.OK)
    headers = Headers()
    headers.set_default(len(body), None)
    writer.write_headers(headers)
    writer.write_body(body)

with serve(8080, handler) as server:
    ...
```

## Limitations

- Only `HTTP/1.1` request lines are accepted, and methods must be upper-case
  letters.
- Each connection carries one request and is then closed; there is no
  keep-alive.
- A request body is read only when `Content-Length` is present. It is taken
  once the client stops sending: end of stream, or the server's one-second
  read deadline. The body must then be exactly that length.
- Chunked request bodies are not decoded.
- The server listens on `127.0.0.1` only and does no TLS.

## Tests

```
pip install .[test]
pytest
```