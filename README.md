# uwskit

Small building blocks for HTTP and WebSocket servers. The package needs
nothing outside the standard library.

## Modules

- `uwskit.router`: `HttpRouter` matches a method and URL against patterns
  built from static segments, `:parameter` segments and `*` wildcards.
  `HttpRouter.add(methods, pattern, handler, priority)` registers a handler
  for one or more methods. The priority is a `Priority` member (`HIGH`,
  `MEDIUM` or `LOW`) and defaults to `MEDIUM`. A handler receives the router
  and returns `True` when it handled the request. When it returns `False`,
  the next match is tried. `route(method, url)` reports whether any handler
  accepted the request. `parameters()` returns the captured `:parameter`
  values. `remove(method, pattern, priority)` removes every route that shares
  the handler found for those arguments. Among siblings, static segments are
  tried before parameters, parameters before wildcards, and high-priority
  routes come first.
- `uwskit.chunked`: `ChunkedDecoder` decodes a `Transfer-Encoding: chunked`
  body incrementally.
  - `feed(data)` returns the payload pieces found in the given bytes. An
    empty piece marks the terminating zero-size chunk.
  - Once the final line is consumed, decoding stops, and any bytes after it
    are available from `remainder()`. With `ChunkedDecoder(trailer=True)`,
    decoding stops after the trailer line instead.
  - `in_progress()` tells whether a body is being decoded.
  - A malformed or oversized size line raises `ChunkedEncodingError`, which
    is a `ValueError`.
- `uwskit.backpressure`: `BackPressure` is an outgoing byte buffer. Its
  methods are `append`, `erase`, `clear`, `resize`, `data()`,
  `total_length()` and `len()`. `erase` removes data lazily: bytes are
  dropped only once the amount pending removal exceeds 1/32 of the buffer.
- `uwskit.response_data`: `HttpResponseData` is a dataclass that holds the
  per-response state for one response:
  - the `on_writable`, `on_aborted` and `on_data` callbacks;
  - the outgoing `offset`;
  - `ResponseState` flags;
  - a `BackPressure` buffer.

  `mark_done()` drops the abort and writable callbacks and clears
  `RESPONSE_PENDING`. `call_on_writable(offset)` runs the writable callback
  in a way that lets it call `mark_done()` safely.
- `uwskit.deflate`: per-message deflate for WebSocket frames.
  - `CompressOptions` packs the compressor and decompressor settings into
    one value. A compressor member and a decompressor member can be combined
    with `|`.
  - `DeflationStream(options).deflate(raw, reset)` returns raw deflate
    output without the trailing `00 00 ff ff`. An empty payload raises
    `ValueError`.
  - `InflationStream(options).inflate(compressed, max_payload_length, reset)`
    adds that trailer back before inflating. It raises `InflationError` for
    corrupt data or for output longer than `max_payload_length`.
- `uwskit.loop`: `Loop` runs iterations in a fixed order: pre handlers, then
  deferred callbacks, then post handlers.
  - `add_pre_handler`, `add_post_handler`, `remove_pre_handler` and
    `remove_post_handler` manage the handlers. Each handler is stored under a
    key, and adding a key that already exists keeps the existing handler.
  - `defer(callback)` is safe to call from any thread.
  - `iterate()` runs one iteration and returns how many deferred callbacks
    ran.
  - `run()` blocks and iterates whenever the loop is woken, until `stop()`
    is called.
  - `free()` releases the loop.
  - `get_loop()` returns the current thread's loop and creates it on first
    use.
- `uwskit.crc32`: `crc32(data)` returns a finished CRC-32 (IEEE).
  `crc32_update(data, crc)` advances a running CRC register.
- `uwskit.utilities`: `hex_u32(value)` formats an unsigned 32-bit value as
  lower-case hex. `dec_u64(value)` formats an unsigned 64-bit value in
  decimal. Values out of range raise `ValueError`.

## Examples

Route a request to a handler and read the captured parameter:

```python
from uwskit.router import HttpRouter, Priority

router = HttpRouter()

def show_user(r):
    print("user", r.parameters())
    return True

router.add(["GET"], "/users/:id", show_user, Priority.MEDIUM)
router.route("GET", "/users/42")   # prints: user ('42',)
```

Decode a chunked body:

```python
from uwskit.chunked import ChunkedDecoder

decoder = ChunkedDecoder()
body = b"".join(decoder.feed(b"5\r\nhello\r\n0\r\n\r\n"))   # b"hello"
```

Compress a message and inflate it again:

```python
from uwskit.deflate import CompressOptions, DeflationStream, InflationStream

options = CompressOptions.DEDICATED_COMPRESSOR | CompressOptions.DEDICATED_DECOMPRESSOR
payload = DeflationStream(options).deflate(b"hello", True)
assert InflationStream(options).inflate(payload, 1024, True) == b"hello"
```

## What this package does not do

These modules are parts for a server, not a server. The package does not:

- open sockets or listen on ports;
- parse HTTP requests;
- frame WebSocket messages;
- provide a command-line program.

`Loop` does not watch file descriptors or timers. It only runs handlers and
deferred callbacks.

## Install and test

```
pip install .[test]
pytest
```