"""Building blocks for HTTP and WebSocket servers: routing, chunked decoding, backpressure, deflate, an event loop and helpers."""

__version__ = "0.1.0"

__all__ = [
    "backpressure",
    "chunked",
    "crc32",
    "deflate",
    "loop",
    "response_data",
    "router",
    "utilities",
]