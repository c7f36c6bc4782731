[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "uwskit"
version = "0.1.0"
description = "Building blocks for HTTP and WebSocket servers: URL routing, chunked decoding, backpressure buffering, per-message deflate and a simple event loop."
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "websocket", "router", "chunked", "deflate", "event-loop", "crc32"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["uwskit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
