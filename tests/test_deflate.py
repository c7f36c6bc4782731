import pytest

from uwskit.deflate import (
    COMPRESSOR_MASK,
    DECOMPRESSOR_MASK,
    CompressOptions,
    DeflationStream,
    InflationError,
    InflationStream,
)

# "Hello" as a compressed WebSocket payload (sync tail removed).
HELLO_DEFLATED = bytes([0xF2, 0x48, 0xCD, 0xC9, 0xC9, 0x07, 0x00])


def test_option_aliases_behave_like_largest_sizes():
    assert CompressOptions.DEDICATED_DECOMPRESSOR is CompressOptions.DEDICATED_DECOMPRESSOR_32KB
    assert CompressOptions.DEDICATED_COMPRESSOR is CompressOptions.DEDICATED_COMPRESSOR_256KB
    assert CompressOptions.DEDICATED_COMPRESSOR & COMPRESSOR_MASK == CompressOptions.DEDICATED_COMPRESSOR
    assert CompressOptions.DEDICATED_DECOMPRESSOR & DECOMPRESSOR_MASK == CompressOptions.DEDICATED_DECOMPRESSOR

    payload = b"alias payload " * 50
    alias = DeflationStream(CompressOptions.DEDICATED_COMPRESSOR).deflate(payload, True)
    sized = DeflationStream(CompressOptions.DEDICATED_COMPRESSOR_256KB).deflate(payload, True)
    assert alias == sized
    inflater = InflationStream(CompressOptions.DEDICATED_DECOMPRESSOR_32KB)
    assert inflater.inflate(alias, len(payload), True) == payload


def test_inflate_known_hello_payload():
    stream = InflationStream(CompressOptions.DEDICATED_DECOMPRESSOR)
    assert stream.inflate(HELLO_DEFLATED, 1024, True) == b"Hello"


def test_deflate_known_hello_payload():
    stream = DeflationStream(CompressOptions.DEDICATED_COMPRESSOR)
    assert stream.deflate(b"Hello", True) == HELLO_DEFLATED


def test_reset_deflation_is_repeatable():
    stream = DeflationStream(CompressOptions.DEDICATED_COMPRESSOR_8KB)
    first = stream.deflate(b"some repeated payload", True)
    second = stream.deflate(b"some repeated payload", True)
    assert first == second


def test_context_takeover_round_trip():
    deflater = DeflationStream(CompressOptions.DEDICATED_COMPRESSOR)
    inflater = InflationStream(CompressOptions.DEDICATED_DECOMPRESSOR)
    messages = [b"first message", b"first message again", b"x" * 5000]
    for message in messages:
        frame = deflater.deflate(message, False)
        assert inflater.inflate(frame, 1 << 20, False) == message


def test_combined_options_round_trip():
    options = CompressOptions.DEDICATED_COMPRESSOR_4KB | CompressOptions.DEDICATED_DECOMPRESSOR
    deflater = DeflationStream(options)
    inflater = InflationStream(options)
    payload = bytes(range(256)) * 40
    assert inflater.inflate(deflater.deflate(payload, True), len(payload), True) == payload


def test_zero_length_inflate_is_valid():
    stream = InflationStream(CompressOptions.DEDICATED_DECOMPRESSOR)
    assert stream.inflate(b"", 10, True) == b""


def test_inflate_exactly_at_limit():
    payload = b"a" * 3000
    frame = DeflationStream(CompressOptions.DEDICATED_COMPRESSOR).deflate(payload, True)
    stream = InflationStream(CompressOptions.DEDICATED_DECOMPRESSOR)
    assert stream.inflate(frame, len(payload), True) == payload


def test_inflate_over_limit_raises():
    payload = b"a" * 10000
    frame = DeflationStream(CompressOptions.DEDICATED_COMPRESSOR).deflate(payload, True)
    stream = InflationStream(CompressOptions.DEDICATED_DECOMPRESSOR)
    with pytest.raises(InflationError):
        stream.inflate(frame, len(payload) - 1, True)


def test_inflate_after_error_with_reset_recovers():
    stream = InflationStream(CompressOptions.DEDICATED_DECOMPRESSOR)
    with pytest.raises(InflationError):
        stream.inflate(b"\xff\xff\xff", 100, True)
    assert stream.inflate(HELLO_DEFLATED, 100, True) == b"Hello"


def test_deflate_empty_raises():
    stream = DeflationStream(CompressOptions.DEDICATED_COMPRESSOR)
    with pytest.raises(ValueError):
        stream.deflate(b"", True)


@pytest.mark.parametrize("options", [CompressOptions.DISABLED, CompressOptions.SHARED_COMPRESSOR])
def test_invalid_compressor_options(options):
    with pytest.raises(ValueError):
        DeflationStream(options)


@pytest.mark.parametrize("options", [CompressOptions.DISABLED, CompressOptions.SHARED_DECOMPRESSOR])
def test_invalid_decompressor_options(options):
    with pytest.raises(ValueError):
        InflationStream(options)