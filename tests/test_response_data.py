import pytest

from uwskit.response_data import HttpResponseData, ResponseState


def test_state_bit_values_survive_mark_done():
    assert ResponseState.STATUS_CALLED == 1
    assert ResponseState.RESPONSE_PENDING == 8
    assert ResponseState.CONNECTION_CLOSE == 16

    data = HttpResponseData(
        state=ResponseState.STATUS_CALLED
        | ResponseState.RESPONSE_PENDING
        | ResponseState.CONNECTION_CLOSE
    )
    assert data.state == 25
    data.mark_done()
    assert data.state == 17


def test_defaults():
    data = HttpResponseData()
    assert data.offset == 0
    assert data.state == 0
    assert len(data.buffer) == 0


def test_mark_done_clears_handlers_and_pending():
    data = HttpResponseData(
        on_writable=lambda o: True,
        on_aborted=lambda: None,
        state=ResponseState.RESPONSE_PENDING | ResponseState.END_CALLED,
    )
    data.mark_done()
    assert data.on_writable is None
    assert data.on_aborted is None
    assert data.state == ResponseState.END_CALLED


def test_call_on_writable_returns_and_keeps_handler():
    offsets = []

    def handler(offset):
        offsets.append(offset)
        return False

    data = HttpResponseData(on_writable=handler)
    assert data.call_on_writable(10) is False
    assert offsets == [10]
    assert data.on_writable is handler


def test_handler_calling_mark_done_stays_removed():
    data = HttpResponseData(state=ResponseState.RESPONSE_PENDING)

    def handler(offset):
        data.mark_done()
        return True

    data.on_writable = handler
    assert data.call_on_writable(0) is True
    assert data.on_writable is None
    assert not data.state & ResponseState.RESPONSE_PENDING


def test_handler_replacing_itself_is_restored():
    data = HttpResponseData()

    def other(offset):
        return False

    def handler(offset):
        data.on_writable = other
        return True

    data.on_writable = handler
    data.call_on_writable(1)
    assert data.on_writable is handler


def test_missing_handler_raises():
    with pytest.raises(RuntimeError):
        HttpResponseData().call_on_writable(0)


def test_buffers_are_independent():
    first = HttpResponseData()
    second = HttpResponseData()
    first.buffer.append(b"abc")
    assert first.buffer.data() == b"abc"
    assert second.buffer.data() == b""