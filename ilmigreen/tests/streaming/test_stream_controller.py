"""Isolated tests for ``StreamController`` over a local consumer."""
from __future__ import annotations

from ilmigreen.base.models import Message
from ilmigreen.base.streaming import ChatStreamConsumer, StreamController, StreamState

BASE = (Message("user", "Kulit pisang?"),)


def _controller(chunks, token=None):
    return StreamController(lambda tok: ChatStreamConsumer(BASE, token=tok).consume(chunks), token)


def test_controller_tracks_terminal_event(frame):
    ctl = _controller([frame("Organik"), "data: [DONE]\n"])
    assert ctl.state is StreamState.IDLE  # nosec B101
    assert ctl.transcript is None  # nosec B101
    events = list(ctl)
    assert ctl.finished  # nosec B101
    assert ctl.terminal_event is events[-1]  # nosec B101
    assert ctl.state is StreamState.COMPLETED  # nosec B101
    assert ctl.error is None  # nosec B101
    assert ctl.transcript[-1] == Message("assistant", "Organik")  # nosec B101


def test_cancel_mid_stream_yields_cancelled_terminal(frame):
    ctl = _controller([frame("a"), frame("b")])
    for evt in ctl:
        if evt.delta == "a":
            ctl.cancel("stop")
    assert ctl.finished  # nosec B101
    assert ctl.state is StreamState.CANCELLED  # nosec B101
    assert ctl.error == "stop"  # nosec B101
    assert ctl.token.cancelled  # nosec B101


def test_cancel_is_idempotent_after_completion(frame):
    ctl = _controller([frame("a")])
    ctl.run_to_end()
    ctl.cancel()
    ctl.cancel("again")
    assert ctl.state is StreamState.COMPLETED  # nosec B101


def test_close_stops_without_terminal_event(frame):
    closed = []

    def chunks():
        try:
            yield frame("a")
            yield frame("b")
        finally:
            closed.append(True)

    ctl = _controller(chunks())
    it = iter(ctl)
    first = next(it)
    assert first.delta == "a"  # nosec B101
    ctl.close()
    assert closed == [True]  # nosec B101
    assert not ctl.finished  # nosec B101
    assert ctl.terminal_event is None  # nosec B101
    assert ctl.state is StreamState.STREAMING  # nosec B101


def test_run_to_end_returns_final_transcript(frame):
    ctl = _controller([frame("Ha"), frame("lo")])
    final = ctl.run_to_end()
    assert final == BASE + (Message("assistant", "Halo"),)  # nosec B101
