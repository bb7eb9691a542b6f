"""Accumulator tests: append vs replace, idempotence, prefix growth."""
from __future__ import annotations

from ilmigreen.base.models import Message
from ilmigreen.base.streaming import StreamDelta, DeltaKind, TranscriptAccumulator, publish_assistant_content

GREETING = Message("assistant", "Halo!")
QUESTION = Message("user", "Botol plastik?")


def test_publish_appends_after_user_message():
    out = publish_assistant_content((GREETING, QUESTION), "Anor")
    assert out == (GREETING, QUESTION, Message("assistant", "Anor"))  # nosec B101


def test_publish_replaces_trailing_assistant_entry():
    base = (QUESTION, Message("assistant", "Anor"))
    out = publish_assistant_content(base, "Anorganik")
    assert out == (QUESTION, Message("assistant", "Anorganik"))  # nosec B101


def test_publish_same_content_is_idempotent():
    once = publish_assistant_content((QUESTION,), "abc")
    twice = publish_assistant_content(once, "abc")
    assert once == twice  # nosec B101


def test_accumulator_grows_prefix_extensions_and_keeps_history():
    acc = TranscriptAccumulator((GREETING, QUESTION))
    published = []
    for piece in ("Sam", "pah ", "anorganik"):
        snap = acc.apply(StreamDelta(DeltaKind.FRAGMENT, piece))
        published.append(snap[-1].content)
        assert snap[:2] == (GREETING, QUESTION)  # nosec B101
        assert len(snap) == 3  # nosec B101
    assert published == ["Sam", "Sampah ", "Sampah anorganik"]  # nosec B101
    for prev, cur in zip(published, published[1:]):
        assert cur.startswith(prev)  # nosec B101
    assert acc.assistant_content == "Sampah anorganik"  # nosec B101


def test_done_and_empty_do_not_mutate():
    acc = TranscriptAccumulator((QUESTION,))
    assert acc.apply(StreamDelta(DeltaKind.EMPTY)) is None  # nosec B101
    assert acc.apply(StreamDelta(DeltaKind.DONE)) is None  # nosec B101
    assert acc.snapshot == (QUESTION,)  # nosec B101
    assert not acc.published  # nosec B101
