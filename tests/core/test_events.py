"""Unit tests for mrchess/core/events.py"""

from unittest.mock import Mock

import pytest

from mrchess.core.events import Signal


def test_emit_in_connection_order() -> None:
    calls: list[str] = []
    signal: Signal[[int]] = Signal("test")
    signal.connect(lambda value: calls.append(f"first {value}"))
    signal.connect(lambda value: calls.append(f"second {value}"))

    signal.emit(7)
    assert calls == ["first 7", "second 7"]


def test_connect_once_and_disconnect() -> None:
    listener = Mock()
    signal: Signal[[str]] = Signal("test")
    signal.connect(listener)
    signal.connect(listener)
    assert len(signal) == 1

    signal.disconnect(listener)
    signal.disconnect(listener)  # unknown listener: nothing happens
    signal.emit("hello")
    listener.assert_not_called()


def test_listener_may_disconnect_itself() -> None:
    signal: Signal[[]] = Signal("test")
    other = Mock()

    def once() -> None:
        signal.disconnect(once)

    signal.connect(once)
    signal.connect(other)
    signal.emit()
    signal.emit()
    assert other.call_count == 2
    assert len(signal) == 1


def test_failing_listener_propagates() -> None:
    signal: Signal[[]] = Signal("test")
    signal.connect(Mock(side_effect=ValueError("listener broke")))
    with pytest.raises(ValueError):
        signal.emit()
