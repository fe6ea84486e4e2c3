"""Behavior tests for the Qt change-notification bridge."""

import pytest

QtCore = pytest.importorskip("PyQt5.QtCore")

from core.lyrics import LyricsTimeline, Word  # noqa: E402
from gui import TimelineSignals  # noqa: E402


@pytest.fixture(scope="module")
def qt_app():
    return QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])


def _timeline():
    return LyricsTimeline([Word("a"), Word("b"), Word("c")], duration=9.0)


def test_time_changes_are_emitted_as_signals(qt_app) -> None:
    """Every notification, including clears, becomes a signal emission."""
    timeline = _timeline()
    signals = TimelineSignals(timeline)
    received = []
    signals.time_changed.connect(lambda index, time: received.append((index, time)))

    timeline.set_time_of_word(1, 5.0)
    timeline.set_time_of_word(0, 7.0)

    assert received == [(1, 5.0), (0, 7.0), (1, None)]


def test_set_timeline_switches_subscription(qt_app) -> None:
    """Only the currently attached timeline drives the signal."""
    old, new = _timeline(), _timeline()
    signals = TimelineSignals(old)
    received = []
    signals.time_changed.connect(lambda index, time: received.append((index, time)))

    signals.set_timeline(new)
    old.set_time_of_word(0, 1.0)
    new.set_time_of_word(2, 2.0)

    assert received == [(2, 2.0)]


def test_detach_stops_emissions(qt_app) -> None:
    """A detached bridge ignores further changes."""
    timeline = _timeline()
    signals = TimelineSignals(timeline)
    received = []
    signals.time_changed.connect(lambda index, time: received.append((index, time)))

    signals.detach()
    timeline.set_time_of_word(0, 1.0)

    assert received == []
    assert signals.timeline is None
