import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.lyrics import LyricsTimeline, Word  # noqa: E402


@pytest.fixture
def untimed_timeline():
    """Five untimed words with a known media duration."""
    words = [Word(text) for text in ('one', 'two', 'three<br>', 'four', 'five')]
    return LyricsTimeline(words, duration=10.0)


@pytest.fixture
def recorder():
    """Collects change notifications in emission order."""
    events = []

    def record(index, time):
        events.append((index, time))

    record.events = events
    return record
