"""
歌詞模組公開介面
"""

from .errors import (
    IndexOutOfRange,
    InvalidIndex,
    LyricsError,
    MalformedSnapshot,
    MalformedTimestamp,
    MissingDuration,
)
from .model import LyricsTimeline, Word
from .parser import LyricsParser
from .timer import parse_timestamp, to_timer
from .validator import LyricsValidator, ValidationError
from .writer import LyricsWriter

__all__ = [
    'Word',
    'LyricsTimeline',
    'LyricsParser',
    'LyricsWriter',
    'LyricsValidator',
    'ValidationError',
    'to_timer',
    'parse_timestamp',
    'LyricsError',
    'IndexOutOfRange',
    'InvalidIndex',
    'MissingDuration',
    'MalformedTimestamp',
    'MalformedSnapshot',
]
