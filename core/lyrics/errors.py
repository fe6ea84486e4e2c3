"""
歌詞時間軸錯誤類型
"""


class LyricsError(Exception):
    """歌詞核心錯誤基底類別"""


class IndexOutOfRange(LyricsError, IndexError):
    """索引超出 [0, length) 範圍"""


class InvalidIndex(LyricsError, TypeError):
    """索引不是整數"""


class MissingDuration(LyricsError, ValueError):
    """尚未設定媒體總長度"""


class MalformedTimestamp(LyricsError, ValueError):
    """時間戳格式錯誤"""


class MalformedSnapshot(LyricsError, ValueError):
    """JSON 快照格式錯誤"""
