"""
歌詞標記工作階段

作用：
- 保存目前載入的歌詞時間軸與媒體資訊
- 鍵盤游標、邊播邊標記時間
- 播放速度、跳轉位置
- 匯出 ELRC 與保存工作階段 JSON
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from config import (
    DEFAULT_EXPORT_NAME,
    JSON_ENCODING,
    MAX_PLAYBACK_RATE,
    MIN_PLAYBACK_RATE,
    SEEK_LEAD_IN_SEC,
)
from core.lyrics import LyricsParser, LyricsTimeline, LyricsValidator, LyricsWriter

logger = logging.getLogger(__name__)


@dataclass
class TimingSession:
    """歌詞標記工作階段狀態"""

    # 歌詞時間軸
    timeline: Optional[LyricsTimeline] = None
    # 已載入的媒體檔名（匯出檔名用）
    loaded_filename: Optional[str] = None
    # 媒體總長度（秒）
    media_duration: Optional[float] = None
    # 鍵盤游標索引
    cursor_index: int = 0
    # 播放速度
    playback_rate: float = 1.0

    def get_state(self) -> str:
        """取得目前工作階段狀態"""
        if self.timeline is None or len(self.timeline) == 0:
            return 'EMPTY'
        # 純文字載入時所有詞暫時位於結尾，視為未標記
        pending_time = self.timeline.duration
        timed = sum(
            1 for word in self.timeline
            if word.time is not None and (pending_time is None or word.time != pending_time)
        )
        if timed == 0:
            return 'LYRICS_LOADED'
        if timed == len(self.timeline):
            return 'COMPLETE'
        return 'TIMING'

    # ---- 載入 ----

    def load_lyrics(self, source: Union[str, list, LyricsTimeline], fmt: str = 'text') -> LyricsTimeline:
        """載入歌詞（純文字、LRC、JSON 或既有時間軸）"""
        if isinstance(source, LyricsTimeline):
            timeline = source
            if self.media_duration is not None:
                timeline.duration = self.media_duration
        else:
            parser = LyricsParser()
            if fmt == 'text':
                timeline = parser.parse_text_string(source, self.media_duration)
            elif fmt == 'lrc':
                timeline = parser.parse_lrc_string(source, self.media_duration)
            elif fmt == 'json':
                timeline = parser.parse_json(source, self.media_duration)
            else:
                raise ValueError(f'Unsupported format: {fmt}')

        ok, errors = LyricsValidator().validate(timeline)
        if not ok:
            for error in errors:
                logger.warning(f"Word {error.word_index}: {error.error_type} ({error.message})")

        self.timeline = timeline
        self.cursor_index = 0
        logger.info(f"Lyrics loaded: {len(timeline)} words")
        return timeline

    def set_media(self, filename: Optional[str], duration: Optional[float] = None):
        """記錄媒體檔名與長度"""
        self.loaded_filename = filename
        self.set_duration(duration)
        logger.info(f"Media loaded: {filename}")

    def set_duration(self, duration: Optional[float]):
        """媒體長度變更時同步到時間軸"""
        self.media_duration = duration
        if self.timeline is not None:
            self.timeline.duration = duration

    # ---- 標記 ----

    def assign_time(self, index: int, position: float, playing: bool = True) -> bool:
        """在播放中為指定詞設定時間，無法設定時回傳 False"""
        if self.timeline is None or not playing:
            return False
        if index >= len(self.timeline):
            return False
        self.timeline.set_time_of_word(index, position)
        return True

    def tap(self, position: float, playing: bool = True) -> bool:
        """空白鍵：標記游標所在詞並前進"""
        if self.assign_time(self.cursor_index, position, playing):
            self.set_cursor_index(self.cursor_index + 1)
            return True
        return False

    def click_word(self, index: int, position: float, playing: bool = True):
        """點擊詞：播放中則標記並移到下一個詞，否則只移動游標"""
        if self.assign_time(index, position, playing):
            self.set_cursor_index(index + 1)
        else:
            self.set_cursor_index(index)

    def clear_at_cursor(self):
        """Del 鍵：清除游標所在詞的時間並後退"""
        if self.timeline is None or len(self.timeline) == 0:
            return
        self.timeline.set_time_of_word(self.cursor_index, None)
        self.set_cursor_index(self.cursor_index - 1)

    def move_cursor(self, delta: int):
        """左右鍵移動游標"""
        self.set_cursor_index(self.cursor_index + delta)

    def set_cursor_index(self, index: int):
        """設定游標（限制在有效範圍內）"""
        if self.timeline is None or len(self.timeline) == 0:
            self.cursor_index = 0
            return
        self.cursor_index = max(0, min(index, len(self.timeline) - 1))

    # ---- 播放 ----

    def seek_position_for(self, index: int) -> float:
        """右鍵跳轉：回傳詞時間前一小段的位置"""
        if self.timeline is None:
            raise ValueError('No lyrics loaded')
        position = self.timeline.get_approximate_time(index)
        return max(position - SEEK_LEAD_IN_SEC, 0.0)

    def highlight_index(self, position: float) -> Optional[int]:
        """播放位置對應的高亮詞索引"""
        if self.timeline is None or self.timeline.duration is None:
            return None
        return self.timeline.get_index_for_time(position)

    def set_playback_rate(self, rate: Union[float, str]) -> float:
        """設定播放速度，字串表示相對變化（例如 "-0.1"）"""
        if isinstance(rate, str):
            new_rate = self.playback_rate + float(rate)
        else:
            new_rate = float(rate)
        self.playback_rate = min(max(new_rate, MIN_PLAYBACK_RATE), MAX_PLAYBACK_RATE)
        return self.playback_rate

    # ---- 匯出 ----

    def export_filename(self) -> str:
        """匯出檔名（媒體檔名去副檔名）"""
        stem = Path(self.loaded_filename).stem if self.loaded_filename else DEFAULT_EXPORT_NAME
        return f"{stem}.lrc"

    def export_elrc(self, output_dir: str) -> str:
        """輸出 ELRC 檔案並回傳路徑"""
        if self.timeline is None:
            raise ValueError('No lyrics loaded')
        output_path = Path(output_dir) / self.export_filename()
        LyricsWriter().write_file(self.timeline, str(output_path))
        return str(output_path)

    def to_dict(self) -> dict:
        """轉為字典"""
        return {
            'words': self.timeline.to_json() if self.timeline is not None else [],
            'loaded_filename': self.loaded_filename,
            'media_duration': self.media_duration,
            'cursor_index': self.cursor_index,
            'playback_rate': self.playback_rate,
        }

    def save_to_json(self, file_path: str):
        """保存工作階段為 JSON"""
        try:
            with open(file_path, 'w', encoding=JSON_ENCODING) as f:
                json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
            logger.info(f"Session saved: {file_path}")
        except OSError as e:
            logger.error(f"Failed to save session: {e}")
            raise

    @classmethod
    def load_from_json(cls, file_path: str) -> 'TimingSession':
        """從 JSON 載入工作階段"""
        try:
            with open(file_path, 'r', encoding=JSON_ENCODING) as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load session: {e}")
            raise

        session = cls(
            loaded_filename=data.get('loaded_filename'),
            media_duration=data.get('media_duration'),
            playback_rate=data.get('playback_rate', 1.0),
        )
        session.timeline = LyricsParser().parse_json(data.get('words', []), session.media_duration)
        session.set_cursor_index(data.get('cursor_index', 0))
        logger.info(f"Session loaded: {file_path}")
        return session
