"""
歌詞時間軸資料結構

作用：
- 定義詞（Word）與歌詞時間軸（LyricsTimeline）
- 設定時間時維持時間戳單調遞增
- 以已標記的詞推估未標記詞的時間
- 時間變更時同步通知訂閱者
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from config import LINE_BREAK_MARKER

from .errors import IndexOutOfRange, InvalidIndex, MissingDuration

logger = logging.getLogger(__name__)

# 時間變更回呼（index, new_time）
TimeChangedCallback = Callable[[int, Optional[float]], None]


@dataclass(frozen=True)
class Word:
    """單一詞的文字與時間"""

    text: str  # 原始文字（可能含行尾標記）
    time: Optional[float] = None  # 開始時間（秒），None 表示未標記

    @property
    def ends_line(self) -> bool:
        """此詞是否為一行的結尾"""
        return LINE_BREAK_MARKER in self.text

    @property
    def display_text(self) -> str:
        """顯示用文字（不含行尾標記）"""
        return self.text.replace(LINE_BREAK_MARKER, '')


class LyricsTimeline:
    """歌詞完整時間軸（依序排列的詞）"""

    def __init__(self, words: Optional[Iterable[Word]] = None, duration: Optional[float] = None):
        # 詞列表
        self._words: List[Word] = list(words or [])
        # 媒體總長度（秒）
        self._duration: Optional[float] = None
        self.duration = duration
        # 時間變更訂閱者
        self._subscribers: List[TimeChangedCallback] = []
        # 元資訊（藝人、歌名、專輯）
        self.metadata: Dict[str, str] = {
            'artist': '',
            'title': '',
            'album': '',
        }

    # ---- 容器操作 ----

    def __len__(self) -> int:
        return len(self._words)

    def __getitem__(self, index: int) -> Word:
        return self._words[index]

    def __iter__(self) -> Iterator[Word]:
        return iter(self._words)

    def __repr__(self) -> str:
        return f"LyricsTimeline({len(self._words)} words, duration={self._duration})"

    @property
    def duration(self) -> Optional[float]:
        return self._duration

    @duration.setter
    def duration(self, value: Optional[float]):
        """設定媒體總長度（媒體載入完成後才會知道）"""
        if value is not None and math.isnan(value):
            value = None
        self._duration = float(value) if value is not None else None

    # ---- 訂閱 ----

    def subscribe(self, callback: TimeChangedCallback) -> TimeChangedCallback:
        """訂閱時間變更通知"""
        self._subscribers.append(callback)
        return callback

    def unsubscribe(self, callback: TimeChangedCallback):
        """取消訂閱"""
        self._subscribers.remove(callback)

    def _notify(self, index: int, time: Optional[float]):
        logger.debug(f"Time changed: word {index} -> {time}")
        for callback in list(self._subscribers):
            callback(index, time)

    # ---- 時間操作 ----

    def set_time_of_word(self, index: int, time: Optional[float]):
        """
        設定指定詞的時間（None 表示清除）

        設定實際時間後，會清除前後所有違反遞增順序的時間戳，
        每次變更都會發出通知。
        """
        self._check_index(index)
        # NaN 視為清除
        if time is not None and math.isnan(time):
            time = None

        word = self._words[index]
        has_changed = word.time != time
        self._words[index] = replace(word, time=time)
        if has_changed:
            self._notify(index, time)

        # 清除時間時不做順序修正
        if time is None:
            return

        # 後面的詞：時間不晚於目前詞者清除
        for i in range(index + 1, len(self._words)):
            later = self._words[i]
            if later.time is not None and later.time <= time:
                self._clear(i)

        # 前面的詞：時間不早於目前詞者清除
        for i in range(index - 1, -1, -1):
            earlier = self._words[i]
            if earlier.time is not None and earlier.time >= time:
                self._clear(i)

    def _clear(self, index: int):
        self._words[index] = replace(self._words[index], time=None)
        self._notify(index, None)

    def get_index_for_time(self, timestamp: float) -> Optional[int]:
        """
        由播放位置找出應該高亮的詞索引

        未標記的詞依前後已標記詞的時間等比例分配。
        最後一個詞若未標記，視為位於媒體結尾。
        """
        if self._duration is None:
            raise MissingDuration('No duration set.')
        if not self._words:
            return None

        last_index = len(self._words) - 1
        # 起點：第一個詞位於 0 秒
        earlier_time = 0.0
        earlier_index = 0

        for i, word in enumerate(self._words):
            is_last_word = i == last_index
            time_of_word = word.time
            if time_of_word is None and is_last_word:
                time_of_word = self._duration

            if is_last_word or (time_of_word is not None and time_of_word >= timestamp):
                span = time_of_word - earlier_time
                if span <= 0:
                    return i
                rel_pos = (timestamp - earlier_time) / span
                index = math.floor(earlier_index + rel_pos * (i - earlier_index))
                return max(0, min(index, last_index))

            if word.time is not None:
                earlier_index = i
                earlier_time = word.time

        return None

    def get_approximate_time(self, index: int) -> float:
        """
        取得指定詞的時間

        若該詞未標記，依前後最近的已標記詞線性推估。
        """
        self._check_index(index)

        word = self._words[index]
        if word.time is not None:
            return word.time

        # 往前找最近的已標記詞
        earlier_time, earlier_index = 0.0, 0
        for i in range(index - 1, -1, -1):
            if self._words[i].time is not None:
                earlier_time, earlier_index = self._words[i].time, i
                break

        # 往後找最近的已標記詞
        later_time, later_index = self._duration, len(self._words) - 1
        for i in range(index + 1, len(self._words)):
            if self._words[i].time is not None:
                later_time, later_index = self._words[i].time, i
                break

        if later_index == earlier_index:
            return earlier_time
        if later_time is None:
            raise MissingDuration('No duration set.')

        rel_pos = (index - earlier_index) / (later_index - earlier_index)
        return earlier_time + rel_pos * (later_time - earlier_time)

    def _check_index(self, index: int):
        """檢查索引為範圍內整數"""
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidIndex(f'index must be an int, got {type(index).__name__}')
        if not 0 <= index < len(self._words):
            raise IndexOutOfRange(f'index {index} out of range [0, {len(self._words)})')

    # ---- 快照 ----

    def to_json(self) -> List[dict]:
        """轉為 JSON 快照（[{text, time}, ...]）"""
        return [{'text': word.text, 'time': word.time} for word in self._words]
