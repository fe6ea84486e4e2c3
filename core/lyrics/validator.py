"""
歌詞時間軸驗證器

作用：
- 驗證時間戳順序與範圍
- 驗證詞文字
"""

from dataclasses import dataclass
from typing import List, Tuple

from config import LINE_BREAK_MARKER

from .model import LyricsTimeline


@dataclass
class ValidationError:
    """驗證錯誤資訊"""

    word_index: int  # 詞索引
    error_type: str  # 錯誤類型代碼
    message: str  # 錯誤訊息


class LyricsValidator:
    """歌詞時間軸驗證器"""

    def validate(self, timeline: LyricsTimeline) -> Tuple[bool, List[ValidationError]]:
        """驗證歌詞時間軸內容"""
        errors: List[ValidationError] = []
        previous_time = None  # 前一個已標記詞的時間

        for word_idx, word in enumerate(timeline):
            # 檢查文字是否為空（單獨的行尾標記除外）
            text = word.text.strip()
            if not text or (text != LINE_BREAK_MARKER and not word.display_text.strip()):
                errors.append(ValidationError(word_idx, 'EMPTY_TEXT', '文字內容為空'))

            if word.time is None:
                continue

            if word.time < 0:
                errors.append(ValidationError(word_idx, 'TIME_NEGATIVE', '時間戳不可為負數'))

            if timeline.duration is not None and word.time > timeline.duration:
                errors.append(ValidationError(word_idx, 'TIME_AFTER_DURATION', '時間戳超出媒體長度'))

            # 檢查時間順序（全域遞增）
            if previous_time is not None and word.time < previous_time:
                errors.append(ValidationError(word_idx, 'TIME_ORDER', '時間戳倒序'))
            previous_time = word.time

        return len(errors) == 0, errors
