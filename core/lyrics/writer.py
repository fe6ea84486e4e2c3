"""
歌詞寫入器

作用：
- 將 LyricsTimeline 轉為 Enhanced LRC 字串
- 寫入 ELRC 檔案（UTF-8-SIG）與 JSON 快照
"""

import json
import logging
from typing import List

from config import JSON_ENCODING, LRC_ENCODING

from .model import LyricsTimeline
from .timer import to_timer

logger = logging.getLogger(__name__)


class LyricsWriter:
    """Enhanced LRC / JSON 寫入器"""

    def write_file(self, timeline: LyricsTimeline, file_path: str):
        """寫入 ELRC 檔案（UTF-8-SIG）"""
        content = self.to_elrc(timeline)
        # 強制使用 UTF-8-SIG（帶 BOM）
        with open(file_path, 'w', encoding=LRC_ENCODING) as file_handle:
            file_handle.write(content)
        logger.info(f"ELRC saved: {file_path}")

    def write_json_file(self, timeline: LyricsTimeline, file_path: str):
        """寫入 JSON 快照"""
        with open(file_path, 'w', encoding=JSON_ENCODING) as file_handle:
            file_handle.write(self.to_json_string(timeline))
        logger.info(f"JSON snapshot saved: {file_path}")

    def to_json_string(self, timeline: LyricsTimeline) -> str:
        """將時間軸轉為 JSON 字串"""
        return json.dumps(timeline.to_json(), indent=2, ensure_ascii=False)

    def to_elrc(self, timeline: LyricsTimeline) -> str:
        """
        將時間軸轉為 Enhanced LRC 字串

        每行以 [mm:ss.fff] 開頭，行內已標記的詞前加上 <mm:ss.fff>；
        已標記且帶行尾標記的詞之後換行。
        """
        lines: List[str] = []

        # 元資訊
        artist = timeline.metadata.get('artist', '')
        title = timeline.metadata.get('title', '')
        album = timeline.metadata.get('album', '')

        if artist:
            lines.append(f"[ar:{artist}]")
        if title:
            lines.append(f"[ti:{title}]")
        if album:
            lines.append(f"[al:{album}]")

        tokens: List[str] = []  # 目前這一行的片段
        is_new_line = True
        last_time = 0.0  # 最近一個已標記時間

        for word in timeline:
            if is_new_line:
                if tokens:
                    lines.append(' '.join(tokens))
                # 行首詞未標記時沿用最近的時間
                line_time = word.time if word.time is not None else last_time
                tokens = [f"[{to_timer(line_time)}]"]
            elif word.time is not None:
                tokens.append(f"<{to_timer(word.time)}>")

            # 只有行尾標記的詞不輸出文字
            if word.display_text:
                tokens.append(word.display_text)
            if word.time is not None:
                last_time = word.time
            is_new_line = word.ends_line and word.time is not None

        if tokens:
            lines.append(' '.join(tokens))

        return '\n'.join(lines)
