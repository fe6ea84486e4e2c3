"""
歌詞解析器

作用：
- 解析純文字歌詞（每個詞預設為未定時間）
- 解析 LRC / Enhanced LRC 文字或檔案內容
- 解析 JSON 快照
- 轉換為 LyricsTimeline 結構
"""

import json
import logging
import os
import re
from typing import List, Optional, Tuple, Union

from config import LINE_BREAK_MARKER, TEXT_ENCODINGS

from .errors import MalformedSnapshot
from .model import LyricsTimeline, Word
from .timer import to_seconds

logger = logging.getLogger(__name__)

# 行首時間戳：[mm:ss.ff]內容
LINE_PATTERN = re.compile(r'^\[(\d+):(\d+(?:\.\d+)?)\](.*)$')
# 行內時間戳：<mm:ss.ff>
INLINE_TAG_PATTERN = re.compile(r'<(\d+):(\d+(?:\.\d+)?)>')
# 全域偏移：[offset:ms]
OFFSET_PATTERN = re.compile(r'\[offset:\s*([^\]]*)\]', re.IGNORECASE)
# 元資訊標籤
METADATA_TAGS = {
    'ar': 'artist',
    'ti': 'title',
    'al': 'album',
}
METADATA_PATTERN = re.compile(r'^\[(ar|ti|al):(.*)\]$', re.IGNORECASE)


class LyricsParser:
    """歌詞解析器"""

    def parse_file(self, file_path: str, duration: Optional[float] = None) -> LyricsTimeline:
        """依副檔名自動解析檔案"""
        ext = os.path.splitext(file_path)[1].lower()
        content = None
        if ext in ('.txt', '.lrc', '.json'):
            content = self._read_text_file(file_path)
        if ext == '.txt':
            timeline = self.parse_text_string(content, duration)
        elif ext == '.lrc':
            timeline = self.parse_lrc_string(content, duration)
        elif ext == '.json':
            timeline = self.parse_json(content, duration)
        else:
            raise ValueError(f'Unsupported format: {ext}')
        logger.info(f"Lyrics loaded: {file_path} ({len(timeline)} words)")
        return timeline

    def parse_text_string(self, content: str, duration: Optional[float] = None) -> LyricsTimeline:
        """
        解析純文字歌詞

        以空白切詞，行尾的詞會帶上行尾標記；
        每個詞的時間先設為 duration（待標記）。
        """
        words = [Word(text=token, time=duration) for token in self._split_words(content)]
        return LyricsTimeline(words, duration=duration)

    def parse_lrc_string(self, content: str, duration: Optional[float] = None) -> LyricsTimeline:
        """解析 LRC / Enhanced LRC 字串內容"""
        all_lines = self._normalize(content).split('\n')
        offset = self._parse_offset(content)
        # 整份檔案只判斷一次是否為 Enhanced LRC
        is_enhanced = any(INLINE_TAG_PATTERN.search(line) for line in all_lines)
        logger.debug(f"Parsing LRC: enhanced={is_enhanced}, offset={offset}")

        metadata = {}
        line_words: List[List[Tuple[str, float]]] = []  # 每行的 (文字, 時間)

        for line in all_lines:
            meta = METADATA_PATTERN.match(line)
            if meta:
                metadata[METADATA_TAGS[meta.group(1).lower()]] = meta.group(2).strip()
                continue

            match = LINE_PATTERN.match(line)
            if not match:
                if line.strip():
                    logger.debug(f"Skipping line without timestamp: {line!r}")
                continue

            minutes_str, seconds_str, text = match.groups()
            line_time = to_seconds(minutes_str, seconds_str)
            if is_enhanced:
                pairs = self._parse_enhanced_content(line_time, text)
            else:
                # 無字級時間：整行的詞共用行時間戳
                pairs = [(token, line_time) for token in text.split()]
            if pairs:
                line_words.append(pairs)

        words: List[Word] = []
        for line_idx, pairs in enumerate(line_words):
            is_last_line = line_idx == len(line_words) - 1
            for word_idx, (token, time) in enumerate(pairs):
                if not is_last_line and word_idx == len(pairs) - 1:
                    token += LINE_BREAK_MARKER
                # 時間精度對齊輸出（毫秒）
                words.append(Word(text=token, time=round(max(time + offset, 0.0), 3)))

        timeline = LyricsTimeline(words, duration=duration)
        timeline.metadata.update(metadata)
        return timeline

    def parse_json(self, data: Union[str, list], duration: Optional[float] = None) -> LyricsTimeline:
        """解析 JSON 快照（字串或已解碼的列表）"""
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except json.JSONDecodeError as exc:
                raise MalformedSnapshot(f'Invalid JSON snapshot: {exc}') from exc
        if not isinstance(data, list):
            raise MalformedSnapshot('JSON snapshot must be a list of {text, time} objects')

        words: List[Word] = []
        for index, item in enumerate(data):
            if not isinstance(item, dict) or not isinstance(item.get('text'), str):
                raise MalformedSnapshot(f'Invalid word at position {index}: {item!r}')
            time = item.get('time')
            if time is not None and (isinstance(time, bool) or not isinstance(time, (int, float))):
                raise MalformedSnapshot(f'Invalid time at position {index}: {time!r}')
            words.append(Word(text=item['text'], time=float(time) if time is not None else None))
        return LyricsTimeline(words, duration=duration)

    def _parse_enhanced_content(self, line_time: float, content: str) -> List[Tuple[str, float]]:
        """
        解析 Enhanced LRC 行內容：
        格式：開頭文字 <mm:ss.ff> 詞 <mm:ss.ff> 詞 ... <mm:ss.ff>

        同一段的詞共用該段時間戳；
        沒有文字的結尾時間戳只代表結束，不產生詞。
        """
        parts = INLINE_TAG_PATTERN.split(content)
        pairs: List[Tuple[str, float]] = []

        # parts = [開頭文字, 分, 秒, 文字, 分, 秒, 文字, ...]
        segments = [(line_time, parts[0])]
        for i in range(1, len(parts), 3):
            segments.append((to_seconds(parts[i], parts[i + 1]), parts[i + 2]))

        for segment_time, segment_text in segments:
            for token in segment_text.split():
                pairs.append((token, segment_time))
        return pairs

    def _parse_offset(self, content: str) -> float:
        """解析 [offset:ms]，回傳秒數"""
        match = OFFSET_PATTERN.search(content)
        if not match:
            return 0.0
        try:
            return float(match.group(1)) / 1000.0
        except ValueError:
            logger.warning(f"Ignoring invalid offset: {match.group(1)!r}")
            return 0.0

    def _normalize(self, content: str) -> str:
        """整理空白：合併連續空白、去除行尾空白、統一換行"""
        content = re.sub(r'\r\n|\r', '\n', content)
        content = content.replace('　', '')
        content = re.sub(r'[ \t]+', ' ', content)
        content = re.sub(r' +\n', '\n', content)
        return content.strip()

    def _split_words(self, content: str) -> List[str]:
        """切詞，行尾的詞帶上行尾標記"""
        marked = self._normalize(content).replace('\n', LINE_BREAK_MARKER + '\n')
        tokens = []
        for token in marked.split():
            token = token.strip()
            # 不加入空白詞或單獨的行尾標記
            if token and token != LINE_BREAK_MARKER:
                tokens.append(token)
        return tokens

    def _read_text_file(self, file_path: str) -> str:
        """讀取文字檔案並嘗試編碼"""
        for encoding in TEXT_ENCODINGS:
            try:
                with open(file_path, 'r', encoding=encoding) as file_handle:
                    return file_handle.read()
            except UnicodeDecodeError:
                continue
        logger.warning(f"Could not decode {file_path} cleanly, replacing invalid bytes")
        with open(file_path, 'r', encoding='utf-8', errors='replace') as file_handle:
            return file_handle.read()
