"""
Configuration for elrc-maker
"""

import logging
import sys
from typing import Optional

# Lyrics settings
LINE_BREAK_MARKER = '<br>'  # 行尾標記（嵌入詞文字中）
LRC_ENCODING = 'utf-8-sig'
JSON_ENCODING = 'utf-8'
TEXT_ENCODINGS = ['utf-8-sig', 'utf-8', 'gbk']  # 讀檔編碼嘗試順序
DEFAULT_EXPORT_NAME = 'export'

# Playback settings
MIN_PLAYBACK_RATE = 0.5
MAX_PLAYBACK_RATE = 4.0
SEEK_LEAD_IN_SEC = 1.5  # 右鍵跳轉時提前的秒數

# Logging settings
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: int = logging.INFO, log_file: Optional[str] = None):
    """設定 logging（輸出到 terminal，可選寫到檔案）"""
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
