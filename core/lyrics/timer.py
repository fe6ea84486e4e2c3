"""
時間格式轉換

作用：
- 秒數 -> mm:ss.fff（或 hh:mm:ss）
- [mm:ss.ff] / <mm:ss.ff> -> 秒數
"""

import math
import re
from typing import Optional

from .errors import MalformedTimestamp

# 時間戳格式：[mm:ss.ff] 或 <mm:ss.ff>
TIMESTAMP_PATTERN = re.compile(r'^\s*([\[<])(\d+):(\d+(?:\.\d+)?)([\]>])\s*$')

# 吸收浮點誤差（例如 2.3 * 1000 = 2299.9999...）
_MS_EPSILON = 1e-6


def to_timer(seconds: Optional[float], with_hours: bool = False) -> str:
    """將秒數格式化為 mm:ss.fff（with_hours 時為 hh:mm:ss），無效值以 -- 表示"""
    if seconds is None or math.isnan(seconds) or math.isinf(seconds):
        return '--:--:--' if with_hours else '--:--.--'

    total_ms = int(max(seconds, 0.0) * 1000 + _MS_EPSILON)  # 毫秒（向零截斷）
    total_secs, millis = divmod(total_ms, 1000)
    hours = total_secs // 3600
    minutes = total_secs // 60 % 60 if with_hours else total_secs // 60
    secs = total_secs % 60

    if with_hours:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}.{millis:03d}"


def to_seconds(minutes: str, seconds: str) -> float:
    """分鐘與秒數字串轉為秒數"""
    return int(minutes) * 60 + float(seconds)


def parse_timestamp(token: str) -> float:
    """
    解析單一時間戳：
    格式：[mm:ss.ff] 或 <mm:ss.ff>
    """
    match = TIMESTAMP_PATTERN.match(token or '')
    if not match:
        raise MalformedTimestamp(f'Malformed timestamp: {token!r}')

    opening, minutes_str, seconds_str, closing = match.groups()
    # 括號必須成對
    if (opening, closing) not in (('[', ']'), ('<', '>')):
        raise MalformedTimestamp(f'Mismatched brackets in timestamp: {token!r}')
    return to_seconds(minutes_str, seconds_str)
