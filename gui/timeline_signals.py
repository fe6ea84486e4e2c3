"""
時間軸 Qt 訊號橋接

作用：
- 訂閱 LyricsTimeline 的時間變更通知
- 轉為 pyqtSignal 供介面元件連接
"""

from typing import Optional

from PyQt5.QtCore import QObject, pyqtSignal

from core.lyrics import LyricsTimeline


class TimelineSignals(QObject):
    """時間軸變更訊號"""

    # 時間變更訊號（index, time），time 為 None 表示清除
    time_changed = pyqtSignal(int, object)

    def __init__(self, timeline: Optional[LyricsTimeline] = None, parent=None):
        super().__init__(parent)
        # 目前連接的時間軸
        self.timeline: Optional[LyricsTimeline] = None
        self.set_timeline(timeline)

    def set_timeline(self, timeline: Optional[LyricsTimeline]):
        """改為連接新的時間軸"""
        self.detach()
        self.timeline = timeline
        if timeline is not None:
            timeline.subscribe(self._on_time_changed)

    def detach(self):
        """取消訂閱目前的時間軸"""
        if self.timeline is not None:
            self.timeline.unsubscribe(self._on_time_changed)
            self.timeline = None

    def _on_time_changed(self, index: int, time: Optional[float]):
        self.time_changed.emit(index, time)
