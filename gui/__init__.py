"""
GUI module exports
"""

from .timeline_signals import TimelineSignals

__all__ = [
    'TimelineSignals',
]
