"""
Pipeline module exports
"""

from .session import TimingSession

__all__ = [
    'TimingSession',
]
