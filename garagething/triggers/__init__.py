"""Periodic tick producers."""

from .base_trigger import TickSource
from .time_trigger import PeriodicTickSource

__all__ = [
    'TickSource',
    'PeriodicTickSource',
]
