"""Utility helpers for the 6502 core."""

from .debug import debug_enabled, debug_log, reload_categories
from .trace import TraceEntry, TraceRecorder

__all__ = [
    "debug_enabled",
    "debug_log",
    "reload_categories",
    "TraceEntry",
    "TraceRecorder",
]
