"""
ToyKV Storage
=============
Public API for the record storage layer.

Usage:
    from storage import RecordStore, NULL
"""

from storage.record_store import RecordStore, NULL, NULL_DISPLAY

__all__ = [
    "RecordStore", "NULL", "NULL_DISPLAY",
]
