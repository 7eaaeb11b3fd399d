"""
ToyKV Indexing Module
=====================
Value → aggregate secondary index kept in lockstep with the record store.

Components:
  - value_index: CountingValueIndex, NameSetValueIndex, make_value_index
"""

from indexing.value_index import (
    ValueIndex, CountingValueIndex, NameSetValueIndex,
    IndexCorruptionError, INDEX_KINDS, make_value_index,
)

__all__ = [
    "ValueIndex", "CountingValueIndex", "NameSetValueIndex",
    "IndexCorruptionError", "INDEX_KINDS", "make_value_index",
]
