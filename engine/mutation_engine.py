"""
ToyKV Mutation Engine
=====================
Façade over RecordStore, ValueIndex and TransactionJournal. It is the sole
writer of all three.

Ordering per mutation:
  1. read the pre-image from the store
  2. short-circuit if nothing changes
  3. journal (name, old, new) against the innermost level, if one is open
  4. apply to the store
  5. adjust the index (old holder out, new holder in)

Rollback walks the innermost level last-entry-first and applies the inverse
of each step. Commit drops every level without touching store or index.

Thread safety: every public operation runs under one RLock, so a reader on
another thread never sees the store and index out of step.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from storage.record_store import RecordStore, NULL, NULL_DISPLAY
from indexing.value_index import ValueIndex, make_value_index
from transactions.journal import TransactionJournal, UndoEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineSnapshot:
    """Point-in-time copy of all engine state, for DUMP."""
    records: Tuple[Tuple[str, str], ...]
    index_kind: str
    counts: Dict[str, int]
    holders: Dict[str, List[str]]
    current_txn_id: int
    levels: Tuple[Tuple[int, Tuple[UndoEntry, ...]], ...]


class MutationEngine:
    """
    Transactional key/value engine with a value-count index.

    Usage:
        engine = MutationEngine()
        engine.set("a", "1")
        engine.begin()
        engine.delete("a")
        engine.rollback()       # "a" is back to "1"
        engine.count("1")       # 1
    """

    def __init__(self, index_kind: str = "count", *,
                 store: Optional[RecordStore] = None,
                 index: Optional[ValueIndex] = None,
                 journal: Optional[TransactionJournal] = None):
        self._store = store if store is not None else RecordStore()
        self._index = index if index is not None else make_value_index(index_kind)
        self._journal = journal if journal is not None else TransactionJournal()
        self._mutex = threading.RLock()

    @property
    def index_kind(self) -> str:
        return self._index.kind

    @property
    def current_txn_id(self) -> int:
        with self._mutex:
            return self._journal.current_id

    @property
    def in_transaction(self) -> bool:
        with self._mutex:
            return self._journal.is_open()

    # ─── Mutations ──────────────────────────────────────────────────────

    def set(self, name: str, value: str) -> None:
        """Bind name to value. Writing the value a name already has is a no-op."""
        with self._mutex:
            old = self._store.read(name)
            if value == old:
                return

            self._journal_mutation(name, old, value)

            self._store.write(name, value)
            if old is not NULL:
                self._index.decrement(old, name)
            self._index.increment(value, name)

    def delete(self, name: str) -> None:
        """Remove name. Deleting an absent name is a no-op."""
        with self._mutex:
            if not self._store.contains(name):
                return
            old = self._store.read(name)

            self._journal_mutation(name, old, NULL)

            self._index.decrement(old, name)
            self._store.erase(name)

    # ─── Reads ──────────────────────────────────────────────────────────

    def get(self, name: str) -> str:
        """Current value of name, or the "NULL" display string if absent."""
        with self._mutex:
            value = self._store.read(name)
        return NULL_DISPLAY if value is NULL else value

    def count(self, value: str) -> int:
        with self._mutex:
            return self._index.count(value)

    # ─── Transaction Control ────────────────────────────────────────────

    def begin(self) -> int:
        """Open a new innermost transaction level. Returns its id."""
        with self._mutex:
            return self._journal.open_level()

    def rollback(self) -> bool:
        """
        Undo every mutation of the innermost level, newest first, then drop
        the level. Returns False (and changes nothing) if none is open.
        """
        with self._mutex:
            if not self._journal.is_open():
                logger.debug("rollback requested with no open transaction")
                return False

            for entry in self._journal.drain_innermost():
                self._undo(entry)
            return True

    def commit(self) -> bool:
        """
        Make every open level permanent by discarding all of them.
        Returns False if nothing was open.
        """
        with self._mutex:
            return self._journal.clear_all() > 0

    # ─── Diagnostics ────────────────────────────────────────────────────

    def dump(self) -> EngineSnapshot:
        with self._mutex:
            return EngineSnapshot(
                records=tuple(self._store.items()),
                index_kind=self._index.kind,
                counts=self._index.counts(),
                holders=self._index.snapshot(),
                current_txn_id=self._journal.current_id,
                levels=tuple(self._journal.levels()),
            )

    # ─── Internal ───────────────────────────────────────────────────────

    def _journal_mutation(self, name: str, old: Optional[str],
                          new: Optional[str]) -> None:
        txn_id = self._journal.current_id
        if txn_id:
            self._journal.record(txn_id, UndoEntry(name, old, new))

    def _undo(self, entry: UndoEntry) -> None:
        name, old, new = entry.name, entry.old_value, entry.new_value

        if old is NULL:
            self._store.erase(name)
        else:
            self._store.write(name, old)

        if new is not NULL:
            self._index.decrement(new, name)
        # Unconditional: old was this name's value before the level's
        # first write to it.
        if old is not NULL:
            self._index.increment(old, name)
