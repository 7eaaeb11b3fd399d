"""
ToyKV Transaction Journal
=========================
Stack of open transaction levels, each holding the undo entries recorded
while it was the innermost level.

Invariants:
  - Level ids equal their depth: the outermost open level is 1, the
    innermost is current_id, and current_id == 0 means none open
  - Only the innermost level accepts new entries
  - drain_innermost() yields entries last-inserted-first, so a name mutated
    twice in one level is restored to its value from before the first write
  - clear_all() drops every level at once; there is no partial commit
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


class JournalError(Exception):
    """Journal used against a level that is not the innermost open one."""
    pass


@dataclass(frozen=True)
class UndoEntry:
    """Pre- and post-image of one mutation. None stands for "absent"."""
    name: str
    old_value: Optional[str]
    new_value: Optional[str]


class _Level:
    """Internal bookkeeping for one open transaction level."""
    __slots__ = ('txn_id', 'entries')

    def __init__(self, txn_id: int):
        self.txn_id = txn_id
        self.entries: List[UndoEntry] = []


class TransactionJournal:
    """
    Ordered stack of transaction levels.

    Usage:
        journal = TransactionJournal()
        txn_id = journal.open_level()
        journal.record(txn_id, UndoEntry("a", None, "1"))
        for entry in journal.drain_innermost():
            ...  # undo entry
    """

    def __init__(self):
        self._levels: List[_Level] = []

    # ─── State ──────────────────────────────────────────────────────────

    @property
    def current_id(self) -> int:
        """Id of the innermost open level, or 0 when none is open."""
        return self._levels[-1].txn_id if self._levels else 0

    @property
    def depth(self) -> int:
        return len(self._levels)

    def is_open(self) -> bool:
        return bool(self._levels)

    def __len__(self) -> int:
        """Number of entries in the innermost level (0 if none open)."""
        return len(self._levels[-1].entries) if self._levels else 0

    def levels(self) -> List[Tuple[int, Tuple[UndoEntry, ...]]]:
        """Outermost-first (txn_id, entries) snapshot of every open level."""
        return [(level.txn_id, tuple(level.entries)) for level in self._levels]

    # ─── Lifecycle ──────────────────────────────────────────────────────

    def open_level(self) -> int:
        """Push a new innermost level and return its id."""
        txn_id = len(self._levels) + 1
        self._levels.append(_Level(txn_id))
        logger.debug("opened transaction level %d", txn_id)
        return txn_id

    def record(self, txn_id: int, entry: UndoEntry) -> None:
        """Append an undo entry to the innermost level, which must be txn_id."""
        if txn_id != self.current_id or txn_id == 0:
            raise JournalError(
                f"cannot record into transaction {txn_id}; "
                f"innermost open level is {self.current_id}")
        self._levels[-1].entries.append(entry)

    def drain_innermost(self) -> List[UndoEntry]:
        """
        Remove the innermost level and return its entries in reverse
        insertion order. Raises JournalError if no level is open.
        """
        if not self._levels:
            raise JournalError("no open transaction level to drain")
        level = self._levels.pop()
        logger.debug("drained transaction level %d (%d entries)",
                     level.txn_id, len(level.entries))
        return list(reversed(level.entries))

    def clear_all(self) -> int:
        """Discard every open level. Returns how many were discarded."""
        discarded = len(self._levels)
        self._levels.clear()
        if discarded:
            logger.debug("discarded %d transaction level(s)", discarded)
        return discarded
