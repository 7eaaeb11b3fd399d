"""
ToyKV Transaction Journal Tests
===============================
Level ids, innermost-only recording, LIFO drain, flatten-all clear.
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from transactions import TransactionJournal, UndoEntry, JournalError


# ═══════════════════════════════════════════════════════════════════════════
# 1. Level Lifecycle
# ═══════════════════════════════════════════════════════════════════════════

class TestJournalLevels(unittest.TestCase):

    def setUp(self):
        self.journal = TransactionJournal()

    def test_starts_closed(self):
        self.assertEqual(self.journal.current_id, 0)
        self.assertEqual(self.journal.depth, 0)
        self.assertFalse(self.journal.is_open())
        self.assertEqual(len(self.journal), 0)

    def test_ids_start_at_one_and_increase(self):
        self.assertEqual(self.journal.open_level(), 1)
        self.assertEqual(self.journal.open_level(), 2)
        self.assertEqual(self.journal.open_level(), 3)
        self.assertEqual(self.journal.current_id, 3)
        self.assertEqual(self.journal.depth, 3)

    def test_drain_moves_to_outer_level(self):
        self.journal.open_level()
        self.journal.open_level()
        self.journal.drain_innermost()
        self.assertEqual(self.journal.current_id, 1)
        self.journal.drain_innermost()
        self.assertEqual(self.journal.current_id, 0)

    def test_drain_with_nothing_open_raises(self):
        with self.assertRaises(JournalError):
            self.journal.drain_innermost()

    def test_clear_all_resets(self):
        self.journal.open_level()
        self.journal.open_level()
        self.assertEqual(self.journal.clear_all(), 2)
        self.assertEqual(self.journal.current_id, 0)
        self.assertEqual(self.journal.levels(), [])
        self.assertEqual(self.journal.open_level(), 1)

    def test_clear_all_when_closed(self):
        self.assertEqual(self.journal.clear_all(), 0)


# ═══════════════════════════════════════════════════════════════════════════
# 2. Recording and Draining
# ═══════════════════════════════════════════════════════════════════════════

class TestJournalEntries(unittest.TestCase):

    def setUp(self):
        self.journal = TransactionJournal()

    def test_drain_is_lifo(self):
        txn = self.journal.open_level()
        first = UndoEntry("a", None, "1")
        second = UndoEntry("a", "1", "2")
        third = UndoEntry("b", None, "x")
        for entry in (first, second, third):
            self.journal.record(txn, entry)
        self.assertEqual(len(self.journal), 3)
        self.assertEqual(self.journal.drain_innermost(), [third, second, first])

    def test_entries_stay_with_their_level(self):
        outer = self.journal.open_level()
        self.journal.record(outer, UndoEntry("a", None, "1"))
        inner = self.journal.open_level()
        self.journal.record(inner, UndoEntry("b", None, "2"))

        self.assertEqual(self.journal.drain_innermost(), [UndoEntry("b", None, "2")])
        self.assertEqual(self.journal.levels(),
                         [(1, (UndoEntry("a", None, "1"),))])

    def test_record_into_outer_level_rejected(self):
        outer = self.journal.open_level()
        self.journal.open_level()
        with self.assertRaises(JournalError):
            self.journal.record(outer, UndoEntry("a", None, "1"))

    def test_record_without_open_level_rejected(self):
        with self.assertRaises(JournalError):
            self.journal.record(0, UndoEntry("a", None, "1"))

    def test_levels_snapshot_is_detached(self):
        txn = self.journal.open_level()
        self.journal.record(txn, UndoEntry("a", None, "1"))
        snapshot = self.journal.levels()
        self.journal.record(txn, UndoEntry("a", "1", "2"))
        self.assertEqual(len(snapshot[0][1]), 1)

    def test_undo_entry_is_immutable(self):
        entry = UndoEntry("a", "1", None)
        with self.assertRaises(Exception):
            entry.name = "b"


if __name__ == "__main__":
    unittest.main()
