"""
ToyKV Value Index Tests
=======================
Both index variants against the same contract, plus variant-specific
behaviour (counts snapshot, holder names, factory).
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from indexing import (
    ValueIndex, CountingValueIndex, NameSetValueIndex, IndexCorruptionError,
    INDEX_KINDS, make_value_index,
)


# ═══════════════════════════════════════════════════════════════════════════
# 1. Shared Contract
# ═══════════════════════════════════════════════════════════════════════════

class IndexContractMixin:
    """Runs against whatever self.index is."""

    def make_index(self):
        raise NotImplementedError

    def setUp(self):
        self.index = self.make_index()

    def test_unseen_value_counts_zero(self):
        self.assertEqual(self.index.count("never"), 0)
        self.assertEqual(len(self.index), 0)

    def test_increment_counts_holders(self):
        self.index.increment("1", "a")
        self.index.increment("1", "b")
        self.index.increment("2", "c")
        self.assertEqual(self.index.count("1"), 2)
        self.assertEqual(self.index.count("2"), 1)

    def test_decrement_to_zero_reads_absent(self):
        self.index.increment("1", "a")
        self.index.decrement("1", "a")
        self.assertEqual(self.index.count("1"), 0)
        self.assertNotIn("1", self.index.counts())
        self.assertEqual(len(self.index), 0)

    def test_decrement_unseen_raises(self):
        with self.assertRaises(IndexCorruptionError):
            self.index.decrement("nope", "a")

    def test_counts_snapshot_sorted(self):
        self.index.increment("b", "x")
        self.index.increment("a", "y")
        self.index.increment("a", "z")
        self.assertEqual(self.index.counts(), {"a": 2, "b": 1})
        self.assertEqual(list(self.index.snapshot()), ["a", "b"])


class TestCountingIndex(IndexContractMixin, unittest.TestCase):

    def make_index(self):
        return CountingValueIndex()

    def test_name_is_optional(self):
        self.index.increment("1")
        self.index.increment("1")
        self.index.decrement("1")
        self.assertEqual(self.index.count("1"), 1)

    def test_snapshot_has_no_holders(self):
        self.index.increment("1", "a")
        self.assertEqual(self.index.snapshot(), {"1": []})

    def test_kind(self):
        self.assertEqual(self.index.kind, "count")


class TestNameSetIndex(IndexContractMixin, unittest.TestCase):

    def make_index(self):
        return NameSetValueIndex()

    def test_names_sorted(self):
        self.index.increment("1", "b")
        self.index.increment("1", "a")
        self.assertEqual(self.index.names("1"), ["a", "b"])
        self.assertEqual(self.index.names("none"), [])

    def test_same_name_counted_once(self):
        self.index.increment("1", "a")
        self.index.increment("1", "a")
        self.assertEqual(self.index.count("1"), 1)

    def test_decrement_wrong_holder_raises(self):
        self.index.increment("1", "a")
        with self.assertRaises(IndexCorruptionError):
            self.index.decrement("1", "b")
        self.assertEqual(self.index.count("1"), 1)

    def test_name_required(self):
        with self.assertRaises(ValueError):
            self.index.increment("1")
        with self.assertRaises(ValueError):
            self.index.decrement("1")

    def test_snapshot_lists_holders(self):
        self.index.increment("1", "b")
        self.index.increment("1", "a")
        self.index.increment("2", "c")
        self.assertEqual(self.index.snapshot(), {"1": ["a", "b"], "2": ["c"]})

    def test_kind(self):
        self.assertEqual(self.index.kind, "names")


class TestValueIndexInterface(unittest.TestCase):

    def test_base_declares_counts(self):
        with self.assertRaises(NotImplementedError):
            ValueIndex().counts()

    def test_variants_override_counts(self):
        for cls in INDEX_KINDS.values():
            self.assertIsNot(cls.counts, ValueIndex.counts)


# ═══════════════════════════════════════════════════════════════════════════
# 2. Factory
# ═══════════════════════════════════════════════════════════════════════════

class TestMakeValueIndex(unittest.TestCase):

    def test_default_is_counting(self):
        self.assertIsInstance(make_value_index(), CountingValueIndex)

    def test_names_variant(self):
        self.assertIsInstance(make_value_index("names"), NameSetValueIndex)

    def test_case_insensitive(self):
        self.assertIsInstance(make_value_index("NAMES"), NameSetValueIndex)

    def test_unknown_kind_rejected(self):
        with self.assertRaises(ValueError):
            make_value_index("btree")

    def test_registry(self):
        self.assertEqual(sorted(INDEX_KINDS), ["count", "names"])


if __name__ == "__main__":
    unittest.main()
