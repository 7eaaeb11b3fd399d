"""
ToyKV Transactions Module
=========================
Nested transaction levels recorded as undo journals.

Components:
  - journal.py: TransactionJournal (level stack, LIFO drain), UndoEntry
"""

from transactions.journal import TransactionJournal, UndoEntry, JournalError

__all__ = ["TransactionJournal", "UndoEntry", "JournalError"]
