"""
ToyKV Result Renderer
=====================
Formats session results for a text stream.

Features:
  - Plain command output, one value per line
  - Malformed-invocation messages on the error stream
  - Error classification prefix for unexpected exceptions
  - DUMP listing of records, index aggregates and open transaction levels
"""

import sys
from typing import Iterable, List, Optional, TextIO

from engine.mutation_engine import EngineSnapshot
from cli.session import ExecutionResult


class Renderer:
    """
    Writes ExecutionResults to an output stream, rejections and errors to an
    error stream.
    """

    def __init__(self, output: TextIO = None, errors: TextIO = None):
        self.output = output or sys.stdout
        self.errors = errors or sys.stderr

    # ─── Public API ─────────────────────────────────────────────────

    def render_result(self, result: ExecutionResult):
        if result.error is not None:
            self._print(result.error.message, stream=self.errors)
        if result.snapshot is not None:
            self.render_dump(result.snapshot)
        self.render_lines(result.lines)

    def render_lines(self, lines: Iterable[str]):
        for line in lines:
            self._print(line)

    def render_error(self, error: Exception):
        """Render an error with classification prefix."""
        prefix = self._classify_error(type(error).__name__)
        self._print(f"{prefix}: {error}", stream=self.errors)

    def render_dump(self, snapshot: EngineSnapshot):
        for line in self.format_dump(snapshot):
            self._print(line)

    # ─── Dump ───────────────────────────────────────────────────────

    def format_dump(self, snapshot: EngineSnapshot) -> List[str]:
        """
        Human-readable listing of every engine structure:

            database entries
                a=1
            index entries
                1 is the value for 1 entries
            currentTxId = 1
            pending transactions
                 transaction #1 contains:
                    a ==>> old:NULL, new:1
        """
        lines = ["database entries"]
        for name, value in snapshot.records:
            lines.append(f"\t{name}={value}")

        lines.append("index entries")
        for value, count in snapshot.counts.items():
            holders = snapshot.holders.get(value) or []
            if holders:
                lines.append(f"\t{value} is the value for:")
                lines.extend(f"\t\t{name}" for name in holders)
            else:
                lines.append(f"\t{value} is the value for {count} entries")

        lines.append(f"currentTxId = {snapshot.current_txn_id}")
        lines.append("pending transactions")
        for txn_id, entries in snapshot.levels:
            lines.append(f"\t transaction #{txn_id} contains:")
            for entry in entries:
                lines.append(
                    f"\t\t{entry.name} ==>> "
                    f"old:{self._format_value(entry.old_value)}, "
                    f"new:{self._format_value(entry.new_value)}")
        return lines

    # ─── Helpers ────────────────────────────────────────────────────

    def _format_value(self, value: Optional[str]) -> str:
        if value is None:
            return "NULL"
        return value

    def _classify_error(self, error_type: str) -> str:
        """Map error class name to user-friendly prefix."""
        mapping = {
            "SessionError": "SessionError",
            "JournalError": "TransactionError",
            "IndexCorruptionError": "IndexCorruption",
            "RuntimeError": "ExecutionError",
            "ValueError": "ExecutionError",
            "KeyError": "ExecutionError",
        }
        return mapping.get(error_type, f"Error[{error_type}]")

    def _print(self, text: str, stream: TextIO = None):
        """Print a line to the given stream (output by default)."""
        print(text, file=stream or self.output)
