"""
ToyKV Session
=============
Per-connection state object that wires the engine to the command language.

Owns:
  - one MutationEngine (its own store, index and journal)
  - debug flag (enables DUMP)
  - statistics

A session never raises for bad input: malformed lines come back as an
ExecutionResult carrying the MalformedInvocation, and ROLLBACK with nothing
open comes back as a TRANSACTION NOT FOUND line.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from engine.mutation_engine import MutationEngine, EngineSnapshot
from commands.parser import (
    Command, CommandType, MalformedInvocation, parse_command,
)


TRANSACTION_NOT_FOUND = "TRANSACTION NOT FOUND"
END_MESSAGE = "session complete, terminating ..."


class SessionError(Exception):
    """Session-level error (lifecycle misuse)."""
    pass


@dataclass
class ExecutionResult:
    """
    What one input line produced.

    lines: user-facing output, one entry per printed line
    error: set when the line was rejected before reaching the engine
    snapshot: set for DUMP
    done: set for END
    """
    lines: List[str] = field(default_factory=list)
    error: Optional[MalformedInvocation] = None
    snapshot: Optional[EngineSnapshot] = None
    done: bool = False


class Session:
    """
    Command session over one engine.

    Usage:
        with Session(debug=True) as session:
            session.execute("SET a 1")
            session.execute("GET a").lines   # ["1"]
    """

    def __init__(self, *, debug: bool = False, index_kind: str = "count",
                 engine: Optional[MutationEngine] = None):
        self.debug = debug
        self.engine = engine if engine is not None else MutationEngine(index_kind)
        self._closed: bool = False

        # ── Statistics ──
        self.stats = {
            "commands_executed": 0,
            "commands_rejected": 0,
            "transactions_begun": 0,
            "transactions_rolled_back": 0,
            "commits": 0,
        }

    @property
    def active_txn_id(self) -> int:
        return self.engine.current_txn_id

    # ─── Execution ──────────────────────────────────────────────────

    def execute(self, line: str) -> ExecutionResult:
        """Parse and run one input line."""
        self._check_closed()

        parsed = parse_command(line, allow_dump=self.debug)
        if parsed.is_blank:
            return ExecutionResult()
        if parsed.error is not None:
            self.stats["commands_rejected"] += 1
            return ExecutionResult(error=parsed.error)

        self.stats["commands_executed"] += 1
        return self.run(parsed.command)

    def run(self, command: Command) -> ExecutionResult:
        """Run an already-validated command against the engine."""
        self._check_closed()
        ctype, args = command.type, command.args

        if ctype is CommandType.SET:
            self.engine.set(args[0], args[1])
            return ExecutionResult()
        if ctype is CommandType.GET:
            return ExecutionResult(lines=[self.engine.get(args[0])])
        if ctype is CommandType.DELETE:
            self.engine.delete(args[0])
            return ExecutionResult()
        if ctype is CommandType.COUNT:
            return ExecutionResult(lines=[str(self.engine.count(args[0]))])
        if ctype is CommandType.BEGIN:
            return self.begin()
        if ctype is CommandType.ROLLBACK:
            return self.rollback()
        if ctype is CommandType.COMMIT:
            return self.commit()
        if ctype is CommandType.DUMP:
            return ExecutionResult(snapshot=self.engine.dump())
        if ctype is CommandType.END:
            return ExecutionResult(lines=[END_MESSAGE], done=True)

        raise SessionError(f"Unhandled command type {ctype.value}")

    # ─── Transaction Control ────────────────────────────────────────

    def begin(self) -> ExecutionResult:
        self.engine.begin()
        self.stats["transactions_begun"] += 1
        return ExecutionResult()

    def rollback(self) -> ExecutionResult:
        if not self.engine.rollback():
            return ExecutionResult(lines=[TRANSACTION_NOT_FOUND])
        self.stats["transactions_rolled_back"] += 1
        return ExecutionResult()

    def commit(self) -> ExecutionResult:
        # Committing with nothing open is silent.
        if self.engine.commit():
            self.stats["commits"] += 1
        return ExecutionResult()

    def _check_closed(self):
        if self._closed:
            raise SessionError("Session is closed")

    # ─── Lifecycle ──────────────────────────────────────────────────

    def close(self) -> None:
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
