"""
ToyKV Interactive REPL
======================
Interactive command-line shell with toykv> prompt.

Features:
  - One command per line, no terminator
  - Meta-commands (dot-prefixed): .help, .stats, .quit
  - Transaction depth shown in the prompt while a level is open
  - No prompt when stdin is not a terminal (piped input)
  - Ctrl+C: discard the current line
  - Ctrl+D/EOF or END: exit
  - Persistent readline history (~/.toykv_history)
"""

import os
import sys
from typing import Optional

from cli.session import Session
from cli.renderer import Renderer


# ─── History ────────────────────────────────────────────────────────
HISTORY_FILE = os.path.expanduser("~/.toykv_history")
HISTORY_MAX = 1000

try:
    import readline
    _HAS_READLINE = True
except ImportError:
    _HAS_READLINE = False


def _load_history():
    if _HAS_READLINE and os.path.exists(HISTORY_FILE):
        try:
            readline.read_history_file(HISTORY_FILE)
        except OSError:
            pass


def _save_history():
    if _HAS_READLINE:
        try:
            readline.set_history_length(HISTORY_MAX)
            readline.write_history_file(HISTORY_FILE)
        except OSError:
            pass


# ─── REPL ───────────────────────────────────────────────────────────

class REPL:
    """
    Interactive ToyKV shell.

    Usage:
        repl = REPL(debug=True)
        repl.run()
    """

    PROMPT = "toykv> "

    def __init__(self, *, debug: bool = False, index_kind: str = "count",
                 session: Optional[Session] = None,
                 renderer: Optional[Renderer] = None,
                 input_func=input, history: bool = True,
                 interactive: Optional[bool] = None):
        self.session = session or Session(debug=debug, index_kind=index_kind)
        self.renderer = renderer or Renderer()
        self._input = input_func
        self._history = history
        self.interactive = sys.stdin.isatty() if interactive is None else interactive
        self._running = False

    def run(self):
        """Main REPL loop."""
        if self._history:
            _load_history()
        self._running = True

        self.renderer.render_lines([
            "Starting ... ",
            'Type ".help" for usage hints.',
        ])

        try:
            while self._running:
                try:
                    line = self._input(self._prompt())
                except KeyboardInterrupt:
                    # Ctrl+C: drop the current line
                    self.renderer.render_lines([""])
                    continue
                except EOFError:
                    self.renderer.render_lines([""])
                    break

                stripped = line.strip()
                if not stripped:
                    continue

                if stripped.startswith("."):
                    self._handle_meta_command(stripped)
                    continue

                self._execute_line(stripped)
        finally:
            if self._history:
                _save_history()
            self.session.close()

    def _prompt(self) -> str:
        if not self.interactive:
            return ""
        txn_id = self.session.active_txn_id
        if txn_id:
            return f"toykv[txn:{txn_id}]> "
        return self.PROMPT

    # ─── Command Execution ──────────────────────────────────────────

    def _execute_line(self, line: str):
        """Execute one command line; any exception is reported, not raised."""
        try:
            result = self.session.execute(line)
        except Exception as e:
            self.renderer.render_error(e)
            return

        self.renderer.render_result(result)
        if result.done:
            self._running = False

    # ─── Meta-Commands ──────────────────────────────────────────────

    def _handle_meta_command(self, line: str):
        """Handle dot-prefixed meta-commands."""
        cmd = line.split(None, 1)[0].lower()

        if cmd in (".quit", ".exit", ".q"):
            self._running = False
        elif cmd == ".help":
            self._cmd_help()
        elif cmd == ".stats":
            self._cmd_stats()
        else:
            self.renderer.render_lines(
                [f"Unknown command: {cmd}. Type .help for available commands."])

    def _cmd_help(self):
        lines = [
            "ToyKV Commands:",
            "  SET name value       Bind name to value",
            "  GET name             Print the value of name, or NULL",
            "  DELETE name          Remove name",
            "  COUNT value          Print how many names hold value",
            "  BEGIN                Open a (nested) transaction",
            "  ROLLBACK             Undo the innermost transaction",
            "  COMMIT               Make every open transaction permanent",
        ]
        if self.session.debug:
            lines.append("  DUMP                 List records, index and open transactions")
        lines += [
            "  END                  End the session",
            "",
            "Meta-commands:",
            "  .help                Show this help",
            "  .stats               Show session statistics",
            "  .quit                Exit (aliases: .exit, .q)",
        ]
        self.renderer.render_lines(lines)

    def _cmd_stats(self):
        s = self.session.stats
        lines = [
            "Session Statistics:",
            f"  Commands executed:      {s['commands_executed']}",
            f"  Commands rejected:      {s['commands_rejected']}",
            f"  Transactions begun:     {s['transactions_begun']}",
            f"  Transactions rolled back: {s['transactions_rolled_back']}",
            f"  Commits:                {s['commits']}",
        ]
        if self.session.active_txn_id:
            lines.append(f"  Open transaction level: {self.session.active_txn_id}")
        lines.append(f"  Index:                  {self.session.engine.index_kind}")
        self.renderer.render_lines(lines)
