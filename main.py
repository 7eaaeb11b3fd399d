"""
ToyKV — In-Memory Transactional Key/Value Store
================================================
Entry point.

Usage:
    python main.py [options]

Options:
    --help              Show help
    --execute CMDS      Execute ;-separated commands and exit
    --file PATH         Execute a command script and exit
    --index KIND        Value index variant: count (default) or names
    --debug, -debug     Enable the DUMP command
    --verbose           Debug logging to stderr

Default:
    Interactive REPL reading commands from stdin
"""

import logging
import os
import re
import sys
from typing import Iterable, List


def print_help():
    print("""
ToyKV — In-Memory Transactional Key/Value Store

Usage:
    python main.py [options]                     Interactive REPL
    python main.py --execute "SET a 1; GET a"    Execute commands
    python main.py --file script.txt             Execute command script

Options:
    --help          Show this help
    --execute CMDS  Execute ;-separated commands and exit
    --file PATH     Execute a command script (one command per line) and exit
    --index KIND    Value index variant: count (default) or names
    --debug         Enable the DUMP command (alias: -debug)
    --verbose       Debug logging to stderr

Commands:
    SET name value | GET name | DELETE name | COUNT value
    BEGIN | ROLLBACK | COMMIT | DUMP (debug only) | END
""")


def run_commands(lines: Iterable[str], *, debug: bool = False,
                 index_kind: str = "count", renderer=None) -> int:
    """
    Run command lines through one session and return an exit status.

    Semantics: malformed lines are reported and skipped; END stops early;
    any raised error stops execution with status 1.
    """
    from cli.session import Session
    from cli.renderer import Renderer

    renderer = renderer or Renderer()

    with Session(debug=debug, index_kind=index_kind) as session:
        for line in lines:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                result = session.execute(line)
            except Exception as e:
                renderer.render_error(e)
                print(f"Error in command: {line[:80]}", file=sys.stderr)
                return 1
            renderer.render_result(result)
            if result.done:
                break
    return 0


def execute_single(commands: str, **kwargs) -> int:
    """Execute ;-separated commands and exit."""
    return run_commands(_split_commands(commands), **kwargs)


def execute_script(script_path: str, **kwargs) -> int:
    """
    Execute a command script file and exit.
    One command per line; lines starting with # are comments.
    """
    if not os.path.isfile(script_path):
        print(f"Error: script file not found: {script_path}", file=sys.stderr)
        return 1

    with open(script_path, "r", encoding="utf-8") as f:
        content = f.read()

    return run_commands(content.splitlines(), **kwargs)


# A ; only separates commands when whitespace or the end of the line follows
# it, so values such as "x;y" pass through intact.
COMMAND_SEPARATOR = re.compile(r";(?=\s|$)")


def _split_commands(content: str) -> List[str]:
    """Split on command separators and newlines; empty segments are dropped."""
    segments = []
    for line in content.splitlines():
        segments.extend(part.strip() for part in COMMAND_SEPARATOR.split(line))
    return [s for s in segments if s]


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: List[str] = None) -> int:
    """Parse CLI arguments and dispatch."""
    args = sys.argv[1:] if argv is None else argv

    if "--help" in args or "-h" in args:
        print_help()
        return 0

    debug = False
    verbose = False
    index_kind = "count"
    execute_cmds = None
    script_file = None

    i = 0
    while i < len(args):
        arg = args[i]
        if arg.lower() in ("-debug", "--debug"):
            debug = True
            i += 1
        elif arg == "--verbose":
            verbose = True
            i += 1
        elif arg == "--index" and i + 1 < len(args):
            index_kind = args[i + 1].lower()
            i += 2
        elif arg == "--execute" and i + 1 < len(args):
            execute_cmds = args[i + 1]
            i += 2
        elif arg == "--file" and i + 1 < len(args):
            script_file = args[i + 1]
            i += 2
        else:
            print(f"Unknown option: {arg}", file=sys.stderr)
            print_help()
            return 1

    from indexing.value_index import INDEX_KINDS
    if index_kind not in INDEX_KINDS:
        print(f"Unknown index kind: {index_kind} "
              f"(expected one of {', '.join(sorted(INDEX_KINDS))})", file=sys.stderr)
        return 1

    configure_logging(verbose)

    if execute_cmds is not None:
        return execute_single(execute_cmds, debug=debug, index_kind=index_kind)
    if script_file is not None:
        return execute_script(script_file, debug=debug, index_kind=index_kind)

    # Interactive REPL
    from cli.repl import REPL
    repl = REPL(debug=debug, index_kind=index_kind)
    repl.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
