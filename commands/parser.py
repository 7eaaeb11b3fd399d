"""
ToyKV Command Parser
====================
Validates a tokenized line into a Command.

Bad input is returned, not raised: parse_command() always yields a
ParseResult whose .error is set when the line names an unknown command or
passes the wrong number of arguments. Callers check it once and never
touch the engine for a malformed line.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from commands.tokenizer import split_words


class CommandType(Enum):
    SET = "SET"
    GET = "GET"
    DELETE = "DELETE"
    COUNT = "COUNT"
    BEGIN = "BEGIN"
    ROLLBACK = "ROLLBACK"
    COMMIT = "COMMIT"
    DUMP = "DUMP"
    END = "END"


class ErrorKind(Enum):
    WRONG_ARITY = "WRONG_ARITY"
    UNRECOGNIZED = "UNRECOGNIZED"


@dataclass(frozen=True)
class CommandSpec:
    """Arity and usage text for one command. arity=None accepts anything."""
    type: CommandType
    arity: Optional[int]
    usage: str = ""

    def arity_message(self) -> str:
        name = self.type.value
        if self.arity == 0:
            return f"improper command: {name} does not accept any parameters"
        noun = "parameter" if self.arity == 1 else "parameters"
        return f"improper command: {name} accepts {self.arity} {noun}: {self.usage}"


COMMAND_SPECS: Dict[str, CommandSpec] = {
    spec.type.value: spec for spec in (
        CommandSpec(CommandType.SET, 2, "[name] and [value]"),
        CommandSpec(CommandType.GET, 1, "[name]"),
        CommandSpec(CommandType.DELETE, 1, "[name]"),
        CommandSpec(CommandType.COUNT, 1, "[value]"),
        CommandSpec(CommandType.BEGIN, 0),
        CommandSpec(CommandType.ROLLBACK, 0),
        CommandSpec(CommandType.COMMIT, 0),
        CommandSpec(CommandType.DUMP, None),
        CommandSpec(CommandType.END, None),
    )
}


@dataclass(frozen=True)
class Command:
    type: CommandType
    args: Tuple[str, ...] = ()


@dataclass(frozen=True)
class MalformedInvocation:
    """Why a line was rejected. Reported to the user; never fatal."""
    kind: ErrorKind
    message: str
    name: str = ""


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of parsing one line.
    Exactly one of command/error is set, or neither for a blank line.
    """
    command: Optional[Command] = None
    error: Optional[MalformedInvocation] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def is_blank(self) -> bool:
        return self.command is None and self.error is None


def parse_command(line: str, *, allow_dump: bool = False) -> ParseResult:
    """
    Parse one input line. Command names match case-insensitively; argument
    case is preserved. DUMP is only recognized when allow_dump is set.
    """
    words = split_words(line)
    if not words:
        return ParseResult()

    name, args = words[0], words[1:]
    spec = COMMAND_SPECS.get(name.upper())

    if spec is None or (spec.type is CommandType.DUMP and not allow_dump):
        return ParseResult(error=MalformedInvocation(
            ErrorKind.UNRECOGNIZED, f"unrecognized function: {name}", name))

    if spec.arity is not None and len(args) != spec.arity:
        return ParseResult(error=MalformedInvocation(
            ErrorKind.WRONG_ARITY, spec.arity_message(), name))

    return ParseResult(command=Command(spec.type, tuple(args)))
