"""
ToyKV Command Language
======================
Public API for the line-oriented command parser.

Usage:
    from commands import parse_command

    result = parse_command("SET a 1")
    if result.error:
        print(result.error.message)
"""

from commands.parser import (
    Command, CommandType, CommandSpec, COMMAND_SPECS,
    ErrorKind, MalformedInvocation, ParseResult, parse_command,
)
from commands.tokenizer import Tokenizer, Token, split_words

__all__ = [
    "Command", "CommandType", "CommandSpec", "COMMAND_SPECS",
    "ErrorKind", "MalformedInvocation", "ParseResult", "parse_command",
    "Tokenizer", "Token", "split_words",
]
