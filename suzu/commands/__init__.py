"""Commands package - the ':verb arg ...' grammar and its dispatcher.

- table: verb -> operation, surface, arity and per-argument parsers
- dispatcher: chain of surfaces, pending-command consumption, error capture
"""

from .dispatcher import (
    CommandDispatcher,
    CommandSurface,
    FileCommands,
    GeneralCommands,
    SessionCommands,
    TransformCommands,
    ViewCommands,
    tokenize,
)
from .table import COMMANDS, CommandSpec, Op, Surface, command_table, help_text

__all__ = [
    "CommandDispatcher",
    "CommandSurface",
    "FileCommands",
    "GeneralCommands",
    "SessionCommands",
    "TransformCommands",
    "ViewCommands",
    "tokenize",
    "COMMANDS",
    "CommandSpec",
    "Op",
    "Surface",
    "command_table",
    "help_text",
]
