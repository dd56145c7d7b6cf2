"""
studiofs Shell Module

Provides the workspace terminal:
- Command parsing
- Built-in commands
- Single-flight execution
"""

from .parser import CommandParser, ParsedCommand
from .builtins import BuiltinCommands
from .shell import Shell, create_shell

__all__ = [
    'CommandParser',
    'ParsedCommand',
    'BuiltinCommands',
    'Shell',
    'create_shell',
]
