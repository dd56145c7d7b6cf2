"""
Command Parser Module

Parses terminal input into a command and its arguments.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Optional, List

from studiofs.core.config_loader import get_config


@dataclass
class ParsedCommand:
    """A parsed command line."""
    command: str
    args: List[str] = field(default_factory=list)

    @property
    def arg(self) -> Optional[str]:
        """The first argument, if any."""
        return self.args[0] if self.args else None


class CommandParser:
    """
    Parses terminal command lines.

    Tokens are split on runs of whitespace. There is no quoting or
    escaping: `echo "a b"` yields the tokens `"a` and `b"`.

    Example:
        >>> parser = CommandParser()
        >>> cmd = parser.parse("mkdir src")
        >>> cmd.command, cmd.args
        ('mkdir', ['src'])
    """

    def __init__(self, history_size: Optional[int] = None):
        self._history: List[str] = []
        self._history_size = (
            history_size if history_size is not None
            else get_config().shell.history_size
        )

    def parse(self, line: str) -> Optional[ParsedCommand]:
        """
        Parse a command line.

        Args:
            line: Command line string

        Returns:
            ParsedCommand or None if empty
        """
        tokens = line.split()
        if not tokens:
            return None

        self._history.append(line.strip())
        if len(self._history) > self._history_size:
            del self._history[:len(self._history) - self._history_size]

        return ParsedCommand(command=tokens[0], args=tokens[1:])

    def get_history(self) -> List[str]:
        """Get command history."""
        return list(self._history)

    def clear_history(self) -> None:
        """Clear command history."""
        self._history.clear()
