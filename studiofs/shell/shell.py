"""
Shell Module

The terminal front end for a workspace: single-flight command execution
and an interactive loop.

Author: YSNRFD
Version: 1.0.0
"""

import asyncio
from typing import Optional, List, Callable

from .parser import CommandParser, ParsedCommand
from .builtins import BuiltinCommands
from studiofs.core.config_loader import get_config
from studiofs.core.workspace import Workspace
from studiofs.logger import Logger, get_logger

EXIT_COMMANDS = ('exit',)


class Shell:
    """
    Workspace Terminal.

    Provides:
    - Command parsing
    - Built-in commands
    - Single-flight execution: a command waits until the one before it
      has finished, including any pending host I/O
    - Command history

    Example:
        >>> shell = Shell(Workspace.virtual())
        >>> await shell.execute('ls')
        'README.md  index.html  script.js  style.css'
    """

    def __init__(self, workspace: Workspace):
        self._workspace = workspace
        self._logger = get_logger('shell')
        self._parser = CommandParser()
        self._builtins = BuiltinCommands(self)
        self._pending = 0
        self._running = False

    @property
    def workspace(self) -> Workspace:
        return self._workspace

    @property
    def parser(self) -> CommandParser:
        return self._parser

    @property
    def builtins(self) -> BuiltinCommands:
        return self._builtins

    @property
    def busy(self) -> bool:
        """True while a command is running or queued."""
        return self._pending > 0

    @property
    def current_dir_name(self) -> str:
        return self._workspace.cwd.current_name()

    def get_prompt(self) -> str:
        """Generate the shell prompt."""
        return f"{self.current_dir_name} {get_config().shell.prompt_suffix}"

    async def execute(self, line: str) -> str:
        """
        Execute a command line.

        Commands are serialized on the workspace lock, so a second
        command waits for the first instead of interleaving with it.

        Args:
            line: Command line string

        Returns:
            The command output (possibly empty)
        """
        cmd = self._parser.parse(line)
        if cmd is None:
            return ''

        self._pending += 1
        try:
            async with self._workspace.lock:
                return await self._execute_command(cmd)
        finally:
            self._pending -= 1

    async def _execute_command(self, cmd: ParsedCommand) -> str:
        self._logger.debug(
            "Executing command",
            context={'command': cmd.command, 'args': cmd.args, 'cwd': self._workspace.cwd.current_id}
        )
        return await self._builtins.execute(cmd.command, cmd.args)

    async def run(
        self,
        read_line: Optional[Callable[[str], str]] = None,
        write: Optional[Callable[[str], None]] = None
    ) -> None:
        """
        Run the interactive shell.

        This is the main REPL loop. It ends on 'exit' or end of input.

        Args:
            read_line: Blocking line reader (default ``input``)
            write: Output sink (default ``print``)
        """
        read_line = read_line or input
        write = write or print
        self._running = True

        while self._running:
            try:
                line = await asyncio.to_thread(read_line, self.get_prompt())
            except EOFError:
                write('')
                break
            except KeyboardInterrupt:
                write('^C')
                continue

            if line.strip() in EXIT_COMMANDS:
                break

            output = await self.execute(line)
            if output:
                write(output)

        self._running = False

    async def run_script(self, script: str) -> List[str]:
        """
        Run a script (one command per line).

        Args:
            script: Script content

        Returns:
            The output of every command that ran
        """
        outputs = []

        for line in script.split('\n'):
            line = line.strip()
            if line and not line.startswith('#'):
                outputs.append(await self.execute(line))

        return outputs


def create_shell(workspace: Optional[Workspace] = None) -> Shell:
    """Factory function to create a shell."""
    return Shell(workspace if workspace is not None else Workspace.virtual())
