"""
Shell Built-in Commands

Implements the terminal commands. Every command returns exactly one
string for the terminal to display.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Awaitable, Callable, List

from studiofs.core.config_loader import get_config
from studiofs.exceptions import (
    WorkspaceError,
    DirectoryLostError,
    HostIOError,
    NodeExistsError,
    NodeNotFoundError,
)
from studiofs.filesystem.node import NodeKind
from studiofs.logger import Logger, get_logger

CommandHandler = Callable[[List[str]], Awaitable[str]]

DIRECTORY_LOST = 'Error: Current directory lost.'


class BuiltinCommands:
    """
    Built-in terminal commands.

    Commands work relative to the working-directory stack and go through
    the backing adapter, so native folders are changed on disk first.
    """

    def __init__(self, shell):
        """
        Initialize built-in commands.

        Args:
            shell: The shell instance
        """
        self._shell = shell
        self._logger = get_logger('shell')
        self._commands: dict[str, CommandHandler] = {
            'ls': self.cmd_ls,
            'pwd': self.cmd_pwd,
            'cd': self.cmd_cd,
            'mkdir': self.cmd_mkdir,
            'touch': self.cmd_touch,
            'code': self.cmd_code,
            'rm': self.cmd_rm,
            'cat': self.cmd_cat,
            'clear': self.cmd_clear,
            'npm': self.cmd_npm,
            'echo': self.cmd_echo,
        }

    @property
    def _workspace(self):
        return self._shell.workspace

    async def execute(self, name: str, args: List[str]) -> str:
        """
        Execute a built-in command.

        Every command except ``ls`` first checks that the current
        directory still exists.

        Args:
            name: Command name
            args: Command arguments

        Returns:
            The command output
        """
        if name != 'ls':
            try:
                self._workspace.cwd.current()
            except DirectoryLostError:
                return DIRECTORY_LOST

        cmd = self._commands.get(name)
        if cmd is None:
            return f"command not found: {name}"

        try:
            return await cmd(args)
        except WorkspaceError as e:
            self._logger.warning("Command failed", context={'command': name, 'error': str(e)})
            return f"{name}: {e.message}"
        except Exception as e:
            self._logger.exception("Command raised", exc=e, context={'command': name})
            return f"{name}: {e}"

    # Navigation

    async def cmd_ls(self, args: List[str]) -> str:
        """List the current directory, folders first."""
        tree = self._workspace.tree
        current = tree.find(self._workspace.cwd.current_id)
        if current is None or not current.is_folder:
            return ''

        return '  '.join(
            f"[{child.name}]" if child.is_folder else child.name
            for child in tree.listing(current.id)
        )

    async def cmd_pwd(self, args: List[str]) -> str:
        return self._workspace.cwd.display()

    async def cmd_cd(self, args: List[str]) -> str:
        """Enter a child folder, or leave with '..'."""
        if not args:
            return ''

        cwd = self._workspace.cwd
        if args[0] == '..':
            return '' if cwd.pop() else 'Already at root'

        try:
            cwd.push(args[0])
        except NodeNotFoundError:
            return f"cd: no such file or directory: {args[0]}"
        return ''

    # Creation

    async def cmd_mkdir(self, args: List[str]) -> str:
        if not args:
            return 'usage: mkdir <directory_name>'

        name = args[0]
        try:
            result = await self._workspace.adapter.create(
                self._workspace.cwd.current_id, name, NodeKind.FOLDER
            )
        except NodeExistsError:
            return f"mkdir: {name}: File exists"

        if result.native:
            return f"Directory '{name}' created."
        message = f"Virtual directory '{name}' created."
        if result.fell_back:
            message += ' (disk unavailable)'
        return message

    async def cmd_touch(self, args: List[str]) -> str:
        """Create an empty file; an existing file is left alone."""
        return await self._create_file('touch', args, open_file=False)

    async def cmd_code(self, args: List[str]) -> str:
        """Create a file if needed and open it in the editor."""
        return await self._create_file('code', args, open_file=True)

    async def _create_file(self, command: str, args: List[str], open_file: bool) -> str:
        if not args:
            return 'usage: touch <filename>'

        workspace = self._workspace
        name = args[0]
        parent_id = workspace.cwd.current_id

        existing = workspace.tree.find_child(parent_id, name)
        if existing is not None and existing.is_file:
            if open_file:
                await workspace.open_node(existing)
            return ''

        try:
            result = await workspace.adapter.create(parent_id, name, NodeKind.FILE)
        except NodeExistsError:
            return f"{command}: {name}: File exists"

        if open_file:
            await workspace.open_node(result.node)

        if result.native:
            return f"File '{name}' created."
        message = f"Virtual file '{name}' created."
        if result.fell_back:
            message += ' (disk unavailable)'
        return message

    # Removal

    async def cmd_rm(self, args: List[str]) -> str:
        """
        Remove a file or folder with everything below it.

        Native entries are deleted on disk first; if that fails nothing
        changes in the tree.
        """
        if not args:
            return 'usage: rm <filename>'

        workspace = self._workspace
        name = args[0]
        target = workspace.tree.find_child(workspace.cwd.current_id, name)
        if target is None:
            return f"rm: {name}: No such file or directory"

        doomed = list(workspace.tree.walk(target.id))
        try:
            await workspace.adapter.remove(target.id)
        except HostIOError as e:
            return f"Error deleting from disk: {e.reason}"

        workspace.evict(doomed)
        return ''

    # Reading

    async def cmd_cat(self, args: List[str]) -> str:
        """Print the start of a file."""
        if not args:
            return 'Usage: cat <filename>'

        workspace = self._workspace
        name = args[0]
        node = workspace.tree.find_child(workspace.cwd.current_id, name, kind=NodeKind.FILE)
        if node is None:
            return f"File not found: {name}"

        if node.is_binary:
            return f"[{node.classification.upper()} File]"

        try:
            content = await workspace.loader.ensure_loaded(node.id)
        except HostIOError:
            return 'Error reading file'

        content = content or ''
        limit = get_config().content.preview_chars
        if len(content) > limit:
            return content[:limit] + '...'
        return content

    # Misc

    async def cmd_clear(self, args: List[str]) -> str:
        return ''

    async def cmd_npm(self, args: List[str]) -> str:
        if args and args[0] in ('install', 'i'):
            return get_config().shell.npm_install_message
        return 'npm command not fully simulated.'

    async def cmd_echo(self, args: List[str]) -> str:
        return ' '.join(args)
