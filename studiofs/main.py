"""
studiofs - Workspace Terminal

Main entry point.

Usage:
    studiofs [DIRECTORY] [--virtual] [--config FILE]

Without a directory the seeded virtual project is opened. With one, the
directory is opened natively and commands change it on disk; with
--virtual it is snapshotted into memory instead.

Author: YSNRFD
Version: 1.0.0
"""

import asyncio
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, List

from studiofs.core.config_loader import ConfigLoader, get_config
from studiofs.core.workspace import Workspace
from studiofs.exceptions import WorkspaceError
from studiofs.filesystem.host import LocalHandle
from studiofs.filesystem.ingest import read_entries
from studiofs.logger import Logger, LogLevel, get_logger
from studiofs.shell.shell import Shell

USAGE = "usage: studiofs [DIRECTORY] [--virtual] [--config FILE]"


@dataclass
class Options:
    directory: Optional[str] = None
    virtual: bool = False
    config_path: Optional[str] = None


def parse_args(argv: List[str]) -> Options:
    """
    Parse command-line arguments.

    Raises:
        ValueError: On unknown options or a missing value
    """
    options = Options()
    args = list(argv)

    while args:
        arg = args.pop(0)
        if arg == '--virtual':
            options.virtual = True
        elif arg == '--config':
            if not args:
                raise ValueError("--config requires a file")
            options.config_path = args.pop(0)
        elif arg.startswith('-'):
            raise ValueError(f"unknown option: {arg}")
        elif options.directory is None:
            options.directory = arg
        else:
            raise ValueError(f"unexpected argument: {arg}")

    return options


async def open_workspace(options: Options) -> Workspace:
    """Open the workspace the options ask for."""
    if options.directory is None:
        return Workspace.virtual()

    path = Path(options.directory)
    if not path.is_dir():
        raise WorkspaceError(f"Not a directory: {options.directory}", path=options.directory)

    if options.virtual:
        entries = await asyncio.to_thread(read_entries, path)
        return Workspace.from_entries(entries)

    return await Workspace.open_directory(LocalHandle(path.resolve()))


async def run(options: Options) -> int:
    workspace = await open_workspace(options)
    shell = Shell(workspace)

    print(f"{workspace.tree.root.name}: type 'exit' to leave.")
    await shell.run()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for studiofs.

    Startup sequence:
    1. Parse arguments
    2. Load configuration
    3. Initialize logging
    4. Open the workspace
    5. Run the shell
    """
    argv = sys.argv[1:] if argv is None else argv

    if '-h' in argv or '--help' in argv:
        print(USAGE)
        return 0

    try:
        options = parse_args(argv)
    except ValueError as e:
        print(f"studiofs: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 2

    try:
        if options.config_path:
            ConfigLoader().load(options.config_path)
    except WorkspaceError as e:
        print(f"studiofs: {e.message}", file=sys.stderr)
        return 1

    log_config = get_config().logging
    Logger.initialize(
        level=LogLevel.from_name(log_config.level),
        log_file=log_config.log_file,
        use_colors=log_config.use_colors,
        console_output=log_config.console_output
    )
    logger = get_logger('workspace')

    try:
        return asyncio.run(run(options))
    except WorkspaceError as e:
        logger.error("Cannot open workspace", context={'error': str(e)})
        print(f"studiofs: {e.message}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130


if __name__ == '__main__':
    sys.exit(main())
