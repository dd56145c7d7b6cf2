"""
Host Capability Module

Defines the handle interface through which native nodes reach the host
filesystem, and an implementation over the local disk.

Every handle method may fail with permission, not-found or other host
errors; callers treat any exception as a host failure.

Author: YSNRFD
Version: 1.0.0
"""

import asyncio
import os
import shutil
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import AsyncIterator, List, Optional, Tuple, Union

from studiofs.logger import Logger, get_logger


class EntryKind(Enum):
    """Kinds of host entries."""
    FILE = 'file'
    DIRECTORY = 'directory'


class HostHandle(ABC):
    """
    Opaque capability over one host filesystem entry.

    Grants read/write on files and list/create/remove on directories.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Entry name (last path component)."""

    @property
    @abstractmethod
    def kind(self) -> EntryKind:
        """Whether the entry is a file or a directory."""

    @abstractmethod
    async def read(self) -> bytes:
        """Read the whole file."""

    @abstractmethod
    async def write(self, data: bytes) -> None:
        """Replace the whole file."""

    @abstractmethod
    def entries(self) -> AsyncIterator['HostHandle']:
        """Iterate over the children of a directory."""

    @abstractmethod
    async def create_child(
        self,
        name: str,
        kind: EntryKind,
        create: bool = True
    ) -> 'HostHandle':
        """
        Get a handle to a child, creating it when missing.

        Idempotent: an existing child of the same kind is returned as is.
        """

    @abstractmethod
    async def remove(self, name: str, recursive: bool = True) -> None:
        """Delete a child entry."""


def check_entry_name(name: str) -> None:
    """Refuse names that would escape the directory they are created in."""
    if not name or name in (".", "..") or os.sep in name or (os.altsep and os.altsep in name):
        raise ValueError(f"Invalid entry name: {name!r}")


class LocalHandle(HostHandle):
    """
    Host handle over a path on the local disk.

    Blocking filesystem calls run in a worker thread so the event loop
    stays responsive while host I/O is pending.

    Example:
        >>> handle = LocalHandle('/srv/project')
        >>> async for entry in handle.entries():
        ...     print(entry.name, entry.kind)
    """

    def __init__(self, path: Union[str, Path], kind: Optional[EntryKind] = None):
        self._path = Path(path)
        self._kind = kind
        self._logger = get_logger('host')

    def __repr__(self) -> str:
        return f"LocalHandle({str(self._path)!r})"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def name(self) -> str:
        return self._path.name

    @property
    def kind(self) -> EntryKind:
        if self._kind is None:
            self._kind = EntryKind.DIRECTORY if self._path.is_dir() else EntryKind.FILE
        return self._kind

    async def read(self) -> bytes:
        return await asyncio.to_thread(self._path.read_bytes)

    async def write(self, data: bytes) -> None:
        await asyncio.to_thread(self._path.write_bytes, data)

    def _scan(self) -> List[Tuple[Path, EntryKind]]:
        """List the directory; entries whose type cannot be read are skipped."""
        found: List[Tuple[Path, EntryKind]] = []

        with os.scandir(self._path) as it:
            for entry in it:
                try:
                    kind = EntryKind.DIRECTORY if entry.is_dir() else EntryKind.FILE
                except OSError as e:
                    self._logger.warning(
                        "Skipping unreadable entry",
                        context={'path': entry.path, 'error': str(e)}
                    )
                    continue
                found.append((Path(entry.path), kind))

        return found

    async def entries(self) -> AsyncIterator['LocalHandle']:
        listing = await asyncio.to_thread(self._scan)
        for path, kind in listing:
            yield LocalHandle(path, kind)

    def _create(self, name: str, kind: EntryKind, create: bool) -> Path:
        check_entry_name(name)
        target = self._path / name

        if kind == EntryKind.DIRECTORY:
            if create:
                target.mkdir(exist_ok=True)
            elif not target.is_dir():
                raise FileNotFoundError(str(target))
        else:
            if target.is_dir():
                raise IsADirectoryError(str(target))
            if create:
                target.touch(exist_ok=True)
            elif not target.is_file():
                raise FileNotFoundError(str(target))

        return target

    async def create_child(
        self,
        name: str,
        kind: EntryKind,
        create: bool = True
    ) -> 'LocalHandle':
        target = await asyncio.to_thread(self._create, name, kind, create)
        return LocalHandle(target, kind)

    def _remove(self, name: str, recursive: bool) -> None:
        check_entry_name(name)
        target = self._path / name

        if target.is_dir() and not target.is_symlink():
            if recursive:
                shutil.rmtree(target)
            else:
                target.rmdir()
        else:
            target.unlink()

    async def remove(self, name: str, recursive: bool = True) -> None:
        await asyncio.to_thread(self._remove, name, recursive)
