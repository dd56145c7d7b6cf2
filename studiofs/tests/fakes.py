"""
In-memory host handles for tests.

A FakeHandle behaves like a host directory or file. Operations named in
its ``fail`` set raise PermissionError, which lets tests exercise every
host failure path without touching the disk.
"""

from typing import Iterable, Optional, AsyncIterator

from studiofs.filesystem.host import HostHandle, EntryKind


class FakeHandle(HostHandle):

    def __init__(
        self,
        name: str,
        kind: EntryKind = EntryKind.DIRECTORY,
        data: bytes = b'',
        fail: Optional[Iterable[str]] = None
    ):
        self._name = name
        self._kind = kind
        self.data = data
        self.children: dict[str, 'FakeHandle'] = {}
        self.fail = set(fail or ())
        self.reads = 0

    def __repr__(self) -> str:
        return f"FakeHandle({self._name!r}, {self._kind.value})"

    @classmethod
    def directory(cls, name: str, *children: 'FakeHandle', fail: Optional[Iterable[str]] = None) -> 'FakeHandle':
        handle = cls(name, EntryKind.DIRECTORY, fail=fail)
        for child in children:
            handle.children[child.name] = child
        return handle

    @classmethod
    def file(cls, name: str, data: bytes = b'', fail: Optional[Iterable[str]] = None) -> 'FakeHandle':
        return cls(name, EntryKind.FILE, data=data, fail=fail)

    def _check(self, operation: str) -> None:
        if operation in self.fail:
            raise PermissionError(f"{operation} denied: {self._name}")

    @property
    def name(self) -> str:
        return self._name

    @property
    def kind(self) -> EntryKind:
        self._check('kind')
        return self._kind

    async def read(self) -> bytes:
        self._check('read')
        self.reads += 1
        return self.data

    async def write(self, data: bytes) -> None:
        self._check('write')
        self.data = bytes(data)

    async def entries(self) -> AsyncIterator['FakeHandle']:
        self._check('list')
        for child in list(self.children.values()):
            yield child

    async def create_child(self, name: str, kind: EntryKind, create: bool = True) -> 'FakeHandle':
        self._check('create')
        existing = self.children.get(name)
        if existing is not None:
            if existing._kind != kind:
                raise FileExistsError(name)
            return existing
        if not create:
            raise FileNotFoundError(name)

        child = FakeHandle(name, kind)
        self.children[name] = child
        return child

    async def remove(self, name: str, recursive: bool = True) -> None:
        self._check('remove')
        if name not in self.children:
            raise FileNotFoundError(name)
        if self.children[name].children and not recursive:
            raise OSError(f"Directory not empty: {name}")
        del self.children[name]
