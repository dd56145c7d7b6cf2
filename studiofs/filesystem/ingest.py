"""
Ingestion Pipeline Module

Builds the initial namespace either from a native directory handle or from
a flat list of (file name, relative path, raw bytes) entries.

Author: YSNRFD
Version: 1.0.0
"""

import os
from pathlib import Path
from typing import Optional, List, Tuple, Iterable, Union

from .backing import BackingAdapter
from .content_loader import ContentLoader
from .host import HostHandle, EntryKind
from .node import Node, NodeKind, ROOT_ID, new_file, new_folder
from .path_resolver import PathResolver
from .tree import NodeTree
from studiofs.exceptions import WorkspaceError
from studiofs.logger import Logger, get_logger

# (file name, relative path or '', raw bytes)
FlatEntry = Tuple[str, str, bytes]


class IngestionPipeline:
    """
    Ingestion Pipeline.

    Populates the tree behind a backing adapter. Native ingestion walks the
    root's host handle; flat ingestion rebuilds folders from relative paths.

    Example:
        >>> pipeline = IngestionPipeline(adapter, loader)
        >>> await pipeline.ingest_directory()
        >>> pipeline.ingest_entries([('a.txt', 'src/a.txt', b'hello')])
    """

    def __init__(self, adapter: BackingAdapter, loader: ContentLoader):
        self._adapter = adapter
        self._loader = loader
        self._logger = get_logger('ingest')

    @property
    def tree(self) -> NodeTree:
        return self._adapter.tree

    async def ingest_directory(self, folder_id: str = ROOT_ID) -> int:
        """
        Recursively enumerate the host directory behind ``folder_id``.

        Entries that fail are skipped; directories that cannot be listed
        come out empty.

        Returns:
            Number of nodes added
        """
        folder = self.tree.get_folder(folder_id)
        if not folder.is_native:
            raise WorkspaceError("Folder has no host backing", path=folder_id)

        count = 0
        kinds: List[Tuple[EntryKind, HostHandle]] = []
        for entry in await self._adapter.list_entries(folder.backing.handle):
            try:
                kinds.append((entry.kind, entry))
            except Exception as e:
                self._skip(folder_id, entry, e)

        # Folders first, then by name
        kinds.sort(key=lambda pair: (pair[0] != EntryKind.DIRECTORY, pair[1].name))

        for kind, entry in kinds:
            try:
                if kind == EntryKind.DIRECTORY:
                    child = self.tree.add_child(folder_id, new_folder(folder_id, entry.name, handle=entry))
                    count += 1
                    count += await self.ingest_directory(child.id)
                else:
                    self.tree.add_child(folder_id, new_file(folder_id, entry.name, content=None, handle=entry))
                    count += 1
            except WorkspaceError as e:
                self._skip(folder_id, entry, e)

        # add_child opens its parent; ingested folders start closed
        folder.is_open = folder_id == ROOT_ID
        return count

    def ingest_entries(self, entries: Iterable[FlatEntry]) -> int:
        """
        Rebuild a hierarchy from flat (name, relative path, bytes) entries.

        Intermediate folders are reused by name under the same parent, so
        "src/a.txt" and "src/sub/b.txt" share a single "src".

        Returns:
            Number of files added
        """
        count = 0

        for file_name, rel_path, raw in entries:
            folders, name = PathResolver.split(rel_path or '')
            if not name:
                name = file_name

            try:
                parent_id = ROOT_ID
                for folder_name in folders:
                    parent_id = self._folder_for(parent_id, folder_name).id

                content = self._loader.decode_bytes(name, raw)
                self.tree.add_child(parent_id, new_file(parent_id, name, content=content))
                count += 1
            except WorkspaceError as e:
                self._logger.warning(
                    "Skipping entry",
                    context={'path': rel_path or file_name, 'error': str(e)}
                )

        for node in self.tree.walk():
            if node.is_folder:
                node.is_open = node.id == ROOT_ID

        self._logger.info("Ingested entries", context={'files': count, 'nodes': len(self.tree)})
        return count

    def _skip(self, folder_id: str, entry: HostHandle, error: Exception) -> None:
        self._logger.warning(
            "Skipping host entry",
            context={'folder': folder_id, 'entry': entry.name, 'error': str(error)}
        )

    def _folder_for(self, parent_id: str, name: str) -> Node:
        existing = self.tree.find_child(parent_id, name, kind=NodeKind.FOLDER)
        if existing is not None:
            return existing
        return self.tree.add_child(parent_id, new_folder(parent_id, name))


def pick_initial_file(tree: NodeTree) -> Optional[Node]:
    """
    Choose the file to open after ingestion.

    Prefers the first file, depth-first, whose name starts with "readme"
    (any case) or is "index.html"; otherwise the first top-level entry if
    it is a file; otherwise nothing.
    """
    for node in tree.walk():
        if node.is_file and (node.name.lower().startswith('readme') or node.name == 'index.html'):
            return node

    top = tree.listing(ROOT_ID)
    if top and top[0].is_file:
        return top[0]
    return None


def read_entries(path: Union[str, Path]) -> List[FlatEntry]:
    """
    Snapshot a local directory as flat entries.

    Relative paths start with the directory's own name, the way a browser
    folder upload reports them.
    """
    base = Path(path).resolve()
    entries: List[FlatEntry] = []

    for dirpath, dirnames, filenames in os.walk(base):
        dirnames.sort()
        for filename in sorted(filenames):
            full = Path(dirpath) / filename
            rel = full.relative_to(base.parent).as_posix()
            entries.append((filename, rel, full.read_bytes()))

    return entries
