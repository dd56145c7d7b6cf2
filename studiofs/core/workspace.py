"""
Workspace Module

The facade the calling layer works through. It wires the tree store,
backing adapter, content loader, working-directory stack and session
together and owns the lock that sequences operations which await host
I/O.

Author: YSNRFD
Version: 1.0.0
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Iterable

from studiofs.core.config_loader import get_config
from studiofs.core.session import Session
from studiofs.exceptions import HostIOError, NodeExistsError, UnsupportedError
from studiofs.filesystem.backing import BackingAdapter
from studiofs.filesystem.content_loader import ContentLoader
from studiofs.filesystem.host import HostHandle
from studiofs.filesystem.ingest import FlatEntry, IngestionPipeline, pick_initial_file
from studiofs.filesystem.node import Node, NativeBacking, ROOT_ID, new_file
from studiofs.filesystem.path_resolver import WorkingDirectory
from studiofs.filesystem.references import DisplayReferences
from studiofs.filesystem.seed import default_project
from studiofs.filesystem.tree import NodeTree
from studiofs.logger import Logger, get_logger


class SaveStatus(Enum):
    """Outcome of saving the active tab."""
    SAVED = 'saved'
    DOWNLOAD = 'download'
    NOTHING_TO_SAVE = 'nothing_to_save'
    UNSUPPORTED = 'unsupported'


@dataclass
class SaveArtifact:
    """Content offered to the user as a download."""
    file_name: str
    data: bytes
    media_type: str = 'text/plain'


@dataclass
class SaveResult:
    status: SaveStatus
    artifact: Optional[SaveArtifact] = None
    message: str = ''


class Workspace:
    """
    Workspace facade.

    Example:
        >>> workspace = Workspace.virtual()
        >>> workspace.session.active_tab_id
        'root_index.html'
        >>> workspace.edit('root_index.html', '<p>Hi</p>')
        True
        >>> result = await workspace.save_active()
        >>> result.status
        <SaveStatus.DOWNLOAD: 'download'>
    """

    def __init__(
        self,
        tree: NodeTree,
        session: Optional[Session] = None,
        references: Optional[DisplayReferences] = None
    ):
        self._tree = tree
        self._session = session if session is not None else Session()
        self._references = references if references is not None else DisplayReferences()
        self._adapter = BackingAdapter(tree)
        self._loader = ContentLoader(self._adapter, self._references)
        self._pipeline = IngestionPipeline(self._adapter, self._loader)
        self._cwd = WorkingDirectory(tree)
        self._lock = asyncio.Lock()
        self._logger = get_logger('workspace')

    # Construction

    @classmethod
    def virtual(cls, session: Optional[Session] = None) -> 'Workspace':
        """Workspace over the seeded default project."""
        workspace = cls(default_project(), session=session)
        workspace._open_resident(pick_initial_file(workspace.tree))
        workspace._logger.info("Opened virtual project", context={'nodes': len(workspace.tree)})
        return workspace

    @classmethod
    async def open_directory(
        cls,
        handle: HostHandle,
        session: Optional[Session] = None
    ) -> 'Workspace':
        """Workspace over a host directory, ingested recursively."""
        tree = NodeTree(root_name=handle.name, root_backing=NativeBacking(handle))
        workspace = cls(tree, session=session)

        async with workspace._lock:
            await workspace._pipeline.ingest_directory()
            initial = pick_initial_file(tree)
            if initial is not None:
                await workspace.open_node(initial)

        workspace._logger.info(
            "Opened native project",
            context={'name': handle.name, 'nodes': len(tree)}
        )
        return workspace

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[FlatEntry],
        session: Optional[Session] = None,
        root_name: Optional[str] = None
    ) -> 'Workspace':
        """Workspace rebuilt from flat (name, relative path, bytes) entries."""
        tree = NodeTree(root_name=root_name or get_config().workspace.opened_project_name)
        workspace = cls(tree, session=session)
        workspace._pipeline.ingest_entries(entries)
        workspace._open_resident(pick_initial_file(tree))
        return workspace

    # Components

    @property
    def tree(self) -> NodeTree:
        return self._tree

    @property
    def adapter(self) -> BackingAdapter:
        return self._adapter

    @property
    def loader(self) -> ContentLoader:
        return self._loader

    @property
    def references(self) -> DisplayReferences:
        return self._references

    @property
    def pipeline(self) -> IngestionPipeline:
        return self._pipeline

    @property
    def cwd(self) -> WorkingDirectory:
        return self._cwd

    @property
    def session(self) -> Session:
        return self._session

    @property
    def lock(self) -> asyncio.Lock:
        """The sequencing point for operations that await host I/O."""
        return self._lock

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    # Views

    async def open_file(self, node_id: str) -> Optional[str]:
        """
        Load a file if needed and open it in the active tab.

        A failed host read is logged; the tab still opens.

        Returns:
            The file content, or None if it could not be loaded
        """
        async with self._lock:
            return await self.open_node(self._tree.get(node_id))

    async def open_node(self, node: Node) -> Optional[str]:
        """
        Load ``node`` and open its tab. The caller holds the lock.

        A failed host read is logged; the tab still opens.
        """
        content: Optional[str] = None
        try:
            content = await self._loader.ensure_loaded(node.id)
        except HostIOError as e:
            self._logger.error("Failed to read file", context={'id': node.id, 'error': str(e)})

        if node.is_file:
            self._session.open_tab(node.id, node.name)
        return content

    def _open_resident(self, node: Optional[Node]) -> None:
        if node is not None and node.is_file:
            self._session.open_tab(node.id, node.name)

    def close_file(self, node_id: str) -> bool:
        return self._session.close_tab(node_id)

    def edit(self, node_id: str, text: str) -> bool:
        """
        Replace a file's text and mark its tab dirty.

        Raises:
            UnsupportedError: If the file is binary/media content, or was
                too large to load

        Returns:
            True if the content was replaced
        """
        node = self._tree.find(node_id)
        if node is not None and node.is_binary:
            raise UnsupportedError("Binary files cannot be edited as text", path=node_id)
        if node is not None and node.is_too_large:
            raise UnsupportedError("File was too large to load and cannot be edited", path=node_id)

        changed = self._tree.update_content(node_id, text)
        if changed:
            self._session.mark_dirty(node_id)
        return changed

    def toggle_folder(self, node_id: str) -> Optional[bool]:
        return self._tree.toggle_open(node_id)

    def content_by_exact_name(self, name: str) -> str:
        return self._tree.content_by_exact_name(name)

    def evict(self, removed: Iterable[Node]) -> None:
        """Drop every piece of state that refers to removed nodes."""
        nodes = list(removed)
        ids = {node.id for node in nodes}

        revoked = self._references.revoke_nodes(nodes)
        closed = self._session.evict(ids)
        self._cwd.evict(ids)

        self._logger.debug(
            "Evicted removed nodes",
            context={'nodes': len(ids), 'tabs': len(closed), 'references': revoked}
        )

    async def import_file(self, handle: HostHandle) -> Node:
        """
        Add a single host file under the root and open it.

        The file is read eagerly.

        Raises:
            NodeExistsError: If the root already has an entry of that name
            HostIOError: If the file could not be read
        """
        async with self._lock:
            node = new_file(ROOT_ID, handle.name, content=None, handle=handle)
            if node.id in self._tree:
                raise NodeExistsError(node.id)

            try:
                raw = await handle.read()
            except Exception as e:
                self._logger.warning("Cannot import file", context={'name': handle.name, 'error': str(e)})
                raise HostIOError(handle.name, operation="read", reason=str(e)) from e

            node.backing.content = self._loader.decode_bytes(node.name, raw, classification=node.classification)
            node.backing.too_large = not node.is_binary and self._loader.exceeds_limit(raw)
            self._tree.add_child(ROOT_ID, node)
            self._session.open_tab(node.id, node.name)

            self._logger.info("Imported file", context={'id': node.id})
            return node

    # Saving

    async def save_active(self) -> SaveResult:
        """
        Save the active tab.

        Native files are written back through their handle. Virtual files,
        and native files whose write failed, are offered as a download;
        the dirty flag survives a failed native write.
        """
        async with self._lock:
            tab_id = self._session.active_tab_id
            node = self._tree.find(tab_id) if tab_id is not None else None

            if node is None or not node.is_file or node.content is None:
                return SaveResult(SaveStatus.NOTHING_TO_SAVE)

            if node.is_binary:
                return SaveResult(
                    SaveStatus.UNSUPPORTED,
                    message=f"{node.name} is {node.classification} content and cannot be saved as text."
                )

            if node.is_too_large:
                return SaveResult(
                    SaveStatus.UNSUPPORTED,
                    message=f"{node.name} was too large to load and cannot be saved from the editor."
                )

            text = node.content
            artifact = SaveArtifact(file_name=node.name, data=text.encode('utf-8'))

            if isinstance(node.backing, NativeBacking):
                try:
                    await self._adapter.write(node.id, text)
                except HostIOError as e:
                    self._logger.warning(
                        "Native save failed, offering download",
                        context={'id': node.id, 'error': str(e)}
                    )
                    return SaveResult(
                        SaveStatus.DOWNLOAD,
                        artifact=artifact,
                        message=f"Could not write {node.name} to disk."
                    )

                # An edit made while the write was pending stays unsaved
                if node.content == text:
                    self._session.mark_dirty(node.id, False)
                self._logger.info("Saved file", context={'id': node.id})
                return SaveResult(SaveStatus.SAVED, message=f"Saved {node.name}")

            self._session.mark_dirty(node.id, False)
            return SaveResult(SaveStatus.DOWNLOAD, artifact=artifact, message=f"Downloaded {node.name}")
