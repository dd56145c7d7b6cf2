"""
Backing Adapter Module

Reconciles the two backing models. Virtual nodes never leave memory;
native nodes round-trip through their host handle first.

Failure policy:
- A failed native create falls back to a virtual node.
- A failed native delete aborts before the tree is touched.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass
from typing import Optional, List, Set

from .host import HostHandle, EntryKind
from .node import Node, NodeKind, NativeBacking, make_child_id, new_file, new_folder
from .tree import NodeTree
from studiofs.exceptions import HostIOError, NodeExistsError
from studiofs.logger import Logger, get_logger


def host_kind(kind: NodeKind) -> EntryKind:
    return EntryKind.DIRECTORY if kind == NodeKind.FOLDER else EntryKind.FILE


def node_kind(kind: EntryKind) -> NodeKind:
    return NodeKind.FOLDER if kind == EntryKind.DIRECTORY else NodeKind.FILE


@dataclass
class CreateResult:
    """Outcome of a create: the node, whether it reached disk, and why not."""
    node: Node
    native: bool
    error: Optional[HostIOError] = None

    @property
    def fell_back(self) -> bool:
        return self.error is not None


class BackingAdapter:
    """
    Backing Adapter.

    Provides create, remove, read and write over nodes of either flavor,
    and resilient listing of host directories for ingestion.

    Example:
        >>> adapter = BackingAdapter(tree)
        >>> result = await adapter.create('root', 'src', NodeKind.FOLDER)
        >>> result.native
        True
    """

    def __init__(self, tree: NodeTree):
        self._tree = tree
        self._logger = get_logger('backing')

    @property
    def tree(self) -> NodeTree:
        return self._tree

    async def create(self, parent_id: str, name: str, kind: NodeKind) -> CreateResult:
        """
        Create a file or folder under ``parent_id``.

        Under a native folder the host entry is created first; if that
        fails a virtual node is created instead and the error is attached
        to the result.

        Raises:
            NodeNotFoundError: If the parent does not exist
            NotAFolderError: If the parent is a file
            NodeExistsError: If the derived id is already taken
        """
        parent = self._tree.get_folder(parent_id)
        node_id = make_child_id(parent.id, name)
        if node_id in self._tree:
            raise NodeExistsError(node_id)

        handle: Optional[HostHandle] = None
        error: Optional[HostIOError] = None

        if isinstance(parent.backing, NativeBacking):
            try:
                handle = await parent.backing.handle.create_child(name, host_kind(kind), create=True)
            except Exception as e:
                error = HostIOError(name, operation="create", reason=str(e))
                self._logger.warning(
                    "Native create failed, falling back to a virtual node",
                    context={'parent': parent.id, 'name': name, 'error': str(e)}
                )

        if kind == NodeKind.FOLDER:
            node = new_folder(parent.id, name, handle=handle)
        else:
            node = new_file(parent.id, name, content='', handle=handle)

        self._tree.add_child(parent.id, node)
        return CreateResult(node=node, native=handle is not None, error=error)

    async def remove(self, node_id: str) -> Set[str]:
        """
        Remove a node and its subtree.

        A native node under a native folder is deleted on disk first. If
        that fails the tree is left untouched.

        Returns:
            The ids removed from the tree

        Raises:
            HostIOError: If the host delete failed
        """
        node = self._tree.get(node_id)
        parent = self._tree.find(node.parent_id) if node.parent_id else None

        if (
            isinstance(node.backing, NativeBacking)
            and parent is not None
            and isinstance(parent.backing, NativeBacking)
        ):
            try:
                await parent.backing.handle.remove(node.name, recursive=True)
            except Exception as e:
                self._logger.warning(
                    "Native delete failed, tree left unchanged",
                    context={'id': node_id, 'error': str(e)}
                )
                raise HostIOError(node.name, operation="delete", reason=str(e)) from e

        return self._tree.remove_subtree(node_id)

    async def read(self, node_id: str) -> bytes:
        """
        Read the raw bytes behind a native file.

        Raises:
            HostIOError: If the node is not native or the read failed
        """
        node = self._tree.get(node_id)
        if not isinstance(node.backing, NativeBacking):
            raise HostIOError(node.name, operation="read", reason="node has no host backing")

        try:
            return await node.backing.handle.read()
        except Exception as e:
            self._logger.error("Native read failed", context={'id': node_id, 'error': str(e)})
            raise HostIOError(node.name, operation="read", reason=str(e)) from e

    async def write(self, node_id: str, text: str) -> bool:
        """
        Persist text content.

        Returns:
            True if the content was written to the host, False for virtual
            nodes which have nothing to persist

        Raises:
            HostIOError: If the host write failed
        """
        node = self._tree.get(node_id)
        if not isinstance(node.backing, NativeBacking):
            return False

        try:
            await node.backing.handle.write(text.encode('utf-8'))
        except Exception as e:
            self._logger.warning("Native write failed", context={'id': node_id, 'error': str(e)})
            raise HostIOError(node.name, operation="write", reason=str(e)) from e

        self._logger.debug("Wrote content to host", context={'id': node_id})
        return True

    async def list_entries(self, handle: HostHandle) -> List[HostHandle]:
        """
        Collect the children of a host directory.

        A directory that cannot be listed yields no entries; the failure
        is logged and ingestion carries on.
        """
        found: List[HostHandle] = []
        try:
            async for entry in handle.entries():
                found.append(entry)
        except Exception as e:
            self._logger.warning(
                "Cannot list host directory",
                context={'name': handle.name, 'error': str(e)}
            )
            return []
        return found
