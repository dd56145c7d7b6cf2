"""
Node Tree Store Module

The canonical hierarchical namespace. Nodes live in an arena keyed by
their deterministic id; folders keep an ordered list of child ids and
every node keeps its parent id.

Each mutation completes in a single synchronous step, so a reader on the
same event loop observes either the state before or the state after it.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Iterator, List, Set

from .node import Node, NodeKind, VirtualBacking, NativeBacking, Backing, ROOT_ID
from studiofs.exceptions import (
    NodeNotFoundError,
    NodeExistsError,
    NotAFolderError,
    UnsupportedError,
)
from studiofs.logger import Logger, get_logger


def listing_key(node: Node) -> tuple[int, str]:
    """Folders before files, then ascending by name."""
    return (0 if node.is_folder else 1, node.name)


class NodeTree:
    """
    Node Tree Store.

    Provides:
    - Lookup by id
    - Content replacement and folder open/closed toggling
    - Child insertion under a folder
    - Atomic removal of a node and its whole subtree

    Example:
        >>> tree = NodeTree('Project')
        >>> tree.add_child('root', new_folder('root', 'src'))
        >>> tree.find('root_src').name
        'src'
    """

    def __init__(self, root_name: str = 'Project', root_backing: Optional[Backing] = None):
        self._logger = get_logger('tree')
        self._nodes: dict[str, Node] = {}

        root = Node(
            id=ROOT_ID,
            name=root_name,
            kind=NodeKind.FOLDER,
            backing=root_backing if root_backing is not None else VirtualBacking(''),
            parent_id=None,
            is_open=True,
        )
        self._nodes[ROOT_ID] = root

    @property
    def root(self) -> Node:
        return self._nodes[ROOT_ID]

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    # Lookup

    def find(self, node_id: str) -> Optional[Node]:
        """Look up a node; a miss is not an error, callers decide."""
        return self._nodes.get(node_id)

    def get(self, node_id: str) -> Node:
        """
        Look up a node that must exist.

        Raises:
            NodeNotFoundError: If no node has this id
        """
        node = self._nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    def get_folder(self, node_id: str) -> Node:
        node = self.get(node_id)
        if not node.is_folder:
            raise NotAFolderError(node_id)
        return node

    def children(self, node_id: str) -> List[Node]:
        """Children of a folder in insertion order; empty for files and misses."""
        node = self._nodes.get(node_id)
        if node is None or not node.is_folder:
            return []
        return [self._nodes[child_id] for child_id in node.children]

    def listing(self, node_id: str) -> List[Node]:
        """Children of a folder in display order (folders first, then by name)."""
        return sorted(self.children(node_id), key=listing_key)

    def find_child(
        self,
        parent_id: str,
        name: str,
        kind: Optional[NodeKind] = None
    ) -> Optional[Node]:
        """
        Find a direct child by exact, case-sensitive name.

        Args:
            parent_id: Folder to search
            name: Local name to match
            kind: Restrict the match to FILE or FOLDER nodes

        Returns:
            The first matching child or None
        """
        for child in self.children(parent_id):
            if child.name == name and (kind is None or child.kind == kind):
                return child
        return None

    def walk(self, node_id: str = ROOT_ID) -> Iterator[Node]:
        """Yield ``node_id`` and its descendants, depth-first pre-order."""
        start = self._nodes.get(node_id)
        if start is None:
            return

        stack = [start]
        while stack:
            node = stack.pop()
            yield node
            if node.is_folder:
                stack.extend(self._nodes[c] for c in reversed(node.children))

    def content_by_exact_name(self, name: str) -> str:
        """
        Content of the first node named exactly ``name``.

        Searches depth-first from the root and skips nodes whose content is
        not resident. Returns an empty string when nothing matches.
        """
        for node in self.walk():
            if node.name == name and node.is_file and node.content is not None:
                return node.content
        return ''

    # Mutation

    def update_content(self, node_id: str, text: str) -> bool:
        """
        Replace the content of a file node.

        Returns:
            True if the content was replaced (the caller marks its view
            dirty), False if ``node_id`` is not a file
        """
        node = self._nodes.get(node_id)
        if node is None or not node.is_file:
            return False

        node.backing.content = text
        self._logger.debug("Updated content", context={'id': node_id, 'length': len(text)})
        return True

    def toggle_open(self, node_id: str) -> Optional[bool]:
        """Flip a folder's open flag; returns the new state or None on a miss."""
        node = self._nodes.get(node_id)
        if node is None or not node.is_folder:
            return None

        node.is_open = not node.is_open
        return node.is_open

    def add_child(self, parent_id: str, node: Node) -> Node:
        """
        Append ``node`` to a folder and open that folder.

        Args:
            parent_id: Folder receiving the node
            node: Detached node whose id is derived from ``parent_id``

        Returns:
            The inserted node

        Raises:
            NodeNotFoundError: If the parent does not exist
            NotAFolderError: If the parent is a file
            NodeExistsError: If a node with the same id already exists
        """
        parent = self.get_folder(parent_id)

        if node.id in self._nodes:
            raise NodeExistsError(node.id)

        node.parent_id = parent.id
        if node.kind == NodeKind.FOLDER and node.children is None:
            node.children = []
        elif node.kind == NodeKind.FILE:
            node.children = None

        self._nodes[node.id] = node
        parent.children.append(node.id)
        parent.is_open = True

        self._logger.debug(
            "Added node",
            context={'id': node.id, 'kind': node.kind.name, 'parent': parent.id}
        )
        return node

    def remove_subtree(self, node_id: str) -> Set[str]:
        """
        Remove a node and every descendant.

        Returns:
            All removed ids, so callers can evict dependent state

        Raises:
            NodeNotFoundError: If the node does not exist
            UnsupportedError: If asked to remove the root
        """
        if node_id == ROOT_ID:
            raise UnsupportedError("Cannot remove the root folder", path=ROOT_ID)

        node = self.get(node_id)
        removed = {n.id for n in self.walk(node_id)}

        parent = self._nodes.get(node.parent_id)
        if parent is not None:
            parent.children.remove(node_id)

        for removed_id in removed:
            del self._nodes[removed_id]

        self._logger.debug("Removed subtree", context={'id': node_id, 'count': len(removed)})
        return removed

    def cache_content(self, node_id: str, text: str, too_large: bool = False) -> None:
        """Store lazily loaded content on a native file."""
        node = self.get(node_id)
        if isinstance(node.backing, NativeBacking) and node.is_file:
            node.backing.content = text
            node.backing.too_large = too_large

    # Consistency

    def validate(self) -> List[str]:
        """
        Check the structural invariants.

        Returns:
            A list of human-readable violations, empty when the tree is sound
        """
        problems: List[str] = []
        reachable: Set[str] = set()

        for node in self.walk():
            if node.id in reachable:
                problems.append(f"cycle or shared child at {node.id}")
                return problems
            reachable.add(node.id)

        for node_id, node in self._nodes.items():
            if node_id not in reachable:
                problems.append(f"unreachable node {node_id}")

            if node.id != node_id:
                problems.append(f"arena key {node_id} holds node {node.id}")

            if node.is_file and node.children is not None:
                problems.append(f"file {node_id} has a children list")
            if node.is_folder and node.children is None:
                problems.append(f"folder {node_id} has no children list")

            if isinstance(node.backing, VirtualBacking) and node.backing.content is None:
                problems.append(f"virtual node {node_id} has no content")

            if node_id == ROOT_ID:
                if node.parent_id is not None:
                    problems.append("root has a parent")
                continue

            parent = self._nodes.get(node.parent_id)
            if parent is None or not parent.is_folder:
                problems.append(f"parent of {node_id} is not an existing folder")
            elif parent.children.count(node_id) != 1:
                problems.append(f"{node_id} is not listed exactly once by its parent")

        return problems
