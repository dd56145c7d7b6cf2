"""
Path Resolver Module

Relative-path splitting for ingestion, and the working-directory stack the
shell navigates with.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass
from typing import Optional, List, Tuple, Iterable

from .node import Node, NodeKind, ROOT_ID, local_name
from .tree import NodeTree
from studiofs.exceptions import DirectoryLostError, NodeNotFoundError


@dataclass
class ParsedPath:
    """A parsed relative path with its components."""
    components: List[str]

    def __str__(self) -> str:
        return '/'.join(self.components)

    @property
    def folders(self) -> List[str]:
        return self.components[:-1]

    @property
    def name(self) -> str:
        return self.components[-1] if self.components else ''


class PathResolver:
    """
    Splits forward-slash separated relative paths.

    Handles:
    - Repeated and trailing separators
    - '.' components
    """

    @staticmethod
    def parse(path: str) -> ParsedPath:
        """
        Parse a path into components.

        Args:
            path: Path string to parse, e.g. "myProject/src/app.js"

        Returns:
            ParsedPath with components
        """
        components = [c for c in path.split('/') if c and c != '.']
        return ParsedPath(components=components)

    @staticmethod
    def split(path: str) -> Tuple[List[str], str]:
        """
        Split a path into its folder components and final name.

        Returns:
            Tuple of (folders, name)
        """
        parsed = PathResolver.parse(path)
        return (parsed.folders, parsed.name)


class WorkingDirectory:
    """
    Working-directory stack.

    An ordered list of folder ids, root first, current directory last.

    Example:
        >>> cwd = WorkingDirectory(tree)
        >>> cwd.push('src')
        >>> cwd.display()
        '/root/src'
    """

    def __init__(self, tree: NodeTree):
        self._tree = tree
        self._stack: List[str] = [ROOT_ID]

    @property
    def stack(self) -> Tuple[str, ...]:
        return tuple(self._stack)

    @property
    def current_id(self) -> str:
        return self._stack[-1]

    def __len__(self) -> int:
        return len(self._stack)

    def current(self) -> Node:
        """
        Resolve the current directory.

        Raises:
            DirectoryLostError: If the directory has been removed
        """
        node = self._tree.find(self._stack[-1])
        if node is None or not node.is_folder:
            raise DirectoryLostError(self._stack[-1])
        return node

    def push(self, name: str) -> Node:
        """
        Enter the child folder ``name`` of the current directory.

        Raises:
            DirectoryLostError: If the current directory has been removed
            NodeNotFoundError: If no child folder has that exact name
        """
        current = self.current()
        target = self._tree.find_child(current.id, name, kind=NodeKind.FOLDER)
        if target is None:
            raise NodeNotFoundError(name)

        self._stack.append(target.id)
        return target

    def pop(self) -> bool:
        """Leave the current directory; False when already at the root."""
        if len(self._stack) <= 1:
            return False
        self._stack.pop()
        return True

    def reset(self) -> None:
        self._stack = [ROOT_ID]

    def names(self) -> List[str]:
        """Local names along the stack, derived from the ids."""
        names: List[str] = []
        parent_id: Optional[str] = None
        for node_id in self._stack:
            names.append(local_name(node_id, parent_id))
            parent_id = node_id
        return names

    def display(self) -> str:
        return '/' + '/'.join(self.names())

    def current_name(self) -> str:
        return self.names()[-1]

    def evict(self, removed_ids: Iterable[str]) -> bool:
        """
        Cut the stack at the first removed folder.

        Returns:
            True if the stack changed
        """
        removed = set(removed_ids)
        for index, node_id in enumerate(self._stack):
            if index > 0 and node_id in removed:
                del self._stack[index:]
                return True
        return False
