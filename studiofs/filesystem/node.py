"""
Node Module

Implements the node abstraction for the workspace namespace. A node is
either a FILE or a FOLDER and is backed either purely in memory or by a
host filesystem handle.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Union, TYPE_CHECKING

from .classification import classify, is_binary, FOLDER_CLASS

if TYPE_CHECKING:
    from .host import HostHandle


ROOT_ID = 'root'


class NodeKind(Enum):
    """Kinds of nodes."""
    FILE = 'FILE'
    FOLDER = 'FOLDER'


@dataclass
class VirtualBacking:
    """Content lives entirely in memory and is authoritative."""
    content: str = ''


@dataclass
class NativeBacking:
    """
    Backed by a host handle.

    File content is loaded lazily: ``content`` stays None until the first
    access. Folders never carry content. ``too_large`` is set when the
    file was over the size limit and ``content`` holds the placeholder
    message instead of the file.
    """
    handle: 'HostHandle'
    content: Optional[str] = None
    too_large: bool = False


Backing = Union[VirtualBacking, NativeBacking]


@dataclass
class Node:
    """
    A file or folder in the namespace.

    Children are stored as an ordered list of child ids; the tree store
    owns the id -> node mapping. ``children`` is None for files.
    """

    id: str
    name: str
    kind: NodeKind
    backing: Backing
    parent_id: Optional[str] = None
    classification: str = FOLDER_CLASS
    children: Optional[List[str]] = None
    is_open: bool = False

    def __post_init__(self):
        if self.kind == NodeKind.FOLDER and self.children is None:
            self.children = []

    @property
    def is_folder(self) -> bool:
        return self.kind == NodeKind.FOLDER

    @property
    def is_file(self) -> bool:
        return self.kind == NodeKind.FILE

    @property
    def is_native(self) -> bool:
        return isinstance(self.backing, NativeBacking)

    @property
    def is_binary(self) -> bool:
        return self.is_file and is_binary(self.classification)

    @property
    def content(self) -> Optional[str]:
        """Resident content, or None for a native file not loaded yet."""
        return self.backing.content

    @property
    def is_loaded(self) -> bool:
        return self.backing.content is not None

    @property
    def is_too_large(self) -> bool:
        """True for a native file whose content is the too-large placeholder."""
        return isinstance(self.backing, NativeBacking) and self.backing.too_large


def make_child_id(parent_id: str, name: str) -> str:
    """Deterministic id of the child ``name`` of ``parent_id``."""
    return f"{parent_id}_{name}"


def local_name(node_id: str, parent_id: Optional[str]) -> str:
    """Strip the parent's id prefix from ``node_id`` to get the local name."""
    if parent_id is None:
        return node_id
    prefix = f"{parent_id}_"
    if node_id.startswith(prefix):
        return node_id[len(prefix):]
    return node_id


def new_folder(
    parent_id: str,
    name: str,
    handle: Optional['HostHandle'] = None,
    is_open: bool = False
) -> Node:
    """Create a detached folder node, native when ``handle`` is given."""
    backing: Backing = NativeBacking(handle) if handle is not None else VirtualBacking('')
    return Node(
        id=make_child_id(parent_id, name),
        name=name,
        kind=NodeKind.FOLDER,
        backing=backing,
        parent_id=parent_id,
        classification=FOLDER_CLASS,
        is_open=is_open,
    )


def new_file(
    parent_id: str,
    name: str,
    content: Optional[str] = '',
    handle: Optional['HostHandle'] = None
) -> Node:
    """
    Create a detached file node.

    Native files may pass ``content=None`` to defer loading; virtual files
    always get a string.
    """
    if handle is not None:
        backing: Backing = NativeBacking(handle, content)
    else:
        backing = VirtualBacking(content if content is not None else '')
    return Node(
        id=make_child_id(parent_id, name),
        name=name,
        kind=NodeKind.FILE,
        backing=backing,
        parent_id=parent_id,
        classification=classify(name),
    )
