"""
Display References Module

Binary and media content is never decoded as text. Instead the node holds
an opaque reference string that a rendering collaborator resolves back to
the bytes or to the host handle they can be read from.

Author: YSNRFD
Version: 1.0.0
"""

import uuid
from typing import Optional, Iterable, Union

from .host import HostHandle
from .node import Node

ReferenceSource = Union[bytes, HostHandle]

REFERENCE_SCHEME = 'blob:'


class DisplayReferences:
    """
    Registry of opaque display references.

    Example:
        >>> refs = DisplayReferences()
        >>> ref = refs.register(b'\\x89PNG...', 'image')
        >>> refs.resolve(ref)
        b'\\x89PNG...'
    """

    def __init__(self):
        self._sources: dict[str, ReferenceSource] = {}

    def __len__(self) -> int:
        return len(self._sources)

    def __contains__(self, ref: object) -> bool:
        return ref in self._sources

    def register(self, source: ReferenceSource, classification: str) -> str:
        """Register bytes or a handle and return a new reference string."""
        ref = f"{REFERENCE_SCHEME}{classification}/{uuid.uuid4().hex}"
        self._sources[ref] = source
        return ref

    def resolve(self, ref: str) -> Optional[ReferenceSource]:
        return self._sources.get(ref)

    def revoke(self, ref: str) -> bool:
        return self._sources.pop(ref, None) is not None

    def revoke_nodes(self, nodes: Iterable[Node]) -> int:
        """Revoke the references held by ``nodes``; returns how many were dropped."""
        count = 0
        for node in nodes:
            content = node.content
            if node.is_file and content and content.startswith(REFERENCE_SCHEME):
                if self.revoke(content):
                    count += 1
        return count

    def clear(self) -> None:
        self._sources.clear()


def is_reference(content: Optional[str]) -> bool:
    return bool(content) and content.startswith(REFERENCE_SCHEME)
