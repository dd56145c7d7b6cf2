"""
studiofs Namespace Module

Provides the file/folder namespace and its backing:
- Node tree store with deterministic ids
- Virtual and host-backed nodes
- Lazy, size-guarded content loading
- Working-directory stack
- Ingestion from host directories or flat entry lists
"""

from .classification import classify, is_binary, BINARY_CLASSES, DEFAULT_CLASS, FOLDER_CLASS
from .node import (
    Node,
    NodeKind,
    VirtualBacking,
    NativeBacking,
    ROOT_ID,
    make_child_id,
    new_file,
    new_folder,
)
from .tree import NodeTree, listing_key
from .host import HostHandle, LocalHandle, EntryKind
from .backing import BackingAdapter, CreateResult
from .references import DisplayReferences, is_reference
from .content_loader import ContentLoader
from .path_resolver import PathResolver, ParsedPath, WorkingDirectory
from .ingest import IngestionPipeline, pick_initial_file, read_entries
from .seed import default_project

__all__ = [
    # Classification
    'classify',
    'is_binary',
    'BINARY_CLASSES',
    'DEFAULT_CLASS',
    'FOLDER_CLASS',
    # Node
    'Node',
    'NodeKind',
    'VirtualBacking',
    'NativeBacking',
    'ROOT_ID',
    'make_child_id',
    'new_file',
    'new_folder',
    # Tree
    'NodeTree',
    'listing_key',
    # Host
    'HostHandle',
    'LocalHandle',
    'EntryKind',
    # Backing
    'BackingAdapter',
    'CreateResult',
    'DisplayReferences',
    'is_reference',
    'ContentLoader',
    # Navigation
    'PathResolver',
    'ParsedPath',
    'WorkingDirectory',
    # Ingestion
    'IngestionPipeline',
    'pick_initial_file',
    'read_entries',
    'default_project',
]
