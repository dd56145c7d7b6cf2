"""
studiofs Exception Hierarchy

All custom exceptions inherit from WorkspaceError, with a sub-category
for the namespace itself.

Architecture:
    WorkspaceError (Base)
    ├── ConfigurationError
    └── FileSystemException
        ├── NodeNotFoundError
        ├── NodeExistsError
        ├── NotAFolderError
        ├── HostIOError
        ├── TooLargeError
        ├── UnsupportedError
        └── DirectoryLostError
"""

from .workspace_exceptions import (
    WorkspaceError,
    ConfigurationError,
)

from .fs_exceptions import (
    FileSystemException,
    NodeNotFoundError,
    NodeExistsError,
    NotAFolderError,
    HostIOError,
    TooLargeError,
    UnsupportedError,
    DirectoryLostError,
)

__all__ = [
    # Workspace exceptions
    "WorkspaceError",
    "ConfigurationError",
    # Filesystem exceptions
    "FileSystemException",
    "NodeNotFoundError",
    "NodeExistsError",
    "NotAFolderError",
    "HostIOError",
    "TooLargeError",
    "UnsupportedError",
    "DirectoryLostError",
]
