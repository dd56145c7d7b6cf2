"""
studiofs - Workspace File Tree and Terminal

An in-memory file/folder namespace that is either purely virtual or
backed by a host directory, with a shell-like terminal that navigates
and changes it.
"""

__version__ = "1.0.0"
__author__ = "YSNRFD"

# Import main components for convenience
from .core.workspace import Workspace, SaveResult, SaveStatus
from .shell.shell import Shell, create_shell

__all__ = [
    'Workspace',
    'SaveResult',
    'SaveStatus',
    'Shell',
    'create_shell',
]
