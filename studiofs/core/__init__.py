"""
studiofs Core Module

Core components including:
- Configuration Loader
- Editor Session

The workspace facade lives in studiofs.core.workspace.
"""

from .config_loader import (
    ConfigLoader,
    Config,
    ContentConfig,
    ShellConfig,
    LoggingConfig,
    WorkspaceConfig,
    get_config,
)
from .session import Session, Tab

__all__ = [
    # Config
    'ConfigLoader',
    'Config',
    'ContentConfig',
    'ShellConfig',
    'LoggingConfig',
    'WorkspaceConfig',
    'get_config',
    # Session
    'Session',
    'Tab',
]
