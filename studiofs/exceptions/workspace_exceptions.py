"""
Workspace Exceptions

Base exception for the workspace and the errors raised while it is being
configured. Every other studiofs exception derives from WorkspaceError.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class WorkspaceError(Exception):
    """
    Base exception for all studiofs errors.

    Attributes:
        message: Human-readable error description
        path: Node id or host path associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
        context: Additional context about the error

    Example:
        >>> raise WorkspaceError("Workspace failure", error_code=1000)
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.error_code = error_code or 1000
        self.context = context or {}
        if path:
            self.context["path"] = path

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.path:
            base = f"{base} (path={self.path})"
        return base

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code})"
        )


class ConfigurationError(WorkspaceError):
    """
    Configuration could not be loaded or is invalid.

    Example:
        >>> raise ConfigurationError("Configuration file not found: cfg.json")
    """

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        super().__init__(message=message, error_code=1001, context=ctx)
        self.key = key
