"""
Filesystem Exceptions

Exceptions raised by the node tree, the backing adapter, the content
loader and the working-directory stack.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any

from .workspace_exceptions import WorkspaceError


class FileSystemException(WorkspaceError):
    """
    Base exception for all namespace-related errors.

    Attributes:
        message: Human-readable error description
        path: Node id or name associated with the error
        error_code: Numeric error code (4000 range)
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            path=path,
            error_code=error_code or 4000,
            context=context
        )


class NodeNotFoundError(FileSystemException):
    """
    No node matches the requested id or child name.

    Example:
        >>> raise NodeNotFoundError("root_src")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"No such file or directory: {path}",
            path=path,
            error_code=4001,
            context=context
        )


class NodeExistsError(FileSystemException):
    """
    A node with the same id already exists.

    Raised both for a repeated name in one folder and for two different
    paths that collapse onto the same derived id.

    Example:
        >>> raise NodeExistsError("root_src")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"File exists: {path}",
            path=path,
            error_code=4002,
            context=context
        )


class NotAFolderError(FileSystemException):
    """
    A folder operation was attempted on a file node.

    Example:
        >>> raise NotAFolderError("root_index.html")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Not a folder: {path}",
            path=path,
            error_code=4003,
            context=context
        )


class HostIOError(FileSystemException):
    """
    The host filesystem capability denied or failed an operation.

    These never reach the user as crashes: callers either fall back to a
    virtual code path or report a one-line message.

    Example:
        >>> raise HostIOError("notes.txt", operation="write", reason="denied")
    """

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        reason: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        if reason:
            ctx["reason"] = reason
        super().__init__(
            message=f"Host {operation or 'operation'} failed for {path}: {reason or 'unknown error'}",
            path=path,
            error_code=4010,
            context=ctx
        )
        self.operation = operation
        self.reason = reason


class TooLargeError(FileSystemException):
    """
    File content exceeds the display size guard.

    Example:
        >>> raise TooLargeError("big.log", size=6_000_000, limit=5_242_880)
    """

    def __init__(
        self,
        path: str,
        size: Optional[int] = None,
        limit: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if size is not None:
            ctx["size"] = size
        if limit is not None:
            ctx["limit"] = limit
        super().__init__(
            message=f"File too large: {path}",
            path=path,
            error_code=4011,
            context=ctx
        )
        self.size = size
        self.limit = limit


class UnsupportedError(FileSystemException):
    """
    The operation is not supported for this node or command.

    Example:
        >>> raise UnsupportedError("cannot save binary content", path="logo.png")
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            path=path,
            error_code=4012,
            context=context
        )


class DirectoryLostError(FileSystemException):
    """
    The working-directory stack references a node that no longer exists.
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message="Current directory lost.",
            path=path,
            error_code=4013,
            context=context
        )
