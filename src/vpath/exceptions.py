"""
vpath Exception Hierarchy

This module defines the errors raised while building and navigating
VirtualPath objects. Every error carries a stable error code and a context
dictionary so callers can handle failures programmatically.

The hierarchy is:
- VpathError
    - PathAccessError
        - PathNotFoundError
    - InvalidOperationError
    - ExternalCommandError
"""

import time
from typing import Any, Dict, Optional


class VpathError(Exception):
    """
    Base exception class for all vpath errors.

    Attributes:
        error_code: Unique error code for programmatic handling
        timestamp: When the error occurred
        context: Additional context information
        suggestion: Suggested fix or next steps (if applicable)
    """

    def __init__(
        self,
        message: str,
        error_code: str = "VPATH_ERROR",
        context: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ):
        super().__init__(message)
        self.error_code = error_code
        self.timestamp = time.time()
        self.context = context or {}
        self.message = message
        self.suggestion = suggestion

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "timestamp": self.timestamp,
            "context": self.context,
            "suggestion": self.suggestion,
        }

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# =============================================================================
# FILESYSTEM ACCESS ERRORS
# =============================================================================

class PathAccessError(VpathError):
    """
    Raised when a metadata lookup or directory listing fails.

    Examples:
    - Permission denied on stat or listdir
    - Broken symbolic link
    - Any other OSError reported by the host
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        errno: Optional[int] = None,
        **kwargs
    ):
        self.path = path
        self.errno = errno

        context = kwargs.pop("context", None) or {}
        if path is not None:
            context["path"] = path
        if errno is not None:
            context["errno"] = errno

        error_code = kwargs.pop("error_code", "PATH_ACCESS_ERROR")
        super().__init__(
            message,
            error_code=error_code,
            context=context,
            **kwargs
        )


class PathNotFoundError(PathAccessError):
    """
    Raised when the path does not exist.

    This also covers the race where an entry is listed by its parent
    directory but vanishes before its own lookup.
    """

    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            path=path,
            error_code="PATH_NOT_FOUND",
            suggestion="Check that the path exists and is spelled correctly.",
            **kwargs
        )


# =============================================================================
# OPERATION ERRORS
# =============================================================================

class InvalidOperationError(VpathError):
    """
    Raised when an operation is not supported by the entry type.

    Example: listing the children of a regular file.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        operation: Optional[str] = None,
        **kwargs
    ):
        self.path = path
        self.operation = operation

        context = kwargs.pop("context", None) or {}
        if path is not None:
            context["path"] = path
        if operation:
            context["operation"] = operation

        super().__init__(
            message,
            error_code="INVALID_OPERATION",
            context=context,
            **kwargs
        )


class ExternalCommandError(VpathError):
    """
    Raised when the drive enumeration command cannot be used.

    Examples:
    - The command could not be started
    - The command exited with a non-zero status or timed out
    - The output could not be decoded
    """

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        return_code: Optional[int] = None,
        stderr: Optional[str] = None,
        **kwargs
    ):
        self.command = command
        self.return_code = return_code
        self.stderr = stderr

        context = kwargs.pop("context", None) or {}
        if command:
            context["command"] = command
        if return_code is not None:
            context["return_code"] = return_code
        if stderr:
            context["stderr"] = stderr[:200] + "..." if len(stderr) > 200 else stderr

        super().__init__(
            message,
            error_code="EXTERNAL_COMMAND_ERROR",
            context=context,
            **kwargs
        )
