"""Exceptions raised by the context manager."""


class ContextManagerError(Exception):
    """Base exception for context manager operations."""

    pass


class FileAccessError(ContextManagerError, OSError):
    """Raised when a directory cannot be listed or a file cannot be read."""

    pass


class DecodeError(ContextManagerError, ValueError):
    """Raised when file content is not valid UTF-8 text."""

    pass


class ManifestParseError(ContextManagerError, ValueError):
    """Raised when a manifest file has malformed syntax."""

    pass


class ProjectAnalysisError(ContextManagerError):
    """Raised when a project root cannot be analyzed at all."""

    pass
