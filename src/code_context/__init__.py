"""Project, file and editor context for AI-assist features."""

from .cache import ContextCache
from .context import (
    AIContextComposer,
    ChangeType,
    ComposedContext,
    CursorPosition,
    FileContext,
    LineRange,
    ProjectContext,
    RequestType,
    Selection,
)
from .context.context_manager import ContextManager
from .fs import DirEntry, FileSystem, LocalFileSystem

__version__ = "0.1.0"

__all__ = [
    "AIContextComposer", "ChangeType", "ComposedContext", "ContextCache", "ContextManager",
    "CursorPosition", "DirEntry", "FileContext", "FileSystem", "LineRange", "LocalFileSystem",
    "ProjectContext", "RequestType", "Selection",
]
