from .composer import AIContextComposer
from .models import (
    ChangeType,
    ComposedContext,
    CursorPosition,
    EditorContext,
    FileContext,
    LineRange,
    ProjectContext,
    RequestType,
    Selection,
    StructureNode,
)
from .trackers import EditorTracker, FileTracker

__all__ = [
    'AIContextComposer', 'ChangeType', 'ComposedContext', 'CursorPosition', 'EditorContext',
    'EditorTracker', 'FileContext', 'FileTracker', 'LineRange', 'ProjectContext', 'RequestType',
    'Selection', 'StructureNode',
]
