import logging
import time
from collections import deque
from typing import Any, List, Optional

from ..cache.cache_manager import ContextCache
from ..parser.language_detector import detect_language
from .models import CursorPosition, EditorContext, EditorSnapshot, FileContext, LineRange, Selection

logger = logging.getLogger(__name__)


class FileTracker:
    """Holds the currently open file, replacing it wholesale on every update."""

    def __init__(self, cache: Optional[ContextCache] = None):
        self.cache = cache
        self.context = FileContext()

    def update(self, path: str, content: str, language: Optional[str] = None,
               cursor_position: Optional[CursorPosition] = None,
               selection: Optional[Selection] = None) -> FileContext:
        """Replace the file context and mirror it into the cache as ``file:<path>``."""
        file_context = FileContext(
            path=path,
            content=content,
            language=language or detect_language(path),
            cursor_position=cursor_position,
            selection=selection,
        )
        self.context = file_context

        if self.cache is not None:
            self.cache.set('file', path, file_context)

        logger.debug("Updated context for file: %s", path)
        return file_context

    def clear(self):
        self.context = FileContext()


class EditorTracker:
    """Tracks viewport state and a bounded FIFO history of editor snapshots."""

    def __init__(self, history_limit: int = 50):
        self.context = EditorContext(history=deque(maxlen=history_limit))

    @property
    def history_limit(self) -> int:
        return self.context.history.maxlen

    def update(self, active_lines: Optional[List[int]] = None,
               visible_range: Optional[LineRange] = None, **extra: Any) -> EditorSnapshot:
        """Record a snapshot; fields that are not supplied keep their previous value."""
        snapshot = EditorSnapshot(
            timestamp=time.time(),
            active_lines=list(active_lines) if active_lines is not None else None,
            visible_range=visible_range,
            extra=extra,
        )
        # The deque drops the oldest snapshot once history_limit is reached
        self.context.history.append(snapshot)

        if active_lines is not None:
            self.context.active_lines = list(active_lines)
        if visible_range is not None:
            self.context.visible_range = visible_range

        return snapshot
