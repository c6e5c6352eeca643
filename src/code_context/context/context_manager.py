import logging
from typing import Any, Callable, Dict, List, Optional, Union

from ..ai.readiness import GeminiReadinessProbe
from ..cache.cache_manager import ContextCache
from ..exceptions import ContextManagerError
from ..fs.filesystem import FileSystem, LocalFileSystem
from ..mapper.project_analyzer import ProjectAnalyzer
from ..utils.config import Config, load_config
from .composer import AIContextComposer
from .models import (
    ChangeType,
    ComposedContext,
    CursorPosition,
    EditorContext,
    EditorSnapshot,
    FileContext,
    LineRange,
    ProjectContext,
    RequestType,
    Selection,
)
from .trackers import EditorTracker, FileTracker

logger = logging.getLogger(__name__)


class ContextManager:
    """Keeps project, file and editor context current for AI-assist features.

    Create one instance at application start and hand it to whatever invokes
    the AI and to the file-change notification source.
    """

    def __init__(self, filesystem: Optional[FileSystem] = None,
                 readiness: Optional[Callable[[], bool]] = None,
                 config: Optional[Config] = None,
                 cache: Optional[ContextCache] = None):
        self.config = config or load_config()
        settings = self.config.context

        self.filesystem = filesystem or LocalFileSystem()
        self.cache = cache if cache is not None else ContextCache(max_size=settings.max_cache_size, max_age=settings.cache_max_age)
        self.readiness = readiness or GeminiReadinessProbe(self.config.ai)

        self.project_analyzer = ProjectAnalyzer(
            self.filesystem,
            cache=self.cache,
            max_depth=settings.max_depth,
            excluded_dirs=settings.excluded_dirs,
        )
        self.file_tracker = FileTracker(cache=self.cache)
        self.editor_tracker = EditorTracker(history_limit=settings.history_limit)
        self.composer = AIContextComposer(
            readiness=self.readiness,
            window_lines=settings.completion_window_lines,
            tail_lines=settings.fallback_tail_lines,
            max_related_files=settings.max_related_files,
        )

        self.project_path: Optional[str] = None
        self.project_context = ProjectContext()

    @property
    def file_context(self) -> FileContext:
        return self.file_tracker.context

    @property
    def editor_context(self) -> EditorContext:
        return self.editor_tracker.context

    async def initialize(self, project_path: str) -> bool:
        """Analyze ``project_path``; failures propagate to the caller."""
        logger.info("Initializing context for project: %s", project_path)
        try:
            await self.analyze_project(project_path)
        except Exception:
            logger.exception("Error initializing context manager for %s", project_path)
            raise

        # Change notifications are pushed in through handle_file_change
        logger.info("Context manager initialized for %s", project_path)
        return True

    async def analyze_project(self, project_path: str) -> ProjectContext:
        """Rebuild the project snapshot; the previous one stays visible until done."""
        project_context = await self.project_analyzer.analyze_project(project_path)
        self.project_path = project_path
        self.project_context = project_context
        return project_context

    async def update_file_context(self, path: str, content: str, language: Optional[str] = None,
                                  cursor_position: Optional[CursorPosition] = None,
                                  selection: Optional[Selection] = None) -> FileContext:
        return self.file_tracker.update(
            path,
            content,
            language=language,
            cursor_position=cursor_position,
            selection=selection,
        )

    def update_editor_context(self, active_lines: Optional[List[int]] = None,
                              visible_range: Optional[LineRange] = None, **extra: Any) -> EditorSnapshot:
        return self.editor_tracker.update(active_lines=active_lines, visible_range=visible_range, **extra)

    def get_ai_context(self, include_history: bool = False,
                       request_type: Optional[Union[RequestType, str]] = None) -> ComposedContext:
        """Compose the current contexts, tailored to ``request_type`` if given."""
        return self.composer.compose(
            self.project_context,
            self.file_context,
            self.editor_context,
            include_history=include_history,
            request_type=request_type,
        )

    async def handle_file_change(self, path: str, change_type: Union[ChangeType, str]):
        """React to a change notification from a file watcher."""
        try:
            change = ChangeType(change_type)
        except ValueError:
            logger.debug("Ignoring unknown change type %r for %s", change_type, path)
            return

        if change in (ChangeType.CREATE, ChangeType.MODIFY):
            # Only the currently open file is kept in sync
            if path != self.file_context.path:
                return
            try:
                content = await self.filesystem.read_file(path)
                await self.update_file_context(path, content)
            except (ContextManagerError, OSError) as e:
                logger.error("Error updating context for modified file %s: %s", path, e)

        elif change == ChangeType.DELETE:
            self.cache.delete('file', path)
            if path == self.file_context.path:
                self.file_tracker.clear()

    def get_cached_context(self, cache_type: str, key: str, max_age: Optional[float] = None) -> Optional[Any]:
        return self.cache.get(cache_type, key, max_age=max_age)

    def clear_cache(self):
        self.cache.clear()

    def get_context_summary(self) -> Dict[str, Any]:
        """Get summary of current context."""
        return {
            "project": {
                "path": self.project_path,
                "language": self.project_context.language,
                "has_dependencies": bool(self.project_context.dependencies),
                "config_file_count": len(self.project_context.config_files),
            },
            "file": {
                "path": self.file_context.path,
                "language": self.file_context.language,
                "has_content": bool(self.file_context.content),
            },
            "editor": {
                "history_count": len(self.editor_context.history),
            },
            "cache_size": len(self.cache),
        }
