"""Composition of project, file and editor state into AI request contexts."""

import copy
import logging
import posixpath
import time
from typing import Callable, List, Optional, Union

from .models import (
    BugFixContext,
    CompletionContext,
    ComposedContext,
    DocumentationContext,
    EditorContext,
    ExplanationContext,
    FileContext,
    NodeKind,
    ProjectContext,
    RequestType,
    flatten_structure,
)
from .patterns import JavascriptStandardsDetector, PatternDetector, RegexPatternDetector, StandardsDetector

logger = logging.getLogger(__name__)


def _parent_dir(path: str) -> str:
    return posixpath.dirname(path.replace('\\', '/'))


def _base_name(file_name: str) -> str:
    """Text before the first dot; a leading dot belongs to the name."""
    if file_name.startswith('.'):
        return '.' + file_name[1:].split('.', 1)[0]
    return file_name.split('.', 1)[0]


class AIContextComposer:
    """Builds composed contexts and their request-specific views.

    The composer only reads the contexts it is given; every derived view is a
    fresh record.
    """

    def __init__(self, pattern_detector: Optional[PatternDetector] = None,
                 standards_detector: Optional[StandardsDetector] = None,
                 readiness: Optional[Callable[[], bool]] = None,
                 window_lines: int = 10, tail_lines: int = 50,
                 max_related_files: int = 5):
        self.pattern_detector = pattern_detector or RegexPatternDetector()
        self.standards_detector = standards_detector or JavascriptStandardsDetector()
        self.readiness = readiness
        self.window_lines = window_lines
        self.tail_lines = tail_lines
        self.max_related_files = max_related_files

    def compose(self, project: ProjectContext, file: FileContext, editor: EditorContext,
                include_history: bool = False,
                request_type: Optional[Union[RequestType, str]] = None) -> ComposedContext:
        """Merge the live contexts and tailor them to ``request_type``.

        Unrecognized request types return the base context unchanged.
        """
        context = ComposedContext(
            project=copy.copy(project),
            file=copy.copy(file),
            editor=editor.snapshot(include_history=include_history),
            timestamp=time.time(),
            ai_capabilities=self._ai_ready(),
        )

        if request_type is None:
            return context

        try:
            request = RequestType(request_type)
        except ValueError:
            logger.debug("Unknown request type %r, returning base context", request_type)
            return context

        if request == RequestType.CODE_COMPLETION:
            return self.code_completion_context(context)
        if request == RequestType.CODE_EXPLANATION:
            return self.code_explanation_context(context)
        if request == RequestType.BUG_FIX:
            return self.bug_fix_context(context)
        return self.documentation_context(context)

    def code_completion_context(self, context: ComposedContext) -> CompletionContext:
        return CompletionContext(
            **context.base_fields(),
            relevant_code=self.relevant_code(context.file),
            patterns=self.pattern_detector.detect(context.file.content),
        )

    def code_explanation_context(self, context: ComposedContext) -> ExplanationContext:
        return ExplanationContext(
            **context.base_fields(),
            code_to_explain=self.code_for_explanation(context.file),
            related_files=self.related_files(context),
        )

    def bug_fix_context(self, context: ComposedContext) -> BugFixContext:
        return BugFixContext(
            **context.base_fields(),
            code_to_fix=self.relevant_code(context.file),
            related_dependencies=self.related_dependencies(context),
        )

    def documentation_context(self, context: ComposedContext) -> DocumentationContext:
        return DocumentationContext(
            **context.base_fields(),
            code_to_document=self.relevant_code(context.file),
            project_standards=self.standards_detector.detect(context.project),
        )

    def relevant_code(self, file: FileContext) -> str:
        """Lines around the cursor row, or the tail of the file without a cursor."""
        if not file.content:
            return ''

        lines = file.content.split('\n')

        if file.cursor_position is None:
            return '\n'.join(lines[max(0, len(lines) - self.tail_lines):])

        row = max(0, file.cursor_position.row or 0)
        start = max(0, row - self.window_lines)
        end = min(len(lines), row + self.window_lines)
        return '\n'.join(lines[start:end])

    def code_for_explanation(self, file: FileContext) -> str:
        if file.selection is not None:
            selected = file.selection.extract(file.content)
            if selected:
                return selected
        return self.relevant_code(file)

    def related_files(self, context: ComposedContext) -> List[str]:
        """Files beside the current one that share its base name."""
        current_path = context.file.path
        if not current_path:
            return []

        current_dir = _parent_dir(current_path)
        file_name = posixpath.basename(current_path.replace('\\', '/'))
        base_name = _base_name(file_name)

        related = []
        for node in flatten_structure(context.project.structure):
            if len(related) >= self.max_related_files:
                break
            if node.kind != NodeKind.FILE or node.path == current_path:
                continue
            if _parent_dir(node.path) == current_dir and _base_name(node.name) == base_name:
                related.append(node.path)

        return related

    def related_dependencies(self, context: ComposedContext) -> List[str]:
        """npm dependencies whose names appear literally in the file content."""
        content = context.file.content
        npm = context.project.dependencies.get('npm')
        if not content or not npm:
            return []

        return [dep for dep in npm.get('dependencies', {}) if dep in content]

    def _ai_ready(self) -> bool:
        if self.readiness is None:
            return False
        try:
            return bool(self.readiness())
        except Exception as e:
            logger.warning("AI readiness check failed: %s", e)
            return False
