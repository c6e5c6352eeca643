"""Record types for project, file, editor and composed AI contexts."""

import dataclasses
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Deque, Dict, Iterator, List, Optional

from ..parser.language_detector import UNKNOWN_LANGUAGE


def _to_plain(value: Any) -> Any:
    """Convert records, enums and containers into JSON-friendly data."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: _to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, deque)):
        return [_to_plain(item) for item in value]
    return value


class Record:
    """Mixin adding ``to_dict`` to dataclass records."""

    def to_dict(self) -> Dict[str, Any]:
        return _to_plain(self)


class NodeKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"


class RequestType(Enum):
    CODE_COMPLETION = "code-completion"
    CODE_EXPLANATION = "code-explanation"
    BUG_FIX = "bug-fix"
    DOCUMENTATION = "documentation"


class ChangeType(Enum):
    CREATE = "create"
    MODIFY = "modify"
    DELETE = "delete"


@dataclass
class StructureNode(Record):
    name: str
    path: str
    kind: NodeKind
    language: Optional[str] = None
    children: Optional[List['StructureNode']] = None

    @property
    def is_directory(self) -> bool:
        return self.kind == NodeKind.DIRECTORY


def flatten_structure(structure: List[StructureNode]) -> Iterator[StructureNode]:
    """Walk a structure tree depth-first, parents before their children."""
    for node in structure:
        yield node
        if node.children:
            yield from flatten_structure(node.children)


@dataclass
class ProjectContext(Record):
    """Snapshot of an analyzed project."""
    structure: List[StructureNode] = field(default_factory=list)
    dependencies: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    config_files: Dict[str, str] = field(default_factory=dict)
    language: str = UNKNOWN_LANGUAGE


@dataclass(frozen=True)
class CursorPosition(Record):
    row: int
    column: int = 0


@dataclass(frozen=True)
class LineRange(Record):
    start: int
    end: int


@dataclass(frozen=True)
class Selection(Record):
    """A selected range, optionally carrying the selected text."""
    start: CursorPosition
    end: CursorPosition
    text: Optional[str] = None

    def extract(self, content: str) -> str:
        """Return the selected text, slicing ``content`` when no text was given."""
        if self.text is not None:
            return self.text

        start, end = sorted(
            [self.start, self.end], key=lambda pos: (pos.row, pos.column)
        )
        lines = content.split('\n')
        if start.row >= len(lines):
            return ''
        if end.row >= len(lines):
            end = CursorPosition(len(lines) - 1, len(lines[-1]))

        if start.row == end.row:
            return lines[start.row][start.column:end.column]

        selected = [lines[start.row][start.column:]]
        selected.extend(lines[start.row + 1:end.row])
        selected.append(lines[end.row][:end.column])
        return '\n'.join(selected)


@dataclass
class FileContext(Record):
    """The currently open file."""
    path: Optional[str] = None
    content: str = ''
    language: Optional[str] = None
    cursor_position: Optional[CursorPosition] = None
    selection: Optional[Selection] = None


@dataclass
class EditorSnapshot(Record):
    timestamp: float
    active_lines: Optional[List[int]] = None
    visible_range: Optional[LineRange] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class EditorContext(Record):
    """Editor viewport state and a sliding window of recent snapshots."""
    active_lines: List[int] = field(default_factory=list)
    visible_range: Optional[LineRange] = None
    history: Deque[EditorSnapshot] = field(default_factory=lambda: deque(maxlen=50))

    def snapshot(self, include_history: bool = False) -> 'EditorContext':
        """Copy of the current state; the history is carried only on request."""
        history = self.history if include_history else ()
        return EditorContext(
            active_lines=list(self.active_lines),
            visible_range=self.visible_range,
            history=deque(history, maxlen=self.history.maxlen),
        )


@dataclass
class CodePatterns(Record):
    imports: List[str] = field(default_factory=list)
    declarations: List[str] = field(default_factory=list)


@dataclass
class ProjectStandards(Record):
    naming_convention: str = 'unknown'
    style_guide: str = 'unknown'
    testing_framework: str = 'unknown'


@dataclass
class ComposedContext(Record):
    """Project, file and editor state merged for an AI request."""
    project: ProjectContext
    file: FileContext
    editor: EditorContext
    timestamp: float
    ai_capabilities: bool

    def base_fields(self) -> Dict[str, Any]:
        """Shallow field mapping used to derive request-specific contexts."""
        return {
            f.name: getattr(self, f.name)
            for f in dataclasses.fields(ComposedContext)
        }


@dataclass
class CompletionContext(ComposedContext):
    relevant_code: str = ''
    patterns: CodePatterns = field(default_factory=CodePatterns)
    focus: str = RequestType.CODE_COMPLETION.value


@dataclass
class ExplanationContext(ComposedContext):
    code_to_explain: str = ''
    related_files: List[str] = field(default_factory=list)
    focus: str = RequestType.CODE_EXPLANATION.value


@dataclass
class BugFixContext(ComposedContext):
    code_to_fix: str = ''
    related_dependencies: List[str] = field(default_factory=list)
    focus: str = RequestType.BUG_FIX.value


@dataclass
class DocumentationContext(ComposedContext):
    code_to_document: str = ''
    project_standards: ProjectStandards = field(default_factory=ProjectStandards)
    focus: str = RequestType.DOCUMENTATION.value
