import logging
import os
from typing import Dict, Iterable, List, Optional

from ..cache.cache_manager import ContextCache
from ..context.models import NodeKind, ProjectContext, StructureNode
from ..exceptions import ContextManagerError, ProjectAnalysisError
from ..fs.filesystem import DirEntry, FileSystem
from ..parser.language_detector import UNKNOWN_LANGUAGE, detect_language, detect_project_language
from ..utils.config import DEFAULT_EXCLUDED_DIRS
from .dependency_analyzer import DependencyAnalyzer

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = [
    'package.json', 'requirements.txt', 'go.mod', 'Cargo.toml',
    'pom.xml', 'build.gradle', 'pubspec.yaml', '.gitignore',
    'Dockerfile', 'docker-compose.yml', 'README.md', 'LICENSE'
]


class ProjectAnalyzer:
    """Builds a ProjectContext snapshot for a project directory."""

    def __init__(self, filesystem: FileSystem, cache: Optional[ContextCache] = None,
                 max_depth: int = 5, excluded_dirs: Optional[Iterable[str]] = None):
        self.filesystem = filesystem
        self.cache = cache
        self.max_depth = max_depth
        self.excluded_dirs = set(excluded_dirs if excluded_dirs is not None else DEFAULT_EXCLUDED_DIRS)
        self.dependency_analyzer = DependencyAnalyzer(filesystem)

    async def analyze_project(self, project_path: str) -> ProjectContext:
        """Analyze the project at ``project_path`` and cache the result.

        Raises ProjectAnalysisError if the root itself is inaccessible. Failures
        below the root only drop the affected subtree, manifest or config file.
        """
        try:
            root_exists = await self.filesystem.exists(project_path)
        except OSError as e:
            raise ProjectAnalysisError(f"Cannot access project {project_path}: {e}") from e
        if not root_exists:
            raise ProjectAnalysisError(f"Project path does not exist: {project_path}")

        try:
            root_items = await self.filesystem.list_dir(project_path)
        except (ContextManagerError, OSError) as e:
            raise ProjectAnalysisError(f"Cannot list project root {project_path}: {e}") from e

        structure = await self._build_structure(root_items, depth=0)
        language = detect_project_language(item.name for item in root_items)
        dependencies = await self.dependency_analyzer.extract_dependencies(project_path)
        config_files = await self.get_config_files(project_path)

        project_context = ProjectContext(
            structure=structure,
            dependencies=dependencies,
            config_files=config_files,
            language=language,
        )

        if self.cache is not None:
            self.cache.set('project', project_path, project_context)

        logger.info("Project analysis completed for %s (%s)", project_path, language)
        return project_context

    async def get_project_structure(self, path: str, depth: int = 0) -> List[StructureNode]:
        """List ``path`` recursively, stopping past ``max_depth``."""
        if depth > self.max_depth:
            return []

        try:
            items = await self.filesystem.list_dir(path)
        except (ContextManagerError, OSError) as e:
            logger.warning("Error getting project structure for %s: %s", path, e)
            return []

        return await self._build_structure(items, depth)

    async def _build_structure(self, items: List[DirEntry], depth: int) -> List[StructureNode]:
        structure = []
        for item in items:
            if item.is_directory:
                if self._should_skip_directory(item.url):
                    continue
                structure.append(StructureNode(
                    name=item.name,
                    path=item.url,
                    kind=NodeKind.DIRECTORY,
                    children=await self.get_project_structure(item.url, depth + 1),
                ))
            else:
                structure.append(StructureNode(
                    name=item.name,
                    path=item.url,
                    kind=NodeKind.FILE,
                    language=detect_language(item.name),
                ))

        return structure

    async def detect_project_language(self, project_path: str) -> str:
        """Detect the primary language from the root directory listing."""
        try:
            items = await self.filesystem.list_dir(project_path)
        except (ContextManagerError, OSError) as e:
            logger.warning("Error detecting project language for %s: %s", project_path, e)
            return UNKNOWN_LANGUAGE

        return detect_project_language(item.name for item in items)

    async def get_config_files(self, project_path: str) -> Dict[str, str]:
        """Read the well-known config files present in the project root."""
        config_files = {}

        for file_name in CONFIG_FILE_NAMES:
            file_path = os.path.join(project_path, file_name)
            try:
                if await self.filesystem.exists(file_path):
                    config_files[file_name] = await self.filesystem.read_file(file_path)
            except (ContextManagerError, OSError) as e:
                # Some files might be binary or unreadable, skip them
                logger.warning("Could not read config file %s: %s", file_name, e)

        return config_files

    def _should_skip_directory(self, path: str) -> bool:
        dir_name = os.path.basename(path.rstrip('/\\'))
        return dir_name in self.excluded_dirs
