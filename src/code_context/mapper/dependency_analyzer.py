import logging
import os
from typing import Any, Callable, Dict, List, Tuple

from ..exceptions import ContextManagerError
from ..fs.filesystem import FileSystem
from ..parser.manifest_parser import parse_go_mod, parse_package_json, parse_requirements

logger = logging.getLogger(__name__)

# (manifest file, ecosystem, parser), extracted in this order
MANIFEST_PARSERS: List[Tuple[str, str, Callable[[str], Dict[str, Any]]]] = [
    ("package.json", "npm", parse_package_json),
    ("requirements.txt", "pip", parse_requirements),
    ("go.mod", "go", parse_go_mod),
]


class DependencyAnalyzer:
    """Extracts declared dependencies from the manifests in a project root."""

    def __init__(self, filesystem: FileSystem):
        self.filesystem = filesystem

    async def extract_dependencies(self, project_path: str) -> Dict[str, Dict[str, Any]]:
        """Build a dependency map keyed by ecosystem.

        A manifest that cannot be read or parsed is skipped without affecting
        the other ecosystems.
        """
        dependencies = {}

        for file_name, ecosystem, parser in MANIFEST_PARSERS:
            manifest_path = os.path.join(project_path, file_name)
            try:
                if not await self.filesystem.exists(manifest_path):
                    continue
                content = await self.filesystem.read_file(manifest_path)
                dependencies[ecosystem] = parser(content)
            except (ContextManagerError, OSError, ValueError) as e:
                logger.warning("Skipping %s dependencies from %s: %s", ecosystem, manifest_path, e)

        return dependencies
