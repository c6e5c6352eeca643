"""Shallow, regex-based detectors used when composing AI contexts.

Both detectors sit behind small protocols so a parser-backed implementation
can replace them without changing the composer.
"""

import json
import logging
import re
from typing import Protocol

from .models import CodePatterns, NodeKind, ProjectContext, ProjectStandards

logger = logging.getLogger(__name__)


class PatternDetector(Protocol):
    def detect(self, content: str) -> CodePatterns:
        ...


class StandardsDetector(Protocol):
    def detect(self, project: ProjectContext) -> ProjectStandards:
        ...


class RegexPatternDetector:
    """Extracts import statements and function/class declaration headers."""

    import_pattern = re.compile(r'\b(?:import|from|require|include|using)\s+[^\n;]+')
    declaration_pattern = re.compile(r'\b(?:function|class|def|fn|method)\s+\w+')

    def detect(self, content: str) -> CodePatterns:
        if not content:
            return CodePatterns()

        return CodePatterns(
            imports=[match.group(0) for match in self.import_pattern.finditer(content)],
            declarations=[match.group(0) for match in self.declaration_pattern.finditer(content)],
        )


class JavascriptStandardsDetector:
    """Detects eslint and jest usage from a javascript project's config files."""

    def detect(self, project: ProjectContext) -> ProjectStandards:
        standards = ProjectStandards()

        if project.language != 'javascript':
            return standards

        package_json = project.config_files.get('package.json')
        if not package_json:
            return standards

        try:
            pkg = json.loads(package_json)
        except json.JSONDecodeError as e:
            logger.warning("Could not parse package.json for project standards: %s", e)
            return standards
        if not isinstance(pkg, dict):
            return standards

        # Tool config files are not slurped, so look for them in the root listing
        root_files = set(project.config_files)
        root_files.update(node.name for node in project.structure if node.kind == NodeKind.FILE)

        if pkg.get('eslintConfig') or '.eslintrc.js' in root_files:
            standards.style_guide = 'eslint'
        if pkg.get('jest') or 'jest.config.js' in root_files:
            standards.testing_framework = 'jest'

        return standards
