"""Filename-based language heuristics."""

from typing import Dict, Iterable, List, Tuple


UNKNOWN_LANGUAGE = "unknown"
DEFAULT_FILE_LANGUAGE = "text"

LANGUAGE_MAP: Dict[str, str] = {
    'js': 'javascript',
    'jsx': 'javascript',
    'ts': 'typescript',
    'tsx': 'typescript',
    'py': 'python',
    'go': 'go',
    'rs': 'rust',
    'java': 'java',
    'kt': 'kotlin',
    'kts': 'kotlin',
    'dart': 'dart',
    'swift': 'swift',
    'c': 'c',
    'cpp': 'cpp',
    'h': 'cpp',
    'hpp': 'cpp',
    'php': 'php',
    'rb': 'ruby',
    'html': 'html',
    'css': 'css',
    'vue': 'vue',
    'svelte': 'svelte',
}

# Checked in order; the first manifest present decides the project language
MANIFEST_LANGUAGES: List[Tuple[Tuple[str, ...], str]] = [
    (('package.json',), 'javascript'),
    (('requirements.txt', 'pyproject.toml'), 'python'),
    (('go.mod',), 'go'),
    (('cargo.toml',), 'rust'),
    (('pom.xml', 'build.gradle'), 'java'),
    (('pubspec.yaml',), 'dart'),
    (('build.gradle.kts',), 'kotlin'),
]

# Fallback when no manifest is present, also checked in order
EXTENSION_LANGUAGES: List[Tuple[Tuple[str, ...], str]] = [
    (('js', 'ts'), 'javascript'),
    (('py',), 'python'),
    (('go',), 'go'),
    (('rs',), 'rust'),
    (('java',), 'java'),
    (('kt', 'kts'), 'kotlin'),
    (('dart',), 'dart'),
    (('swift',), 'swift'),
    (('cpp', 'c', 'h'), 'c++'),
]


def get_file_extension(file_name: str) -> str:
    """Return the text after the last dot, or an empty string."""
    parts = file_name.split('.')
    return parts[-1] if len(parts) > 1 else ''


def detect_language(file_name: str) -> str:
    """Map a file name or path to a language tag, ``text`` when unknown."""
    ext = get_file_extension(file_name).lower()
    return LANGUAGE_MAP.get(ext, DEFAULT_FILE_LANGUAGE)


def detect_project_language(file_names: Iterable[str]) -> str:
    """
    Guess a project's primary language from the names in its root directory.

    Manifest files win over extensions. Returns ``unknown`` if nothing matches.
    """
    names = [name.lower() for name in file_names]
    present = set(names)

    for manifests, language in MANIFEST_LANGUAGES:
        if any(manifest in present for manifest in manifests):
            return language

    extensions = {get_file_extension(name) for name in names}
    for candidates, language in EXTENSION_LANGUAGES:
        if any(ext in extensions for ext in candidates):
            return language

    return UNKNOWN_LANGUAGE
