"""Parsers turning dependency manifest text into plain dependency maps."""

import json
import re
from typing import Any, Dict

from ..exceptions import ManifestParseError


REQUIREMENT_OPERATOR = re.compile(r'[=~<>]+')


def parse_package_json(content: str) -> Dict[str, Dict[str, Any]]:
    """Surface ``dependencies`` and ``devDependencies`` from a package.json."""
    try:
        pkg = json.loads(content)
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"Invalid package.json: {e}") from e

    if not isinstance(pkg, dict):
        raise ManifestParseError("Invalid package.json: top level is not an object")

    return {
        "dependencies": pkg.get("dependencies") or {},
        "devDependencies": pkg.get("devDependencies") or {},
    }


def parse_requirements(content: str) -> Dict[str, str]:
    """
    Parse requirements.txt content.

    Blank lines and ``#`` comments are skipped. The name is separated from the
    version constraint at the first run of ``= ~ < >``; lines without a
    constraint map to ``latest``.
    """
    requirements = {}
    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith('#'):
            continue

        parts = REQUIREMENT_OPERATOR.split(trimmed, maxsplit=1)
        name = parts[0].strip()
        requirements[name] = parts[1].strip() if len(parts) > 1 else 'latest'

    return requirements


def parse_go_mod(content: str) -> Dict[str, str]:
    """
    Parse module requirements out of go.mod content.

    Only lines after a ``require`` line are collected, until a line that is
    exactly ``}``. A single-line ``require module version`` is not parsed.
    """
    dependencies = {}
    in_require_block = False

    for line in content.splitlines():
        trimmed = line.strip()

        if trimmed.startswith('require'):
            in_require_block = True
            continue

        if trimmed == '}' and in_require_block:
            in_require_block = False
            continue

        if in_require_block and trimmed and not trimmed.startswith('//'):
            parts = trimmed.split()
            if len(parts) >= 2:
                dependencies[parts[0]] = parts[1]

    return dependencies
