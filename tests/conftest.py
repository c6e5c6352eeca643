"""Pytest configuration and fixtures."""

import posixpath
from typing import Dict, Iterable, List, Optional, Set, Union

import pytest

from code_context.context.context_manager import ContextManager
from code_context.exceptions import DecodeError, FileAccessError
from code_context.fs.filesystem import DirEntry, FileSystem
from code_context.utils.config import Config

PROJECT_ROOT = "/project"


class InMemoryFileSystem(FileSystem):
    """FileSystem fake holding files in a dict keyed by absolute path.

    ``bytes`` values behave like binary files (DecodeError on read). Paths in
    ``unreadable`` fail on read and paths in ``unlistable`` fail on listing.
    """

    def __init__(self, files: Optional[Dict[str, Union[str, bytes]]] = None,
                 empty_dirs: Iterable[str] = (), root: str = PROJECT_ROOT):
        self.root = root
        self.files: Dict[str, Union[str, bytes]] = {}
        self.dirs: Set[str] = {root}
        self.unreadable: Set[str] = set()
        self.unlistable: Set[str] = set()
        self.read_calls: List[str] = []

        for relative, content in (files or {}).items():
            self.add_file(relative, content)
        for relative in empty_dirs:
            self._add_dir(self.path(relative))

    def path(self, relative: str) -> str:
        return posixpath.join(self.root, relative)

    def add_file(self, relative: str, content: Union[str, bytes]):
        full_path = self.path(relative)
        self.files[full_path] = content
        self._add_dir(posixpath.dirname(full_path))

    def remove_file(self, relative: str):
        del self.files[self.path(relative)]

    def _add_dir(self, path: str):
        while path and path not in self.dirs:
            self.dirs.add(path)
            path = posixpath.dirname(path)

    async def list_dir(self, path: str) -> List[DirEntry]:
        if path in self.unlistable or path not in self.dirs:
            raise FileAccessError(f"Cannot list directory {path}")

        names = {}
        for candidate in list(self.files) + list(self.dirs):
            if candidate != path and posixpath.dirname(candidate) == path:
                names[posixpath.basename(candidate)] = candidate in self.dirs

        return [
            DirEntry(name=name, url=posixpath.join(path, name), is_directory=is_dir)
            for name, is_dir in sorted(names.items())
        ]

    async def read_file(self, path: str) -> str:
        self.read_calls.append(path)
        if path in self.unreadable or path not in self.files:
            raise FileAccessError(f"Cannot read file {path}")
        content = self.files[path]
        if isinstance(content, bytes):
            raise DecodeError(f"File {path} is not valid utf-8 text")
        return content

    async def exists(self, path: str) -> bool:
        return path in self.files or path in self.dirs


@pytest.fixture
def make_fs():
    """Factory for in-memory filesystems rooted at /project."""
    return InMemoryFileSystem


@pytest.fixture
def config() -> Config:
    """Default configuration, independent of .env files."""
    return Config(_env_file=None)


@pytest.fixture
def make_manager(config):
    """Factory for ContextManager instances over a given filesystem."""
    def factory(filesystem: FileSystem, ai_ready: bool = True) -> ContextManager:
        return ContextManager(filesystem=filesystem, readiness=lambda: ai_ready, config=config)
    return factory
