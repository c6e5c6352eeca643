"""Filesystem access used by the project analyzer and file change handling."""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

import aiofiles
import aiofiles.os

from ..exceptions import DecodeError, FileAccessError


@dataclass(frozen=True)
class DirEntry:
    """A single directory listing entry."""
    name: str
    url: str
    is_directory: bool


class FileSystem(ABC):
    """Async filesystem operations the context manager depends on."""

    @abstractmethod
    async def list_dir(self, path: str) -> List[DirEntry]:
        """List a directory. Raises FileAccessError if it cannot be read."""

    @abstractmethod
    async def read_file(self, path: str) -> str:
        """Read a text file. Raises FileAccessError or DecodeError."""

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Return True if the path exists."""


class LocalFileSystem(FileSystem):
    """FileSystem backed by the local disk.

    Uses aiofiles for all file I/O operations. Listings are sorted by name so
    project structures come out in a stable order.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    async def list_dir(self, path: str) -> List[DirEntry]:
        try:
            names = await aiofiles.os.listdir(path)
        except OSError as e:
            raise FileAccessError(f"Cannot list directory {path}: {e}") from e

        entries = []
        for name in sorted(names):
            url = os.path.join(path, name)
            entries.append(DirEntry(
                name=name,
                url=url,
                is_directory=await aiofiles.os.path.isdir(url),
            ))
        return entries

    async def read_file(self, path: str) -> str:
        try:
            async with aiofiles.open(path, 'rb') as f:
                raw = await f.read()
        except OSError as e:
            raise FileAccessError(f"Cannot read file {path}: {e}") from e

        try:
            return raw.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise DecodeError(f"File {path} is not valid {self.encoding} text") from e

    async def exists(self, path: str) -> bool:
        return await aiofiles.os.path.exists(path)
