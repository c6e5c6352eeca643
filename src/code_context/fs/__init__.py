from .filesystem import DirEntry, FileSystem, LocalFileSystem

__all__ = ['DirEntry', 'FileSystem', 'LocalFileSystem']
