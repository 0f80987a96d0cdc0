"""Document loaders used by the include/import resolver.

A loader maps paths to raw bytes. The resolver never touches the file system
itself, so documents can come from disk or from an in-memory fixture.
"""

from __future__ import annotations
import os
import posixpath
from pathlib import Path
from typing import Mapping, Optional, Protocol, Union


class Loader(Protocol):
    def canonical(self, path: str, directory: Optional[str] = None) -> str: ...
    def dirname(self, path: str) -> str: ...
    def exists(self, path: str) -> bool: ...
    def load(self, path: str) -> bytes: ...


class FileSystemLoader:
    """Reads documents from disk; canonical paths are absolute and resolved."""

    def __init__(self, root: Union[str, Path, None] = None):
        self.root = Path(root) if root is not None else Path.cwd()

    def canonical(self, path: str, directory: Optional[str] = None) -> str:
        # relative directories (search roots) are taken from the loader root
        base = self.root / directory if directory is not None else self.root
        return str((base / path).resolve())

    def dirname(self, path: str) -> str:
        return os.path.dirname(path)

    def exists(self, path: str) -> bool:
        return Path(path).is_file()

    def load(self, path: str) -> bytes:
        return Path(path).read_bytes()


class MemoryLoader:
    """Serves documents from a mapping of POSIX-style paths to text or bytes."""

    def __init__(self, files: Mapping[str, Union[str, bytes]]):
        self.files: dict[str, bytes] = {
            posixpath.normpath(name): data.encode("utf-8") if isinstance(data, str) else data
            for name, data in files.items()
        }

    def canonical(self, path: str, directory: Optional[str] = None) -> str:
        if directory:
            path = posixpath.join(directory, path)
        return posixpath.normpath(path)

    def dirname(self, path: str) -> str:
        return posixpath.dirname(path)

    def exists(self, path: str) -> bool:
        return path in self.files

    def load(self, path: str) -> bytes:
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(path) from None
