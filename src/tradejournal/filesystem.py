"""Filesystem access used by the importer and the folder watcher.

``LocalFileSystem`` works on disk. ``MemoryFileSystem`` keeps files in a
dict so watcher and import behaviour can be exercised without touching disk.
"""

import fnmatch
import shutil
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union


PathLike = Union[str, Path]


class FileSystem(ABC):
    """Abstract filesystem interface."""

    @abstractmethod
    def read_text(self, path: PathLike, encoding: str = "utf-8-sig") -> str:
        """Read a whole file as text."""
        pass

    @abstractmethod
    def read_bytes(self, path: PathLike) -> bytes:
        """Read a whole file as bytes."""
        pass

    @abstractmethod
    def write_text(self, path: PathLike, text: str, encoding: str = "utf-8") -> None:
        """Write text to a file, replacing any existing content."""
        pass

    @abstractmethod
    def move(self, source: PathLike, destination: PathLike) -> None:
        """Move a file, overwriting the destination if it exists."""
        pass

    @abstractmethod
    def delete(self, path: PathLike) -> None:
        """Delete a file."""
        pass

    @abstractmethod
    def list_files(
        self, directory: PathLike, pattern: str = "*", recursive: bool = False
    ) -> list[Path]:
        """List files in a directory whose names match ``pattern``, sorted by path."""
        pass

    @abstractmethod
    def exists(self, path: PathLike) -> bool:
        """Return True if a file or directory exists at ``path``."""
        pass

    @abstractmethod
    def is_dir(self, path: PathLike) -> bool:
        """Return True if ``path`` is a directory."""
        pass

    @abstractmethod
    def size(self, path: PathLike) -> int:
        """Return the size of a file in bytes."""
        pass

    @abstractmethod
    def make_dirs(self, path: PathLike) -> None:
        """Create a directory and its parents if missing."""
        pass


class LocalFileSystem(FileSystem):
    """FileSystem backed by the local disk."""

    def read_text(self, path: PathLike, encoding: str = "utf-8-sig") -> str:
        return Path(path).read_text(encoding=encoding)

    def read_bytes(self, path: PathLike) -> bytes:
        return Path(path).read_bytes()

    def write_text(self, path: PathLike, text: str, encoding: str = "utf-8") -> None:
        Path(path).write_text(text, encoding=encoding)

    def move(self, source: PathLike, destination: PathLike) -> None:
        destination = Path(destination)
        if destination.exists():
            destination.unlink()
        shutil.move(str(source), str(destination))

    def delete(self, path: PathLike) -> None:
        Path(path).unlink()

    def list_files(
        self, directory: PathLike, pattern: str = "*", recursive: bool = False
    ) -> list[Path]:
        directory = Path(directory)
        candidates = directory.rglob(pattern) if recursive else directory.glob(pattern)
        return sorted(p for p in candidates if p.is_file())

    def exists(self, path: PathLike) -> bool:
        return Path(path).exists()

    def is_dir(self, path: PathLike) -> bool:
        return Path(path).is_dir()

    def size(self, path: PathLike) -> int:
        return Path(path).stat().st_size

    def make_dirs(self, path: PathLike) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)


class MemoryFileSystem(FileSystem):
    """In-memory FileSystem. Directories exist implicitly for every stored file."""

    def __init__(self):
        self._files: dict[Path, bytes] = {}
        self._dirs: set[Path] = set()
        self._lock = threading.Lock()

    def _file(self, path: PathLike) -> bytes:
        try:
            return self._files[Path(path)]
        except KeyError:
            raise FileNotFoundError(f"No such file: '{path}'") from None

    def read_text(self, path: PathLike, encoding: str = "utf-8-sig") -> str:
        with self._lock:
            return self._file(path).decode(encoding)

    def read_bytes(self, path: PathLike) -> bytes:
        with self._lock:
            return self._file(path)

    def write_text(self, path: PathLike, text: str, encoding: str = "utf-8") -> None:
        self.write_bytes(path, text.encode(encoding))

    def write_bytes(self, path: PathLike, data: bytes) -> None:
        path = Path(path)
        with self._lock:
            self._files[path] = data
            self._dirs.update(path.parents)

    def move(self, source: PathLike, destination: PathLike) -> None:
        destination = Path(destination)
        with self._lock:
            data = self._file(source)
            del self._files[Path(source)]
            self._files[destination] = data
            self._dirs.update(destination.parents)

    def delete(self, path: PathLike) -> None:
        with self._lock:
            self._file(path)
            del self._files[Path(path)]

    def list_files(
        self, directory: PathLike, pattern: str = "*", recursive: bool = False
    ) -> list[Path]:
        directory = Path(directory)
        with self._lock:
            if directory not in self._dirs:
                raise FileNotFoundError(f"No such directory: '{directory}'")
            matches = [
                path
                for path in self._files
                if (path.parent == directory or (recursive and directory in path.parents))
                and fnmatch.fnmatch(path.name, pattern)
            ]
        return sorted(matches)

    def exists(self, path: PathLike) -> bool:
        path = Path(path)
        with self._lock:
            return path in self._files or path in self._dirs

    def is_dir(self, path: PathLike) -> bool:
        with self._lock:
            return Path(path) in self._dirs

    def size(self, path: PathLike) -> int:
        with self._lock:
            return len(self._file(path))

    def make_dirs(self, path: PathLike) -> None:
        path = Path(path)
        with self._lock:
            self._dirs.add(path)
            self._dirs.update(path.parents)
