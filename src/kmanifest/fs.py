"""File-system access used by the secret engine.

Commands receive a FileSystem explicitly instead of touching the disk
directly, so the manifest, certificates and env files can all be served
from memory in tests.
"""

from pathlib import Path, PurePosixPath
from typing import Protocol


class FileSystem(Protocol):
    """Minimal storage capability needed to load and validate secrets."""

    def exists(self, path: str) -> bool: ...

    def is_dir(self, path: str) -> bool: ...

    def list_dir(self, path: str) -> list[str]: ...

    def read_bytes(self, path: str) -> bytes: ...

    def read_text(self, path: str) -> str: ...

    def write_text(self, path: str, content: str) -> None: ...


class LocalFileSystem:
    """FileSystem backed by the local disk.

    Relative paths are resolved against ``root``, which is normally the
    directory holding the manifest.

    Attributes:
        root: Base directory for relative paths.

    """

    def __init__(self, root: str | Path = ".") -> None:
        self.root = Path(root)

    def _resolve(self, path: str) -> Path:
        candidate = Path(path)
        return candidate if candidate.is_absolute() else self.root / candidate

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def is_dir(self, path: str) -> bool:
        return self._resolve(path).is_dir()

    def list_dir(self, path: str) -> list[str]:
        """Return the names of regular files directly inside a directory.

        Args:
            path: Directory to list.

        Returns:
            Sorted file names (not full paths).

        """
        return sorted(entry.name for entry in self._resolve(path).iterdir() if entry.is_file())

    def read_bytes(self, path: str) -> bytes:
        return self._resolve(path).read_bytes()

    def read_text(self, path: str) -> str:
        return self._resolve(path).read_text(encoding="utf-8")

    def write_text(self, path: str, content: str) -> None:
        self._resolve(path).write_text(content, encoding="utf-8")


class MemoryFileSystem:
    """In-memory FileSystem keyed by normalized POSIX paths.

    Directories exist implicitly whenever a file lives below them.
    """

    def __init__(self, files: dict[str, str | bytes] | None = None) -> None:
        self._files: dict[str, bytes] = {}
        for path, content in (files or {}).items():
            self.add_file(path, content)

    @staticmethod
    def _normalize(path: str) -> str:
        return str(PurePosixPath(path))

    def add_file(self, path: str, content: str | bytes) -> None:
        data = content.encode() if isinstance(content, str) else content
        self._files[self._normalize(path)] = data

    def exists(self, path: str) -> bool:
        return self._normalize(path) in self._files or self.is_dir(path)

    def is_dir(self, path: str) -> bool:
        prefix = self._normalize(path).rstrip("/") + "/"
        return any(name.startswith(prefix) for name in self._files)

    def list_dir(self, path: str) -> list[str]:
        prefix = self._normalize(path).rstrip("/") + "/"
        return sorted(
            name[len(prefix) :] for name in self._files if name.startswith(prefix) and "/" not in name[len(prefix) :]
        )

    def read_bytes(self, path: str) -> bytes:
        try:
            return self._files[self._normalize(path)]
        except KeyError:
            raise FileNotFoundError(path) from None

    def read_text(self, path: str) -> str:
        return self.read_bytes(path).decode("utf-8")

    def write_text(self, path: str, content: str) -> None:
        self.add_file(path, content)
