"""Project file stores.

The sync engine reads and writes the consumer project only through a
``ProjectFileStore``. Paths are POSIX-style and relative to the project
root. Read and write failures are not caught here: an ``OSError`` aborts
the current component, as documented for the engine.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Protocol


class ProjectFileStore(Protocol):
    """Read/write access to files of the consumer project."""

    def exists(self, path: str) -> bool:
        """Whether a file or directory exists at ``path``."""
        ...

    def read_text(self, path: str) -> str | None:
        """Return a file's text, or None if there is no such file.

        Line endings are returned as stored. Bytes that are not valid UTF-8
        are kept as surrogate escapes rather than raising.
        """
        ...

    def write_text(self, path: str, content: str) -> None:
        """Write a file, creating parent directories as needed."""
        ...

    def list_files(self, directory: str) -> list[str]:
        """Names of the regular files directly inside ``directory``, sorted."""
        ...


def has_content(store: ProjectFileStore, directory: str) -> bool:
    """Whether a component directory exists and holds any files."""
    return store.exists(directory) and bool(store.list_files(directory))


class LocalFileStore:
    """File store rooted at a directory on the local file system."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def _resolve(self, path: str) -> Path:
        return self.root / path

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def read_text(self, path: str) -> str | None:
        target = self._resolve(path)
        if not target.is_file():
            return None
        # undecodable bytes survive as surrogates so they still fingerprint
        with target.open(encoding="utf-8", errors="surrogateescape", newline="") as f:
            return f.read()

    def write_text(self, path: str, content: str) -> None:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps the content's own line endings on every platform
        with target.open("w", encoding="utf-8", newline="") as f:
            f.write(content)

    def list_files(self, directory: str) -> list[str]:
        target = self._resolve(directory)
        if not target.is_dir():
            return []
        return sorted(p.name for p in target.iterdir() if p.is_file())


class MemoryFileStore:
    """Dictionary-backed store for tests and previews."""

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files: dict[str, str] = {}
        for path, content in (files or {}).items():
            self.write_text(path, content)

    @staticmethod
    def _normalize(path: str) -> str:
        return PurePosixPath(path).as_posix()

    def exists(self, path: str) -> bool:
        key = self._normalize(path)
        prefix = f"{key}/"
        return key in self.files or any(p.startswith(prefix) for p in self.files)

    def read_text(self, path: str) -> str | None:
        return self.files.get(self._normalize(path))

    def write_text(self, path: str, content: str) -> None:
        self.files[self._normalize(path)] = content

    def delete(self, path: str) -> None:
        """Remove a file, if present."""
        self.files.pop(self._normalize(path), None)

    def list_files(self, directory: str) -> list[str]:
        prefix = f"{self._normalize(directory)}/"
        return sorted(
            p[len(prefix) :]
            for p in self.files
            if p.startswith(prefix) and "/" not in p[len(prefix) :]
        )
