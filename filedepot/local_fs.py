"""The client's view of its own file system."""

from __future__ import annotations

import os
import shutil
from pathlib import Path


class FsError(Exception):
    """A local directory operation could not be done."""


class LocalFs:
    """A current directory on the local machine and operations relative to it."""

    def __init__(self, cwd: str | os.PathLike[str] | None = None) -> None:
        self.cwd = Path(os.environ.get("HOME", "/") if cwd is None else cwd)

    def _resolve(self, path: str | os.PathLike[str]) -> Path:
        candidate = Path(path)
        return candidate if candidate.is_absolute() else self.cwd / candidate

    def exists(self, path: str | os.PathLike[str]) -> bool:
        """Return True if the path exists."""
        return Path(path).exists()

    def set_cwd(self, path: str | os.PathLike[str]) -> None:
        """Make the path the current directory."""
        self.cwd = Path(path)

    def mkdir(self, path: str | os.PathLike[str]) -> None:
        """Create the directory and its parents; FsError if it already exists."""
        target = self._resolve(path)
        try:
            target.mkdir(parents=True)
        except FileExistsError as exc:
            raise FsError("directory already exists") from exc
        except OSError as exc:
            raise FsError(str(exc)) from exc

    def rmdir(self, path: str | os.PathLike[str]) -> None:
        """Remove a directory and everything in it."""
        target = self._resolve(path)
        if not target.exists():
            raise FsError("target directory does not exist")
        if not target.is_dir():
            raise FsError("target is not a directory")
        try:
            shutil.rmtree(target)
        except OSError as exc:
            raise FsError(str(exc)) from exc

    def ls(self) -> list[tuple[str, bool]]:
        """List the current directory as sorted (name, is_directory) pairs."""
        try:
            with os.scandir(self.cwd) as entries:
                listing = [(entry.name, entry.is_dir()) for entry in entries]
        except OSError as exc:
            raise FsError(str(exc)) from exc
        return sorted(listing)