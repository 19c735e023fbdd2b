"""Per-user working directories on the server side."""

from __future__ import annotations

import os
import shutil
import threading
from pathlib import Path


class UserWorkspace:
    """A user's current directory and the directory operations relative to it."""

    def __init__(self, user_id: str, base: str | os.PathLike[str] | None = None) -> None:
        root = Path.home() if base is None else Path(base)
        self.user_id = user_id
        self.cwd = root / user_id

    def _resolve(self, path: str | os.PathLike[str]) -> Path:
        candidate = Path(path)
        return candidate if candidate.is_absolute() else self.cwd / candidate

    def exists(self, path: str | os.PathLike[str]) -> bool:
        """Return True if the path exists."""
        return Path(path).exists()

    def set_cwd(self, path: str | os.PathLike[str]) -> bool:
        """Make the path the current directory."""
        self.cwd = Path(path)
        return True

    def mkdir(self, path: str | os.PathLike[str]) -> bool:
        """Create the directory and its parents; False if it already exists."""
        target = self._resolve(path)
        if target.is_dir():
            return False
        target.mkdir(parents=True)
        return True

    def rmdir(self, path: str | os.PathLike[str]) -> bool:
        """Remove a directory tree; False if it is missing or not a directory."""
        target = self._resolve(path)
        if not target.is_dir():
            return False
        shutil.rmtree(target)
        return True


class WorkspaceRegistry:
    """Hands out one workspace per user id, creating it on first use."""

    def __init__(self, base: str | os.PathLike[str] | None = None) -> None:
        self._base = base
        self._workspaces: dict[str, UserWorkspace] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> UserWorkspace:
        """Return the workspace for the user, creating it if needed."""
        with self._lock:
            workspace = self._workspaces.get(user_id)
            if workspace is None:
                workspace = UserWorkspace(user_id, self._base)
                self._workspaces[user_id] = workspace
            return workspace