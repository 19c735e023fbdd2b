"""Request handlers for accounts and per-user directory operations."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .userstore import UserStore, open_store
from .workspace import UserWorkspace, WorkspaceRegistry

logger = logging.getLogger(__name__)


def _field(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key, "")
    if not isinstance(value, str):
        raise TypeError(f"field {key!r} must be a string")
    return value


class Service:
    """Account and directory operations driven by decoded JSON requests."""

    def __init__(
        self,
        store: UserStore | None = None,
        workspaces: WorkspaceRegistry | None = None,
    ) -> None:
        self._store = store
        self.workspaces = workspaces if workspaces is not None else WorkspaceRegistry()

    @property
    def store(self) -> UserStore:
        """The account store, connected on first use."""
        if self._store is None:
            self._store = open_store()
        return self._store

    def _workspace(self, data: Mapping[str, Any]) -> UserWorkspace:
        return self.workspaces.get(_field(data, "id"))

    def sign_in(self, data: Mapping[str, Any]) -> bool:
        """Check the id and password in the request."""
        user_id = _field(data, "id")
        supplied = _field(data, "pw")
        logger.info("sign in / id = %s", user_id)
        return self.store.match_pw(user_id, supplied)

    def sign_up(self, data: Mapping[str, Any]) -> bool:
        """Create an account; empty id or password is refused."""
        user_id = _field(data, "id")
        supplied = _field(data, "pw")
        logger.info("sign up / id = %s", user_id)
        if not user_id or not supplied:
            return False
        return self.store.create_id(user_id, supplied)

    def mkdir(self, data: Mapping[str, Any]) -> bool:
        """Create a directory in the user's workspace."""
        path = _field(data, "path")
        workspace = self._workspace(data)
        logger.info("mkdir / id = %s path = %s", workspace.user_id, path)
        return workspace.mkdir(path)

    def cd(self, data: Mapping[str, Any]) -> bool:
        """Move the user's current directory if the target exists."""
        workspace = self._workspace(data)
        target = Path(os.path.normpath(os.path.join(workspace.cwd, _field(data, "path"))))
        logger.info("cd / id = %s path = %s", workspace.user_id, target)
        if not workspace.exists(target):
            return False
        return workspace.set_cwd(target)

    def cwd(self, data: Mapping[str, Any]) -> str:
        """Return the user's current directory."""
        return str(self._workspace(data).cwd)

    def ls(self, data: Mapping[str, Any]) -> list[tuple[str, bool]]:
        """List the current directory as (name, is_directory) pairs."""
        workspace = self._workspace(data)
        with os.scandir(workspace.cwd) as entries:
            listing = [(entry.name, entry.is_dir()) for entry in entries]
        return sorted(listing)