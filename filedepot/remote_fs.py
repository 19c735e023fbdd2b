"""The client's view of its directory on the server."""

from __future__ import annotations

import logging
import os
from http import HTTPStatus
from typing import Any

from .http_client import DEFAULT_HOST, DEFAULT_PORT, send_request

logger = logging.getLogger(__name__)


class RemoteError(Exception):
    """The server refused an operation or answered with something unusable."""


class RemoteFs:
    """A user's current directory on the server and the requests that change it."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
        self.host = host
        self.port = port
        self.cwd = "/"
        self.user_id = ""

    def set_id(self, user_id: str) -> None:
        """Set the user the requests are made for."""
        self.user_id = user_id

    def set_cwd(self, path: str | os.PathLike[str]) -> None:
        """Record the server-side current directory."""
        self.cwd = os.fspath(path)

    def _call(self, method: str, target: str, body: Any = None) -> dict[str, Any]:
        response = send_request(method, target, body, self.host, self.port)
        if response.status != HTTPStatus.OK:
            raise RemoteError(f"status code: {response.status}")
        try:
            data = response.json()
        except ValueError as exc:
            raise RemoteError("unparsable server response") from exc
        if not isinstance(data, dict):
            raise RemoteError("unparsable server response")
        logger.debug("server reply: %s", data)
        return data

    def mkdir(self, path: str | os.PathLike[str]) -> None:
        """Create a directory on the server; RemoteError if it already exists."""
        data = self._call("POST", "/mkdir", {"id": self.user_id, "path": os.fspath(path)})
        if not data.get("result", False):
            raise RemoteError("directory already exists")

    def cd(self, path: str | os.PathLike[str]) -> None:
        """Change the server-side directory; RemoteError if the target is missing."""
        data = self._call("POST", "/cd", {"id": self.user_id, "path": os.fspath(path)})
        if not data.get("result", False):
            raise RemoteError("no such directory")
        self.set_cwd(data.get("path", ""))

    def ls(self) -> list[tuple[str, bool]]:
        """List the server-side directory as (name, is_directory) pairs."""
        data = self._call("GET", "/ls?id=" + self.user_id)
        entries = data.get("result")
        if not isinstance(entries, list):
            raise RemoteError("unparsable server response")
        try:
            return [(str(name), bool(is_dir)) for name, is_dir in entries]
        except (TypeError, ValueError) as exc:
            raise RemoteError("unparsable server response") from exc