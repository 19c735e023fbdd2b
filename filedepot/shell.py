"""Interactive command shell for the file depot client."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Iterable, Sequence
from http import HTTPStatus
from typing import Any, TextIO

from .http_client import DEFAULT_HOST, DEFAULT_PORT, ConnectionFailed, send_request
from .local_fs import FsError, LocalFs
from .remote_fs import RemoteError, RemoteFs

MAX_ID_LENGTH = 20

MSG_UNKNOWN = "Unknown command."
MSG_NO_ARG = "Missing argument."
MSG_NO_PATH = "No such path."
MSG_NEED_CREDENTIALS = "Enter an id and a password."
MSG_ID_TOO_LONG = f"An id must be shorter than {MAX_ID_LENGTH} characters."
MSG_LOGIN_FAILED = "The id or the password does not match."
MSG_LOGIN_OK = "Logged in."
MSG_ID_TAKEN = "That id is already taken."
MSG_SIGNUP_OK = "Account created."
MSG_LOGOUT = "Logged out."
MSG_BAD_RESPONSE = "Unparsable server response."


def parse_cmd(line: str) -> list[str]:
    """Split a command line on spaces, dropping empty words."""
    return [word for word in line.split(" ") if word]


def _home() -> str:
    return os.environ.get("HOME", "/")


def _display(path: str) -> str:
    if len(path) > 1 and path.endswith("/"):
        return path[:-1]
    return path


class Shell:
    """Reads commands and runs them against the local or the server file system."""

    def __init__(
        self,
        local: LocalFs | None = None,
        remote: RemoteFs | None = None,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        out: TextIO | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self.local = local if local is not None else LocalFs()
        self.remote = remote if remote is not None else RemoteFs(host, port)
        self.out = out if out is not None else sys.stdout
        self.logged_in = False
        self.on_server = False
        self.user_id = ""

    def _say(self, message: str) -> None:
        print(message, file=self.out)

    def prompt(self) -> str:
        """Return the prompt for the current state."""
        if not self.logged_in:
            return "> "
        cwd = self.remote.cwd if self.on_server else str(self.local.cwd)
        return _display(cwd) + "$ "

    def execute(self, args: Sequence[str]) -> None:
        """Run one parsed command."""
        if not args:
            return
        if not self.logged_in:
            self._logged_out_command(args)
        elif args[0] == "logout":
            self._logout()
        elif self.on_server:
            self._server_command(args)
        else:
            self._local_command(args)

    def run(self, lines: Iterable[str]) -> None:
        """Prompt for and run each line until the input ends."""
        iterator = iter(lines)
        while True:
            self.out.write(self.prompt())
            self.out.flush()
            try:
                line = next(iterator)
            except StopIteration:
                break
            self.execute(parse_cmd(line.rstrip("\r\n")))

    # dispatch

    def _logged_out_command(self, args: Sequence[str]) -> None:
        if args[0] == "login":
            self._sign_in(args)
        elif args[0] == "register":
            self._sign_up(args)
        else:
            self._say(MSG_UNKNOWN)

    def _local_command(self, args: Sequence[str]) -> None:
        command = args[0]
        if command == "cd":
            self._local_cd(args)
        elif command == "ls":
            self._local_ls()
        elif command == "mkdir":
            self._local_mkdir(args)
        elif command == "rmdir":
            self._local_rmdir(args)
        elif command == "change":
            self._change()
        elif command == "upload":
            pass
        else:
            self._say(MSG_UNKNOWN)

    def _server_command(self, args: Sequence[str]) -> None:
        command = args[0]
        if command == "cd":
            self._server_cd(args)
        elif command == "ls":
            self._server_ls()
        elif command == "mkdir":
            self._server_mkdir(args)
        elif command in ("rmdir", "download"):
            pass
        elif command == "change":
            self._change()
        else:
            self._say(MSG_UNKNOWN)

    def _change(self) -> None:
        self.on_server = not self.on_server

    # local commands

    def _local_cd(self, args: Sequence[str]) -> None:
        if len(args) <= 1:
            self.local.set_cwd(_home())
            return
        if args[1] in (".", "./"):
            return
        target = os.path.normpath(os.path.join(self.local.cwd, args[1]))
        if not self.local.exists(target):
            self._say(MSG_NO_PATH)
        else:
            self.local.set_cwd(target)

    def _local_mkdir(self, args: Sequence[str]) -> None:
        if len(args) <= 1:
            self._say(MSG_NO_ARG)
            return
        try:
            self.local.mkdir(args[1])
        except FsError as exc:
            self._say(str(exc))

    def _local_rmdir(self, args: Sequence[str]) -> None:
        if len(args) <= 1:
            self._say(MSG_NO_ARG)
            return
        try:
            self.local.rmdir(args[1])
        except FsError as exc:
            self._say(str(exc))

    def _print_listing(self, listing: Iterable[tuple[str, bool]]) -> None:
        for name, is_dir in listing:
            self._say(("[DIR] " if is_dir else "[FILE] ") + name)

    def _local_ls(self) -> None:
        try:
            listing = self.local.ls()
        except FsError as exc:
            self._say(str(exc))
            return
        self._print_listing(listing)

    # server commands

    def _server_cd(self, args: Sequence[str]) -> None:
        if len(args) == 1:
            self._say(MSG_NO_ARG)
            return
        try:
            self.remote.cd(args[1])
        except (RemoteError, ConnectionFailed) as exc:
            self._say(str(exc))

    def _server_mkdir(self, args: Sequence[str]) -> None:
        if len(args) == 1:
            self._say(MSG_NO_ARG)
            return
        try:
            self.remote.mkdir(args[1])
        except (RemoteError, ConnectionFailed) as exc:
            self._say(str(exc))

    def _server_ls(self) -> None:
        try:
            listing = self.remote.ls()
        except (RemoteError, ConnectionFailed) as exc:
            self._say(str(exc))
            return
        self._print_listing(listing)

    # account commands

    def _post(self, target: str, body: dict[str, Any]) -> dict[str, Any] | None:
        try:
            response = send_request("POST", target, body, self.host, self.port)
        except ConnectionFailed as exc:
            self._say(str(exc))
            return None
        if response.status != HTTPStatus.OK:
            self._say(f"Status code : {response.status}")
            return None
        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            self._say(MSG_BAD_RESPONSE)
            return None
        return data

    def _sign_in(self, args: Sequence[str]) -> None:
        if len(args) <= 2:
            self._say(MSG_NEED_CREDENTIALS)
            return
        data = self._post("/login", {"id": args[1], "pw": args[2]})
        if data is None:
            return
        if not data.get("result", False):
            self._say(MSG_LOGIN_FAILED)
            return
        self._say(MSG_LOGIN_OK)
        self.remote.set_cwd(str(data.get("path", "")))
        self.remote.set_id(args[1])
        self.user_id = args[1]
        self.logged_in = True

    def _sign_up(self, args: Sequence[str]) -> None:
        if len(args) <= 2:
            self._say(MSG_NEED_CREDENTIALS)
            return
        if len(args[1]) >= MAX_ID_LENGTH:
            self._say(MSG_ID_TOO_LONG)
            return
        data = self._post("/register", {"id": args[1], "pw": args[2]})
        if data is None:
            return
        if not data.get("result", False):
            self._say(MSG_ID_TAKEN)
        else:
            self._say(MSG_SIGNUP_OK)

    def _logout(self) -> None:
        self._say(MSG_LOGOUT)
        self.user_id = ""
        self.logged_in = False


def main(argv: Sequence[str] | None = None) -> int:
    """Run the interactive client on standard input."""
    parser = argparse.ArgumentParser(description="File depot client")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    shell = Shell(host=args.host, port=args.port)
    try:
        shell.run(sys.stdin)
    except KeyboardInterrupt:
        pass
    return 0