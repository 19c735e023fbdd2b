"""HTTP front end that routes JSON requests to the service."""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Callable, Sequence
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any

from .service import Service

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080

Reply = tuple[HTTPStatus, Any]


def _login(service: Service, data: dict[str, Any]) -> Any:
    return {"result": service.sign_in(data), "path": service.cwd(data)}


def _register(service: Service, data: dict[str, Any]) -> Any:
    return {"result": service.sign_up(data)}


def _mkdir(service: Service, data: dict[str, Any]) -> Any:
    return {"result": service.mkdir(data), "path": service.cwd(data)}


def _cd(service: Service, data: dict[str, Any]) -> Any:
    return {"result": service.cd(data), "path": service.cwd(data)}


_POST_ROUTES: dict[str, Callable[[Service, dict[str, Any]], Any]] = {
    "/login": _login,
    "/register": _register,
    "/mkdir": _mkdir,
    "/cd": _cd,
}


def dispatch(service: Service, method: str, target: str, body: str | bytes) -> Reply | None:
    """Route one request; return (status, payload) or None when nothing is answered."""
    method = method.upper()
    path, sep, query = target.partition("?")
    arg = sep + query

    if method == "GET":
        if path == "/ls":
            user_id = arg[3:]
            logger.info("ls / id = %s", user_id)
            listing = service.ls({"id": user_id})
            return HTTPStatus.OK, {"result": [[name, is_dir] for name, is_dir in listing]}
        return None

    try:
        data = json.loads(body)
    except ValueError:
        logger.warning("unparsable request body: %r", body)
        return HTTPStatus.BAD_REQUEST, None
    if not isinstance(data, dict):
        return HTTPStatus.BAD_REQUEST, None
    if method != "POST":
        return None

    try:
        handler = _POST_ROUTES.get(path)
        if handler is not None:
            return HTTPStatus.OK, handler(service, data)
        if path == "/rmdir":
            service.cwd(data)
    except TypeError:
        return HTTPStatus.BAD_REQUEST, None
    return None


class _Handler(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.1"
    service: Service

    def _handle(self) -> None:
        self.close_connection = True
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            self.send_error(HTTPStatus.BAD_REQUEST)
            return
        body = self.rfile.read(length) if length > 0 else b""
        reply = dispatch(self.service, self.command, self.path, body)
        if reply is None:
            return
        status, payload = reply
        data = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        self.send_header("Connection", "close")
        self.end_headers()
        self.wfile.write(data)

    do_GET = do_POST = do_PUT = do_DELETE = do_PATCH = _handle

    def log_message(self, format: str, *args: Any) -> None:
        logger.info("%s - %s", self.address_string(), format % args)


def make_server(service: Service, host: str, port: int) -> HTTPServer:
    """Build an HTTP server that answers requests with the given service."""

    class Handler(_Handler):
        pass

    Handler.service = service
    return HTTPServer((host, port), Handler)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the file server until interrupted."""
    parser = argparse.ArgumentParser(description="File depot server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    with make_server(Service(), args.host, args.port) as server:
        logger.info("listening on %s:%s", args.host, args.port)
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0