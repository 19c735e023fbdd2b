"""One-shot JSON-over-HTTP requests to the file depot server."""

from __future__ import annotations

import http.client
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080
USER_AGENT = "filedepot-client"
TIMEOUT = 30.0


class ConnectionFailed(Exception):
    """The request could not be sent or its response could not be read."""


@dataclass(frozen=True)
class HttpResponse:
    """Status, decoded body and headers of a server reply."""

    status: int
    body: str
    headers: Mapping[str, str] = field(default_factory=dict)

    def json(self) -> Any:
        """Decode the body as JSON; raise ValueError if it is not JSON."""
        return json.loads(self.body)


def send_request(
    method: str,
    target: str,
    body: Any = None,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> HttpResponse:
    """Send one HTTP/1.1 request and return the server's reply.

    A non-empty ``body`` is sent as compact JSON. Any failure to connect,
    send or read raises ConnectionFailed.
    """
    headers = {"Host": f"{host}:{port}", "User-Agent": USER_AGENT}
    payload = None
    if body:
        payload = json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")

    connection = http.client.HTTPConnection(host, port, timeout=TIMEOUT)
    try:
        try:
            connection.connect()
        except OSError as exc:
            raise ConnectionFailed(f"connection failed: {exc}") from exc
        try:
            connection.request(method.upper(), target, body=payload, headers=headers)
        except (OSError, http.client.HTTPException) as exc:
            raise ConnectionFailed(f"write failed: {exc}") from exc
        try:
            response = connection.getresponse()
            raw = response.read()
        except (OSError, http.client.HTTPException) as exc:
            raise ConnectionFailed(f"read failed: {exc}") from exc
    finally:
        connection.close()

    return HttpResponse(
        status=response.status,
        body=raw.decode("utf-8", errors="replace"),
        headers=dict(response.getheaders()),
    )