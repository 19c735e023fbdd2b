import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest

from filedepot.http_client import ConnectionFailed, HttpResponse, send_request


class _Recorder(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.1"

    def _reply(self):
        self.close_connection = True
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        self.server.requests.append(
            {
                "method": self.command,
                "path": self.path,
                "headers": self.headers,
                "body": body,
            }
        )
        if self.server.reply is None:
            return
        status, payload = self.server.reply
        data = payload.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Length", str(len(data)))
        self.send_header("Connection", "close")
        self.end_headers()
        self.wfile.write(data)

    do_GET = do_POST = _reply

    def log_message(self, *args):
        pass


@pytest.fixture
def stub():
    server = HTTPServer(("127.0.0.1", 0), _Recorder)
    server.requests = []
    server.reply = (200, '{"result":true}')
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()
    thread.join()


def _port(server):
    return server.server_address[1]


def test_post_sends_json_body(stub):
    sent = {"id": "alice", "path": "docs"}
    send_request("post", "/mkdir", sent, port=_port(stub))
    request = stub.requests[0]
    assert request["method"] == "POST"
    assert request["path"] == "/mkdir"
    assert json.loads(request["body"]) == sent
    assert b" " not in request["body"]


def test_host_and_user_agent_headers(stub):
    port = _port(stub)
    send_request("GET", "/ls?id=alice", port=port)
    headers = stub.requests[0]["headers"]
    assert headers.get("Host") == f"127.0.0.1:{port}"
    assert headers.get("User-Agent")


def test_get_without_body_sends_nothing(stub):
    send_request("GET", "/ls?id=alice", port=_port(stub))
    request = stub.requests[0]
    assert request["path"] == "/ls?id=alice"
    assert request["body"] == b""
    assert request["headers"].get("Content-Length") is None


def test_empty_body_is_not_sent(stub):
    send_request("POST", "/cd", {}, port=_port(stub))
    assert stub.requests[0]["body"] == b""


def test_response_status_and_json(stub):
    stub.reply = (200, '{"result":true,"path":"/srv/alice"}')
    response = send_request("POST", "/cd", {"id": "alice"}, port=_port(stub))
    assert response.status == 200
    assert response.json() == {"result": True, "path": "/srv/alice"}


def test_error_status_is_returned(stub):
    stub.reply = (404, "missing")
    response = send_request("GET", "/nowhere", port=_port(stub))
    assert response.status == 404
    assert response.body == "missing"


def test_json_rejects_non_json_body():
    with pytest.raises(ValueError):
        HttpResponse(200, "not json").json()


def test_closed_port_raises_connection_failed():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    with pytest.raises(ConnectionFailed):
        send_request("GET", "/ls?id=alice", port=port)


def test_no_reply_raises_connection_failed(stub):
    stub.reply = None
    with pytest.raises(ConnectionFailed):
        send_request("POST", "/rmdir", {"id": "alice"}, port=_port(stub))