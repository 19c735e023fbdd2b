import threading
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest

from filedepot.remote_fs import RemoteError, RemoteFs
from filedepot.server import make_server
from filedepot.service import Service
from filedepot.workspace import WorkspaceRegistry


def _serve(server):
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return thread


@pytest.fixture
def depot(tmp_path):
    (tmp_path / "alice").mkdir()
    service = Service(workspaces=WorkspaceRegistry(tmp_path))
    server = make_server(service, "127.0.0.1", 0)
    thread = _serve(server)
    yield tmp_path, server.server_address[1]
    server.shutdown()
    server.server_close()
    thread.join()


class _Canned(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.1"

    def _reply(self):
        self.close_connection = True
        length = int(self.headers.get("Content-Length") or 0)
        if length:
            self.rfile.read(length)
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
def canned():
    server = HTTPServer(("127.0.0.1", 0), _Canned)
    server.reply = (200, "{}")
    thread = _serve(server)
    yield server
    server.shutdown()
    server.server_close()
    thread.join()


def _client(port, user_id="alice"):
    fs = RemoteFs(port=port)
    fs.set_id(user_id)
    return fs


def test_initial_state():
    fs = RemoteFs()
    assert fs.cwd == "/"
    assert fs.user_id == ""


def test_set_cwd_and_id():
    fs = RemoteFs()
    fs.set_cwd("/srv/alice")
    fs.set_id("alice")
    assert fs.cwd == "/srv/alice"
    assert fs.user_id == "alice"


def test_mkdir_creates_directory(depot):
    base, port = depot
    _client(port).mkdir("docs/deep")
    assert (base / "alice" / "docs" / "deep").is_dir()


def test_mkdir_existing_raises(depot):
    _, port = depot
    fs = _client(port)
    fs.mkdir("docs")
    with pytest.raises(RemoteError):
        fs.mkdir("docs")


def test_cd_moves_to_server_path(depot):
    base, port = depot
    fs = _client(port)
    fs.mkdir("docs")
    fs.cd("docs")
    assert fs.cwd == str(base / "alice" / "docs")


def test_cd_missing_raises_and_keeps_cwd(depot):
    _, port = depot
    fs = _client(port)
    fs.set_cwd("/before")
    with pytest.raises(RemoteError):
        fs.cd("absent")
    assert fs.cwd == "/before"


def test_ls_lists_entries(depot):
    base, port = depot
    fs = _client(port)
    fs.mkdir("docs")
    (base / "alice" / "note.txt").write_text("hello")
    assert fs.ls() == [("docs", True), ("note.txt", False)]


def test_error_status_raises(canned):
    canned.reply = (500, "{}")
    with pytest.raises(RemoteError, match="500"):
        _client(canned.server_address[1]).mkdir("docs")


def test_unparsable_reply_raises(canned):
    canned.reply = (200, "garbage")
    with pytest.raises(RemoteError):
        _client(canned.server_address[1]).cd("docs")


def test_ls_malformed_result_raises(canned):
    canned.reply = (200, '{"result":"docs"}')
    with pytest.raises(RemoteError):
        _client(canned.server_address[1]).ls()