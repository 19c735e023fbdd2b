import pytest

from filedepot.workspace import UserWorkspace, WorkspaceRegistry


@pytest.fixture
def workspace(tmp_path):
    ws = UserWorkspace("alice", tmp_path)
    ws.cwd.mkdir()
    return ws


def test_initial_cwd_is_under_base(tmp_path):
    assert UserWorkspace("alice", tmp_path).cwd == tmp_path / "alice"


def test_mkdir_relative_creates_under_cwd(workspace):
    assert workspace.mkdir("docs/notes") is True
    assert (workspace.cwd / "docs" / "notes").is_dir()


def test_mkdir_existing_returns_false(workspace):
    workspace.mkdir("docs")
    assert workspace.mkdir("docs") is False


def test_mkdir_absolute_path(workspace, tmp_path):
    target = tmp_path / "elsewhere"
    assert workspace.mkdir(target) is True
    assert target.is_dir()


def test_mkdir_over_file_raises(workspace):
    (workspace.cwd / "plain").write_text("x")
    with pytest.raises(FileExistsError):
        workspace.mkdir("plain")


def test_rmdir_removes_non_empty_tree(workspace):
    workspace.mkdir("docs/inner")
    (workspace.cwd / "docs" / "inner" / "f.txt").write_text("x")
    assert workspace.rmdir("docs") is True
    assert not (workspace.cwd / "docs").exists()


def test_rmdir_missing_returns_false(workspace):
    assert workspace.rmdir("ghost") is False


def test_rmdir_file_is_left_alone(workspace):
    target = workspace.cwd / "plain"
    target.write_text("x")
    assert workspace.rmdir("plain") is False
    assert target.read_text() == "x"


def test_set_cwd_and_exists(workspace, tmp_path):
    assert workspace.set_cwd(tmp_path) is True
    assert workspace.cwd == tmp_path
    assert workspace.exists(tmp_path / "alice") is True
    assert workspace.exists(tmp_path / "ghost") is False


def test_registry_reuses_workspace(tmp_path):
    registry = WorkspaceRegistry(tmp_path)
    first = registry.get("alice")
    first.set_cwd(tmp_path)
    assert registry.get("alice") is first
    assert registry.get("alice").cwd == tmp_path
    assert registry.get("bob").cwd == tmp_path / "bob"