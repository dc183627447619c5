import pytest

from backupkit.database.sqlite import SQLite
from backupkit.helper import ExecError
from backupkit.settings import ModelConfig, Settings, SubConfig


def make(dump_path, values=None):
    model = ModelConfig(dump_path=dump_path)
    return SQLite(model, SubConfig(type="sqlite", name="sqlite1", settings=Settings(values)))


def test_configure_and_build_args(tmp_path):
    db = make(str(tmp_path), {"path": "/var/db/my.sqlite"})
    db.configure()
    expected = f"{tmp_path}/sqlite/sqlite1/my.sql"
    assert db.dump_file_path == expected
    assert db.build_args() == ["/var/db/my.sqlite", f".output {expected}", ".dump"]


def test_only_last_extension_removed(tmp_path):
    db = make(str(tmp_path), {"path": "/srv/archive.tar.sqlite3"})
    db.configure()
    assert db.database == "archive.tar"


def test_home_is_expanded(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", "/home/tester")
    db = make(str(tmp_path), {"path": "~/data/app.db"})
    db.configure()
    assert db.path == "/home/tester/data/app.db"
    assert db.dump_file_path == f"{tmp_path}/sqlite/sqlite1/app.sql"


def test_path_required(tmp_path):
    db = make(str(tmp_path))
    with pytest.raises(ValueError, match="SQLite `path` is required"):
        db.configure()


def test_perform_without_sqlite3(tmp_path, monkeypatch):
    db = make(str(tmp_path), {"path": "/var/db/my.sqlite"})
    db.configure()
    monkeypatch.setenv("PATH", str(tmp_path))
    with pytest.raises(ExecError) as info:
        db.perform()
    assert str(info.value) == "sqlite3 cannot be found"