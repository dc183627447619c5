import pytest

from backupkit.database.mysql import MySQL
from backupkit.helper import ExecError
from backupkit.settings import ModelConfig, Settings, SubConfig


def make(dump_path, values=None):
    model = ModelConfig(dump_path=dump_path)
    return MySQL(model, SubConfig(type="mysql", name="mysql1", settings=Settings(values)))


def test_configure_and_build(tmp_path):
    db = make(
        str(tmp_path),
        {
            "host": "1.2.3.4",
            "port": "1234",
            "database": "my_db",
            "username": "user1",
            "password": "password",
            "tables": ["foo", "bar"],
            "exclude_tables": ["aa", "bb"],
            "args": "--a1 --a2 --a3",
        },
    )
    db.configure()
    assert db.build() == (
        "mysqldump --host 1.2.3.4 --port 1234 -u user1 -ppassword "
        "--ignore-table=my_db.aa --ignore-table=my_db.bb --a1 --a2 --a3 my_db foo bar "
        f"--result-file={tmp_path}/mysql/mysql1/my_db.sql"
    )


def test_build_with_additional_options(tmp_path):
    db = make(str(tmp_path) + "/")
    db.database = "dummy_test"
    db.host = "127.0.0.2"
    db.port = "6378"
    db.password = "password"
    db.args = "--single-transaction --quick"
    assert db.build() == (
        "mysqldump --host 127.0.0.2 --port 6378 -ppassword --single-transaction --quick "
        f"dummy_test --result-file={tmp_path}/mysql/mysql1/dummy_test.sql"
    )


def test_defaults(tmp_path):
    db = make(str(tmp_path), {"database": "app"})
    db.configure()
    assert db.build() == (
        f"mysqldump --host 127.0.0.1 --port 3306 -u root app "
        f"--result-file={tmp_path}/mysql/mysql1/app.sql"
    )


def test_socket_clears_host_and_port(tmp_path):
    db = make(str(tmp_path), {"database": "app", "socket": "/tmp/mysql.sock"})
    db.configure()
    assert (db.host, db.port) == ("", "")
    assert db.build().startswith("mysqldump --socket /tmp/mysql.sock -u root app")


def test_database_required(tmp_path):
    db = make(str(tmp_path), {"host": "1.2.3.4"})
    with pytest.raises(ValueError, match="mysql database config is required"):
        db.configure()


def test_perform_without_mysqldump(tmp_path, monkeypatch):
    db = make(str(tmp_path), {"database": "app"})
    db.configure()
    monkeypatch.setenv("PATH", str(tmp_path))
    with pytest.raises(ExecError) as info:
        db.perform()
    assert str(info.value) == "-> Dump error: mysqldump cannot be found"