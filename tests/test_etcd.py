import pytest

from backupkit.database.etcd import Etcd
from backupkit.helper import ExecError
from backupkit.settings import ModelConfig, Settings, SubConfig


def make(dump_path, values=None):
    model = ModelConfig(dump_path=dump_path)
    return Etcd(model, SubConfig(type="etcd", name="etcd1", settings=Settings(values)))


def test_configure_and_build(tmp_path):
    db = make(str(tmp_path), {"endpoint": "127.0.0.1:2379", "args": "--foo --bar --baz"})
    db.configure()
    assert db.dump_file_path == f"{tmp_path}/etcd/etcd1-127.0.0.1:2379"
    assert db.build() == (
        f"etcdctl snapshot save {db.dump_file_path} --endpoints 127.0.0.1:2379 --foo --bar --baz"
    )


def test_deprecated_endpoints_uses_first(tmp_path):
    db = make(str(tmp_path), {"endpoints": ["localhost:2379", "localhost:22379"]})
    db.configure()
    assert db.endpoint == "localhost:2379"
    assert db.build() == (
        f"etcdctl snapshot save {tmp_path}/etcd/etcd1-localhost:2379 --endpoints localhost:2379"
    )


def test_endpoint_required(tmp_path):
    db = make(str(tmp_path))
    with pytest.raises(ValueError, match="etcd endpoint config is required"):
        db.configure()


def test_endpoint_and_endpoints_exclusive(tmp_path):
    db = make(str(tmp_path), {"endpoint": "a:1", "endpoints": ["b:2"]})
    with pytest.raises(ValueError, match="mutually exclusive"):
        db.configure()


def test_perform_without_etcdctl(tmp_path, monkeypatch):
    db = make(str(tmp_path), {"endpoint": "127.0.0.1:2379"})
    db.configure()
    monkeypatch.setenv("PATH", str(tmp_path))
    with pytest.raises(ExecError) as info:
        db.perform()
    assert str(info.value) == "etcdctl cannot be found"