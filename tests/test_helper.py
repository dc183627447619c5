"""Tests for backupkit.helper."""

import os
import subprocess
from pathlib import Path
from unittest import mock

import pytest

from backupkit.helper import (
    ExecError,
    absolute_path,
    clean_host,
    expand_home,
    format_endpoint,
    is_exists_path,
    is_gnu_tar,
    mkdir_p,
    run,
    run_with_stdio,
)

HERE = Path(__file__).parent
FIRST_LINE = '"""Tests for backupkit.helper."""'


@pytest.fixture
def in_tests_dir(monkeypatch):
    monkeypatch.chdir(HERE)


def test_run_variants(in_tests_dir):
    assert run("head", "-n1", "./test_helper.py") == FIRST_LINE
    assert run("head -n1 ./test_helper.py") == FIRST_LINE
    assert run("head  -n1  ./test_helper.py") == FIRST_LINE
    assert run("head -n1", "./test_helper.py") == FIRST_LINE


def test_run_command_not_found():
    with pytest.raises(ExecError) as exc:
        run("not-found-command", "foo")
    assert str(exc.value) == "not-found-command cannot be found"


def test_run_failure_carries_stderr():
    with pytest.raises(ExecError) as exc:
        run("sh", "-c", "echo boom >&2; exit 3")
    assert str(exc.value).strip() == "boom"


def test_run_with_stdio_captured(in_tests_dir):
    assert run_with_stdio("head -n1", False, "./test_helper.py") == FIRST_LINE


def test_run_with_stdio_passthrough(in_tests_dir, capfd):
    out = run_with_stdio("head -n1", True, "./test_helper.py")
    assert out == ""
    assert FIRST_LINE in capfd.readouterr().out


def test_is_exists_path():
    assert is_exists_path("foo/bar") is False
    assert is_exists_path(__file__) is True


def test_mkdir_p(tmp_path):
    dest = tmp_path / "test-mkdir-p" / "nested"
    assert is_exists_path(str(dest)) is False
    mkdir_p(str(dest))
    assert is_exists_path(str(dest)) is True
    assert dest.is_dir()
    mkdir_p(str(dest))
    assert dest.is_dir()


def test_expand_home(monkeypatch):
    monkeypatch.setenv("HOME", "/home/tester")
    assert expand_home("") == ""
    assert expand_home("/home/jason/111") == "/home/jason/111"
    assert expand_home("~") == "~"
    assert not expand_home("~/").startswith("~/")
    assert expand_home("~/foo/bar/dar") == "/home/tester/foo/bar/dar"


def test_absolute_path(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", "/home/tester")
    assert absolute_path("foo/bar") == os.path.join(os.getcwd(), "foo/bar")
    assert absolute_path("/home/jason/111") == "/home/jason/111"
    assert absolute_path("~")[:2] != "~/"
    assert absolute_path("~/")[:2] != "~/"
    assert absolute_path("~/foo/bar/dar") == "/home/tester/foo/bar/dar"


@pytest.mark.parametrize(
    ("version_output", "expected"),
    [
        (b"tar (GNU tar) 1.34\n", True),
        (b"bsdtar 3.5.3 - libarchive 3.5.3\n", False),
    ],
)
def test_is_gnu_tar(version_output, expected):
    is_gnu_tar.cache_clear()
    completed = subprocess.CompletedProcess([], 0, stdout=version_output, stderr=b"")
    with mock.patch("shutil.which", return_value="/usr/bin/tar"), mock.patch(
        "subprocess.run", return_value=completed
    ):
        result = is_gnu_tar()
    is_gnu_tar.cache_clear()
    assert result is expected


def test_is_gnu_tar_without_tar():
    is_gnu_tar.cache_clear()
    with mock.patch("shutil.which", return_value=None):
        result = is_gnu_tar()
    is_gnu_tar.cache_clear()
    assert result is False


def test_clean_host():
    assert clean_host("foo.bar.com") == "foo.bar.com"
    assert clean_host("ftp://foo.bar.com") == "foo.bar.com"
    assert clean_host("http://foo.bar.com") == "foo.bar.com"
    assert clean_host("http://") == ""


def test_format_endpoint():
    assert format_endpoint("http://foo.bar.com") == "http://foo.bar.com"
    assert format_endpoint("https://foo.bar.com") == "https://foo.bar.com"
    assert format_endpoint("foo.bar.com") == "https://foo.bar.com"