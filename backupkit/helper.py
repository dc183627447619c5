"""Command execution, path and host helpers."""

from __future__ import annotations

import functools
import os
import posixpath
import re
import shutil
import subprocess
import sys

from backupkit import log

_SPACE = re.compile(r"\s+")


class ExecError(Exception):
    """Raised when a command cannot be found or exits unsuccessfully."""


def run(command: str, *args: str) -> str:
    """Run ``command`` with ``args`` and return its captured output."""
    return run_with_stdio(command, False, *args)


def run_with_stdio(command: str, stdout: bool, *args: str) -> str:
    """Run a command; whitespace in ``command`` separates extra arguments.

    When ``stdout`` is true the child's output goes to this process's
    standard output and an empty string is returned.
    """
    name, *command_args = _SPACE.split(command)
    command_args.extend(args)

    full_command = shutil.which(name) if name else None
    if full_command is None:
        raise ExecError(f"{name} cannot be found")

    if stdout:
        sys.stdout.flush()
    try:
        proc = subprocess.run(
            [full_command, *command_args],
            env=dict(os.environ),
            stdout=None if stdout else subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError as exc:
        log.debug(full_command, " ", " ".join(command_args))
        raise ExecError(str(exc)) from exc

    if proc.returncode != 0:
        log.debug(full_command, " ", " ".join(command_args))
        raise ExecError((proc.stderr or b"").decode("utf-8", errors="replace"))

    return (proc.stdout or b"").decode("utf-8", errors="replace").strip("\n")


def is_exists_path(p: str) -> bool:
    """Return whether ``p`` can be stat'ed."""
    try:
        os.stat(p)
    except OSError:
        return False
    return True


def mkdir_p(dir_path: str) -> None:
    """Create ``dir_path`` and its parents when it does not exist."""
    try:
        os.stat(dir_path)
    except FileNotFoundError:
        os.makedirs(dir_path, mode=0o750, exist_ok=True)


def expand_home(file_path: str) -> str:
    """Expand a leading ``~/`` to the HOME directory."""
    if len(file_path) < 2 or not file_path.startswith("~/"):
        return file_path
    joined = posixpath.join(os.environ.get("HOME", ""), file_path[2:])
    return posixpath.normpath(joined) if joined else ""


def absolute_path(path: str) -> str:
    """Turn ``path`` into an absolute path, expanding ``~/`` first."""
    if os.path.isabs(path):
        return path
    return os.path.abspath(expand_home(path))


@functools.lru_cache(maxsize=None)
def is_gnu_tar() -> bool:
    """Return whether the ``tar`` on PATH is GNU tar."""
    try:
        out = run("tar", "--version")
    except ExecError:
        return False
    return "GNU" in out


def clean_host(host: str) -> str:
    """Strip a URL scheme: ``ftp://foo.bar.com`` becomes ``foo.bar.com``."""
    if "://" in host:
        return host.split("://")[1]
    return host


def format_endpoint(endpoint: str) -> str:
    """Add an ``https://`` prefix unless the endpoint starts with ``http``."""
    if not endpoint.startswith("http"):
        return "https://" + endpoint
    return endpoint