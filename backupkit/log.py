"""Timestamped, tagged console and file logging."""

from __future__ import annotations

import os
import sys
import threading
from datetime import datetime
from typing import IO, Any, Optional

from termcolor import colored

TIME_FORMAT = "%Y/%m/%d %H:%M:%S"

_write_lock = threading.Lock()


def _sprint(args: tuple[Any, ...]) -> str:
    """Join values, adding a space only between two operands that are not strings."""
    if not args:
        return ""
    parts = [str(args[0])]
    for previous, current in zip(args, args[1:]):
        if not isinstance(previous, str) and not isinstance(current, str):
            parts.append(" ")
        parts.append(str(current))
    return "".join(parts)


def _sprintln(args: tuple[Any, ...]) -> str:
    """Join values with single spaces."""
    return " ".join(str(arg) for arg in args)


def _format(fmt: str, args: tuple[Any, ...]) -> str:
    return fmt % args if args else fmt


class _Tee:
    """Writes every line to a file and to the current standard output."""

    def __init__(self, handle: IO[str]) -> None:
        self._handle = handle

    def write(self, text: str) -> None:
        self._handle.write(text)
        sys.stdout.write(text)

    def flush(self) -> None:
        self._handle.flush()
        sys.stdout.flush()


class Logger:
    """A logger that prefixes each line with a timestamp and a tag."""

    def __init__(self, stream: Optional[IO[str]] = None, prefix: str = "") -> None:
        self._stream = stream
        self.prefix = prefix

    @property
    def stream(self) -> IO[str]:
        """The stream lines are written to; standard output when none was given."""
        return self._stream if self._stream is not None else sys.stdout

    def tag(self, tag: str) -> "Logger":
        """Return a logger writing to the same stream with ``tag`` as prefix."""
        return Logger(self._stream, tag)

    def _write(self, message: str) -> None:
        line = f"{datetime.now().strftime(TIME_FORMAT)} {self.prefix}{message}"
        if not line.endswith("\n"):
            line += "\n"
        stream = self.stream
        with _write_lock:
            stream.write(line)
            stream.flush()

    def println(self, *args: Any) -> None:
        self._write(_sprintln(args) + "\n")

    def printf(self, fmt: str, *args: Any) -> None:
        self._write(_format(fmt, args))

    def debug(self, *args: Any) -> None:
        """Log only when the DEBUG environment variable is ``true``."""
        if os.environ.get("DEBUG") == "true":
            self.println("[debug] ", _sprint(args))

    def debugf(self, fmt: str, *args: Any) -> None:
        self.debug(_format(fmt, args))

    def info(self, *args: Any) -> None:
        self.println(*args)

    def infof(self, fmt: str, *args: Any) -> None:
        self.info(_format(fmt, args))

    def warn(self, *args: Any) -> None:
        self.println(colored(_sprint(args), "yellow"))

    def warnf(self, fmt: str, *args: Any) -> None:
        self.warn(_format(fmt, args))

    def error(self, *args: Any) -> None:
        self.println(colored(_sprint(args), "red"))

    def errorf(self, fmt: str, *args: Any) -> None:
        self.error(_format(fmt, args))

    def fatal(self, *args: Any) -> None:
        """Log the message and exit with status 1."""
        self.println(colored(_sprint(args), "magenta"))
        raise SystemExit(1)

    def fatalf(self, fmt: str, *args: Any) -> None:
        self.fatal(_format(fmt, args))


_shared = Logger()
_log_file: Optional[IO[str]] = None


def set_logger(log_path: str) -> None:
    """Send shared log output to ``log_path`` as well as standard output."""
    global _shared, _log_file
    handle = open(log_path, "a", encoding="utf-8")
    if _log_file is not None:
        _log_file.close()
    _log_file = handle
    _shared = Logger(_Tee(handle), "")


def tag(name: str) -> Logger:
    """Return the shared logger tagged with ``[name]``."""
    return _shared.tag(colored(f"[{name}] ", "cyan"))


def debug(*args: Any) -> None:
    _shared.debug(*args)


def info(*args: Any) -> None:
    _shared.info(*args)


def infof(fmt: str, *args: Any) -> None:
    _shared.infof(fmt, *args)


def warn(*args: Any) -> None:
    _shared.warn(*args)


def error(*args: Any) -> None:
    _shared.error(*args)


def errorf(fmt: str, *args: Any) -> None:
    _shared.errorf(fmt, *args)


def fatal(*args: Any) -> None:
    _shared.fatal(*args)