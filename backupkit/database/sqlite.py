"""SQLite dumps through the sqlite3 shell."""

from __future__ import annotations

import posixpath

from backupkit import helper, log
from backupkit.database.base import Database


def _stem(path: str) -> str:
    """Return the file name of ``path`` without its last extension."""
    stripped = path.rstrip("/")
    base = posixpath.basename(stripped) if stripped else "/"
    tail = path[path.rfind("/") + 1:]
    dot = tail.rfind(".")
    ext = tail[dot:] if dot >= 0 else ""
    if ext and base.endswith(ext):
        return base[: -len(ext)]
    return base


class SQLite(Database):
    """Settings: path of the database file."""

    path: str = ""
    database: str = ""
    dump_file_path: str = ""

    def configure(self) -> None:
        self.path = helper.expand_home(self.settings.get_string("path"))
        if not self.path:
            raise ValueError(
                "SQLite `path` is required, you must special the path of the `.sqlite3` file"
            )
        self.database = _stem(self.path)
        self.dump_file_path = self._join(self.dump_path, self.database + ".sql")

    def build_args(self) -> list[str]:
        """Return the sqlite3 arguments that dump the database to a file."""
        return [self.path, f".output {self.dump_file_path}", ".dump"]

    def perform(self) -> None:
        logger = log.tag("SQLite")
        logger.info("-> Dumping SQLite...")
        helper.run("sqlite3", *self.build_args())
        logger.info("dump path:", self.dump_file_path)