"""PostgreSQL dumps through pg_dump."""

from __future__ import annotations

import os
import posixpath
from collections.abc import Sequence

from backupkit import helper, log
from backupkit.database.base import Database

COMPRESSION_EXT = {
    "gzip": "gz",
    "lz4": "lz4",
    "zstd": "zst",
}


def _dirname(path: str) -> str:
    """Return the directory part of ``path``, ``.`` when there is none."""
    head = posixpath.dirname(path)
    if not head:
        return "."
    cleaned = posixpath.normpath(head)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def _extension(path: str) -> str:
    """Return the extension of the last path element, including the dot."""
    tail = path[path.rfind("/") + 1:]
    dot = tail.rfind(".")
    return tail[dot:] if dot >= 0 else ""


class PostgreSQL(Database):
    """Settings: host, port, socket, database, username, password, tables,
    exclude_tables, compress, args."""

    host: str = ""
    port: str = ""
    socket: str = ""
    database: str = ""
    username: str = ""
    password: str = ""
    tables: Sequence[str] = ()
    exclude_tables: Sequence[str] = ()
    compress: str = ""
    format: str = ".sql"
    args: str = ""
    dump_file_path: str = ""

    def configure(self) -> None:
        settings = self.settings
        settings.set_default("host", "localhost")
        settings.set_default("port", 5432)

        self.host = settings.get_string("host")
        self.port = settings.get_string("port")
        self.socket = settings.get_string("socket")
        self.database = settings.get_string("database")
        self.username = settings.get_string("username")
        self.password = settings.get_string("password")
        self.tables = settings.get_string_list("tables")
        self.exclude_tables = settings.get_string_list("exclude_tables")
        self.compress = settings.get_string("compress")
        self.format = ".sql"
        self.args = settings.get_string("args")

        if not self.database:
            raise ValueError("PostgreSQL database config is required")

        if self.compress:
            compression = self.compress.split(":")[0]
            if compression not in COMPRESSION_EXT:
                raise ValueError(f"PostgreSQL compression type is not allowed: {compression}")
            self.format = f"{self.format}.{COMPRESSION_EXT[compression]}"

        self.dump_file_path = self._join(self.dump_path, self.database + self.format)

        if self.socket:
            self.host = ""
            self.port = ""

    def build(self) -> str:
        """Return the pg_dump command line."""
        args: list[str] = []
        if self.host:
            args.append("--host=" + self.host)
        if self.port:
            args.append("--port=" + self.port)
        if self.socket:
            host = _dirname(self.socket)
            port = _extension(self.socket).removeprefix(".")
            args += ["--host=" + host, "--port=" + port]
        if self.username:
            args.append("--username=" + self.username)

        if self.tables:
            args.append("--table=" + " --table=".join(self.tables))
        if self.exclude_tables:
            args.append("--exclude-table=" + " --exclude-table=".join(self.exclude_tables))

        if self.compress:
            args += ["--compress=" + self.compress, "--format=custom"]

        if self.args:
            args.append(self.args)

        args.append(self.database)
        args += ["-f", self.dump_file_path]

        return "pg_dump " + " ".join(args)

    def perform(self) -> None:
        logger = log.tag("PostgreSQL")
        logger.info("-> Dumping PostgreSQL...")
        if self.password:
            os.environ["PGPASSWORD"] = self.password
        helper.run(self.build())
        logger.info("dump path:", self.dump_file_path)