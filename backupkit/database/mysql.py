"""MySQL dumps through mysqldump."""

from __future__ import annotations

from collections.abc import Sequence

from backupkit import helper, log
from backupkit.database.base import Database
from backupkit.helper import ExecError


class MySQL(Database):
    """Settings: host, port, socket, database, username, password, tables,
    exclude_tables, args."""

    host: str = ""
    port: str = ""
    socket: str = ""
    database: str = ""
    username: str = ""
    password: str = ""
    tables: Sequence[str] = ()
    exclude_tables: Sequence[str] = ()
    args: str = ""

    def configure(self) -> None:
        settings = self.settings
        settings.set_default("host", "127.0.0.1")
        settings.set_default("username", "root")
        settings.set_default("port", 3306)

        self.host = settings.get_string("host")
        self.port = settings.get_string("port")
        self.socket = settings.get_string("socket")
        self.database = settings.get_string("database")
        self.username = settings.get_string("username")
        self.password = settings.get_string("password")
        self.tables = settings.get_string_list("tables")
        self.exclude_tables = settings.get_string_list("exclude_tables")
        self.args = settings.get_string("args")

        if not self.database:
            raise ValueError("mysql database config is required")

        if self.socket:
            self.host = ""
            self.port = ""

    def build(self) -> str:
        """Return the mysqldump command line."""
        args: list[str] = []
        if self.host:
            args += ["--host", self.host]
        if self.port:
            args += ["--port", self.port]
        if self.socket:
            args += ["--socket", self.socket]
        if self.username:
            args += ["-u", self.username]
        if self.password:
            args.append("-p" + self.password)

        args += [f"--ignore-table={self.database}.{table}" for table in self.exclude_tables]

        if self.args:
            args.append(self.args)

        args.append(self.database)
        args += self.tables

        dump_file_path = self._join(self.dump_path, self.database + ".sql")
        args.append("--result-file=" + dump_file_path)

        return "mysqldump " + " ".join(args)

    def perform(self) -> None:
        logger = log.tag("MySQL")
        logger.info("-> Dumping MySQL...")
        try:
            helper.run(self.build())
        except ExecError as exc:
            raise ExecError(f"-> Dump error: {exc}") from exc
        logger.info("dump path:", self.dump_path)