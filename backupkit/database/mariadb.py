"""MariaDB physical backups through mariadb-backup."""

from __future__ import annotations

from backupkit import helper, log
from backupkit.database.base import Database
from backupkit.helper import ExecError


class MariaDB(Database):
    """Settings: host, port, socket, database, username, password, args."""

    host: str = ""
    port: str = ""
    socket: str = ""
    database: str = ""
    username: str = ""
    password: str = ""
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
        self.args = settings.get_string("args")

        if self.socket:
            self.host = ""
            self.port = ""

    def build(self) -> str:
        """Return the mariadb-backup command line."""
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
        if self.args:
            args.append(self.args)
        if self.database:
            args.append("--databases=" + self.database)
        args.append("--target-dir=" + self.dump_path)

        return "mariadb-backup --backup " + " ".join(args)

    def perform(self) -> None:
        logger = log.tag("MariaDB")
        logger.info("-> Dumping MariaDB...")
        try:
            helper.run(self.build())
        except ExecError as exc:
            raise ExecError(f"-> Dump error: {exc}") from exc
        logger.info("dump path:", self.dump_path)