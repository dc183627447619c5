"""Microsoft SQL Server exports through sqlpackage."""

from __future__ import annotations

from backupkit import helper, log
from backupkit.database.base import Database
from backupkit.helper import ExecError

SQLPACKAGE_CLI = "sqlpackage"


class MSSQL(Database):
    """Settings: host, port, database, username, password,
    trustServerCertificate, args."""

    host: str = ""
    port: str = ""
    database: str = ""
    username: str = ""
    password: str = ""
    trust_server_certificate: bool = False
    args: str = ""

    def configure(self) -> None:
        settings = self.settings
        settings.set_default("trustServerCertificate", False)
        settings.set_default("host", "127.0.0.1")
        settings.set_default("port", 1433)
        settings.set_default("username", "sa")

        self.host = settings.get_string("host")
        self.port = settings.get_string("port")
        self.database = settings.get_string("database")
        self.username = settings.get_string("username")
        self.password = settings.get_string("password")
        self.trust_server_certificate = settings.get_bool("trustServerCertificate")
        self.args = settings.get_string("args")

    def build(self) -> str:
        """Return the sqlpackage export command line."""
        return (
            f"{SQLPACKAGE_CLI} /Action:Export "
            f"{self._name_option()} "
            f"{self._credential_options()} "
            f"{self._connectivity_options()} "
            f"{self._addition_options()} "
            f"/TargetFile:{self.dump_path}/{self.database}.bacpac"
        )

    def _name_option(self) -> str:
        return "/SourceDatabaseName:" + self.database

    def _credential_options(self) -> str:
        opts = []
        if self.username:
            opts.append("/SourceUser:" + self.username)
        if self.password:
            opts.append("/SourcePassword:" + self.password)
        return " ".join(opts)

    def _connectivity_options(self) -> str:
        host = self.host or "127.0.0.1"
        port = self.port or "1433"
        return f"/SourceServerName:{host},{port}"

    def _addition_options(self) -> str:
        opts = []
        if self.trust_server_certificate:
            opts.append("/SourceTrustServerCertificate:True")
        if self.args:
            opts.append(self.args)
        return " ".join(opts)

    def perform(self) -> None:
        logger = log.tag("MSSQL")
        try:
            out = helper.run(self.build())
        except ExecError as exc:
            raise ExecError(f"-> Dump error: {exc}") from exc
        logger.info(out)
        logger.info("dump path:", self.dump_path)