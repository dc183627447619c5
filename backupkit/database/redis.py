"""Redis backups by copying the RDB file or syncing it through redis-cli."""

from __future__ import annotations

import enum

from backupkit import helper, log
from backupkit.database.base import Database
from backupkit.helper import ExecError


class RedisMode(enum.Enum):
    """How the RDB file is obtained."""

    SYNC = "sync"
    COPY = "copy"


class Redis(Database):
    """Settings: mode, invoke_save, host, port, socket, password, rdb_path, args."""

    host: str = ""
    port: str = ""
    socket: str = ""
    password: str = ""
    mode: RedisMode = RedisMode.COPY
    invoke_save: bool = False
    rdb_path: str = ""
    args: str = ""
    dump_file_path: str = ""

    def configure(self) -> None:
        settings = self.settings
        settings.set_default("rdb_path", "/var/db/redis/dump.rdb")
        settings.set_default("host", "127.0.0.1")
        settings.set_default("port", "6379")
        settings.set_default("invoke_save", True)
        settings.set_default("mode", "copy")

        self.host = settings.get_string("host")
        self.port = settings.get_string("port")
        self.socket = settings.get_string("socket")
        self.password = settings.get_string("password")
        self.rdb_path = settings.get_string("rdb_path")
        self.invoke_save = settings.get_bool("invoke_save")
        self.args = settings.get_string("args")

        mode = settings.get_string("mode")
        if mode == "copy":
            self.invoke_save = False

        if self.socket:
            self.host = ""
            self.port = ""

        self.mode = RedisMode.SYNC if mode == "sync" else RedisMode.COPY
        self.dump_file_path = self._join(self.dump_path, "dump.rdb")

    def build(self) -> str:
        """Return the copy command or the redis-cli command line."""
        if self.mode is RedisMode.COPY:
            return " ".join(["cp", self.rdb_path, self.dump_file_path])

        args = ["redis-cli"]
        if self.host:
            args.append("-h " + self.host)
        if self.port:
            args.append("-p " + self.port)
        if self.socket:
            args += ["-s", self.socket]
        if self.password:
            args.append("-a " + self.password)
        if self.args:
            args.append(self.args)
        args += ["--rdb", self.dump_file_path]
        return " ".join(args)

    def perform(self) -> None:
        if self.mode is RedisMode.COPY and not helper.is_exists_path(self.rdb_path):
            raise FileNotFoundError(f"Redis RDB file: {self.rdb_path} does not exist")

        self._try_save()

        if self.mode is RedisMode.COPY:
            self._copy()
        else:
            self._sync()

    def _try_save(self) -> None:
        if not self.invoke_save:
            return
        logger = log.tag("Redis")
        logger.info("Perform redis-cli save...")
        try:
            out = helper.run(self.build(), "SAVE")
        except ExecError as exc:
            raise ExecError(f"redis-cli SAVE failed {exc}") from exc
        if not out.strip().endswith("OK"):
            raise ExecError(f'failed to invoke the "SAVE" command Response was: {out}')

    def _sync(self) -> None:
        logger = log.tag("Redis")
        logger.info("Syncing redis dump to", self.dump_file_path)
        try:
            helper.run(self.build())
        except ExecError as exc:
            raise ExecError(f"dump redis error: {exc}") from exc
        if not helper.is_exists_path(self.dump_file_path):
            raise FileNotFoundError(f"dump result file {self.dump_file_path} not found")

    def _copy(self) -> None:
        logger = log.tag("Redis")
        logger.info("Copying redis dump to", self.dump_file_path)
        try:
            helper.run(self.build())
        except ExecError as exc:
            raise ExecError(f"copy redis dump file error: {exc}") from exc