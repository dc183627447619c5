"""etcd snapshots through etcdctl."""

from __future__ import annotations

from collections.abc import Sequence

from backupkit import helper, log
from backupkit.database.base import Database


class Etcd(Database):
    """Settings: endpoint, endpoints (deprecated), args."""

    endpoint: str = ""
    endpoints: Sequence[str] = ()
    args: str = ""
    dump_file_path: str = ""

    def configure(self) -> None:
        settings = self.settings
        self.endpoint = settings.get_string("endpoint")
        self.endpoints = settings.get_string_list("endpoints")
        self.args = settings.get_string("args")

        if not self.endpoint and not self.endpoints:
            raise ValueError("etcd endpoint config is required")

        if self.endpoint and self.endpoints:
            raise ValueError("etcd `endpoint` and `endpoints` config are mutually exclusive")

        if not self.endpoint:
            log.warn("DEPRECATED: `endpoints` is deprecated, use `endpoint` instead.")
            log.warn("The first element of endpoints will be used.")
            self.endpoint = self.endpoints[0]

        self.dump_file_path = self._join(self.dump_path + "-" + self.endpoint)

    def build(self) -> str:
        """Return the etcdctl snapshot command line."""
        args = ["snapshot save", self.dump_file_path]
        if self.endpoint:
            args.append("--endpoints " + self.endpoint)
        if self.args:
            args.append(self.args)
        return "etcdctl " + " ".join(args)

    def perform(self) -> None:
        logger = log.tag("etcd")
        logger.info("-> Getting snapshot from etcd...")
        helper.run(self.build())
        logger.info("snapshot path: ", self.dump_file_path)