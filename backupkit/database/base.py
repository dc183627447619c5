"""Shared behaviour of database dumpers and the before/after script hooks."""

from __future__ import annotations

import posixpath
import shlex
from abc import ABC, abstractmethod

from backupkit import helper, log
from backupkit.helper import ExecError
from backupkit.settings import ModelConfig, SubConfig


class Database(ABC):
    """A database dumper writing into ``<dump_path>/<type>/<name>``."""

    def __init__(self, model: ModelConfig, db_config: SubConfig) -> None:
        self.model = model
        self.db_config = db_config
        self.settings = db_config.settings
        self.name = db_config.name
        self.dump_path = self._join(model.dump_path, db_config.type, self.name)
        try:
            helper.mkdir_p(self.dump_path)
        except OSError as exc:
            log.errorf("Failed to mkdir dump path %s: %s", self.dump_path, exc)

    @staticmethod
    def _join(*parts: str) -> str:
        """Join slash-separated path parts, skipping empty ones, and normalise."""
        joined = "/".join(part for part in parts if part)
        if not joined:
            return ""
        cleaned = posixpath.normpath(joined)
        if cleaned.startswith("//"):
            cleaned = "/" + cleaned.lstrip("/")
        return cleaned

    @abstractmethod
    def configure(self) -> None:
        """Read the settings and validate them; raise ValueError when invalid."""

    @abstractmethod
    def perform(self) -> None:
        """Dump the database into the dump path."""


def run_hook(action: str, script: str) -> None:
    """Run a hook script; a leading ``-`` makes its failures non-fatal."""
    logger = log.tag("Database")
    if not script:
        return

    logger.infof("Run %s", action)
    ignore_error = script.startswith("-")
    script = script[1:] if ignore_error else script

    try:
        parts = shlex.split(script)
        if not parts:
            raise ValueError("empty command")
    except ValueError as exc:
        if ignore_error:
            logger.infof("Skip %s with error: %s", action, exc)
            return
        raise

    try:
        helper.run(parts[0], *parts[1:])
    except ExecError as exc:
        if ignore_error:
            logger.infof("Run %s failed: %s, ignore it", action, exc)
            return
        raise ExecError(f"Run {action} failed: {exc}") from exc

    logger.infof("Run %s succeeded", action)