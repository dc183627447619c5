"""Run every database dump of a model, with its before/after hooks."""

from __future__ import annotations

from backupkit import log
from backupkit.database.base import Database, run_hook
from backupkit.database.etcd import Etcd
from backupkit.database.mariadb import MariaDB
from backupkit.database.mssql import MSSQL
from backupkit.database.mysql import MySQL
from backupkit.database.postgresql import PostgreSQL
from backupkit.database.redis import Redis
from backupkit.database.sqlite import SQLite
from backupkit.settings import ModelConfig, SubConfig

DATABASES: dict[str, type[Database]] = {
    "mysql": MySQL,
    "mariadb": MariaDB,
    "redis": Redis,
    "postgresql": PostgreSQL,
    "sqlite": SQLite,
    "mssql": MSSQL,
    "etcd": Etcd,
}


def _run_after_on_failure(logger: log.Logger, after_script: str, on_exit: str) -> bool:
    """Decide whether the after script runs when the dump has failed."""
    if not after_script or not on_exit:
        return False
    if on_exit == "always":
        logger.info("on_exit is always, start to run after_script")
        return True
    if on_exit == "success":
        logger.info("on_exit is success, skip run after_script")
        return False
    if on_exit == "failure":
        logger.info("on_exit is failure, start to run after_script")
        return True
    return False


def run_database(model: ModelConfig, db_config: SubConfig) -> None:
    """Dump one database; unknown types are reported and skipped."""
    logger = log.tag("Database")

    db_class = DATABASES.get(db_config.type)
    if db_class is None:
        logger.warn(
            f"model: {model.name} databases.{db_config.name} config "
            f"`type: {db_config.type}`, but is not implement"
        )
        return

    db = db_class(model, db_config)
    logger.infof("=> database | %s: %s", db_config.type, db.name)

    settings = db_config.settings
    run_hook("dump before_script", settings.get_string("before_script"))

    after_script = settings.get_string("after_script")
    on_exit = settings.get_string("on_exit")

    db.configure()

    try:
        db.perform()
    except Exception:
        logger.info("Dump failed")
        if _run_after_on_failure(logger, after_script, on_exit):
            run_hook("dump after_script", after_script)
        raise

    logger.info("Dump succeeded")
    run_hook("dump after_script", after_script)


def run(model: ModelConfig) -> None:
    """Dump every database of the model in order, stopping at the first failure."""
    for db_config in model.databases:
        run_database(model, db_config)