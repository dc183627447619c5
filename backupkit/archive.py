"""Collect configured paths into a tar archive inside the dump directory."""

from __future__ import annotations

import posixpath
from collections.abc import Iterable

from backupkit import helper, log
from backupkit.settings import ModelConfig


def _clean(path: str) -> str:
    cleaned = posixpath.normpath(path)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def clean_paths(paths: Iterable[str]) -> list[str]:
    """Return ``paths`` in lexically normalised form."""
    return [_clean(p) for p in paths]


def options(dump_path: str, excludes: Iterable[str], includes: Iterable[str]) -> list[str]:
    """Build the tar arguments for archiving ``includes`` without ``excludes``."""
    tar_path = _clean(posixpath.join(dump_path, "archive.tar"))
    opts = ["--ignore-failed-read"] if helper.is_gnu_tar() else []
    opts += ["-cPf", tar_path]
    opts += [f"--exclude={_clean(exclude)}" for exclude in excludes]
    opts += list(includes)
    return opts


def run(model: ModelConfig) -> None:
    """Archive the model's included paths; nothing happens without an archive section."""
    logger = log.tag("Archive")

    if model.archive is None:
        return

    try:
        helper.mkdir_p(model.dump_path)
    except OSError as exc:
        logger.errorf("Failed to mkdir dump path %s: %s", model.dump_path, exc)
        raise

    includes = clean_paths(model.archive.get_string_list("includes"))
    excludes = clean_paths(model.archive.get_string_list("excludes"))

    if not includes:
        raise ValueError("archive.includes have no config")
    logger.info("=> includes", len(includes), "rules")

    helper.run("tar", *options(model.dump_path, excludes, includes))