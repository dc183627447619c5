"""Pack the dump directory into a (possibly compressed) tar file."""

from __future__ import annotations

import os
import shutil
from datetime import datetime

from backupkit import helper, log
from backupkit.settings import ModelConfig

_FORMATS: dict[tuple[str, ...], tuple[str, str]] = {
    ("gz", "tgz", "taz", "tar.gz"): (".tar.gz", "pigz"),
    ("Z", "taZ", "tar.Z"): (".tar.Z", ""),
    ("bz2", "tbz", "tbz2", "tar.bz2"): (".tar.bz2", "pbzip2"),
    ("lz", "tar.lz"): (".tar.lz", ""),
    ("lzma", "tlz", "tar.lzma"): (".tar.lzma", ""),
    ("lzo", "tar.lzo"): (".tar.lzo", ""),
    ("xz", "txz", "tar.xz"): (".tar.xz", "pixz"),
    ("zst", "tzst", "tar.zst"): (".tar.zst", ""),
    ("tar", ""): (".tar", ""),
}

_LOOKUP = {name: fmt for names, fmt in _FORMATS.items() for name in names}


def resolve_format(compress_type: str) -> tuple[str, str]:
    """Return ``(extension, parallel_program)`` for a compress type.

    The parallel program is an empty string when there is none.
    """
    try:
        return _LOOKUP[compress_type]
    except KeyError:
        raise ValueError(f"Unsupported compress type: {compress_type}") from None


class TarCompressor:
    """Creates the archive with tar, using a parallel compressor when available."""

    def __init__(self, model: ModelConfig, ext: str = ".tar", parallel_program: str = "") -> None:
        self.model = model
        self.name = model.name
        self.ext = ext
        self.parallel_program = parallel_program

    def archive_file_path(self, ext: str) -> str:
        """Return a timestamped archive path inside the model's temp directory."""
        stamp = datetime.now().strftime("%Y.%m.%d.%H.%M.%S")
        return os.path.join(self.model.temp_path, stamp + ext)

    def options(self) -> list[str]:
        opts = ["--ignore-failed-read"] if helper.is_gnu_tar() else []
        program = shutil.which(self.parallel_program) if self.parallel_program else None
        if program:
            opts += ["--use-compress-program", program]
        else:
            opts.append("-a")
        opts.append("-cf")
        return opts

    def perform(self) -> str:
        """Create the archive and return its path."""
        file_path = self.archive_file_path(self.ext)
        helper.run("tar", *self.options(), file_path, self.name)
        return file_path


def run(model: ModelConfig) -> str:
    """Compress the model's dump directory and return the archive path."""
    logger = log.tag("Compressor")

    compress_type = model.compress_with.type or "tar"
    ext, parallel_program = resolve_format(model.compress_with.type)

    model.settings.set("Ext", ext)
    compressor = TarCompressor(model, ext, parallel_program)

    logger.info("=> Compress | " + compress_type)

    try:
        helper.mkdir_p(model.dump_path)
    except OSError as exc:
        logger.errorf("Failed to mkdir dump path %s: %s", model.dump_path, exc)
        raise

    try:
        os.chdir(os.path.join(model.dump_path, ".."))
    except OSError as exc:
        raise OSError(f"chdir to dump path: {model.dump_path}: {exc}") from exc

    archive_path = compressor.perform()
    logger.info("->", archive_path)
    return archive_path