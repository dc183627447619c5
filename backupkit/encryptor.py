"""Encrypt the archive with openssl."""

from __future__ import annotations

from backupkit import helper, log
from backupkit.helper import ExecError
from backupkit.settings import ModelConfig, Settings


class OpenSSL:
    """Symmetric encryption through ``openssl <cipher>``."""

    def __init__(self, archive_path: str, settings: Settings) -> None:
        settings.set_default("salt", True)
        settings.set_default("base64", False)
        settings.set_default("args", "")
        settings.set_default("chiper", "aes-256-cbc")

        self.archive_path = archive_path
        self.settings = settings
        self.salt = settings.get_bool("salt")
        self.base64 = settings.get_bool("base64")
        self.password = settings.get_string("password")
        self.args = settings.get_string("args")
        self.cipher = settings.get_string("chiper")
        self.encrypt_path = archive_path + ".enc"

    def options(self) -> list[str]:
        opts = [self.cipher]
        if self.base64:
            opts.append("-base64")
        if self.salt:
            opts.append("-salt")
        if self.args:
            opts.append(self.args)
        opts += ["-k", self.password]
        return opts

    def perform(self) -> str:
        """Encrypt the archive and return the path of the encrypted file."""
        if not self.password:
            raise ValueError("password option is required")

        opts = self.options() + ["-in", self.archive_path, "-out", self.encrypt_path]
        try:
            helper.run("openssl", *opts)
        except ExecError as exc:
            raise ExecError(
                f"OpenSSL encrypt failed: {str(exc).strip()} `openssl {' '.join(opts)}`"
            ) from exc
        return self.encrypt_path


def run(archive_path: str, model: ModelConfig) -> str:
    """Encrypt ``archive_path`` if the model asks for it; return the resulting path."""
    logger = log.tag("Encryptor")

    if model.encrypt_with.type != "openssl":
        return archive_path

    encryptor = OpenSSL(archive_path, model.encrypt_with.settings)
    logger.info("encrypt | " + model.encrypt_with.type)
    encrypt_path = encryptor.perform()
    logger.info("encrypted:", encrypt_path)

    model.settings.set("Ext", model.settings.get_string("Ext") + ".enc")
    return encrypt_path