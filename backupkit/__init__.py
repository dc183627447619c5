"""Build backup packages by dumping databases, archiving, compressing and encrypting files."""

__version__ = "0.1.0"