[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "backupkit"
version = "0.1.0"
description = "Dump databases, archive files, compress and encrypt them into backup packages."
requires-python = ">=3.10"
dependencies = [
    "termcolor",
]
keywords = [
    "backup",
    "archive",
    "mysql",
    "mariadb",
    "postgresql",
    "redis",
    "sqlite",
    "mssql",
    "etcd",
    "tar",
    "openssl",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Backup",
    "Topic :: Database",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["backupkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
