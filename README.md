# backupkit

backupkit is a library for building backup packages out of databases and
files. For a model it dumps the databases, collects files into a tar
archive, packs the dump directory into a compressed tar file, and can
encrypt the result with OpenSSL. The work itself is done by the usual
command-line tools, which must be on `PATH` when they are needed:

| Step       | Tool                                                   |
|------------|--------------------------------------------------------|
| MySQL      | `mysqldump`                                            |
| MariaDB    | `mariadb-backup`                                       |
| PostgreSQL | `pg_dump`                                              |
| Redis      | `redis-cli` (sync mode) or `cp` (copy mode)            |
| SQLite     | `sqlite3`                                              |
| SQL Server | `sqlpackage`                                           |
| etcd       | `etcdctl`                                              |
| Archive    | `tar` (GNU tar gets `--ignore-failed-read`)            |
| Compress   | `tar`, plus `pigz`, `pbzip2` or `pixz` when available  |
| Encrypt    | `openssl`                                              |

backupkit needs Python 3.10 or later and depends on `termcolor`.

## Modules

- `backupkit.settings` – `Settings`, a key/value store with
  case-insensitive keys, defaults (`set_default`) and lenient getters
  (`get`, `get_string`, `get_bool`, `get_string_list`; a string given
  for a list is split on whitespace), and the `ModelConfig` and
  `SubConfig` dataclasses that describe a model and each of its
  sections.
- `backupkit.database` – one class per kind of database: `MySQL`,
  `MariaDB`, `PostgreSQL`, `Redis` (with `RedisMode.SYNC` and
  `RedisMode.COPY`), `SQLite`, `MSSQL` and `Etcd`, all built on
  `Database` in `backupkit.database.base`. Each has `configure()`, which
  reads and checks its settings (raising `ValueError` when invalid), a
  `build()` (or, for SQLite, `build_args()`) that returns the command,
  and `perform()`, which runs it. Creating one makes its dump directory,
  `<dump_path>/<type>/<name>`.
- `backupkit.database.base.run_hook(action, script)` – runs a hook
  script; a leading `-` makes its failures non-fatal.
- `backupkit.database.runner` – `run(model)` dumps every database of a
  model in order and stops at the first failure; `run_database(model,
  db_config)` dumps one. Each database may set `before_script`,
  `after_script` and `on_exit` (`always`, `success` or `failure`, which
  decides whether `after_script` runs when the dump fails). Unknown
  database types are logged as a warning and skipped.
- `backupkit.archive` – `run(model)` packs the model's `includes`, minus
  its `excludes`, into `archive.tar` in the dump directory; `options()`
  and `clean_paths()` build the tar arguments.
- `backupkit.compressor` – `resolve_format(compress_type)` maps a
  compress type (`gz`, `tgz`, `bz2`, `xz`, `zst`, `lz`, `lzma`, `lzo`,
  `Z`, `tar`, empty for plain tar, ...) to its extension and parallel
  program; `TarCompressor` writes the archive; `run(model)` changes the
  working directory to the parent of the dump path, writes a timestamped
  archive into `temp_path` and returns its path.
- `backupkit.encryptor` – `OpenSSL` builds and runs the `openssl`
  command (cipher `aes-256-cbc` and `-salt` by default);
  `run(archive_path, model)` encrypts when the model's `encrypt_with`
  type is `openssl` and returns the resulting path.
- `backupkit.helper` – `run` and `run_with_stdio` execute commands and
  raise `ExecError` when a command is missing or fails; also
  `is_exists_path`, `mkdir_p`, `expand_home`, `absolute_path`,
  `is_gnu_tar`, `clean_host` and `format_endpoint`.
- `backupkit.log` – `Logger` and module-level helpers (`tag`, `info`,
  `warn`, `error`, ...) writing timestamped, tagged, coloured lines;
  `set_logger(path)` also appends them to a file. Debug lines appear only
  when the `DEBUG` environment variable is `true`.

## Examples

Building a database dump command:

```python
from backupkit.database.mysql import MySQL
from backupkit.settings import ModelConfig, Settings, SubConfig

db_config = SubConfig(name="app", type="mysql", settings=Settings({"database": "app"}))
model = ModelConfig(name="daily", dump_path="/tmp/backup/daily", databases=[db_config])

db = MySQL(model, db_config)
db.configure()
print(db.build())
# mysqldump --host 127.0.0.1 --port 3306 -u root app --result-file=/tmp/backup/daily/mysql/app/app.sql
```

Building the tar options for an archive step:

```python
from backupkit import archive

opts = archive.options("/tmp/work", ["/home/me/.cache"], ["/home/me", "/etc/nginx"])
# with GNU tar:
# ['--ignore-failed-read', '-cPf', '/tmp/work/archive.tar',
#  '--exclude=/home/me/.cache', '/home/me', '/etc/nginx']
```

Inspecting the OpenSSL command line before encrypting:

```python
from backupkit.encryptor import OpenSSL
from backupkit.settings import Settings

enc = OpenSSL("/tmp/work/backup.tar.gz", Settings({"args": "-pbkdf2"}))
print(enc.options())
# ['aes-256-cbc', '-salt', '-pbkdf2', '-k', '']
```

`perform()` raises `ValueError` when no password is configured.

Small helpers:

```python
from backupkit import helper

helper.clean_host("ftp://files.example.com")   # 'files.example.com'
helper.format_endpoint("s3.example.com")        # 'https://s3.example.com'
helper.expand_home("~/backups")                 # '<HOME>/backups'
helper.run("head -n1", "/etc/hostname")         # first line of the file
```

Logging with a tag:

```python
from backupkit import log

log.tag("MySQL").info("-> Dumping MySQL...")
```

## What it does not do

backupkit is a library only. It has no command-line program, does not
read configuration files (models are built in code from `ModelConfig`
and `Settings`), does not schedule backups, and does not split, upload
or store the finished archive anywhere or send notifications; it stops
at the path of the archive that `compressor.run` or `encryptor.run`
returns.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.