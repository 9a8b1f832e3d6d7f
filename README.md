# log4you

Structured logging in which every entry carries a `log_id`: a time-ordered
UUID (version 7) written as 32 lower-case hex characters with no dashes. The
logging setup is read from a YAML file that lists appenders, a root logger
and named loggers, and is applied to Python's standard `logging` module.

## Installation

```
pip install log4you
```

## Usage

```python
from log4you.log_id import new_log_id
from log4you.logger import Logger
from log4you.macros import log_info, log_warn, log_info_with_id

log_id = new_log_id()
Logger.init(log_id, "config/log4you.yaml", "log4you")

log_info("Service started")                  # a fresh log_id for each entry
log_warn("Slow response: %d ms", 1200)

request_id = new_log_id()
log_info_with_id(request_id, "User %s logged in", "alice@example.com")
```

### Logging helpers (`log4you.macros`)

- `log_info`, `log_warn`, `log_error`, `log_debug` generate a new log ID for
  every call.
- `log_info_with_id`, `log_warn_with_id`, `log_error_with_id`,
  `log_debug_with_id` take the log ID as their first argument.

The message is formatted with `%` and any extra arguments, and the entry is
written as `log_id=<id>, <message>` to the logger named by `Logger.target()`
(with `::` turned into `.`).

### `log4you.logger`

- `Logger.init(log_id, config_path=None, service_name=None)` sets the log
  target to `service_name` when one is given, reads the YAML file and
  replaces the handlers of the root logger and of every configured logger.
  With no path it reads `../config/log4you.yaml`. When the file is missing or
  invalid, it prints a message that starts with `log_id=<id>` to standard
  error and raises `LoggerInitError`. On success it logs
  `Logger initialized from <path>` at INFO level.
- `Logger.target()` returns the current target name (default `"log4you"`).
- `load_config(path)` reads a YAML file and returns the configuration
  dictionary; `build_dict_config(config)` does the same for data already
  parsed.
- `translate_pattern(pattern)` turns an encoder pattern into a `logging`
  format string and a date format (or `None`).
- `parse_size(limit)` turns a size such as `100MB`, `512kb` or `2048` into
  bytes, using 1024-based units (`b`, `kb`/`kib`, `mb`/`mib`, `gb`/`gib`,
  `tb`/`tib`).

### `log4you.log_id`

- `uuid7()` returns a version 7 `uuid.UUID`.
- `new_log_id()` returns a new log ID as 32 hex characters.
- `from_log_id(log_id)` turns a 32-character log ID back into a `uuid.UUID`,
  and returns `None` when the text is not a valid log ID.

## Configuration

An example `config/log4you.yaml`:

```yaml
appenders:
  stdout:
    kind: console
    encoder:
      pattern: "[{d(%Y-%m-%dT%H:%M:%S%.6f)} {h({l})} {f}:{L}] - {m}{n}"

  log4you:
    kind: rolling_file
    path: "logs/log4you.log"
    policy:
      kind: compound
      trigger:
        kind: size
        limit: 100MB
      roller:
        kind: fixed_window
        pattern: "logs/log4you-{}.log"
        count: 5
    encoder:
      pattern: "[{d(%Y-%m-%dT%H:%M:%S%.6f)} {h({l})} {f}:{L}] - {m}{n}"

root:
  level: info
  appenders:
    - stdout

loggers:
  log4you:
    level: debug
    appenders:
      - log4you
```

### Appenders

- `console`: writes to `target`, either `stdout` (default) or `stderr`.
- `file`: writes to `path`; `append` (default `true`) chooses between
  appending and truncating.
- `rolling_file`: writes to `path` and rolls over once the file would exceed
  the size trigger's `limit`. The `fixed_window` roller keeps up to `count`
  (default 1) rolled files named by `pattern`, where `{}` is replaced by the
  index starting at `base` (default 0); the default pattern is
  `<path>.{}`. A limit of 0 never rolls over.

Missing parent directories of log files are created.

### Loggers and levels

`root` takes `level` (default `debug`) and `appenders`. Each entry under
`loggers` takes `level`, `appenders` and `additive` (default `true`, whether
entries also go to the parent loggers). Logger names may use `::` or `.` as
separator. Levels are `off`, `error`, `warn`/`warning`, `info`, `debug` and
`trace`, where `trace` is treated as `debug`.

### Encoder patterns

| Placeholder | Meaning |
|---|---|
| `{d}` / `{d(fmt)}`, `{date}` | timestamp, ISO 8601 by default or in the `strftime` format given; `%.f` / `%.Nf` give a fraction of a second, `%:z` the UTC offset with a colon |
| `{l}`, `{level}` | level name |
| `{m}`, `{message}` | message |
| `{f}`, `{file}` | path of the source file |
| `{L}`, `{line}` | line number |
| `{M}`, `{module}` | module |
| `{t}`, `{target}` | logger name |
| `{T}`, `{thread}` | thread name |
| `{I}`, `{thread_id}` | thread ID |
| `{P}`, `{pid}` | process ID |
| `{n}` | newline |
| `{h(...)}`, `{highlight(...)}` | the inner pattern, unchanged |
| `{{`, `}}` | literal braces |

Without an encoder the pattern is `{d} {l} {t} - {m}{n}`. A trailing newline
is dropped, since the handler adds one itself.

## Demo

```
log4you-demo [--config PATH] [--service NAME]
```

Reads `config/log4you.yaml` (or `--config`), uses `log4you` (or
`--service`) as the target, and writes one sample entry at each of INFO,
WARNING, ERROR and DEBUG plus one with a custom log ID. It exits with status
1 when the configuration cannot be loaded.

## Limitations

- Rolling files roll only on size; time-based triggers and rollers other than
  `fixed_window` are rejected, and rolled files are not compressed.
- `{h(...)}` does not colour its output.
- Configuration files are read once at `Logger.init`; changes to the file are
  not picked up while running.