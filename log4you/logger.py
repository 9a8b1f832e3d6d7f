"""Logger set-up from a YAML configuration with appenders, encoders and loggers."""

from __future__ import annotations

import logging
import logging.handlers
import re
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from .log_id import from_log_id

__all__ = [
    "LoggerInitError",
    "Logger",
    "translate_pattern",
    "parse_size",
    "build_dict_config",
    "load_config",
]

DEFAULT_CONFIG_PATH = "../config/log4you.yaml"
DEFAULT_TARGET = "log4you"
DEFAULT_PATTERN = "{d} {l} {t} - {m}{n}"

_SIMPLE_TOKENS = {
    "l": "%(levelname)s",
    "level": "%(levelname)s",
    "m": "%(message)s",
    "message": "%(message)s",
    "f": "%(pathname)s",
    "file": "%(pathname)s",
    "L": "%(lineno)d",
    "line": "%(lineno)d",
    "M": "%(module)s",
    "module": "%(module)s",
    "t": "%(name)s",
    "target": "%(name)s",
    "T": "%(threadName)s",
    "thread": "%(threadName)s",
    "I": "%(thread)d",
    "thread_id": "%(thread)d",
    "P": "%(process)d",
    "pid": "%(process)d",
    "n": "\n",
}

_LEVELS = {
    "off": logging.CRITICAL + 10,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}

_SIZE_UNITS = {
    "": 1,
    "b": 1,
    "kb": 1024,
    "kib": 1024,
    "mb": 1024**2,
    "mib": 1024**2,
    "gb": 1024**3,
    "gib": 1024**3,
    "tb": 1024**4,
    "tib": 1024**4,
}


class LoggerInitError(RuntimeError):
    """Raised when the logging configuration is missing or invalid."""


def _translate(pattern: str) -> tuple[str, str | None]:
    out: list[str] = []
    datefmt: str | None = None
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "{":
            if pattern.startswith("{{", i):
                out.append("{")
                i += 2
                continue
            j = i + 1
            while j < len(pattern) and (pattern[j].isalnum() or pattern[j] == "_"):
                j += 1
            name = pattern[i + 1 : j]
            arg: str | None = None
            if j < len(pattern) and pattern[j] == "(":
                depth = 0
                start = j + 1
                while j < len(pattern):
                    if pattern[j] == "(":
                        depth += 1
                    elif pattern[j] == ")":
                        depth -= 1
                        if depth == 0:
                            break
                    j += 1
                if j >= len(pattern):
                    raise ValueError(f"unbalanced parenthesis in pattern {pattern!r}")
                arg = pattern[start:j]
                j += 1
            end = pattern.find("}", j)
            if end == -1:
                raise ValueError(f"unterminated placeholder in pattern {pattern!r}")
            text, inner_datefmt = _render(name, arg)
            out.append(text)
            if inner_datefmt is not None:
                datefmt = inner_datefmt
            i = end + 1
        elif char == "}":
            if pattern.startswith("}}", i):
                out.append("}")
                i += 2
                continue
            raise ValueError(f"unmatched '}}' in pattern {pattern!r}")
        elif char == "%":
            out.append("%%")
            i += 1
        else:
            out.append(char)
            i += 1
    return "".join(out), datefmt


def _render(name: str, arg: str | None) -> tuple[str, str | None]:
    if name in ("d", "date"):
        return "%(asctime)s", arg or None
    if name in ("h", "highlight"):
        return _translate(arg or "")
    if name in _SIMPLE_TOKENS:
        return _SIMPLE_TOKENS[name], None
    raise ValueError(f"unknown pattern placeholder {name!r}")


def translate_pattern(pattern: str) -> tuple[str, str | None]:
    """Turn an encoder pattern into a logging format string and a date format."""
    fmt, datefmt = _translate(pattern)
    if fmt.endswith("\n"):
        fmt = fmt[:-1]
    return fmt, datefmt


def _chrono_strftime(moment: datetime, datefmt: str) -> str:
    def fraction(match: re.Match[str]) -> str:
        digits = int(match.group(1)) if match.group(1) else 6
        nanos = f"{moment.microsecond:06d}000"
        return "." + nanos[:digits]

    text = re.sub(r"%\.(\d?)f", fraction, datefmt)
    offset = moment.strftime("%z")
    text = text.replace("%:z", f"{offset[:3]}:{offset[3:]}" if offset else "")
    return moment.strftime(text)


class _PatternFormatter(logging.Formatter):
    def __init__(self, pattern: str = DEFAULT_PATTERN) -> None:
        fmt, datefmt = translate_pattern(pattern)
        super().__init__(fmt, datefmt)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        moment = datetime.fromtimestamp(record.created).astimezone()
        if not datefmt:
            return moment.isoformat()
        return _chrono_strftime(moment, datefmt)


class _FixedWindowHandler(logging.handlers.RotatingFileHandler):
    def __init__(self, path: str, max_bytes: int, count: int, pattern: str, base: int) -> None:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        self._window_pattern = pattern
        self._window_base = base
        super().__init__(path, maxBytes=max_bytes, backupCount=count, encoding="utf-8")

    def rotation_filename(self, default_name: str) -> str:
        index = int(default_name.rsplit(".", 1)[1])
        name = self._window_pattern.replace("{}", str(index - 1 + self._window_base))
        Path(name).parent.mkdir(parents=True, exist_ok=True)
        return name


def _file_handler(path: str, append: bool) -> logging.FileHandler:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a" if append else "w", encoding="utf-8")


def _console_handler(target: str) -> logging.StreamHandler:
    return logging.StreamHandler(sys.stdout if target == "stdout" else sys.stderr)


def parse_size(limit: Any) -> int:
    """Parse a size limit such as ``100MB`` or ``512`` into bytes (1024-based units)."""
    if isinstance(limit, bool):
        raise ValueError(f"invalid size {limit!r}")
    if isinstance(limit, int):
        if limit < 0:
            raise ValueError(f"invalid size {limit!r}")
        return limit
    match = re.fullmatch(r"\s*(\d+)\s*([a-zA-Z]*)\s*", str(limit))
    if not match or match.group(2).lower() not in _SIZE_UNITS:
        raise ValueError(f"invalid size {limit!r}")
    return int(match.group(1)) * _SIZE_UNITS[match.group(2).lower()]


def _level(value: Any) -> int:
    level = _LEVELS.get(str(value).lower())
    if level is None:
        raise LoggerInitError(f"unknown log level {value!r}")
    return level


def _logger_name(name: str) -> str:
    return name.replace("::", ".")


def _handler_config(name: str, spec: Any) -> dict[str, Any]:
    if not isinstance(spec, dict):
        raise LoggerInitError(f"appender {name!r} must be a mapping")
    kind = spec.get("kind")
    encoder = spec.get("encoder") or {}
    pattern = encoder.get("pattern", DEFAULT_PATTERN) if isinstance(encoder, dict) else DEFAULT_PATTERN
    try:
        translate_pattern(pattern)
    except ValueError as exc:
        raise LoggerInitError(f"appender {name!r}: {exc}") from exc
    handler: dict[str, Any] = {"formatter": f"{name}__formatter"}
    if kind == "console":
        target = spec.get("target", "stdout")
        if target not in ("stdout", "stderr"):
            raise LoggerInitError(f"appender {name!r}: unknown console target {target!r}")
        handler.update({"()": _console_handler, "target": target})
    elif kind == "file":
        if "path" not in spec:
            raise LoggerInitError(f"appender {name!r} needs a path")
        handler.update({"()": _file_handler, "path": str(spec["path"]), "append": bool(spec.get("append", True))})
    elif kind == "rolling_file":
        if "path" not in spec:
            raise LoggerInitError(f"appender {name!r} needs a path")
        policy = spec.get("policy") or {}
        trigger = policy.get("trigger") or {}
        roller = policy.get("roller") or {}
        if trigger.get("kind", "size") != "size":
            raise LoggerInitError(f"appender {name!r}: unsupported trigger {trigger.get('kind')!r}")
        if roller.get("kind", "fixed_window") != "fixed_window":
            raise LoggerInitError(f"appender {name!r}: unsupported roller {roller.get('kind')!r}")
        try:
            max_bytes = parse_size(trigger.get("limit", 0))
        except ValueError as exc:
            raise LoggerInitError(f"appender {name!r}: {exc}") from exc
        path = str(spec["path"])
        handler.update(
            {
                "()": _FixedWindowHandler,
                "path": path,
                "max_bytes": max_bytes,
                "count": int(roller.get("count", 1)),
                "pattern": str(roller.get("pattern", path + ".{}")),
                "base": int(roller.get("base", 0)),
            }
        )
    else:
        raise LoggerInitError(f"appender {name!r}: unknown kind {kind!r}")
    return handler


def build_dict_config(config: Any) -> dict[str, Any]:
    """Build a logging configuration dictionary from a parsed YAML configuration."""
    if not isinstance(config, dict):
        raise LoggerInitError("configuration must be a mapping")
    appenders = config.get("appenders") or {}
    if not isinstance(appenders, dict):
        raise LoggerInitError("'appenders' must be a mapping")
    formatters: dict[str, Any] = {}
    handlers: dict[str, Any] = {}
    for name, spec in appenders.items():
        handlers[name] = _handler_config(name, spec)
        pattern = (spec.get("encoder") or {}).get("pattern", DEFAULT_PATTERN)
        formatters[f"{name}__formatter"] = {"()": _PatternFormatter, "pattern": pattern}

    def appender_list(section: dict[str, Any], owner: str) -> list[str]:
        names = list(section.get("appenders") or [])
        for appender in names:
            if appender not in handlers:
                raise LoggerInitError(f"{owner} refers to unknown appender {appender!r}")
        return names

    root = config.get("root") or {}
    if not isinstance(root, dict):
        raise LoggerInitError("'root' must be a mapping")
    result: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "handlers": handlers,
        "root": {"level": _level(root.get("level", "debug")), "handlers": appender_list(root, "root")},
        "loggers": {},
    }
    loggers = config.get("loggers") or {}
    if not isinstance(loggers, dict):
        raise LoggerInitError("'loggers' must be a mapping")
    for name, spec in loggers.items():
        spec = spec or {}
        entry: dict[str, Any] = {
            "handlers": appender_list(spec, f"logger {name!r}"),
            "propagate": bool(spec.get("additive", True)),
        }
        if "level" in spec:
            entry["level"] = _level(spec["level"])
        result["loggers"][_logger_name(str(name))] = entry
    return result


def load_config(path: str | Path) -> dict[str, Any]:
    """Read a YAML configuration file and return it as a configuration dictionary."""
    try:
        with open(path, encoding="utf-8") as stream:
            data = yaml.safe_load(stream)
    except (OSError, yaml.YAMLError) as exc:
        raise LoggerInitError(f"cannot read {path}: {exc}") from exc
    return build_dict_config(data)


def _instantiate(spec: dict[str, Any]) -> Any:
    kwargs = dict(spec)
    factory = kwargs.pop("()")
    return factory(**kwargs)


_installed_handlers: list[logging.Handler] = []


def _apply_config(config: dict[str, Any]) -> None:
    formatters = {name: _instantiate(spec) for name, spec in config["formatters"].items()}
    handlers: dict[str, logging.Handler] = {}
    try:
        for name, spec in config["handlers"].items():
            spec = dict(spec)
            formatter = spec.pop("formatter", None)
            handler = _instantiate(spec)
            if formatter is not None:
                handler.setFormatter(formatters[formatter])
            handlers[name] = handler
    except Exception:
        for handler in handlers.values():
            handler.close()
        raise

    def reset(logger: logging.Logger) -> None:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)

    root = logging.getLogger()
    reset(root)
    root.setLevel(config["root"]["level"])
    for name in config["root"]["handlers"]:
        root.addHandler(handlers[name])

    for logger_name, entry in config["loggers"].items():
        logger = logging.getLogger(logger_name)
        reset(logger)
        logger.setLevel(entry.get("level", logging.NOTSET))
        logger.propagate = entry["propagate"]
        for name in entry["handlers"]:
            logger.addHandler(handlers[name])

    for handler in _installed_handlers:
        handler.close()
    _installed_handlers[:] = handlers.values()


class Logger:
    """Process-wide logging set-up and the service name used as log target."""

    _target: str = DEFAULT_TARGET
    _lock = threading.RLock()

    @classmethod
    def init(
        cls,
        log_id: str,
        config_path: str | Path | None = None,
        service_name: str | None = None,
    ) -> None:
        """Configure logging from a YAML file; raise LoggerInitError on failure."""
        with cls._lock:
            if service_name is not None:
                cls._target = service_name
            path = Path(config_path) if config_path is not None else Path(DEFAULT_CONFIG_PATH)
            if not path.exists():
                message = f"log_id={log_id}, Warning: Config file {path} not found. Exiting."
                print(message, file=sys.stderr)
                raise LoggerInitError(message)
            try:
                _apply_config(load_config(path))
            except (LoggerInitError, ValueError, TypeError, OSError) as exc:
                message = f"log_id={log_id}, Logger init error: {exc}. Exiting."
                print(message, file=sys.stderr)
                raise LoggerInitError(message) from exc
            logging.getLogger(__name__).info("log_id=%s, Logger initialized from %s", log_id, path)
            from_log_id(log_id)

    @classmethod
    def target(cls) -> str:
        """Return the current log target name."""
        with cls._lock:
            return cls._target