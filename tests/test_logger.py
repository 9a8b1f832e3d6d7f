import logging

import pytest

from log4you.logger import (
    Logger,
    LoggerInitError,
    build_dict_config,
    load_config,
    parse_size,
    translate_pattern,
)

DOC_PATTERN = "[{d(%Y-%m-%dT%H:%M:%S%.6f)} {h({l})} {f}:{L}] - {m}{n}"


def _set_target(name, tmp_path):
    with pytest.raises(LoggerInitError):
        Logger.init("reset", str(tmp_path / "no-such-config.yaml"), name)


@pytest.fixture(autouse=True)
def restore_logging(tmp_path):
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    for name in ("log4you", "svc", "log4you.logger"):
        lg = logging.getLogger(name)
        for handler in lg.handlers:
            handler.close()
        lg.handlers.clear()
        lg.setLevel(logging.NOTSET)
        lg.propagate = True
    _set_target("log4you", tmp_path)


def _write_config(tmp_path, log_file):
    config = tmp_path / "log4you.yaml"
    config.write_text(
        "appenders:\n"
        "  file:\n"
        "    kind: file\n"
        f"    path: \"{log_file.as_posix()}\"\n"
        "    encoder:\n"
        "      pattern: \"{l} {t} {m}{n}\"\n"
        "root:\n"
        "  level: info\n"
        "  appenders:\n"
        "    - file\n"
    )
    return config


def test_translate_documented_pattern():
    fmt, datefmt = translate_pattern(DOC_PATTERN)
    assert fmt == "[%(asctime)s %(levelname)s %(pathname)s:%(lineno)d] - %(message)s"
    assert datefmt == "%Y-%m-%dT%H:%M:%S%.6f"


def test_translate_escapes_percent_and_braces():
    fmt, datefmt = translate_pattern("{{x}} 100% {m}")
    assert fmt == "{x} 100%% %(message)s"
    assert datefmt is None


def test_translate_rejects_bad_patterns():
    with pytest.raises(ValueError):
        translate_pattern("{m")
    with pytest.raises(ValueError):
        translate_pattern("{nope}")


def test_parse_size():
    assert parse_size("1kb") == 1024
    assert parse_size(512) == 512
    assert parse_size("100MB") == 100 * parse_size("1mb")
    with pytest.raises(ValueError):
        parse_size("abc")


def test_build_dict_config_maps_loggers():
    config = build_dict_config(
        {
            "appenders": {"stdout": {"kind": "console"}},
            "root": {"level": "info", "appenders": ["stdout"]},
            "loggers": {"a::b": {"level": "debug", "appenders": ["stdout"], "additive": False}},
        }
    )
    assert config["root"] == {"level": logging.INFO, "handlers": ["stdout"]}
    assert config["loggers"]["a.b"]["level"] == logging.DEBUG
    assert config["loggers"]["a.b"]["propagate"] is False


def test_build_dict_config_unknown_appender():
    with pytest.raises(LoggerInitError):
        build_dict_config({"root": {"appenders": ["missing"]}})


def test_build_dict_config_unknown_kind():
    with pytest.raises(LoggerInitError):
        build_dict_config({"appenders": {"x": {"kind": "socket"}}})


def test_load_config_invalid_file(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("- just\n- a list\n")
    with pytest.raises(LoggerInitError):
        load_config(bad)


def test_init_missing_config_raises_and_sets_target(tmp_path):
    with pytest.raises(LoggerInitError, match="not found"):
        Logger.init("abc", str(tmp_path / "nope.yaml"), "svc")
    assert Logger.target() == "svc"


def test_init_writes_to_file(tmp_path):
    log_file = tmp_path / "logs" / "out.log"
    config = _write_config(tmp_path, log_file)
    Logger.init("my-id", str(config), "svc")
    for handler in logging.getLogger().handlers:
        handler.flush()
    text = log_file.read_text()
    assert "INFO log4you.logger log_id=my-id, Logger initialized from" in text
    assert Logger.target() == "svc"


def test_rolling_file_appender(tmp_path):
    log_file = tmp_path / "roll.log"
    pattern = (tmp_path / "roll-{}.log").as_posix()
    config = tmp_path / "c.yaml"
    config.write_text(
        "appenders:\n"
        "  r:\n"
        "    kind: rolling_file\n"
        f"    path: \"{log_file.as_posix()}\"\n"
        "    policy:\n"
        "      trigger: {kind: size, limit: 10b}\n"
        f"      roller: {{kind: fixed_window, pattern: \"{pattern}\", count: 2}}\n"
        "    encoder: {pattern: \"{m}{n}\"}\n"
        "root: {level: info, appenders: [r]}\n"
    )
    Logger.init("id", str(config), None)
    lg = logging.getLogger("svc")
    lg.info("first message")
    lg.info("second message")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert log_file.read_text() == "second message\n"
    assert "first message" in (tmp_path / "roll-0.log").read_text()