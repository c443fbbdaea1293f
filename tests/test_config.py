import json

import pytest

from appwatch.local.config import MonitorConfig, load_config, parse_config, resolve_config_path
from appwatch.local.errors import ConfigError


def _write(tmp_path, payload):
    path = tmp_path / "config.json"
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return path


def test_load_full_config(tmp_path):
    path = _write(tmp_path, {
        "command": "/app/helloworld",
        "check_url": "http://localhost:8080/health",
        "interval_seconds": 10,
        "log_file": "/var/log/monitor.log",
        "max_failures_before_restart": 3,
    })

    assert load_config(path) == MonitorConfig(
        command="/app/helloworld",
        check_url="http://localhost:8080/health",
        interval_seconds=10,
        log_file="/var/log/monitor.log",
        max_failures_before_restart=3,
    )


def test_zero_interval_defaults_to_five(tmp_path):
    path = _write(tmp_path, {"command": "app", "check_url": "http://x/health", "interval_seconds": 0})

    assert load_config(path).interval_seconds == 5


@pytest.mark.parametrize("value", [0, -1, None])
def test_non_positive_or_missing_failure_threshold_defaults_to_one(value):
    raw = {"command": "app", "check_url": "http://x/health"}
    if value is not None:
        raw["max_failures_before_restart"] = value

    assert parse_config(raw).max_failures_before_restart == 1


def test_negative_interval_defaults_to_five():
    assert parse_config({"command": "app", "check_url": "http://x", "interval_seconds": -3}).interval_seconds == 5


def test_app_command_alias_is_accepted():
    cfg = parse_config({"app_command": "/app/helloworld", "check_url": "http://x"})
    assert cfg.command == "/app/helloworld"


@pytest.mark.parametrize("log_file", [None, ""])
def test_empty_log_file_means_stdout(log_file):
    cfg = parse_config({"command": "app", "check_url": "http://x", "log_file": log_file})
    assert cfg.log_file is None


@pytest.mark.parametrize("raw", [
    {"check_url": "http://x"},
    {"command": "", "check_url": "http://x"},
    {"command": "app"},
    {"command": 5, "check_url": "http://x"},
    {"command": "app", "check_url": "http://x", "interval_seconds": "5"},
    {"command": "app", "check_url": "http://x", "max_failures_before_restart": True},
    {"command": "app", "check_url": "http://x", "log_file": 3},
    ["not", "an", "object"],
])
def test_invalid_config_raises(raw):
    with pytest.raises(ConfigError):
        parse_config(raw)


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.json")


def test_malformed_json_raises(tmp_path):
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, "{not json"))


def test_config_is_immutable():
    cfg = parse_config({"command": "app", "check_url": "http://x"})
    with pytest.raises(AttributeError):
        cfg.command = "other"


def test_resolve_config_path_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("MONITOR_CONFIG", str(tmp_path / "c.json"))
    assert resolve_config_path() == tmp_path / "c.json"


def test_resolve_config_path_default(monkeypatch):
    monkeypatch.delenv("MONITOR_CONFIG", raising=False)
    assert str(resolve_config_path()) == "/app/config.json"


@pytest.mark.parametrize("payload", [
    b'\xff\xfe{}',
    b'{"command": "\xff\xfe", "check_url": "http://x"}',
])
def test_invalid_utf8_raises_config_error(tmp_path, payload):
    path = tmp_path / "config.json"
    path.write_bytes(payload)

    with pytest.raises(ConfigError):
        load_config(path)
