import json

import pytest

from studentsystem.config import ENV_DATABASE_URL, ENV_LOG_LEVEL, AppConfig, load_config
from studentsystem.core.exceptions import ConfigurationError


def write_config(tmp_path, data) -> str:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_defaults():
    config = load_config(environ={})
    assert config == AppConfig()
    assert config.database_url == "sqlite:///students.db"
    assert config.max_reconnect_attempts == 5
    assert config.reconnect_delay_ms == 1000
    assert config.lang_file == "lang.json"
    assert config.log_level == "INFO"


def test_config_file(tmp_path):
    path = write_config(tmp_path, {"database_url": "other.db", "reconnect_delay_ms": 10})
    config = load_config(path, environ={})
    assert config.database_url == "other.db"
    assert config.reconnect_delay_ms == 10
    assert config.max_reconnect_attempts == 5


def test_environment_overrides_file(tmp_path):
    path = write_config(tmp_path, {"database_url": "file.db", "log_level": "ERROR"})
    config = load_config(path, environ={ENV_DATABASE_URL: "env.db", ENV_LOG_LEVEL: "debug"})
    assert config.database_url == "env.db"
    assert config.log_level == "DEBUG"


def test_explicit_overrides_win(tmp_path):
    config = load_config(environ={ENV_DATABASE_URL: "env.db"}, overrides={"database_url": "cli.db"})
    assert config.database_url == "cli.db"


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(str(tmp_path / "missing.json"), environ={})


def test_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(str(path), environ={})


def test_non_object_json(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(write_config(tmp_path, ["sqlite:///x.db"]), environ={})


@pytest.mark.parametrize("data", [
    {"max_reconnect_attempts": 0},
    {"reconnect_delay_ms": -1},
    {"database_url": ""},
    {"log_level": "LOUD"},
])
def test_invalid_values(tmp_path, data):
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(write_config(tmp_path, data), environ={})
    assert exc_info.value.details["errors"]
