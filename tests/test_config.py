import logging

import pytest

from enginecore.config import AppConfig, ConfigParser


def test_defaults():
    config = AppConfig()
    assert config.is_valid is False
    assert config.log_file_path == "/var/log/app.log"
    assert config.log_level == 2
    assert config.worker_threads == 4
    assert config.memory_pool_size_mb == 256
    assert config.simulation_timestep == 0.016
    assert config.plugin_settings == {}


def test_core_section_values():
    lines = [
        "[Core]",
        "log_file_path = /tmp/engine.log",
        "log_level = 0",
        "worker_threads = 8",
        "memory_pool_size_mb = 64",
        "simulation_timestep = 0.5",
    ]
    config = ConfigParser().parse_lines(lines)
    assert config.is_valid is True
    assert config.log_file_path == "/tmp/engine.log"
    assert config.log_level == 0
    assert config.worker_threads == 8
    assert config.memory_pool_size_mb == 64
    assert config.simulation_timestep == 0.5


def test_lines_before_header_belong_to_core():
    config = ConfigParser().parse_lines(["worker_threads=12", "  log_level =  3  "])
    assert config.worker_threads == 12
    assert config.log_level == 3


def test_plugin_value_types():
    lines = [
        "[Plugins]",
        "speed = 2.5",
        "count = 42",
        "name = fast",
        "ratio = 3x",
    ]
    settings = ConfigParser().parse_lines(lines).plugin_settings
    assert settings["speed"] == 2.5
    assert settings["count"] == 42
    assert isinstance(settings["count"], float)
    assert settings["name"] == "fast"
    assert settings["ratio"] == 3.0


def test_plugin_float_overflow_falls_back_to_int():
    settings = ConfigParser().parse_lines(["[Plugins]", "big = 1e999"]).plugin_settings
    assert settings["big"] == 1
    assert isinstance(settings["big"], int)


def test_comments_and_blank_lines_are_skipped():
    lines = ["# comment", "", "   ", "   # indented comment", "log_level = 1"]
    config = ConfigParser().parse_lines(lines)
    assert config.log_level == 1
    assert config.plugin_settings == {}


def test_malformed_line_warns(caplog):
    caplog.set_level(logging.WARNING, logger="enginecore.config")
    config = ConfigParser().parse_lines(["this line has no delimiter"])
    assert config.is_valid is True
    assert "Malformed line in config" in caplog.text
    assert "this line has no delimiter" in caplog.text


def test_unknown_section_and_key_ignored():
    lines = ["unknown_key = 5", "[Other]", "log_level = 0", "thing = 1"]
    config = ConfigParser().parse_lines(lines)
    assert config.log_level == 2
    assert config.plugin_settings == {}


def test_invalid_integer_raises():
    with pytest.raises(ValueError):
        ConfigParser().parse_lines(["log_level = high"])


def test_integer_prefix_is_used():
    config = ConfigParser().parse_lines(["log_level = 3junk"])
    assert config.log_level == 3


def test_integer_out_of_range_raises():
    with pytest.raises(ValueError):
        ConfigParser().parse_lines(["log_level = 99999999999"])


def test_section_resets_between_parses():
    parser = ConfigParser()
    parser.parse_lines(["[Plugins]"])
    config = parser.parse_lines(["log_level = 1"])
    assert config.log_level == 1
    assert config.plugin_settings == {}


def test_parse_file(tmp_path):
    path = tmp_path / "config.sys"
    path.write_bytes(b"[Core]\r\nworker_threads = 6\r\n[Plugins]\r\nmode = turbo\r\n")
    config = ConfigParser().parse(path)
    assert config.is_valid is True
    assert config.worker_threads == 6
    assert config.plugin_settings == {"mode": "turbo"}


def test_missing_file_gives_invalid_config(tmp_path, caplog):
    caplog.set_level(logging.ERROR, logger="enginecore.config")
    config = ConfigParser().parse(tmp_path / "missing.sys")
    assert config.is_valid is False
    assert config.worker_threads == 4
    assert "Could not open config file" in caplog.text