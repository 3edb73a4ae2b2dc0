"""Tests for the logging setup."""

import logging

from fillbook.logging_config import logging_config, setup_logging


def test_console_only_by_default():
    conf = logging_config()
    assert list(conf["handlers"]) == ["console"]
    assert conf["loggers"]["fillbook"]["handlers"] == ["console"]


def test_file_handler_when_path_given(tmp_path):
    path = str(tmp_path / "fillbook.log")
    conf = logging_config("debug", path)

    assert conf["handlers"]["file"]["filename"] == path
    assert conf["loggers"]["fillbook"]["level"] == "DEBUG"
    assert conf["loggers"]["xrpl"]["handlers"] == ["console", "file"]


def test_setup_writes_to_file(tmp_path):
    path = tmp_path / "fillbook.log"
    setup_logging("INFO", str(path))
    logging.getLogger("fillbook.test").info("hello from the fixtures")
    for h in logging.getLogger("fillbook").handlers:
        h.flush()

    assert "hello from the fixtures" in path.read_text()
    setup_logging("INFO")
