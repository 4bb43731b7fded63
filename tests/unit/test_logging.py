"""Test structured logging setup."""

import json
import logging

import pytest

from axiomatic.observability import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_level_applied(self):
        setup_logging("DEBUG")
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_warning(self):
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_stdlib_records_rendered_as_json(self, capsys):
        setup_logging("INFO", format="json")
        logging.getLogger("axiomatic.test").info("Booted %s classes", 4)

        line = capsys.readouterr().err.strip().splitlines()[-1]
        entry = json.loads(line)
        assert entry["event"] == "Booted 4 classes"
        assert entry["component"] == "axiomatic"
        assert entry["logger"] == "axiomatic.test"

    def test_structlog_events_rendered_once(self, capsys):
        setup_logging("INFO", format="json")
        get_logger("axiomatic.test").info("booted", classes=4)

        line = capsys.readouterr().err.strip().splitlines()[-1]
        entry = json.loads(line)
        assert entry["event"] == "booted"
        assert entry["classes"] == 4
        assert entry["level"] == "info"

    def test_level_filters_info(self, capsys):
        setup_logging("WARNING", format="json")
        logging.getLogger("axiomatic.test").info("quiet")
        assert capsys.readouterr().err == ""
