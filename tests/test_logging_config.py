"""Tests for logging setup and logger naming."""

import logging
import sys

from polysolver_pkg.api import process_input
from polysolver_pkg.logging_config import (
    ROOT_LOGGER_NAME,
    StructuredFormatter,
    get_logger,
    setup_logging,
)


def test_get_logger_namespaces_modules():
    assert get_logger("solver").name == "polysolver.solver"
    assert get_logger().name == ROOT_LOGGER_NAME


def test_setup_logging_replaces_handlers(tmp_path):
    log_file = tmp_path / "run.log"
    logger = setup_logging("DEBUG", str(log_file))
    try:
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        for handler in logger.handlers:
            handler.close()
        logger = setup_logging("ERROR")
        assert logger.level == logging.ERROR
        assert len(logger.handlers) == 1
    finally:
        setup_logging("WARNING")


def test_unknown_level_defaults_to_warning():
    assert setup_logging("chatty").level == logging.WARNING


def test_structured_formatter_line():
    record = logging.LogRecord(
        "polysolver.test", logging.INFO, __file__, 1, "solved %s", ("x = 1",), None
    )
    line = StructuredFormatter().format(record)
    assert line.endswith("[INFO] polysolver.test: solved x = 1")


def test_structured_formatter_includes_traceback():
    try:
        raise ValueError("bad value")
    except ValueError:
        record = logging.LogRecord(
            "polysolver.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
        )
    line = StructuredFormatter().format(record)
    assert "ValueError: bad value" in line


def test_failed_input_is_logged(caplog):
    caplog.set_level(logging.DEBUG, logger=ROOT_LOGGER_NAME)
    assert process_input("1/0") == "Error: Division by zero"
    assert any("DIVISION_BY_ZERO" in record.getMessage() for record in caplog.records)
