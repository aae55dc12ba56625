"""Test unified logging configuration.

Tests for src.utils.logging_config:
    - JSON file output carries context fields
    - Repeated setup_logging() calls don't duplicate handlers
    - Foreign root handlers survive setup_logging()
    - push_context / pop_context
    - Human format layout

Run:
    pytest tests/test_logging_config.py -v
"""

import json
import logging
import logging.handlers

import pytest

from src.utils import logging_config


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logging_config.setup_logging(to_stderr=False, capture_warnings=False)
    logging_config.pop_context()


def test_json_file_output_and_idempotency(tmp_path):
    """Test logging file output and idempotency."""
    log_path = tmp_path / "test.log"
    for _ in range(2):
        logging_config.setup_logging(
            log_level="INFO",
            log_file=str(log_path),
            json=True,
            to_stderr=False,
            context={"app": "test"}
        )
    logger = logging_config.get_logger("oracle_test")
    logger.info("hello")
    logger.debug("not written")

    lines = log_path.read_text().strip().splitlines()
    assert len(lines) == 1
    rec = json.loads(lines[0])
    assert rec["msg"] == "hello"
    assert rec["lvl"] == "INFO"
    assert rec["app"] == "test"


def test_foreign_handlers_kept():
    """Test setup_logging only replaces its own handlers."""
    foreign = logging.NullHandler()
    root = logging.getLogger()
    root.addHandler(foreign)
    try:
        handlers = logging_config.setup_logging(to_stderr=True)
        assert foreign in root.handlers
        assert all(h in root.handlers for h in handlers)

        logging_config.setup_logging(to_stderr=True)
        assert foreign in root.handlers
        assert not any(h in root.handlers for h in handlers)
    finally:
        root.removeHandler(foreign)


def test_push_pop_context():
    logging_config.push_context(app="oracle")
    logging_config.push_context(case="ring_11x6")
    assert logging_config.get_context() == {"app": "oracle", "case": "ring_11x6"}

    logging_config.pop_context(keys=["case"])
    assert logging_config.get_context() == {"app": "oracle"}

    logging_config.pop_context()
    assert logging_config.get_context() == {}


def test_human_format():
    formatter = logging_config.ContextFormatter("human", use_color=False)
    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "msg %d", (3,), None)
    logging_config.push_context(case="c1")
    line = formatter.format(record)
    assert line.endswith("| WARNING  | case=c1 | msg 3")
    assert "Z |" in line


def test_unknown_format_mode():
    with pytest.raises(ValueError, match="format mode"):
        logging_config.ContextFormatter("xml")


def test_unknown_rotation_mode(tmp_path):
    with pytest.raises(ValueError, match="rotation mode"):
        logging_config.setup_logging(
            log_file=str(tmp_path / "r.log"), to_stderr=False, rotate={"mode": "weekly"}
        )


def test_size_rotation_handler(tmp_path):
    handlers = logging_config.setup_logging(
        log_file=str(tmp_path / "logs" / "r.log"),
        to_stderr=False,
        rotate={"mode": "size", "max_bytes": 1000, "backup_count": 1}
    )
    assert isinstance(handlers[0], logging.handlers.RotatingFileHandler)
    assert (tmp_path / "logs").is_dir()
