# File: tests/test_logger.py
import logging

from schema_scout.logger import LOGGER_NAME, configure


def test_log_dir_splits_errors(tmp_path):
    lg = configure(level="INFO", log_dir=tmp_path / "logs")
    lg.info("page processed")
    lg.error("page failed")
    for handler in lg.handlers:
        handler.flush()

    app_log = (tmp_path / "logs" / "app.log").read_text(encoding="utf-8")
    error_log = (tmp_path / "logs" / "error.log").read_text(encoding="utf-8")
    assert "page processed" in app_log and "page failed" in app_log
    assert "page failed" in error_log
    assert "page processed" not in error_log


def test_reconfigure_replaces_handlers():
    configure(level="DEBUG")
    lg = configure(level="WARNING")
    assert lg is logging.getLogger(LOGGER_NAME)
    assert len(lg.handlers) == 1
    assert lg.level == logging.WARNING
    assert lg.propagate is False
