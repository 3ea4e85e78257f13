"""
Tests for the root logger setup.
"""
import logging
from contextlib import contextmanager

from devhub_api.app.core.logging_config import LOG_FORMAT, setup_logging


@contextmanager
def bare_root_logger():
    """Give the test a root logger without handlers, restored afterwards."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    urllib3_level = logging.getLogger("urllib3").level
    root.handlers.clear()
    try:
        yield root
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
        logging.getLogger("urllib3").setLevel(urllib3_level)


class TestSetupLogging:
    """Test suite for setup_logging."""

    def test_console_handler_only_by_default(self):
        with bare_root_logger() as root:
            setup_logging("debug")
            assert root.level == logging.DEBUG
            assert [type(h) for h in root.handlers] == [logging.StreamHandler]
            assert root.handlers[0].formatter._fmt == LOG_FORMAT

    def test_second_call_adds_nothing(self):
        with bare_root_logger() as root:
            setup_logging("INFO")
            setup_logging("DEBUG")
            assert len(root.handlers) == 1
            assert root.level == logging.INFO

    def test_unknown_level_falls_back_to_info(self):
        with bare_root_logger() as root:
            setup_logging("chatty")
            assert root.level == logging.INFO

    def test_logfile_receives_records(self, tmp_path):
        logfile = tmp_path / "api.log"
        with bare_root_logger() as root:
            setup_logging("INFO", str(logfile))
            assert len(root.handlers) == 2
            logging.getLogger("devhub_api.tests").info("repositories fetched")
            for handler in root.handlers:
                handler.flush()
            assert "[INFO] devhub_api.tests: repositories fetched" in logfile.read_text(encoding="utf-8")

    def test_urllib3_quieted_above_debug(self):
        with bare_root_logger():
            logging.getLogger("urllib3").setLevel(logging.NOTSET)
            setup_logging("INFO")
            assert logging.getLogger("urllib3").level == logging.WARNING

    def test_urllib3_left_alone_at_debug(self):
        with bare_root_logger():
            logging.getLogger("urllib3").setLevel(logging.NOTSET)
            setup_logging("DEBUG")
            assert logging.getLogger("urllib3").level == logging.NOTSET
