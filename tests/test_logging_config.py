"""
Tests for the root logger setup.
"""

import logging

import pytest

from finance_ledger_api.app.core.logging_config import setup_logging


@pytest.fixture
def bare_root_logger(monkeypatch):
    # A stand-in root so pytest's own capture handlers are not in the way.
    root = logging.Logger("root", logging.WARNING)
    monkeypatch.setattr(logging, "getLogger", lambda name=None: root)
    yield root
    for handler in root.handlers:
        handler.close()


class TestSetupLogging:

    def test_console_and_file_handlers(self, bare_root_logger, tmp_path):
        logfile = tmp_path / "ledger.log"
        setup_logging("debug", str(logfile))
        kinds = [type(h) for h in bare_root_logger.handlers]
        assert kinds == [logging.StreamHandler, logging.FileHandler]
        assert bare_root_logger.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, bare_root_logger):
        setup_logging("chatty")
        assert bare_root_logger.level == logging.INFO
        assert len(bare_root_logger.handlers) == 1

    def test_second_call_is_a_no_op(self, bare_root_logger):
        setup_logging("INFO")
        setup_logging("DEBUG")
        assert len(bare_root_logger.handlers) == 1
        assert bare_root_logger.level == logging.INFO
