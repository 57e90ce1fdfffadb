"""
Tests for logging configuration.
"""

import logging

import pytest

from logging_config import (
    ColoredFormatter,
    LogContext,
    configure_module_logger,
    log_exception,
    setup_logging,
    setup_scheduling_logging,
)
from scheduling.schedule_exceptions import ByeWeekPlacementException


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest configured it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    """Root logger configuration"""

    def test_file_handlers_created(self, tmp_path, restore_root_logger):
        setup_logging(level="DEBUG", log_dir=str(tmp_path), enable_console=False)

        assert len(restore_root_logger.handlers) == 3
        logging.getLogger("scheduling.test").error("placement failed")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert (tmp_path / "league_core.log").exists()
        assert "placement failed" in (tmp_path / "league_core_error.log").read_text(encoding="utf-8")
        assert "Logging initialized" not in (tmp_path / "league_core_error.log").read_text(encoding="utf-8")

    def test_console_only(self, tmp_path, restore_root_logger):
        setup_logging(level="WARNING", log_dir=str(tmp_path / "unused"), enable_file=False)

        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, ColoredFormatter)
        assert restore_root_logger.level == logging.WARNING
        assert not (tmp_path / "unused").exists()

    def test_unknown_level(self, restore_root_logger):
        with pytest.raises(ValueError):
            setup_logging(level="LOUD", enable_file=False)


class TestColoredFormatter:
    """Console coloring"""

    def test_colors_level_without_touching_record(self):
        record = logging.makeLogRecord({"levelname": "ERROR", "levelno": logging.ERROR, "msg": "boom"})

        output = ColoredFormatter("%(levelname)s %(message)s").format(record)

        assert output.startswith("\033[31mERROR\033[0m")
        assert record.levelname == "ERROR"


class TestLogException:
    """Exception logging with league context"""

    def test_league_exception_context(self, caplog):
        logger = logging.getLogger("scheduling.week_placement")
        error = ByeWeekPlacementException("bye conflict", team_id=2, week=5, season_year=2025)

        with caplog.at_level(logging.ERROR, logger="scheduling.week_placement"):
            log_exception(logger, error, context={"operation": "generate_season"})

        message = caplog.records[-1].getMessage()
        assert "error_code=SCHEDULE_BYE_003" in message
        assert "week=5" in message
        assert "operation=generate_season" in message
        assert caplog.records[-1].exc_info is not None

    def test_plain_exception(self, caplog):
        logger = logging.getLogger("offseason.draft_order_service")

        with caplog.at_level(logging.WARNING, logger="offseason.draft_order_service"):
            log_exception(logger, ValueError("bad pick"), level="WARNING")

        assert caplog.records[-1].levelno == logging.WARNING
        assert "ValueError: bad pick" in caplog.records[-1].getMessage()


class TestModuleLevels:
    """Per-module and per-subsystem levels"""

    def test_log_context_restores_level(self):
        logger = logging.getLogger("playoff_system.playoff_manager")
        original = logger.level

        with LogContext(logger, "DEBUG"):
            assert logger.level == logging.DEBUG

        assert logger.level == original

    def test_configure_module_logger(self):
        logger = configure_module_logger("scheduling.bye_weeks", level="ERROR", propagate=True)
        try:
            assert logger.level == logging.ERROR
            assert logger.propagate
        finally:
            logger.setLevel(logging.NOTSET)

    def test_subsystem_levels(self):
        names = ("scheduling", "scheduling.schedule_generator", "scheduling.week_placement")
        try:
            setup_scheduling_logging(level="WARNING")
            assert all(logging.getLogger(name).level == logging.WARNING for name in names)
        finally:
            for name in names + ("scheduling.schedule_validator", "scheduling.bye_weeks"):
                logging.getLogger(name).setLevel(logging.NOTSET)
