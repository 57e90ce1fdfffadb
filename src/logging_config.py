"""
Logging Configuration for the League Core

Sets up logging for the scheduling, playoff and draft packages:
- Colored console output
- Rotating file handlers (main / debug / error)
- Per-subsystem log levels
- Exception logging that carries LeagueException context

Usage Example:
    from logging_config import setup_logging, get_logger

    setup_logging(level="INFO", log_dir="logs")

    logger = get_logger(__name__)
    logger.info("Generating 2025 season")

Log Files Created:
- logs/league_core.log: Main log (INFO+)
- logs/league_core_debug.log: Debug log (DEBUG+)
- logs/league_core_error.log: Error log (ERROR+)

Each file rotates at 10MB with 5 backup files.
"""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Dict, Optional, Tuple


# Log format templates
DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"
)

SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_PREFIX = "league_core"

# (file suffix, minimum level, always detailed)
LOG_FILES: Tuple[Tuple[str, int, bool], ...] = (
    ("", logging.INFO, False),
    ("_debug", logging.DEBUG, True),
    ("_error", logging.ERROR, True),
)

# Loggers configured together by the subsystem helpers
SUBSYSTEM_LOGGERS: Dict[str, Tuple[str, ...]] = {
    "scheduling": (
        "scheduling",
        "scheduling.schedule_generator",
        "scheduling.schedule_validator",
        "scheduling.bye_weeks",
        "scheduling.week_placement",
    ),
    "playoff": (
        "playoff_system",
        "playoff_system.playoff_manager",
        "playoff_system.playoff_seeder",
    ),
    "draft": (
        "offseason",
        "offseason.draft_order_service",
    ),
}


class ColoredFormatter(logging.Formatter):
    """
    Colored formatter for console output.

    Adds ANSI color codes to the level name only.
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if not color:
            return super().format(record)
        # Copy so file handlers sharing the record keep a plain level name
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def _parse_level(level: str) -> int:
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: '{level}'")
    return value


def _build_file_handler(
    log_dir: str,
    suffix: str,
    level: int,
    log_format: str,
    max_bytes: int,
    backup_count: int
) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=os.path.join(log_dir, f"{LOG_FILE_PREFIX}{suffix}.log"),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    log_dir: str = "logs",
    enable_console: bool = True,
    enable_file: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    format_style: str = "detailed"
) -> None:
    """
    Setup application-wide logging configuration.

    Call once at startup; existing root handlers are replaced.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files
        enable_console: Whether to log to console
        enable_file: Whether to log to rotating files
        max_bytes: Maximum size per log file before rotation (default: 10MB)
        backup_count: Number of backup files to keep (default: 5)
        format_style: "detailed" or "simple" format for the main log

    Raises:
        ValueError: For an unknown level name
    """
    root_level = _parse_level(level)
    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)
    root_logger.handlers.clear()

    if enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(root_level)
        console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if enable_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        main_format = DETAILED_FORMAT if format_style == "detailed" else SIMPLE_FORMAT
        for suffix, file_level, detailed in LOG_FILES:
            root_logger.addHandler(_build_file_handler(
                log_dir,
                suffix,
                file_level,
                DETAILED_FORMAT if detailed else main_format,
                max_bytes,
                backup_count
            ))

    root_logger.info(
        f"Logging initialized - Level: {level}, "
        f"Console: {enable_console}, File: {enable_file}"
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module (typically ``__name__``)."""
    return logging.getLogger(name)


def log_exception(
    logger: logging.Logger,
    exception: Exception,
    context: Optional[dict] = None,
    level: str = "ERROR"
) -> None:
    """
    Log an exception with full traceback and context.

    League exceptions contribute their error code and context dict.

    Example:
        >>> try:
        ...     generate_season_schedule(teams, standings, 2025)
        ... except LeagueException as e:
        ...     log_exception(logger, e, context={"operation": "new_season"})
    """
    details = dict(getattr(exception, 'context_dict', None) or {})
    error_code = getattr(exception, 'error_code', None)
    if error_code:
        details['error_code'] = error_code
    details.update(context or {})

    context_str = ""
    if details:
        context_str = f" [{', '.join(f'{k}={v}' for k, v in details.items())}]"

    logger.log(
        _parse_level(level),
        f"Exception occurred{context_str}: {type(exception).__name__}: {exception}",
        exc_info=exception
    )


def configure_module_logger(
    module_name: str,
    level: Optional[str] = None,
    propagate: bool = True
) -> logging.Logger:
    """
    Configure logging for a specific module.

    Args:
        module_name: Module name (e.g., "scheduling.week_placement")
        level: Log level for this module (None = inherit from root)
        propagate: Whether to propagate to parent loggers

    Returns:
        Configured logger
    """
    logger = logging.getLogger(module_name)

    if level:
        logger.setLevel(_parse_level(level))

    logger.propagate = propagate

    return logger


class LogContext:
    """
    Context manager for temporary log level changes.

    Example:
        >>> with LogContext(get_logger("scheduling"), "DEBUG"):
        ...     generator.generate_season(2025)
    """

    def __init__(self, logger: logging.Logger, level: str):
        self.logger = logger
        self.new_level = _parse_level(level)
        self.original_level = logger.level

    def __enter__(self):
        self.logger.setLevel(self.new_level)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logger.setLevel(self.original_level)


# Subsystem logger configurations

def _configure_subsystem(subsystem: str, level: str) -> None:
    for module_name in SUBSYSTEM_LOGGERS[subsystem]:
        configure_module_logger(module_name, level=level)


def setup_scheduling_logging(level: str = "INFO") -> None:
    """
    Configure logging for schedule generation and validation.

    The validator logs one line per run at INFO and a WARNING on failures.
    """
    _configure_subsystem("scheduling", level)


def setup_playoff_logging(level: str = "INFO") -> None:
    """Configure logging for playoff seeding and bracket progression."""
    _configure_subsystem("playoff", level)


def setup_draft_logging(level: str = "INFO") -> None:
    _configure_subsystem("draft", level)


# Quick setup presets

def setup_production_logging(log_dir: str = "logs") -> None:
    """INFO to rotating files only, simple format."""
    setup_logging(
        level="INFO",
        log_dir=log_dir,
        enable_console=False,
        enable_file=True,
        format_style="simple"
    )


def setup_development_logging(log_dir: str = "logs") -> None:
    """DEBUG to colored console and files, detailed format."""
    setup_logging(
        level="DEBUG",
        log_dir=log_dir,
        enable_console=True,
        enable_file=True,
        format_style="detailed"
    )


def setup_testing_logging() -> None:
    """WARNING to console only, keeping test output quiet."""
    setup_logging(
        level="WARNING",
        enable_console=True,
        enable_file=False,
        format_style="simple"
    )


if __name__ == "__main__":
    print("=" * 80)
    print("Logging Configuration Examples")
    print("=" * 80)

    setup_development_logging(log_dir="example_logs")
    logger = get_logger(__name__)
    logger.info("Info message")
    logger.warning("Warning message")

    print("\nException logging:")
    try:
        raise ValueError("season year out of range")
    except ValueError as e:
        log_exception(logger, e, context={"operation": "generate_season", "season_year": 1900})

    print("\nSubsystem levels:")
    setup_scheduling_logging(level="WARNING")
    get_logger("scheduling.week_placement").info("Not shown (WARNING level)")
    setup_playoff_logging(level="DEBUG")
    get_logger("playoff_system.playoff_manager").debug("Shown (DEBUG level)")

    print("\nCheck 'example_logs/' for generated log files")
