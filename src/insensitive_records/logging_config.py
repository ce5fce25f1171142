"""Logging configuration for insensitive_records.

Configures the package logger with a RichHandler for console output and,
optionally, file handlers for general output and for data issues.

Data issues are problems in the rows being adapted (duplicate column names,
surplus values on a CSV line). They are logged at the custom DATA_ISSUES
level so they can be written to a file of their own.

Usage:
    from insensitive_records.logging_config import setup_logging

    setup_logging(debug=False, data_issues_file=Path("data_issues.log"))
"""

import logging
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

PACKAGE_LOGGER_NAME = "insensitive_records"

DATA_ISSUE_LVL_NUM = 26
logging.addLevelName(DATA_ISSUE_LVL_NUM, "DATA_ISSUES")


class ExcludeLevelFilter(logging.Filter):
    """Filter that excludes log records at a specific level."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno != self.level


class IncludeLevelFilter(logging.Filter):
    """Filter that includes only log records at a specific level."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno == self.level


def setup_logging(
    debug: bool = False,
    log_file: Optional[Path] = None,
    data_issues_file: Optional[Path] = None,
) -> logging.Logger:
    """Attach console and file handlers to the insensitive_records logger.

    Only the package logger is configured. Its records still propagate to
    the root logger, so handlers an application puts there keep working.
    Handlers left by an earlier call are closed before the new ones are
    attached.

    Args:
        debug: Enable debug-level logging.
        log_file: Path to write general log output.
        data_issues_file: Path to write data issues (level 26) output.

    Returns:
        The configured package logger.
    """
    level = logging.DEBUG if debug else logging.INFO
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    close_handlers(package_logger)
    package_logger.setLevel(level)

    package_logger.addHandler(_console_handler(level))
    if log_file:
        package_logger.addHandler(
            _file_handler(
                log_file,
                level,
                "%(asctime)s\t%(levelname)s\t%(name)s\t%(message)s",
                ExcludeLevelFilter(DATA_ISSUE_LVL_NUM),
            )
        )
    if data_issues_file:
        package_logger.addHandler(
            _file_handler(
                data_issues_file,
                DATA_ISSUE_LVL_NUM,
                "%(message)s",
                IncludeLevelFilter(DATA_ISSUE_LVL_NUM),
            )
        )
    return package_logger


def close_handlers(logger: logging.Logger) -> None:
    """Detach and close every handler of the logger."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _console_handler(level: int) -> RichHandler:
    handler = RichHandler(
        show_level=False,
        show_time=False,
        omit_repeated_times=False,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    # Data issues only go to their own file
    handler.addFilter(ExcludeLevelFilter(DATA_ISSUE_LVL_NUM))
    return handler


def _file_handler(
    path: Path, level: int, fmt: str, level_filter: logging.Filter
) -> logging.FileHandler:
    handler = logging.FileHandler(filename=path, mode="w")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    handler.addFilter(level_filter)
    return handler


def log_data_issue(logger: logging.Logger, message: str, *args) -> None:
    """Log a data issue at the DATA_ISSUES level (26)."""
    if logger.isEnabledFor(DATA_ISSUE_LVL_NUM):
        logger.log(DATA_ISSUE_LVL_NUM, message, *args)
