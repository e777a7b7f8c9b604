"""
Logging Configuration - Centralized logging setup

Cung cap logging nhat quan cho indexer, settings va CLI.
Log file duoc luu tai ~/.linecount-indexer/logs/

- Console handler ghi ra stderr (stdout danh cho output cua CLI)
- Log rotation (max 5 files, 2MB each)
- Buffered writes (reduce disk I/O), flush ngay khi co ERROR
"""

import logging
import logging.handlers
import sys
import time
from typing import Optional

from config.paths import LOG_DIR, DEBUG_MODE

# Logger singleton
_logger: Optional[logging.Logger] = None

LOGGER_NAME = "linecount-indexer"

# Log rotation config
MAX_LOG_SIZE = 2 * 1024 * 1024  # 2MB per file
MAX_LOG_FILES = 5  # Keep 5 backup files
BUFFER_CAPACITY = 100  # Buffer 100 log records before flush


def get_logger() -> logging.Logger:
    """
    Get hoac tao logger singleton.

    Returns:
        Configured logger instance
    """
    global _logger

    if _logger is not None:
        return _logger

    _logger = logging.getLogger(LOGGER_NAME)
    _logger.setLevel(logging.DEBUG if DEBUG_MODE else logging.INFO)

    # Avoid duplicate handlers
    if _logger.handlers:
        return _logger

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if DEBUG_MODE else logging.WARNING)
    console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    _logger.addHandler(console_handler)

    # File handler with rotation
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            LOG_DIR / "indexer.log",
            maxBytes=MAX_LOG_SIZE,
            backupCount=MAX_LOG_FILES,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG if DEBUG_MODE else logging.INFO)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

        # Wrap with MemoryHandler for buffered writes
        memory_handler = logging.handlers.MemoryHandler(
            capacity=BUFFER_CAPACITY,
            flushLevel=logging.ERROR,
            target=file_handler,
        )
        memory_handler.setLevel(logging.DEBUG if DEBUG_MODE else logging.INFO)

        _logger.addHandler(memory_handler)

    except OSError as e:
        # Van log ra console neu khong tao duoc log file
        _logger.warning(f"Could not create log file: {e}")

    return _logger


def flush_logs():
    """
    Flush buffered logs to disk.
    Goi truoc khi CLI exit de dam bao tat ca logs duoc ghi.
    """
    if _logger:
        for handler in _logger.handlers:
            try:
                handler.flush()
            except OSError:
                pass  # Disk loi luc shutdown, khong con cho nao de bao


def set_debug_mode(enabled: bool):
    """
    Enable or disable debug mode at runtime.

    Args:
        enabled: True to enable DEBUG level logging
    """
    global DEBUG_MODE
    DEBUG_MODE = enabled

    logger = get_logger()
    new_level = logging.DEBUG if enabled else logging.INFO
    logger.setLevel(new_level)
    for handler in logger.handlers:
        handler.setLevel(new_level)


def cleanup_old_logs(max_age_days: int = 7):
    """
    Remove log files older than max_age_days.

    Args:
        max_age_days: Maximum age of log files to keep
    """
    if not LOG_DIR.exists():
        return

    cutoff_time = time.time() - (max_age_days * 24 * 60 * 60)

    for log_file in LOG_DIR.glob("*.log*"):
        try:
            if log_file.stat().st_mtime < cutoff_time:
                log_file.unlink()
        except OSError as e:
            get_logger().debug(f"Could not remove old log {log_file}: {e}")


def log_error(message: str, exc: Optional[Exception] = None):
    """Log error voi optional exception details"""
    logger = get_logger()
    if exc:
        logger.error(f"{message}: {exc}", exc_info=DEBUG_MODE)
    else:
        logger.error(message)


def log_warning(message: str):
    """Log warning"""
    get_logger().warning(message)


def log_info(message: str):
    """Log info"""
    get_logger().info(message)


def log_debug(message: str):
    """Log debug - only written if DEBUG_MODE is enabled"""
    if DEBUG_MODE:
        get_logger().debug(message)
