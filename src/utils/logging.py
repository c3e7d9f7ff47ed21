# ============================================================================
# src/utils/logging.py
# ============================================================================
"""
Logging configuration and utilities for the medical structuring pipeline.
"""

import logging
import sys
import time
from pathlib import Path
from typing import Optional
from datetime import datetime, timezone
from functools import wraps
import inspect
import json


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_json: bool = False
) -> None:
    """
    Setup logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging
        format_json: Whether to use JSON format
    """
    log_level = getattr(logging, level.upper())

    if format_json:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
        force=True
    )


def setup_logging_from_settings() -> None:
    """Configure logging from LoggingSettings (LOG_LEVEL / LOG_JSON)."""
    from src.medical_structuring.config import logging_settings

    setup_logging(
        level=logging_settings.LOG_LEVEL,
        format_json=logging_settings.LOG_JSON
    )


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def log_performance(logger: logging.Logger, operation: str):
    """
    Decorator to log operation performance.

    Works for both plain and async functions.

    Args:
        logger: Logger instance
        operation: Operation name
    """
    def decorator(func):
        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                start_time = time.perf_counter()
                try:
                    result = await func(*args, **kwargs)
                    logger.info(f"{operation} completed in {time.perf_counter() - start_time:.3f}s")
                    return result
                except Exception as e:
                    logger.error(f"{operation} failed after {time.perf_counter() - start_time:.3f}s: {str(e)}")
                    raise
            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
                logger.info(f"{operation} completed in {time.perf_counter() - start_time:.3f}s")
                return result
            except Exception as e:
                logger.error(f"{operation} failed after {time.perf_counter() - start_time:.3f}s: {str(e)}")
                raise

        return wrapper
    return decorator
