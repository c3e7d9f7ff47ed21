# ============================================================================
# src/utils/__init__.py
# ============================================================================
"""
Utility modules for the medical structuring pipeline.
"""

from .exceptions import (
    MedicalStructuringError,
    ConfigurationError,
    RecognizerError,
    ChatClientError,
    MissingAPIKeyError,
    ChatResponseError,
    ChatTimeoutError,
    ChatDecodingError,
    NoChoicesError,
)

from .logging import (
    setup_logging,
    setup_logging_from_settings,
    get_logger,
    log_performance,
    JsonFormatter,
)

__all__ = [
    # Exceptions
    'MedicalStructuringError',
    'ConfigurationError',
    'RecognizerError',
    'ChatClientError',
    'MissingAPIKeyError',
    'ChatResponseError',
    'ChatTimeoutError',
    'ChatDecodingError',
    'NoChoicesError',
    # Logging
    'setup_logging',
    'setup_logging_from_settings',
    'get_logger',
    'log_performance',
    'JsonFormatter',
]
