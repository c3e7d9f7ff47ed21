# ============================================================================
# src/medical_structuring/config/__init__.py
# ============================================================================
"""
Convenient imports for all settings
"""

from .thresholds_config import threshold_settings, ThresholdSettings
from .chat_config import chat_settings, ChatSettings
from .logging_config import logging_settings, LoggingSettings
