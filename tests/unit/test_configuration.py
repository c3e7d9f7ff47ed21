# ============================================================================
# FILE: tests/unit/test_configuration.py
# ============================================================================
"""
Unit tests for settings loading
"""

import pytest
from pydantic import ValidationError

from src.medical_structuring.config import ChatSettings, LoggingSettings, ThresholdSettings
from src.medical_structuring.extractors.table_reconstructor import TableReconstructor


def test_threshold_defaults():
    settings = ThresholdSettings()

    assert settings.ROW_THRESHOLD == 0.015
    assert settings.GAP_THRESHOLD == 0.02
    assert settings.MIN_CELLS_PER_ROW == 2
    assert settings.TABLE_Y_ORIGIN == "bottom-left"


def test_threshold_env_override(monkeypatch):
    monkeypatch.setenv("ROW_THRESHOLD", "0.03")
    monkeypatch.setenv("TABLE_Y_ORIGIN", "top-left")

    settings = ThresholdSettings()

    assert settings.ROW_THRESHOLD == 0.03
    assert settings.TABLE_Y_ORIGIN == "top-left"


def test_threshold_out_of_range(monkeypatch):
    monkeypatch.setenv("GAP_THRESHOLD", "1.5")

    with pytest.raises(ValidationError):
        ThresholdSettings()


def test_reconstructor_uses_settings_defaults():
    reconstructor = TableReconstructor()

    assert reconstructor.row_threshold == 0.015
    assert reconstructor.gap_threshold == 0.02
    assert reconstructor.min_cells == 2


def test_chat_defaults(monkeypatch):
    monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)

    settings = ChatSettings()

    assert settings.CHAT_API_URL == "https://openrouter.ai/api/v1/chat/completions"
    assert settings.CHAT_MODEL == "deepseek/deepseek-chat"
    assert settings.DEEPSEEK_API_KEY is None


def test_logging_env(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_JSON", "true")

    settings = LoggingSettings()

    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_JSON is True
