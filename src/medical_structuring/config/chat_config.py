# ============================================================================
# src/medical_structuring/config/chat_config.py
# ============================================================================
"""
Chat-Completion Settings
- Endpoint and model
- API key (env only)
- Request timeout
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class ChatSettings(BaseSettings):
    CHAT_API_URL: str = Field(
        default="https://openrouter.ai/api/v1/chat/completions",
        description="OpenAI-compatible chat completions endpoint"
    )
    CHAT_MODEL: str = Field(
        default="deepseek/deepseek-chat",
        description="Model identifier sent with every request"
    )
    DEEPSEEK_API_KEY: Optional[str] = Field(
        default=None,
        description="Bearer token for the chat endpoint"
    )
    CHAT_TIMEOUT: float = Field(
        default=60.0,
        gt=0.0,
        description="Total request timeout in seconds"
    )
    CHAT_REFERER: str = Field(
        default="https://evdesaglik.app",
        description="HTTP-Referer header recommended by OpenRouter"
    )
    CHAT_APP_TITLE: str = Field(
        default="EvdeSaglik",
        description="X-Title header recommended by OpenRouter"
    )


chat_settings = ChatSettings()
