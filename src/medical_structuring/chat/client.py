# src/medical_structuring/chat/client.py
"""
OpenRouter chat-completion client.

One POST per call to an OpenAI-compatible /chat/completions endpoint, returning
the first choice's content. No retries: failures surface as ChatClientError
subclasses and the caller decides what to do.
"""

from typing import List, Optional
import asyncio
import logging

import aiohttp
from pydantic import ValidationError

from ..config import chat_settings
from .messages import ChatCompletionRequest, ChatCompletionResponse, ChatMessage
from src.utils.exceptions import (
    ChatClientError,
    ChatDecodingError,
    ChatResponseError,
    ChatTimeoutError,
    MissingAPIKeyError,
    NoChoicesError,
)


class OpenRouterChatClient:
    """
    Async chat-completion client.

    Config falls back to ChatSettings (CHAT_API_URL, CHAT_MODEL,
    DEEPSEEK_API_KEY, CHAT_TIMEOUT).
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else chat_settings.DEEPSEEK_API_KEY
        self.api_url = api_url or chat_settings.CHAT_API_URL
        self.model = model or chat_settings.CHAT_MODEL
        self.timeout = timeout or chat_settings.CHAT_TIMEOUT
        self.logger = logging.getLogger(__name__)

    def _headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
            "HTTP-Referer": chat_settings.CHAT_REFERER,
            "X-Title": chat_settings.CHAT_APP_TITLE,
        }

    async def complete(self, messages: List[ChatMessage]) -> str:
        """
        Send the messages and return the assistant's reply text.

        Raises:
            MissingAPIKeyError: No API key configured
            ChatResponseError: Non-2xx HTTP status
            ChatTimeoutError: No response within the timeout
            ChatDecodingError: Body is not a chat-completion response
            NoChoicesError: Response has no choices
            ChatClientError: Transport failure
        """
        if not self.api_key:
            raise MissingAPIKeyError("DEEPSEEK_API_KEY is not set")

        payload = ChatCompletionRequest(model=self.model, messages=messages).model_dump()
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(self.api_url, json=payload, headers=self._headers()) as response:
                    body = await response.text()
                    if not 200 <= response.status < 300:
                        raise ChatResponseError(
                            f"Chat endpoint returned status {response.status}",
                            status=response.status,
                            body=body,
                        )
        except asyncio.TimeoutError as e:
            raise ChatTimeoutError(f"Chat request timed out after {self.timeout}s") from e
        except aiohttp.ClientError as e:
            raise ChatClientError(f"Chat request failed: {e}") from e

        return self.parse_response(body)

    def parse_response(self, body: str) -> str:
        """Extract the first choice's content from a response body."""
        try:
            parsed = ChatCompletionResponse.model_validate_json(body)
        except ValidationError as e:
            raise ChatDecodingError(f"Unexpected chat response: {e}") from e

        if not parsed.choices:
            raise NoChoicesError("Chat response contained no choices")

        content = parsed.choices[0].message.content
        self.logger.debug(f"Chat response: {len(content)} chars")
        return content
