# ============================================================================
# FILE: tests/unit/test_chat_client.py
# ============================================================================
"""
Unit tests for the chat-completion client and prompt assembly
"""

import asyncio
import json
from unittest.mock import patch

import aiohttp
import pytest

from src.medical_structuring.chat import (
    DEPARTMENT_TEMPLATE,
    ChatMessage,
    OpenRouterChatClient,
    SymptomInput,
    build_lab_prompt,
    build_symptom_prompt,
)
from src.utils.exceptions import (
    ChatClientError,
    ChatDecodingError,
    ChatResponseError,
    ChatTimeoutError,
    MissingAPIKeyError,
    NoChoicesError,
)


def completion_body(content):
    return json.dumps({
        "id": "gen-1",
        "model": "deepseek/deepseek-chat",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
    })


class FakeResponse:
    def __init__(self, status, body):
        self.status = status
        self._body = body

    async def text(self):
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, json=None, headers=None):
        self.calls.append({"url": url, "json": json, "headers": headers})
        if self.error:
            raise self.error
        return self.response

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


MESSAGES = [ChatMessage(role="user", content="Merhaba")]
SESSION_PATH = "src.medical_structuring.chat.client.aiohttp.ClientSession"


# ============================================================================
# CLIENT
# ============================================================================

@pytest.mark.asyncio
async def test_complete_returns_first_choice():
    session = FakeSession(FakeResponse(200, completion_body("Kardiyoloji - 78%")))
    client = OpenRouterChatClient(api_key="test-key", api_url="https://example.test/chat", model="m")

    with patch(SESSION_PATH, return_value=session):
        content = await client.complete(MESSAGES)

    assert content == "Kardiyoloji - 78%"
    call = session.calls[0]
    assert call["url"] == "https://example.test/chat"
    assert call["json"]["model"] == "m"
    assert call["json"]["messages"] == [{"role": "user", "content": "Merhaba"}]
    assert call["headers"]["Authorization"] == "Bearer test-key"
    assert "HTTP-Referer" in call["headers"]
    assert "X-Title" in call["headers"]


@pytest.mark.asyncio
async def test_missing_api_key():
    client = OpenRouterChatClient(api_key="")

    with pytest.raises(MissingAPIKeyError):
        await client.complete(MESSAGES)


@pytest.mark.asyncio
async def test_error_status_raises_with_body():
    session = FakeSession(FakeResponse(401, '{"error": "invalid key"}'))
    client = OpenRouterChatClient(api_key="bad")

    with patch(SESSION_PATH, return_value=session):
        with pytest.raises(ChatResponseError) as exc_info:
            await client.complete(MESSAGES)

    assert exc_info.value.status == 401
    assert "invalid key" in exc_info.value.body


@pytest.mark.asyncio
async def test_transport_error_wrapped():
    session = FakeSession(error=aiohttp.ClientConnectionError("connection refused"))
    client = OpenRouterChatClient(api_key="test-key")

    with patch(SESSION_PATH, return_value=session):
        with pytest.raises(ChatClientError):
            await client.complete(MESSAGES)


@pytest.mark.asyncio
async def test_timeout_wrapped():
    session = FakeSession(error=asyncio.TimeoutError())
    client = OpenRouterChatClient(api_key="test-key", timeout=5)

    with patch(SESSION_PATH, return_value=session):
        with pytest.raises(ChatTimeoutError) as exc_info:
            await client.complete(MESSAGES)

    assert isinstance(exc_info.value, ChatClientError)
    assert "5" in str(exc_info.value)


def test_parse_response_without_choices():
    client = OpenRouterChatClient(api_key="test-key")

    with pytest.raises(NoChoicesError):
        client.parse_response('{"id": "gen-1", "choices": []}')


def test_parse_response_not_json():
    client = OpenRouterChatClient(api_key="test-key")

    with pytest.raises(ChatDecodingError):
        client.parse_response("<html>Bad Gateway</html>")


def test_no_choices_is_a_decoding_error():
    assert issubclass(NoChoicesError, ChatDecodingError)
    assert issubclass(ChatDecodingError, ChatClientError)


# ============================================================================
# PROMPTS
# ============================================================================

def test_lab_prompt_embeds_tab_separated_table():
    messages = build_lab_prompt("Yaş: 45", [["Kolesterol", "210 mg/dL"], ["HDL", "45"]])

    assert [m.role for m in messages] == ["system", "user"]
    assert "Yaş: 45" in messages[0].content
    assert messages[1].content.endswith("Kolesterol\t210 mg/dL\nHDL\t45")


def test_symptom_prompt_lines():
    symptoms = SymptomInput(
        selected_symptoms=["baş ağrısı", "ateş"],
        other_symptoms="bulantı",
        include_other=True,
        feelings="yorgun",
        duration="3 gün",
    )

    messages = build_symptom_prompt("", symptoms, DEPARTMENT_TEMPLATE)

    assert messages[1].content == (
        "Symptoms: baş ağrısı, ateş\n"
        "Other symptoms: bulantı\n"
        "How I feel: yorgun\n"
        "Duration: 3 gün"
    )
    assert symptoms.symptom_list() == ["baş ağrısı", "ateş", "bulantı"]


def test_symptom_prompt_default_when_empty():
    messages = build_symptom_prompt("", SymptomInput(other_symptoms="x"), DEPARTMENT_TEMPLATE)

    assert messages[1].content == DEPARTMENT_TEMPLATE.default_user_prompt
    assert messages[0].content.startswith(DEPARTMENT_TEMPLATE.persona)
