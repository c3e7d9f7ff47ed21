# src/medical_structuring/chat/messages.py
"""
Chat-completion wire models (OpenAI-compatible).
"""

from typing import List, Literal, Optional

from pydantic import BaseModel


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatCompletionRequest(BaseModel):
    model: str
    messages: List[ChatMessage]


class ChatChoice(BaseModel):
    index: int = 0
    message: ChatMessage
    finish_reason: Optional[str] = None


class ChatUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatCompletionResponse(BaseModel):
    id: Optional[str] = None
    model: Optional[str] = None
    choices: List[ChatChoice] = []
    usage: Optional[ChatUsage] = None
