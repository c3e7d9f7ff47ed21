"""
Chat-completion boundary: messages, prompts and the HTTP client.
"""

from .messages import ChatMessage, ChatCompletionRequest, ChatCompletionResponse
from .prompts import (
    PromptTemplate,
    SymptomInput,
    LAB_RESULT_TEMPLATE,
    DEPARTMENT_TEMPLATE,
    DISEASE_TEMPLATE,
    build_lab_prompt,
    build_symptom_prompt,
)
from .client import OpenRouterChatClient

__all__ = [
    'ChatMessage',
    'ChatCompletionRequest',
    'ChatCompletionResponse',
    'PromptTemplate',
    'SymptomInput',
    'LAB_RESULT_TEMPLATE',
    'DEPARTMENT_TEMPLATE',
    'DISEASE_TEMPLATE',
    'build_lab_prompt',
    'build_symptom_prompt',
    'OpenRouterChatClient',
]
